"""
Pipeline driver: fetch → parse → format → write.
"""
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from rumorfeed.config import Profile, settings
from rumorfeed.export import write_csv, write_json, write_rss
from rumorfeed.formatter import to_feed_item
from rumorfeed.models import Rumor
from rumorfeed.scraper import (
    FetchError,
    RumorScraper,
    ScrapeReport,
    TableNotFoundError,
    log_event,
)

logger = logging.getLogger('rumorfeed')

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_FETCH = 2
EXIT_NO_TABLE = 3


@dataclass
class PipelineResult:
    """Everything one run produced."""

    rumors: list[Rumor]
    report: ScrapeReport
    json_path: str
    rss_path: str
    csv_path: Optional[str] = None


def run(
    profile: Profile,
    output_dir: str = '.',
    scraper: Optional[RumorScraper] = None,
    min_cells: int = settings.min_cells,
    header_rows: int = settings.header_rows,
    export_csv: bool = False,
) -> PipelineResult:
    """
    Run one pass for a profile.

    Files are written one after another; anything written before a failure
    stays on disk.

    Args:
        profile: Feed profile (source URL, record shape, feed metadata)
        output_dir: Directory for the output files
        scraper: Scraper to use (a fresh one is created and closed otherwise)
        min_cells: Minimum td cells for a row to count as a rumor
        header_rows: Leading table rows to skip
        export_csv: Also write a flat CSV table

    Returns:
        PipelineResult
    """
    out_dir = Path(output_dir)

    if scraper is None:
        with RumorScraper() as own:
            rumors, report = own.scrape(profile.source_url, profile.site_url, min_cells, header_rows)
    else:
        rumors, report = scraper.scrape(profile.source_url, profile.site_url, min_cells, header_rows)

    json_path = write_json(rumors, out_dir / profile.json_filename, shape=profile.shape)
    logger.info(f'JSON written to {json_path}')
    log_event(event='write', kind='json', path=json_path, rows=len(rumors))

    items = [to_feed_item(rumor) for rumor in rumors]
    rss_path = write_rss(profile, items, out_dir / profile.rss_filename)
    logger.info(f'RSS written to {rss_path}')
    log_event(event='write', kind='rss', path=rss_path, items=len(items))

    csv_path = None
    if export_csv:
        csv_path = write_csv(rumors, out_dir / f'{profile.name}_rumors.csv', profile=profile.name)
        logger.info(f'CSV written to {csv_path}')

    return PipelineResult(rumors, report, json_path, rss_path, csv_path)


def main(profile: Profile, output_dir: str = '.', **kwargs) -> int:
    """
    Run the pipeline once and map the outcome to an exit code.

    Returns:
        EXIT_OK, EXIT_FETCH, EXIT_NO_TABLE or EXIT_FAILURE
    """
    try:
        result = run(profile, output_dir, **kwargs)
    except FetchError as e:
        logger.error(f'Error fetching rumors: {e} (cause: {e.__cause__!r})')
        return EXIT_FETCH
    except TableNotFoundError as e:
        logger.error(f'Error parsing rumors: {e}')
        return EXIT_NO_TABLE
    except Exception as e:
        logger.error(f'Error fetching or parsing rumors: {e}', exc_info=True)
        return EXIT_FAILURE

    log_event(event='run_done', profile=profile.name, **result.report.as_dict())
    return EXIT_OK
