"""
Roster rumor scraper.

Source: Leaguepedia roster rumor query (Special:RunQuery/RosterRumorQuery).
One page, one table, one record per data row.
"""
import json
import logging
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence

import httpx
from bs4 import BeautifulSoup, Tag

from rumorfeed.config import SITE_URL, settings
from rumorfeed.extract import cell_text, extract_entity, extract_position, extract_team
from rumorfeed.models import UNKNOWN_POSITION, UNKNOWN_TEAM, Rumor, Side

logger = logging.getLogger('rumorfeed')

TABLE_SELECTOR = '.wikitable.hoverable-rows'
MIN_CELLS = 9
HEADER_ROWS = 2


class RumorFeedError(Exception):
    """Base error for the rumor feed."""
    pass


class FetchError(RumorFeedError):
    """HTTP fetch error."""
    pass


class ParseError(RumorFeedError):
    """HTML parsing error."""
    pass


class TableNotFoundError(ParseError):
    """The page has no rumor table."""
    pass


def log_event(**kv):
    """Emit structured JSON log line."""
    print(json.dumps(kv, separators=(',', ':'), ensure_ascii=False))


@dataclass
class ScrapeReport:
    """What the tolerant parse quietly dropped or filled in."""

    rows_seen: int = 0
    rows_mapped: int = 0
    rows_skipped: int = 0
    sentinels: Counter = field(default_factory=Counter)
    missing_links: Counter = field(default_factory=Counter)

    def record(self, rumor: Rumor) -> None:
        """Count sentinel and empty-link fields of a mapped rumor."""
        self.rows_mapped += 1
        for label, side in (('from', rumor.from_), ('to', rumor.to)):
            if side.team.name == UNKNOWN_TEAM:
                self.sentinels[f'{label}.team'] += 1
            if side.position == UNKNOWN_POSITION:
                self.sentinels[f'{label}.position'] += 1
        for label, entity in (('source', rumor.source), ('player', rumor.player)):
            if not entity.url:
                self.missing_links[label] += 1

    def as_dict(self) -> dict:
        """Plain dict for log events."""
        return {
            'rows_seen': self.rows_seen,
            'rows_mapped': self.rows_mapped,
            'rows_skipped': self.rows_skipped,
            'sentinels': dict(self.sentinels),
            'missing_links': dict(self.missing_links),
        }


def find_rumor_table(soup: BeautifulSoup) -> Tag:
    """First hoverable-rows wikitable in the document."""
    table = soup.select_one(TABLE_SELECTOR)
    if table is None:
        raise TableNotFoundError('Could not find rumors table in response')
    return table


def iter_data_rows(table: Tag, header_rows: int = HEADER_ROWS) -> Iterator[Tag]:
    """Yield table rows in document order, skipping the header rows."""
    rows = table.find_all('tr')
    yield from rows[header_rows:]


def map_row(
    cells: Sequence[Tag],
    site_url: str = SITE_URL,
    min_cells: int = MIN_CELLS,
) -> Optional[Rumor]:
    """
    Build a Rumor from one row's data cells.

    Args:
        cells: The row's td elements, in order
        site_url: Origin used to absolutize relative links
        min_cells: Rows with fewer cells are rejected

    Returns:
        Rumor, or None when the row is too short
    """
    if len(cells) < min_cells:
        return None

    def cell(i: int) -> Optional[Tag]:
        return cells[i] if i < len(cells) else None

    return Rumor(
        date=cell_text(cell(0)),
        status=cell_text(cell(1)),
        source=extract_entity(cell(2), site_url),
        player=extract_entity(cell(3), site_url),
        from_=Side(
            region=cell_text(cell(4)),
            team=extract_team(cell(5)),
            position=extract_position(cell(6)),
        ),
        to=Side(
            region=cell_text(cell(7)),
            team=extract_team(cell(8)),
            position=extract_position(cell(9)),
        ),
    )


def parse_rumors(
    html: str,
    site_url: str = SITE_URL,
    min_cells: int = MIN_CELLS,
    header_rows: int = HEADER_ROWS,
) -> tuple[list[Rumor], ScrapeReport]:
    """
    Parse a query result page into rumors.

    Short rows are skipped without error; the returned report counts them.
    """
    soup = BeautifulSoup(html, 'lxml')
    table = find_rumor_table(soup)

    rumors: list[Rumor] = []
    report = ScrapeReport()

    for row in iter_data_rows(table, header_rows):
        report.rows_seen += 1
        rumor = map_row(row.find_all('td'), site_url, min_cells)
        if rumor is None:
            report.rows_skipped += 1
            continue
        report.record(rumor)
        rumors.append(rumor)

    if report.rows_skipped:
        logger.debug(f'Skipped {report.rows_skipped} rows with fewer than {min_cells} cells')
    log_event(event='table', **report.as_dict())
    return rumors, report


class RumorScraper:
    """
    Fetches the rumor query page and turns it into records.

    Single request per scrape, no retries.
    """

    def __init__(self, client: Optional[httpx.Client] = None):
        self.client = client or httpx.Client(
            follow_redirects=True,
            headers={'User-Agent': settings.user_agent},
            timeout=settings.req_timeout_s,
        )

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    def close(self) -> None:
        self.client.close()

    def fetch(self, url: str) -> str:
        """GET the page and return its body as text."""
        start = time.time()
        try:
            response = self.client.get(url)
        except httpx.HTTPError as e:
            raise FetchError(f'Request to {url} failed: {e}') from e
        elapsed_ms = int((time.time() - start) * 1000)

        log_event(event='fetch', url=url, status=response.status_code, ms=elapsed_ms)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise FetchError(f'HTTP {response.status_code} from {url}') from e
        return response.text

    def scrape(
        self,
        url: str,
        site_url: str = SITE_URL,
        min_cells: int = MIN_CELLS,
        header_rows: int = HEADER_ROWS,
    ) -> tuple[list[Rumor], ScrapeReport]:
        """Fetch and parse one query page."""
        logger.info(f'Fetching rumors from {url}')
        html = self.fetch(url)
        rumors, report = parse_rumors(html, site_url, min_cells, header_rows)
        logger.info(
            f'Parsed {len(rumors)} rumors '
            f'({report.rows_skipped} of {report.rows_seen} rows skipped)'
        )
        return rumors, report
