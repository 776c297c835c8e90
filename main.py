#!/usr/bin/env python
"""
Roster Rumor Feed - One-Shot Worker Entry Point

Reads env vars, runs once, then exits with the pipeline's exit code.

Environment Variables:
    RUMORS_PROFILE  - 'global' (default) or 'emea'
    RUMORS_URL      - Override the profile's query URL
    OUTPUT_DIR      - Where rumors.json / rumors.xml land (default: '.')
    EXPORT_CSV      - '1' to also write a CSV table
    REQ_TIMEOUT_S   - HTTP timeout in seconds (default: 30)

Exit codes:
    0 success, 1 unexpected failure, 2 fetch failure, 3 rumor table missing
"""

import logging
import sys
from datetime import datetime

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger('rumorfeed')


def main():
    """Main entry point."""
    from rumorfeed.config import get_profile, settings
    from rumorfeed.pipeline import main as run_pipeline

    start_time = datetime.now()

    print("=" * 60)
    print("ROSTER RUMOR FEED - Worker")
    print("=" * 60)

    try:
        profile = get_profile(settings.profile, settings.source_url)
    except ValueError as e:
        logger.error(str(e))
        return 1

    logger.info(f"Profile: {profile.name} ({profile.shape})")
    logger.info(f"Source: {profile.source_url}")
    logger.info(f"Output dir: {settings.output_dir}")
    logger.info(f"Export CSV: {settings.export_csv}")

    print("=" * 60)

    exit_code = run_pipeline(
        profile,
        settings.output_dir,
        min_cells=settings.min_cells,
        header_rows=settings.header_rows,
        export_csv=settings.export_csv,
    )

    duration = (datetime.now() - start_time).total_seconds()
    logger.info(f"Finished in {duration:.1f}s (exit {exit_code})")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
