"""
CLI entrypoints for Roster Rumor Feed.

Usage:
    python -m rumorfeed.cli run
    python -m rumorfeed.cli run --profile emea --out-dir public
    python -m rumorfeed.cli profiles
"""
import argparse
import logging
import sys

from rumorfeed.config import PROFILES, get_profile, settings
from rumorfeed.pipeline import main as run_pipeline

logger = logging.getLogger('rumorfeed')


def setup_logging(verbose: bool = False):
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    )


def list_profiles() -> int:
    for name, profile in sorted(PROFILES.items()):
        print(f'{name:8} {profile.shape:7} {profile.json_filename:18} {profile.rss_filename:18} {profile.title}')
    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    parser = argparse.ArgumentParser(
        prog='rumorfeed',
        description='Roster rumor JSON/RSS generator',
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Verbose output')

    subparsers = parser.add_subparsers(dest='command', required=True)

    run_parser = subparsers.add_parser('run', help='Fetch rumors and write JSON + RSS')
    run_parser.add_argument('--profile', default=settings.profile, help='Feed profile (default: %(default)s)')
    run_parser.add_argument('--url', default=settings.source_url, help='Override the profile source URL')
    run_parser.add_argument('--out-dir', default=settings.output_dir, help='Output directory')
    run_parser.add_argument('--min-cells', type=int, default=settings.min_cells, help='Minimum cells per row')
    run_parser.add_argument('--csv', action='store_true', default=settings.export_csv, help='Also write a CSV table')

    subparsers.add_parser('profiles', help='List feed profiles')

    args = parser.parse_args(argv)
    setup_logging(args.verbose)

    if args.command == 'profiles':
        sys.exit(list_profiles())

    elif args.command == 'run':
        try:
            profile = get_profile(args.profile, args.url)
        except ValueError as e:
            parser.error(str(e))
        code = run_pipeline(
            profile,
            args.out_dir,
            min_cells=args.min_cells,
            header_rows=settings.header_rows,
            export_csv=args.csv,
        )
        sys.exit(code)


if __name__ == '__main__':
    main()
