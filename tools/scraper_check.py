#!/usr/bin/env python3
"""
Quick health check for the rumor scraper.

Validates that the live query page still has the rumor table and that
sampled rows carry the fields the feed needs.

Usage:
    python -m tools.scraper_check --profile global --limit 3
"""
import argparse
import random
import sys

from rumorfeed import RumorScraper, get_profile
from rumorfeed.formatter import make_guid, region_change


def main():
    parser = argparse.ArgumentParser(description='Quick scraper health check')
    parser.add_argument('--profile', default='global')
    parser.add_argument('--limit', type=int, default=1)
    args = parser.parse_args()

    profile = get_profile(args.profile)
    print(f'🏥 Health check: profile {profile.name}, limit {args.limit}')

    with RumorScraper() as scraper:
        rumors, report = scraper.scrape(profile.source_url, profile.site_url)

    if not rumors:
        print('ERROR: No rumors returned from scraper')
        sys.exit(1)

    random.seed(42)
    sample = random.sample(rumors, min(args.limit, len(rumors)))

    for rumor in sample:
        for key, value in (('date', rumor.date), ('player', rumor.player.name)):
            if not value:
                print(f'ERROR: {key} is missing/empty in rumor {make_guid(rumor)}')
                sys.exit(1)

        print(f'✓ Rumor: {make_guid(rumor)}')
        print(f'  Status: {rumor.status}')
        print(f'  [{region_change(rumor)}] {rumor.from_.team.name} → {rumor.to.team.name}')
        print(f'  Source: {rumor.source.name} {rumor.source.url or "(no link)"}')

    print(f'\nSkipped rows: {report.rows_skipped}, sentinel fields: {dict(report.sentinels)}')
    print(f'✅ Health check passed ({len(rumors)} rumors available)')
    sys.exit(0)


if __name__ == '__main__':
    main()
