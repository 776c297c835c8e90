"""
Shared fixtures: hand-built rumor query pages and an offline scraper.
"""
import os

import httpx
import pytest

from rumorfeed.scraper import RumorScraper

HEADER = (
    '<tr><th colspan="10">Roster Rumors</th></tr>'
    '<tr><th>Date</th><th>Status</th><th>Source</th><th>Player</th>'
    '<th>Region</th><th>From</th><th>Role</th><th>Region</th><th>To</th><th>Role</th></tr>'
)

FAKER_ROW = [
    '2024-01-15',
    'Confirmed',
    '<a href=/source>ESPN</a>',
    '<a href=/p/Faker>Faker</a>',
    'KR',
    "<img alt='T1 logo std'>",
    '<span class=role-sprite title=Mid></span>',
    'EMEA',
    "<img alt='G2 logo std'>",
]

SHORT_ROW = ['2024-01-16', 'Rumor', 'Reddit', 'Caps', 'EMEA']


def make_row(cells):
    return '<tr>' + ''.join(f'<td>{c}</td>' for c in cells) + '</tr>'


def make_page(rows, table_class='wikitable hoverable-rows'):
    body = HEADER + ''.join(make_row(r) for r in rows)
    return (
        '<html><body><div id="content">'
        f'<table class="{table_class}">{body}</table>'
        '</div></body></html>'
    )


def rumor_cells(date, player, from_team, to_team, status='Rumor',
                from_region='EMEA', to_region='EMEA', role='Top'):
    return [
        date,
        status,
        '<a href="https://twitter.com/Sheep_Esports">Sheep Esports</a>',
        f'<a href="/{player}">{player}</a>',
        from_region,
        f'<img alt="{from_team} logo std" data-src="https://static.wikia/{from_team}.png" src="data:image/gif">',
        f'<span class="sprite role-sprite" title="{role}"></span>',
        to_region,
        f'<img alt="{to_team} logo std" src="https://static.wikia/{to_team}.png">',
        f'<span class="sprite role-sprite" title="{role}"></span>',
    ]


@pytest.fixture
def faker_page():
    """Two data rows after the headers: one valid, one too short."""
    return make_page([FAKER_ROW, SHORT_ROW])


@pytest.fixture
def ordered_page():
    return make_page([
        rumor_cells('2024-11-20', 'Caps', 'G2', 'G2', status='Confirmed', role='Mid'),
        rumor_cells('2024-11-19', 'Hans Sama', 'G2', 'Team Liquid', to_region='AMERICAS', role='Bot'),
        rumor_cells('2024-11-18', 'Elyoya', 'MAD Lions KOI', 'Movistar KOI', role='Jungle'),
    ])


@pytest.fixture
def make_scraper():
    """Build a RumorScraper whose client answers from a handler, no network."""
    created = []

    def _make(handler):
        client = httpx.Client(transport=httpx.MockTransport(handler))
        scraper = RumorScraper(client=client)
        created.append(scraper)
        return scraper

    yield _make

    for scraper in created:
        scraper.close()


@pytest.fixture
def serve_html(make_scraper):
    """Scraper that returns the given HTML for every request."""
    def _serve(html, status_code=200):
        return make_scraper(lambda request: httpx.Response(status_code, text=html))
    return _serve


def pytest_configure(config):
    config.addinivalue_line('markers', 'integration: hits the live Leaguepedia query page')


def pytest_collection_modifyitems(config, items):
    if os.getenv('RUN_INTEGRATION') == '1':
        return
    skip_live = pytest.mark.skip(reason='set RUN_INTEGRATION=1 to hit the live site')
    for item in items:
        if 'integration' in item.keywords:
            item.add_marker(skip_live)
