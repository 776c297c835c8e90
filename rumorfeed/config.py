"""
Configuration for Roster Rumor Feed.

Feed profiles are fixed constants; runtime knobs come from the environment.
"""
from dataclasses import dataclass, field, replace
import os

from dotenv import load_dotenv

load_dotenv()

SITE_URL = 'https://lol.fandom.com'

QUERY_URL = f'{SITE_URL}/Special:RunQuery/RosterRumorQuery'

FEED_CATEGORIES = ('League of Legends', 'Esports', 'Roster Changes')


@dataclass(frozen=True)
class Profile:
    """One published feed: where rumors come from and how they are written."""

    name: str
    source_url: str
    shape: str  # 'nested' or 'flat'
    title: str
    description: str
    json_filename: str
    rss_filename: str
    site_url: str = SITE_URL
    language: str = 'en'
    categories: tuple[str, ...] = field(default=FEED_CATEGORIES)


PROFILES: dict[str, Profile] = {
    'global': Profile(
        name='global',
        source_url=f'{QUERY_URL}?RRQ%5Blimit%5D=100&RRQ%5Bwhere%5D=1=1&_run=',
        shape='nested',
        title='LoL Global Roster Rumors',
        description='Latest League of Legends roster rumors from all regions',
        json_filename='rumors.json',
        rss_filename='rumors.xml',
    ),
    'emea': Profile(
        name='emea',
        source_url=f'{QUERY_URL}?RRQ%5Blimit%5D=50&RRQ%5Bregion%5D=EMEA&_run=',
        shape='flat',
        title='LoL EMEA Roster Rumors',
        description='Latest League of Legends roster rumors involving EMEA teams',
        json_filename='emea_rumors.json',
        rss_filename='emea_rumors.xml',
    ),
}


def get_profile(name: str, source_url: str = '') -> Profile:
    """Look up a profile by name, optionally overriding its source URL."""
    try:
        profile = PROFILES[name.strip().lower()]
    except KeyError:
        raise ValueError(
            f'Unknown profile {name!r} (choose from {", ".join(sorted(PROFILES))})'
        ) from None
    if source_url:
        return replace(profile, source_url=source_url)
    return profile


def _env_flag(key: str) -> bool:
    return os.getenv(key, '').strip().lower() in ('1', 'true', 'yes')


@dataclass(frozen=True)
class Settings:
    """Immutable settings from environment."""

    profile: str = os.getenv('RUMORS_PROFILE', 'global')
    source_url: str = os.getenv('RUMORS_URL', '')
    output_dir: str = os.getenv('OUTPUT_DIR', '.')
    user_agent: str = os.getenv('USER_AGENT', 'rumorfeed/1.0 (+github)')
    req_timeout_s: float = float(os.getenv('REQ_TIMEOUT_S', '30'))
    min_cells: int = int(os.getenv('MIN_CELLS', '9'))
    header_rows: int = int(os.getenv('HEADER_ROWS', '2'))
    export_csv: bool = _env_flag('EXPORT_CSV')


settings = Settings()
