"""
Roster Rumor Feed - League of Legends roster rumors as JSON and RSS.

- Source: Leaguepedia roster rumor query (one page, one table)
- Outputs: JSON snapshot + RSS 2.0 feed (optional CSV)
"""

__version__ = '1.0.0'

from rumorfeed.config import PROFILES, Profile, get_profile
from rumorfeed.models import FeedItem, FlatRumor, Rumor
from rumorfeed.pipeline import run
from rumorfeed.scraper import RumorScraper, parse_rumors

__all__ = [
    'PROFILES',
    'Profile',
    'get_profile',
    'Rumor',
    'FlatRumor',
    'FeedItem',
    'RumorScraper',
    'parse_rumors',
    'run',
]
