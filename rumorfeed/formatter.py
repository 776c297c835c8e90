"""
Display formatting for rumors: titles, HTML bodies, feed identifiers.
"""
from datetime import datetime
from html import escape
from typing import Optional

from rumorfeed.models import FeedItem, Rumor, Side

ARROW = '→'
ROSTER_CATEGORY = 'Roster Changes'


def region_change(rumor: Rumor) -> str:
    """Single region when unchanged, otherwise 'FROM → TO'."""
    if rumor.from_.region == rumor.to.region:
        return rumor.from_.region
    return f'{rumor.from_.region} {ARROW} {rumor.to.region}'


def format_title(rumor: Rumor) -> str:
    """One-line entry title: region change, player, team move."""
    return (
        f'[{region_change(rumor)}] {rumor.player.name}: '
        f'{rumor.from_.team.name} {ARROW} {rumor.to.team.name}'
    )


def _side_list(label: str, side: Side) -> str:
    """Labeled region/team/position list for one side of the move."""
    return (
        f'<h4>{label}:</h4>\n'
        f'<ul>\n'
        f'  <li>Region: {escape(side.region)}</li>\n'
        f'  <li>Team: {escape(side.team.name)}</li>\n'
        f'  <li>Position: {escape(side.position)}</li>\n'
        f'</ul>'
    )


def format_description(rumor: Rumor) -> str:
    """HTML body of a feed entry."""
    player, source = rumor.player, rumor.source
    return '\n'.join([
        f'<h3>{escape(format_title(rumor))}</h3>',
        f'<p><strong>Status:</strong> {escape(rumor.status)}</p>',
        f'<p><strong>Player:</strong> '
        f'<a href="{escape(player.url)}">{escape(player.name)}</a></p>',
        f'<p><strong>Source:</strong> '
        f'<a href="{escape(source.url)}">{escape(source.name)}</a></p>',
        _side_list('From', rumor.from_),
        _side_list('To', rumor.to),
    ])


def make_guid(rumor: Rumor) -> str:
    """
    Stable feed identifier: date, player, from-team and to-team.

    Status is left out so a rumor that gets confirmed later keeps its entry.
    """
    return '-'.join([
        rumor.date,
        rumor.player.name,
        rumor.from_.team.name,
        rumor.to.team.name,
    ])


def make_categories(rumor: Rumor) -> tuple[str, ...]:
    """Regions plus the roster category, empties and repeats dropped."""
    seen: list[str] = []
    for term in (rumor.from_.region, rumor.to.region, ROSTER_CATEGORY):
        if term and term not in seen:
            seen.append(term)
    return tuple(seen)


def parse_pub_date(date_str: str) -> Optional[datetime]:
    """Local midnight of a YYYY-MM-DD date, or None if it does not parse."""
    try:
        return datetime.strptime(date_str.strip(), '%Y-%m-%d').astimezone()
    except (AttributeError, ValueError, OverflowError, OSError):
        return None


def to_feed_item(rumor: Rumor) -> FeedItem:
    """RSS-ready projection of a rumor."""
    return FeedItem(
        title=format_title(rumor),
        description=format_description(rumor),
        link=rumor.source.url,
        guid=make_guid(rumor),
        pub_date=parse_pub_date(rumor.date),
        categories=make_categories(rumor),
    )
