"""
Cell extractors.

Each function reads a single table cell and returns a typed field. They never
raise: missing markup degrades to empty strings or the sentinel values.
"""
from typing import Optional
from urllib.parse import urljoin

from bs4 import Tag

from rumorfeed.models import UNKNOWN_POSITION, UNKNOWN_TEAM, Entity, Team

LOGO_MARKER = 'logo std'
ROLE_SELECTOR = '.role-sprite'


def cell_text(cell: Optional[Tag]) -> str:
    """Trimmed text content of a cell."""
    if cell is None:
        return ''
    return cell.get_text().strip()


def _attr(tag: Optional[Tag], name: str) -> str:
    if tag is None:
        return ''
    value = tag.get(name)
    if isinstance(value, list):
        value = ' '.join(value)
    return (value or '').strip()


def resolve_url(href: str, base_url: Optional[str]) -> str:
    """Make a site-relative href absolute; absolute hrefs pass through."""
    if not href or not base_url:
        return href
    return urljoin(base_url, href)


def extract_entity(cell: Optional[Tag], base_url: Optional[str] = None) -> Entity:
    """
    Name and link of a source or player cell.

    Args:
        cell: Table cell
        base_url: Site origin used to absolutize relative hrefs

    Returns:
        Entity; url is empty when the cell has no anchor
    """
    if cell is None:
        return Entity(name='')
    link = cell.find('a')
    if link is None:
        return Entity(name=cell_text(cell))
    return Entity(
        name=link.get_text().strip() or cell_text(cell),
        url=resolve_url(_attr(link, 'href'), base_url),
    )


def extract_team(cell: Optional[Tag]) -> Team:
    """Team name from the logo's alt text, image from data-src or src."""
    img = cell.find('img') if cell is not None else None
    if img is None:
        return Team(name=UNKNOWN_TEAM)

    name = _attr(img, 'alt').replace(LOGO_MARKER, '', 1).strip()
    image = _attr(img, 'data-src') or _attr(img, 'src')
    return Team(name=name or UNKNOWN_TEAM, image=image)


def extract_position(cell: Optional[Tag]) -> str:
    """Role label from the role sprite's title."""
    sprite = cell.select_one(ROLE_SELECTOR) if cell is not None else None
    return _attr(sprite, 'title') or UNKNOWN_POSITION
