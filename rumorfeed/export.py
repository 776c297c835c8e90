"""
Output writers: JSON snapshot, RSS feed, CSV table.

Each writer overwrites its target in one call and returns the path written.
"""
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import pandas as pd
from feedgen.feed import FeedGenerator

from rumorfeed.config import Profile
from rumorfeed.models import FeedItem, FlatRumor, Rumor


def _prepare(path: str | Path) -> Path:
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    return out_path


def write_json(rumors: Iterable[Rumor], path: str | Path, shape: str = 'nested') -> str:
    """
    Write rumors as a pretty-printed JSON array.

    Args:
        rumors: Records, in output order
        path: Target file
        shape: 'nested' or 'flat'

    Returns:
        Path to output file
    """
    records = [rumor.to_record(shape) for rumor in rumors]
    out_path = _prepare(path)
    out_path.write_text(json.dumps(records, indent=2, ensure_ascii=False), encoding='utf-8')
    return str(out_path)


def build_feed(profile: Profile, items: Iterable[FeedItem]) -> FeedGenerator:
    """Channel metadata from the profile, one entry per item, in order."""
    fg = FeedGenerator()
    fg.title(profile.title)
    fg.description(profile.description)
    fg.link(href=profile.source_url, rel='self')
    fg.link(href=profile.site_url, rel='alternate')
    fg.language(profile.language)
    fg.pubDate(datetime.now(timezone.utc))
    for term in profile.categories:
        fg.category(term=term)

    for item in items:
        fe = fg.add_entry(order='append')
        fe.title(item.title)
        fe.description(item.description)
        if item.link:
            fe.link(href=item.link)
        fe.guid(item.guid, permalink=False)
        if item.pub_date is not None:
            fe.pubDate(item.pub_date)
        for term in item.categories:
            fe.category(term=term)

    return fg


def write_rss(profile: Profile, items: Iterable[FeedItem], path: str | Path) -> str:
    """Write the feed as indented RSS 2.0 XML."""
    fg = build_feed(profile, items)
    out_path = _prepare(path)
    fg.rss_file(str(out_path), pretty=True)
    return str(out_path)


def write_csv(rumors: list[Rumor], path: str | Path, profile: str = '') -> str:
    """
    Write flat rumor records as CSV with a manifest alongside.

    Returns:
        Path to output file
    """
    df = pd.DataFrame(
        [rumor.flatten().model_dump() for rumor in rumors],
        columns=list(FlatRumor.model_fields),
    )
    out_path = _prepare(path)
    df.to_csv(out_path, index=False)

    manifest = {
        'version': '1',
        'profile': profile,
        'rows': len(df),
        'generated_at': datetime.now(timezone.utc).isoformat(),
    }
    (out_path.parent / '_manifest.json').write_text(json.dumps(manifest, indent=2))

    return str(out_path)
