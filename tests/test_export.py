"""
Tests for JSON, RSS and CSV writers.
"""
import json

import pandas as pd
from lxml import etree

from conftest import make_page, rumor_cells
from rumorfeed.config import get_profile
from rumorfeed.export import build_feed, write_csv, write_json, write_rss
from rumorfeed.formatter import to_feed_item
from rumorfeed.scraper import parse_rumors


def sample_rumors():
    rumors, _ = parse_rumors(make_page([
        rumor_cells('2024-11-20', 'Caps', 'G2', 'G2', status='Confirmed', role='Mid'),
        rumor_cells('2024-11-19', 'Hans Sama', 'G2', 'Team Liquid', to_region='AMERICAS', role='Bot'),
    ]))
    return rumors


class TestJson:

    def test_nested(self, tmp_path):
        """Test nested records are written as an indented JSON array."""
        path = write_json(sample_rumors(), tmp_path / 'rumors.json')
        text = (tmp_path / 'rumors.json').read_text(encoding='utf-8')
        data = json.loads(text)

        assert path.endswith('rumors.json')
        assert text.startswith('[\n  {\n    "date"')
        assert [r['player']['name'] for r in data] == ['Caps', 'Hans Sama']
        assert data[1]['to']['region'] == 'AMERICAS'
        assert data[1]['from']['team']['image'] == 'https://static.wikia/G2.png'

    def test_flat(self, tmp_path):
        """Test flat shape writes one scalar per column."""
        write_json(sample_rumors(), tmp_path / 'emea.json', shape='flat')
        data = json.loads((tmp_path / 'emea.json').read_text(encoding='utf-8'))
        assert data[0]['player'] == 'Caps'
        assert data[0]['from_position'] == 'Mid'

    def test_overwrites(self, tmp_path):
        """Test an existing file is replaced."""
        target = tmp_path / 'rumors.json'
        target.write_text('stale')
        write_json([], target)
        assert json.loads(target.read_text()) == []

    def test_creates_directory(self, tmp_path):
        """Test missing parent directories are created."""
        write_json([], tmp_path / 'public' / 'feeds' / 'rumors.json')
        assert (tmp_path / 'public' / 'feeds' / 'rumors.json').exists()


class TestRss:

    def parse(self, path):
        return etree.parse(str(path)).getroot()

    def test_channel_metadata(self, tmp_path):
        """Test channel title, description, site link, language and categories."""
        profile = get_profile('global')
        write_rss(profile, [], tmp_path / 'rumors.xml')
        channel = self.parse(tmp_path / 'rumors.xml').find('channel')

        assert channel.findtext('title') == 'LoL Global Roster Rumors'
        assert channel.findtext('description') == 'Latest League of Legends roster rumors from all regions'
        assert channel.findtext('link') == 'https://lol.fandom.com'
        assert channel.findtext('language') == 'en'
        assert [c.text for c in channel.findall('category')] == [
            'League of Legends', 'Esports', 'Roster Changes',
        ]
        assert channel.findtext('pubDate')

    def test_site_link_survives_self_link(self):
        """Test the channel link is the site while the query stays the self link."""
        profile = get_profile('global')
        channel = etree.fromstring(build_feed(profile, []).rss_str()).find('channel')
        self_links = channel.findall('{http://www.w3.org/2005/Atom}link')

        assert channel.findtext('link') == profile.site_url
        assert [(ln.get('rel'), ln.get('href')) for ln in self_links] == [('self', profile.source_url)]

    def test_items_in_record_order(self, tmp_path):
        """Test items follow record order with guid, link, date and categories."""
        items = [to_feed_item(r) for r in sample_rumors()]
        write_rss(get_profile('global'), items, tmp_path / 'rumors.xml')
        channel = self.parse(tmp_path / 'rumors.xml').find('channel')
        entries = channel.findall('item')

        assert [e.findtext('title') for e in entries] == [
            '[EMEA] Caps: G2 → G2',
            '[EMEA → AMERICAS] Hans Sama: G2 → Team Liquid',
        ]
        guid = entries[1].find('guid')
        assert guid.text == '2024-11-19-Hans Sama-G2-Team Liquid'
        assert guid.get('isPermaLink') == 'false'
        assert entries[1].findtext('link') == 'https://twitter.com/Sheep_Esports'
        assert '19 Nov 2024' in entries[1].findtext('pubDate')
        assert [c.text for c in entries[1].findall('category')] == ['EMEA', 'AMERICAS', 'Roster Changes']
        assert '<h4>From:</h4>' in entries[1].findtext('description')

    def test_item_without_link_or_date(self, tmp_path):
        """Test entries without source link or date omit those elements."""
        rumor = sample_rumors()[0]
        item = to_feed_item(rumor).model_copy(update={'link': '', 'pub_date': None})
        fg = build_feed(get_profile('emea'), [item])
        entry = etree.fromstring(fg.rss_str()).find('channel/item')
        assert entry.find('link') is None
        assert entry.find('pubDate') is None
        assert entry.findtext('guid') == item.guid

    def test_pretty_printed(self, tmp_path):
        """Test the XML is indented."""
        write_rss(get_profile('global'), [], tmp_path / 'rumors.xml')
        assert '\n  <channel>' in (tmp_path / 'rumors.xml').read_text(encoding='utf-8')


class TestCsv:

    def test_flat_table_with_manifest(self, tmp_path):
        """Test CSV rows and the manifest sidecar."""
        path = write_csv(sample_rumors(), tmp_path / 'global_rumors.csv', profile='global')
        df = pd.read_csv(path)
        manifest = json.loads((tmp_path / '_manifest.json').read_text())

        assert list(df['player']) == ['Caps', 'Hans Sama']
        assert list(df['to_team']) == ['G2', 'Team Liquid']
        assert manifest['rows'] == 2
        assert manifest['profile'] == 'global'

    def test_empty_keeps_header(self, tmp_path):
        """Test an empty export still writes the column header."""
        path = write_csv([], tmp_path / 'empty.csv')
        header = (tmp_path / 'empty.csv').read_text().splitlines()[0]
        assert path.endswith('empty.csv')
        assert header.startswith('date,status,source,source_url,player')
