#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Markup helpers for the scratcher pages:
1. discover_links pulls game page links out of the gamebox containers on the landing page.
2. extract_tables flattens every <table> on a game page into rows of cell text.
"""

import logging
from urllib.parse import urljoin

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

# class attribute of each game tile on the active games page
GAMEBOX_CLASS = 'col-lg-3 gamebox'


def _is_marker_div(marker):
    def match(tag):
        # html.parser splits class into a list, compare the joined value exactly
        return tag.name == 'div' and ' '.join(tag.get('class', [])) == marker
    return match


def discover_links(markup, marker=GAMEBOX_CLASS, base_url=None):
    """Return the hrefs of anchors inside every div whose class is exactly `marker`.

    Links come back in document order with duplicates dropped. An empty list
    means no marker container was found.
    """
    soup = BeautifulSoup(markup, 'html.parser')
    game_boxes = soup.find_all(_is_marker_div(marker))
    if not game_boxes:
        logger.warning(f"No '{marker}' containers found on landing page.")
        return []

    links = []
    seen = set()
    for box in game_boxes:
        for a in box.find_all('a', href=True):
            href = a['href'].strip()
            if base_url:
                href = urljoin(base_url, href)
            if href and href not in seen:
                seen.add(href)
                links.append(href)
    logger.debug(f"Found {len(links)} links in {len(game_boxes)} containers.")
    return links


def extract_tables(markup):
    """Flatten each <table> into a list of rows of non-empty, stripped cell strings.

    Every text node inside a td/th becomes its own entry. Rows without any cell
    text are kept as empty lists. Nested tables are not separated out.
    """
    soup = BeautifulSoup(markup, 'html.parser')
    tables = []
    for table in soup.find_all('table'):
        rows = []
        for tr in table.find_all('tr'):
            row = []
            for cell in tr.find_all(['td', 'th']):
                row.extend(cell.stripped_strings)
            rows.append(row)
        tables.append(rows)
    return tables
