#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Game model for a single scratcher, built from the two tables on its game page.

Table 0 is the key/value metadata table (Ticket Price, Overall Odds, ...),
table 1 is the prize schedule (prize amount, winners at start, winners unclaimed).
Anything that does not parse falls back to zero instead of raising.
"""

import math
import re
from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass(frozen=True)
class PrizeTier:
    """One row of the prize schedule."""
    value: int
    original_count: int
    remaining_count: int


@dataclass(frozen=True)
class Game:
    name: str
    price: int
    odds: float  # overall odds ("1:4.50" -> 4.50)
    launch_date: str
    prize_tiers: Tuple[PrizeTier, ...] = field(default_factory=tuple)
    total_original_prizes: int = 0
    total_remaining_prizes: int = 0
    url: str = ''
    game_number: int = 0

    def original_tickets(self) -> int:
        return _round_half_away(self.odds * self.total_original_prizes)

    def remaining_tickets(self) -> int:
        return _round_half_away(self.odds * self.total_remaining_prizes)

    def expected_value(self) -> float:
        """Price less the probability-weighted value of the prizes still unclaimed.

        With no remaining tickets the whole price is counted as lost.
        """
        remaining_tickets = self.remaining_tickets()
        if remaining_tickets == 0:
            return float(self.price)

        expected_win = 0.0
        for tier in self.prize_tiers:
            if tier.remaining_count <= 0 or tier.value <= 0:
                continue
            expected_win += tier.remaining_count / remaining_tickets * tier.value
        return self.price - expected_win


def _round_half_away(x):
    if not math.isfinite(x):
        return 0
    whole = math.trunc(x)
    if abs(x - whole) >= 0.5:
        whole += int(math.copysign(1, x))
    return int(whole)


# optional sign then ASCII digits, no underscores
_INT_RE = re.compile(r'[+-]?[0-9]+')


def _to_int(s):
    if not _INT_RE.fullmatch(s):
        return 0
    return int(s)


def parse_dollar(s):
    """'$1,000' -> 1000, anything unparseable -> 0"""
    return _to_int(s.replace('$', '').replace(',', ''))


def parse_int(s):
    return _to_int(s.replace(',', ''))


def parse_odds(s):
    """'1:3.50' -> 3.5; needs exactly one colon and a finite number, otherwise 0.0"""
    parts = s.split(':')
    if len(parts) != 2:
        return 0.0
    try:
        odds = float(parts[1])
    except ValueError:
        return 0.0
    if not math.isfinite(odds):
        return 0.0
    return odds


def parse_metadata(table: List[List[str]]):
    """Pull price, odds, launch date and game number out of the metadata table.

    Returns a dict with keys price, odds, launch_date, game_number. Labels are
    matched as case-insensitive substrings of the first cell; missing labels
    keep their zero value.
    """
    meta = {'price': 0, 'odds': 0.0, 'launch_date': '', 'game_number': 0}
    for row in table:
        if len(row) < 2:
            continue
        key = row[0].lower()
        val = row[1]

        if 'ticket price' in key:
            meta['price'] = parse_dollar(val)
        elif 'overall odds' in key:
            meta['odds'] = parse_odds(val)
        elif 'launch date' in key:
            meta['launch_date'] = val
        elif 'game number' in key:
            meta['game_number'] = parse_int(val)
    return meta


def parse_prizes(table: List[List[str]]) -> List[PrizeTier]:
    prizes = []
    for row in table[1:]:  # skip header row
        if len(row) < 3:
            continue
        if '2nd chance' in row[0].lower():
            continue
        prizes.append(PrizeTier(
            value=parse_dollar(row[0]),
            original_count=parse_int(row[1]),
            remaining_count=parse_int(row[2]),
        ))
    return prizes


def game_name_from_url(url):
    """Last path segment with hyphens as spaces, e.g. .../lucky-7s/ -> 'lucky 7s'."""
    parts = url.strip('/').split('/')
    if len(parts) > 1:
        return parts[-1].replace('-', ' ')
    return url


def build_game(tables, name, url) -> Game:
    """Build a Game from a page's extracted tables (0 = metadata, 1 = prizes)."""
    meta_table = tables[0] if len(tables) > 0 else []
    prize_table = tables[1] if len(tables) > 1 else []

    meta = parse_metadata(meta_table)
    prize_tiers = parse_prizes(prize_table)

    return Game(
        name=name,
        price=meta['price'],
        odds=meta['odds'],
        launch_date=meta['launch_date'],
        prize_tiers=tuple(prize_tiers),
        total_original_prizes=sum(p.original_count for p in prize_tiers),
        total_remaining_prizes=sum(p.remaining_count for p in prize_tiers),
        url=url,
        game_number=meta['game_number'],
    )
