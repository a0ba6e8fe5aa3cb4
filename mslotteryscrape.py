#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MS Scratcher EV Scraper:
1. Collects every game link from the active games page.
2. Fetches the game pages concurrently (capped at MAX_CONCURRENT_FETCHES) and builds a Game from each.
3. Sorts the games by expected value, descending, and writes them to OUTPUT_FILE.
"""

import logging
import logging.handlers
import sys
import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime

import pandas as pd
import requests
from dateutil.tz import tzlocal

from scratchergame import build_game, game_name_from_url
from scratcherhtml import GAMEBOX_CLASS, discover_links, extract_tables

# Constants
START_URL = 'https://www.mslottery.com/gamestatus/active/'
MAX_CONCURRENT_FETCHES = 75
OUTPUT_FILE = 'mslotto_games.csv'
LOG_FILE = 'status.log'
REPORT_COLUMNS = ['Name', 'Price', 'Odds', 'Launch Date',
                  'Original Winning Tickets', 'Remaining Winning Tickets',
                  'Estimated Original Tickets', 'Estimated Remaining Tickets',
                  'EV', 'URL']

logger = logging.getLogger(__name__)


def configure_logging():
    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    if not root.handlers:
        logger_file_handler = logging.handlers.RotatingFileHandler(
            LOG_FILE,
            maxBytes=1024 * 1024,
            backupCount=1,
            encoding="utf8",
        )
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        logger_file_handler.setFormatter(formatter)
        root.addHandler(logger_file_handler)
        console_handler = logging.StreamHandler(sys.stdout)  # Log to console
        console_handler.setFormatter(formatter)
        console_handler.setLevel(logging.INFO)
        root.addHandler(console_handler)
    logging.getLogger('urllib3').setLevel(logging.WARNING)


def get_html(url):
    r = requests.get(url)
    r.raise_for_status()
    return r.text


def get_links(url=START_URL):
    """Fetch the landing page and return the game links in it.

    Request errors are not caught here; the run cannot continue without links.
    """
    logger.info(f"Fetching {url}...")
    links = discover_links(get_html(url), marker=GAMEBOX_CLASS, base_url=url)
    logger.info(f"  Found {len(links)} games.")
    return links


def fetch_game(url):
    tables = extract_tables(get_html(url))
    if len(tables) < 2:
        logger.warning(f"      > Only {len(tables)} table(s) on {url}, missing fields default to zero.")
    return build_game(tables, game_name_from_url(url), url)


def scrape_games(links, max_workers=MAX_CONCURRENT_FETCHES):
    """Fetch and build a Game for every link, at most `max_workers` at a time.

    Returns once every link has been processed. Links whose page cannot be
    fetched are logged and left out of the result.
    """
    games = []
    games_lock = threading.Lock()

    def worker(link):
        logger.debug(f"    Scraping game: {link}")
        try:
            game = fetch_game(link)
        except requests.RequestException as e:
            logger.error(f"    Error fetching game page {link}: {e}")
            return
        with games_lock:
            games.append(game)

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [executor.submit(worker, link) for link in links]

    # anything other than a request error is a bug, let it surface
    for future in futures:
        future.result()

    logger.info(f"Built {len(games)} of {len(links)} games.")
    return games


def sort_games(games):
    return sorted(games, key=lambda g: g.expected_value(), reverse=True)


def games_to_frame(games):
    rows = []
    for g in games:
        rows.append([
            g.name,
            g.price,
            f"1:{g.odds:.2f}",
            g.launch_date,
            g.total_original_prizes,
            g.total_remaining_prizes,
            g.original_tickets(),
            g.remaining_tickets(),
            f"{g.expected_value():.2f}",
            g.url,
        ])
    return pd.DataFrame(rows, columns=REPORT_COLUMNS)


def write_report(games, filename=OUTPUT_FILE):
    """Sort by EV (highest first) and save as CSV. Write errors propagate."""
    ratingstable = games_to_frame(sort_games(games))
    ratingstable.to_csv(filename, encoding='utf-8', index=False)
    logger.info(f"Saved {len(ratingstable)} games to {filename}")
    return ratingstable


def exportScratcherRecs(filename=OUTPUT_FILE):
    now = datetime.now(tzlocal()).strftime('%Y-%m-%d %H:%M:%S %Z')
    logger.info(f"Starting scrape at {now}")
    games = scrape_games(get_links())
    return write_report(games, filename)


def main():
    configure_logging()
    try:
        exportScratcherRecs(OUTPUT_FILE)
    except (requests.RequestException, OSError):
        logger.exception("Scrape failed")
        sys.exit(1)
    print(f"Data written to {OUTPUT_FILE}")


if __name__ == "__main__":
    main()
