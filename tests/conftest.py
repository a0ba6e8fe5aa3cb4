"""Shared fixtures for the scratcher scraper test suite."""

import pytest
import requests

LANDING_URL = "https://www.mslottery.com/gamestatus/active/"

LANDING_HTML = """
<html><body>
  <nav><a href="https://www.mslottery.com/">Home</a></nav>
  <div class="row">
    <div class="col-lg-3 gamebox">
      <div class="inner">
        <a href="https://www.mslottery.com/games/lucky-7s/"><img data-src="lucky.png"></a>
      </div>
      <a href="https://www.mslottery.com/games/cash-blast/">Cash Blast</a>
    </div>
    <div class="col-lg-3 gamebox-footer">
      <a href="https://www.mslottery.com/games/not-a-game/">nope</a>
    </div>
  </div>
  <footer><a href="https://www.mslottery.com/contact/">Contact</a></footer>
</body></html>
"""


def game_page(price="$5", odds="1:3.50", launch="2023-01-01", prize_rows=None):
    """Render a minimal game page: metadata table followed by the prize table."""
    if prize_rows is None:
        prize_rows = [("$100", "50", "10"), ("2nd Chance", "5", "5")]
    prizes = "".join(
        f"<tr><td>{v}</td><td>{o}</td><td>{r}</td></tr>" for v, o, r in prize_rows
    )
    return f"""
    <html><body>
      <h1 class="entry-title">Game</h1>
      <table class="juxtable">
        <tr><td>Game Number</td><td>1,234</td></tr>
        <tr><td>Ticket Price</td><td>{price}</td></tr>
        <tr><td>Overall Odds</td><td>{odds}</td></tr>
        <tr><td>Launch Date</td><td>{launch}</td></tr>
      </table>
      <table>
        <tr><th>Prize Amount</th><th>Winning Tickets At Start</th><th>Winning Tickets Unclaimed</th></tr>
        {prizes}
      </table>
    </body></html>
    """


class FakeResponse:
    def __init__(self, text, status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


@pytest.fixture
def fake_web(monkeypatch):
    """Route requests.get through a url -> html (or exception) mapping.

    Unknown urls answer with a 404.
    """
    pages = {}

    def fake_get(url, *args, **kwargs):
        page = pages.get(url)
        if page is None:
            return FakeResponse("", status_code=404)
        if isinstance(page, Exception):
            raise page
        return FakeResponse(page)

    monkeypatch.setattr(requests, "get", fake_get)
    return pages
