"""
Pytest fixtures for the lifespan table tests.
"""
import pytest

from normalizers.models import OverrideSet


TABLE_HTML = """
<div class="mw-parser-output">
<table class="infobox"><tr><th>Not</th><td>this one</td></tr></table>
<table class="wikitable">
<tr><th>No.</th><th>Portrait</th><th>President</th></tr>
<tr><td>1</td><td></td><td>John Smith (1920–1990)[1]</td></tr>
<tr><td>2</td><td></td><td>Jane Doe (born 1965)</td></tr>
<tr><td>3</td><td></td><td>John Smith (1920–1990)[1]</td></tr>
<tr><td>4</td></tr>
</table>
</div>
"""


class FakeResponse:

    def __init__(self, payload=None, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Server Error")

    def json(self):
        return self.payload


@pytest.fixture
def table_html():
    return TABLE_HTML


@pytest.fixture
def parse_payload():
    """MediaWiki action=parse (formatversion=2) response wrapping TABLE_HTML."""
    return {"parse": {"title": "List", "pageid": 1, "text": TABLE_HTML}}


@pytest.fixture
def fake_get(monkeypatch):
    """Patch requests.get; returns the list of recorded calls."""
    def _install(response):
        calls = []

        def _get(url, params=None, timeout=None, headers=None):
            calls.append(params)
            if isinstance(response, Exception):
                raise response
            return response

        monkeypatch.setattr("wiki_table_scraper.requests.get", _get)
        return calls

    return _install


@pytest.fixture
def override_set():
    return OverrideSet.model_validate({
        "name": "test",
        "version": "1",
        "records": [
            {"name": "Jane Doe", "born": 1965},
            {"name": "Sam Roe", "born": 1950},
        ],
    })
