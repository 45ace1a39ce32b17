import os
import re
import logging
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests
from bs4 import BeautifulSoup

from normalizers.errors import FetchError, NoTableFound

logger = logging.getLogger(__name__)

WIKI_API = "https://en.wikipedia.org/w/api.php"
WIKI_PAGE = "https://en.wikipedia.org/wiki/"

DEFAULT_USER_AGENT = "wiki-table-scraper/1.0"
DEFAULT_SELECTOR = "table.wikitable"


def mw_get(params: Dict[str, Any], timeout: int = 30) -> Dict[str, Any]:
    r = requests.get(
        WIKI_API,
        params=params,
        timeout=timeout,
        headers={"User-Agent": os.getenv("WIKI_USER_AGENT", DEFAULT_USER_AGENT)}
    )
    r.raise_for_status()
    return r.json()


def normalize_title(title: str) -> str:
    return title.strip().replace(" ", "_")


def page_url(title: str) -> str:
    return WIKI_PAGE + normalize_title(title)


def clean_text(s: str) -> str:
    s = re.sub(r"\[\d+\]", "", s)      # remove [1], [2]
    s = re.sub(r"\[[a-z]\]", "", s)    # remove [a], [b] notes
    s = re.sub(r"\s+", " ", s).strip()
    return s


# ---------------- page cache ----------------

class PageCache:
    """
    One HTML file per locator under cache_dir.
    Nothing outside cache_dir is read or written.
    """

    def __init__(self, cache_dir: str):
        self.cache_dir = cache_dir

    def path_for(self, locator: str) -> str:
        # reversible encoding: one file per distinct locator
        key = quote(normalize_title(locator), safe="")
        return os.path.join(self.cache_dir, key + ".html")

    def get(self, locator: str) -> Optional[str]:
        path = self.path_for(locator)
        if not os.path.exists(path):
            logger.debug("Cache miss: %s", locator)
            return None
        logger.debug("Cache hit: %s", locator)
        with open(path, "r", encoding="utf-8") as f:
            return f.read()

    def put(self, locator: str, html: str) -> None:
        os.makedirs(self.cache_dir, exist_ok=True)
        with open(self.path_for(locator), "w", encoding="utf-8") as f:
            f.write(html)

    def invalidate(self, locator: str) -> bool:
        path = self.path_for(locator)
        if os.path.exists(path):
            os.remove(path)
            return True
        return False

    def clear(self) -> int:
        if not os.path.isdir(self.cache_dir):
            return 0
        removed = 0
        for fname in os.listdir(self.cache_dir):
            if fname.endswith(".html"):
                os.remove(os.path.join(self.cache_dir, fname))
                removed += 1
        return removed


# ---------------- fetch + extract ----------------

def get_page_html(title: str) -> str:
    try:
        data = mw_get({
            "action": "parse",
            "page": title,
            "prop": "text",
            "redirects": 1,
            "format": "json",
            "formatversion": 2
        })
    except requests.RequestException as e:
        raise FetchError(f"Failed to fetch {title!r}: {e}") from e
    except ValueError as e:
        raise FetchError(f"Invalid JSON for {title!r}: {e}") from e

    if "error" in data:
        info = data["error"].get("info", "") or data["error"].get("code", "")
        raise FetchError(f"Wiki API error for {title!r}: {info}")

    html = data.get("parse", {}).get("text", "") or ""
    if not html:
        raise FetchError(f"Empty HTML for {title!r}")
    return html


def fetch(locator: str, cache: Optional[PageCache] = None, refresh: bool = False) -> str:
    if cache is not None and not refresh:
        html = cache.get(locator)
        if html is not None:
            return html

    html = get_page_html(locator)
    if cache is not None:
        cache.put(locator, html)
    return html


def extract_table(html: str, selector: str = DEFAULT_SELECTOR) -> List[List[str]]:
    soup = BeautifulSoup(html, "html.parser")
    table = soup.select_one(selector)
    if table is None:
        raise NoTableFound(selector)

    rows: List[List[str]] = []
    for tr in table.select("tr"):
        cells = [clean_text(c.get_text(" ", strip=True)) for c in tr.find_all(["th", "td"])]
        if cells:
            rows.append(cells)
    return rows


def extract_column(html: str, selector: str = DEFAULT_SELECTOR, column: int = 0) -> List[str]:
    """
    Cells of one column. Rows too short to reach it (rowspan continuations)
    are skipped and counted in a warning.
    """
    out: List[str] = []
    skipped = 0
    for cells in extract_table(html, selector):
        if len(cells) > column:
            out.append(cells[column])
        else:
            skipped += 1

    if skipped:
        logger.warning("Skipped %d rows with no column %d in %s", skipped, column, selector)
    return out
