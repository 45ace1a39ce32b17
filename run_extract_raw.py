import os
import sys
import json
import argparse

from dotenv import load_dotenv

from normalizers.errors import FetchError, NoTableFound
from wiki_table_scraper import (
    DEFAULT_SELECTOR,
    PageCache,
    extract_column,
    fetch,
    page_url
)

OUTPUT = "data/raw_rows.json"

PAGE = "List of presidents of the United States"


def extract(page, selector, column, cache, refresh=False):

    html = fetch(page, cache=cache, refresh=refresh)

    return {

        "page": page,
        "url": page_url(page),
        "selector": selector,
        "column": column,
        "rows": extract_column(html, selector, column)
    }


def main():
    load_dotenv()

    ap = argparse.ArgumentParser()
    ap.add_argument("--page", default=PAGE, help="Wikipedia page title.")
    ap.add_argument("--selector", default=DEFAULT_SELECTOR, help="CSS selector of the table.")
    ap.add_argument("--column", type=int, default=2, help="Index of the 'name (born–died)' column.")
    ap.add_argument("--cache-dir", default=os.getenv("WIKI_CACHE_DIR", "cache"))
    ap.add_argument("--refresh", action="store_true", help="Re-fetch even if the page is cached.")
    ap.add_argument("--out", default=OUTPUT)
    args = ap.parse_args()

    print("Extracting:", args.page)

    try:
        data = extract(args.page, args.selector, args.column, PageCache(args.cache_dir), refresh=args.refresh)
    except FetchError as e:
        print(f"[ERROR] fetch failed: {e}")
        sys.exit(1)
    except NoTableFound as e:
        print(f"[ERROR] extract failed: {e}")
        sys.exit(1)

    out_dir = os.path.dirname(args.out)
    if out_dir:
        os.makedirs(out_dir, exist_ok=True)

    with open(args.out, "w", encoding="utf-8") as f:

        json.dump(data, f, ensure_ascii=False, indent=2)

    print(f"✅ {len(data['rows'])} rows saved: {args.out}")


if __name__ == "__main__":
    main()
