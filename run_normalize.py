import os
import sys
import json
import logging
import argparse
import datetime

from dotenv import load_dotenv

from normalizers.field_normalizer import allow_list
from normalizers.overrides import DEFAULT_OVERRIDES_FILE, load_overrides
from normalizers.pipeline import build_table
from table_view import plot_frame, write_csv

INPUT_FILE = "data/raw_rows.json"

CSV_OUT = "outputs/people.csv"
PLOT_OUT = "outputs/people_plot.csv"

HEADER_LABELS = [
"President",
"Name (Birth–Death)"
]


def load_rows(path):

    with open(path, "r", encoding="utf-8") as f:

        data = json.load(f)

    # run_extract_raw.py writes {"rows": [...]}; a bare list also works
    if isinstance(data, dict):
        return data.get("rows", [])
    return data


def main():
    load_dotenv()

    ap = argparse.ArgumentParser()
    ap.add_argument("--input", default=INPUT_FILE)
    ap.add_argument("--overrides", default=os.getenv("OVERRIDES_FILE", DEFAULT_OVERRIDES_FILE))
    ap.add_argument("--header-label", action="append", default=None,
                    help="Literal header text to filter out (repeatable).")
    ap.add_argument("--allow-list", default="",
                    help="File with one name per line; scraped records not listed are excluded.")
    ap.add_argument("--current-year", type=int, default=datetime.date.today().year)
    ap.add_argument("--out-csv", default=CSV_OUT)
    ap.add_argument("--out-plot-csv", default=PLOT_OUT)
    ap.add_argument("--log-level", default="WARNING")
    args = ap.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")

    rows = load_rows(args.input)

    overrides = None
    if args.overrides and os.path.exists(args.overrides):
        overrides = load_overrides(args.overrides)
    else:
        print(f"[WARN] No override file at {args.overrides}")

    keep = None
    if args.allow_list:
        with open(args.allow_list, "r", encoding="utf-8") as f:
            keep = allow_list(line.strip() for line in f if line.strip())

    result = build_table(
        rows,
        overrides=overrides,
        header_labels=args.header_label or HEADER_LABELS,
        keep=keep
    )

    for d in result.drops:
        print(f"[WARN] dropped ({d.stage}) {d.text!r}: {d.reason}")

    if not result.records:
        print("[ERROR] No records produced")
        sys.exit(1)

    os.makedirs(os.path.dirname(args.out_csv) or ".", exist_ok=True)
    os.makedirs(os.path.dirname(args.out_plot_csv) or ".", exist_ok=True)

    write_csv(result.records, args.out_csv)
    plot_frame(result.records, args.current_year).to_csv(args.out_plot_csv, index=False)

    print(f"✅ CSV saved: {args.out_csv}")
    print(f"✅ Plot table saved: {args.out_plot_csv}")
    print("Done normalization:", result.summary())


if __name__ == "__main__":
    main()
