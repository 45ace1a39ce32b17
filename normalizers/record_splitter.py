import re
import logging
from typing import Iterable, List, Tuple

from normalizers.errors import MalformedRecord
from normalizers.models import SplitTriple

logger = logging.getLogger(__name__)

EN_DASH = "–"

_BRACKET_RE = re.compile(r"[(\[]")
_SPAN_RE = re.compile(r"(?<![0-9])[0-9]{4}" + EN_DASH + r"[0-9]{4}(?![0-9])")
_BORN_RE = re.compile(r"\bborn\s+[0-9]{4}(?![0-9])")


def clean_cell(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip()


def filter_rows(rows: Iterable[str], header_labels: Iterable[str] = ()) -> Tuple[List[str], int]:
    """
    Drop column-header echoes and exact repeats before splitting.
    Rows are compared whitespace-normalized but returned as scraped.
    Returns (kept rows, number filtered).
    """
    labels = {clean_cell(h) for h in header_labels}
    seen = set()
    kept: List[str] = []
    filtered = 0

    for row in rows:
        text = clean_cell(row)
        if text in labels or text in seen:
            filtered += 1
            continue
        seen.add(text)
        kept.append(row)

    if filtered:
        logger.info("Filtered %d header/duplicate rows", filtered)
    return kept, filtered


def split_record(text: str) -> SplitTriple:
    """
    "John Smith (1920–1990)"  -> SplitTriple("John Smith", "1920–1990", None)
    "Jane Doe (born 1965)"    -> SplitTriple("Jane Doe", None, "born 1965")
    """
    m = _BRACKET_RE.search(text)
    if m:
        name, remainder = text[:m.start()], text[m.start():]
    else:
        name, remainder = text, ""

    name = clean_cell(name)
    if not name:
        raise MalformedRecord("Record has no name before its date parenthetical", text=text)

    span = _SPAN_RE.search(remainder)
    born = _BORN_RE.search(remainder)

    return SplitTriple(
        name=name,
        date_segment=span.group(0) if span else None,
        born_tag=born.group(0) if born else None,
    )
