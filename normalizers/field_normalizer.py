import re
import logging
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Tuple

from pydantic import ValidationError

from normalizers.errors import UnparseableYear
from normalizers.models import OverrideRecord, PersonRecord, SplitTriple
from normalizers.record_splitter import EN_DASH

logger = logging.getLogger(__name__)

_YEAR_RE = re.compile(r"^\d{4}$", re.ASCII)
_BORN_MARKER_RE = re.compile(r"^born\s+")

Predicate = Callable[[PersonRecord], bool]


@dataclass(frozen=True)
class YearParse:
    text: str
    value: Optional[int] = None
    error: Optional[UnparseableYear] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> int:
        if self.error is not None:
            raise self.error
        return self.value


def parse_year(text: str) -> YearParse:
    s = (text or "").strip()
    if not _YEAR_RE.match(s):
        return YearParse(text=text, error=UnparseableYear(f"Not a 4-digit year: {text!r}", text=text))
    return YearParse(text=text, value=int(s))


def normalize_triple(triple: SplitTriple) -> PersonRecord:

    if triple.date_segment is not None:
        parts = triple.date_segment.split(EN_DASH)
        if len(parts) != 2:
            raise UnparseableYear(f"Expected one en-dash in {triple.date_segment!r}", text=triple.date_segment)

        born = parse_year(parts[0]).unwrap()
        died = parse_year(parts[1]).unwrap()
        if died < born:
            raise UnparseableYear(f"{triple.name}: died {died} before born {born}", text=triple.date_segment)
        return PersonRecord(name=triple.name, born=born, died=died)

    if triple.born_tag is not None:
        born = parse_year(_BORN_MARKER_RE.sub("", triple.born_tag.strip())).unwrap()
        return PersonRecord(name=triple.name, born=born)

    # no dates at all; an override is expected to supply them
    return PersonRecord(name=triple.name)


def dedupe_records(records: Iterable[PersonRecord]) -> Tuple[List[PersonRecord], int]:
    """
    Identical records collapse to one (a subject listed once per non-consecutive term).
    Remaining same-name records keep the most complete one, first wins on a tie.
    Returns (records, number collapsed).
    """
    records = list(records)
    unique = list(dict.fromkeys(records))

    by_name: Dict[str, PersonRecord] = {}
    for r in unique:
        current = by_name.get(r.name)
        if current is None or r.known_fields() > current.known_fields():
            by_name[r.name] = r

    out = [r for r in unique if by_name[r.name] is r]
    collapsed = len(records) - len(out)
    if collapsed:
        logger.debug("Collapsed %d duplicate records", collapsed)
    return out, collapsed


def allow_list(names: Iterable[str]) -> Predicate:
    allowed = frozenset(names)

    def keep(record: PersonRecord) -> bool:
        return record.name in allowed

    return keep


def _combine(auto: PersonRecord, override: OverrideRecord) -> PersonRecord:
    born = override.born if override.born is not None else auto.born
    try:
        return PersonRecord(name=override.name, born=born, died=auto.died)
    except ValidationError:
        logger.warning("Override for %s conflicts with scraped years; using override alone", override.name)
        return PersonRecord(name=override.name, born=override.born)


def merge_overrides(
    records: Iterable[PersonRecord],
    overrides: Iterable[OverrideRecord] = (),
    keep: Optional[Predicate] = None,
) -> Tuple[List[PersonRecord], int]:
    """
    Append override records after the automated ones.
    A name present in both yields one record, at the override's position.
    Returns (merged records, number excluded by `keep`).
    """
    automated: List[PersonRecord] = []
    excluded = 0
    for r in records:
        if keep is not None and not keep(r):
            excluded += 1
            continue
        automated.append(r)

    overrides = list(overrides)
    auto_by_name = {r.name: r for r in automated}
    override_names = {o.name for o in overrides}

    merged = [r for r in automated if r.name not in override_names]
    for o in overrides:
        auto = auto_by_name.get(o.name)
        merged.append(_combine(auto, o) if auto is not None else PersonRecord(name=o.name, born=o.born))

    if excluded:
        logger.info("Excluded %d scraped records outside the allowed set", excluded)
    return merged, excluded


def sort_records(records: Iterable[PersonRecord]) -> List[PersonRecord]:
    return sorted(records, key=lambda r: (r.born is None, r.born if r.born is not None else 0))
