"""
raw rows -> split triples -> typed records -> final table.

Row-level failures are recorded as drops and the batch carries on;
page-level failures never reach this module.
"""
import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from normalizers.errors import RowError
from normalizers.field_normalizer import (
    Predicate,
    dedupe_records,
    merge_overrides,
    normalize_triple,
    sort_records,
)
from normalizers.models import OverrideSet, PersonRecord
from normalizers.record_splitter import filter_rows, split_record

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Drop:
    text: str
    stage: str
    reason: str


@dataclass
class TableResult:
    records: List[PersonRecord] = field(default_factory=list)
    drops: List[Drop] = field(default_factory=list)
    filtered: int = 0
    collapsed: int = 0
    excluded: int = 0

    @property
    def dropped(self) -> int:
        return len(self.drops)

    def summary(self) -> str:
        return (
            f"{len(self.records)} records, {self.dropped} dropped, "
            f"{self.filtered} header/duplicate rows filtered, "
            f"{self.collapsed} duplicates collapsed, {self.excluded} excluded"
        )


def build_table(
    rows: Iterable[str],
    overrides: Optional[OverrideSet] = None,
    header_labels: Iterable[str] = (),
    keep: Optional[Predicate] = None,
) -> TableResult:

    result = TableResult()
    kept, result.filtered = filter_rows(rows, header_labels)

    typed: List[PersonRecord] = []
    for text in kept:
        try:
            triple = split_record(text)
        except RowError as e:
            logger.warning("Dropping row %r: %s", text, e)
            result.drops.append(Drop(text=text, stage="split", reason=str(e)))
            continue

        try:
            typed.append(normalize_triple(triple))
        except RowError as e:
            logger.warning("Dropping row %r: %s", text, e)
            result.drops.append(Drop(text=text, stage="normalize", reason=str(e)))

    typed, result.collapsed = dedupe_records(typed)

    override_records = overrides.records if overrides is not None else []
    merged, result.excluded = merge_overrides(typed, override_records, keep=keep)

    result.records = sort_records(merged)
    logger.info("Built table: %s", result.summary())
    return result
