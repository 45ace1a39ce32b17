import pytest
from pydantic import ValidationError

from normalizers.errors import UnparseableYear
from normalizers.field_normalizer import (
    allow_list,
    dedupe_records,
    merge_overrides,
    normalize_triple,
    parse_year,
    sort_records,
)
from normalizers.models import OverrideRecord, PersonRecord, SplitTriple


def test_parse_year_ok():
    y = parse_year(" 1916 ")
    assert y.ok
    assert y.unwrap() == 1916


@pytest.mark.parametrize("text", ["", "19x6", "916", "19160", None])
def test_parse_year_error_is_tagged(text):
    y = parse_year(text)
    assert not y.ok
    assert y.value is None
    assert isinstance(y.error, UnparseableYear)
    with pytest.raises(UnparseableYear):
        y.unwrap()


def test_deceased_format():
    r = normalize_triple(SplitTriple("Ann Lee", date_segment="1916–1952"))
    assert (r.born, r.died, r.age_at_death) == (1916, 1952, 36)


def test_living_format():
    r = normalize_triple(SplitTriple("Ann Lee", born_tag="born 1963"))
    assert r.born == 1963
    assert r.died is None
    assert r.age_at_death is None


def test_unresolved_format():
    r = normalize_triple(SplitTriple("Ann Lee"))
    assert r.born is None and r.died is None and r.age_at_death is None


def test_span_takes_precedence_over_born_tag():
    r = normalize_triple(SplitTriple("Ann Lee", date_segment="1901–1977", born_tag="born 1901"))
    assert r.died == 1977


@pytest.mark.parametrize("segment", ["1990–1920", "19x6–1952", "1916–", "1916–1952–1960"])
def test_bad_span_is_unparseable(segment):
    with pytest.raises(UnparseableYear):
        normalize_triple(SplitTriple("Ann Lee", date_segment=segment))


def test_record_invariants():
    with pytest.raises(ValidationError):
        PersonRecord(name="Ann Lee", died=1950)
    with pytest.raises(ValidationError):
        PersonRecord(name="Ann Lee", born=1950, died=1940)
    with pytest.raises(ValidationError):
        PersonRecord(name="")


def test_record_is_frozen():
    r = PersonRecord(name="Ann Lee", born=1901)
    with pytest.raises(ValidationError):
        r.died = 1977


def test_override_record_has_no_death_year():
    with pytest.raises(ValidationError):
        OverrideRecord(name="Ann Lee", born=1901, died=1977)


def test_dedupe_identical():
    a = PersonRecord(name="Ann Lee", born=1901, died=1977)
    records, collapsed = dedupe_records([a, PersonRecord(name="Ann Lee", born=1901, died=1977)])
    assert records == [a]
    assert collapsed == 1


def test_dedupe_same_name_keeps_most_complete():
    partial = PersonRecord(name="Ann Lee", born=1901)
    full = PersonRecord(name="Ann Lee", born=1901, died=1977)
    other = PersonRecord(name="Bo Chan", born=1930)
    records, collapsed = dedupe_records([partial, other, full])
    assert records == [other, full]
    assert collapsed == 1


def test_merge_override_fills_unknowns():
    auto = [PersonRecord(name="Jane Doe"), PersonRecord(name="John Smith", born=1920, died=1990)]
    merged, excluded = merge_overrides(auto, [OverrideRecord(name="Jane Doe", born=1965)])
    assert excluded == 0
    assert [r.name for r in merged] == ["John Smith", "Jane Doe"]
    assert merged[1].born == 1965


def test_merge_override_keeps_scraped_death_year():
    auto = [PersonRecord(name="Ann Lee", born=1900, died=1977)]
    merged, _ = merge_overrides(auto, [OverrideRecord(name="Ann Lee", born=1901)])
    assert merged == [PersonRecord(name="Ann Lee", born=1901, died=1977)]


def test_merge_conflicting_override_wins_alone():
    auto = [PersonRecord(name="Ann Lee", born=1900, died=1977)]
    merged, _ = merge_overrides(auto, [OverrideRecord(name="Ann Lee", born=1980)])
    assert merged == [PersonRecord(name="Ann Lee", born=1980)]


def test_merge_with_allow_list():
    auto = [PersonRecord(name="Ann Lee", born=1901), PersonRecord(name="Stale Row")]
    merged, excluded = merge_overrides(auto, [], keep=allow_list(["Ann Lee"]))
    assert merged == [PersonRecord(name="Ann Lee", born=1901)]
    assert excluded == 1


def test_sort_unknown_born_trails_in_order():
    records = [
        PersonRecord(name="X"),
        PersonRecord(name="B", born=1950),
        PersonRecord(name="Y"),
        PersonRecord(name="A", born=1900, died=1960),
    ]
    assert [r.name for r in sort_records(records)] == ["A", "B", "X", "Y"]
