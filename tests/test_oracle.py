"""Tests for soaperm.oracle - the row vs column equivalence checks."""

import numpy as np
import pytest

from soaperm import (
    FIELD_DTYPES,
    FIELDS,
    Record,
    assert_aligned,
    check_sort_equivalence,
    new_columns,
    new_records,
    records_to_columns,
    reset_options,
    sample_fields,
    table_to_arrow,
)


@pytest.fixture(autouse=True)
def _reset_state():
    reset_options()
    yield
    reset_options()


class TestSampleFields:
    """Tests for seeded field sampling."""

    def test_dtypes_and_length(self):
        values = sample_fields(42, 100)
        assert list(values) == list(FIELDS)
        for name in FIELDS:
            assert values[name].dtype == FIELD_DTYPES[name]
            assert len(values[name]) == 100

    def test_deterministic(self):
        a = sample_fields(7, 50)
        b = sample_fields(7, 50)
        for name in FIELDS:
            np.testing.assert_array_equal(a[name], b[name])

    def test_seed_changes_values(self):
        a = sample_fields(1, 50)
        b = sample_fields(2, 50)
        assert not np.array_equal(a["query_index"], b["query_index"])

    def test_custom_rng_factory(self):
        calls = []

        def factory(seed):
            calls.append(seed)
            return np.random.Generator(np.random.PCG64(seed))

        values = sample_fields(3, 10, rng_factory=factory)
        assert calls == [3] * len(FIELDS)
        assert len(values["is_exact"]) == 10

    def test_bool_field_has_both_values(self):
        values = sample_fields(0, 1000)
        assert set(values["is_exact"].tolist()) == {True, False}


class TestBuilders:
    """Tests for new_records / new_columns."""

    def test_views_aligned(self):
        assert_aligned(new_records(42, 200), new_columns(42, 200))

    def test_records_are_python_values(self):
        rec = new_records(5, 1)[0]
        assert isinstance(rec, Record)
        assert type(rec.query_index) is int
        assert type(rec.is_exact) is bool

    def test_columns_table(self):
        table = new_columns(5, 3)
        assert table["orientation"] == "column"
        assert table["columns"] == list(FIELDS)


class TestAssertAligned:
    """Tests for assert_aligned."""

    def test_detects_field_difference(self):
        records = [Record(1, 2, 3, 4, True), Record(5, 6, 7, 8, False)]
        table = records_to_columns(records)
        table["rows"][2][1] = 0
        with pytest.raises(AssertionError, match="Record 1: field 'attribute'"):
            assert_aligned(records, table)

    def test_detects_length_difference(self):
        records = [Record(1, 2, 3, 4, True)]
        with pytest.raises(AssertionError, match="1 records but table has 0 rows"):
            assert_aligned(records, records_to_columns([]))

    def test_arrow_table(self):
        records = new_records(9, 20)
        assert_aligned(records, table_to_arrow(records_to_columns(records)))


class TestSortEquivalence:
    """End-to-end: columnar sort equals the row-oriented reference."""

    def test_small(self):
        records, table = check_sort_equivalence(1, 50)
        assert records == sorted(records)

    @pytest.mark.parametrize("n", [0, 1, 2, 5])
    def test_tiny(self, n):
        check_sort_equivalence(11, n)

    @pytest.mark.parametrize("method", ["key", "lexsort"])
    @pytest.mark.parametrize("strategy", ["copy", "cycle"])
    def test_16000_records(self, method, strategy):
        records, table = check_sort_equivalence(42, 16_000, method=method, strategy=strategy)
        assert len(records) == 16_000
        q = table["rows"][0]
        assert bool(np.all(q[:-1] <= q[1:]))

    def test_16000_records_parallel(self):
        check_sort_equivalence(42, 16_000, parallel=True, max_workers=5)

    def test_with_ties(self):
        # tiny value ranges force many fully equal keys
        def factory(seed):
            return _SmallRangeGenerator(seed)

        check_sort_equivalence(3, 2_000, rng_factory=factory, strategy="cycle")


class _SmallRangeGenerator:
    """Generator stand-in that only draws 0 or 1, whatever the requested range."""

    def __init__(self, seed):
        self._rng = np.random.default_rng(seed)

    def integers(self, low, high, size, dtype, endpoint=False):
        return self._rng.integers(0, 2, size=size).astype(dtype)
