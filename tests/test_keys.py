"""Tests for soaperm.keys."""

import numpy as np
import pytest

from soaperm import Record, key_function, records_to_columns, row_key, table_to_arrow


@pytest.fixture
def table():
    return records_to_columns([
        Record(3, 0, 7, 1, True),
        Record(1, 2, 7, 0, False),
        Record(2, 1, 5, 9, True),
    ])


class TestRowKey:
    """Tests for row_key."""

    def test_full_key_in_field_order(self, table):
        assert row_key(table, 1) == (1, 2, 7, 0, False)

    def test_key_matches_record(self, table):
        assert row_key(table, 0) == Record(3, 0, 7, 1, True).key()

    def test_column_subset_and_order(self, table):
        assert row_key(table, 2, columns=["attribute", "query_index"]) == (5, 2)

    def test_python_scalars(self, table):
        key = row_key(table, 0)
        assert type(key[0]) is int
        assert type(key[4]) is bool

    def test_arrow_table(self, table):
        assert row_key(table_to_arrow(table), 2) == (2, 1, 5, 9, True)

    def test_row_table_rejected(self):
        table = {"orientation": "row", "columns": ["a", "b"], "rows": [[1, 2], [3, 4], [5, 6]]}
        with pytest.raises(ValueError, match="row orientation"):
            row_key(table, 0)

    @pytest.mark.parametrize("i", [3, -1, 100])
    def test_out_of_range(self, table, i):
        with pytest.raises(IndexError, match="out of range"):
            row_key(table, i)


class TestKeyFunction:
    """Tests for key_function."""

    def test_matches_row_key(self, table):
        key = key_function(table)
        for i in range(3):
            assert key(i) == row_key(table, i)

    def test_single_column(self, table):
        key = key_function(table, columns=["word_index"])
        assert [key(i) for i in range(3)] == [(1,), (0,), (9,)]

    def test_checked_rejects_negative(self, table):
        key = key_function(table)
        with pytest.raises(IndexError):
            key(-1)
        with pytest.raises(IndexError):
            key(3)

    def test_unchecked_skips_range_check(self, table):
        key = key_function(table, checked=False)
        # plain list indexing: negative indices wrap
        assert key(-1) == key(2)

    def test_row_table_rejected(self):
        table = {"orientation": "row", "columns": ["a"], "rows": [[1]]}
        with pytest.raises(ValueError, match="row orientation"):
            key_function(table)

    def test_sortable_over_indices(self, table):
        key = key_function(table)
        assert sorted(range(3), key=key) == [1, 2, 0]

    def test_list_columns(self):
        table = {"orientation": "column", "columns": ["a", "b"], "rows": [["b", "a"], [np.int64(1), 2]]}
        key = key_function(table)
        assert key(1) == ("a", 2)
