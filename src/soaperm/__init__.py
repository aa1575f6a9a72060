# -------------------------------------
# soaperm - sort structure-of-arrays tables by permutation
# -------------------------------------
"""
Sort records stored one column per field by computing a single permutation
from a composite key and applying it to every column.

This package provides:
- Records and row-oriented reference sorting (records)
- Dict-based row/column/arrow tables (table)
- Key extraction (keys)
- Permutation computation (permutation)
- Permutation application, copy and in-place (apply)
- Whole-table sorting (sort)
- Seeded equivalence checks against the row reference (oracle)
- Runtime options (state)

Imports are lazy, so importing soaperm does not load numba or pyarrow.
Use: from soaperm import table_sort, Permutation, etc.
"""

__all__ = [
    # errors
    "ContractViolation",
    # records
    "Record",
    "FIELDS",
    "FIELD_DTYPES",
    "records_sort",
    "records_to_table",
    "records_to_columns",
    "table_to_records",
    # table
    "table_orientation",
    "table_nrows",
    "table_validate",
    "table_to_arrow",
    "table_column",
    "table_column_index",
    # keys
    "row_key",
    "key_function",
    # permutation
    "Permutation",
    "is_permutation",
    "permutation_from_indices",
    "identity_permutation",
    "permutation_by_key",
    "permutation_lexsort",
    # apply
    "apply_permutation",
    "apply_permutation_cycles",
    "table_apply_permutation",
    # sort
    "table_permutation",
    "table_sort",
    # oracle
    "sample_fields",
    "new_records",
    "new_columns",
    "assert_aligned",
    "check_sort_equivalence",
    # state
    "set_option",
    "get_option",
    "get_options",
    "reset_options",
]

# Lazy import mapping: attribute -> (module, name)
_LAZY_IMPORTS = {
    # errors
    "ContractViolation": (".errors", "ContractViolation"),
    # records
    "Record": (".records", "Record"),
    "FIELDS": (".records", "FIELDS"),
    "FIELD_DTYPES": (".records", "FIELD_DTYPES"),
    "records_sort": (".records", "records_sort"),
    "records_to_table": (".records", "records_to_table"),
    "records_to_columns": (".records", "records_to_columns"),
    "table_to_records": (".records", "table_to_records"),
    # table
    "table_orientation": (".table", "table_orientation"),
    "table_nrows": (".table", "table_nrows"),
    "table_validate": (".table", "table_validate"),
    "table_to_arrow": (".table", "table_to_arrow"),
    "table_column": (".table", "table_column"),
    "table_column_index": (".table", "table_column_index"),
    # keys
    "row_key": (".keys", "row_key"),
    "key_function": (".keys", "key_function"),
    # permutation
    "Permutation": (".permutation", "Permutation"),
    "is_permutation": (".permutation", "is_permutation"),
    "permutation_from_indices": (".permutation", "permutation_from_indices"),
    "identity_permutation": (".permutation", "identity_permutation"),
    "permutation_by_key": (".permutation", "permutation_by_key"),
    "permutation_lexsort": (".permutation", "permutation_lexsort"),
    # apply
    "apply_permutation": (".apply", "apply_permutation"),
    "apply_permutation_cycles": (".apply", "apply_permutation_cycles"),
    "table_apply_permutation": (".apply", "table_apply_permutation"),
    # sort
    "table_permutation": (".sort", "table_permutation"),
    "table_sort": (".sort", "table_sort"),
    # oracle
    "sample_fields": (".oracle", "sample_fields"),
    "new_records": (".oracle", "new_records"),
    "new_columns": (".oracle", "new_columns"),
    "assert_aligned": (".oracle", "assert_aligned"),
    "check_sort_equivalence": (".oracle", "check_sort_equivalence"),
    # state
    "set_option": (".state", "set_option"),
    "get_option": (".state", "get_option"),
    "get_options": (".state", "get_options"),
    "reset_options": (".state", "reset_options"),
}


def __getattr__(name: str):
    if name in _LAZY_IMPORTS:
        module_name, attr_name = _LAZY_IMPORTS[name]
        from importlib import import_module
        module = import_module(module_name, __package__)
        return getattr(module, attr_name)
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
