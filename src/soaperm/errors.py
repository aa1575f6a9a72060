# -------------------------------------
# soaperm exceptions
# -------------------------------------
"""
Exception types raised by soaperm.
"""


class ContractViolation(ValueError):
    """Raised when a caller breaks a structural precondition.

    Length mismatch between a permutation and the sequence it is applied to,
    columns of unequal length in a columnar table, or an index sequence that
    is not a permutation of 0..N. These are programming errors, not data
    errors, and are never caught inside the library.
    """
