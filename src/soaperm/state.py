# -------------------------------------
# soaperm runtime options
# -------------------------------------
"""
Shared options for sorting and permutation application:
- strategy: how a permutation is applied ("copy" or "cycle")
- method: how a permutation is computed ("key" or "lexsort")
- parallel: apply the permutation to columns from a thread pool
- max_workers: thread pool size (None lets the executor decide)

Explicit function arguments always win over these values.
"""
from typing import Any

# ============================================================
# Defaults
# ============================================================

DEFAULTS: dict[str, Any] = {
    "strategy": "copy",
    "method": "key",
    "parallel": False,
    "max_workers": None,
}

STRATEGIES = ("copy", "cycle")
METHODS = ("key", "lexsort")

OPTIONS: dict[str, Any] = dict(DEFAULTS)


# ============================================================
# Validation
# ============================================================

def _check(name: str, value: Any) -> None:
    if name not in DEFAULTS:
        raise ValueError(f"Unknown option: {name!r}")
    if name == "strategy" and value not in STRATEGIES:
        raise ValueError(f"Invalid strategy {value!r}, expected one of {STRATEGIES}")
    if name == "method" and value not in METHODS:
        raise ValueError(f"Invalid method {value!r}, expected one of {METHODS}")
    if name == "parallel" and not isinstance(value, bool):
        raise ValueError(f"Option 'parallel' must be a bool, got {type(value).__name__}")
    if name == "max_workers" and value is not None:
        if not isinstance(value, int) or isinstance(value, bool) or value < 1:
            raise ValueError(f"Option 'max_workers' must be None or a positive int, got {value!r}")


# ============================================================
# Accessors
# ============================================================

def set_option(name: str, value: Any) -> None:
    """Set a single option after validating it."""
    _check(name, value)
    OPTIONS[name] = value


def get_option(name: str) -> Any:
    """Get the current value of an option."""
    if name not in OPTIONS:
        raise ValueError(f"Unknown option: {name!r}")
    return OPTIONS[name]


def get_options() -> dict[str, Any]:
    """Return a copy of all current options."""
    return dict(OPTIONS)


def reset_options() -> None:
    """Restore every option to its default."""
    OPTIONS.clear()
    OPTIONS.update(DEFAULTS)


def resolve(name: str, value: Any = None) -> Any:
    """Return value if given, else the current option, validated either way."""
    if value is None:
        return get_option(name)
    _check(name, value)
    return value
