"""Tests for soaperm.state options."""

import pytest

from soaperm import get_option, get_options, reset_options, set_option
from soaperm import state


@pytest.fixture(autouse=True)
def _reset_state():
    reset_options()
    yield
    reset_options()


class TestOptions:
    """Tests for option accessors."""

    def test_defaults(self):
        assert get_options() == {
            "strategy": "copy",
            "method": "key",
            "parallel": False,
            "max_workers": None,
        }

    def test_set_and_get(self):
        set_option("strategy", "cycle")
        set_option("max_workers", 3)
        assert get_option("strategy") == "cycle"
        assert get_option("max_workers") == 3

    def test_reset(self):
        set_option("parallel", True)
        reset_options()
        assert get_option("parallel") is False

    def test_get_options_is_copy(self):
        opts = get_options()
        opts["strategy"] = "cycle"
        assert get_option("strategy") == "copy"

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown option"):
            set_option("colour", "red")
        with pytest.raises(ValueError, match="Unknown option"):
            get_option("colour")

    @pytest.mark.parametrize("name,value", [
        ("strategy", "shuffle"),
        ("method", "bogo"),
        ("parallel", 1),
        ("max_workers", 0),
        ("max_workers", True),
        ("max_workers", 2.5),
    ])
    def test_invalid_values(self, name, value):
        with pytest.raises(ValueError):
            set_option(name, value)


class TestResolve:
    """Tests for resolve (explicit argument vs option)."""

    def test_falls_back_to_option(self):
        set_option("method", "lexsort")
        assert state.resolve("method") == "lexsort"

    def test_explicit_wins(self):
        set_option("method", "lexsort")
        assert state.resolve("method", "key") == "key"

    def test_explicit_validated(self):
        with pytest.raises(ValueError, match="Invalid strategy"):
            state.resolve("strategy", "nope")
