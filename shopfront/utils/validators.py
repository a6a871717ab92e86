"""Input checks shared by the forms and the sale/purchase/payment rules."""
import math
import re

_SPACES = re.compile(r"\s+")


class ValidationError(ValueError):
    """A client-side rule rejected the input; nothing was sent to the API."""


def non_empty(text) -> bool:
    return bool(text and str(text).strip())


def collapse_spaces(text) -> str:
    """Trim and squeeze inner whitespace runs to one space."""
    return _SPACES.sub(" ", text or "").strip()


def tidy_lines(text) -> str:
    """collapse_spaces() per line, dropping blank lines at either end."""
    lines = [collapse_spaces(line) for line in (text or "").splitlines()]
    return "\n".join(lines).strip("\n")


def try_parse_float(x):
    """(True, value) for a finite number, else (False, None)."""
    try:
        val = float(x)
    except (TypeError, ValueError):
        return False, None
    return (True, val) if math.isfinite(val) else (False, None)
