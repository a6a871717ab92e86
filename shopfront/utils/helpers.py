# utils/helpers.py
from datetime import date, datetime
import logging
from typing import Any, Union, Optional

NumberLike = Union[float, int, str]

_log = logging.getLogger(__name__)


def today_str() -> str:
    """Return today's date as ISO string (YYYY-MM-DD)."""
    return date.today().isoformat()


def now_iso() -> str:
    """Timestamp sent with new sales (local time, seconds precision)."""
    return datetime.now().replace(microsecond=0).isoformat()


def parse_money(v: Any, default: float = 0.0) -> float:
    """
    Parse a monetary value coming off the wire.

    The API sends money as strings ("1200.00"); blanks, None and garbage
    fall back to `default` instead of raising.
    """
    if v is None:
        return default
    if isinstance(v, (int, float)):
        return float(v)
    text = str(v).strip().replace(",", "")
    if not text:
        return default
    try:
        return float(text)
    except ValueError:
        _log.debug("parse_money: failed to parse %r", v)
        return default


def parse_int(v: Any, default: int = 0) -> int:
    try:
        return int(float(v))
    except (TypeError, ValueError):
        return default


def parse_date(v: Any) -> Optional[date]:
    """
    Date part of an ISO date/datetime string ("2025-12-18" or
    "2025-12-18T10:15:00Z"). Returns None when unparseable.
    """
    if not v:
        return None
    if isinstance(v, datetime):
        return v.date()
    if isinstance(v, date):
        return v
    text = str(v).strip()
    try:
        return date.fromisoformat(text[:10])
    except ValueError:
        return None


def fmt_date(v: Any) -> str:
    d = parse_date(v)
    return d.strftime("%d %b %Y") if d else "-"


def fmt_datetime(v: Any) -> str:
    """Medium date + short time, e.g. '18 Dec 2025, 10:15'."""
    if not v:
        return "-"
    text = str(v).strip().replace("Z", "+00:00")
    try:
        dt = datetime.fromisoformat(text)
    except ValueError:
        return fmt_date(v)
    return dt.strftime("%d %b %Y, %H:%M")


def fmt_money(
    v: NumberLike,
    places: int = 2,
    *,
    strict: bool = False,
    sentinel: Optional[str] = None,
) -> str:
    """
    Format a number as money with thousands separators and a fixed number of decimals.

    Behavior on parse failure:
      - By default (strict=False, sentinel=None), returns str(v).
      - If `sentinel` is provided (e.g., "N/A"), returns that sentinel instead.
      - If `strict=True`, raises ValueError on parse failures.
    """
    try:
        x = float(v)
    except Exception as e:
        _log.debug("fmt_money: failed to parse %r as float: %s", v, e)
        if strict:
            raise ValueError(f"Could not parse {v!r} as a number.") from e
        return str(sentinel) if sentinel is not None else str(v)
    return f"{x:,.{places}f}"


def fmt_currency(v: NumberLike, symbol: Optional[str] = None) -> str:
    """fmt_money prefixed with the shop's currency symbol."""
    if symbol is None:
        from ..config import SETTINGS  # settings can change at runtime
        symbol = SETTINGS.currency_symbol
    text = fmt_money(v, sentinel="0.00")
    if text.startswith("-"):
        return f"-{symbol}{text[1:]}"
    return f"{symbol}{text}"
