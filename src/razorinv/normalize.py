"""Value coercion for list queries.

The service wants dates as integer epoch seconds and pagination counters as
plain integers. Callers are allowed to be looser than that.
"""

from __future__ import annotations
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .errors import InvalidDateError, InvalidPaginationError

DEFAULT_COUNT = 10
DEFAULT_SKIP = 0


def normalize_date(value: Any, field: str = "date") -> Optional[int]:
    """Convert a date-like value to epoch seconds.

    Accepted: ``int``/``float`` epoch seconds, ``datetime`` (naive values are
    read as UTC), ``date`` (midnight UTC), digit strings and ISO-8601 strings.
    ``None`` and ``""`` mean "not given" and come back as ``None``. Anything
    else raises :class:`InvalidDateError`.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        raise InvalidDateError(field, value)
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            raise InvalidDateError(field, value)
        return int(value)
    if isinstance(value, datetime):
        return _epoch(value)
    if isinstance(value, date):
        return _epoch(datetime(value.year, value.month, value.day))
    if isinstance(value, str):
        text = value.strip()
        if text.isascii() and text.isdigit():
            return int(text)
        try:
            return _epoch(datetime.fromisoformat(text))
        except ValueError:
            raise InvalidDateError(field, value) from None
    raise InvalidDateError(field, value)


def _epoch(dt: datetime) -> int:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return math.floor(dt.timestamp())


def normalize_count(value: Any, default: int, field: str = "count") -> int:
    """Coerce a pagination counter.

    Non-numeric, NaN and zero/empty values fall back to ``default``.
    Fractions are truncated. Negative values raise
    :class:`InvalidPaginationError`.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        # ints stay exact; float() overflows past ~1e308
        if value < 0:
            raise InvalidPaginationError(field, value)
        return value or default
    if isinstance(value, float):
        number = value
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return default
    else:
        return default

    if not math.isfinite(number):
        return default
    if number < 0:
        raise InvalidPaginationError(field, value)
    return int(number) or default


def normalize_query(query: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
    """Normalize ``from``/``to``/``count``/``skip``, pass everything else through."""
    out = dict(query or {})
    for key in ("from", "to"):
        ts = normalize_date(out.pop(key, None), field=key)
        if ts is not None:
            out[key] = ts
    out["count"] = normalize_count(out.get("count"), DEFAULT_COUNT, field="count")
    out["skip"] = normalize_count(out.get("skip"), DEFAULT_SKIP, field="skip")
    return out
