"""Shared utilities.

``esc()`` HTML-escapes any data-supplied string before it is inserted into
text nodes or attribute values. The date helpers give every component the
same lenient reading of category values: anything pandas can parse is a
date, everything else is ``None``.
"""

from __future__ import annotations

import datetime as dt
import html
import math
from typing import Any

import pandas as pd


def esc(value: Any) -> str:
    """Return an HTML-escaped string representation of *value*.

    Escapes ``&``, ``<``, ``>``, and both quote styles so the result is safe
    for element text or attribute values. ``None`` becomes ``""``.
    """
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


def is_blank(value: Any) -> bool:
    """Return True for ``None``, NaN, ``NaT`` and ``pd.NA``."""
    if value is None:
        return True
    # pd.isna on list-likes returns an array; those are never blank scalars.
    if not pd.api.types.is_scalar(value):
        return False
    return bool(pd.isna(value))


def is_date_value(value: Any) -> bool:
    """Return True if *value* is a runtime date object (not a date string)."""
    if isinstance(value, pd.Timestamp):
        return value is not pd.NaT
    return isinstance(value, (dt.date, dt.datetime))


def to_date(value: Any) -> dt.date | None:
    """Parse *value* into a ``date``; return None when it is not a date."""
    if is_blank(value) or isinstance(value, bool):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    if isinstance(value, (int, float)) and not math.isfinite(value):
        return None
    try:
        ts = pd.to_datetime(value, errors="coerce")
    except (TypeError, ValueError, OverflowError):
        return None
    if ts is None or ts is pd.NaT or not isinstance(ts, pd.Timestamp):
        return None
    return ts.date()
