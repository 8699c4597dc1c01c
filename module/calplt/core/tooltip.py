"""Tooltip payloads for a single calendar day."""

from __future__ import annotations

import datetime as dt
import math
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Sequence, Tuple

from .dataview import MEASURE_ROLE, Column
from .formatting import ValueFormatter, format_with_string
from .utils import to_date

NO_DATA = "No Data"

# Locale language -> date layout. Anything unlisted uses month-first.
_ISO_LANGS = {"sv", "lt", "ja", "zh", "ko", "hu", "fr-ca"}
_DOTTED_LANGS = {"de", "ru", "pl", "cs", "sk", "fi", "nb", "no", "da", "tr", "uk", "ro"}
_DAY_FIRST_LANGS = {"es", "fr", "it", "pt", "nl", "el", "id", "vi"}
_DAY_FIRST_LOCALES = {"en-gb", "en-au", "en-nz", "en-ie", "en-in", "en-za"}


@dataclass(frozen=True)
class TooltipItem:
    display_name: str
    value: Optional[str] = None
    header: Optional[str] = None


def format_date(date: dt.date, locale: Optional[str]) -> str:
    """Short numeric date for *locale* (``en-US`` -> ``1/31/2024``)."""
    tag = (locale or "en-US").replace("_", "-").lower()
    lang = tag.split("-", 1)[0]
    if tag in _ISO_LANGS or lang in _ISO_LANGS:
        return date.isoformat()
    if lang in _DOTTED_LANGS:
        return f"{date.day}.{date.month}.{date.year}"
    if tag in _DAY_FIRST_LOCALES or lang in _DAY_FIRST_LANGS:
        return f"{date.day:02d}/{date.month:02d}/{date.year}"
    return f"{date.month}/{date.day}/{date.year}"


def _has_value(data_point: Any) -> bool:
    if data_point is None:
        return False
    value = getattr(data_point, "value", None)
    try:
        return not math.isnan(float(value))
    except (TypeError, ValueError, OverflowError):
        return False


def assemble_tooltip(
    data_point: Any,
    columns: Optional[Sequence[Column]] = None,
    locale: Optional[str] = "en-US",
    display_unit: Any = None,
    precision: Any = None,
) -> List[TooltipItem]:
    """Return tooltip items for *data_point*.

    ``columns`` is zipped against ``data_point.rowdata``; extra entries on
    either side are dropped. With ``columns=None`` the point's own
    ``fields`` pairs are used. The measure column is formatted with the
    configured display unit and precision, every other column with its own
    format string only (numbers without one keep their natural form).
    """
    if not _has_value(data_point):
        return [TooltipItem(display_name=NO_DATA)]

    pairs: Iterable[Tuple[Column, Any]]
    if columns is None:
        pairs = data_point.fields
    else:
        pairs = zip(columns, data_point.rowdata)

    date = to_date(data_point.category)
    header = format_date(date, locale) if date is not None else str(data_point.category)

    items: List[TooltipItem] = []
    for column, raw in pairs:
        if column.has_role(MEASURE_ROLE):
            text = ValueFormatter(
                unit=display_unit, precision=precision, format=column.format
            ).format_value(raw)
        else:
            text = format_with_string(raw, column.format)
        items.append(
            TooltipItem(display_name=column.display_name, value=text, header=header)
        )
    return items
