"""Turn a DataView into a render-ready calendar view model.

The builder never raises on bad data. A view without a usable category or
measure series produces an empty model; short series produce points with
``None`` in the missing slots.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, List, Mapping, Optional, Sequence, Tuple

from .dataview import Column, DataView
from .formatting import ValueFormatter, format_string_for, parse_float
from .settings import DEFAULT_SETTINGS, CalendarSettings, resolve_settings
from .utils import is_date_value, to_date

logger = logging.getLogger(__name__)


@dataclass
class CalendarDataPoint:
    """One calendar day.

    ``fields`` pairs each tooltip column with its value from ``rowdata``;
    it is built once here so tooltips never have to re-zip positionally.
    """

    category: Any
    value: float
    value_text: str
    rowdata: List[Any]
    key: str
    selected: bool = False
    highlight: Optional[bool] = None
    fields: List[Tuple[Column, Any]] = field(default_factory=list, repr=False)


@dataclass
class CalendarViewModel:
    """One render pass: the day points plus resolved settings.

    ``month`` is 1-based (January == 1), unlike the 0-based month of a
    JavaScript ``Date``; ``month`` and ``year`` are ``None`` when the first
    category is not a date.
    """

    data_points: List[CalendarDataPoint] = field(default_factory=list)
    month: Optional[int] = None
    year: Optional[int] = None
    settings: CalendarSettings = DEFAULT_SETTINGS
    has_highlights: bool = False


def _at(values: Optional[Sequence[Any]], i: int) -> Any:
    if values is None or i >= len(values):
        return None
    return values[i]


def _is_usable(data_view: Optional[DataView]) -> bool:
    if data_view is None:
        return False
    category = data_view.category
    if category is None or category.source is None or not category.values:
        return False
    return data_view.measure is not None


def strip_date_field(rows: Sequence[Sequence[Any]], date_index: Optional[int]) -> List[List[Any]]:
    """Return copies of *rows* with the date field removed.

    With a declared ``date_index`` that position is dropped from every row.
    Otherwise the first field holding a runtime date is dropped; rows without
    one are copied unchanged.
    """
    stripped: List[List[Any]] = []
    for row in rows:
        row = list(row)
        if date_index is not None:
            if date_index < len(row):
                del row[date_index]
        else:
            for v, val in enumerate(row):
                if is_date_value(val):
                    del row[v]
                    break
        stripped.append(row)
    return stripped


def point_key(source: Optional[Column], category: Any, index: int) -> str:
    """Stable identity for the point at *index* with category value *category*."""
    name = source.display_name if source is not None else ""
    date = to_date(category)
    label = date.isoformat() if date is not None else ("" if category is None else str(category))
    return f"{name}={label}#{index}"


def build_view_model(
    data_view: Optional[DataView],
    overrides: Optional[Mapping[str, Mapping[str, Any]]] = None,
) -> CalendarViewModel:
    """Build the view model for one refresh.

    ``overrides`` defaults to ``data_view.objects``.
    """
    if not _is_usable(data_view):
        logger.debug("No usable category/measure series; returning empty view model")
        return CalendarViewModel()

    if overrides is None:
        overrides = data_view.objects
    settings = resolve_settings(overrides)

    category = data_view.category
    measure = data_view.measure

    first_date = to_date(category.values[0])
    month = first_date.month if first_date is not None else None
    year = first_date.year if first_date is not None else None

    date_index = data_view.category_column_index()
    table = strip_date_field(data_view.rows, date_index)
    tooltip_columns = data_view.tooltip_columns()

    labels = settings.data_labels
    value_format = ValueFormatter(unit=labels.unit, precision=labels.precision)
    text_format = ValueFormatter(
        unit=value_format.unit,
        precision=value_format.precision,
        format=format_string_for(measure.source),
    )

    has_highlights = measure.highlights is not None
    points: List[CalendarDataPoint] = []
    for i in range(max(len(category.values), len(measure.values))):
        raw = _at(measure.values, i)
        cat = _at(category.values, i)
        rowdata = table[i] if i < len(table) else []
        points.append(
            CalendarDataPoint(
                category=cat,
                value=parse_float(value_format.format_value(raw)),
                value_text=text_format.format_value(raw),
                rowdata=rowdata,
                key=point_key(category.source, cat, i),
                selected=False,
                highlight=(_at(measure.highlights, i) is not None) if has_highlights else None,
                fields=list(zip(tooltip_columns, rowdata)),
            )
        )

    logger.debug(
        "Built %d data points for %s/%s (highlights=%s)",
        len(points), month, year, has_highlights,
    )
    return CalendarViewModel(
        data_points=points,
        month=month,
        year=year,
        settings=settings,
        has_highlights=has_highlights,
    )
