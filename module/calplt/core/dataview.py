"""Tabular input handed to the calendar on every refresh.

A ``DataView`` carries the same data twice, the way analytics hosts do:

- ``categories`` / ``values``: column-oriented series for the date
  dimension and the bound measure (optionally with a highlight
  sub-series from cross-filtering).
- ``columns`` / ``rows``: the full row table, including the date and all
  auxiliary columns, used for tooltips.

``DataView.from_frame`` builds both views from a tidy pandas DataFrame.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence

import pandas as pd

CATEGORY_ROLE = "category"
MEASURE_ROLE = "measure"


@dataclass(frozen=True)
class Column:
    """Column metadata: label, data roles and optional format string."""

    display_name: str
    roles: Mapping[str, bool] = field(default_factory=dict)
    format: Optional[str] = None

    def has_role(self, role: str) -> bool:
        return bool(self.roles.get(role))


@dataclass
class CategorySeries:
    source: Optional[Column]
    values: List[Any] = field(default_factory=list)


@dataclass
class MeasureSeries:
    source: Optional[Column]
    values: List[Any] = field(default_factory=list)
    highlights: Optional[List[Any]] = None


@dataclass
class DataView:
    """Categorical series, row table and per-group setting overrides."""

    categories: List[CategorySeries] = field(default_factory=list)
    values: List[MeasureSeries] = field(default_factory=list)
    columns: List[Column] = field(default_factory=list)
    rows: List[List[Any]] = field(default_factory=list)
    objects: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    @property
    def category(self) -> Optional[CategorySeries]:
        return self.categories[0] if self.categories else None

    @property
    def measure(self) -> Optional[MeasureSeries]:
        return self.values[0] if self.values else None

    def category_column_index(self) -> Optional[int]:
        """Index of the declared date column in ``columns``, if any."""
        for i, col in enumerate(self.columns):
            if col.has_role(CATEGORY_ROLE):
                return i
        return None

    def tooltip_columns(self) -> List[Column]:
        """Row-table columns other than the date column, in table order."""
        return [c for c in self.columns if not c.has_role(CATEGORY_ROLE)]

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        category: str = "date",
        measure: str = "value",
        highlight: Optional[str] = None,
        objects: Optional[Mapping[str, Mapping[str, Any]]] = None,
        formats: Optional[Mapping[str, str]] = None,
        labels: Optional[Mapping[str, str]] = None,
    ) -> "DataView":
        """Build a view from *df*.

        Every DataFrame column except ``highlight`` becomes a table column.
        ``category`` gets the category role and is converted to Timestamps,
        ``measure`` gets the measure role. ``highlight`` names an optional
        column whose non-null entries mark highlighted rows. ``formats`` and
        ``labels`` map column names to format strings and display names.
        """
        for name in (category, measure):
            if name not in df.columns:
                raise ValueError(f"DataFrame must contain a '{name}' column")
        if highlight is not None and highlight not in df.columns:
            raise ValueError(f"Highlight column '{highlight}' is not in the DataFrame")

        formats = dict(formats or {})
        labels = dict(labels or {})
        frame = df.copy()
        frame[category] = pd.to_datetime(frame[category], errors="coerce")

        table_names = [c for c in frame.columns if c != highlight]
        columns: List[Column] = []
        for name in table_names:
            roles: Dict[str, bool] = {}
            if name == category:
                roles[CATEGORY_ROLE] = True
            if name == measure:
                roles[MEASURE_ROLE] = True
            columns.append(
                Column(
                    display_name=str(labels.get(name, name)),
                    roles=roles,
                    format=formats.get(name),
                )
            )
        by_name = dict(zip(table_names, columns))

        rows = [
            [_native(v) for v in record]
            for record in frame[table_names].itertuples(index=False, name=None)
        ]
        highlights = (
            [_native(v) for v in frame[highlight]] if highlight is not None else None
        )
        return cls(
            categories=[
                CategorySeries(
                    source=by_name[category],
                    values=[_native(v) for v in frame[category]],
                )
            ],
            values=[
                MeasureSeries(
                    source=by_name[measure],
                    values=[_native(v) for v in frame[measure]],
                    highlights=highlights,
                )
            ],
            columns=columns,
            rows=rows,
            objects={k: dict(v) for k, v in (objects or {}).items()},
        )


def _native(value: Any) -> Any:
    """Turn pandas/numpy missing markers into ``None`` and unwrap scalars."""
    if value is None or value is pd.NaT:
        return None
    if pd.api.types.is_scalar(value) and pd.isna(value):
        return None
    if hasattr(value, "item") and not isinstance(value, pd.Timestamp):
        try:
            return value.item()
        except (ValueError, AttributeError):
            return value
    return value


def columns_from(sources: Sequence[Mapping[str, Any]]) -> List[Column]:
    """Build ``Column`` objects from host-style metadata dicts.

    Accepts ``{"displayName": ..., "roles": {...}, "format": ...}``.
    """
    return [
        Column(
            display_name=str(s.get("displayName", "")),
            roles=dict(s.get("roles") or {}),
            format=s.get("format"),
        )
        for s in sources
    ]
