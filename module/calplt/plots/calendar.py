"""CalendarArtist: render one month of a calendar view model as HTML.

The grid is plain DIVs. Each day cell carries ``data-key`` (the data
point's identity) and an inline ``opacity`` taken from the selection
state, plus a CSS hover tooltip built from the point's tooltip items.

Settings are used as given. Values the artist does not recognise
(alignment, placement, display strings) fall back to its defaults, and
``weekStartDay`` is coerced into ``0..6`` (Sunday first).
"""

from __future__ import annotations

import calendar as pycal
import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Tuple

from calplt.core.settings import CalendarSettings, ColorSettings
from calplt.core.theme import THEME
from calplt.core.tooltip import assemble_tooltip
from calplt.core.utils import esc, to_date
from calplt.core.viewmodel import CalendarDataPoint, CalendarViewModel

logger = logging.getLogger(__name__)

_ALIGN = {"left": "flex-start", "center": "center", "right": "flex-end"}
_WEEKDAY_NAMES = ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"]


def week_start(value: object) -> int:
    """Coerce a ``weekStartDay`` setting (0 = Sunday) into ``0..6``."""
    try:
        day = int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        logger.warning("Invalid weekStartDay %r, using Sunday", value)
        return 0
    if not 0 <= day <= 6:
        logger.warning("weekStartDay %r out of range, using %d", value, day % 7)
    return day % 7


def week_number(day: dt.date, use_iso: bool) -> int:
    """ISO week, or the Sunday-based week of the year where Jan 1 is week 1."""
    if use_iso:
        return day.isocalendar()[1]
    jan1 = dt.date(day.year, 1, 1)
    offset = (jan1.weekday() + 1) % 7  # days since the Sunday on/before Jan 1
    return (day.timetuple().tm_yday - 1 + offset) // 7 + 1


def _hex_to_rgb(color: object) -> Optional[Tuple[int, int, int]]:
    if not isinstance(color, str):
        return None
    color = color.lstrip("#")
    if len(color) == 3:
        color = "".join(c * 2 for c in color)
    if len(color) != 6:
        return None
    try:
        return (int(color[0:2], 16), int(color[2:4], 16), int(color[4:6], 16))
    except ValueError:
        return None


def _mix(a: str, b: str, t: float) -> str:
    """Linear RGB blend of two hex colors; falls back to *a* if unparseable."""
    ra, rb = _hex_to_rgb(a), _hex_to_rgb(b)
    if ra is None or rb is None:
        return a
    t = max(0.0, min(1.0, t))
    r, g, bl = (round(x + (y - x) * t) for x, y in zip(ra, rb))
    return f"#{r:02x}{g:02x}{bl:02x}"


def _color(value: object, fallback: str) -> str:
    """Return *value* if it is a non-empty color string, else *fallback*."""
    if value is None or value == "":
        return fallback
    if not isinstance(value, str) or not value.strip():
        logger.warning("Ignoring color setting %r, using %s", value, fallback)
        return fallback
    return value


def _number(value: object) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError, OverflowError):
        return None


@dataclass
class ColorScale:
    """Sequential or diverging scale over the data range."""

    colors: ColorSettings
    values: List[float] = field(default_factory=list)

    def __post_init__(self) -> None:
        c = self.colors
        lo = _number(c.min_value)
        hi = _number(c.max_value)
        finite = [v for v in self.values if v == v]
        self.vmin = lo if lo is not None else (min(finite) if finite else 0.0)
        self.vmax = hi if hi is not None else (max(finite) if finite else 1.0)
        if not self.vmax > self.vmin:
            self.vmax = self.vmin + 1.0
        mid = _number(c.center_value)
        self.vcenter = mid if mid is not None else (self.vmin + self.vmax) / 2
        self.start = _color(c.start_color, THEME["scale_start"])
        self.center = _color(c.center_color, THEME["scale_center"])
        self.end = _color(c.end_color, THEME["scale_end"])
        self.no_data = _color(c.no_data_color, THEME["no_data"])

    def color_for(self, value: float) -> str:
        if value != value:  # NaN
            return self.no_data
        if not self.colors.diverging:
            return _mix(self.start, self.end, (value - self.vmin) / (self.vmax - self.vmin))
        if value <= self.vcenter:
            span = self.vcenter - self.vmin
            return _mix(self.start, self.center, (value - self.vmin) / span if span > 0 else 1.0)
        span = self.vmax - self.vcenter
        return _mix(self.center, self.end, (value - self.vcenter) / span if span > 0 else 1.0)


@dataclass
class CalendarArtist:
    """Month grid for a ``CalendarViewModel``.

    ``opacities`` maps data-point keys to cell opacity (missing keys render
    at full opacity). ``locale`` is used for tooltip dates.
    """

    view_model: CalendarViewModel
    opacities: Mapping[str, float] = field(default_factory=dict)
    locale: str = "en-US"
    calendar_id: str = "calendar"

    def render_html(self) -> str:
        """Return HTML for the month grid."""
        vm = self.view_model
        if vm.month is None or vm.year is None:
            return (
                '<div class="calplt-calendar calplt-calendar--empty" '
                f'data-calendar-id="{esc(self.calendar_id)}">No data</div>'
            )

        settings = vm.settings
        layout = settings.calendar
        weeks_cfg = settings.week_numbers
        first_weekday = week_start(layout.week_start_day)
        by_date = self._points_by_date()
        scale = ColorScale(settings.calendar_colors, [p.value for p in by_date.values()])

        # Python's Calendar counts weekdays from Monday.
        cal = pycal.Calendar(firstweekday=(first_weekday - 1) % 7)
        weeks = cal.monthdatescalendar(vm.year, vm.month)
        show_weeks = bool(weeks_cfg.show)
        weeks_right = show_weeks and weeks_cfg.placement == "right"
        n_cols = 7 + (1 if show_weeks else 0)
        grid = f"grid-template-columns: repeat({n_cols}, minmax(0, 1fr));"

        lines: List[str] = []
        lines.append(
            f'<div class="calplt-calendar" data-calendar-id="{esc(self.calendar_id)}" '
            f'style="color: {esc(layout.font_color or THEME["foreground"])}; '
            f'font-size: {esc(layout.text_size)}pt; font-weight: {esc(layout.font_weight)};">'
        )
        lines.append(
            f'  <div class="calplt-calendar-title" '
            f'style="justify-content: {self._align(layout.month_alignment, "center")};">'
            f"{esc(self._title(layout.month_year_display))}</div>"
        )

        header = [
            f'<div class="calplt-calendar-cell calplt-calendar-cell--weekday" '
            f'style="justify-content: {self._align(layout.week_alignment, "center")};">'
            f"{esc(self._weekday_label((first_weekday + i) % 7, layout.weekday_format))}</div>"
            for i in range(7)
        ]
        if show_weeks:
            corner = '<div class="calplt-calendar-cell calplt-calendar-cell--corner"></div>'
            header = header + [corner] if weeks_right else [corner] + header
        lines.append(f'  <div class="calplt-calendar-row calplt-calendar-row--header" style="{grid}">')
        lines.extend("    " + h for h in header)
        lines.append("  </div>")

        for week in weeks:
            cells = [self._day_cell(day, by_date.get(day), scale) for day in week]
            if show_weeks:
                in_month = [d for d in week if d.month == vm.month] or week
                num = week_number(in_month[0], bool(weeks_cfg.use_iso))
                wk = (
                    '<div class="calplt-calendar-cell calplt-calendar-cell--week" '
                    f'style="justify-content: {self._align(weeks_cfg.alignment, "center")}; '
                    f'color: {esc(weeks_cfg.font_color or THEME["muted"])}; '
                    f'font-size: {esc(weeks_cfg.text_size)}pt; '
                    f'font-weight: {esc(weeks_cfg.font_weight)};">{num}</div>'
                )
                cells = cells + [wk] if weeks_right else [wk] + cells
            lines.append(f'  <div class="calplt-calendar-row" style="{grid}">')
            lines.extend("    " + c for c in cells)
            lines.append("  </div>")

        lines.append("</div>")
        return "\n".join(lines)

    # Internal helpers -----------------------------------------------
    def _points_by_date(self) -> Dict[dt.date, CalendarDataPoint]:
        out: Dict[dt.date, CalendarDataPoint] = {}
        for p in self.view_model.data_points:
            day = to_date(p.category)
            if day is not None and day not in out:
                out[day] = p
        return out

    @staticmethod
    def _align(value: object, default: str) -> str:
        return _ALIGN.get(str(value), _ALIGN[default])

    def _title(self, display: object) -> str:
        vm = self.view_model
        name = pycal.month_name[vm.month]
        if display == "month":
            return name
        if display == "yearMonth":
            return f"{vm.year} {name}"
        return f"{name} {vm.year}"

    @staticmethod
    def _weekday_label(day: int, fmt: object) -> str:
        name = _WEEKDAY_NAMES[day]
        if fmt == "long":
            return name
        if fmt in ("narrow", "letter"):
            return name[0]
        return name[:3]

    def _day_cell(
        self, day: dt.date, point: Optional[CalendarDataPoint], scale: ColorScale
    ) -> str:
        settings: CalendarSettings = self.view_model.settings
        layout = settings.calendar
        labels = settings.data_labels
        border = (
            f"border: {esc(layout.border_width)}px solid "
            f"{esc(layout.border_color or THEME['border'])}"
        )
        if day.month != self.view_model.month:
            return (
                '<div class="calplt-calendar-cell calplt-calendar-cell--outside" '
                f'style="{border};"></div>'
            )

        day_html = (
            '<span class="calplt-calendar-day" '
            f'style="align-self: {self._align(layout.day_alignment, "right")};">{day.day}</span>'
        )
        if point is None:
            return (
                '<div class="calplt-calendar-cell calplt-calendar-cell--day" '
                f'data-date="{day.isoformat()}" '
                f'style="{border}; background-color: {esc(scale.no_data)};">{day_html}</div>'
            )

        opacity = self.opacities.get(point.key, 1.0)
        label_html = ""
        if labels.show:
            label_html = (
                '<span class="calplt-calendar-label" '
                f'style="align-self: {self._align(labels.alignment, "center")}; '
                f'color: {esc(labels.font_color or THEME["foreground"])}; '
                f'font-size: {esc(labels.text_size)}pt; '
                f'font-weight: {esc(labels.font_weight)};">{esc(point.value_text)}</span>'
            )
        items = assemble_tooltip(point, None, self.locale, labels.unit, labels.precision)
        tooltip_lines = []
        if items and items[0].header:
            tooltip_lines.append(
                f'<span class="calplt-calendar-tooltip-header">{esc(items[0].header)}</span>'
            )
        for item in items:
            text = item.display_name if item.value is None else f"{item.display_name}: {item.value}"
            tooltip_lines.append(f'<span class="calplt-calendar-tooltip-item">{esc(text)}</span>')

        classes = "calplt-calendar-cell calplt-calendar-cell--day calplt-calendar-cell--value"
        if point.selected:
            classes += " calplt-calendar-cell--selected"
        return (
            f'<div class="{classes}" data-key="{esc(point.key)}" '
            f'data-date="{day.isoformat()}" '
            f'style="{border}; background-color: {esc(scale.color_for(point.value))}; '
            f'opacity: {opacity};">'
            f"{day_html}{label_html}"
            f'<div class="calplt-calendar-tooltip">{"".join(tooltip_lines)}</div>'
            "</div>"
        )


def render_calendar(
    view_model: CalendarViewModel,
    opacities: Mapping[str, float],
    locale: str = "en-US",
) -> str:
    """Default rendering collaborator for ``CalendarVisual``."""
    return CalendarArtist(view_model=view_model, opacities=opacities, locale=locale).render_html()
