"""Display settings: typed groups, defaults and override resolution.

Settings come in four groups, each stored by the host under its own object
name (``calendar``, ``calendarColors``, ``dataLabels``, ``showWeeks``).
Every field maps to a host property name through dataclass metadata, so
the rest of the library only ever touches typed attributes.

Resolution is a pure merge: a host value wins whenever the property key is
present, even if the value is ``None`` or ``False``. Values are not range
checked here; consumers must tolerate odd values themselves.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional

logger = logging.getLogger(__name__)


def _prop(name: str, default: Any) -> Any:
    """Dataclass field bound to host property *name*."""
    return field(default=default, metadata={"property": name})


def fill_color(value: Any) -> Any:
    """Unwrap a host fill (``{"solid": {"color": c}}``) into ``c``.

    Anything that is not shaped like a fill is returned unchanged.
    """
    if isinstance(value, Mapping) and "solid" in value:
        solid = value.get("solid")
        if isinstance(solid, Mapping):
            return solid.get("color")
        return None
    return value


@dataclass(frozen=True)
class CalendarLayoutSettings:
    """Calendar layout and typography (host object ``calendar``)."""

    month_year_display: str = _prop("monthYearDisplay", "monthYear")
    weekday_format: str = _prop("weekdayFormat", "short")
    week_start_day: int = _prop("weekStartDay", 0)
    border_width: float = _prop("borderWidth", 1)
    border_color: Optional[str] = _prop("borderColor", "#000")
    font_color: Optional[str] = _prop("fontColor", "#000")
    font_weight: int = _prop("fontWeight", 100)
    text_size: float = _prop("textSize", 10)
    month_alignment: str = _prop("monthAlignment", "center")
    week_alignment: str = _prop("weekAlignment", "center")
    day_alignment: str = _prop("dayAlignment", "right")


@dataclass(frozen=True)
class ColorSettings:
    """Sequential / diverging color scale (host object ``calendarColors``)."""

    diverging: bool = _prop("diverging", False)
    start_color: Optional[str] = _prop("startColor", None)
    center_color: Optional[str] = _prop("centerColor", None)
    end_color: Optional[str] = _prop("endColor", None)
    min_value: Optional[float] = _prop("minValue", None)
    center_value: Optional[float] = _prop("centerValue", None)
    max_value: Optional[float] = _prop("maxValue", None)
    no_data_color: Optional[str] = _prop("noDataColor", None)


@dataclass(frozen=True)
class DataLabelSettings:
    """Day value labels (host object ``dataLabels``)."""

    show: bool = _prop("show", True)
    unit: Optional[float] = _prop("unit", 0)
    precision: Optional[int] = _prop("precision", None)
    font_color: Optional[str] = _prop("fontColor", "#000")
    font_weight: int = _prop("fontWeight", 100)
    text_size: float = _prop("textSize", 8)
    alignment: str = _prop("alignment", "center")


@dataclass(frozen=True)
class WeekNumberSettings:
    """Week number column (host object ``showWeeks``)."""

    show: bool = _prop("show", False)
    use_iso: bool = _prop("useIso", False)
    placement: str = _prop("placement", "left")
    font_color: Optional[str] = _prop("fontColor", "#000")
    font_weight: int = _prop("fontWeight", 100)
    text_size: float = _prop("textSize", 8)
    alignment: str = _prop("alignment", "center")


@dataclass(frozen=True)
class CalendarSettings:
    """Fully resolved settings for one refresh."""

    calendar: CalendarLayoutSettings = _prop("calendar", CalendarLayoutSettings())
    calendar_colors: ColorSettings = _prop("calendarColors", ColorSettings())
    data_labels: DataLabelSettings = _prop("dataLabels", DataLabelSettings())
    week_numbers: WeekNumberSettings = _prop("showWeeks", WeekNumberSettings())


DEFAULT_SETTINGS = CalendarSettings()

# Host object names in the order the formatting pane lists them.
OBJECT_NAMES = ("calendar", "showWeeks", "calendarColors", "dataLabels")


def _is_color_field(name: str) -> bool:
    return name.endswith("_color")


def _resolve_group(group: Any, overrides: Optional[Mapping[str, Any]]) -> Any:
    overrides = overrides or {}
    changes: Dict[str, Any] = {}
    for f in fields(group):
        prop = f.metadata["property"]
        if prop not in overrides:
            continue
        value = overrides[prop]
        changes[f.name] = fill_color(value) if _is_color_field(f.name) else value
    return replace(group, **changes)


def resolve_settings(
    overrides_by_group: Optional[Mapping[str, Mapping[str, Any]]] = None,
    defaults: CalendarSettings = DEFAULT_SETTINGS,
) -> CalendarSettings:
    """Merge host overrides onto *defaults* and return new settings.

    ``overrides_by_group`` maps a host object name (``"calendar"``,
    ``"calendarColors"``, ``"dataLabels"``, ``"showWeeks"``) to a mapping of
    host property names to values. Unknown groups and properties are
    ignored.
    """
    overrides_by_group = overrides_by_group or {}
    resolved: Dict[str, Any] = {}
    for f in fields(defaults):
        object_name = f.metadata["property"]
        group_overrides = overrides_by_group.get(object_name)
        if group_overrides is not None and not isinstance(group_overrides, Mapping):
            logger.debug("Ignoring non-mapping overrides for %r", object_name)
            group_overrides = None
        resolved[f.name] = _resolve_group(getattr(defaults, f.name), group_overrides)
    return CalendarSettings(**resolved)


def group_properties(group: Any) -> Dict[str, Any]:
    """Return ``{host property name: value}`` for a settings group."""
    return {f.metadata["property"]: getattr(group, f.name) for f in fields(group)}


@dataclass(frozen=True)
class ObjectInstance:
    """One entry of the host's formatting-pane enumeration."""

    object_name: str
    properties: Dict[str, Any]
    selector: Any = None


def enumerate_object_instances(
    settings: CalendarSettings, object_name: str
) -> List[ObjectInstance]:
    """Report resolved values of one host object for the formatting pane.

    ``centerColor`` is reported as ``None`` unless the scale is diverging.
    Unknown object names produce an empty list.
    """
    for f in fields(settings):
        if f.metadata["property"] != object_name:
            continue
        properties = group_properties(getattr(settings, f.name))
        if object_name == "calendarColors" and not settings.calendar_colors.diverging:
            properties["centerColor"] = None
        return [ObjectInstance(object_name=object_name, properties=properties)]
    return []
