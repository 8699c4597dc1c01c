"""Number formatting with display units and precision.

A ``ValueFormatter`` combines three knobs:

- ``unit``: display unit. The unit is picked from the magnitude of this
  setting: ``0`` and ``1`` mean no scaling, ``1e3`` / ``1e6`` / ``1e9`` /
  ``1e12`` scale to K / M / bn / T.
- ``precision``: decimal places. ``None`` takes the decimals from the format
  string, or up to two decimals with trailing zeros trimmed.
- ``format``: an Excel-style column format string such as ``"0.00"``,
  ``"#,0"``, ``"$#,0.00"`` or ``"0.0%"``.

``parse_float()`` mirrors a lenient "leading number" parse: it reads the
numeric prefix of a formatted string and ignores any unit suffix.
"""

from __future__ import annotations

import logging
import math
import numbers
import re
from dataclasses import dataclass
from typing import Any, Mapping

from .utils import is_blank

logger = logging.getLogger(__name__)

BLANK_TEXT = "(Blank)"

# (scale, suffix), largest first.
DISPLAY_UNITS = [
    (1e12, "T"),
    (1e9, "bn"),
    (1e6, "M"),
    (1e3, "K"),
]

_LEADING_FLOAT = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
_NUMBER_SECTION = re.compile(r"[#0][#0,]*(\.[#0]*)?")


def parse_float(text: Any) -> float:
    """Return the leading number in *text*, or NaN if there is none.

    ``"1.5K"`` parses to ``1.5`` and ``"(Blank)"`` to NaN.
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        try:
            return float(text)
        except OverflowError:
            return math.inf if text > 0 else -math.inf
    m = _LEADING_FLOAT.match(str(text))
    if not m:
        return math.nan
    return float(m.group(0))


@dataclass(frozen=True)
class FormatPattern:
    """Parsed pieces of a column format string."""

    prefix: str = ""
    suffix: str = ""
    decimals: int | None = None
    grouping: bool = False
    percent: bool = False


def parse_format(fmt: str | None) -> FormatPattern:
    """Split *fmt* into literal prefix/suffix and number-section options.

    Only the first ``;`` section is honoured. Strings with no number section
    (e.g. ``"General"``) yield an empty pattern.
    """
    if not fmt:
        return FormatPattern()
    section = fmt.split(";", 1)[0]
    m = _NUMBER_SECTION.search(section)
    if not m:
        return FormatPattern()
    number = m.group(0)
    prefix = section[: m.start()].replace("\\", "").replace('"', "")
    suffix = section[m.end():].replace("\\", "").replace('"', "")
    decimals = len(m.group(1)) - 1 if m.group(1) else 0
    return FormatPattern(
        prefix=prefix,
        suffix=suffix,
        decimals=decimals,
        grouping="," in number,
        percent="%" in suffix,
    )


def format_string_for(column: Any) -> str | None:
    """Return the format string declared by a column (or ``None``)."""
    if column is None:
        return None
    if isinstance(column, Mapping):
        return column.get("format")
    return getattr(column, "format", None)


def display_unit(unit: Any) -> tuple[float, str]:
    """Return ``(scale, suffix)`` for a display-unit setting."""
    if is_blank(unit) or isinstance(unit, bool):
        return 1.0, ""
    try:
        magnitude = abs(float(unit))
    except (TypeError, ValueError):
        logger.debug("Ignoring non-numeric display unit %r", unit)
        return 1.0, ""
    for scale, suffix in DISPLAY_UNITS:
        if magnitude >= scale:
            return scale, suffix
    return 1.0, ""


@dataclass(frozen=True)
class ValueFormatter:
    """Format numbers with a display unit, precision and format string."""

    unit: float | None = None
    precision: int | None = None
    format: str | None = None

    def format_value(self, value: Any) -> str:
        """Return the display string for *value*.

        Blank values render as ``"(Blank)"``. Non-numeric values are passed
        through as text.
        """
        if is_blank(value):
            return BLANK_TEXT
        if isinstance(value, bool):
            return str(value)
        try:
            number = float(value)
        except (TypeError, ValueError, OverflowError):
            return str(value)
        if not math.isfinite(number):
            return str(number)

        pattern = parse_format(self.format)
        if pattern.percent:
            number *= 100

        scale, unit_suffix = display_unit(self.unit)
        scaled = number / scale

        decimals = self._decimals(pattern)
        if decimals is None:
            body = f"{scaled:,.2f}" if pattern.grouping else f"{scaled:.2f}"
            if "." in body:
                body = body.rstrip("0").rstrip(".")
        elif pattern.grouping:
            body = f"{scaled:,.{decimals}f}"
        else:
            body = f"{scaled:.{decimals}f}"

        if body.startswith("-") and pattern.prefix:
            return f"-{pattern.prefix}{body[1:]}{unit_suffix}{pattern.suffix}"
        return f"{pattern.prefix}{body}{unit_suffix}{pattern.suffix}"

    __call__ = format_value

    def _decimals(self, pattern: FormatPattern) -> int | None:
        if not is_blank(self.precision):
            try:
                return max(0, int(self.precision))
            except (TypeError, ValueError, OverflowError):
                logger.debug("Ignoring non-integer precision %r", self.precision)
        return pattern.decimals


def general_number(value: Any) -> str:
    """Natural text for a number, like a spreadsheet's General format.

    Integral values print without a decimal point; other floats use their
    shortest round-tripping form (``3.14159`` stays ``"3.14159"``).
    """
    if isinstance(value, int):
        return str(value)
    number = float(value)
    if math.isfinite(number) and number.is_integer() and abs(number) < 1e16:
        return str(int(number))
    return repr(number)


def format_with_string(value: Any, fmt: str | None) -> str:
    """Format *value* with a column format string only (no unit scaling).

    Without a format string numbers keep their natural form.
    """
    if not fmt and isinstance(value, numbers.Real) and not isinstance(value, bool):
        if not is_blank(value):
            return general_number(value)
    return ValueFormatter(unit=1, precision=None, format=fmt).format_value(value)
