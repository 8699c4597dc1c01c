"""Public API: visual factory and conveniences."""

from __future__ import annotations

from typing import Optional

import pandas as pd

from calplt.core.dataview import DataView
from calplt.core.visual import CalendarVisual, Renderer


def visual(
    renderer: Optional[Renderer] = None,
    locale: str = "en-US",
    allow_interactions: bool = True,
) -> CalendarVisual:
    """Return a new CalendarVisual.

    ``renderer`` may replace the default HTML artist; see ``CalendarVisual``.
    """
    return CalendarVisual(
        renderer=renderer, locale=locale, allow_interactions=allow_interactions
    )


def calendar(df: pd.DataFrame, locale: str = "en-US", **kwargs) -> CalendarVisual:
    """Build a visual and update it once from *df*.

    Keyword arguments go to ``DataView.from_frame`` (``category``,
    ``measure``, ``highlight``, ``objects``, ``formats``, ``labels``).
    """
    vis = visual(locale=locale)
    vis.update(DataView.from_frame(df, **kwargs))
    return vis


# Expose so callers can do: from calplt import plt; plt.calendar(df)
plt = type(
    "plt",
    (),
    {"visual": staticmethod(visual), "calendar": staticmethod(calendar)},
)()
