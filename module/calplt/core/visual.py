"""CalendarVisual: the per-refresh driver.

On every ``update`` the visual resolves settings, builds a fresh view
model, rebinds the selection behavior to the new points and renders. The
host then feeds interaction events (``click``, ``click_clear_catcher``)
and asks for tooltips and formatting-pane values between refreshes.

Everything runs synchronously; an update always completes before the next
event is handled.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Mapping, Optional

from .dataview import DataView
from .figure import Figure
from .settings import CalendarSettings, ObjectInstance, enumerate_object_instances
from .state import SelectionBehavior
from .tooltip import TooltipItem, assemble_tooltip
from .viewmodel import CalendarDataPoint, CalendarViewModel, build_view_model

logger = logging.getLogger(__name__)

Renderer = Callable[[CalendarViewModel, Mapping[str, float], str], str]


def _default_renderer(
    view_model: CalendarViewModel, opacities: Mapping[str, float], locale: str
) -> str:
    # Imported lazily: plots depends on core.
    from calplt.plots.calendar import render_calendar

    return render_calendar(view_model, opacities, locale)


class CalendarVisual:
    """Calendar visual bound to a host.

    ``renderer`` receives ``(view_model, opacities, locale)`` and returns
    the rendered fragment; it defaults to the HTML ``CalendarArtist``.
    With ``allow_interactions=False`` click events are ignored.
    """

    def __init__(
        self,
        renderer: Optional[Renderer] = None,
        locale: str = "en-US",
        allow_interactions: bool = True,
    ) -> None:
        self.renderer: Renderer = renderer or _default_renderer
        self.locale = locale
        self.allow_interactions = allow_interactions
        self.behavior = SelectionBehavior()
        self.view_model = CalendarViewModel()
        self.html = ""
        self.opacities: Dict[str, float] = {}
        self._points_by_key: Dict[str, CalendarDataPoint] = {}

    # Public API -----------------------------------------------------
    def update(self, data_view: Optional[DataView]) -> CalendarViewModel:
        """Rebuild everything from a new data view."""
        vm = self.view_model = build_view_model(data_view)
        self._points_by_key = {p.key: p for p in vm.data_points}
        self.behavior.bind(vm.data_points, vm.has_highlights)
        self._render()
        logger.info(
            "Updated calendar: %d days, month=%s year=%s", len(vm.data_points), vm.month, vm.year
        )
        return vm

    @property
    def settings(self) -> CalendarSettings:
        return self.view_model.settings

    def enumerate_object_instances(self, object_name: str) -> List[ObjectInstance]:
        return enumerate_object_instances(self.view_model.settings, object_name)

    def get_tooltip_data(self, key: str) -> List[TooltipItem]:
        """Tooltip items for the day with *key* ("No Data" if unknown)."""
        labels = self.view_model.settings.data_labels
        return assemble_tooltip(
            self._points_by_key.get(key),
            None,
            self.locale,
            labels.unit,
            labels.precision,
        )

    def click(self, key: str, ctrl_key: bool = False) -> Dict[str, float]:
        """Handle a day-cell click; ``ctrl_key`` extends the selection."""
        if self.allow_interactions:
            self.behavior.click(key, ctrl_key)
            self._render()
        return self.opacities

    def click_clear_catcher(self) -> Dict[str, float]:
        """Handle a click outside the day cells."""
        if self.allow_interactions:
            self.behavior.click_clear_catcher()
            self._render()
        return self.opacities

    def write_html(self, path: str, title: str = "calplt") -> None:
        """Write the current rendering as a standalone HTML page."""
        fig = Figure(title=title)
        fig.set_html(self.html)
        fig.write_html(path)

    # Internal helpers -----------------------------------------------
    def _render(self) -> None:
        self.opacities = self.behavior.render_selection(self.behavior.has_selection())
        self.html = self.renderer(self.view_model, self.opacities, self.locale)
