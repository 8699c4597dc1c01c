"""Interactive selection state.

Selection is a set of data-point keys. Interaction events are folded into
that set by ``reduce_selection``; ``SelectionBehavior`` owns the current set
for the lifetime of a visual, mirrors it onto the bound points' ``selected``
flags and computes per-cell opacity.

Highlighting (cross-filtering from other visuals) is read from the points'
``highlight`` flags and never changed here.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Set, Union

from .viewmodel import CalendarDataPoint

logger = logging.getLogger(__name__)

DIMMED_OPACITY = 0.4
DEFAULT_OPACITY = 1.0


@dataclass(frozen=True)
class Click:
    """A day cell was clicked; ``extend_selection`` is the ctrl-click flag."""

    key: str
    extend_selection: bool = False


@dataclass(frozen=True)
class ClearCatcherClick:
    """The empty area around the grid was clicked."""


SelectionEvent = Union[Click, ClearCatcherClick]


def reduce_selection(
    selected: FrozenSet[str], event: SelectionEvent
) -> FrozenSet[str]:
    """Return the selection after *event*.

    A plain click selects only the clicked key, or clears the selection if
    that key already was the sole selection. A ctrl-click toggles the key
    and keeps the rest. A clear-catcher click empties the selection.
    """
    if isinstance(event, ClearCatcherClick):
        return frozenset()
    if isinstance(event, Click):
        if event.extend_selection:
            return selected ^ {event.key}
        if selected == {event.key}:
            return frozenset()
        return frozenset({event.key})
    raise ValueError(f"Unknown selection event: {event!r}")


def fill_opacity(
    selected: bool,
    highlight: bool,
    has_selection: bool,
    has_partial_highlights: bool,
) -> float:
    """Opacity of one cell: dimmed when filtered out by highlight or selection."""
    if (has_partial_highlights and not highlight) or (has_selection and not selected):
        return DIMMED_OPACITY
    return DEFAULT_OPACITY


def cell_opacity(
    point: CalendarDataPoint, any_selected: bool, has_highlights: bool
) -> float:
    """Opacity of *point*; highlight and selection dimming suppress each other."""
    selected = bool(point.selected)
    highlight = bool(point.highlight)
    return fill_opacity(
        selected,
        highlight,
        not highlight and any_selected,
        not selected and has_highlights,
    )


class SelectionBehavior:
    """Owns the selection set for the points of the current refresh."""

    def __init__(self) -> None:
        self._selected: FrozenSet[str] = frozenset()
        self._points: List[CalendarDataPoint] = []
        self._keys: Set[str] = set()
        self._has_highlights = False

    # Public API -----------------------------------------------------
    @property
    def selected_keys(self) -> FrozenSet[str]:
        return self._selected

    def has_selection(self) -> bool:
        return bool(self._selected)

    def bind(self, points: Iterable[CalendarDataPoint], has_highlights: bool) -> None:
        """Attach to a freshly built point list; the selection starts empty."""
        self._points = list(points)
        self._keys = {p.key for p in self._points}
        self._has_highlights = bool(has_highlights)
        self._selected = frozenset()
        self._apply()

    def dispatch(self, event: SelectionEvent) -> FrozenSet[str]:
        """Fold *event* into the selection and update the points.

        Clicks on keys that are not bound are ignored.
        """
        if isinstance(event, Click) and event.key not in self._keys:
            logger.debug("Ignoring click on unbound key %r", event.key)
            return self._selected
        self._selected = reduce_selection(self._selected, event)
        self._apply()
        logger.debug("%r -> %d selected", event, len(self._selected))
        return self._selected

    def click(self, key: str, extend_selection: bool = False) -> FrozenSet[str]:
        return self.dispatch(Click(key, extend_selection))

    def click_clear_catcher(self) -> FrozenSet[str]:
        return self.dispatch(ClearCatcherClick())

    def render_selection(self, has_selection: bool) -> Dict[str, float]:
        """Return ``{key: opacity}`` for every bound point."""
        return {
            p.key: cell_opacity(p, has_selection, self._has_highlights)
            for p in self._points
        }

    # Internal helpers -----------------------------------------------
    def _apply(self) -> None:
        for p in self._points:
            p.selected = p.key in self._selected
