"""Figure: top-level container; writes self-contained HTML.

The figure wraps a rendered calendar fragment in a page with the theme's
stylesheet. Tooltips are CSS-only (hover); there is no JavaScript.
"""

from __future__ import annotations

from .theme import THEME
from .utils import esc


class Figure:
    """Page shell around one calendar fragment."""

    def __init__(self, title: str = "calplt") -> None:
        self.title = title
        self._body = ""

    def set_html(self, html: str) -> None:
        """Set the calendar HTML rendered inside the figure card."""
        self._body = html

    def write_html(self, path: str) -> None:
        """Write one self-contained HTML file (no JS)."""
        html = self.build_html()
        with open(path, "w", encoding="utf-8") as f:
            f.write(html)

    def build_html(self) -> str:
        bg = THEME["background"]
        surface = THEME["surface"]
        fg = THEME["foreground"]
        border = THEME["border"]
        muted = THEME["muted"]
        body = self._body or "<!-- no calendar -->"

        return f"""<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>{esc(self.title)}</title>
<style>
*, *::before, *::after {{
  box-sizing: border-box;
}}

body {{
  margin: 0;
  padding: clamp(2vw, 1rem, 5vw);
  font-family: system-ui, -apple-system, BlinkMacSystemFont, "Segoe UI", sans-serif;
  background: {bg};
  color: {fg};
  line-height: 1.4;
}}

.calplt-fig {{
  max-width: min(960px, 100%);
  margin: 0 auto;
  padding: clamp(1rem, 2.5vw, 1.5rem);
  border-radius: 14px;
  border: 1px solid {border};
  background: {surface};
  box-shadow: 0 18px 45px rgba(15, 23, 42, 0.08);
}}

.calplt-calendar-title {{
  display: flex;
  font-weight: 600;
  margin-bottom: 0.5rem;
}}

.calplt-calendar-row {{
  display: grid;
}}

.calplt-calendar-cell {{
  position: relative;
  display: flex;
  flex-direction: column;
  min-height: 3.5rem;
  padding: 0.2rem 0.35rem;
}}

.calplt-calendar-cell--weekday,
.calplt-calendar-cell--corner {{
  min-height: 0;
  flex-direction: row;
  color: {muted};
  font-weight: 600;
}}

.calplt-calendar-cell--week {{
  flex-direction: row;
  align-items: center;
}}

.calplt-calendar-cell--outside {{
  background: {bg};
}}

.calplt-calendar-label {{
  margin-top: auto;
}}

.calplt-calendar-tooltip {{
  position: absolute;
  top: 100%;
  left: 50%;
  transform: translateX(-50%);
  width: max-content;
  max-width: min(320px, 90vw);
  padding: 0.5rem 0.85rem;
  border-radius: 6px;
  background: #111827;
  color: #ffffff;
  font-size: 0.85rem;
  opacity: 0;
  pointer-events: none;
  transition: opacity 80ms ease-out 100ms;
  z-index: 9999;
}}

.calplt-calendar-tooltip > span {{
  display: block;
}}

.calplt-calendar-tooltip-header {{
  font-weight: 600;
}}

.calplt-calendar-cell--value:hover .calplt-calendar-tooltip {{
  opacity: 1;
  transition-delay: 0s;
}}

.calplt-calendar-cell--selected {{
  outline: 2px solid {fg};
  outline-offset: -2px;
}}
</style>
</head>
<body>
<div class="calplt-fig">
{body}
</div>
</body>
</html>
"""
