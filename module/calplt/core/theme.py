"""Minimalist light theme for the calendar page and its fallback colors.

Used by the figure shell (soft gray background, white surface, dark text)
and by CalendarArtist when the color settings leave a stop unset. No
JavaScript; all styling is inline CSS.
"""

THEME = {
    "background": "#f5f5f8",       # page background
    "surface": "#ffffff",          # calendar card
    "foreground": "#111827",       # primary text
    "border": "#e5e7eb",           # low-contrast borders
    "muted": "#6b7280",            # weekday / week number text
    "scale_start": "#eef2ff",      # low end when startColor is unset
    "scale_center": "#a5b4fc",     # midpoint when centerColor is unset
    "scale_end": "#4338ca",        # high end when endColor is unset
    "no_data": "transparent",      # days without a value
}
