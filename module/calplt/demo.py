#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""Generate a small dummy dataset and a demo calendar page.

Writes under ``examples/data/`` (or a directory passed to ``main``):

- demo_calendar.csv: date, sales, visitors, weather, promo
  One row per day of one month. ``sales`` is the bound measure and is
  blank on a few days; ``promo`` is non-null on promotion days and is used
  as the highlight sub-series.
- demo_calendar.html: the rendered calendar.

Run with PYTHONPATH including module/:
  PYTHONPATH=module python -m calplt.demo
"""

from __future__ import annotations

import argparse
import calendar as pycal
import datetime as dt
import logging
import random
from pathlib import Path
from typing import Optional

import pandas as pd

from calplt.core.dataview import DataView
from calplt.core.visual import CalendarVisual
from calplt.logging_config import setup_logging

logger = logging.getLogger(__name__)

# Default seed for reproducible dummy data
DEFAULT_SEED = 42
DEMO_YEAR = 2024
DEMO_MONTH = 3

_WEATHER = ["sunny", "cloudy", "rain", "wind", "snow"]

DEMO_FORMATS = {"sales": "$#,0.00", "visitors": "#,0"}
DEMO_LABELS = {"date": "Date", "sales": "Sales", "visitors": "Visitors", "weather": "Weather"}


def _data_dir() -> Path:
    return Path.cwd() / "examples" / "data"


def make_calendar_df(
    seed: int = DEFAULT_SEED, year: int = DEMO_YEAR, month: int = DEMO_MONTH
) -> pd.DataFrame:
    """One row per day with sales, visitors, weather and promo flags."""
    rng = random.Random(seed)
    n_days = pycal.monthrange(year, month)[1]
    rows = []
    for d in range(1, n_days + 1):
        day = dt.date(year, month, d)
        weekend = day.weekday() >= 5
        visitors = rng.randint(200, 400) if weekend else rng.randint(80, 250)
        sales = round(visitors * rng.uniform(12.0, 30.0), 2)
        rows.append({
            "date": day,
            # A few days without data to show blank cells.
            "sales": None if rng.random() < 0.1 else sales,
            "visitors": visitors,
            "weather": rng.choice(_WEATHER),
            "promo": "promo" if rng.random() < 0.25 else None,
        })
    return pd.DataFrame(rows)


def make_demo_view(seed: int = DEFAULT_SEED) -> DataView:
    """DataView over the demo frame with promo days as highlights."""
    return DataView.from_frame(
        make_calendar_df(seed=seed),
        category="date",
        measure="sales",
        highlight="promo",
        formats=DEMO_FORMATS,
        labels=DEMO_LABELS,
        objects={
            "calendar": {"weekStartDay": 1},
            "calendarColors": {"startColor": {"solid": {"color": "#fef3c7"}}, "endColor": "#b45309"},
            "dataLabels": {"unit": 1000, "precision": 1},
            "showWeeks": {"show": True, "useIso": True},
        },
    )


def main(
    out_dir: Optional[Path] = None, seed: int = DEFAULT_SEED, log_level: str = "info"
) -> Path:
    setup_logging(log_level)
    out_dir = out_dir or _data_dir()
    out_dir.mkdir(parents=True, exist_ok=True)

    df = make_calendar_df(seed=seed)
    csv_path = out_dir / "demo_calendar.csv"
    df.to_csv(csv_path, index=False)
    logger.info("Wrote %s (%d rows)", csv_path, len(df))

    vis = CalendarVisual()
    vis.update(make_demo_view(seed=seed))
    html_path = out_dir / "demo_calendar.html"
    vis.write_html(str(html_path), title="calplt demo")
    logger.info("Wrote %s", html_path)
    return html_path


def cli() -> None:
    ap = argparse.ArgumentParser(description="Write a demo calendar dataset and HTML page.")
    ap.add_argument("--out", dest="out_dir", default=None, help="Output directory (default: examples/data)")
    ap.add_argument("--seed", type=int, default=DEFAULT_SEED, help=f"Random seed (default: {DEFAULT_SEED})")
    ap.add_argument("--log-level", default="info", help="Logging level name (default: info)")
    args = ap.parse_args()
    main(Path(args.out_dir) if args.out_dir else None, seed=args.seed, log_level=args.log_level)


if __name__ == "__main__":
    cli()
