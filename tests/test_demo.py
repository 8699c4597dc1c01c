"""Smoke tests for the demo dataset and page."""

from __future__ import annotations

import logging
import sys

import pandas as pd

from calplt.core.viewmodel import build_view_model
from calplt.demo import cli, make_calendar_df, make_demo_view, main


def test_demo_frame_covers_one_month():
    df = make_calendar_df(seed=1, year=2024, month=2)
    assert len(df) == 29
    assert list(df.columns) == ["date", "sales", "visitors", "weather", "promo"]
    # Same seed, same data.
    assert make_calendar_df(seed=1, year=2024, month=2).equals(df)


def test_demo_view_resolves_overrides():
    vm = build_view_model(make_demo_view())
    assert vm.month == 3 and vm.year == 2024
    assert len(vm.data_points) == 31
    assert vm.has_highlights is True
    assert vm.settings.calendar.week_start_day == 1
    assert vm.settings.calendar_colors.start_color == "#fef3c7"
    assert vm.settings.data_labels.unit == 1000
    assert [c.display_name for c, _ in vm.data_points[0].fields] == [
        "Sales",
        "Visitors",
        "Weather",
    ]


def test_main_writes_csv_and_html(tmp_path):
    html_path = main(tmp_path)
    assert (tmp_path / "demo_calendar.csv").exists()
    text = html_path.read_text(encoding="utf-8")
    assert "March 2024" in text
    assert 'calplt-calendar-cell--week"' in text
    logging.getLogger("calplt").handlers.clear()


def test_cli_arguments(tmp_path, monkeypatch):
    monkeypatch.setattr(sys, "argv", ["calplt-demo", "--out", str(tmp_path), "--seed", "7"])
    cli()
    written = pd.read_csv(tmp_path / "demo_calendar.csv")
    assert len(written) == 31
    assert (tmp_path / "demo_calendar.html").exists()
    logging.getLogger("calplt").handlers.clear()
