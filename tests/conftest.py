"""
Pytest configuration and shared fixtures for calplt tests.
"""

from __future__ import annotations

import datetime as dt

import pandas as pd
import pytest

from calplt.core.dataview import CategorySeries, Column, DataView, MeasureSeries


@pytest.fixture
def date_column() -> Column:
    return Column(display_name="Date", roles={"category": True})


@pytest.fixture
def sales_column() -> Column:
    return Column(display_name="Sales", roles={"measure": True}, format="$#,0.00")


@pytest.fixture
def weather_column() -> Column:
    return Column(display_name="Weather")


@pytest.fixture
def sample_dates() -> list:
    return [dt.datetime(2024, 1, 1), dt.datetime(2024, 1, 2), dt.datetime(2024, 1, 3)]


@pytest.fixture
def sample_view(date_column, sales_column, weather_column, sample_dates) -> DataView:
    """Three January days; the second one has no sales."""
    sales = [1234.5, None, 20]
    weather = ["sunny", "rain", "snow"]
    return DataView(
        categories=[CategorySeries(source=date_column, values=list(sample_dates))],
        values=[MeasureSeries(source=sales_column, values=list(sales))],
        columns=[date_column, sales_column, weather_column],
        rows=[[d, s, w] for d, s, w in zip(sample_dates, sales, weather)],
    )


@pytest.fixture
def highlighted_view(sample_view) -> DataView:
    """Same as sample_view, with only the first day highlighted."""
    sample_view.values[0].highlights = [1234.5, None, None]
    return sample_view


@pytest.fixture
def sample_frame() -> pd.DataFrame:
    return pd.DataFrame(
        {
            "date": ["2024-01-01", "2024-01-02"],
            "value": [5, None],
            "note": ["first", "second"],
        }
    )
