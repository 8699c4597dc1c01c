"""Tests for building the calendar view model from a DataView."""

from __future__ import annotations

import copy
import datetime as dt
import math

import pytest

from calplt.core.dataview import CategorySeries, Column, DataView, MeasureSeries, columns_from
from calplt.core.settings import DEFAULT_SETTINGS
from calplt.core.viewmodel import build_view_model, strip_date_field


def _assert_empty(vm):
    assert vm.data_points == []
    assert vm.month is None
    assert vm.year is None
    assert vm.has_highlights is False
    assert vm.settings == DEFAULT_SETTINGS


def test_missing_data_view_gives_empty_model():
    _assert_empty(build_view_model(None))


def test_missing_category_series_gives_empty_model(sales_column):
    view = DataView(values=[MeasureSeries(source=sales_column, values=[1, 2])])
    _assert_empty(build_view_model(view))


def test_category_without_source_gives_empty_model(sales_column, sample_dates):
    view = DataView(
        categories=[CategorySeries(source=None, values=sample_dates)],
        values=[MeasureSeries(source=sales_column, values=[1, 2, 3])],
    )
    _assert_empty(build_view_model(view))


def test_empty_category_values_gives_empty_model(date_column, sales_column):
    view = DataView(
        categories=[CategorySeries(source=date_column, values=[])],
        values=[MeasureSeries(source=sales_column, values=[1])],
    )
    _assert_empty(build_view_model(view))


def test_missing_measure_series_gives_empty_model(date_column, sample_dates):
    view = DataView(categories=[CategorySeries(source=date_column, values=sample_dates)])
    _assert_empty(build_view_model(view))


def test_basic_build(sample_view):
    vm = build_view_model(sample_view)

    assert len(vm.data_points) == 3
    assert vm.month == 1
    assert vm.year == 2024
    assert vm.has_highlights is False

    first = vm.data_points[0]
    assert first.category == dt.datetime(2024, 1, 1)
    assert first.value == 1234.5
    assert first.value_text == "$1,234.50"
    assert first.rowdata == [1234.5, "sunny"]
    assert first.selected is False
    assert first.highlight is None
    assert [(c.display_name, v) for c, v in first.fields] == [
        ("Sales", 1234.5),
        ("Weather", "sunny"),
    ]


def test_points_keep_source_order(sample_view):
    vm = build_view_model(sample_view)
    assert [p.rowdata[1] for p in vm.data_points] == ["sunny", "rain", "snow"]


def test_blank_measure_is_nan_with_blank_text(sample_view):
    second = build_view_model(sample_view).data_points[1]
    assert math.isnan(second.value)
    assert second.value_text == "(Blank)"


def test_two_row_example_with_null_measure(date_column, sales_column):
    dates = [dt.date(2024, 1, 1), dt.date(2024, 1, 2)]
    view = DataView(
        categories=[CategorySeries(source=date_column, values=dates)],
        values=[MeasureSeries(source=sales_column, values=[5, None])],
        columns=[date_column, sales_column],
        rows=[[dates[0], 5], [dates[1], None]],
    )
    vm = build_view_model(view)

    assert len(vm.data_points) == 2
    assert vm.has_highlights is False
    assert vm.data_points[0].value == 5.0
    assert math.isnan(vm.data_points[1].value)
    assert vm.data_points[1].value_text == "(Blank)"


def test_display_unit_changes_value_and_text(sample_view):
    sample_view.objects = {"dataLabels": {"unit": 1000, "precision": 1}}
    first = build_view_model(sample_view).data_points[0]
    # value is re-parsed from "1.2K": the scaled number, not the raw measure.
    assert first.value == 1.2
    assert first.value_text == "$1.2K"


def test_explicit_overrides_win_over_view_objects(sample_view):
    sample_view.objects = {"dataLabels": {"unit": 1000}}
    vm = build_view_model(sample_view, overrides={"calendar": {"weekStartDay": 1}})
    assert vm.settings.data_labels.unit == 0
    assert vm.settings.calendar.week_start_day == 1


@pytest.mark.parametrize("n_categories,n_values", [(3, 5), (5, 3), (1, 1), (4, 0)])
def test_point_count_is_longest_series(date_column, sales_column, n_categories, n_values):
    dates = [dt.date(2024, 2, d + 1) for d in range(n_categories)]
    view = DataView(
        categories=[CategorySeries(source=date_column, values=dates)],
        values=[MeasureSeries(source=sales_column, values=list(range(n_values)))],
    )
    vm = build_view_model(view)
    assert len(vm.data_points) == max(n_categories, n_values)


def test_short_series_read_as_none(date_column, sales_column):
    view = DataView(
        categories=[CategorySeries(source=date_column, values=[dt.date(2024, 2, 1)])],
        values=[MeasureSeries(source=sales_column, values=[1, 2, 3])],
    )
    vm = build_view_model(view)
    assert vm.data_points[2].category is None
    assert vm.data_points[2].value == 3.0
    assert vm.data_points[2].rowdata == []
    assert vm.data_points[2].fields == []


def test_highlight_flags(highlighted_view):
    vm = build_view_model(highlighted_view)
    assert vm.has_highlights is True
    assert [p.highlight for p in vm.data_points] == [True, False, False]


def test_empty_highlight_series_still_counts(sample_view):
    sample_view.values[0].highlights = []
    vm = build_view_model(sample_view)
    assert vm.has_highlights is True
    assert [p.highlight for p in vm.data_points] == [False, False, False]


def test_keys_are_unique_and_stable(sample_view):
    first = [p.key for p in build_view_model(sample_view).data_points]
    second = [p.key for p in build_view_model(sample_view).data_points]
    assert first == second
    assert len(set(first)) == len(first)
    assert first[0] == "Date=2024-01-01#0"


def test_duplicate_dates_get_distinct_keys(date_column, sales_column):
    day = dt.date(2024, 3, 1)
    view = DataView(
        categories=[CategorySeries(source=date_column, values=[day, day])],
        values=[MeasureSeries(source=sales_column, values=[1, 2])],
    )
    keys = [p.key for p in build_view_model(view).data_points]
    assert keys[0] != keys[1]


def test_unparseable_first_date_leaves_month_unset(date_column, sales_column):
    view = DataView(
        categories=[CategorySeries(source=date_column, values=["not a date", "2024-01-02"])],
        values=[MeasureSeries(source=sales_column, values=[1, 2])],
    )
    vm = build_view_model(view)
    assert vm.month is None
    assert vm.year is None
    assert len(vm.data_points) == 2


def test_build_does_not_mutate_input_rows(sample_view):
    before = copy.deepcopy(sample_view.rows)
    build_view_model(sample_view)
    assert sample_view.rows == before


def test_declared_date_column_is_stripped_by_position():
    d1, d2 = dt.date(2024, 1, 1), dt.date(2023, 12, 25)
    rows = [["x", d1, d2]]
    assert strip_date_field(rows, 1) == [["x", d2]]


def test_undeclared_date_column_strips_first_runtime_date():
    d1, d2 = dt.date(2024, 1, 1), dt.date(2023, 12, 25)
    rows = [["x", d1, d2], ["2024-01-02", "y"]]
    assert strip_date_field(rows, None) == [["x", d2], ["2024-01-02", "y"]]


def test_build_falls_back_to_type_sniffing(sales_column):
    undeclared = Column(display_name="Date")
    note = Column(display_name="Note")
    day = dt.datetime(2024, 5, 1)
    view = DataView(
        categories=[CategorySeries(source=undeclared, values=[day])],
        values=[MeasureSeries(source=sales_column, values=[3])],
        columns=[note, undeclared, sales_column],
        rows=[["hello", day, 3]],
    )
    point = build_view_model(view).data_points[0]
    assert point.rowdata == ["hello", 3]


def test_from_frame(sample_frame):
    view = DataView.from_frame(sample_frame, category="date", measure="value")

    assert [c.display_name for c in view.columns] == ["date", "value", "note"]
    assert view.category_column_index() == 0
    assert [c.display_name for c in view.tooltip_columns()] == ["value", "note"]
    assert view.measure.highlights is None

    vm = build_view_model(view)
    assert vm.month == 1 and vm.year == 2024
    assert vm.data_points[0].value == 5.0
    assert vm.data_points[0].value_text == "5"
    assert vm.data_points[0].rowdata == [5.0, "first"]
    assert math.isnan(vm.data_points[1].value)
    assert vm.data_points[1].rowdata == [None, "second"]


def test_from_frame_highlight_column(sample_frame):
    sample_frame["hl"] = [None, 1]
    view = DataView.from_frame(sample_frame, measure="value", highlight="hl")
    assert "hl" not in [c.display_name for c in view.columns]
    vm = build_view_model(view)
    assert vm.has_highlights is True
    assert [p.highlight for p in vm.data_points] == [False, True]


def test_from_frame_rejects_unknown_columns(sample_frame):
    with pytest.raises(ValueError):
        DataView.from_frame(sample_frame, category="day", measure="value")
    with pytest.raises(ValueError):
        DataView.from_frame(sample_frame, measure="value", highlight="missing")


def test_columns_from_host_metadata(sample_dates):
    date_col, sales_col = columns_from(
        [
            {"displayName": "Date", "roles": {"category": True}},
            {"displayName": "Sales", "roles": {"measure": True}, "format": "#,0"},
        ]
    )
    assert date_col.has_role("category") and not date_col.has_role("measure")
    assert sales_col.format == "#,0"

    view = DataView(
        categories=[CategorySeries(source=date_col, values=sample_dates[:1])],
        values=[MeasureSeries(source=sales_col, values=[1500])],
        columns=[date_col, sales_col],
        rows=[[sample_dates[0], 1500]],
    )
    [point] = build_view_model(view).data_points
    assert point.value_text == "1,500"
    assert point.rowdata == [1500]
