"""Tests for month parameter parsing."""
from datetime import date

import pytest

from backend.app.errors import MalformedMonth
from backend.app.utils.months import month_bounds, months_ending


@pytest.mark.parametrize(
    "month, expected_end",
    [
        ("2024-01", date(2024, 1, 31)),
        ("2024-02", date(2024, 2, 29)),
        ("2023-02", date(2023, 2, 28)),
        ("1900-02", date(1900, 2, 28)),
        ("2000-02", date(2000, 2, 29)),
        ("2024-04", date(2024, 4, 30)),
        ("2024-12", date(2024, 12, 31)),
    ],
)
def test_month_bounds_respects_month_length(month, expected_end):
    start, end = month_bounds(month)
    assert start == expected_end.replace(day=1)
    assert end == expected_end


@pytest.mark.parametrize(
    "month",
    [
        "",
        "2024",
        "2024-13",
        "2024-00",
        "2024-1",
        "24-03",
        "2024/03",
        "march",
        "2024-03-01",
        " 2024-03 ",
        "2024-03\n",
        "\u0662\u0660\u0662\u0664-\u0660\u0663",
        "\uff12\uff10\uff12\uff14-03",
    ],
)
def test_month_bounds_rejects_malformed_month(month):
    with pytest.raises(MalformedMonth):
        month_bounds(month)


def test_malformed_month_is_a_value_error():
    with pytest.raises(ValueError, match="expected YYYY-MM"):
        month_bounds("nope")


def test_months_ending_crosses_year_boundary():
    assert months_ending("2024-02", 4) == ["2023-11", "2023-12", "2024-01", "2024-02"]


def test_months_ending_single_month():
    assert months_ending("2024-12", 1) == ["2024-12"]


def test_months_ending_stops_at_year_one():
    assert months_ending("0001-02", 4) == ["0001-01", "0001-02"]


def test_months_ending_rejects_malformed_month():
    with pytest.raises(MalformedMonth):
        months_ending("2024-3", 2)
