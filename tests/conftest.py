"""Pytest configuration and shared fixtures."""

import pytest
from typing import Any, Dict, List

from macrowatch.data.models import MergedRecord, Point


@pytest.fixture
def fred_observations() -> List[Dict[str, Any]]:
    """FRED observation elements, including a '.' missing marker."""
    return [
        {"realtime_start": "2024-01-05", "realtime_end": "2024-01-05", "date": "2023-12-29", "value": "3.88"},
        {"realtime_start": "2024-01-05", "realtime_end": "2024-01-05", "date": "2024-01-01", "value": "."},
        {"realtime_start": "2024-01-05", "realtime_end": "2024-01-05", "date": "2024-01-02", "value": "3.95"},
        {"realtime_start": "2024-01-05", "realtime_end": "2024-01-05", "date": "2024-01-03", "value": "3.91"},
    ]


@pytest.fixture
def solar_cycle_payload() -> List[Dict[str, Any]]:
    """NOAA SWPC observed solar cycle indices (month granularity)."""
    return [
        {"time-tag": "2024-03", "ssn": 104.9, "smoothed_ssn": 135.6},
        {"time-tag": "2024-04", "ssn": 136.5, "smoothed_ssn": 137.4},
        {"time-tag": "2024-05", "ssn": 172.1, "smoothed_ssn": -1},
    ]


@pytest.fixture
def gdp_points() -> List[Point]:
    """Quarterly GDP-like series with one two-quarter contraction."""
    values = [100.0, 101.0, 100.5, 99.8, 100.2, 101.0]
    dates = ["2019-01-01", "2019-04-01", "2019-07-01", "2019-10-01", "2020-01-01", "2020-04-01"]
    return [Point(date=d, value=v) for d, v in zip(dates, values)]


@pytest.fixture
def monthly_display() -> List[Point]:
    """Monthly display series spanning 2019-06-01..2019-09-01."""
    return [
        Point(date="2019-06-01", value=1.0),
        Point(date="2019-07-01", value=2.0),
        Point(date="2019-08-01", value=3.0),
        Point(date="2019-09-01", value=4.0),
    ]


@pytest.fixture
def spread_records() -> List[MergedRecord]:
    """Merged spread records ending in a three-record inversion."""
    diffs = [0.1, -0.2, -0.3, -0.1]
    dates = ["2023-01-02", "2023-01-03", "2023-01-04", "2023-01-05"]
    return [
        MergedRecord(date=d, primary=4.0, secondary=round(4.0 - diff, 2), differential=diff)
        for d, diff in zip(dates, diffs)
    ]
