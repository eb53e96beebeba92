"""Fiscal calendar used by scorecards.

A fiscal year starts on the Monday of the week that contains January 1 and is
split into quarters of 13 weeks. Monthly scorecards use the three calendar
months that begin at the fiscal-year start month.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, timedelta

WEEKS_PER_QUARTER = 13


@dataclass(frozen=True)
class FiscalQuarter:
    year: int
    quarter: int
    week_in_quarter: int


def _validate_quarter(quarter: int) -> None:
    if quarter not in (1, 2, 3, 4):
        raise ValueError(f"quarter must be between 1 and 4, got {quarter}")


def monday_of(day: date) -> date:
    return day - timedelta(days=day.weekday())


def fiscal_year_start(year: int) -> date:
    return monday_of(date(year, 1, 1))


def quarter_for(day: date) -> FiscalQuarter:
    monday = monday_of(day)
    fiscal_year = monday.year
    if monday >= fiscal_year_start(fiscal_year + 1):
        fiscal_year += 1
    weeks_since_start = (monday - fiscal_year_start(fiscal_year)).days // 7
    quarter = min(weeks_since_start // WEEKS_PER_QUARTER + 1, 4)
    week_in_quarter = weeks_since_start - (quarter - 1) * WEEKS_PER_QUARTER + 1
    return FiscalQuarter(year=fiscal_year, quarter=quarter, week_in_quarter=week_in_quarter)


def quarter_weeks(year: int, quarter: int) -> list[date]:
    _validate_quarter(quarter)
    first_week = fiscal_year_start(year) + timedelta(weeks=(quarter - 1) * WEEKS_PER_QUARTER)
    return [first_week + timedelta(weeks=offset) for offset in range(WEEKS_PER_QUARTER)]


def quarter_months(year: int, quarter: int) -> list[str]:
    """``YYYY-MM`` identifiers of the quarter's three months."""
    _validate_quarter(quarter)
    start = fiscal_year_start(year)
    base = start.year * 12 + (start.month - 1) + (quarter - 1) * 3
    return [f"{(base + offset) // 12:04d}-{(base + offset) % 12 + 1:02d}" for offset in range(3)]
