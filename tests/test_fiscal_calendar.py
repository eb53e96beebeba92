from datetime import date

import pytest

from app.dealerscope.services.fiscal_calendar import (
    fiscal_year_start,
    monday_of,
    quarter_for,
    quarter_months,
    quarter_weeks,
)


def test_fiscal_year_starts_on_monday_of_new_year_week():
    assert fiscal_year_start(2025) == date(2024, 12, 30)
    assert fiscal_year_start(2024) == date(2024, 1, 1)
    assert fiscal_year_start(2026) == date(2025, 12, 29)


def test_monday_of():
    assert monday_of(date(2025, 1, 12)) == date(2025, 1, 6)
    assert monday_of(date(2025, 1, 6)) == date(2025, 1, 6)


def test_quarter_weeks_are_thirteen_mondays():
    weeks = quarter_weeks(2025, 1)
    assert len(weeks) == 13
    assert weeks[0] == date(2024, 12, 30)
    assert weeks[-1] == date(2025, 3, 24)
    assert all(week.weekday() == 0 for week in weeks)
    assert quarter_weeks(2025, 2)[0] == date(2025, 3, 31)


def test_quarter_months_follow_fiscal_start_month():
    assert quarter_months(2025, 1) == ["2024-12", "2025-01", "2025-02"]
    assert quarter_months(2025, 4) == ["2025-09", "2025-10", "2025-11"]
    assert quarter_months(2024, 2) == ["2024-04", "2024-05", "2024-06"]


def test_quarter_for_dates():
    first = quarter_for(date(2025, 1, 1))
    assert (first.year, first.quarter, first.week_in_quarter) == (2025, 1, 1)

    second = quarter_for(date(2025, 3, 31))
    assert (second.year, second.quarter, second.week_in_quarter) == (2025, 2, 1)

    last = quarter_for(date(2025, 12, 28))
    assert (last.year, last.quarter, last.week_in_quarter) == (2025, 4, 13)

    rollover = quarter_for(date(2025, 12, 29))
    assert (rollover.year, rollover.quarter) == (2026, 1)


@pytest.mark.parametrize("quarter", [0, 5])
def test_invalid_quarter(quarter):
    with pytest.raises(ValueError):
        quarter_weeks(2025, quarter)
    with pytest.raises(ValueError):
        quarter_months(2025, quarter)
