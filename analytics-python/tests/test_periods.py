"""Tests for calendar and period utilities."""

import numpy as np
import pandas as pd
import pytest
from datetime import date, datetime, timedelta, timezone

from services.periods import (
    Period,
    PeriodWindow,
    UnknownPeriodError,
    calendar_day,
    days_between,
    monthly_training_percentages,
    parse_timestamp,
    period_window,
    round_half_up,
    subtract_months,
    training_percentage,
    yearly_training_percentages,
)
from services import periods
from factories import TODAY, workout, workouts_on


class TestParseTimestamp:
    """Tests for parse_timestamp and calendar_day."""

    def test_naive_datetime_is_read_as_utc(self):
        parsed = parse_timestamp(datetime(2024, 3, 10, 23, 30))
        assert parsed.kind == 'ok'
        assert parsed.value.tzinfo is not None
        assert parsed.value.date() == date(2024, 3, 10)

    def test_aware_datetime_is_converted_to_utc(self):
        """01:00 at UTC+2 is still the previous day in UTC."""
        plus_two = timezone(timedelta(hours=2))
        assert calendar_day(datetime(2024, 3, 10, 1, 0, tzinfo=plus_two)) == date(2024, 3, 9)

    def test_date_object(self):
        assert calendar_day(date(2024, 1, 31)) == date(2024, 1, 31)

    def test_iso_string(self):
        parsed = parse_timestamp("2024-05-01T10:00:00")
        assert parsed.kind == 'ok'
        assert parsed.value.date() == date(2024, 5, 1)

    def test_iso_string_with_offset(self):
        assert calendar_day("2024-05-01T23:30:00-02:00") == date(2024, 5, 2)

    def test_epoch_milliseconds(self):
        assert calendar_day(0) == date(1970, 1, 1)

    def test_garbage_falls_back_to_now(self, monkeypatch):
        now = datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)
        monkeypatch.setattr(periods, 'utc_now', lambda: now)

        parsed = parse_timestamp("not a date")
        assert parsed.is_fallback
        assert parsed.value == now

    def test_missing_pandas_timestamp_falls_back(self):
        assert parse_timestamp(pd.NaT).is_fallback
        assert parse_timestamp(float('nan')).is_fallback

    def test_numpy_epoch_milliseconds(self):
        parsed = parse_timestamp(np.int64(1718445600000))
        assert parsed.kind == 'ok'
        assert parsed.value.date() == date(2024, 6, 15)
        assert calendar_day(np.float64(0.0)) == date(1970, 1, 1)

    def test_none_falls_back_to_now(self):
        assert parse_timestamp(None).kind == 'fallback'


class TestDaysBetween:
    """Tests for days_between."""

    def test_whole_days(self):
        assert days_between(date(2024, 1, 1), date(2024, 1, 4)) == 3

    def test_is_symmetric(self):
        assert days_between(date(2024, 1, 4), date(2024, 1, 1)) == 3

    def test_partial_days_round_up(self):
        assert days_between(datetime(2024, 1, 1, 0), datetime(2024, 1, 2, 1)) == 2

    def test_same_day(self):
        assert days_between(date(2024, 1, 1), date(2024, 1, 1)) == 0


class TestPeriodWindow:
    """Tests for period_window."""

    def test_weekly_is_monday_to_sunday(self):
        window = period_window(Period.WEEKLY, TODAY)
        assert window == PeriodWindow(date(2024, 6, 10), date(2024, 6, 16))

    def test_weekly_on_a_sunday(self):
        window = period_window('weekly', date(2024, 6, 16))
        assert window.start == date(2024, 6, 10)

    def test_monthly_handles_leap_february(self):
        window = period_window(Period.MONTHLY, date(2024, 2, 10))
        assert window == PeriodWindow(date(2024, 2, 1), date(2024, 2, 29))

    def test_yearly(self):
        window = period_window(Period.YEARLY, TODAY)
        assert window == PeriodWindow(date(2024, 1, 1), date(2024, 12, 31))

    def test_last_month_crosses_year(self):
        window = period_window(Period.LAST_MONTH, date(2024, 1, 15))
        assert window == PeriodWindow(date(2023, 12, 1), date(2023, 12, 31))

    def test_last_year(self):
        window = period_window(Period.LAST_YEAR, TODAY)
        assert window == PeriodWindow(date(2023, 1, 1), date(2023, 12, 31))

    def test_rolling_four_months(self):
        window = period_window('4months', TODAY)
        assert window == PeriodWindow(date(2024, 2, 15), TODAY)

    def test_rolling_three_months_clamps_day(self):
        window = period_window(Period.THREE_MONTHS, date(2024, 5, 31))
        assert window.start == date(2024, 2, 29)

    def test_all_is_unbounded(self):
        window = period_window(Period.ALL, TODAY)
        assert window.contains(date(1999, 1, 1))

    def test_unknown_period_raises(self):
        with pytest.raises(UnknownPeriodError):
            period_window('fortnight', TODAY)

    def test_unknown_period_is_a_value_error(self):
        with pytest.raises(ValueError):
            period_window('', TODAY)

    def test_up_to_truncates_end(self):
        window = period_window(Period.WEEKLY, TODAY).up_to(TODAY)
        assert window.end == TODAY
        assert len(window.days()) == 6


class TestHelpers:
    """Tests for rounding and month arithmetic."""

    def test_round_half_up(self):
        assert round_half_up(12.5) == 13
        assert round_half_up(2.5) == 3
        assert round_half_up(-12.5) == -12
        assert round_half_up(9.3333, 2) == 9.33

    def test_subtract_months_across_year(self):
        assert subtract_months(date(2024, 2, 15), 4) == date(2023, 10, 15)


class TestTrainingPercentage:
    """Tests for training_percentage."""

    def test_weekly_counts_only_elapsed_days(self):
        """Mon-Wed elapsed, trained Mon and Wed (twice) -> 2 of 3 days."""
        today = date(2024, 6, 12)
        workouts = workouts_on([date(2024, 6, 10), date(2024, 6, 12), date(2024, 6, 12)])
        assert training_percentage(workouts, Period.WEEKLY, today) == 67

    def test_monthly(self):
        today = date(2024, 6, 12)
        workouts = workouts_on([date(2024, 6, 10), date(2024, 6, 12), date(2024, 5, 31)])
        assert training_percentage(workouts, 'monthly', today) == 17

    def test_half_rounds_up(self):
        """1 of 8 days is 12.5%."""
        workouts = workouts_on([date(2024, 6, 1)])
        assert training_percentage(workouts, Period.MONTHLY, date(2024, 6, 8)) == 13

    def test_every_day_trained_is_100(self):
        workouts = workouts_on([date(2024, 6, 10) + timedelta(days=i) for i in range(6)])
        assert training_percentage(workouts, Period.WEEKLY, TODAY) == 100

    def test_no_workouts_is_zero(self):
        assert training_percentage([], Period.YEARLY, TODAY) == 0

    def test_future_workouts_are_ignored(self):
        workouts = workouts_on([date(2024, 6, 16)])
        assert training_percentage(workouts, Period.WEEKLY, TODAY) == 0

    def test_all_time_without_workouts_is_none(self):
        assert training_percentage([], Period.ALL, TODAY) is None

    def test_all_time_starts_at_first_workout(self):
        workouts = workouts_on([date(2024, 6, 6), TODAY])
        assert training_percentage(workouts, Period.ALL, TODAY) == 20

    def test_percentage_is_within_bounds(self):
        workouts = workouts_on([TODAY - timedelta(days=i) for i in range(0, 400, 3)])
        for period in Period:
            value = training_percentage(workouts, period, TODAY)
            assert value is None or 0 <= value <= 100

    def test_unknown_period_raises(self):
        with pytest.raises(UnknownPeriodError):
            training_percentage([], 'daily', TODAY)


class TestYearlyAndMonthly:
    """Tests for yearly and monthly training percentages."""

    def test_yearly_newest_first(self):
        today = date(2024, 1, 10)
        workouts = workouts_on([date(2023, 3, 1), date(2023, 3, 2), date(2024, 1, 5)])
        years = yearly_training_percentages(workouts, today)

        assert [y['year'] for y in years] == [2024, 2023]
        assert years[0] == {
            'year': 2024, 'is_current': True,
            'percentage': 10, 'workout_days': 1, 'total_days': 10,
        }
        assert years[1]['total_days'] == 365
        assert years[1]['percentage'] == 1

    def test_monthly_stops_at_today(self):
        workouts = [workout(date(2024, 2, 3)), workout(date(2024, 3, 1))]
        months = monthly_training_percentages(workouts, 2024, date(2024, 3, 5))

        assert [m['month'] for m in months] == ['Jan', 'Feb', 'Mar']
        assert months[1]['total_days'] == 29
        assert months[2] == {'month': 'Mar', 'percentage': 20, 'workout_days': 1, 'total_days': 5}

    def test_monthly_past_year_has_twelve_months(self):
        assert len(monthly_training_percentages([], 2023, TODAY)) == 12
