"""
Unit Tests for Date Ranges and Clock Helpers

Tests for AD range expansion, BS month views and the injected-clock
helpers.
"""

import logging
from datetime import date, datetime, timedelta, timezone

import pytest

from school_toolkit.calendar.config import TABLE_PATH_ENV
from school_toolkit.calendar.ranges import (
    bs_dates_in_range_ad,
    bs_month_calendar,
    date_range_ad,
    dates_in_range_ad,
    days_overdue,
    iter_dates_ad,
    today_string,
    tomorrow_string,
)
from school_toolkit.core.models.dates import CalendarDate

NEPAL_TZ = timezone(timedelta(hours=5, minutes=45))


class TestDatesInRangeAd:
    """Tests for dates_in_range_ad and friends."""

    def test_range_when_across_leap_day_then_includes_it(self) -> None:
        """Feb 29 appears in leap years."""
        assert dates_in_range_ad("2024-02-28", "2024-03-01") == [
            "2024-02-28",
            "2024-02-29",
            "2024-03-01",
        ]

    def test_range_when_across_year_end_then_length_is_day_count(self) -> None:
        """Length is (end - start) + 1 days."""
        days = dates_in_range_ad("2023-12-25", "2024/1/5")
        assert len(days) == 12
        assert days[0] == "2023-12-25"
        assert days[-1] == "2024-01-05"

    def test_range_when_same_day_then_single_entry(self) -> None:
        """start == end gives one day."""
        assert dates_in_range_ad("2024-04-15", "2024-04-15") == ["2024-04-15"]

    def test_range_when_start_after_end_then_empty(self) -> None:
        """Reversed endpoints give an empty list."""
        assert dates_in_range_ad("2024-04-16", "2024-04-15") == []

    @pytest.mark.parametrize(
        "start, end",
        [("", "2024-04-15"), ("2024-04-15", None), ("2023-02-30", "2023-03-02"), ("garbage", "2024-01-01")],
    )
    def test_range_when_endpoint_invalid_then_empty(self, start, end) -> None:
        """Any invalid endpoint gives an empty list."""
        assert dates_in_range_ad(start, end) == []
        assert date_range_ad(start, end) is None

    def test_range_when_aware_datetime_then_utc_day_used(self) -> None:
        """Aware datetimes are reduced to their UTC calendar day."""
        late_evening_us = datetime(2024, 4, 15, 23, 30, tzinfo=timezone(timedelta(hours=-5)))
        early_morning_nepal = datetime(2024, 4, 16, 2, 0, tzinfo=NEPAL_TZ)
        assert dates_in_range_ad(late_evening_us, late_evening_us) == ["2024-04-16"]
        assert dates_in_range_ad(early_morning_nepal, early_morning_nepal) == ["2024-04-15"]

    def test_range_when_date_objects_then_accepted(self) -> None:
        """date and AD CalendarDate endpoints work."""
        assert dates_in_range_ad(date(2024, 4, 14), CalendarDate.ad(2024, 4, 15)) == [
            "2024-04-14",
            "2024-04-15",
        ]

    def test_iter_when_walked_then_matches_list(self) -> None:
        """iter_dates_ad yields the same days as datetime.date."""
        days = list(iter_dates_ad("2024-04-13", "2024-04-15"))
        assert days == [date(2024, 4, 13), date(2024, 4, 14), date(2024, 4, 15)]

    def test_date_range_when_reused_then_restartable(self) -> None:
        """The DateRange can be iterated repeatedly."""
        span = date_range_ad("2024-04-01", "2024-04-30")
        assert span is not None
        assert len(list(span)) == 30
        assert len(list(span)) == 30


class TestBsDatesInRangeAd:
    """Tests for bs_dates_in_range_ad."""

    def test_bs_range_when_across_new_year_then_converted(self) -> None:
        """BS dates follow the AD days across Baisakh 1."""
        assert bs_dates_in_range_ad("2024-04-12", "2024-04-14") == [
            "2080-12-30",
            "2081-01-01",
            "2081-01-02",
        ]

    def test_bs_range_when_past_table_end_then_uncovered_days_dropped(self) -> None:
        """Days after the table's last day are left out."""
        assert bs_dates_in_range_ad("2034-04-12", "2034-04-15") == ["2090-12-29", "2090-12-30"]

    def test_bs_range_when_invalid_then_empty(self) -> None:
        """Invalid endpoints give an empty list."""
        assert bs_dates_in_range_ad("nope", "2024-04-14") == []


class TestBsMonthCalendar:
    """Tests for bs_month_calendar."""

    def test_month_calendar_when_baisakh_2081_then_full_month(self) -> None:
        """Baisakh 2081 has 31 days starting on Saturday 2024-04-13."""
        days = bs_month_calendar(2081, 1)
        assert len(days) == 31
        assert days[0].bs == CalendarDate.bs(2081, 1, 1)
        assert days[0].ad == CalendarDate.ad(2024, 4, 13)
        assert days[0].weekday == 6
        assert days[1].weekday == 0
        assert days[-1].bs == CalendarDate.bs(2081, 1, 31)
        assert days[-1].ad == CalendarDate.ad(2024, 5, 13)

    def test_month_calendar_when_days_listed_then_consecutive(self) -> None:
        """AD days run without gaps and weekdays cycle."""
        days = bs_month_calendar(2080, 12)
        assert len(days) == 30
        for before, after in zip(days, days[1:]):
            assert after.ad.to_date() - before.ad.to_date() == timedelta(days=1)
            assert after.weekday == (before.weekday + 1) % 7

    @pytest.mark.parametrize("year, month", [(2091, 1), (1999, 12), (2081, 13)])
    def test_month_calendar_when_outside_table_then_empty(self, year, month) -> None:
        """Months the table does not cover give an empty list."""
        assert bs_month_calendar(year, month) == []


class TestClockHelpers:
    """Tests for today_string, tomorrow_string and days_overdue."""

    def test_today_when_utc_then_same_day(self) -> None:
        """today_string formats the UTC day."""
        assert today_string(datetime(2024, 4, 15, 23, 0, tzinfo=timezone.utc)) == "2024-04-15"

    def test_today_when_nepal_morning_then_previous_utc_day(self) -> None:
        """Local times before 05:45 in Nepal are still the previous UTC day."""
        assert today_string(datetime(2024, 4, 16, 2, 0, tzinfo=NEPAL_TZ)) == "2024-04-15"

    def test_tomorrow_when_month_end_then_rolls_over(self) -> None:
        """tomorrow_string crosses month and year ends."""
        assert tomorrow_string(datetime(2024, 4, 30, 12, 0, tzinfo=timezone.utc)) == "2024-05-01"
        assert tomorrow_string(datetime(2023, 12, 31, 0, 0)) == "2024-01-01"

    def test_days_overdue_when_past_due_then_positive(self) -> None:
        """Overdue days count whole days after the due date."""
        assert days_overdue("2024-04-10", "2024-04-15") == 5

    @pytest.mark.parametrize(
        "due, today",
        [("2024-04-15", "2024-04-15"), ("2024-04-20", "2024-04-15"), ("bad", "2024-04-15")],
    )
    def test_days_overdue_when_not_due_or_invalid_then_zero(self, due, today) -> None:
        """Not yet due, due today, or unreadable dates are 0."""
        assert days_overdue(due, today) == 0


class TestUnloadableTable:
    """BS helpers when the configured table file cannot be loaded."""

    def test_bs_helpers_when_table_missing_then_empty_and_error_logged(
        self, monkeypatch, tmp_path, caplog
    ) -> None:
        """Both BS helpers return an empty list and log the error."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "missing.json"))
        with caplog.at_level(logging.ERROR, logger="school_toolkit.calendar.ranges"):
            assert bs_dates_in_range_ad("2024-04-12", "2024-04-14") == []
            assert bs_month_calendar(2081, 1) == []
        assert "Calendar table unavailable" in caplog.text

    def test_bs_dates_when_table_passed_then_env_ignored(self, monkeypatch, tmp_path, bs_table) -> None:
        """An explicit table does not depend on the configured path."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "missing.json"))
        assert bs_dates_in_range_ad("2024-04-13", "2024-04-13", table=bs_table) == ["2081-01-01"]
