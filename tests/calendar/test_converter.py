"""
Unit Tests for BS <-> AD Conversion

Tests for normalize, parse_date and the conversions in both directions.
"""

import logging
from datetime import date, datetime, timedelta

import pytest

from school_toolkit.calendar.config import TABLE_PATH_ENV
from school_toolkit.calendar.converter import (
    ad_to_bs,
    bs_to_ad,
    bs_to_ad_date,
    convert_ad_to_bs,
    convert_bs_to_ad,
    normalize,
    parse_date,
)
from school_toolkit.calendar.table import CalendarTableError
from school_toolkit.core.models.dates import CalendarDate, CalendarSystem
from school_toolkit.core.models.outcome import ConversionError


class TestNormalize:
    """Tests for normalize."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("2081-01-03", "2081-01-03"),
            ("2081/1/3", "2081-01-03"),
            ("2081-1/03", "2081-01-03"),
            (" 2024/4/15 ", "2024-04-15"),
            ("2081-13-40", "2081-13-40"),
        ],
    )
    def test_normalize_when_shape_matches_then_zero_padded(self, raw, expected) -> None:
        """Accepted shapes become YYYY-MM-DD without calendar checks."""
        assert normalize(raw) == expected

    @pytest.mark.parametrize(
        "raw",
        [None, "", "   ", "2024-4", "24-04-15", "2024.04.15", "15/04/2024", "2024-04-15T00:00", "2024-004-15"],
    )
    def test_normalize_when_shape_wrong_then_none(self, raw) -> None:
        """Anything else is rejected."""
        assert normalize(raw) is None

    def test_normalize_when_applied_twice_then_unchanged(self) -> None:
        """normalize is idempotent on its own output."""
        for raw in ["2081/1/3", "2024-4-15", "2090/12/30", "2000-1-1"]:
            once = normalize(raw)
            assert normalize(once) == once


class TestParseDate:
    """Tests for parse_date."""

    def test_parse_when_valid_then_tagged_date(self) -> None:
        """The parsed date carries the requested calendar."""
        result = parse_date("2081/1/3", CalendarSystem.BS)
        assert result.ok
        assert result.date == CalendarDate.bs(2081, 1, 3)

    @pytest.mark.parametrize("raw", ["2081-13-01", "2081-00-10", "2081-01-33", "2081-01-00", "hello"])
    def test_parse_when_out_of_shape_then_lexical(self, raw) -> None:
        """Month outside 1-12 or day outside 1-32 is a lexical failure."""
        result = parse_date(raw, CalendarSystem.BS)
        assert not result.ok
        assert result.error is ConversionError.LEXICAL


class TestAdToBs:
    """Tests for AD -> BS conversion."""

    @pytest.mark.parametrize(
        "ad, bs",
        [
            ("2024-04-15", "2081-01-03"),
            ("2024-04-13", "2081-01-01"),
            ("2024-04-12", "2080-12-30"),
            ("2023-04-14", "2080-01-01"),
            ("2023-09-18", "2080-06-01"),
            ("2024-06-14", "2081-02-32"),
            ("2024-06-29", "2081-03-15"),
            ("2024-07-15", "2081-03-31"),
            ("2024-07-16", "2081-04-01"),
            ("2025-01-14", "2081-10-01"),
            ("2025-04-13", "2081-12-31"),
            ("2025-04-14", "2082-01-01"),
            ("2025-05-29", "2082-02-15"),
            ("1943-04-14", "2000-01-01"),
            ("2034-04-13", "2090-12-30"),
        ],
    )
    def test_ad_to_bs_when_in_range_then_known_date(self, ad, bs) -> None:
        """Known AD days map onto their BS dates."""
        assert ad_to_bs(ad) == bs

    def test_ad_to_bs_when_slashes_and_no_padding_then_same_result(self) -> None:
        """Input forms are interchangeable."""
        assert ad_to_bs("2024/4/15") == ad_to_bs("2024-04-15") == "2081-01-03"

    @pytest.mark.parametrize("ad", ["1943-04-13", "2034-04-14", "1900-01-01", "2100-01-01"])
    def test_convert_when_outside_table_then_range(self, ad) -> None:
        """Days outside the table are range failures."""
        result = convert_ad_to_bs(ad)
        assert result.error is ConversionError.RANGE
        assert ad_to_bs(ad) is None

    def test_convert_when_gregorian_day_does_not_exist_then_range(self) -> None:
        """2023-02-30 has the right shape but is not a real day."""
        result = convert_ad_to_bs("2023-02-30")
        assert result.error is ConversionError.RANGE

    @pytest.mark.parametrize("ad", ["", None, "2024-13-01", "not a date", "2024-04"])
    def test_convert_when_malformed_then_lexical(self, ad) -> None:
        """Malformed input is a lexical failure and None at the string boundary."""
        assert convert_ad_to_bs(ad).error is ConversionError.LEXICAL
        assert ad_to_bs(ad) is None

    def test_convert_when_date_objects_then_accepted(self) -> None:
        """datetime.date, datetime and AD CalendarDate inputs work."""
        assert convert_ad_to_bs(date(2024, 4, 15)).text == "2081-01-03"
        assert convert_ad_to_bs(datetime(2024, 4, 15, 22, 0)).text == "2081-01-03"
        assert convert_ad_to_bs(CalendarDate.ad(2024, 4, 15)).text == "2081-01-03"

    def test_convert_when_bs_calendar_date_given_then_lexical(self) -> None:
        """A BS CalendarDate is the wrong input for AD -> BS."""
        assert convert_ad_to_bs(CalendarDate.bs(2081, 1, 3)).error is ConversionError.LEXICAL

    def test_convert_when_custom_table_then_bounds_follow_it(self, bs_table) -> None:
        """An explicit table is used instead of the default."""
        result = convert_ad_to_bs("2024-04-15", table=bs_table)
        assert result.date == CalendarDate.bs(2081, 1, 3)


class TestBsToAd:
    """Tests for BS -> AD conversion."""

    @pytest.mark.parametrize(
        "bs, ad",
        [
            ("2081-01-03", "2024-04-15"),
            ("2081/1/1", "2024-04-13"),
            ("2080-01-01", "2023-04-14"),
            ("2000-01-01", "1943-04-14"),
            ("2090-12-30", "2034-04-13"),
        ],
    )
    def test_bs_to_ad_when_in_range_then_known_date(self, bs, ad) -> None:
        """Known BS days map onto their AD dates."""
        assert bs_to_ad(bs) == ad

    def test_convert_when_day_past_month_end_then_range(self) -> None:
        """Chaitra 2080 has 30 days; day 31 is a range failure."""
        result = convert_bs_to_ad("2080-12-31")
        assert result.error is ConversionError.RANGE
        assert bs_to_ad("2080-12-31") is None

    def test_convert_when_32nd_of_short_month_then_range(self) -> None:
        """Asar 2081 has 31 days while Jestha 2081 has 32."""
        assert convert_bs_to_ad("2081-03-32").error is ConversionError.RANGE
        assert bs_to_ad("2081-02-32") == "2024-06-14"

    @pytest.mark.parametrize(
        "bs, ad",
        [
            ("2081-03-15", "2024-06-29"),
            ("2082-02-15", "2025-05-29"),
            ("2081-12-31", "2025-04-13"),
        ],
    )
    def test_bs_to_ad_when_mid_year_day_then_published_date(self, bs, ad) -> None:
        """Days deep inside a year land on the dates printed in the calendar."""
        assert bs_to_ad(bs) == ad

    @pytest.mark.parametrize("bs", ["1999-12-30", "2091-01-01"])
    def test_convert_when_year_outside_table_then_range(self, bs) -> None:
        """Years outside the table are range failures."""
        assert convert_bs_to_ad(bs).error is ConversionError.RANGE

    def test_convert_when_malformed_then_lexical(self) -> None:
        """Malformed BS input is a lexical failure."""
        assert convert_bs_to_ad("2081-1").error is ConversionError.LEXICAL
        assert convert_bs_to_ad(date(2024, 4, 15)).error is ConversionError.LEXICAL

    def test_bs_to_ad_date_when_valid_then_date_object(self) -> None:
        """bs_to_ad_date returns datetime.date or None."""
        assert bs_to_ad_date("2081-01-03") == date(2024, 4, 15)
        assert bs_to_ad_date("2080-12-31") is None


class TestRoundTrip:
    """Round trips across the whole table."""

    def test_round_trip_when_sampled_across_table_then_identity(self, bs_table) -> None:
        """AD -> BS -> AD returns the starting day everywhere in range."""
        for offset in range(0, bs_table.total_days, 53):
            ad = (bs_table.first_ad + timedelta(days=offset)).isoformat()
            bs = ad_to_bs(ad)
            assert bs is not None
            assert bs_to_ad(bs) == ad

    def test_round_trip_when_bs_sampled_then_identity(self, bs_table) -> None:
        """BS -> AD -> BS returns the starting day, 32nd days included."""
        samples = [bs_table.offset_to_bs(offset) for offset in range(11, bs_table.total_days, 61)]
        samples.append(CalendarDate.bs(2081, 2, 32))
        for bs in samples:
            assert ad_to_bs(bs_to_ad(bs.isoformat())) == bs.isoformat()

    def test_round_trip_when_table_edges_then_identity(self, bs_table) -> None:
        """Both table edges survive a round trip."""
        for ad in (bs_table.first_ad, bs_table.last_ad):
            assert bs_to_ad(ad_to_bs(ad.isoformat())) == ad.isoformat()

    def test_round_trip_when_consecutive_days_then_consecutive_bs(self, bs_table) -> None:
        """Consecutive AD days never skip or repeat a BS day."""
        start = date(2024, 3, 1)
        previous = None
        for step in range(120):
            bs = convert_ad_to_bs(start + timedelta(days=step)).date
            if previous is not None:
                assert bs_table.bs_to_offset(bs) == bs_table.bs_to_offset(previous) + 1
            previous = bs


class TestUnloadableTable:
    """A configured table file that cannot be loaded."""

    def test_string_functions_when_table_missing_then_none_and_error_logged(
        self, monkeypatch, tmp_path, caplog
    ) -> None:
        """String functions log the configuration error and return None."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "missing.json"))
        with caplog.at_level(logging.ERROR, logger="school_toolkit.calendar.converter"):
            assert ad_to_bs("2024-04-15") is None
            assert bs_to_ad("2081-01-03") is None
            assert bs_to_ad_date("2081-01-03") is None
        assert "Calendar table unavailable" in caplog.text

    def test_typed_functions_when_table_missing_then_raise(self, monkeypatch, tmp_path) -> None:
        """Typed functions surface the configuration error."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "missing.json"))
        with pytest.raises(CalendarTableError):
            convert_ad_to_bs("2024-04-15")
        with pytest.raises(CalendarTableError):
            convert_bs_to_ad("2081-01-03")

    def test_string_functions_when_env_path_not_json_then_none(self, monkeypatch, tmp_path) -> None:
        """An override that is not a .json path is reported the same way."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "table.txt"))
        assert ad_to_bs("2024-04-15") is None

    def test_convert_when_input_malformed_then_lexical_without_table(self, monkeypatch, tmp_path) -> None:
        """Lexical failures are reported before any table is needed."""
        monkeypatch.setenv(TABLE_PATH_ENV, str(tmp_path / "missing.json"))
        assert convert_ad_to_bs("not a date").error is ConversionError.LEXICAL
        assert ad_to_bs("not a date") is None
