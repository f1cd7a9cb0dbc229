"""Unit tests for the datetime.date adapter."""

import logging
from datetime import date, datetime
from unittest.mock import Mock

import pytest

from rangepicker.dates.exceptions import InvalidDateError
from rangepicker.dates.formats import NATIVE_DATE_FORMATS, DisplayFormat
from rangepicker.dates.native_adapter import INVALID_DATE, NativeDateAdapter
from rangepicker.types import NameStyle


class TestNativeDateAdapterAccessors:
    """Tests for component accessors."""

    def test_accessors_use_zero_based_month_and_sunday_first_weekday(self, adapter) -> None:
        """Test that months count from 0 and Sunday is weekday 0."""
        value = date(2024, 3, 1)  # a Friday

        assert adapter.get_year(value) == 2024
        assert adapter.get_month(value) == 2
        assert adapter.get_date(value) == 1
        assert adapter.get_day_of_week(value) == 5
        assert adapter.get_day_of_week(date(2024, 3, 3)) == 0

    def test_create_date_round_trips_components(self, adapter) -> None:
        """Test that components of a created date match the request."""
        for year, month, day in [(2024, 1, 29), (2023, 11, 31), (1999, 0, 1)]:
            created = adapter.create_date(year, month, day)
            assert adapter.get_year(created) == year
            assert adapter.get_month(created) == month
            assert adapter.get_date(created) == day

    @pytest.mark.parametrize(
        "value,expected",
        [
            (date(2024, 2, 10), 29),
            (date(2023, 2, 10), 28),
            (date(2024, 4, 1), 30),
            (date(2024, 12, 31), 31),
            (date(9999, 12, 15), 31),
            (date(1, 1, 1), 31),
        ],
    )
    def test_get_num_days_in_month(self, adapter, value, expected) -> None:
        """Test month lengths including leap years and the ends of the year range."""
        assert adapter.get_num_days_in_month(value) == expected


class TestNativeDateAdapterCreateDate:
    """Tests for create_date contract checks and overflow."""

    def test_create_date_when_day_overflows_then_rolls_into_next_month(self, adapter) -> None:
        """Test that a day past the month's end spills into the following month."""
        assert adapter.create_date(2024, 1, 30) == date(2024, 3, 1)
        assert adapter.create_date(2023, 11, 32) == date(2024, 1, 1)

    @pytest.mark.parametrize("month", [-1, 12])
    def test_create_date_when_month_out_of_range_then_raises(self, adapter, month) -> None:
        """Test that months outside [0, 11] are a contract violation."""
        with pytest.raises(InvalidDateError, match="Invalid month index"):
            adapter.create_date(2024, month, 1)

    def test_create_date_when_day_below_one_then_raises(self, adapter) -> None:
        """Test that days below 1 are a contract violation."""
        with pytest.raises(InvalidDateError, match="Date has to be greater than 0"):
            adapter.create_date(2024, 0, 0)

    def test_invalid_date_error_is_value_error(self, adapter) -> None:
        """Test that contract violations can be caught as ValueError."""
        with pytest.raises(ValueError):
            adapter.create_date(2024, 13, 1)


class TestNativeDateAdapterArithmetic:
    """Tests for calendar arithmetic."""

    def test_add_calendar_months_when_target_shorter_then_clamps_to_last_day(
        self, adapter
    ) -> None:
        """Test that adding months never rolls into the month after the target."""
        assert adapter.add_calendar_months(date(2024, 1, 31), 1) == date(2024, 2, 29)
        assert adapter.add_calendar_months(date(2024, 3, 31), -1) == date(2024, 2, 29)
        assert adapter.add_calendar_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_add_calendar_months_when_no_clamp_then_reversible(self, adapter) -> None:
        """Test that adding then subtracting months returns the original date."""
        start = date(2024, 5, 15)
        for months in (1, 7, 13, -25):
            there = adapter.add_calendar_months(start, months)
            assert adapter.add_calendar_months(there, -months) == start

    def test_add_calendar_years_is_twelve_months(self, adapter) -> None:
        """Test that adding years clamps Feb 29 in non-leap years."""
        assert adapter.add_calendar_years(date(2024, 2, 29), 1) == date(2025, 2, 28)
        assert adapter.add_calendar_years(date(2024, 2, 29), 4) == date(2028, 2, 29)

    def test_add_calendar_days_crosses_years(self, adapter) -> None:
        """Test day arithmetic across a year boundary."""
        assert adapter.add_calendar_days(date(2023, 12, 31), 1) == date(2024, 1, 1)
        assert adapter.add_calendar_days(date(2024, 3, 1), -1) == date(2024, 2, 29)

    def test_add_calendar_days_when_leaving_supported_range_then_raises(self, adapter) -> None:
        """Test that overflowing the representable range is a contract violation."""
        with pytest.raises(InvalidDateError):
            adapter.add_calendar_days(date(9999, 12, 31), 1)


class TestNativeDateAdapterComparison:
    """Tests for compare, same_date and clamp."""

    def test_compare_date_sign(self, adapter) -> None:
        """Test that comparison is lexicographic by year, month, day."""
        assert adapter.compare_date(date(2024, 3, 10), date(2024, 3, 10)) == 0
        assert adapter.compare_date(date(2023, 12, 31), date(2024, 1, 1)) < 0
        assert adapter.compare_date(date(2024, 4, 1), date(2024, 3, 31)) > 0

    def test_compare_date_is_antisymmetric_and_transitive(self, adapter) -> None:
        """Test ordering properties across a sorted sample."""
        sample = [date(1999, 12, 31), date(2024, 1, 1), date(2024, 2, 29), date(2030, 6, 1)]
        for i, first in enumerate(sample):
            for second in sample[i + 1 :]:
                assert adapter.compare_date(first, second) < 0
                assert adapter.compare_date(second, first) > 0

    def test_same_date_handles_none_and_invalid(self, adapter) -> None:
        """Test same_date with None and the invalid sentinel."""
        assert adapter.same_date(date(2024, 1, 1), date(2024, 1, 1)) is True
        assert adapter.same_date(date(2024, 1, 1), date(2024, 1, 2)) is False
        assert adapter.same_date(None, None) is True
        assert adapter.same_date(None, date(2024, 1, 1)) is False
        assert adapter.same_date(INVALID_DATE, INVALID_DATE) is True
        assert adapter.same_date(INVALID_DATE, date(2024, 1, 1)) is False

    def test_clamp_date(self, adapter) -> None:
        """Test clamping against optional bounds."""
        low, high = date(2024, 1, 1), date(2024, 12, 31)

        assert adapter.clamp_date(date(2023, 6, 1), low, high) == low
        assert adapter.clamp_date(date(2025, 6, 1), low, high) == high
        assert adapter.clamp_date(date(2024, 6, 1), low, high) == date(2024, 6, 1)
        assert adapter.clamp_date(date(1900, 1, 1)) == date(1900, 1, 1)
        assert adapter.clamp_date(date(2025, 6, 1), None, high) == high


class TestNativeDateAdapterDeserialize:
    """Tests for deserialize and normalize."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("2024-03-10", date(2024, 3, 10)),
            ("2024-03-10T23:59:59Z", date(2024, 3, 10)),
            ("2024-03-10T08:00:00.250+02:00", date(2024, 3, 10)),
            (datetime(2024, 3, 10, 18, 30), date(2024, 3, 10)),
            (date(2024, 3, 10), date(2024, 3, 10)),
            ("", None),
            (None, None),
        ],
    )
    def test_deserialize_accepts_iso_and_dates(self, adapter, value, expected) -> None:
        """Test accepted inputs."""
        assert adapter.deserialize(value) == expected

    @pytest.mark.parametrize("value", ["2024-13-01", "10/03/2024", "tomorrow", 42, 3.5])
    def test_deserialize_when_unrecognized_then_invalid(self, adapter, value) -> None:
        """Test that anything else becomes the invalid sentinel."""
        assert adapter.deserialize(value) is INVALID_DATE
        assert adapter.is_valid(adapter.deserialize(value)) is False

    def test_normalize_collapses_invalid_to_none(self, adapter) -> None:
        """Test that invalid values never reach the engine."""
        assert adapter.normalize("garbage") is None
        assert adapter.normalize(INVALID_DATE) is None
        assert adapter.normalize("2024-03-10") == date(2024, 3, 10)

    def test_to_iso8601(self, adapter) -> None:
        """Test ISO rendering with zero padding."""
        assert adapter.to_iso8601(date(987, 3, 5)) == "0987-03-05"

    def test_is_date_instance(self, adapter) -> None:
        """Test date instance detection."""
        assert adapter.is_date_instance(date(2024, 1, 1)) is True
        assert adapter.is_date_instance(INVALID_DATE) is True
        assert adapter.is_date_instance("2024-01-01") is False


class TestNativeDateAdapterLocale:
    """Tests for locale-dependent behaviour."""

    @pytest.mark.parametrize(
        "locale,expected",
        [("en-US", 0), ("en-GB", 1), ("de-DE", 1), ("de", 1), ("ar", 6), ("pt-BR", 0), ("pt", 1)],
    )
    def test_get_first_day_of_week(self, locale, expected) -> None:
        """Test per-locale first weekday with language fallback."""
        assert NativeDateAdapter(locale=locale).get_first_day_of_week() == expected

    def test_get_first_day_of_week_override_wins(self) -> None:
        """Test that an explicit first weekday overrides the locale table."""
        assert NativeDateAdapter(locale="de-DE", first_day_of_week=0).get_first_day_of_week() == 0

    def test_english_name_tables(self, adapter) -> None:
        """Test the English name tables."""
        assert adapter.get_month_names(NameStyle.LONG)[0] == "January"
        assert adapter.get_month_names(NameStyle.SHORT)[8] == "Sep"
        assert adapter.get_day_of_week_names(NameStyle.LONG)[0] == "Sunday"
        narrow = adapter.get_day_of_week_names(NameStyle.NARROW)
        assert narrow == ["S", "M", "T", "W", "T", "F", "S"]
        assert adapter.get_date_names()[30] == "31"
        assert adapter.get_year_name(date(2024, 5, 1)) == "2024"

    def test_name_tables_when_locale_unavailable_then_english(self, caplog) -> None:
        """Test fallback to English names for a locale the host does not have."""
        adapter = NativeDateAdapter(locale="zz-ZZ")

        with caplog.at_level(logging.WARNING):
            names = adapter.get_month_names(NameStyle.LONG)

        assert names[0] == "January"

    def test_set_locale_notifies_callbacks(self, adapter) -> None:
        """Test that locale changes reach registered callbacks."""
        callback = Mock()
        adapter.add_locale_change_callback(callback)

        adapter.set_locale("en-GB")

        callback.assert_called_once_with("en-GB")
        assert adapter.get_first_day_of_week() == 1

    def test_set_locale_when_callback_fails_then_others_still_run(self, adapter, caplog) -> None:
        """Test that a failing callback is logged and does not stop the others."""
        failing = Mock(side_effect=RuntimeError("boom"))
        second = Mock()
        adapter.add_locale_change_callback(failing)
        adapter.add_locale_change_callback(second)

        with caplog.at_level(logging.ERROR):
            adapter.set_locale("en-AU")

        second.assert_called_once_with("en-AU")
        assert "Error in locale change callback" in caplog.text

    def test_remove_locale_change_callback(self, adapter) -> None:
        """Test that removed callbacks are not called."""
        callback = Mock()
        adapter.add_locale_change_callback(callback)
        adapter.remove_locale_change_callback(callback)

        adapter.set_locale("fr")

        callback.assert_not_called()


class TestNativeDateAdapterFormat:
    """Tests for display formatting."""

    def test_format_named_formats(self, adapter) -> None:
        """Test the default display formats."""
        value = date(2024, 1, 31)

        assert adapter.format(value, NATIVE_DATE_FORMATS.date_a11y_label) == "January 31, 2024"
        assert adapter.format(value, NATIVE_DATE_FORMATS.date_input) == "1/31/2024"
        assert adapter.format(value, NATIVE_DATE_FORMATS.month_year_label) == "Jan 2024"
        assert adapter.format(value, NATIVE_DATE_FORMATS.month_year_a11y_label) == "January 2024"

    def test_format_with_weekday_and_two_digit_parts(self, adapter) -> None:
        """Test weekday prefix and 2-digit parts."""
        value = date(2024, 1, 31)

        full = DisplayFormat(weekday="long", year="numeric", month="long", day="numeric")
        two_digit = DisplayFormat(year="2-digit", month="2-digit", day="2-digit")

        assert adapter.format(value, full) == "Wednesday, January 31, 2024"
        assert adapter.format(value, two_digit) == "01/31/24"
        assert adapter.format(value, DisplayFormat(weekday="short")) == "Wed"

    def test_format_when_invalid_then_raises(self, adapter) -> None:
        """Test that formatting the invalid sentinel is a contract violation."""
        with pytest.raises(InvalidDateError, match="Cannot format invalid date"):
            adapter.format(INVALID_DATE, NATIVE_DATE_FORMATS.date_input)


class TestNativeDateAdapterToday:
    """Tests for today()."""

    def test_today_in_timezone(self) -> None:
        """Test that today() resolves in the configured timezone."""
        adapter = NativeDateAdapter(timezone="Pacific/Kiritimati")

        assert isinstance(adapter.today(), date)

    def test_today_when_timezone_unknown_then_host_clock(self, caplog) -> None:
        """Test fallback to the host clock for an unknown timezone."""
        adapter = NativeDateAdapter(timezone="Mars/Olympus_Mons")

        with caplog.at_level(logging.WARNING):
            today = adapter.today()

        assert today == date.today()
        assert "Unknown timezone" in caplog.text
