"""Unit tests for the month view builder."""

from datetime import date

import pytest

from rangepicker.calendar.keys import KeyCode
from rangepicker.calendar.month_view import MonthView
from rangepicker.dates.native_adapter import NativeDateAdapter
from rangepicker.utils.exceptions import MissingProviderError


@pytest.fixture
def make_view(adapter, formats):
    """Factory for month views anchored on 2024-03-15 by default."""

    def _make(active_date=date(2024, 3, 15), **kwargs) -> MonthView:
        return MonthView(adapter, formats, active_date, **kwargs)

    return _make


class TestMonthViewGrid:
    """Tests for grid construction."""

    def test_first_week_offset_and_rows(self, make_view) -> None:
        """Test that March 2024 (starting Friday) is laid out under Sunday-first columns."""
        view = make_view()

        assert view.first_week_offset == 5
        assert [len(row) for row in view.rows] == [2, 7, 7, 7, 7, 1]
        assert [cell.value for cell in view.rows[1]] == [3, 4, 5, 6, 7, 8, 9]
        assert view.rows[-1][0].value == 31

    def test_first_week_offset_follows_first_day_of_week(self, formats) -> None:
        """Test that a Monday-first locale shifts the offset."""
        view = MonthView(NativeDateAdapter(locale="de-DE"), formats, date(2024, 3, 15))

        assert view.first_week_offset == 4
        assert len(view.rows[0]) == 3

    def test_month_starting_on_first_day_of_week_has_full_first_row(self, make_view) -> None:
        """Test a month whose first day heads the grid."""
        view = make_view(date(2024, 9, 10))

        assert view.first_week_offset == 0
        assert len(view.rows[0]) == 7

    def test_leap_february(self, make_view) -> None:
        """Test that February 2024 has 29 cells."""
        view = make_view(date(2024, 2, 10))

        assert sum(len(row) for row in view.rows) == 29

    def test_last_representable_month(self, make_view) -> None:
        """Test that December 9999 builds a full grid."""
        view = make_view(date(9999, 12, 15))

        assert sum(len(row) for row in view.rows) == 31
        assert view.rows[-1][-1].value == 31

    def test_cell_texts_and_labels(self, make_view) -> None:
        """Test display text and accessible labels of day cells."""
        cell = make_view().cell_for_value(31)

        assert cell.display_text == "31"
        assert cell.aria_label == "March 31, 2024"
        assert cell.enabled is True
        assert cell.style_tags is None

    def test_weekday_labels_rotate_with_first_day_of_week(self, formats) -> None:
        """Test that weekday headers start on the locale's first day."""
        us_view = MonthView(NativeDateAdapter(locale="en-US"), formats, date(2024, 3, 15))
        gb_view = MonthView(NativeDateAdapter(locale="en-GB"), formats, date(2024, 3, 15))

        assert us_view.weekdays[0].long == "Sunday"
        assert us_view.weekdays[0].narrow == "S"
        assert gb_view.weekdays[0].long == "Monday"
        assert gb_view.weekdays[-1].long == "Sunday"

    def test_month_label_is_upper_case_short_name(self, make_view) -> None:
        """Test the grid label."""
        assert make_view().month_label == "MAR"

    def test_cells_enabled_by_min_max_and_filter(self, make_view) -> None:
        """Test that a day is enabled only within bounds and when passing the filter."""
        view = make_view(
            min_date=date(2024, 3, 5),
            max_date=date(2024, 3, 25),
            date_filter=lambda d: d.weekday() < 5,
        )

        assert view.is_enabled(4) is False  # before min
        assert view.is_enabled(5) is True  # min itself, a Tuesday
        assert view.is_enabled(9) is False  # Saturday
        assert view.is_enabled(25) is True  # max itself, a Monday
        assert view.is_enabled(26) is False  # after max
        assert view.is_enabled(32) is False  # not on the grid

    def test_date_class_hook_fills_style_tags(self, make_view) -> None:
        """Test that the date class hook contributes style tags."""
        view = make_view(date_class=lambda d: ["holiday"] if d.day == 17 else None)

        assert view.cell_for_value(17).has_tag("holiday")
        assert view.cell_for_value(16).style_tags is None

    def test_selected_and_today_values(self, adapter, formats) -> None:
        """Test that selected/today only count within the displayed month."""
        view = MonthView(adapter, formats, adapter.today(), selected=adapter.today())
        assert view.today_value == adapter.get_date(adapter.today())
        assert view.selected_value == adapter.get_date(adapter.today())

        view.selected = date(1999, 1, 1)
        assert view.selected_value is None

    def test_selected_in_same_month_of_other_year_is_not_selected(self, make_view) -> None:
        """Test that "in current month" means same month and same year."""
        view = make_view(selected=date(2023, 3, 15))

        assert view.selected_value is None

    def test_missing_adapter_raises(self, formats) -> None:
        """Test that a missing adapter is a configuration error."""
        with pytest.raises(MissingProviderError, match="DateAdapter"):
            MonthView(None, formats)

    def test_missing_formats_raises(self, adapter) -> None:
        """Test that a missing formats provider is a configuration error."""
        with pytest.raises(MissingProviderError, match="DateDisplayFormats"):
            MonthView(adapter, None)


class TestMonthViewActiveDate:
    """Tests for active date handling."""

    def test_active_date_is_clamped(self, make_view) -> None:
        """Test clamping of the active date on every assignment."""
        view = make_view(min_date=date(2024, 3, 10), max_date=date(2024, 4, 20))
        view.active_date = date(2024, 1, 1)
        assert view.active_date == date(2024, 3, 10)

        view.active_date = date(2025, 1, 1)
        assert view.active_date == date(2024, 4, 20)

    def test_active_date_when_invalid_then_today(self, adapter, make_view) -> None:
        """Test that invalid active dates fall back to today."""
        view = make_view()

        view.active_date = "not a date"

        assert view.active_date == adapter.today()

    def test_grid_rebuilt_only_when_month_changes(self, make_view) -> None:
        """Test that moving within the month keeps the grid."""
        view = make_view()
        rows = view.rows

        view.active_date = date(2024, 3, 1)
        assert view.rows is rows

        view.active_date = date(2024, 4, 1)
        assert view.rows is not rows
        assert view.month_label == "APR"

    def test_active_cell_is_day_index(self, make_view) -> None:
        """Test the active cell index."""
        assert make_view().active_cell == 14


class TestMonthViewRangeState:
    """Tests for range specific values."""

    def test_range_full_when_month_inside_range(self, make_view) -> None:
        """Test that a month wholly inside the range is marked full."""
        view = make_view(
            date(2024, 2, 10),
            range_mode=True,
            begin_date=date(2024, 1, 15),
            end_date=date(2024, 4, 10),
        )

        assert view.range_full is True
        assert view.begin_value is None
        assert view.end_value is None

    def test_range_full_false_when_month_holds_an_endpoint(self, make_view) -> None:
        """Test that a month containing an endpoint is not full."""
        view = make_view(
            date(2024, 1, 20),
            range_mode=True,
            begin_date=date(2024, 1, 15),
            end_date=date(2024, 4, 10),
        )

        assert view.range_full is False
        assert view.begin_value == 15
        assert view.end_value is None

    def test_range_full_false_when_month_outside_range(self, make_view) -> None:
        """Test a month after the range."""
        view = make_view(
            date(2024, 6, 1),
            range_mode=True,
            begin_date=date(2024, 1, 15),
            end_date=date(2024, 4, 10),
        )

        assert view.range_full is False

    def test_range_values_ignored_outside_range_mode(self, make_view) -> None:
        """Test that single selection mode never reports range values."""
        view = make_view(begin_date=date(2024, 3, 1), end_date=date(2024, 3, 9))

        assert view.begin_value is None
        assert view.end_value is None
        assert view.range_full is False

    def test_recomputed_when_active_month_changes(self, make_view) -> None:
        """Test that moving into the range recomputes derived values."""
        view = make_view(
            date(2024, 1, 20),
            range_mode=True,
            begin_date=date(2024, 1, 15),
            end_date=date(2024, 4, 10),
        )

        view.active_date = date(2024, 3, 1)

        assert view.range_full is True

    def test_is_before_selected(self, make_view) -> None:
        """Test the pending begin lying after the displayed month."""
        view = make_view(
            date(2024, 3, 15),
            range_mode=True,
            begin_date=date(2024, 5, 10),
            end_date=date(2024, 5, 10),
            begin_date_selected=date(2024, 5, 10),
        )
        assert view.is_before_selected is True

        view.set_range_state(date(2024, 1, 10), date(2024, 1, 10), date(2024, 1, 10))
        assert view.is_before_selected is False

        view.set_range_state(date(2024, 5, 10), date(2024, 5, 10), None)
        assert view.is_before_selected is False


class TestMonthViewKeyboard:
    """Tests for keyboard navigation in the month grid."""

    @pytest.mark.parametrize(
        "key,expected",
        [
            (KeyCode.LEFT_ARROW, date(2024, 3, 14)),
            (KeyCode.RIGHT_ARROW, date(2024, 3, 16)),
            (KeyCode.UP_ARROW, date(2024, 3, 8)),
            (KeyCode.DOWN_ARROW, date(2024, 3, 22)),
            (KeyCode.HOME, date(2024, 3, 1)),
            (KeyCode.END, date(2024, 3, 31)),
            (KeyCode.PAGE_UP, date(2024, 2, 15)),
            (KeyCode.PAGE_DOWN, date(2024, 4, 15)),
        ],
    )
    def test_navigation_keys(self, make_view, key, expected) -> None:
        """Test the deltas of each navigation key."""
        view = make_view()

        outcome = view.handle_keydown(key)

        assert outcome.handled is True
        assert outcome.active_date_changed is True
        assert view.active_date == expected

    def test_page_keys_with_modifier_move_a_year(self, make_view) -> None:
        """Test Page Up/Down with the modifier held."""
        view = make_view(date(2024, 2, 29))

        view.handle_keydown(KeyCode.PAGE_DOWN, alt_key=True)

        assert view.active_date == date(2025, 2, 28)

    def test_page_down_clamps_day(self, make_view) -> None:
        """Test that moving a month never overflows into the month after."""
        view = make_view(date(2024, 1, 31))

        view.handle_keydown(KeyCode.PAGE_DOWN)

        assert view.active_date == date(2024, 2, 29)

    def test_right_to_left_mirrors_arrows(self, make_view) -> None:
        """Test that left and right swap under RTL layout."""
        view = make_view(rtl=True)

        view.handle_keydown(KeyCode.LEFT_ARROW)

        assert view.active_date == date(2024, 3, 16)

    def test_navigation_clamped_to_max(self, make_view) -> None:
        """Test that keyboard moves stay within bounds."""
        view = make_view(date(2024, 3, 18), max_date=date(2024, 3, 20))

        outcome = view.handle_keydown(KeyCode.DOWN_ARROW)

        assert view.active_date == date(2024, 3, 20)
        assert outcome.active_date_changed is True

    def test_navigation_at_bound_reports_no_change(self, make_view) -> None:
        """Test a key press that cannot move the active date."""
        view = make_view(date(2024, 3, 20), max_date=date(2024, 3, 20))

        outcome = view.handle_keydown(KeyCode.RIGHT_ARROW)

        assert outcome.handled is True
        assert outcome.active_date_changed is False

    @pytest.mark.parametrize(
        "active_date,key",
        [
            (date(9999, 12, 31), KeyCode.RIGHT_ARROW),
            (date(9999, 12, 31), KeyCode.DOWN_ARROW),
            (date(9999, 12, 15), KeyCode.PAGE_DOWN),
            (date(1, 1, 1), KeyCode.LEFT_ARROW),
            (date(1, 1, 15), KeyCode.PAGE_UP),
        ],
    )
    def test_navigation_past_representable_dates_is_ignored(
        self, make_view, active_date, key
    ) -> None:
        """Test that moves beyond year 1 or 9999 leave the active date alone."""
        view = make_view(active_date)

        outcome = view.handle_keydown(key)

        assert outcome.handled is True
        assert outcome.active_date_changed is False
        assert view.active_date == active_date

    def test_enter_activates_active_day(self, make_view) -> None:
        """Test that Enter activates the active day."""
        outcome = make_view().handle_keydown(KeyCode.ENTER)

        assert outcome.activated_value == 15
        assert outcome.active_date_changed is False

    def test_space_when_filtered_out_then_nothing_activated(self, make_view) -> None:
        """Test that Space does not activate a day failing the filter."""
        view = make_view(date_filter=lambda d: d.day != 15)

        outcome = view.handle_keydown(KeyCode.SPACE)

        assert outcome.handled is True
        assert outcome.activated_value is None

    def test_unknown_key_not_handled(self, make_view) -> None:
        """Test keys without meaning in the month grid."""
        outcome = make_view().handle_keydown(KeyCode.ESCAPE)

        assert outcome.handled is False

    def test_keyboard_moves_drive_hover_preview(self, make_view) -> None:
        """Test that the hover value follows the keyboard."""
        view = make_view(range_mode=True)

        view.handle_keydown(KeyCode.RIGHT_ARROW)

        assert view.hover_value == 16

    def test_keyboard_moves_leave_hover_alone_without_hover_effect(self, make_view) -> None:
        """Test that disabling the hover effect stops hover tracking."""
        view = make_view(range_mode=True, range_hover_effect=False)

        view.handle_keydown(KeyCode.RIGHT_ARROW)

        assert view.hover_value is None
