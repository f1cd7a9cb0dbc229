"""Shared fixtures for rangepicker tests."""

from datetime import date
from typing import Any, Callable

import pytest

from rangepicker.calendar.controller import CalendarController
from rangepicker.config.options import CalendarOptions
from rangepicker.dates.formats import NATIVE_DATE_FORMATS, DateDisplayFormats
from rangepicker.dates.native_adapter import NativeDateAdapter


@pytest.fixture
def adapter() -> NativeDateAdapter:
    """Create an en-US adapter over datetime.date."""
    return NativeDateAdapter(locale="en-US")


@pytest.fixture
def formats() -> DateDisplayFormats:
    """Default display formats."""
    return NATIVE_DATE_FORMATS


@pytest.fixture
def make_controller(
    adapter: NativeDateAdapter, formats: DateDisplayFormats
) -> Callable[..., CalendarController]:
    """Factory building controllers anchored on 2024-03-15 unless told otherwise.

    Keyword arguments that are CalendarOptions fields go into the options,
    everything else is passed to the controller.
    """
    option_fields = set(CalendarOptions.model_fields)

    def _make(**kwargs: Any) -> CalendarController:
        option_values = {k: kwargs.pop(k) for k in list(kwargs) if k in option_fields}
        kwargs.setdefault("start_at", date(2024, 3, 15))
        return CalendarController(
            adapter, formats, CalendarOptions(**option_values), **kwargs
        )

    return _make
