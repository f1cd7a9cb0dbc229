"""
Display formats handed to the engine alongside a DateAdapter.

A ``DisplayFormat`` names which date parts to render and how, mirroring the
options of an Intl-style date formatter. ``DateDisplayFormats`` bundles the
formats the view builders ask for when producing accessible labels and the
period label.
"""

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from ..config.exceptions import OptionsValidationError


class DisplayFormat(BaseModel):
    """Which parts of a date to render, and in which style.

    Example:
        >>> DisplayFormat(year="numeric", month="long", day="numeric")
        DisplayFormat(year='numeric', month='long', day='numeric', weekday=None)
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    year: Optional[Literal["numeric", "2-digit"]] = None
    month: Optional[Literal["numeric", "2-digit", "long", "short", "narrow"]] = None
    day: Optional[Literal["numeric", "2-digit"]] = None
    weekday: Optional[Literal["long", "short", "narrow"]] = None

    @model_validator(mode="after")
    def validate_has_part(self) -> "DisplayFormat":
        """Require at least one date part.

        Raises:
            OptionsValidationError: If no part is requested
        """
        if not (self.year or self.month or self.day or self.weekday):
            raise OptionsValidationError(
                "Display format must request at least one of year, month, day, weekday"
            )
        return self


class DateDisplayFormats(BaseModel):
    """Named display formats used by the calendar views.

    Attributes:
        date_input: Compact date rendering (e.g. 1/31/2024)
        month_year_label: Period label of the month view (e.g. Jan 2024)
        date_a11y_label: Accessible label of a day cell (e.g. January 31, 2024)
        month_year_a11y_label: Accessible label of a month cell (e.g. January 2024)
    """

    model_config = ConfigDict(frozen=True)

    date_input: DisplayFormat = Field(
        default=DisplayFormat(year="numeric", month="numeric", day="numeric")
    )
    month_year_label: DisplayFormat = Field(default=DisplayFormat(year="numeric", month="short"))
    date_a11y_label: DisplayFormat = Field(
        default=DisplayFormat(year="numeric", month="long", day="numeric")
    )
    month_year_a11y_label: DisplayFormat = Field(
        default=DisplayFormat(year="numeric", month="long")
    )


NATIVE_DATE_FORMATS = DateDisplayFormats()
