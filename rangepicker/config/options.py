"""
Calendar options using Pydantic for validation and type safety.

``CalendarOptions`` gathers every host-tunable behaviour of a calendar
instance. It can be built directly, or loaded from a YAML file with
``load_options``.
"""

import re
from pathlib import Path
from typing import Any, Optional, Union

import pytz
import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..types import PeriodLabelOrder, ViewMode
from ..utils.logging import get_logger
from .exceptions import OptionsValidationError

logger = get_logger(__name__)

_LOCALE_PATTERN = re.compile(r"^[A-Za-z]{2,3}(?:[-_][A-Za-z0-9]{2,8})*$")


class CalendarOptions(BaseModel):
    """Behavioural options for a calendar instance.

    Attributes:
        locale: BCP 47 style locale used for name tables and first day of week
        timezone: IANA timezone that decides what "today" is; host clock if unset
        first_day_of_week: Override for the locale's first weekday (0 = Sunday)
        start_view: View mode the calendar opens in
        order_period_label: Cycle order when the period label is clicked
        range_mode: Select a date range instead of a single date
        range_hover_effect: Track the hovered cell to preview a pending range
        select_first_date_on_close: Commit a pending begin as a one-day range on close
        rtl: Right-to-left layout; mirrors left/right keyboard navigation

    Example:
        >>> options = CalendarOptions(locale="de-DE", range_mode=True)
        >>> options.start_view
        <ViewMode.MONTH: 'month'>
    """

    model_config = ConfigDict(extra="forbid")

    locale: str = Field(default="en-US", description="Locale for names and first weekday")
    timezone: Optional[str] = Field(default=None, description="IANA timezone for today()")
    first_day_of_week: Optional[int] = Field(
        default=None, ge=0, le=6, description="First weekday override, 0 = Sunday"
    )
    start_view: ViewMode = Field(default=ViewMode.MONTH, description="Initial view mode")
    order_period_label: PeriodLabelOrder = Field(
        default=PeriodLabelOrder.MULTI_YEAR, description="Period label cycle order"
    )
    range_mode: bool = Field(default=False, description="Select a range of dates")
    range_hover_effect: bool = Field(default=True, description="Preview range on hover")
    select_first_date_on_close: bool = Field(
        default=False, description="Commit pending begin as one-day range on close"
    )
    rtl: bool = Field(default=False, description="Right-to-left layout")

    @field_validator("locale")
    @classmethod
    def validate_locale(cls, v: str) -> str:
        """Validate the locale tag shape.

        Args:
            v: The locale string to validate

        Returns:
            The stripped locale string

        Raises:
            OptionsValidationError: If the locale is not a language[-region] tag
        """
        v = v.strip()
        if not _LOCALE_PATTERN.match(v):
            raise OptionsValidationError(
                "Locale must look like 'en' or 'en-US'", field_name="locale", field_value=v
            )
        return v

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, v: Optional[str]) -> Optional[str]:
        """Validate that the timezone is known to pytz.

        Args:
            v: The timezone name to validate

        Returns:
            The timezone name, or None when unset or blank

        Raises:
            OptionsValidationError: If the timezone is unknown
        """
        if v is None:
            return None
        v = v.strip()
        if not v:
            return None
        try:
            pytz.timezone(v)
        except pytz.UnknownTimeZoneError as e:
            raise OptionsValidationError(
                f"Unknown timezone: {v}",
                field_name="timezone",
                field_value=v,
                validation_errors=[str(e)],
            ) from e
        return v


def load_options(path: Union[str, Path], **overrides: Any) -> CalendarOptions:
    """Load ``CalendarOptions`` from a YAML file.

    A missing file yields default options. Keyword overrides win over values
    read from the file.

    Args:
        path: Path to the YAML file
        **overrides: Option values that take precedence over the file

    Returns:
        Validated calendar options

    Raises:
        OptionsValidationError: If the document is not a mapping or cannot be parsed
    """
    options_path = Path(path)
    data: dict[str, Any] = {}

    if options_path.exists():
        try:
            with options_path.open(encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise OptionsValidationError(
                f"Could not parse options file {options_path}",
                validation_errors=[str(e)],
                details={"file_path": str(options_path)},
            ) from e

        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise OptionsValidationError(
                "Options file must contain a mapping",
                field_value=type(loaded).__name__,
                details={"file_path": str(options_path)},
            )
        data.update(loaded)
        logger.debug(f"Loaded {len(loaded)} option(s) from {options_path}")
    else:
        logger.debug(f"Options file {options_path} not found, using defaults")

    data.update(overrides)
    return CalendarOptions(**data)
