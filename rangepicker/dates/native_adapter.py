"""Date adapter for the standard library ``datetime.date`` type."""

import calendar
import locale as _locale
import re
from datetime import date, datetime, timedelta
from typing import Any, Optional

import pytz
from dateutil.relativedelta import relativedelta

from ..types import NameStyle
from ..utils.logging import get_logger
from .adapter import DateAdapter
from .exceptions import InvalidDateError
from .formats import DisplayFormat

logger = get_logger(__name__)

DEFAULT_MONTH_NAMES = {
    NameStyle.LONG: [
        "January", "February", "March", "April", "May", "June", "July",
        "August", "September", "October", "November", "December",
    ],
    NameStyle.SHORT: [
        "Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    ],
    NameStyle.NARROW: ["J", "F", "M", "A", "M", "J", "J", "A", "S", "O", "N", "D"],
}

DEFAULT_DATE_NAMES = [str(i + 1) for i in range(31)]

DEFAULT_DAY_OF_WEEK_NAMES = {
    NameStyle.LONG: ["Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"],
    NameStyle.SHORT: ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"],
    NameStyle.NARROW: ["S", "M", "T", "W", "T", "F", "S"],
}

# First weekday per locale (0 = Sunday), keyed by lower-case locale tag.
# Locales absent here fall back to their two-letter language, then to Sunday.
FIRST_DAY_OF_WEEK = {
    "af": 1, "ar": 6, "ar-ly": 6, "ar-ma": 6, "ar-tn": 1, "az": 1, "be": 1, "bg": 1, "bm": 1,
    "br": 1, "bs": 1, "ca": 1, "cs": 1, "cv": 1, "cy": 1, "da": 1, "de": 1, "de-at": 1,
    "de-ch": 1, "el": 1, "en-au": 1, "en-gb": 1, "en-ie": 1, "en-nz": 1, "eo": 1, "es": 1,
    "es-do": 1, "et": 1, "eu": 1, "fa": 6, "fi": 1, "fo": 1, "fr": 1, "fr-ch": 1, "fy": 1,
    "gd": 1, "gl": 1, "gom-latn": 1, "hr": 1, "hu": 1, "hy-am": 1, "id": 1, "is": 1, "it": 1,
    "jv": 1, "ka": 1, "kk": 1, "km": 1, "ky": 1, "lb": 1, "lt": 1, "lv": 1, "me": 1, "mi": 1,
    "mk": 1, "ms": 1, "ms-my": 1, "mt": 1, "my": 1, "nb": 1, "nl": 1, "nl-be": 1, "nn": 1,
    "pl": 1, "pt": 1, "pt-br": 0, "ro": 1, "ru": 1, "sd": 1, "se": 1, "sk": 1, "sl": 1,
    "sq": 1, "sr": 1, "sr-cyrl": 1, "ss": 1, "sv": 1, "sw": 1, "tet": 1, "tg": 1, "tl-ph": 1,
    "tlh": 1, "tr": 1, "tzl": 1, "tzm": 6, "tzm-latn": 6, "ug-cn": 1, "uk": 1, "ur": 1,
    "uz": 1, "uz-latn": 1, "vi": 1, "x-pseudo": 1, "yo": 1, "zh-cn": 1,
}

# Shape of an RFC 3339 date, optionally followed by a time part. Out-of-range
# fields still match; fromisoformat rejects them afterwards.
ISO_8601_REGEX = re.compile(
    r"^\d{4}-\d{2}-\d{2}(?:T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|(?:[+-]\d{2}:\d{2}))?)?$"
)

_DIRECTIONALITY_CHARACTERS = re.compile("[\u200e\u200f]")


class InvalidDate:
    """Sentinel standing in for a date that could not be resolved."""

    _instance: Optional["InvalidDate"] = None

    def __new__(cls) -> "InvalidDate":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "InvalidDate()"


INVALID_DATE = InvalidDate()


class NativeDateAdapter(DateAdapter[date]):
    """Adapts ``datetime.date`` for use by the calendar engine.

    Name tables come from the platform locale database through the standard
    ``calendar`` module; English tables are used for English locales and
    whenever the requested locale is not installed.

    Args:
        locale: Locale tag such as ``"en-US"`` or ``"de"``
        timezone: IANA timezone deciding what ``today()`` returns
        first_day_of_week: Override of the locale's first weekday (0 = Sunday)
    """

    def __init__(
        self,
        locale: Optional[str] = "en-US",
        timezone: Optional[str] = None,
        first_day_of_week: Optional[int] = None,
    ) -> None:
        super().__init__(locale)
        self.timezone = timezone
        self._first_day_of_week = first_day_of_week

    @classmethod
    def from_options(cls, options: Any) -> "NativeDateAdapter":
        """Build an adapter from a ``CalendarOptions`` instance."""
        return cls(
            locale=options.locale,
            timezone=options.timezone,
            first_day_of_week=options.first_day_of_week,
        )

    def get_year(self, date: date) -> int:
        return date.year

    def get_month(self, date: date) -> int:
        return date.month - 1

    def get_date(self, date: date) -> int:
        return date.day

    def get_day_of_week(self, date: date) -> int:
        # datetime counts Monday as 0; the contract counts Sunday as 0
        return (date.weekday() + 1) % 7

    def get_num_days_in_month(self, date: date) -> int:
        return calendar.monthrange(date.year, date.month)[1]

    def get_month_names(self, style: NameStyle) -> list[str]:
        style = NameStyle(style)
        table = self._localized_names("month")
        if table is None:
            return list(DEFAULT_MONTH_NAMES[style])
        return table[style]

    def get_date_names(self) -> list[str]:
        return list(DEFAULT_DATE_NAMES)

    def get_day_of_week_names(self, style: NameStyle) -> list[str]:
        style = NameStyle(style)
        table = self._localized_names("weekday")
        if table is None:
            return list(DEFAULT_DAY_OF_WEEK_NAMES[style])
        return table[style]

    def get_year_name(self, date: date) -> str:
        return str(self.get_year(date))

    def get_first_day_of_week(self) -> int:
        if self._first_day_of_week is not None:
            return self._first_day_of_week
        if not self.locale:
            return 0
        # Locales like ru-RU are often over-specified, so fall back to the language
        tag = self.locale.lower().replace("_", "-")
        if tag in FIRST_DAY_OF_WEEK:
            return FIRST_DAY_OF_WEEK[tag]
        return FIRST_DAY_OF_WEEK.get(tag[:2], 0)

    def clone(self, date: date) -> date:
        return date.replace()

    def create_date(self, year: int, month: int, date: int) -> date:
        if month < 0 or month > 11:
            raise InvalidDateError(
                f'Invalid month index "{month}". Month index has to be between 0 and 11.',
                {"month": month},
            )
        if date < 1:
            raise InvalidDateError(
                f'Invalid date "{date}". Date has to be greater than 0.', {"date": date}
            )
        return self._create_date_with_overflow(year, month, date)

    def today(self) -> date:
        if self.timezone:
            try:
                return datetime.now(pytz.timezone(self.timezone)).date()
            except pytz.UnknownTimeZoneError:
                logger.warning(f"Unknown timezone '{self.timezone}', falling back to host clock")
        return date.today()

    def format(self, date: date, display_format: DisplayFormat) -> str:
        if not self.is_valid(date):
            raise InvalidDateError("NativeDateAdapter: Cannot format invalid date.")

        year_text = None
        if display_format.year == "numeric":
            year_text = str(date.year)
        elif display_format.year == "2-digit":
            year_text = f"{date.year % 100:02d}"

        day_text = None
        if display_format.day == "numeric":
            day_text = str(date.day)
        elif display_format.day == "2-digit":
            day_text = f"{date.day:02d}"

        month_style = display_format.month
        if month_style in ("long", "short", "narrow"):
            # Textual month: "January 31, 2024" / "Jan 2024"
            text = self.get_month_names(NameStyle(month_style))[self.get_month(date)]
            if day_text:
                text = f"{text} {day_text}"
            if year_text:
                text = f"{text}, {year_text}" if day_text else f"{text} {year_text}"
        else:
            # Numeric month: "1/31/2024"
            month_text = None
            if month_style == "numeric":
                month_text = str(date.month)
            elif month_style == "2-digit":
                month_text = f"{date.month:02d}"
            text = "/".join(part for part in (month_text, day_text, year_text) if part)

        if display_format.weekday:
            weekday = self.get_day_of_week_names(NameStyle(display_format.weekday))[
                self.get_day_of_week(date)
            ]
            text = f"{weekday}, {text}" if text else weekday

        return _DIRECTIONALITY_CHARACTERS.sub("", text)

    def add_calendar_years(self, date: date, years: int) -> date:
        return self.add_calendar_months(date, years * 12)

    def add_calendar_months(self, date: date, months: int) -> date:
        # relativedelta clamps to the last day when the target month is shorter
        try:
            return date + relativedelta(months=months)
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(
                f"Adding {months} month(s) to {date} leaves the supported year range"
            ) from e

    def add_calendar_days(self, date: date, days: int) -> date:
        try:
            return date + timedelta(days=days)
        except OverflowError as e:
            raise InvalidDateError(
                f"Adding {days} day(s) to {date} leaves the supported year range"
            ) from e

    def to_iso8601(self, date: date) -> str:
        return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"

    def deserialize(self, value: Any) -> Optional[Any]:
        """Accept dates, ``None``, and ISO 8601 strings.

        The empty string deserializes to ``None``. Any time part of a string or
        ``datetime`` is discarded, the engine works at day granularity.
        Everything else becomes the invalid sentinel.
        """
        if isinstance(value, str):
            if not value:
                return None
            if ISO_8601_REGEX.match(value):
                try:
                    return date.fromisoformat(value[:10])
                except ValueError:
                    logger.debug(f"Rejected out-of-range ISO 8601 value {value!r}")
            return self.invalid()
        if isinstance(value, datetime):
            return value.date()
        return super().deserialize(value)

    def is_date_instance(self, obj: Any) -> bool:
        return isinstance(obj, (date, InvalidDate))

    def is_valid(self, value: Any) -> bool:
        return isinstance(value, date)

    def invalid(self) -> Any:
        return INVALID_DATE

    def _create_date_with_overflow(self, year: int, month: int, day: int) -> date:
        """Create a date letting month and day overflow into later (or earlier) periods."""
        extra_years, month = divmod(month, 12)
        try:
            return date(year + extra_years, month + 1, 1) + timedelta(days=day - 1)
        except (ValueError, OverflowError) as e:
            raise InvalidDateError(
                f"Year {year + extra_years} is outside the supported range",
                {"year": year + extra_years, "month": month, "date": day},
            ) from e

    def _localized_names(self, kind: str) -> Optional[dict[NameStyle, list[str]]]:
        """Read month or weekday names for the current locale.

        Returns ``None`` when the English defaults apply, either because the
        locale is English or because it is not installed on this host.
        """
        if not self.locale or self.locale.lower().startswith("en"):
            return None

        posix_locale = _locale.normalize(self.locale.replace("-", "_"))
        try:
            with calendar.different_locale(posix_locale):
                if kind == "month":
                    long_names = [calendar.month_name[i] for i in range(1, 13)]
                    short_names = [calendar.month_abbr[i] for i in range(1, 13)]
                else:
                    # calendar counts Monday as 0; rotate so Sunday comes first
                    long_names = [calendar.day_name[(i + 6) % 7] for i in range(7)]
                    short_names = [calendar.day_abbr[(i + 6) % 7] for i in range(7)]
        except _locale.Error:
            logger.warning(f"Locale '{self.locale}' is not available, using English names")
            return None

        long_names = [_DIRECTIONALITY_CHARACTERS.sub("", name) for name in long_names]
        short_names = [_DIRECTIONALITY_CHARACTERS.sub("", name) for name in short_names]
        return {
            NameStyle.LONG: long_names,
            NameStyle.SHORT: short_names,
            NameStyle.NARROW: [name[:1].upper() for name in long_names],
        }
