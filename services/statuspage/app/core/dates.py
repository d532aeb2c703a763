"""
Timezone- and locale-aware date handling for presenters.

Timestamps are persisted in the application timezone and shown in the
display timezone configured for the status page. ``DateFactory.make`` does
that conversion and returns a ``DisplayDate`` exposing the formats the
templates use.
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Callable, Optional
from zoneinfo import ZoneInfo

from babel.dates import TIMEDELTA_UNITS, format_datetime, format_timedelta

from .config import get_settings

DEFAULT_INCIDENT_DATE_FORMAT = "EEEE d MMMM y HH:mm:ss"
DATETIMEPICKER_FORMAT = "%d/%m/%Y %H:%M"


def _truncate(delta: timedelta) -> timedelta:
    """Floor ``delta`` to whole multiples of its largest non-zero unit."""
    seconds = abs(delta.total_seconds())
    for _unit, length in TIMEDELTA_UNITS:
        if seconds >= length:
            whole = timedelta(seconds=seconds // length * length)
            return whole if delta > timedelta(0) else -whole
    # Under a second reads as "1 second ago"
    return timedelta(seconds=-1)


def app_now() -> datetime:
    """Current time in the application timezone; the default for new records."""
    return datetime.now(ZoneInfo(get_settings().app_timezone))


def to_app_timezone(value: Optional[datetime]) -> Optional[datetime]:
    """Express a client-supplied datetime in the application timezone.

    SQLite keeps only the wall-clock part of a stored datetime and hands it
    back naive, so values must be written in the zone they are read in.
    Naive input is taken to be app-timezone time already.
    """
    if value is None:
        return None
    app_timezone = ZoneInfo(get_settings().app_timezone)
    if value.tzinfo is None:
        return value.replace(tzinfo=app_timezone)
    return value.astimezone(app_timezone)


class DisplayDate:
    """A timestamp converted to the display timezone."""

    def __init__(self, value: datetime, factory: DateFactory) -> None:
        self.value = value
        self.factory = factory

    def format(self, pattern: str) -> str:
        """Format with a CLDR pattern in the factory's locale."""
        return format_datetime(
            self.value,
            pattern,
            tzinfo=self.factory.display_timezone,
            locale=self.factory.locale,
        )

    def strftime(self, fmt: str) -> str:
        return self.value.strftime(fmt)

    def to_iso8601_string(self) -> str:
        return self.value.replace(microsecond=0).isoformat()

    def to_date_time_string(self) -> str:
        return self.value.strftime("%Y-%m-%d %H:%M:%S")

    def diff_for_humans(self, other: Optional[datetime] = None) -> str:
        """Relative time against ``other`` (default: now), e.g. "2 hours ago".

        The count is truncated to the largest whole unit, so 90 minutes reads
        "1 hour ago" and 55 minutes reads "55 minutes ago".
        """
        reference = self.factory.now() if other is None else self.factory.make(other).value
        delta = _truncate(self.value - reference)
        return format_timedelta(
            delta, threshold=1, add_direction=True, locale=self.factory.locale
        )

    def __str__(self) -> str:
        return self.to_date_time_string()

    def __repr__(self) -> str:
        return f"DisplayDate({self.value.isoformat()!r})"


class DateFactory:
    def __init__(
        self,
        app_timezone: str = "UTC",
        display_timezone: str = "UTC",
        locale: str = "en",
        incident_date_format: str = DEFAULT_INCIDENT_DATE_FORMAT,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.app_timezone = ZoneInfo(app_timezone)
        self.display_timezone = ZoneInfo(display_timezone)
        self.locale = locale.replace("-", "_")
        self.incident_date_format = incident_date_format
        self._clock = clock or (lambda: datetime.now(UTC))

    def _localize(self, value: datetime) -> datetime:
        # Naive values come back from the database in the app timezone
        if value.tzinfo is None:
            value = value.replace(tzinfo=self.app_timezone)
        return value.astimezone(self.display_timezone)

    def now(self) -> datetime:
        return self._localize(self._clock())

    def make(self, value: datetime | str | None) -> Optional[DisplayDate]:
        if value is None:
            return None
        if isinstance(value, str):
            value = datetime.fromisoformat(value)
        return DisplayDate(self._localize(value), self)

    def create(self, fmt: str, text: str) -> datetime:
        """Parse a display-timezone string into an app-timezone datetime."""
        parsed = datetime.strptime(text, fmt).replace(tzinfo=self.display_timezone)
        return parsed.astimezone(self.app_timezone)

    def get_timezone(self) -> str:
        return self.display_timezone.key

    def for_locale(self, locale: str) -> DateFactory:
        if locale.replace("-", "_") == self.locale:
            return self
        return DateFactory(
            app_timezone=self.app_timezone.key,
            display_timezone=self.display_timezone.key,
            locale=locale,
            incident_date_format=self.incident_date_format,
            clock=self._clock,
        )


@lru_cache(maxsize=1)
def get_date_factory() -> DateFactory:
    settings = get_settings()
    return DateFactory(
        app_timezone=settings.app_timezone,
        display_timezone=settings.timezone,
        locale=settings.locale,
        incident_date_format=settings.incident_date_format,
    )
