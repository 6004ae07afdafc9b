"""Date and time labels for slot tables.

Consecutive rows on the same day only show their times, and rows that
repeat the previous row's day and times show nothing at all.
"""

from collections.abc import Iterable, Iterator
from datetime import UTC, datetime, tzinfo
from typing import NamedTuple, Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from scheduler_renderer.config import Settings
from scheduler_renderer.exceptions import InvalidTimezoneException


class TimedRow(Protocol):
    start_time: datetime
    end_time: datetime


class DateTimeLabels(NamedTuple):
    """Labels displayed for one row; empty strings are suppressed labels."""

    date: str
    start: str
    end: str


def compress_labels(rows: Iterable[DateTimeLabels]) -> Iterator[DateTimeLabels]:
    """Blank out labels that repeat the previous row.

    Args:
        rows: Fully formatted labels in display order

    Yields:
        Labels with the date blanked when it matches the previous row's
        date, and everything blanked when date, start and end all match.
    """
    previous = DateTimeLabels("", "", "")
    for labels in rows:
        if labels == previous:
            yield DateTimeLabels("", "", "")
        elif labels.date == previous.date:
            yield DateTimeLabels("", labels.start, labels.end)
        else:
            yield labels
        previous = labels


def resolve_timezone(name: str) -> ZoneInfo:
    """Look up an IANA timezone.

    Raises:
        InvalidTimezoneException: If name is not a known zone
    """
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise InvalidTimezoneException(name) from e


class SlotTimeFormatter:
    """Formats slot start/end times in the viewer's timezone."""

    def __init__(self, timezone: tzinfo, date_format: str, time_format: str):
        self.timezone = timezone
        self.date_format = date_format
        self.time_format = time_format

    @classmethod
    def from_settings(cls, settings: Settings, timezone: str | None = None) -> "SlotTimeFormatter":
        return cls(resolve_timezone(timezone or settings.timezone), settings.date_format, settings.time_format)

    def _local(self, value: datetime) -> datetime:
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(self.timezone)

    def date(self, value: datetime) -> str:
        return self._local(value).strftime(self.date_format)

    def time(self, value: datetime) -> str:
        return self._local(value).strftime(self.time_format)

    def labels(self, row: TimedRow) -> DateTimeLabels:
        return DateTimeLabels(self.date(row.start_time), self.time(row.start_time), self.time(row.end_time))

    def row_labels(self, rows: Iterable[TimedRow]) -> list[DateTimeLabels]:
        """Compressed labels for rows, in the order given."""
        return list(compress_labels(self.labels(row) for row in rows))
