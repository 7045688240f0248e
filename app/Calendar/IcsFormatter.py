from __future__ import annotations

import re
from datetime import date, datetime, time, timezone
from typing import Union

DateLike = Union[datetime, date]

_UNESCAPE_PATTERN = re.compile(r'\\(\\|n)')


class IcsFormatter:
    """Text and date helpers for iCalendar content lines."""

    DATETIME_FORMAT = '%Y%m%dT%H%M%SZ'
    DATE_FORMAT = '%Y%m%d'

    @staticmethod
    def escape(value: str) -> str:
        """
        Escape a text value for use in a content line.

        Backslashes are doubled first so the "\\n" tokens produced for line
        breaks are never escaped a second time.
        """
        value = value.replace('\\', '\\\\')

        value = value.replace('\r\n', '\\n')
        value = value.replace('\n', '\\n')
        value = value.replace('\r', '\\n')

        return value

    @staticmethod
    def unescape(value: str) -> str:
        """Reverse escape(), reading each backslash sequence exactly once."""
        return _UNESCAPE_PATTERN.sub(lambda m: '\n' if m.group(1) == 'n' else '\\', value)

    @staticmethod
    def to_utc(dt: DateLike) -> datetime:
        """
        Convert a date or datetime to an aware UTC datetime.

        Naive datetimes are taken to already be in UTC; plain dates are
        midnight UTC of that day.
        """
        if not isinstance(dt, datetime):
            return datetime.combine(dt, time.min, tzinfo=timezone.utc)

        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)

        return dt.astimezone(timezone.utc)

    @staticmethod
    def datetime_utc(dt: DateLike) -> str:
        """Example: 19960401T235959Z"""
        return IcsFormatter.to_utc(dt).strftime(IcsFormatter.DATETIME_FORMAT)

    @staticmethod
    def date_for_property(property_name: str, dt: DateLike, include_time: bool = False) -> str:
        """
        Format the date for the given property.

        Example (including time):
        DTEND:19960401T235959Z

        Example (date only, excludes time):
        DTEND;VALUE=DATE:19980704
        """
        if include_time:
            return f"{property_name}:{IcsFormatter.datetime_utc(dt)}"

        if isinstance(dt, datetime):
            day = IcsFormatter.to_utc(dt).strftime(IcsFormatter.DATE_FORMAT)
        else:
            day = dt.strftime(IcsFormatter.DATE_FORMAT)

        return f"{property_name};VALUE=DATE:{day}"
