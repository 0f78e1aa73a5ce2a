"""Timestamp helpers for OAI-PMH request parameters.

OAI-PMH expresses datestamps in UTC with second granularity
(``YYYY-MM-DDThh:mm:ssZ``). Everything here is a pure function.
"""

from datetime import UTC, date, datetime

ISO8601_FORMAT = (
    "{0.year:04d}-{0.month:02d}-{0.day:02d}T{0.hour:02d}:{0.minute:02d}:{0.second:02d}Z"
)
"""str.format pattern for the protocol's seconds granularity."""

DateFilter = datetime | date | str | None
"""Accepted input for from/until filters."""


def format_datetime(value: DateFilter) -> str | None:
    """Format a from/until filter for the wire.

    Args:
        value: A datetime (naive values are taken as UTC), a date (midnight
            UTC), a preformatted string (passed through verbatim) or None.

    Returns:
        str | None: The formatted timestamp, or None when the filter is
            unset and must be left out of the request.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if not isinstance(value, datetime):
        value = datetime(value.year, value.month, value.day, tzinfo=UTC)
    elif value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return ISO8601_FORMAT.format(value.astimezone(UTC))
