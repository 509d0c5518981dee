"""Due date parsing at the command-line boundary."""

from datetime import datetime

from dateutil import parser as dateutil_parser

from todo_cli.core.errors import DateParseError
from todo_cli.domain.task import ensure_aware


def parse_due_date(value: str) -> datetime:
    """Parse a due date typed by the user.

    Accepts a date (YYYY-MM-DD) or a date and time (YYYY-MM-DD HH:MM), plus the
    other ISO 8601 spellings dateutil understands. Values without a UTC offset
    are taken as local time.

    Raises:
        DateParseError: If the value is empty or not an ISO date
    """
    text = value.strip()
    if not text:
        raise DateParseError(value)
    try:
        parsed = dateutil_parser.isoparse(text)
    except (ValueError, OverflowError) as e:
        raise DateParseError(value) from e
    return ensure_aware(parsed)
