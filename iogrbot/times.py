"""Run times: parse "hh:mm:ss" tokens and format durations back.

Only the structure is checked. Minutes and seconds past 59 are allowed and
simply add up, so "1:90:00" is an hour and a half.
"""

import re
from datetime import timedelta

from iogrbot.errors import InvalidFormat

_COMPONENT = re.compile(r"[0-9]+")

EXPECTED_FORMAT = "hh:mm:ss"


def parse_time(token):
    """Parse an hh:mm:ss token into a timedelta.

    Raises:
        InvalidFormat: token is missing, does not have exactly three
            colon-separated parts, or a part is not a non-negative integer.
    """
    if not token:
        raise InvalidFormat(f"expected {EXPECTED_FORMAT}, got nothing")
    parts = token.split(":")
    if len(parts) != 3:
        raise InvalidFormat(f"expected {EXPECTED_FORMAT}, got {token!r}")
    for part in parts:
        if not _COMPONENT.fullmatch(part):
            raise InvalidFormat(f"{part!r} is not a number in {token!r}")
    try:
        hours, minutes, seconds = (int(p) for p in parts)
        return timedelta(seconds=hours * 3600 + minutes * 60 + seconds)
    except (ValueError, OverflowError) as e:
        # int() digit limit, or more days than timedelta can hold
        raise InvalidFormat(f"{token[:40]!r} is too large a time") from e


def format_duration(duration):
    """Format a timedelta as hh:mm:ss. Hours keep counting past 24."""
    total = int(duration.total_seconds())
    hours, rest = divmod(total, 3600)
    minutes, seconds = divmod(rest, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"
