import re
from datetime import timedelta

from kimai_cli.exceptions import DurationParseError

DECIMAL_HOURS = re.compile(r"([0-9]+)(?:\.([0-9]+))?")
CLOCK = re.compile(r"([0-9]+):([0-9]+)")


def parse_duration(text: str) -> timedelta:
    """
    Turn a duration typed by the user into a timedelta.

    Two forms are understood, each matching the whole string:
    decimal hours ("1.5") and hours:minutes ("2:30"). Decimal hours are
    truncated toward zero to whole seconds. Minutes are not capped at 59,
    so "1:90" is the same as "2:30".
    """
    try:
        match = DECIMAL_HOURS.fullmatch(text)
        if match:
            hours, fraction = match.groups()
            seconds = int(hours) * 3600
            if fraction:
                seconds += int(fraction) * 3600 // 10 ** len(fraction)
            return timedelta(seconds=seconds)

        match = CLOCK.fullmatch(text)
        if match:
            hours, minutes = match.groups()
            return timedelta(hours=int(hours), minutes=int(minutes))
    except (OverflowError, ValueError) as e:
        raise DurationParseError(f"Duration out of range: {text!r}") from e

    raise DurationParseError(f"Unrecognized duration {text!r}, expected e.g. 1.5 or 2:30")
