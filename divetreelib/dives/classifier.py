"""Directory name classification.

A dive log tree encodes its hierarchy only in directory names:

    yyyy/                               year, just recurse
    yyyy/mm/                            month, just recurse
    yyyy/mm/dd-descriptor[~hex]/        trip
    .../[[yyyy-]mm-]dd[-descriptor]-hh:mm:ss[~hex]/
                                        dive

The ``~hex`` suffix is appended by the store when two names would collide
and carries no data. A dive always names its own day; year and month are
taken from the dive's own name when present there and otherwise from the
``yyyy/mm`` ancestors. Anything else (pictures, future data) is skipped
without being entered.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import List, Optional, Sequence, Tuple


_LEADING_DIGITS = re.compile(r"[0-9]*")
_NUMBER = re.compile(r"[0-9]+")
_CLOCK = re.compile(r"([0-9]{2}):([0-9]{2}):([0-9]{2})")

# "hh:mm:ss"
_CLOCK_LENGTH = 8


class DirectoryAction(Enum):
    """What the walk should do with a directory."""
    CONTINUE = "continue"       # date fragment, recurse without side effects
    SKIP = "skip"               # not dive data, do not recurse
    ENTER_TRIP = "enter_trip"
    ENTER_DIVE = "enter_dive"


@dataclass(frozen=True)
class Classification:
    """Result of classifying a directory name.

    Date and time fields are only set for ENTER_TRIP (date) and
    ENTER_DIVE (date and time).
    """
    action: DirectoryAction
    year: Optional[int] = None
    month: Optional[int] = None
    day: Optional[int] = None
    hour: int = 0
    minute: int = 0
    second: int = 0

    @property
    def timestamp(self) -> Optional[datetime]:
        """UTC timestamp of the trip or dive, None for other actions."""
        if self.action not in (DirectoryAction.ENTER_TRIP, DirectoryAction.ENTER_DIVE):
            return None
        return make_timestamp(self.year, self.month, self.day,
                              self.hour, self.minute, self.second)


CONTINUE = Classification(DirectoryAction.CONTINUE)
SKIP = Classification(DirectoryAction.SKIP)


def leading_digits(name: str) -> int:
    """Length of the run of ASCII digits at the start of name."""
    return _LEADING_DIGITS.match(name).end()


def nonunique_length(name: str) -> int:
    """Length of name without its '~' disambiguation suffix."""
    tilde = name.find("~")
    return len(name) if tilde < 0 else tilde


def validate_date(year: int, month: int, day: int) -> bool:
    return 1970 < year < 3000 and 0 < month < 13 and 0 < day < 32


def validate_time(hour: int, minute: int, second: int) -> bool:
    # 60 is a valid second
    return 0 <= hour < 24 and 0 <= minute < 60 and 0 <= second < 61


def make_timestamp(year: int, month: int, day: int,
                   hour: int = 0, minute: int = 0, second: int = 0) -> datetime:
    """Build a UTC timestamp, letting out-of-range days and seconds roll over.

    Validation accepts day 31 for every month and second 60, so e.g.
    April 31st becomes May 1st rather than an error.
    """
    start_of_month = datetime(year, month, 1, tzinfo=timezone.utc)
    return start_of_month + timedelta(days=day - 1, hours=hour,
                                      minutes=minute, seconds=second)


def date_from_ancestors(ancestors: Sequence[str]) -> Optional[Tuple[int, int]]:
    """Find the year and month encoded in the ancestor directory names.

    Args:
        ancestors: Directory names from the tree root down to the parent

    Returns:
        (year, month) from the first pair of adjacent all-digit names,
        or None if there is no such pair
    """
    for first, second in zip(ancestors, ancestors[1:]):
        if _NUMBER.fullmatch(first) and _NUMBER.fullmatch(second):
            return int(first), int(second)
    return None


def classify_directory(name: str, ancestors: Sequence[str] = ()) -> Classification:
    """Classify a directory from its name and the names of its ancestors.

    Args:
        name: The directory's own name
        ancestors: Directory names from the tree root down to the parent

    Returns:
        Classification telling the walk whether to skip the directory,
        recurse into it, or create a trip or dive for it
    """
    digits = leading_digits(name)

    # Doesn't start with two or four digits? Skip
    if digits not in (2, 4):
        return SKIP

    # Only digits: a year or month, recurse into it
    if digits == len(name):
        return CONTINUE

    if name[digits] != "-":
        return SKIP

    # At least two digits and a dash come before this
    length = nonunique_length(name)
    if length >= 3 and name[length - 3] == ":":
        return _dive_directory(name[:length], ancestors)

    # Trips start with the day of the month
    if digits != 2:
        return SKIP

    return _trip_directory(name, ancestors)


def _trip_directory(name: str, ancestors: Sequence[str]) -> Classification:
    """Trip directory, 'dd-descriptor[~hex]' below 'yyyy/mm'."""
    inherited = date_from_ancestors(ancestors)
    if inherited is None:
        return SKIP
    year, month = inherited
    day = int(name[:2])
    if not validate_date(year, month, day):
        return SKIP
    return Classification(DirectoryAction.ENTER_TRIP, year, month, day)


def _dive_directory(stem: str, ancestors: Sequence[str]) -> Classification:
    """Dive directory, '[[yyyy-]mm-]dd[-descriptor]-hh:mm:ss' with the suffix removed."""
    time_start = len(stem) - _CLOCK_LENGTH

    # There has to be a day and a dash in front of the time
    if time_start < 3 or stem[time_start - 1] != "-":
        return SKIP

    clock = _CLOCK.fullmatch(stem, time_start)
    if clock is None:
        return SKIP
    hour, minute, second = (int(part) for part in clock.groups())
    if not validate_time(hour, minute, second):
        return SKIP

    date = _split_date_prefix(stem[:time_start - 1].split("-"))
    if date is None:
        return SKIP
    year, month, day = date

    if year is None:
        inherited = date_from_ancestors(ancestors)
        if inherited is None:
            return SKIP
        year = inherited[0]
        if month is None:
            month = inherited[1]

    if not validate_date(year, month, day):
        return SKIP

    return Classification(DirectoryAction.ENTER_DIVE, year, month, day,
                          hour, minute, second)


def _split_date_prefix(tokens: List[str]) -> Optional[Tuple[Optional[int], Optional[int], int]]:
    """Read '[[yyyy-]mm-]dd' from the dash-separated tokens before the time.

    Whatever follows the day is a free-form descriptor.
    """
    numeric = []
    for token in tokens[:3]:
        if not _NUMBER.fullmatch(token):
            break
        numeric.append(token)
    shape = tuple(len(token) for token in numeric)

    if shape[:3] == (4, 2, 2):
        return int(numeric[0]), int(numeric[1]), int(numeric[2])
    if shape[:2] == (2, 2):
        return None, int(numeric[0]), int(numeric[1])
    if shape[:1] == (2,):
        return None, None, int(numeric[0])
    return None
