# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - Why are all classes in one file?
#   - It prevents circular imports since the classes 'know' about each other
#     (``Date.at()`` creates a ``DateTime``, ``DateTime.date()`` a ``Date``)
#   - Pure integer arithmetic lives in ``_math`` and has no knowledge of
#     these classes.
# - Dates don't wrap ``datetime.date``, since years are unbounded here.
# - There is some code duplication in this file. This is intentional:
#   - It makes it easier to understand the code
#   - The carry/borrow handling should stay visible at each call site
from __future__ import annotations

import enum
import re
from datetime import date as _date, datetime as _datetime, time as _time
from typing import Any, ClassVar, Iterable, no_type_check

from ._common import (
    MS_PER_DAY,
    MS_PER_HOUR,
    MS_PER_MINUTE,
    MS_PER_SECOND,
    ImmutableBase,
    Millis,
    final,
)
from ._math import (
    add_months,
    add_years,
    day_of_week,
    days_in_month,
    days_to_ymd,
    is_leap,
    split_epoch_millis,
    ymd_to_days,
)

__all__ = [
    # Date and time
    "Date",
    "Time",
    "DateTime",
    # Enums
    "Month",
    "Weekday",
    # Exceptions
    "InvalidDateError",
    "InvalidTimeError",
    # Constants
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
]


class Month(enum.IntEnum):
    """The months of the year; ``.value`` is the month number (January=1)"""

    JANUARY = 1
    FEBRUARY = 2
    MARCH = 3
    APRIL = 4
    MAY = 5
    JUNE = 6
    JULY = 7
    AUGUST = 8
    SEPTEMBER = 9
    OCTOBER = 10
    NOVEMBER = 11
    DECEMBER = 12


class Weekday(enum.Enum):
    """The days of the week; ``.value`` corresponds with ISO numbering."""

    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6
    SUNDAY = 7


MONDAY = Weekday.MONDAY
TUESDAY = Weekday.TUESDAY
WEDNESDAY = Weekday.WEDNESDAY
THURSDAY = Weekday.THURSDAY
FRIDAY = Weekday.FRIDAY
SATURDAY = Weekday.SATURDAY
SUNDAY = Weekday.SUNDAY

_object_new = object.__new__


def _check_int(value: object, name: str) -> None:
    # bool is an int subclass, but never a meaningful field value
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError(f"{name} must be an int, got {type(value)!r}")


def _check_epoch_millis(ms: object) -> None:
    # floats would silently lose precision
    if not isinstance(ms, int) or isinstance(ms, bool):
        raise TypeError(f"Epoch milliseconds must be an int, got {type(ms)!r}")


@final
class Date(ImmutableBase):
    """A date in the proleptic Gregorian calendar, without a time component

    Example
    -------
    >>> d = Date(2021, 1, 2)
    Date(2021-01-02)

    Years are not limited to ``1..9999``: any integer year is allowed,
    so that every epoch millisecond maps to a date.
    """

    __slots__ = ("_year", "_month", "_day")

    def __init__(self, year: int, month: int, day: int) -> None:
        _check_int(year, "year")
        _check_int(month, "month")
        _check_int(day, "day")
        if not 1 <= month <= 12:
            raise InvalidDateError(f"Invalid month: {month}")
        if not 1 <= day <= days_in_month(year, month):
            raise InvalidDateError(
                f"Day {day} out of range for "
                f"{Month(month).name.title()} {year}"
            )
        self._year = year
        self._month = Month(month)
        self._day = day

    @classmethod
    def from_epoch_millis(cls, ms: int, /) -> Date:
        """The date containing the given epoch millisecond.
        Never fails: negative values give dates before 1970.

        Example
        -------
        >>> Date.from_epoch_millis(0)
        Date(1970-01-01)
        >>> Date.from_epoch_millis(-1)
        Date(1969-12-31)
        """
        _check_epoch_millis(ms)
        days, _ = split_epoch_millis(ms)
        return cls._from_days(days)

    def to_epoch_millis(self) -> int:
        """The epoch millisecond at midnight (the start) of this date

        Example
        -------
        >>> Date(1970, 1, 2).to_epoch_millis()
        86400000
        """
        return self._days() * MS_PER_DAY

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> Month:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    def is_leap(self) -> bool:
        """Whether the year of this date is a leap year"""
        return is_leap(self._year)

    def days_in_month(self) -> int:
        """The number of days in the month of this date

        Example
        -------
        >>> Date(2020, 2, 3).days_in_month()
        29
        """
        return days_in_month(self._year, self._month)

    def day_of_week(self) -> Weekday:
        """The day of the week

        Example
        -------
        >>> Date(2021, 1, 2).day_of_week()
        Weekday.SATURDAY
        >>> Weekday.SATURDAY.value
        6  # the ISO value
        """
        return Weekday(day_of_week(self._days()))

    def at(self, t: Time, /) -> DateTime:
        """Combine a date with a time to create a datetime

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d.at(Time(12, 30))
        DateTime(2021-01-02 12:30:00)
        """
        if not isinstance(t, Time):
            raise TypeError(f"Expected Time, got {type(t)!r}")
        return DateTime._from_parts(self, t)

    def replace(self, **kwargs: Any) -> Date:
        """Create a new instance with the given fields replaced.

        Unlike the ``increment_*`` and ``decrement_*`` methods, the result
        is not clamped: an invalid date raises :exc:`InvalidDateError`.

        Example
        -------
        >>> d = Date(2021, 1, 31)
        >>> d.replace(day=4)
        Date(2021-01-04)
        >>> d.replace(month=2)
        Traceback (most recent call last):
          ...
        InvalidDateError: Day 31 out of range for February 2021
        """
        return Date(
            **{
                "year": self._year,
                "month": self._month,
                "day": self._day,
                **kwargs,
            }
        )

    def increment_day(self) -> Date:
        """The next day, rolling over into the next month or year

        Example
        -------
        >>> Date(2018, 12, 31).increment_day()
        Date(2019-01-01)
        """
        if self._day < days_in_month(self._year, self._month):
            return self._from_ymd_unchecked(
                self._year, self._month, self._day + 1
            )
        elif self._month == 12:
            return self._from_ymd_unchecked(self._year + 1, 1, 1)
        return self._from_ymd_unchecked(self._year, self._month + 1, 1)

    def decrement_day(self) -> Date:
        """The previous day, rolling back into the previous month or year"""
        if self._day > 1:
            return self._from_ymd_unchecked(
                self._year, self._month, self._day - 1
            )
        elif self._month == 1:
            return self._from_ymd_unchecked(self._year - 1, 12, 31)
        return self._from_ymd_unchecked(
            self._year,
            self._month - 1,
            days_in_month(self._year, self._month - 1),
        )

    def increment_month(self) -> Date:
        """The same day in the next month.
        If that month is shorter, the day is clamped to its last day.

        Example
        -------
        >>> Date(2019, 12, 15).increment_month()
        Date(2020-01-15)
        >>> Date(2021, 1, 31).increment_month()
        Date(2021-02-28)
        """
        return self._from_ymd_unchecked(
            *add_months(self._year, self._month, self._day, 1)
        )

    def decrement_month(self) -> Date:
        """The same day in the previous month.
        If that month is shorter, the day is clamped to its last day.
        """
        return self._from_ymd_unchecked(
            *add_months(self._year, self._month, self._day, -1)
        )

    def increment_year(self) -> Date:
        """The same month and day in the next year.
        February 29th becomes February 28th if the next year isn't leap.

        Example
        -------
        >>> Date(2020, 2, 29).increment_year()
        Date(2021-02-28)
        """
        return self._from_ymd_unchecked(
            *add_years(self._year, self._month, self._day, 1)
        )

    def decrement_year(self) -> Date:
        """The same month and day in the previous year.
        February 29th becomes February 28th if the previous year isn't leap.
        """
        return self._from_ymd_unchecked(
            *add_years(self._year, self._month, self._day, -1)
        )

    def dates_in_month(self) -> list[Date]:
        """All dates in the month of this date, in ascending order

        Example
        -------
        >>> len(Date(2020, 2, 10).dates_in_month())
        29
        """
        year, month = self._year, self._month
        return [
            self._from_ymd_unchecked(year, month, day)
            for day in range(1, days_in_month(year, month) + 1)
        ]

    @classmethod
    def range(cls, a: Date, b: Date, /) -> list[Date]:
        """All dates between ``a`` and ``b`` (inclusive), in ascending order.
        The order of the arguments doesn't matter.

        Example
        -------
        >>> Date.range(Date(2020, 3, 1), Date(2020, 2, 27))
        [Date(2020-02-27), Date(2020-02-28), Date(2020-02-29), Date(2020-03-01)]
        """
        if not (isinstance(a, Date) and isinstance(b, Date)):
            raise TypeError("Date range bounds must be Date instances")
        start, end = sorted((a._days(), b._days()))
        return [cls._from_days(days) for days in range(start, end + 1)]

    def py_date(self) -> _date:
        """Convert to a standard library :class:`~datetime.date`

        Raises :exc:`ValueError` if the year is outside ``1..9999``.
        """
        return _date(self._year, self._month, self._day)

    @classmethod
    def from_py_date(cls, d: _date, /) -> Date:
        """Create from a :class:`~datetime.date`

        Example
        -------
        >>> Date.from_py_date(date(2021, 1, 2))
        Date(2021-01-02)
        """
        if not isinstance(d, _date):
            raise TypeError(f"Expected date, got {type(d)!r}")
        return cls._from_ymd_unchecked(d.year, d.month, d.day)

    def format_common_iso(self) -> str:
        """Format as the common ISO 8601 date format.
        Years outside ``0000..9999`` use the expanded format with a sign
        and at least six digits.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Date(2021, 1, 2).format_common_iso()
        '2021-01-02'
        >>> Date(-44, 3, 15).format_common_iso()
        '-000044-03-15'
        """
        if 0 <= self._year <= 9999:
            year = f"{self._year:04d}"
        else:
            year = f"{self._year:+07d}"
        return f"{year}-{self._month.value:02d}-{self._day:02d}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Date:
        """Create from the common ISO 8601 date format ``YYYY-MM-DD``,
        or the expanded format ``±YYYYYY-MM-DD``.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> Date.parse_common_iso("2021-01-02")
        Date(2021-01-02)
        """
        if (match := _match_date(s)) is None:
            raise ValueError(f"Invalid format: {s!r}")
        year, month, day = map(int, match.groups())
        # ISO 8601 doesn't allow a negative zero year
        if year == 0 and s[0] == "-":
            raise ValueError(f"Invalid format: {s!r}")
        try:
            return cls(year, month, day)
        except ValueError:
            raise ValueError(f"Invalid format: {s!r}") from None

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Date({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------
        >>> d = Date(2021, 1, 2)
        >>> d == Date(2021, 1, 2)
        True
        >>> d == Date(2021, 1, 3)
        False
        """
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() == other._ymd()

    def __hash__(self) -> int:
        return hash(self._ymd())

    def __lt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() < other._ymd()

    def __le__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() <= other._ymd()

    def __gt__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() > other._ymd()

    def __ge__(self, other: Date) -> bool:
        if not isinstance(other, Date):
            return NotImplemented
        return self._ymd() >= other._ymd()

    def _ymd(self) -> tuple[int, int, int]:
        return (self._year, self._month, self._day)

    def _days(self) -> int:
        return ymd_to_days(self._year, self._month, self._day)

    @classmethod
    def _from_days(cls, days: int, /) -> Date:
        return cls._from_ymd_unchecked(*days_to_ymd(days))

    @classmethod
    def _from_ymd_unchecked(cls, year: int, month: int, day: int, /) -> Date:
        self = _object_new(cls)
        self._year = year
        self._month = Month(month)
        self._day = day
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_date, (self._days(),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_date(days: int) -> Date:
    return Date._from_days(days)


@final
class Time(ImmutableBase):
    """Time of day without a date component, with millisecond precision

    Example
    -------
    >>> t = Time(12, 30, 0)
    Time(12:30:00)

    """

    __slots__ = ("_ms",)

    MIDNIGHT: ClassVar[Time]
    """The time at midnight"""
    NOON: ClassVar[Time]
    """The time at noon"""
    MAX: ClassVar[Time]
    """The maximum time, just before midnight"""

    def __init__(
        self,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        millisecond: int = 0,
    ) -> None:
        for value, name, upper in (
            (hour, "hour", 24),
            (minute, "minute", 60),
            (second, "second", 60),
            (millisecond, "millisecond", 1_000),
        ):
            _check_int(value, name)
            if not 0 <= value < upper:
                raise InvalidTimeError(f"Invalid {name}: {value}")
        self._ms = (
            hour * MS_PER_HOUR
            + minute * MS_PER_MINUTE
            + second * MS_PER_SECOND
            + millisecond
        )

    @classmethod
    def from_epoch_millis(cls, ms: int, /) -> Time:
        """The time of day at the given epoch millisecond.
        Never fails: negative values count back from midnight.

        Example
        -------
        >>> Time.from_epoch_millis(3_600_001)
        Time(01:00:00.001)
        >>> Time.from_epoch_millis(-1)
        Time(23:59:59.999)
        """
        _check_epoch_millis(ms)
        _, ms_of_day = split_epoch_millis(ms)
        return cls._from_ms_unchecked(ms_of_day)

    def to_epoch_millis(self) -> int:
        """Milliseconds since midnight, in the range ``[0, 86_399_999]``"""
        return self._ms

    @property
    def hour(self) -> int:
        return self._ms // MS_PER_HOUR

    @property
    def minute(self) -> int:
        return self._ms % MS_PER_HOUR // MS_PER_MINUTE

    @property
    def second(self) -> int:
        return self._ms % MS_PER_MINUTE // MS_PER_SECOND

    @property
    def millisecond(self) -> int:
        return self._ms % MS_PER_SECOND

    def on(self, d: Date, /) -> DateTime:
        """Combine a time with a date to create a datetime

        Example
        -------
        >>> t = Time(12, 30)
        >>> t.on(Date(2021, 1, 2))
        DateTime(2021-01-02 12:30:00)
        """
        if not isinstance(d, Date):
            raise TypeError(f"Expected Date, got {type(d)!r}")
        return DateTime._from_parts(d, self)

    def replace(self, **kwargs: Any) -> Time:
        """Create a new instance with the given fields replaced.
        Invalid values raise :exc:`InvalidTimeError`.

        Example
        -------
        >>> t = Time(12, 30, 0)
        >>> t.replace(minute=3, millisecond=4)
        Time(12:03:00.004)

        """
        return Time(
            **{
                "hour": self.hour,
                "minute": self.minute,
                "second": self.second,
                "millisecond": self.millisecond,
                **kwargs,
            }
        )

    # Each increment and decrement returns the shifted time, and a flag
    # that is set when the day boundary was crossed.
    def _shift(self, delta: Millis) -> tuple[Time, bool]:
        ms = self._ms + delta
        return (
            Time._from_ms_unchecked(ms % MS_PER_DAY),
            not 0 <= ms < MS_PER_DAY,
        )

    def increment_hour(self) -> tuple[Time, bool]:
        """Add one hour. The flag is ``True`` if midnight was passed.

        Example
        -------
        >>> Time(22, 15).increment_hour()
        (Time(23:15:00), False)
        >>> Time(23, 15).increment_hour()
        (Time(00:15:00), True)
        """
        return self._shift(MS_PER_HOUR)

    def increment_minute(self) -> tuple[Time, bool]:
        return self._shift(MS_PER_MINUTE)

    def increment_second(self) -> tuple[Time, bool]:
        return self._shift(MS_PER_SECOND)

    def increment_millisecond(self) -> tuple[Time, bool]:
        return self._shift(1)

    def decrement_hour(self) -> tuple[Time, bool]:
        """Subtract one hour. The flag is ``True`` if midnight was passed.

        Example
        -------
        >>> Time(0, 30).decrement_hour()
        (Time(23:30:00), True)
        """
        return self._shift(-MS_PER_HOUR)

    def decrement_minute(self) -> tuple[Time, bool]:
        return self._shift(-MS_PER_MINUTE)

    def decrement_second(self) -> tuple[Time, bool]:
        return self._shift(-MS_PER_SECOND)

    def decrement_millisecond(self) -> tuple[Time, bool]:
        return self._shift(-1)

    def py_time(self) -> _time:
        """Convert to a standard library :class:`~datetime.time`"""
        return _time(
            self.hour, self.minute, self.second, self.millisecond * 1_000
        )

    @classmethod
    def from_py_time(cls, t: _time, /) -> Time:
        """Create from a :class:`~datetime.time`.
        Microseconds are truncated to milliseconds.

        Example
        -------
        >>> Time.from_py_time(time(12, 30, 0, 1_500))
        Time(12:30:00.001)
        """
        if not isinstance(t, _time):
            raise TypeError(f"Expected datetime.time, got {type(t)!r}")
        if t.tzinfo is not None:
            raise ValueError("Time must be naive")
        return cls(
            t.hour, t.minute, t.second, millisecond=t.microsecond // 1_000
        )

    def format_common_iso(self) -> str:
        """Format as the common ISO 8601 time format.

        Inverse of :meth:`parse_common_iso`.

        Example
        -------
        >>> Time(12, 30, 0).format_common_iso()
        '12:30:00'
        >>> Time(12, 30, 0, millisecond=120).format_common_iso()
        '12:30:00.12'
        """
        s = f"{self.hour:02d}:{self.minute:02d}:{self.second:02d}"
        return (
            (s + f".{self.millisecond:03d}").rstrip("0")
            if self.millisecond
            else s
        )

    @classmethod
    def parse_common_iso(cls, s: str, /) -> Time:
        """Create from the common ISO 8601 time format ``HH:MM:SS[.fff]``.
        Does not accept more "exotic" ISO 8601 formats.

        Inverse of :meth:`format_common_iso`

        Example
        -------
        >>> Time.parse_common_iso("12:30:00")
        Time(12:30:00)
        """
        if (match := _match_time(s)) is None:
            raise ValueError(f"Invalid format: {s!r}")

        hours, minutes, seconds, fraction = match.groups()
        try:
            return cls(
                int(hours),
                int(minutes),
                int(seconds),
                millisecond=int(fraction.ljust(3, "0")) if fraction else 0,
            )
        except ValueError:
            raise ValueError(f"Invalid format: {s!r}") from None

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"Time({self})"

    def __eq__(self, other: object) -> bool:
        """Compare for equality

        Example
        -------
        >>> t = Time(12, 30, 0)
        >>> t == Time(12, 30, 0)
        True
        >>> t == Time(12, 30, 1)
        False
        """
        if not isinstance(other, Time):
            return NotImplemented
        return self._ms == other._ms

    def __hash__(self) -> int:
        return hash(self._ms)

    # Comparing milliseconds since midnight is equivalent to comparing
    # (hour, minute, second, millisecond) lexicographically
    def __lt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._ms < other._ms

    def __le__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._ms <= other._ms

    def __gt__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._ms > other._ms

    def __ge__(self, other: Time) -> bool:
        if not isinstance(other, Time):
            return NotImplemented
        return self._ms >= other._ms

    @classmethod
    def _from_ms_unchecked(cls, ms: Millis, /) -> Time:
        assert 0 <= ms < MS_PER_DAY
        self = _object_new(cls)
        self._ms = ms
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_time, (self._ms,)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_time(ms: int) -> Time:
    if not 0 <= ms < MS_PER_DAY:
        raise ValueError("Invalid pickle data")
    return Time._from_ms_unchecked(ms)


Time.MIDNIGHT = Time()
Time.NOON = Time(12)
Time.MAX = Time(23, 59, 59, millisecond=999)


@final
class DateTime(ImmutableBase):
    """A date and time of day, without a timezone.

    Each instance corresponds to exactly one epoch millisecond,
    and vice versa:

    >>> dt = DateTime(2020, 8, 15, 23, 12, 9, millisecond=120)
    >>> DateTime.from_epoch_millis(dt.to_epoch_millis()) == dt
    True

    Adding or subtracting time units carries over into the date:

    >>> DateTime(2019, 12, 31, 23).increment_hour()
    DateTime(2020-01-01 00:00:00)
    """

    __slots__ = ("_date", "_time")

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        millisecond: int = 0,
    ) -> None:
        # The date is validated first, so its errors take precedence
        self._date = Date(year, month, day)
        self._time = Time(hour, minute, second, millisecond=millisecond)

    @classmethod
    def from_epoch_millis(cls, ms: int, /) -> DateTime:
        """Create from the number of milliseconds since
        1970-01-01 00:00:00.000. Never fails.

        Example
        -------
        >>> DateTime.from_epoch_millis(-1)
        DateTime(1969-12-31 23:59:59.999)
        """
        return cls._from_parts(
            Date.from_epoch_millis(ms), Time.from_epoch_millis(ms)
        )

    def to_epoch_millis(self) -> int:
        """The number of milliseconds since 1970-01-01 00:00:00.000.
        Negative for datetimes before that.

        Example
        -------
        >>> DateTime(1970, 1, 2, 0, 0, 1).to_epoch_millis()
        86401000
        """
        return self._date.to_epoch_millis() + self._time.to_epoch_millis()

    @property
    def year(self) -> int:
        return self._date.year

    @property
    def month(self) -> Month:
        return self._date.month

    @property
    def day(self) -> int:
        return self._date.day

    @property
    def hour(self) -> int:
        return self._time.hour

    @property
    def minute(self) -> int:
        return self._time.minute

    @property
    def second(self) -> int:
        return self._time.second

    @property
    def millisecond(self) -> int:
        return self._time.millisecond

    def date(self) -> Date:
        """The date part of the datetime

        Example
        -------
        >>> DateTime(2021, 1, 2, 3, 4, 5).date()
        Date(2021-01-02)

        To perform the inverse, use :meth:`Date.at`
        """
        return self._date

    def time(self) -> Time:
        """The time-of-day part of the datetime

        Example
        -------
        >>> DateTime(2021, 1, 2, 3, 4, 5).time()
        Time(03:04:05)

        To perform the inverse, use :meth:`Time.on`
        """
        return self._time

    def replace(self, **kwargs: Any) -> DateTime:
        """Construct a new instance with the given fields replaced.

        Arguments are the same as the constructor,
        but only keyword arguments are allowed.
        Raises :exc:`InvalidDateError` or :exc:`InvalidTimeError`
        if the result would be invalid. There is no clamping.

        Example
        -------
        >>> d = DateTime(2020, 2, 29, 12)
        >>> d.replace(hour=3)
        DateTime(2020-02-29 03:00:00)
        >>> d.replace(year=2019)
        Traceback (most recent call last):
          ...
        InvalidDateError: Day 29 out of range for February 2019
        """
        date_kwargs = {
            k: kwargs.pop(k) for k in ("year", "month", "day") if k in kwargs
        }
        return self._from_parts(
            self._date.replace(**date_kwargs) if date_kwargs else self._date,
            self._time.replace(**kwargs) if kwargs else self._time,
        )

    def replace_date(self, d: Date, /) -> DateTime:
        """Construct a new instance with the date replaced."""
        if not isinstance(d, Date):
            raise TypeError(f"Expected Date, got {type(d)!r}")
        return self._from_parts(d, self._time)

    def replace_time(self, t: Time, /) -> DateTime:
        """Construct a new instance with the time replaced."""
        if not isinstance(t, Time):
            raise TypeError(f"Expected Time, got {type(t)!r}")
        return self._from_parts(self._date, t)

    def increment_year(self) -> DateTime:
        """Same as :meth:`Date.increment_year`, keeping the time"""
        return self._from_parts(self._date.increment_year(), self._time)

    def decrement_year(self) -> DateTime:
        """Same as :meth:`Date.decrement_year`, keeping the time"""
        return self._from_parts(self._date.decrement_year(), self._time)

    def increment_month(self) -> DateTime:
        """Same as :meth:`Date.increment_month`, keeping the time"""
        return self._from_parts(self._date.increment_month(), self._time)

    def decrement_month(self) -> DateTime:
        """Same as :meth:`Date.decrement_month`, keeping the time"""
        return self._from_parts(self._date.decrement_month(), self._time)

    def increment_day(self) -> DateTime:
        return self._from_parts(self._date.increment_day(), self._time)

    def decrement_day(self) -> DateTime:
        return self._from_parts(self._date.decrement_day(), self._time)

    def increment_hour(self) -> DateTime:
        """Add one hour, moving to the next day after 23:00

        Example
        -------
        >>> DateTime(2019, 12, 31, 23).increment_hour()
        DateTime(2020-01-01 00:00:00)
        """
        t, carry = self._time.increment_hour()
        return self._from_parts(
            self._date.increment_day() if carry else self._date, t
        )

    def increment_minute(self) -> DateTime:
        t, carry = self._time.increment_minute()
        return self._from_parts(
            self._date.increment_day() if carry else self._date, t
        )

    def increment_second(self) -> DateTime:
        t, carry = self._time.increment_second()
        return self._from_parts(
            self._date.increment_day() if carry else self._date, t
        )

    def increment_millisecond(self) -> DateTime:
        t, carry = self._time.increment_millisecond()
        return self._from_parts(
            self._date.increment_day() if carry else self._date, t
        )

    def decrement_hour(self) -> DateTime:
        """Subtract one hour, moving to the previous day before 01:00"""
        t, borrow = self._time.decrement_hour()
        return self._from_parts(
            self._date.decrement_day() if borrow else self._date, t
        )

    def decrement_minute(self) -> DateTime:
        t, borrow = self._time.decrement_minute()
        return self._from_parts(
            self._date.decrement_day() if borrow else self._date, t
        )

    def decrement_second(self) -> DateTime:
        t, borrow = self._time.decrement_second()
        return self._from_parts(
            self._date.decrement_day() if borrow else self._date, t
        )

    def decrement_millisecond(self) -> DateTime:
        """Subtract one millisecond

        Example
        -------
        >>> DateTime(2020, 1, 1).decrement_millisecond()
        DateTime(2019-12-31 23:59:59.999)
        """
        t, borrow = self._time.decrement_millisecond()
        return self._from_parts(
            self._date.decrement_day() if borrow else self._date, t
        )

    def day_of_week(self) -> Weekday:
        """The day of the week of the date part"""
        return self._date.day_of_week()

    def dates_in_month(self) -> list[DateTime]:
        """Midnight of each day in the month of this datetime"""
        return [
            DateTime._from_parts(d, Time.MIDNIGHT)
            for d in self._date.dates_in_month()
        ]

    @classmethod
    def range(
        cls, start: DateTime, end: DateTime, /, *, time: Time = Time.MIDNIGHT
    ) -> list[DateTime]:
        """Every date from ``start`` to ``end`` (inclusive) in ascending
        order, at the given time of day. Only the date parts of
        the bounds are taken into account, in either order.

        Example
        -------
        >>> DateTime.range(
        ...     DateTime(2020, 3, 1, 8), DateTime(2020, 2, 28, 20), time=Time(9)
        ... )
        [DateTime(2020-02-28 09:00:00), DateTime(2020-02-29 09:00:00), DateTime(2020-03-01 09:00:00)]
        """
        if not (isinstance(start, DateTime) and isinstance(end, DateTime)):
            raise TypeError("Range bounds must be DateTime instances")
        if not isinstance(time, Time):
            raise TypeError(f"Expected Time, got {type(time)!r}")
        return [
            cls._from_parts(d, time)
            for d in Date.range(start._date, end._date)
        ]

    @staticmethod
    def sort(items: Iterable[DateTime], /) -> list[DateTime]:
        """Sort datetimes in ascending order. The sort is stable.

        Example
        -------
        >>> DateTime.sort([DateTime(1970, 1, 1, 14), DateTime(1920, 8, 26)])
        [DateTime(1920-08-26 00:00:00), DateTime(1970-01-01 14:00:00)]
        """
        return sorted(items, key=DateTime.to_epoch_millis)

    def py_datetime(self) -> _datetime:
        """Convert to a naive standard library :class:`~datetime.datetime`"""
        return _datetime.combine(self._date.py_date(), self._time.py_time())

    @classmethod
    def from_py_datetime(cls, d: _datetime, /) -> DateTime:
        """Create an instance from a "naive" standard library ``datetime``.
        Microseconds are truncated to milliseconds.
        """
        if not isinstance(d, _datetime):
            raise TypeError(f"Expected datetime, got {type(d)!r}")
        if d.tzinfo is not None:
            raise ValueError(
                "Can only create DateTime from a naive datetime, "
                f"got datetime with tzinfo={d.tzinfo!r}"
            )
        return cls._from_parts(
            Date.from_py_date(d.date()), Time.from_py_time(d.time())
        )

    def format_common_iso(self) -> str:
        """Convert to the popular ISO format ``YYYY-MM-DDTHH:MM:SS[.fff]``

        The inverse of the ``parse_common_iso()`` method.
        """
        return f"{self._date}T{self._time}"

    @classmethod
    def parse_common_iso(cls, s: str, /) -> DateTime:
        """Parse the popular ISO format ``YYYY-MM-DDTHH:MM:SS[.fff]``

        The inverse of the ``format_common_iso()`` method.

        Example
        -------
        >>> DateTime.parse_common_iso("2020-08-15T23:12:00")
        DateTime(2020-08-15 23:12:00)
        """
        date_str, sep, time_str = s.partition("T")
        if not sep:
            raise ValueError(f"Invalid format: {s!r}")
        try:
            return cls._from_parts(
                Date.parse_common_iso(date_str),
                Time.parse_common_iso(time_str),
            )
        except ValueError:
            raise ValueError(f"Invalid format: {s!r}") from None

    __str__ = format_common_iso

    def __repr__(self) -> str:
        return f"DateTime({self._date} {self._time})"

    def __eq__(self, other: object) -> bool:
        """Compare objects for equality.
        Only ever equal to other :class:`DateTime` instances with the
        same values.

        Example
        -------
        >>> DateTime(2020, 8, 15, 23) == DateTime(2020, 8, 15, 23)
        True
        >>> DateTime(2020, 8, 15, 23, 1) == DateTime(2020, 8, 15, 23)
        False
        """
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    # Dates are compared first, times only if the dates are equal
    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._key() >= other._key()

    def _key(self) -> tuple[tuple[int, int, int], Millis]:
        return (self._date._ymd(), self._time._ms)

    @classmethod
    def _from_parts(cls, d: Date, t: Time, /) -> DateTime:
        self = _object_new(cls)
        self._date = d
        self._time = t
        return self

    @no_type_check
    def __reduce__(self):
        return _unpkl_dt, (self.to_epoch_millis(),)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_dt(ms: int) -> DateTime:
    return DateTime.from_epoch_millis(ms)


class InvalidDateError(ValueError):
    """A year, month, and day don't form a valid date"""


class InvalidTimeError(ValueError):
    """An hour, minute, second, or millisecond is out of range"""


_match_date = re.compile(
    r"([+-]\d{6,}|\d{4})-([0-1]\d)-([0-3]\d)", re.ASCII
).fullmatch
_match_time = re.compile(
    r"([0-2]\d):([0-5]\d):([0-5]\d)(?:\.(\d{1,3}))?", re.ASCII
).fullmatch
