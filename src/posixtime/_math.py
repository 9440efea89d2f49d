"""Calendar and clock arithmetic on plain integers.

Everything here works on unbounded Python ints and relies on floor division
(``//``, ``%``, ``divmod``), so values before the epoch need no special cases.
"""

from ._common import MS_PER_DAY


def is_leap(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


# 1-indexed days per month
_MONTHDAYS = (0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31)

# 1-indexed days in the year before the first of each month (non-leap)
_DAYS_BEFORE_MONTH = (-1, 0, 31, 59, 90, 120, 151, 181, 212, 243, 273, 304, 334)


def days_in_month(year: int, month: int) -> int:
    return _MONTHDAYS[month] + (month == 2 and is_leap(year))


def _days_before_year(year: int) -> int:
    y = year - 1
    return y * 365 + y // 4 - y // 100 + y // 400


def _days_before_month(year: int, month: int) -> int:
    return _DAYS_BEFORE_MONTH[month] + (month > 2 and is_leap(year))


_DAYS_IN_400Y = _days_before_year(401)
_DAYS_IN_100Y = _days_before_year(101)
_DAYS_IN_4Y = _days_before_year(5)

# Ordinal of 1970-01-01, counting 0001-01-01 as day 1
_EPOCH_ORDINAL = _days_before_year(1970) + 1


def ymd_to_days(year: int, month: int, day: int) -> int:
    """Days since 1970-01-01 for a (valid) proleptic Gregorian date"""
    return (
        _days_before_year(year)
        + _days_before_month(year, month)
        + day
        - _EPOCH_ORDINAL
    )


def days_to_ymd(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`ymd_to_days`. Total for any integer."""
    # Work with a zero-based ordinal so that 400-year boundaries
    # are exactly the multiples of _DAYS_IN_400Y.
    n400, n = divmod(days + _EPOCH_ORDINAL - 1, _DAYS_IN_400Y)
    n100, n = divmod(n, _DAYS_IN_100Y)
    n4, n = divmod(n, _DAYS_IN_4Y)
    n1, n = divmod(n, 365)

    year = n400 * 400 + n100 * 100 + n4 * 4 + n1 + 1
    # n1 (or n100) equals 4 only on the last day of a 4 (or 400) year cycle
    if n1 == 4 or n100 == 4:
        return year - 1, 12, 31

    leap = n1 == 3 and (n4 != 24 or n100 == 3)
    # This estimate is either exact or one month too large
    month = (n + 50) >> 5
    preceding = _DAYS_BEFORE_MONTH[month] + (month > 2 and leap)
    if preceding > n:
        month -= 1
        preceding -= _MONTHDAYS[month] + (month == 2 and leap)
    return year, month, n - preceding + 1


def day_of_week(days: int) -> int:
    """ISO weekday (Monday=1) of a day count since the epoch.
    The epoch itself is a Thursday."""
    return (days + 3) % 7 + 1


def split_epoch_millis(ms: int) -> tuple[int, int]:
    """Split into (days since epoch, millisecond of day).
    The second value is always in ``[0, MS_PER_DAY)``."""
    return divmod(ms, MS_PER_DAY)


def add_months(
    year: int, month: int, day: int, months: int
) -> tuple[int, int, int]:
    """Shift by a number of months, clamping the day to the last
    day of the target month if needed."""
    year_delta, month0_new = divmod(month - 1 + months, 12)
    year_new = year + year_delta
    month_new = month0_new + 1
    return year_new, month_new, min(day, days_in_month(year_new, month_new))


def add_years(
    year: int, month: int, day: int, years: int
) -> tuple[int, int, int]:
    year_new = year + years
    # only happens when we move Feb 29 to a non-leap year
    return year_new, month, min(day, days_in_month(year_new, month))
