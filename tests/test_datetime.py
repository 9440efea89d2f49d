import pickle
import re
from copy import copy, deepcopy
from datetime import datetime as py_datetime, timezone

import pytest
from hypothesis import given
from hypothesis.strategies import (
    composite,
    integers,
    lists,
    sampled_from,
    text,
)

from posixtime import (
    Date,
    DateTime,
    InvalidDateError,
    InvalidTimeError,
    Month,
    Time,
    Weekday,
)

from .common import (
    EPOCH_MILLIS_BOUND,
    MS_PER_DAY,
    AlwaysEqual,
    AlwaysLarger,
    AlwaysSmaller,
    NeverEqual,
)

epoch_millis = integers(-EPOCH_MILLIS_BOUND, EPOCH_MILLIS_BOUND)
any_datetime = epoch_millis.map(DateTime.from_epoch_millis)
UNIT_MILLIS = {
    "day": MS_PER_DAY,
    "hour": 3_600_000,
    "minute": 60_000,
    "second": 1_000,
    "millisecond": 1,
}


@composite
def raw_fields(draw):
    year = draw(integers(-100_000, 100_000))
    month = draw(integers(1, 12))
    day = draw(integers(1, Date(year, month, 1).days_in_month()))
    return (
        year,
        month,
        day,
        draw(integers(0, 23)),
        draw(integers(0, 59)),
        draw(integers(0, 59)),
        draw(integers(0, 999)),
    )


def test_minimal():
    d = DateTime(2020, 8, 15, 5, 12, 30, millisecond=450)

    assert d.year == 2020
    assert d.month == 8
    assert d.month is Month.AUGUST
    assert d.day == 15
    assert d.hour == 5
    assert d.minute == 12
    assert d.second == 30
    assert d.millisecond == 450

    assert (
        DateTime(2020, 8, 15, 12)
        == DateTime(2020, 8, 15, 12, 0)
        == DateTime(2020, 8, 15, 12, 0, 0)
        == DateTime(2020, 8, 15, 12, 0, 0, millisecond=0)
    )


def test_components():
    d = DateTime(2020, 8, 15, 23, 12, 9, millisecond=987)
    assert d.date() == Date(2020, 8, 15)
    assert d.time() == Time(23, 12, 9, millisecond=987)


class TestInit:

    def test_invalid_date(self):
        with pytest.raises(InvalidDateError):
            DateTime(2021, 2, 29)

    def test_invalid_time(self):
        with pytest.raises(InvalidTimeError):
            DateTime(2021, 2, 28, 24)

    def test_date_error_wins(self):
        with pytest.raises(InvalidDateError):
            DateTime(2021, 2, 29, 24, 60)

    def test_invalid_types(self):
        with pytest.raises(TypeError):
            DateTime(2021, 2, 28, 1, 2, 3, 4)  # type: ignore[misc]
        with pytest.raises(TypeError):
            DateTime(2021, 2)  # type: ignore[call-arg]


class TestEpochMillis:

    @pytest.mark.parametrize(
        "ms, expected",
        [
            (0, DateTime(1970, 1, 1)),
            (-1, DateTime(1969, 12, 31, 23, 59, 59, millisecond=999)),
            (86_401_000, DateTime(1970, 1, 2, 0, 0, 1)),
            (
                1_597_533_129_120,
                DateTime(2020, 8, 15, 23, 12, 9, millisecond=120),
            ),
            (-1_557_314_955_000, DateTime(1920, 8, 26, 12, 30, 45)),
        ],
    )
    def test_examples(self, ms, expected):
        assert DateTime.from_epoch_millis(ms) == expected
        assert expected.to_epoch_millis() == ms

    def test_is_sum_of_parts(self):
        d = DateTime(1920, 8, 26, 12, 30, 45)
        assert d.to_epoch_millis() == (
            d.date().to_epoch_millis() + d.time().to_epoch_millis()
        )

    @given(epoch_millis)
    def test_roundtrip(self, ms):
        assert DateTime.from_epoch_millis(ms).to_epoch_millis() == ms

    @given(raw_fields())
    def test_reverse_roundtrip(self, fields):
        *ymdhms, ms = fields
        d = DateTime(*ymdhms, millisecond=ms)
        assert DateTime.from_epoch_millis(d.to_epoch_millis()) == d

    @given(epoch_millis)
    def test_parts_match(self, ms):
        d = DateTime.from_epoch_millis(ms)
        assert d.date() == Date.from_epoch_millis(ms)
        assert d.time() == Time.from_epoch_millis(ms)

    def test_weekday_of_epoch(self):
        assert DateTime.from_epoch_millis(0).day_of_week() is Weekday.THURSDAY

    def test_wrong_type(self):
        with pytest.raises(TypeError):
            DateTime.from_epoch_millis(1.0)  # type: ignore[arg-type]


class TestShiftMethods:

    def test_carry_into_next_year(self):
        assert DateTime(2019, 12, 31, 23).increment_hour() == DateTime(
            2020, 1, 1
        )
        assert DateTime(
            2019, 12, 31, 23, 59, 59, millisecond=999
        ).increment_millisecond() == DateTime(2020, 1, 1)

    def test_borrow_from_previous_year(self):
        assert DateTime(2020, 1, 1).decrement_millisecond() == DateTime(
            2019, 12, 31, 23, 59, 59, millisecond=999
        )
        assert DateTime(2020, 3, 1, 0, 30).decrement_hour() == DateTime(
            2020, 2, 29, 23, 30
        )

    def test_no_carry(self):
        d = DateTime(2020, 8, 15, 12, 59, 59)
        assert d.increment_second() == DateTime(2020, 8, 15, 13)
        assert d.increment_minute() == DateTime(2020, 8, 15, 13, 0, 59)
        assert d.decrement_hour() == DateTime(2020, 8, 15, 11, 59, 59)
        assert d.decrement_minute() == DateTime(2020, 8, 15, 12, 58, 59)
        assert d.decrement_second() == DateTime(2020, 8, 15, 12, 59, 58)

    def test_month_rollover_keeps_time(self):
        d = DateTime(2019, 12, 15, 10, 20, 30, millisecond=5)
        assert d.increment_month() == DateTime(
            2020, 1, 15, 10, 20, 30, millisecond=5
        )
        assert d.decrement_month() == DateTime(
            2019, 11, 15, 10, 20, 30, millisecond=5
        )

    def test_day_rollover_keeps_time(self):
        d = DateTime(2018, 12, 31, 8)
        assert d.increment_day() == DateTime(2019, 1, 1, 8)
        assert d.increment_day().decrement_day() == d

    def test_leap_clamp_keeps_time(self):
        d = DateTime(2020, 2, 29, 6, 30)
        assert d.increment_year() == DateTime(2021, 2, 28, 6, 30)
        assert d.decrement_year().decrement_year() == DateTime(
            2018, 2, 28, 6, 30
        )
        assert DateTime(2021, 1, 31, 1).increment_month() == DateTime(
            2021, 2, 28, 1
        )

    @given(any_datetime, sampled_from(list(UNIT_MILLIS)))
    def test_increment_matches_epoch_millis(self, d, unit):
        assert getattr(d, f"increment_{unit}")() == (
            DateTime.from_epoch_millis(d.to_epoch_millis() + UNIT_MILLIS[unit])
        )

    @given(any_datetime, sampled_from(list(UNIT_MILLIS)))
    def test_decrement_matches_epoch_millis(self, d, unit):
        assert getattr(d, f"decrement_{unit}")() == (
            DateTime.from_epoch_millis(d.to_epoch_millis() - UNIT_MILLIS[unit])
        )

    def test_original_unchanged(self):
        d = DateTime(2019, 12, 31, 23)
        d.increment_hour()
        d.increment_year()
        assert d == DateTime(2019, 12, 31, 23)


class TestReplace:

    def test_fields(self):
        d = DateTime(2020, 8, 15, 23, 12, 9, millisecond=987)
        assert d.replace(year=2021) == DateTime(
            2021, 8, 15, 23, 12, 9, millisecond=987
        )
        assert d.replace(month=9, day=1) == DateTime(
            2020, 9, 1, 23, 12, 9, millisecond=987
        )
        assert d.replace(hour=1, millisecond=0) == DateTime(2020, 8, 15, 1, 12, 9)
        assert d.replace(minute=0, second=0) == DateTime(
            2020, 8, 15, 23, millisecond=987
        )
        assert d.replace() == d

    def test_strict(self):
        d = DateTime(2020, 2, 29, 12)
        with pytest.raises(InvalidDateError):
            d.replace(year=2019)
        with pytest.raises(InvalidTimeError):
            d.replace(hour=24)
        with pytest.raises(InvalidTimeError):
            d.replace(millisecond=-1)
        assert d.increment_year() == DateTime(2021, 2, 28, 12)
        assert d == DateTime(2020, 2, 29, 12)

    def test_invalid_kwargs(self):
        d = DateTime(2020, 2, 29, 12)
        with pytest.raises(TypeError, match="foo"):
            d.replace(foo=1)  # type: ignore[call-arg]
        with pytest.raises(TypeError):
            d.replace(nanosecond=1)  # type: ignore[call-arg]

    def test_replace_date(self):
        d = DateTime(2020, 8, 15, 3, 12, 9)
        assert d.replace_date(Date(1996, 2, 19)) == DateTime(
            1996, 2, 19, 3, 12, 9
        )
        with pytest.raises(TypeError):
            d.replace_date(42)  # type: ignore[arg-type]

    def test_replace_time(self):
        d = DateTime(2020, 8, 15, 3, 12, 9)
        assert d.replace_time(Time(1, 2, 3)) == DateTime(2020, 8, 15, 1, 2, 3)
        with pytest.raises(TypeError):
            d.replace_time(42)  # type: ignore[arg-type]


def test_day_of_week():
    assert DateTime(2021, 1, 2, 23).day_of_week() is Weekday.SATURDAY
    assert DateTime(1969, 12, 31, 23).day_of_week() is Weekday.WEDNESDAY


def test_dates_in_month():
    ds = DateTime(2020, 2, 10, 14, 30).dates_in_month()
    assert len(ds) == 29
    assert ds[0] == DateTime(2020, 2, 1)
    assert ds[-1] == DateTime(2020, 2, 29)
    assert all(d.time() == Time.MIDNIGHT for d in ds)


class TestRange:

    def test_default_midnight(self):
        expected = [
            DateTime(2020, 2, 25),
            DateTime(2020, 2, 26),
            DateTime(2020, 2, 27),
            DateTime(2020, 2, 28),
            DateTime(2020, 2, 29),
            DateTime(2020, 3, 1),
        ]
        a = DateTime(2020, 3, 1, 8)
        b = DateTime(2020, 2, 25, 20)
        assert DateTime.range(a, b) == expected
        assert DateTime.range(b, a) == expected

    def test_custom_time(self):
        assert DateTime.range(
            DateTime(2020, 3, 1), DateTime(2020, 2, 28), time=Time(9)
        ) == [
            DateTime(2020, 2, 28, 9),
            DateTime(2020, 2, 29, 9),
            DateTime(2020, 3, 1, 9),
        ]

    def test_same_date(self):
        assert DateTime.range(
            DateTime(2020, 3, 1, 23), DateTime(2020, 3, 1, 1)
        ) == [DateTime(2020, 3, 1)]

    def test_invalid(self):
        d = DateTime(2020, 3, 1)
        with pytest.raises(TypeError):
            DateTime.range(d, Date(2020, 3, 4))  # type: ignore[arg-type]
        with pytest.raises(TypeError):
            DateTime.range(d, d, time=12)  # type: ignore[arg-type]


class TestSort:

    def test_example(self):
        items = [
            DateTime(1970, 1, 1, 14, 40, 20, millisecond=120),
            DateTime(1920, 8, 26, 12, 30, 45),
            DateTime(1970, 1, 1),
        ]
        assert DateTime.sort(items) == [
            DateTime(1920, 8, 26, 12, 30, 45),
            DateTime(1970, 1, 1),
            DateTime(1970, 1, 1, 14, 40, 20, millisecond=120),
        ]
        # input is not modified
        assert items[0] == DateTime(1970, 1, 1, 14, 40, 20, millisecond=120)

    def test_stable(self):
        a = DateTime(2000, 1, 1)
        b = DateTime(2000, 1, 1)
        result = DateTime.sort([DateTime(2001, 1, 1), a, b])
        assert result[0] is a
        assert result[1] is b

    def test_iterable(self):
        assert DateTime.sort(iter([DateTime(2001, 1, 1), DateTime(2000, 1, 1)])) == [
            DateTime(2000, 1, 1),
            DateTime(2001, 1, 1),
        ]
        assert DateTime.sort([]) == []

    @given(lists(any_datetime))
    def test_ascending(self, ds):
        result = DateTime.sort(ds)
        millis = [d.to_epoch_millis() for d in result]
        assert millis == sorted(millis)
        assert result == sorted(ds)


def test_equality():
    d = DateTime(2020, 8, 15)
    different = DateTime(2020, 8, 16)
    same = DateTime(2020, 8, 15)
    assert d == same
    assert d != different
    assert not d == different
    assert not d != same

    assert hash(d) == hash(same)
    assert hash(d) != hash(different)

    assert d == AlwaysEqual()
    assert d != NeverEqual()
    assert not d == NeverEqual()
    assert not d != AlwaysEqual()
    assert d != Date(2020, 8, 15)

    assert d != 42  # type: ignore[comparison-overlap]
    assert not d == 42  # type: ignore[comparison-overlap]


def test_comparison():
    d = DateTime(2020, 8, 15, 23, 12, 9)
    later = DateTime(2020, 8, 16, 0, 0, 0)
    later2 = d.replace(millisecond=1)
    assert d < later
    assert d <= later
    assert later > d
    assert later >= d

    assert d < later2
    assert d <= later2
    assert later2 > d
    assert later2 >= d

    assert d < AlwaysLarger()
    assert d <= AlwaysLarger()
    assert not d > AlwaysLarger()
    assert not d >= AlwaysLarger()
    assert not d < AlwaysSmaller()
    assert not d <= AlwaysSmaller()
    assert d > AlwaysSmaller()
    assert d >= AlwaysSmaller()

    with pytest.raises(TypeError):
        d < 42  # type: ignore[operator]


def test_compare_dates_and_times():
    a = DateTime(2020, 8, 15, 23)
    b = DateTime(2020, 8, 16, 1)
    assert a < b
    assert a.date() < b.date()
    assert a.time() > b.time()
    assert DateTime(2020, 8, 15, 1).date() == a.date()


@given(any_datetime, any_datetime)
def test_ordering_matches_epoch_millis(a, b):
    assert (a < b) == (a.to_epoch_millis() < b.to_epoch_millis())
    assert (a == b) == (a.to_epoch_millis() == b.to_epoch_millis())


@pytest.mark.parametrize(
    "d, expected",
    [
        (DateTime(2020, 8, 15, 23, 12, 9), "2020-08-15T23:12:09"),
        (
            DateTime(2020, 8, 15, 23, 12, 9, millisecond=987),
            "2020-08-15T23:12:09.987",
        ),
        (DateTime(-44, 3, 15, 12), "-000044-03-15T12:00:00"),
    ],
)
def test_format_common_iso(d, expected):
    assert str(d) == expected
    assert d.format_common_iso() == expected


def test_repr():
    d = DateTime(2020, 8, 15, 23, 12, 9, millisecond=987)
    assert repr(d) == "DateTime(2020-08-15 23:12:09.987)"
    assert repr(DateTime.from_epoch_millis(-1)) == (
        "DateTime(1969-12-31 23:59:59.999)"
    )


class TestParseCommonIso:

    @pytest.mark.parametrize(
        "s, expected",
        [
            ("2020-08-15T12:08:30", DateTime(2020, 8, 15, 12, 8, 30)),
            (
                "2020-08-15T12:08:30.349",
                DateTime(2020, 8, 15, 12, 8, 30, millisecond=349),
            ),
            ("0001-01-01T00:00:00", DateTime(1, 1, 1)),
            ("-000044-03-15T12:00:00", DateTime(-44, 3, 15, 12)),
        ],
    )
    def test_valid(self, s, expected):
        assert DateTime.parse_common_iso(s) == expected

    @pytest.mark.parametrize(
        "s",
        [
            "2020-08-15T12:08:30Z",
            "2020-08-15T12:08:30+02:00",
            "2020-08-15 12:08:30",
            "2020-08-15T12:08",
            "2020-08-15T",
            "2020-08-15",
            "T12:08:30",
            "2020-08-15T12:08:30T",
            "2021-02-29T12:08:30",
            "2020-08-15T24:00:00",
            "",
        ],
    )
    def test_invalid(self, s):
        with pytest.raises(ValueError, match=re.escape(repr(s))):
            DateTime.parse_common_iso(s)

    @given(text())
    def test_fuzzing(self, s: str):
        try:
            d = DateTime.parse_common_iso(s)
        except ValueError:
            pass
        else:
            assert isinstance(d, DateTime)

    @given(any_datetime)
    def test_roundtrip(self, d):
        assert DateTime.parse_common_iso(d.format_common_iso()) == d


def test_py_datetime():
    d = DateTime(2020, 8, 15, 23, 12, 9, millisecond=987)
    assert d.py_datetime() == py_datetime(2020, 8, 15, 23, 12, 9, 987_000)


def test_from_py_datetime():
    d = py_datetime(2020, 8, 15, 23, 12, 9, 987_654)
    assert DateTime.from_py_datetime(d) == DateTime(
        2020, 8, 15, 23, 12, 9, millisecond=987
    )

    with pytest.raises(ValueError, match="naive"):
        DateTime.from_py_datetime(d.replace(tzinfo=timezone.utc))

    with pytest.raises(TypeError):
        DateTime.from_py_datetime(Date(2020, 8, 15))  # type: ignore[arg-type]


def test_pickle():
    d = DateTime(2020, 8, 15, 23, 12, 9, millisecond=987)
    assert pickle.loads(pickle.dumps(d)) == d
    far = DateTime(-50_000, 2, 29, 1, 2, 3)
    assert pickle.loads(pickle.dumps(far)) == far


def test_copy():
    d = DateTime(2020, 8, 15, 23, 12, 9)
    assert copy(d) is d
    assert deepcopy(d) is d


def test_immutable():
    d = DateTime(2020, 8, 15)
    with pytest.raises(AttributeError):
        d.year = 2021  # type: ignore[misc]


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class Subclass(DateTime):  # type: ignore[misc]
            pass
