################################################################################
# © Copyright 2024 Zapata Computing Inc.
################################################################################
"""
Unit tests for ``tzstamp._date``.
"""

import datetime as dt
from dataclasses import FrozenInstanceError

import pytest

from tzstamp import Date, InvalidArgumentError


class TestConstruction:
    @staticmethod
    def test_basic():
        # When
        date = Date(2025, 6, 15)

        # Then
        assert date.year == 2025
        assert date.month == 6
        assert date.day == 15

    @staticmethod
    @pytest.mark.parametrize(
        "year,month,day",
        [
            pytest.param(2025, 1, 1, id="new-year"),
            pytest.param(2024, 2, 29, id="leap-day"),
            pytest.param(2025, 4, 30, id="end-of-april"),
            pytest.param(2025, 12, 31, id="new-years-eve"),
            pytest.param(0, 1, 1, id="earliest"),
            pytest.param(9999, 12, 31, id="latest"),
        ],
    )
    def test_valid(year: int, month: int, day: int):
        assert Date(year, month, day).day == day

    @staticmethod
    @pytest.mark.parametrize(
        "year,month,day",
        [
            pytest.param(2025, 0, 1, id="month-0"),
            pytest.param(2025, 13, 1, id="month-13"),
            pytest.param(2025, 1, 0, id="day-0"),
            pytest.param(2025, 1, 32, id="day-32"),
            pytest.param(2025, 2, 29, id="feb-29-non-leap"),
            pytest.param(2024, 2, 30, id="feb-30-leap"),
            pytest.param(2025, 4, 31, id="apr-31"),
            pytest.param(2025, 6, 31, id="jun-31"),
            pytest.param(1900, 2, 29, id="century-non-leap"),
            pytest.param(-1, 1, 1, id="negative-year"),
            pytest.param(10000, 1, 1, id="year-10000"),
            pytest.param(2025, 1.0, 1, id="float-month"),
            pytest.param(2025.5, 1, 1, id="float-year"),
            pytest.param(2025, 1, "1", id="string-day"),
            pytest.param(2025, True, 1, id="bool-month"),
        ],
    )
    def test_invalid(year: int, month: int, day: int):
        with pytest.raises(InvalidArgumentError):
            _ = Date(year, month, day)

    @staticmethod
    def test_existence_matches_days_in_month():
        for year in (1900, 2000, 2023, 2024):
            for month in range(1, 13):
                last = Date.days_in_month(year, month)
                assert Date(year, month, last).day == last
                with pytest.raises(InvalidArgumentError):
                    _ = Date(year, month, last + 1)

    @staticmethod
    def test_is_immutable():
        date = Date(2025, 1, 1)
        with pytest.raises(FrozenInstanceError):
            date.year = 2026  # type: ignore[misc]

    @staticmethod
    def test_from_datetime():
        assert Date.from_datetime(dt.datetime(2025, 6, 15, 23, 59)) == Date(2025, 6, 15)
        assert Date.from_datetime(dt.date(2024, 2, 29)) == Date(2024, 2, 29)

    @staticmethod
    def test_today_matches_local_clock():
        # Given
        before = dt.date.today()

        # When
        today = Date.today()

        # Then
        after = dt.date.today()
        assert Date.from_datetime(before) <= today <= Date.from_datetime(after)


class TestParse:
    @staticmethod
    def test_valid():
        assert Date.parse("2025-06-15") == Date(2025, 6, 15)

    @staticmethod
    def test_from_json_delegates_to_parse():
        assert Date.from_json("2024-02-29") == Date(2024, 2, 29)

    @staticmethod
    @pytest.mark.parametrize(
        "text",
        [
            pytest.param("", id="empty"),
            pytest.param("2025-01", id="too-few-segments"),
            pytest.param("2025-01-01-01", id="too-many-segments"),
            pytest.param("abcd-ef-gh", id="non-numeric"),
            pytest.param("2025-01--1", id="negative-day"),
            pytest.param("2025-+1-01", id="signed-month"),
            pytest.param("2025-01- 1", id="embedded-space"),
            pytest.param("2025/01/01", id="wrong-separator"),
            pytest.param("2025-02-30", id="feb-30"),
            pytest.param("2025-00-01", id="month-00"),
            pytest.param("99999999-01-01", id="huge-year"),
            pytest.param("9" * 5000 + "-01-01", id="digit-limit"),
            pytest.param("২০২৫-০১-০১", id="non-ascii-digits"),
        ],
    )
    def test_invalid(text: str):
        with pytest.raises(InvalidArgumentError):
            _ = Date.parse(text)

    @staticmethod
    def test_non_string():
        with pytest.raises(InvalidArgumentError):
            _ = Date.parse(20250101)  # type: ignore[arg-type]


class TestLeapYear:
    @staticmethod
    @pytest.mark.parametrize(
        "year,expected",
        [
            pytest.param(2024, True, id="normal-leap"),
            pytest.param(1900, False, id="century-non-leap"),
            pytest.param(2000, True, id="400-year-leap"),
            pytest.param(2025, False, id="normal-non-leap"),
        ],
    )
    def test_is_leap_year(year: int, expected: bool):
        assert Date.is_leap_year(year) is expected


class TestDaysInMonth:
    @staticmethod
    def test_february():
        assert Date.days_in_month(2024, 2) == 29
        assert Date.days_in_month(2025, 2) == 28

    @staticmethod
    @pytest.mark.parametrize("month", [4, 6, 9, 11])
    def test_30_day_months(month: int):
        assert Date.days_in_month(2025, month) == 30

    @staticmethod
    @pytest.mark.parametrize("month", [1, 3, 5, 7, 8, 10, 12])
    def test_31_day_months(month: int):
        assert Date.days_in_month(2025, month) == 31


class TestWeekday:
    @staticmethod
    @pytest.mark.parametrize(
        "date,weekday",
        [
            pytest.param(Date(2025, 12, 25), 4, id="thursday"),
            pytest.param(Date(2024, 1, 1), 1, id="monday"),
            pytest.param(Date(2000, 1, 1), 6, id="saturday"),
            pytest.param(Date(2025, 6, 15), 7, id="sunday"),
            pytest.param(Date(1970, 1, 1), 4, id="epoch"),
        ],
    )
    def test_known_dates(date: Date, weekday: int):
        assert date.weekday == weekday

    @staticmethod
    def test_matches_isoweekday():
        for offset in range(0, 3000, 37):
            date = Date(1999, 3, 1).add_days(offset)
            native = dt.date(date.year, date.month, date.day)
            assert date.weekday == native.isoweekday()


class TestAddDays:
    @staticmethod
    @pytest.mark.parametrize(
        "start,days,expected",
        [
            pytest.param(Date(2025, 1, 1), 10, Date(2025, 1, 11), id="positive"),
            pytest.param(Date(2025, 1, 11), -10, Date(2025, 1, 1), id="negative"),
            pytest.param(Date(2025, 1, 31), 1, Date(2025, 2, 1), id="month-boundary"),
            pytest.param(Date(2025, 12, 25), 7, Date(2026, 1, 1), id="year-boundary"),
            pytest.param(Date(2024, 2, 28), 1, Date(2024, 2, 29), id="into-leap-day"),
            pytest.param(Date(2024, 2, 28), 2, Date(2024, 3, 1), id="over-leap-day"),
            pytest.param(Date(2024, 3, 1), -1, Date(2024, 2, 29), id="back-leap"),
            pytest.param(Date(2025, 3, 1), -1, Date(2025, 2, 28), id="back-non-leap"),
            pytest.param(Date(2025, 6, 15), 0, Date(2025, 6, 15), id="zero"),
        ],
    )
    def test_add_days(start: Date, days: int, expected: Date):
        assert start.add_days(days) == expected

    @staticmethod
    def test_matches_stdlib_over_long_spans():
        start = Date(1899, 12, 31)
        native_start = dt.date(1899, 12, 31)
        for days in range(0, 100_000, 997):
            native = native_start + dt.timedelta(days=days)
            assert start.add_days(days) == Date.from_datetime(native)


class TestComparison:
    @staticmethod
    def test_compare_to():
        assert Date(2025, 1, 1).compare_to(Date(2025, 1, 2)) == -1
        assert Date(2025, 1, 2).compare_to(Date(2025, 1, 1)) == 1
        assert Date(2025, 1, 1).compare_to(Date(2025, 1, 1)) == 0

    @staticmethod
    def test_operators():
        assert Date(2024, 12, 31) < Date(2025, 1, 1)
        assert Date(2025, 2, 1) > Date(2025, 1, 31)
        assert Date(2025, 1, 1) <= Date(2025, 1, 1)
        assert Date(2025, 1, 1) >= Date(2025, 1, 1)

    @staticmethod
    def test_sorting_is_lexicographic():
        dates = [Date(2025, 1, 2), Date(2024, 12, 31), Date(2025, 1, 1)]
        assert sorted(dates) == [Date(2024, 12, 31), Date(2025, 1, 1), Date(2025, 1, 2)]

    @staticmethod
    def test_is_same_day():
        assert Date(2025, 1, 1).is_same_day(Date(2025, 1, 1))
        assert not Date(2025, 1, 1).is_same_day(Date(2025, 1, 2))


class TestEquality:
    @staticmethod
    def test_same_values_are_equal():
        assert Date(2025, 1, 1) == Date(2025, 1, 1)
        assert hash(Date(2025, 1, 1)) == hash(Date(2025, 1, 1))

    @staticmethod
    def test_different_values_are_not_equal():
        assert Date(2025, 1, 1) != Date(2025, 1, 2)

    @staticmethod
    def test_not_equal_to_string():
        assert Date(2025, 1, 1) != "2025-01-01"


class TestSerialization:
    @staticmethod
    @pytest.mark.parametrize(
        "date,text",
        [
            pytest.param(Date(2025, 6, 5), "2025-06-05", id="padded"),
            pytest.param(Date(1, 1, 1), "0001-01-01", id="four-digit-year"),
            pytest.param(Date(0, 1, 1), "0000-01-01", id="year-zero"),
        ],
    )
    def test_str(date: Date, text: str):
        assert str(date) == text
        assert date.to_json() == text

    @staticmethod
    @pytest.mark.parametrize(
        "date",
        [Date(2025, 2, 28), Date(2024, 2, 29), Date(0, 1, 1), Date(9999, 12, 31)],
    )
    def test_parse_roundtrip(date: Date):
        assert Date.parse(str(date)) == date
