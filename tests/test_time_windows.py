"""
Time-of-day arithmetic: parsing, midnight wrap and weekday period splits.
"""
import pytest

from labour_cost.services.time_windows import (
    crosses_midnight,
    hours_in_window,
    parse_time,
    span_minutes,
    split_weekday_hours,
)


def test_parse_time():
    assert parse_time("00:00") == 0
    assert parse_time("07:30") == 450
    assert parse_time("23:59") == 1439


@pytest.mark.parametrize("bad", ["24:00", "12:60", "ab:cd"])
def test_parse_time_rejects_invalid(bad):
    with pytest.raises(ValueError):
        parse_time(bad)


def test_span_wraps_past_midnight():
    """22:00 to 06:00 is an 8 hour shift finishing the next day"""
    assert crosses_midnight("22:00", "06:00")
    assert not crosses_midnight("06:00", "22:00")
    assert span_minutes("22:00", "06:00") == 480
    assert span_minutes("09:00", "17:30") == 510


def test_hours_in_window_same_day():
    assert hours_in_window(parse_time("17:00"), parse_time("22:00"), 18 * 60, 21 * 60) == 3.0


def test_hours_in_window_no_overlap():
    assert hours_in_window(parse_time("07:00"), parse_time("12:00"), 18 * 60, 21 * 60) == 0.0


def test_hours_in_window_wrapping_shift():
    """22:00-06:00 has 2 hours in 21:00-24:00"""
    assert hours_in_window(parse_time("22:00"), parse_time("06:00"), 21 * 60, 24 * 60) == 2.0


def test_split_afternoon_into_evening_and_night():
    """17:00-22:00: 1h ordinary, 3h evening, 1h night"""
    assert split_weekday_hours("17:00", "22:00") == (1.0, 3.0, 1.0)


def test_split_early_start():
    """04:00-07:00: 2h night before 06:00, then 1h ordinary"""
    assert split_weekday_hours("04:00", "07:00") == (1.0, 0.0, 2.0)


def test_split_overnight_counts_hours_after_midnight():
    """22:00-05:00 is entirely night: 2h before midnight plus 5h after"""
    assert split_weekday_hours("22:00", "05:00") == (0.0, 0.0, 7.0)


def test_split_periods_add_up_to_span():
    for start, end in [("06:00", "18:00"), ("15:00", "01:00"), ("20:00", "08:00")]:
        assert sum(split_weekday_hours(start, end)) == span_minutes(start, end) / 60
