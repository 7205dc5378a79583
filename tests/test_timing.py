import time

from rmtoolkit.timing import TimeUnit, count_time_duration, get_curr_time


def test_clock_is_monotonic():
    first = get_curr_time()
    second = get_curr_time()
    assert second >= first


def test_duration_in_milliseconds_by_default():
    assert count_time_duration(0, 1_500_000) == 1


def test_duration_in_microseconds():
    assert count_time_duration(0, 1_500_000, TimeUnit.MICROSECONDS) == 1500


def test_negative_duration_truncates_towards_zero():
    assert count_time_duration(1_500_000, 0) == -count_time_duration(0, 1_500_000)


def test_units_are_consistent():
    begin, end = 123, 987_654_321
    ms = count_time_duration(begin, end, TimeUnit.MILLISECONDS)
    us = count_time_duration(begin, end, TimeUnit.MICROSECONDS)
    assert ms == us // 1000


def test_measures_a_sleep():
    begin = get_curr_time()
    time.sleep(0.02)
    end = get_curr_time()
    assert count_time_duration(begin, end) >= 19