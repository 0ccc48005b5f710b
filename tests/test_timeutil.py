import time
from datetime import datetime, timedelta

import pytest

from gamesrv.timeutil import (
    cur_day_begin,
    cur_day_begin_unix,
    cur_day_string,
    cur_day_string_nano,
    is_same_day,
    now_millis,
    now_seconds,
    now_time_string,
    parse_in_location,
    reset_time,
    unix_time_string,
    unix_time_string_ms,
    zero_day,
    zero_month,
    zero_week,
)


def test_day_week_month_counters():
    month = [31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]
    for i in range(11):
        month[i + 1] = month[i] + month[i + 1]
    bt = datetime(2021, 1, 1, 2, 0, 0)
    bd = zero_day(int(bt.timestamp()), 7200)
    bw = zero_week(int(bt.timestamp()), 7200)
    bm = zero_month(int(bt.timestamp()), 7200)
    for i in range(1000):
        abt_u = int((bt + timedelta(days=i)).timestamp())
        for j in (0, 1, 3599, 43200, 82799):
            assert zero_day(abt_u + j, 7200) == bd + i
            abw = zero_week(abt_u + j, 7200)
            if i < 3:
                assert abw == bw
            else:
                assert abw == bw + (i - 3) // 7 + 1
            abm = zero_month(abt_u + j, 7200)
            for k, v in enumerate(month):
                if i < v:
                    assert abm == bm + k
                    break


def test_reset_time_monthly_is_in_future():
    s = now_seconds() - 18 * 3600
    for day in range(1, 31):
        r = reset_time(s, 3, 5, day)
        assert r > s
        assert len(unix_time_string(r)) == 19


def test_reset_time_daily_is_next_reset():
    s = now_seconds()
    r = reset_time(s, 1, 5, 0)
    assert s < r <= s + 25 * 3600
    assert datetime.fromtimestamp(r).hour == 5


def test_reset_time_weekly_lands_on_monday():
    s = now_seconds()
    r = reset_time(s, 2, 0, 1)
    assert r > s
    assert datetime.fromtimestamp(r).isoweekday() == 1


def test_is_same_day():
    base = int(datetime(2021, 3, 10, 12, 0, 0).timestamp())
    assert is_same_day(base, base, 0)
    assert is_same_day(base, base + 3600, 0)
    assert not is_same_day(base, base + 24 * 3600, 0)


def test_unix_time_string_round_trip():
    t = int(datetime(2022, 5, 6, 7, 8, 9).timestamp())
    text = unix_time_string(t)
    assert text == "2022-05-06 07:08:09"
    assert int(parse_in_location(text).timestamp()) == t


def test_unix_time_string_ms_has_zero_millis():
    t = now_seconds()
    assert unix_time_string_ms(t) == unix_time_string(t) + ".000"


def test_parse_in_location_rejects_bad_text():
    with pytest.raises(ValueError):
        parse_in_location("2022/05/06")


def test_cur_day_begin():
    begin = cur_day_begin()
    assert (begin.hour, begin.minute, begin.second) == (0, 0, 0)
    assert cur_day_begin_unix() <= now_seconds() < cur_day_begin_unix() + 25 * 3600


def test_current_strings_shape():
    now = time.time()
    compact = datetime.strptime(cur_day_string(), "%Y%m%d%H%M%S")
    assert abs(compact.timestamp() - now) < 3
    readable = datetime.strptime(now_time_string(), "%Y-%m-%d %H:%M:%S")
    assert abs(readable.timestamp() - now) < 3
    nano = cur_day_string_nano()
    assert nano.isdigit()
    assert 15 <= len(nano) <= 23
    assert nano[:8] == cur_day_string()[:8]


def test_now_clocks_agree():
    before = time.time()
    millis = now_millis()
    seconds = now_seconds()
    assert abs(millis / 1000 - before) < 2
    assert abs(seconds - before) < 2