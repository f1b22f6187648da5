import calendar
import re
import time
from datetime import datetime, timedelta, timezone

import pytest

from powerai.datetimes import (
    UnixTime,
    add_day,
    add_day_safe,
    add_hour,
    add_minute,
    add_month,
    add_month_safe,
    add_week,
    add_year,
    add_year_safe,
    begin_of_day,
    begin_of_hour,
    begin_of_minute,
    begin_of_month,
    begin_of_week,
    begin_of_year,
    between_seconds,
    day_of_year,
    days_between,
    end_of_day,
    end_of_hour,
    end_of_minute,
    end_of_month,
    end_of_week,
    end_of_year,
    format_str_to_time,
    format_time_to_str,
    generate_datetimes_between,
    get_night_timestamp,
    get_now_date,
    get_now_date_time,
    get_now_date_time_milli,
    get_now_time,
    get_today_end_time,
    get_today_start_time,
    get_zero_hour_timestamp,
    is_leap_year,
    is_weekend,
    max_min,
    max_time,
    min_time,
    new_format,
    new_iso8601,
    new_unix,
    new_unix_now,
    now_date_or_time,
    parse_duration,
    timestamp,
    timestamp_micro,
    timestamp_milli,
    timestamp_nano,
    track_func_time,
)

SAMPLE = datetime(2021, 3, 4, 5, 6, 7, 123456)


def test_new_unix_round_trip():
    assert new_unix(1234567).to_unix() == 1234567
    assert new_unix(42) == UnixTime(42)


def test_new_unix_now_is_current():
    before = int(time.time())
    value = new_unix_now().to_unix()
    after = int(time.time())
    assert before <= value <= after


def test_new_format_is_utc_plus_eight():
    assert (
        new_format("2021-01-01 08:00:00").to_unix()
        == new_iso8601("2021-01-01T00:00:00Z").to_unix()
    )
    assert (
        new_format("2021-06-15 12:30:45").to_unix()
        == new_iso8601("2021-06-15T12:30:45+08:00").to_unix()
    )


def test_new_iso8601_epoch():
    assert new_iso8601("1970-01-01T00:00:00Z").to_unix() == 0


def test_new_iso8601_offsets_agree():
    a = new_iso8601("2022-05-05T10:00:00+02:00").to_unix()
    b = new_iso8601("2022-05-05T08:00:00Z").to_unix()
    c = new_iso8601("2022-05-05T08:00:00.75Z").to_unix()
    assert a == b == c


@pytest.mark.parametrize("text", ["2021-01-01", "2021-01-01T00:00:00", "garbage", "2021-13-01T00:00:00Z"])
def test_new_iso8601_invalid(text):
    with pytest.raises(ValueError):
        new_iso8601(text)


def test_new_format_invalid():
    with pytest.raises(ValueError):
        new_format("2021/01/01 00:00:00")


def test_to_iso8601_round_trip():
    value = new_unix(1_600_000_000)
    assert new_iso8601(value.to_iso8601()).to_unix() == 1_600_000_000


def test_to_format_matches_template():
    value = new_unix(1_600_000_000)
    assert value.to_format_for_tpl("%Y-%m-%d %H:%M:%S") == value.to_format()
    assert value.to_format_for_tpl("%Y") == value.to_format()[:4]


def test_fixed_step_additions():
    assert add_minute(SAMPLE, 5) - SAMPLE == timedelta(minutes=5)
    assert add_hour(SAMPLE, -3) - SAMPLE == timedelta(hours=-3)
    assert add_day(SAMPLE, 2) - SAMPLE == timedelta(days=2)
    assert add_week(SAMPLE, 1) - SAMPLE == timedelta(weeks=1)


def test_add_month_and_year_round_trip():
    t = datetime(2021, 1, 15, 10, 0)
    assert add_month(add_month(t, 14), -14) == t
    assert add_year(add_year(t, 3), -3) == t
    assert add_month(t, 12) == add_year(t, 1)


def test_add_month_rolls_over():
    result = add_month(datetime(2021, 1, 31), 1)
    assert result.month == 3
    assert add_month_safe(datetime(2021, 1, 31), 1) < result


def test_add_month_safe_clamps():
    result = add_month_safe(datetime(2021, 1, 31, 9, 30), 1)
    assert result.month == 2
    assert result.day == calendar.monthrange(2021, 2)[1]
    assert (result.hour, result.minute) == (9, 30)
    back = add_month_safe(datetime(2021, 3, 31), -13)
    assert back.year == 2020 and back.month == 2
    assert back.day == calendar.monthrange(2020, 2)[1]


def test_add_year_safe_leap_day():
    assert add_year_safe(datetime(2020, 2, 29), 1) == datetime(2021, 2, 28)
    assert add_year_safe(datetime(2020, 2, 29), 4) == datetime(2024, 2, 29)
    assert add_year(datetime(2020, 2, 29), 1).month == 3


def test_add_day_safe_matches_calendar():
    t = datetime(2021, 1, 31, 12)
    assert add_day_safe(t, 1) == add_day(t, 1)
    assert add_day_safe(add_day_safe(t, 400), -400) == t


def test_now_strings():
    today = datetime.now().date()
    date_text = get_now_date()
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}", date_text)
    parsed = datetime.strptime(date_text, "%Y-%m-%d").date()
    assert abs((parsed - today).days) <= 1
    assert re.fullmatch(r"\d{2}:\d{2}:\d{2}", get_now_time())
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}", get_now_date_time())
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}\.\d{3}", get_now_date_time_milli())


def test_today_bounds():
    assert get_today_start_time().endswith(" 00:00:00")
    assert get_today_end_time().endswith(" 23:59:59")
    assert get_today_start_time()[:10] == get_today_end_time()[:10]


def test_zero_hour_and_night():
    assert get_night_timestamp() - get_zero_hour_timestamp() == 86400 - 1
    assert (get_zero_hour_timestamp() + 8 * 3600) % 86400 == 0


def test_format_time_to_str_case_insensitive():
    assert format_time_to_str(SAMPLE, "yyyy-mm-dd") == "2021-03-04"
    assert format_time_to_str(SAMPLE, "YYYY-MM-DD") == format_time_to_str(SAMPLE, "yyyy-mm-dd")


def test_format_time_to_str_unknown():
    assert format_time_to_str(SAMPLE, "dd.mm.yyyy") == ""
    assert format_time_to_str(SAMPLE, "yyyy", "No/Such_Zone") == ""


@pytest.mark.parametrize(
    "fmt", ["yyyy-mm-dd hh:mm:ss", "yyyy/mm/dd hh:mm:ss", "dd-mm-yy hh:mm:ss", "dd/mm/yy hh:mm:ss"]
)
def test_format_round_trip(fmt):
    t = SAMPLE.replace(microsecond=0)
    text = format_time_to_str(t, fmt)
    assert format_str_to_time(text, fmt) == t.replace(tzinfo=timezone.utc)


def test_format_str_to_time_with_zone():
    plain = format_str_to_time("2021-03-04 05:06", "yyyy-mm-dd hh:mm")
    utc = format_str_to_time("2021-03-04 05:06", "yyyy-mm-dd hh:mm", "UTC")
    assert plain == utc
    assert utc.utcoffset() == timedelta(0)


def test_format_str_to_time_errors():
    with pytest.raises(ValueError, match="not support"):
        format_str_to_time("2021", "nope")
    with pytest.raises(ValueError):
        format_str_to_time("2021", "yyyy", "No/Such_Zone")
    with pytest.raises(ValueError):
        format_str_to_time("not a date", "yyyy-mm-dd")


def test_now_date_or_time():
    assert now_date_or_time("yyyy") == str(datetime.now().year)
    assert now_date_or_time("bogus") == ""
    assert now_date_or_time("yyyy", "No/Such_Zone") == ""


def test_timestamps():
    before = int(time.time())
    secs = timestamp()
    after = int(time.time()) + 1
    assert before <= secs <= after
    assert before <= timestamp_milli() // 1000 <= after
    assert before <= timestamp_micro() // 1_000_000 <= after
    assert before <= timestamp_nano() // 1_000_000_000 <= after
    assert timestamp("UTC") >= before


def test_timestamps_bad_zone():
    assert timestamp("No/Such_Zone") == 0
    assert timestamp_milli("No/Such_Zone") == 0
    assert timestamp_micro("No/Such_Zone") == 0
    assert timestamp_nano("No/Such_Zone") == 0


def test_minute_hour_day_bounds():
    for begin, end in (
        (begin_of_minute, end_of_minute),
        (begin_of_hour, end_of_hour),
        (begin_of_day, end_of_day),
    ):
        assert begin(SAMPLE) <= SAMPLE <= end(SAMPLE)
    assert end_of_minute(SAMPLE) - begin_of_minute(SAMPLE) == timedelta(minutes=1, microseconds=-1)
    assert end_of_hour(SAMPLE) - begin_of_hour(SAMPLE) == timedelta(hours=1, microseconds=-1)
    assert end_of_day(SAMPLE) - begin_of_day(SAMPLE) == timedelta(days=1, microseconds=-1)


def test_month_and_year_bounds():
    assert begin_of_month(SAMPLE).day == 1
    assert end_of_month(SAMPLE) + timedelta(microseconds=1) == begin_of_month(add_month(SAMPLE, 1))
    assert begin_of_year(SAMPLE) == begin_of_month(SAMPLE.replace(month=1))
    assert end_of_year(SAMPLE) + timedelta(microseconds=1) == begin_of_year(add_year(SAMPLE, 1))


@pytest.mark.parametrize("offset", range(7))
def test_week_bounds(offset):
    t = SAMPLE + timedelta(days=offset)
    start = begin_of_week(t)
    finish = end_of_week(t)
    assert start.weekday() == calendar.SUNDAY
    assert finish.weekday() == calendar.SATURDAY
    assert start == begin_of_day(start)
    assert timedelta(0) <= t - start < timedelta(days=7)
    assert timedelta(0) <= finish - t < timedelta(days=7)


def test_week_custom_start():
    t = SAMPLE
    start = begin_of_week(t, calendar.MONDAY)
    assert start.weekday() == calendar.MONDAY
    assert end_of_week(t, calendar.SUNDAY) - start == timedelta(days=7, microseconds=-1)


@pytest.mark.parametrize("year,leap", [(2000, True), (1900, False), (2024, True), (2023, False)])
def test_is_leap_year(year, leap):
    assert is_leap_year(year) is leap


def test_between_seconds_and_days():
    assert between_seconds(SAMPLE, SAMPLE + timedelta(seconds=90)) == 90
    assert between_seconds(SAMPLE + timedelta(seconds=90), SAMPLE) == -90
    assert days_between(SAMPLE, SAMPLE + timedelta(days=3, hours=5)) == 3
    assert days_between(SAMPLE + timedelta(days=3, hours=5), SAMPLE) == -3


def test_day_of_year():
    assert day_of_year(datetime(2021, 1, 1, 23)) == 0
    t = datetime(2021, 5, 5)
    assert day_of_year(t + timedelta(days=1)) == day_of_year(t) + 1


def test_is_weekend():
    flags = [is_weekend(SAMPLE + timedelta(days=k)) for k in range(7)]
    assert flags.count(True) == 2
    assert all(is_weekend(SAMPLE + timedelta(days=k)) == ((SAMPLE + timedelta(days=k)).weekday() >= 5) for k in range(7))


def test_track_func_time(capsys):
    def work():
        done = track_func_time(time.perf_counter())
        return done()

    elapsed = work()
    out = capsys.readouterr().out
    assert out.startswith("Function work execution time:\t ")
    assert elapsed >= timedelta(0)


def test_track_func_time_with_datetime(capsys):
    start = datetime.now() - timedelta(seconds=2)
    elapsed = track_func_time(start)()
    assert elapsed >= timedelta(seconds=2)
    assert "execution time" in capsys.readouterr().out


@pytest.mark.parametrize(
    "text,expected",
    [
        ("1h30m", timedelta(hours=1, minutes=30)),
        ("300ms", timedelta(milliseconds=300)),
        ("-1.5h", -timedelta(hours=1.5)),
        ("2h45m10s", timedelta(hours=2, minutes=45, seconds=10)),
        ("0", timedelta(0)),
        ("1500us", timedelta(microseconds=1500)),
    ],
)
def test_parse_duration(text, expected):
    assert parse_duration(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "5", "1h5", ".h", "-"])
def test_parse_duration_invalid(text):
    with pytest.raises(ValueError):
        parse_duration(text)


def test_generate_datetimes_between():
    start = datetime(2021, 3, 4)
    end = start + timedelta(hours=2)
    forward = generate_datetimes_between(start, end, "%H:%M", "1h")
    assert len(forward) == 3
    assert forward[0] == start.strftime("%H:%M")
    assert forward[-1] == end.strftime("%H:%M")
    assert generate_datetimes_between(end, start, "%H:%M", "1h") == forward


def test_generate_datetimes_between_bad_interval():
    with pytest.raises(ValueError):
        generate_datetimes_between(SAMPLE, SAMPLE, "%H", "soon")
    with pytest.raises(ValueError):
        generate_datetimes_between(SAMPLE, SAMPLE, "%H", "0")


def test_min_max():
    early = SAMPLE - timedelta(days=1)
    late = SAMPLE + timedelta(days=1)
    assert min_time(SAMPLE, late, early) == early
    assert max_time(SAMPLE, early, late) == late
    assert max_min(SAMPLE, early, late) == (late, early)
    assert max_min(SAMPLE) == (SAMPLE, SAMPLE)