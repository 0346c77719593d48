"""Local schedule time → UTC over the whole enumerated domain."""

import itertools

import pydantic
import pytest

from goalstory.models import UtcTime
from goalstory.time_settings import (
    HOURS,
    PERIODS,
    TimeSettings,
    UTC_OFFSETS,
    normalize,
    parse_time_settings,
    parse_utc_offset,
    schedule_fields,
    to_24_hour,
)


def test_offset_domain():
    assert len(UTC_OFFSETS) == 27
    assert UTC_OFFSETS[0] == "-12:00"
    assert UTC_OFFSETS[-1] == "+14:00"
    assert "+00:00" in UTC_OFFSETS
    assert "-00:00" not in UTC_OFFSETS


@pytest.mark.parametrize(
    "hour, period, expected",
    [(12, "AM", 0), (1, "AM", 1), (11, "AM", 11), (12, "PM", 12), (1, "PM", 13), (11, "PM", 23)],
)
def test_to_24_hour(hour, period, expected):
    assert to_24_hour(hour, period) == expected


@pytest.mark.parametrize("hour, period", [(0, "AM"), (13, "PM"), (5, "am")])
def test_to_24_hour_rejects_bad_input(hour, period):
    with pytest.raises(ValueError):
        to_24_hour(hour, period)


def test_parse_utc_offset():
    assert parse_utc_offset("-08:00") == -480
    assert parse_utc_offset("+05:00") == 300
    assert parse_utc_offset("+00:00") == 0


def test_parse_utc_offset_rejects_unknown_spelling():
    with pytest.raises(ValueError, match="unsupported UTC offset"):
        parse_utc_offset("UTC-8")


def test_los_angeles_evening():
    settings = TimeSettings(hour="11", period="PM", utcOffset="-08:00")
    assert normalize(settings) == UtcTime(hour=7, minute=0)


def test_zero_offset_equals_local_time():
    for hour, period in itertools.product(HOURS, PERIODS):
        utc = normalize(TimeSettings(hour=hour, period=period, utcOffset="+00:00"))
        assert utc.hour == to_24_hour(int(hour), period)


def test_every_combination_lands_in_range():
    for hour, period, offset in itertools.product(HOURS, PERIODS, UTC_OFFSETS):
        utc = normalize(TimeSettings(hour=hour, period=period, utcOffset=offset))
        assert 0 <= utc.hour <= 23
        assert utc.minute == 0
        expected = (to_24_hour(int(hour), period) * 60 - parse_utc_offset(offset)) % (24 * 60)
        assert utc.hour * 60 + utc.minute == expected


def test_wraps_backwards_past_midnight():
    assert normalize(TimeSettings(hour="1", period="AM", utcOffset="+14:00")) == UtcTime(hour=11)


def test_parse_time_settings_reports_every_bad_field():
    with pytest.raises(pydantic.ValidationError) as info:
        parse_time_settings({"hour": 11, "period": "pm", "utcOffset": "-8"})
    locs = [error["loc"] for error in info.value.errors()]
    assert locs == [("hour",), ("period",), ("utcOffset",)]


def test_parse_time_settings_passes_a_model_through():
    settings = TimeSettings(hour="9", period="AM", utcOffset="+02:00")
    assert parse_time_settings(settings) is settings


def test_schedule_fields():
    assert schedule_fields({"hour": "9", "period": "AM", "utcOffset": "+02:00"}) == {
        "utc_hour": 7,
        "utc_time": "07:00",
    }
