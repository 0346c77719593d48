# =============================================================================
# goalstory/time_settings.py  —  Daily Schedule Time → UTC
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Scheduled stories are generated once a day at a time the user picks in
#   their OWN wall-clock terms: "11 PM, UTC-08:00".  The backend stores that
#   time in UTC.  This module converts between the two.
#
#   The TimeSettings model below is also the nested "timeSettings" object of
#   the two schedule tools, so its Literal fields ARE the advertised enums.
#
# THE ALGORITHM:
#   1. 12-hour + period → 24-hour local hour
#        12 AM → 0,  12 PM → 12,  h PM → h + 12,  h AM → h
#   2. Subtract the signed UTC offset, wrap modulo 24 hours
#        11 PM at -08:00 → 23:00 - (-8:00) = 31:00 → 07:00 UTC
#
#   Only the time of day is tracked.  Schedules recur daily, so a date
#   rollover ("07:00 UTC is tomorrow for this user") does not matter.
#
# DAYLIGHT SAVING:
#   Not inferred.  The caller picks the offset that is correct right now
#   (Los Angeles is -08:00 in winter, -07:00 in summer).
# =============================================================================

from typing import Any, Literal, Mapping, Union

from pydantic import BaseModel, ConfigDict, Field

from goalstory.models import UtcTime


HOURS = tuple(str(h) for h in range(1, 13))
PERIODS = ("AM", "PM")

# The 27 offsets this deployment supports, -12:00 .. +14:00 in whole hours.
UTC_OFFSETS = tuple(
    f"{'-' if h < 0 else '+'}{abs(h):02d}:00" for h in range(-12, 15)
)

MINUTES_PER_DAY = 24 * 60

UTC_OFFSET_DESCRIPTION = (
    "Choose a current UTC offset based on the user's location (accounting for "
    "adjustments like daylight savings time for instance). For example, the UTC "
    "offset for Los Angeles, California is -08:00 during standard time (PST, "
    "Pacific Standard Time) and -07:00 during daylight saving time (PDT, Pacific "
    "Daylight Time)."
)


class TimeSettings(BaseModel):
    """Local wall-clock preference for a daily story-generation job."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    hour: Literal[HOURS] = Field(description="Hour of the day on a 12-hour clock.")
    period: Literal[PERIODS] = Field(description="AM or PM.")
    utcOffset: Literal[UTC_OFFSETS] = Field(description=UTC_OFFSET_DESCRIPTION)


def to_24_hour(hour: int, period: str) -> int:
    """Convert a 12-hour clock hour and AM/PM to a 0-23 hour."""
    if not 1 <= hour <= 12:
        raise ValueError(f"hour must be 1..12, got {hour}")
    if period == "AM":
        return 0 if hour == 12 else hour
    if period == "PM":
        return 12 if hour == 12 else hour + 12
    raise ValueError(f"period must be AM or PM, got {period!r}")


def parse_utc_offset(offset: str) -> int:
    """Return the signed offset in minutes for one of the supported offsets.

    Raises:
        ValueError: for anything outside UTC_OFFSETS.  There is no
            best-effort parsing of other spellings.
    """
    if offset not in UTC_OFFSETS:
        raise ValueError(f"unsupported UTC offset {offset!r}")
    sign = -1 if offset.startswith("-") else 1
    hours, minutes = offset[1:].split(":")
    return sign * (int(hours) * 60 + int(minutes))


def parse_time_settings(raw: Union[TimeSettings, Mapping[str, Any]]) -> TimeSettings:
    """Build a TimeSettings from the timeSettings argument object.

    Raises:
        pydantic.ValidationError: if hour, period or utcOffset is missing or
            outside its allowed values.
    """
    if isinstance(raw, TimeSettings):
        return raw
    return TimeSettings.model_validate(raw)


def normalize(settings: TimeSettings) -> UtcTime:
    """Convert local schedule settings to the UTC time of day.

    Example:
        >>> normalize(TimeSettings(hour="11", period="PM", utcOffset="-08:00"))
        UtcTime(hour=7, minute=0)
    """
    local_minutes = to_24_hour(int(settings.hour), settings.period) * 60
    utc_minutes = (local_minutes - parse_utc_offset(settings.utcOffset)) % MINUTES_PER_DAY
    return UtcTime(hour=utc_minutes // 60, minute=utc_minutes % 60)


def schedule_fields(raw: Union[TimeSettings, Mapping[str, Any]]) -> dict[str, Any]:
    """The body fields a schedule request carries for a timeSettings object."""
    utc = normalize(parse_time_settings(raw))
    return {"utc_hour": utc.hour, "utc_time": utc.as_hhmm()}
