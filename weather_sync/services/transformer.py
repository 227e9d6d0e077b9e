import datetime as dt
from typing import Optional

from ..schemas.weather import StoredRecord, WeatherReading


def capture_timestamp(now: Optional[dt.datetime] = None) -> str:
    """Format `now` (default: current time) as UTC ISO-8601 with second precision."""
    if now is None:
        now = dt.datetime.now(dt.timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=dt.timezone.utc)
    else:
        now = now.astimezone(dt.timezone.utc)
    return now.isoformat(timespec="seconds")


def to_stored_record(reading: WeatherReading, now: Optional[dt.datetime] = None) -> StoredRecord:
    """Map a provider reading onto the destination schema.

    Pure apart from the capture timestamp, which is taken from `now` when given.
    """
    current = reading.current
    return StoredRecord(
        location=reading.location.name,
        temperature=current.temp_c,
        humidity=current.humidity,
        is_day=current.is_day,
        wind_speed=current.wind_kph,
        wind_direction=current.wind_dir,
        uv=current.uv,
        cloud=current.cloud,
        condition=current.condition.text,
        pressure=current.pressure_mb,
        visibility=current.vis_km,
        feels_like=current.feelslike_c,
        timestamp=capture_timestamp(now),
    )
