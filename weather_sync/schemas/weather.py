from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

# Wrong JSON types are rejected rather than coerced; ints still satisfy float
PROVIDER_CONFIG = ConfigDict(strict=True, extra="ignore")


class ProviderLocation(BaseModel):
    model_config = PROVIDER_CONFIG

    name: str = ""


class ProviderCondition(BaseModel):
    model_config = PROVIDER_CONFIG

    text: str = ""


class ProviderCurrent(BaseModel):
    model_config = PROVIDER_CONFIG

    temp_c: float = 0.0
    humidity: float = 0.0
    is_day: int = 0
    wind_kph: float = 0.0
    wind_dir: str = ""
    uv: float = 0.0
    cloud: float = 0.0
    condition: ProviderCondition = Field(default_factory=ProviderCondition)
    pressure_mb: float = 0.0
    vis_km: float = 0.0
    feelslike_c: float = 0.0


class WeatherReading(BaseModel):
    """Subset of a WeatherAPI `current.json` response.

    Only type decoding is applied: the `location` and `current` objects must be
    present and values must already carry their declared JSON type (numeric
    strings and booleans are not coerced). Scalar fields absent from them fall
    back to zero values and unknown fields are ignored.
    """

    model_config = PROVIDER_CONFIG

    location: ProviderLocation
    current: ProviderCurrent


class StoredRecord(BaseModel):
    """One row of the destination `weather_data` table."""

    location: str
    temperature: float
    humidity: float
    is_day: int
    wind_speed: float
    wind_direction: str
    uv: float
    cloud: float
    condition: str
    pressure: float
    visibility: float
    feels_like: float
    timestamp: str = Field(description="Capture time, UTC ISO-8601 with second precision")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "location": "Montreal",
                    "temperature": 21.5,
                    "humidity": 60,
                    "is_day": 1,
                    "wind_speed": 14.4,
                    "wind_direction": "WSW",
                    "uv": 5.0,
                    "cloud": 25,
                    "condition": "Partly cloudy",
                    "pressure": 1015.0,
                    "visibility": 10.0,
                    "feels_like": 21.5,
                    "timestamp": "2026-10-17T14:00:00+00:00",
                }
            ]
        }
    }
