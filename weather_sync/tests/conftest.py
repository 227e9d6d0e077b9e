import datetime as dt
import json
from typing import List, Optional

import pytest

from weather_sync.config import AppSettings
from weather_sync.errors import FetchError, SinkError
from weather_sync.schemas.weather import StoredRecord, WeatherReading
from weather_sync.services.pipeline import WeatherPipeline

FIXED_NOW = dt.datetime(2026, 10, 17, 14, 0, 0, tzinfo=dt.timezone.utc)

PROVIDER_PAYLOAD = {
    "location": {"name": "Montreal", "region": "Quebec", "country": "Canada"},
    "current": {
        "temp_c": 21.5,
        "humidity": 60,
        "is_day": 1,
        "wind_kph": 14.4,
        "wind_dir": "WSW",
        "uv": 5.0,
        "cloud": 25,
        "condition": {"text": "Partly cloudy", "code": 1003},
        "pressure_mb": 1015.0,
        "vis_km": 10.0,
        "feelslike_c": 21.0,
        "last_updated": "2026-10-17 10:00",
    },
}


class FakeSource:
    def __init__(self, payload: Optional[dict] = None, error: Optional[Exception] = None):
        self.payload = payload if payload is not None else PROVIDER_PAYLOAD
        self.error = error
        self.calls: List[str] = []

    def fetch_current(self, location: str):
        self.calls.append(location)
        if self.error is not None:
            raise self.error
        body = json.dumps(self.payload).encode()
        return WeatherReading.model_validate_json(body), body


class FakeSink:
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.records: List[StoredRecord] = []

    def send(self, record: StoredRecord) -> None:
        self.records.append(record)
        if self.error is not None:
            raise self.error


@pytest.fixture
def provider_payload() -> dict:
    return json.loads(json.dumps(PROVIDER_PAYLOAD))


@pytest.fixture
def settings() -> AppSettings:
    return AppSettings(
        _env_file=None,
        weather_api_key="weather-key",
        weather_url="http://weather.test/v1",
        supabase_api="supabase-key",
        supabase_url="http://supabase.test",
        scheduler_enabled=False,
    )


@pytest.fixture
def fake_source() -> FakeSource:
    return FakeSource()


@pytest.fixture
def fake_sink() -> FakeSink:
    return FakeSink()


@pytest.fixture
def pipeline(fake_source, fake_sink) -> WeatherPipeline:
    return WeatherPipeline(fake_source, fake_sink, location="Montreal", clock=lambda: FIXED_NOW)


@pytest.fixture
def failing_fetch_pipeline(fake_sink) -> WeatherPipeline:
    return WeatherPipeline(FakeSource(error=FetchError("weather request failed: boom")), fake_sink)


@pytest.fixture
def failing_sink_pipeline(fake_source) -> WeatherPipeline:
    return WeatherPipeline(fake_source, FakeSink(error=SinkError("supabase returned status 500")))
