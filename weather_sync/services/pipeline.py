from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

import structlog

from ..config import AppSettings
from ..errors import PipelineError
from ..schemas.weather import StoredRecord
from .fetcher import WeatherApiClient, WeatherSource
from .sink import RecordSink, SupabaseSink
from .transformer import to_stored_record

logger = structlog.get_logger(__name__)

Clock = Callable[[], dt.datetime]


class WeatherPipeline:
    """Fetch -> transform -> send, all-or-nothing per run.

    Holds only its collaborators; every `run` builds its own transient data, so
    the timer and HTTP triggers may call it concurrently.
    """

    def __init__(
        self,
        source: WeatherSource,
        sink: RecordSink,
        location: str = "Montreal",
        clock: Optional[Clock] = None,
    ):
        self.source = source
        self.sink = sink
        self.location = location
        self.clock = clock

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "WeatherPipeline":
        source = WeatherApiClient(
            base_url=settings.weather_url,
            api_key=settings.weather_api_key.get_secret_value(),
        )
        sink = SupabaseSink(
            base_url=settings.supabase_url,
            api_key=settings.supabase_api.get_secret_value(),
            table=settings.supabase_table,
            timeout=settings.sink_timeout_s,
        )
        return cls(source=source, sink=sink, location=settings.location)

    def run(self) -> StoredRecord:
        log = logger.bind(location=self.location)
        try:
            reading, _ = self.source.fetch_current(self.location)
            record = to_stored_record(reading, self.clock() if self.clock else None)
            self.sink.send(record)
        except PipelineError as e:
            log.debug("pipeline_failed", stage=type(e).__name__, error=str(e))
            raise
        log.info("pipeline_completed", temperature=record.temperature, timestamp=record.timestamp)
        return record
