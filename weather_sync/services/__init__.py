"""Pipeline services.

Provides the capability interfaces for both outbound calls (`WeatherSource`,
`RecordSink`), their HTTP implementations, and the pipeline composing them.
"""

from .fetcher import WeatherApiClient, WeatherSource
from .pipeline import WeatherPipeline
from .scheduler import UpdateScheduler
from .sink import RecordSink, SupabaseSink
from .transformer import to_stored_record

__all__ = [
    "WeatherSource",
    "WeatherApiClient",
    "RecordSink",
    "SupabaseSink",
    "WeatherPipeline",
    "UpdateScheduler",
    "to_stored_record",
]
