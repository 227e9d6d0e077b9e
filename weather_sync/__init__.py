"""Weather sync service.

Fetches current conditions from WeatherAPI on a timer (and on demand) and
inserts a reshaped record into a Supabase table.

Subpackages:
- schemas: Provider and destination data shapes, HTTP payloads.
- services: Fetcher, transformer, sink, pipeline and scheduler.
- api: FastAPI application exposing the on-demand trigger.
"""

__version__ = "0.1.0"
