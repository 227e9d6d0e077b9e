from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Protocol, Tuple

import requests
import structlog
from pydantic import ValidationError

from ..errors import FetchError
from ..schemas.weather import WeatherReading

logger = structlog.get_logger(__name__)


class WeatherSource(Protocol):
    """Capability interface for the upstream weather provider."""

    def fetch_current(self, location: str) -> Tuple[WeatherReading, bytes]:
        """Fetch current conditions for `location`.

        Parameters
        ----------
        location : str
            Free-form location query understood by the provider (e.g. "Montreal").

        Returns
        -------
        tuple of (WeatherReading, bytes)
            The decoded reading and the raw response body.

        Raises
        ------
        FetchError
            When the request cannot be sent, the provider answers with a
            non-2xx status, or the body does not decode.
        """
        ...


@dataclass
class WeatherApiClient:
    """WeatherAPI (weatherapi.com) implementation of `WeatherSource`.

    Notes and assumptions:
    - Uses the `current.json` endpoint with the key passed as a query parameter.
    - No retries are attempted; a failed call surfaces immediately as FetchError.
    - `timeout` defaults to None, i.e. the request may block indefinitely.
    """

    base_url: str
    api_key: str = field(repr=False)
    timeout: Optional[float] = None

    def current_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/current.json"

    def fetch_current(self, location: str) -> Tuple[WeatherReading, bytes]:
        params = {"key": self.api_key, "q": location}
        try:
            with requests.Session() as s:
                resp = s.get(self.current_url(), params=params, timeout=self.timeout)
                body = resp.content
        except requests.RequestException as e:
            logger.error("weather_fetch_failed", location=location, error=str(e))
            raise FetchError(f"weather request failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error("weather_fetch_failed", location=location, status=resp.status_code)
            raise FetchError(f"weather provider returned status {resp.status_code}")

        try:
            reading = WeatherReading.model_validate_json(body)
        except ValidationError as e:
            logger.error("weather_decode_failed", location=location, errors=e.error_count())
            raise FetchError(f"failed decoding weather response: {e}") from e

        logger.debug("weather_fetched", location=reading.location.name, bytes=len(body))
        return reading, body
