from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Protocol

import requests
import structlog

from ..errors import SinkError
from ..schemas.weather import StoredRecord

logger = structlog.get_logger(__name__)


class RecordSink(Protocol):
    """Capability interface for the destination store.

    `send` performs exactly one insert and raises SinkError on failure.
    """

    def send(self, record: StoredRecord) -> None: ...


@dataclass
class SupabaseSink:
    """Supabase (PostgREST) insert into a single table.

    Any status in [200, 300) counts as success whatever the body says. Duplicate
    sends create duplicate rows.
    """

    base_url: str
    api_key: str = field(repr=False)
    table: str = "weather_data"
    timeout: float = 10.0

    def insert_url(self) -> str:
        # select=* is kept literal; requests would percent-encode it as a param
        return f"{self.base_url.rstrip('/')}/rest/v1/{self.table}?select=*"

    def headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "Prefer": "return=representation",
        }

    def send(self, record: StoredRecord) -> None:
        payload = record.model_dump_json()
        logger.debug("sink_payload", table=self.table, payload=payload)
        try:
            with requests.Session() as s:
                resp = s.post(
                    self.insert_url(),
                    data=payload.encode("utf-8"),
                    headers=self.headers(),
                    timeout=self.timeout,
                )
        except requests.RequestException as e:
            logger.error("sink_insert_failed", table=self.table, error=str(e))
            raise SinkError(f"supabase request failed: {e}") from e

        if resp.status_code < 200 or resp.status_code >= 300:
            logger.error("sink_insert_failed", table=self.table, status=resp.status_code)
            raise SinkError(f"supabase returned status {resp.status_code}")

        logger.info("sink_insert_ok", table=self.table, status=resp.status_code)
