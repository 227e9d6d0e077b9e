from typing import List

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    app_name: str = "weather-sync"
    app_version: str = "0.1.0"
    app_env: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    # Upstream provider
    weather_api_key: SecretStr = SecretStr("")
    weather_url: str = "http://api.weatherapi.com/v1"
    location: str = "Montreal"

    # Destination store
    supabase_api: SecretStr = SecretStr("")
    supabase_url: str = ""
    supabase_table: str = "weather_data"
    sink_timeout_s: float = Field(default=10.0, gt=0)

    # Timer trigger
    scheduler_enabled: bool = True
    update_interval_s: float = Field(default=900.0, gt=0)
    run_on_startup: bool = False

    # No prefix: keeps the plain WEATHER_API_KEY / SUPABASE_URL names
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    def missing(self) -> List[str]:
        """Names of required settings that are still empty."""
        required = {
            "weather_api_key": self.weather_api_key.get_secret_value(),
            "weather_url": self.weather_url,
            "supabase_api": self.supabase_api.get_secret_value(),
            "supabase_url": self.supabase_url,
        }
        return [name for name, value in required.items() if not value]
