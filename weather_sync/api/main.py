from typing import Optional

import time
from contextlib import asynccontextmanager
from fastapi import FastAPI

from ..config import AppSettings
from ..logging import init_logging
from ..services.pipeline import WeatherPipeline
from ..services.scheduler import UpdateScheduler
from .middleware import RequestIDMiddleware
from .routes import health, update


def create_app(settings: Optional[AppSettings] = None, pipeline: Optional[WeatherPipeline] = None) -> FastAPI:
    settings = settings or AppSettings()
    logger = init_logging(settings.log_level)

    missing = settings.missing()
    if missing:
        logger.warning("config_incomplete", missing=missing)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Timer only runs under a real server loop; tests without lifespan stay offline
        if settings.scheduler_enabled:
            app.state.scheduler.start()
        try:
            yield
        finally:
            await app.state.scheduler.stop()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=lifespan,
        openapi_tags=[
            {"name": "health", "description": "Service health and uptime"},
            {"name": "update", "description": "On-demand weather sync"},
        ],
    )

    app.add_middleware(RequestIDMiddleware)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(update.router, tags=["update"])

    app.state.settings = settings
    app.state.start_time = time.time()
    app.state.pipeline = pipeline or WeatherPipeline.from_settings(settings)
    app.state.scheduler = UpdateScheduler(
        app.state.pipeline,
        interval_s=settings.update_interval_s,
        run_on_start=settings.run_on_startup,
    )

    return app


def run() -> None:
    import uvicorn

    s = AppSettings()
    uvicorn.run(create_app(s), host=s.host, port=s.port, log_config=None)


if __name__ == "__main__":
    run()
