"""The forecast web server: cached forecasts, a refresh worker and the HTTP routes."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import dataclasses
import logging
import os
import time
from pathlib import Path
from typing import Any

import jinja2
import uvicorn
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import HTMLResponse, JSONResponse, Response
from starlette.routing import Mount, Route
from starlette.staticfiles import StaticFiles

from weatherboard.client import ApiError, Configuration, WeatherClient
from weatherboard.config import Config
from weatherboard.filters import register_all
from weatherboard.forecast import ForecastError, TemplateForecast, get_forecast

logger = logging.getLogger(__name__)

MIN_UPDATE_FREQUENCY = 300
"""Seconds after which cached forecasts are considered stale."""

TEMPLATE_NAME = "main.tera"


def _now() -> int:
    return int(time.time())


@dataclasses.dataclass
class ForecastCache:
    """The most recently fetched forecasts and when they were fetched."""

    forecasts: list[TemplateForecast] = dataclasses.field(default_factory=list)
    updated_at: int = 0

    def update(self, new_forecasts: list[TemplateForecast]) -> None:
        """Replace the cached forecasts and stamp the current time."""
        self.forecasts = list(new_forecasts)
        self.updated_at = _now()

    def needs_update(self) -> bool:
        """Whether the cache is older than the minimum update interval."""
        return _now() - self.updated_at > MIN_UPDATE_FREQUENCY


@dataclasses.dataclass
class AppState:
    """Everything the routes and the background worker share."""

    templates: jinja2.Environment = dataclasses.field(default_factory=jinja2.Environment)
    config: Config = dataclasses.field(default_factory=Config)
    forecast_cache: ForecastCache = dataclasses.field(default_factory=ForecastCache)
    notify: asyncio.Event = dataclasses.field(default_factory=asyncio.Event)
    weather_configuration: Configuration = dataclasses.field(default_factory=Configuration)


async def refresh_forecasts(state: AppState, client: Any) -> bool:
    """Refetch every location if the cache is stale; return whether it was updated.

    Stops at the first failing location and leaves the cache as it was.
    """
    if not state.forecast_cache.needs_update():
        logger.debug("Nothing to do...")
        return False

    logger.debug("Fetching new data...")
    forecasts = []
    for location in state.config.locations:
        try:
            forecast = await get_forecast(client, state.config.pirate_weather_key, location)
        except (ApiError, ForecastError) as exc:
            logger.error("%r", exc)
            logger.debug("Failed at least once, will retry later...")
            return False
        forecasts.append(forecast)

    state.forecast_cache.update(forecasts)
    logger.debug("Update complete.")
    return True


async def background_worker(state: AppState) -> None:
    """Refresh the forecast cache each time the routes ask for it."""
    while True:
        await state.notify.wait()
        state.notify.clear()
        logger.debug("Background worker awake.")
        await refresh_forecasts(state, WeatherClient(state.weather_configuration))


def _state(request: Request) -> AppState:
    return request.app.state.weatherboard


async def is_data_fresh(request: Request) -> Response:
    """Answer whether the cached forecasts are recent enough."""
    return JSONResponse(not _state(request).forecast_cache.needs_update())


async def index(request: Request) -> Response:
    """Render the forecast page, waking the worker if the data is stale."""
    state = _state(request)
    cache = state.forecast_cache
    needs_update = cache.needs_update()
    if needs_update:
        logger.debug("Waking background worker")
        state.notify.set()

    context = {
        "forecasts": [forecast.to_dict() for forecast in cache.forecasts],
        "needs_update": needs_update,
        "updated_at": cache.updated_at,
    }
    try:
        rendered = state.templates.get_template(TEMPLATE_NAME).render(context)
    except (jinja2.TemplateError, TypeError, ValueError) as exc:
        logger.error("Failed to render template. %s", exc)
        return Response(status_code=500)
    return HTMLResponse(rendered)


def create_app(state: AppState, static_dir: str | os.PathLike[str]) -> Starlette:
    """Build the web application; the refresh worker runs for the app's lifetime."""

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette):
        worker = asyncio.create_task(background_worker(state))
        try:
            yield
        finally:
            worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await worker

    app = Starlette(
        routes=[
            Route("/", index),
            Route("/is_data_fresh", is_data_fresh),
            Mount("/static", StaticFiles(directory=static_dir, check_dir=False)),
        ],
        lifespan=lifespan,
    )
    app.state.weatherboard = state
    return app


def _base_dir() -> Path:
    server_dir = Path("server")
    return server_dir if server_dir.is_dir() else Path()


def _load_templates(directory: Path) -> jinja2.Environment:
    environment = jinja2.Environment(
        loader=jinja2.FileSystemLoader(directory), autoescape=False
    )
    register_all(environment)
    try:
        for name in environment.list_templates(filter_func=lambda n: n.endswith(".tera")):
            environment.get_template(name)
    except (jinja2.TemplateError, OSError) as exc:
        raise RuntimeError("Failed to load templates") from exc
    return environment


def load_state(base_dir: str | os.PathLike[str] | None = None) -> AppState:
    """Read ``config.toml`` and the templates under ``base_dir``."""
    path = _base_dir() if base_dir is None else Path(base_dir)
    try:
        config = Config.from_file(path / "config.toml")
    except (OSError, ValueError) as exc:
        raise RuntimeError("Failed to load config.toml") from exc
    return AppState(templates=_load_templates(path / "templates"), config=config)


def _split_listen_addr(addr: str) -> tuple[str, int]:
    host, sep, port = addr.rpartition(":")
    if not sep or not port.isdigit():
        raise ValueError(f"invalid listen address {addr!r}")
    return host.strip("[]"), int(port)


def main(argv: list[str] | None = None) -> int:
    """Run the forecast server from the current directory."""
    parser = argparse.ArgumentParser(
        prog="weatherboard", description="Serve a weather forecast dashboard."
    )
    parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO)
    logging.getLogger("weatherboard").setLevel(logging.DEBUG)

    base = _base_dir()
    state = load_state(base)
    app = create_app(state, base / "static")
    host, port = _split_listen_addr(state.config.listen_addr)
    uvicorn.run(app, host=host, port=port)
    return 0