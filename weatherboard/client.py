"""HTTP client for the forecast API, with its configuration and error types."""

from __future__ import annotations

import dataclasses
import enum
import json
from http import HTTPStatus
from typing import Any
from urllib.parse import quote_plus

import httpx

from weatherboard.blocks import WeatherResponse
from weatherboard.flags import ErrorDetail, ErrorMessage

DEFAULT_BASE_PATH = "https://api.pirateweather.net"
DEFAULT_USER_AGENT = "weatherboard/2.8"
_DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclasses.dataclass
class ApiKey:
    """An API key, optionally sent with a prefix."""

    key: str
    prefix: str | None = None


@dataclasses.dataclass(kw_only=True)
class Configuration:
    """Where and how requests to the API are sent.

    When ``client`` is ``None`` each request uses a short-lived client.
    """

    base_path: str = DEFAULT_BASE_PATH
    user_agent: str | None = DEFAULT_USER_AGENT
    client: httpx.AsyncClient | None = None
    basic_auth: tuple[str, str | None] | None = None
    oauth_access_token: str | None = None
    bearer_access_token: str | None = None
    api_key: ApiKey | None = None


class ApiError(Exception):
    """Base for every failure of an API call."""

    module = "api"

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"error in {self.module}: {self.detail}"


class TransportError(ApiError):
    """The request could not be sent or its response could not be read."""

    module = "transport"

    def __init__(self, cause: Exception) -> None:
        super().__init__(str(cause))


class DeserializationError(ApiError):
    """The response body could not be turned into a forecast."""

    module = "deserialization"


def _status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return f"{status} <unknown status code>"


class ResponseError(ApiError):
    """The server answered with a client or server error status."""

    module = "response"

    def __init__(self, status: int, content: str, entity: Any = None) -> None:
        super().__init__(f"status code {_status_text(status)}")
        self.status = status
        self.content = content
        self.entity = entity


class ContentType(enum.Enum):
    """The kinds of response body the client tells apart."""

    JSON = "json"
    TEXT = "text"
    UNSUPPORTED = "unsupported"

    @classmethod
    def from_header(cls, value: str) -> ContentType:
        """Classify a Content-Type header value."""
        if value.startswith("application") and "json" in value:
            return cls.JSON
        if value.startswith("text/plain"):
            return cls.TEXT
        return cls.UNSUPPORTED


def urlencode(s: str) -> str:
    """Form-encode a string: spaces become ``+``, only ``*-._`` and alphanumerics stay."""
    return quote_plus(s, safe="*").replace("~", "%7E")


def parse_deep_object(prefix: str, value: Any) -> list[tuple[str, str]]:
    """Flatten a JSON object into ``prefix[key][sub]`` query pairs, keys in sorted order."""
    if not isinstance(value, dict):
        raise TypeError("Only objects are supported with style=deepObject")
    params: list[tuple[str, str]] = []
    for key, item in sorted(value.items()):
        name = f"{prefix}[{key}]"
        if isinstance(item, dict):
            params.extend(parse_deep_object(name, item))
        elif isinstance(item, list):
            for index, element in enumerate(item):
                params.extend(parse_deep_object(f"{name}[{index}]", element))
        elif isinstance(item, str):
            params.append((name, item))
        else:
            params.append((name, json.dumps(item)))
    return params


def parse_weather_error(content: str) -> Any:
    """Decode an error body into its typed form, or ``None`` if it is not JSON.

    The first form that fits wins: an object with ``detail``, a plain string,
    an object with ``message``, and otherwise the raw JSON value.
    """
    try:
        value = json.loads(content)
    except ValueError:
        return None
    if isinstance(value, dict):
        for model in (ErrorDetail, ErrorMessage):
            try:
                return model.from_dict(value)
            except (TypeError, ValueError):
                continue
    return value


def _decode_success(content_type_header: str, content: str) -> WeatherResponse:
    kind = ContentType.from_header(content_type_header)
    if kind is ContentType.TEXT:
        raise DeserializationError(
            "Received `text/plain` content type response that cannot be converted to `WeatherResponse`"
        )
    if kind is ContentType.UNSUPPORTED:
        raise DeserializationError(
            f"Received `{content_type_header}` content type response that cannot be "
            "converted to `WeatherResponse`"
        )
    try:
        return WeatherResponse.from_dict(json.loads(content))
    except (TypeError, ValueError) as exc:
        raise DeserializationError(str(exc)) from exc


class WeatherClient:
    """Fetches forecasts and historical weather from the API."""

    def __init__(self, configuration: Configuration | None = None) -> None:
        self.configuration = configuration if configuration is not None else Configuration()

    async def weather(
        self,
        api_key: str,
        lat_and_long_or_time: str,
        exclude: str | None = None,
        extend: str | None = None,
        extra_vars: str | None = None,
        lang: str | None = None,
        units: str | None = None,
        version: int | None = None,
        tmextra: int | None = None,
        icon: str | None = None,
    ) -> WeatherResponse:
        """Fetch the forecast for a ``lat,long`` or ``lat,long,time`` location."""
        config = self.configuration
        url = (
            f"{config.base_path}/forecast/"
            f"{urlencode(api_key)}/{urlencode(lat_and_long_or_time)}"
        )
        optional = (
            ("exclude", exclude),
            ("extend", extend),
            ("extraVars", extra_vars),
            ("lang", lang),
            ("units", units),
            ("version", version),
            ("tmextra", tmextra),
            ("icon", icon),
        )
        params = [(name, str(value)) for name, value in optional if value is not None]
        headers = {"User-Agent": config.user_agent} if config.user_agent is not None else {}

        try:
            if config.client is None:
                async with httpx.AsyncClient() as client:
                    response = await client.get(url, params=params, headers=headers)
            else:
                response = await config.client.get(url, params=params, headers=headers)
        except httpx.HTTPError as exc:
            raise TransportError(exc) from exc

        status = response.status_code
        content = response.text
        if 400 <= status < 600:
            raise ResponseError(status, content, parse_weather_error(content))
        content_type = response.headers.get("content-type", _DEFAULT_CONTENT_TYPE)
        return _decode_success(content_type, content)