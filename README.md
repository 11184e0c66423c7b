# weatherboard

A small web dashboard that shows a daily weather forecast for each of a
list of places. Forecasts come from the Pirate Weather forecast API and are
rendered with a Jinja2 template.

The server keeps the forecasts in memory and treats them as stale once
they are more than five minutes old. It only refreshes when someone visits
the page and the data is stale. When that happens, a background task
fetches new forecasts and the page you get shows the data that was already
there. If fetching any location fails, the whole refresh is dropped and is
tried again on the next visit.

## Installing

```
pip install .
```

To install with the test tools as well:

```
pip install ".[test]"
```

## Configuring

The server reads `config.toml`. If a `server/` directory exists in the
working directory, it looks there for the config file, templates and static
files. Otherwise it looks in the working directory itself.

```toml
listen_addr = "0.0.0.0:3000"
pirate_weather_key = "placeholder"

[[locations]]
name = "Harbour"
latitude = 51.5
longitude = -0.12
link = "https://forecast.example.com/harbour"

[[locations]]
name = "Hills"
latitude = 47.3
longitude = 8.5
```

All three top-level keys must be present in the file:

- `listen_addr` is the `host:port` to bind, for example `0.0.0.0:3000`.
- `pirate_weather_key` is your API key.
- `locations` is an array of tables. Each has a `name`, a `latitude` and a
  `longitude`; `link` is optional.

A missing or mistyped key stops the server with "Failed to load config.toml".

## Templates and static files

The package does not ship a page template or static files; you provide
them. The page is rendered from `templates/main.tera`, which is read as a
Jinja2 template (autoescaping is off). Every `*.tera` file under
`templates/` is parsed at start-up, so a syntax error stops the server.

The template receives these values:

- `forecasts`: a list with one entry per location. Each entry has a
  `location` (`name`, `latitude`, `longitude`, `link`) and a list of
  `days`. Each day has `date` (for example `Mar 04`), `week_day` (`Mon`),
  `is_weekend`, `icon`, `summary`, `temperature_low`, `temperature_high`,
  `apparent_temperature_low`, `apparent_temperature_high`,
  `precip_probability` and `wind_speed`. Dates are in the location's own
  time zone.
- `needs_update`: true if the data was stale and a refresh was requested.
- `updated_at`: the Unix time of the last successful refresh (0 before the
  first).

These filters are available in templates (`weatherboard.filters`):

| filter              | input                     | output                                          |
|---------------------|---------------------------|-------------------------------------------------|
| `temperature_class` | temperature in °F         | `cold`, `cool`, `good`, `warm` or `hot`         |
| `probability`       | a fraction from 0 to 1    | a whole-number percentage, e.g. `95`            |
| `precip_class`      | precipitation amount      | `wet` if above zero, otherwise `dry`            |
| `time_ago`          | a Unix timestamp          | e.g. `1 minute`, `12 hours`, `ages`             |

Files in `static/` are served under `/static`.

## Running

```
weatherboard
```

The command takes no options. It logs to standard error and serves on the
configured `listen_addr`. The server provides these routes:

- `GET /` renders the dashboard. If the template fails to render, the
  response is an empty 500.
- `GET /is_data_fresh` returns the JSON value `true` when the cached
  forecasts are recent enough, and `false` otherwise. A page can poll this
  route and reload when a refresh has finished.

To embed the server elsewhere, `weatherboard.app.load_state(base_dir)`
reads the configuration and templates, and
`weatherboard.app.create_app(state, static_dir)` returns the Starlette
application, which runs the refresh worker for its lifetime.

## Using the API client on its own

```python
import asyncio

from weatherboard.client import Configuration, WeatherClient


async def show() -> None:
    client = WeatherClient(Configuration())
    weather = await client.weather(
        "placeholder", "51.5,-0.12", exclude="currently,minutely,alerts,hourly"
    )
    for day in weather.daily.data:
        print(day.time, day.summary, day.temperature_high)


asyncio.run(show())
```

`weather` also takes `extend`, `extra_vars`, `lang`, `units`, `version`,
`tmextra` and `icon`, sent as query parameters when given. It returns a
`weatherboard.blocks.WeatherResponse`; every model has `from_dict` and
`to_dict` for the API's JSON form. Pass an `httpx.AsyncClient` as
`Configuration(client=...)` to reuse connections.

A response with a 4xx or 5xx status raises `ResponseError`, which carries
`status`, the raw `content` and the parsed error body as `entity` where one
could be read. A body that cannot be read as a forecast, or that is not
JSON by its content type, raises `DeserializationError`, and network
failures raise `TransportError`. All three derive from `ApiError`.

## Tests

```
pip install ".[test]"
pytest
```