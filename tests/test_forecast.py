import pytest

from weatherboard.blocks import WeatherResponse
from weatherboard.client import ResponseError
from weatherboard.config import Location
from weatherboard.forecast import (
    EXCLUDED_BLOCKS,
    ForecastError,
    TemplateDay,
    build_forecast,
    get_forecast,
)

START = 1704067200
DAY = 86400


def _day(time, **overrides):
    data = {
        "time": time,
        "summary": "Clear",
        "icon": "clear-day",
        "apparentTemperatureLow": 40.5,
        "apparentTemperatureHigh": 60.25,
        "temperatureLow": 42.0,
        "temperatureHigh": 61.0,
        "precipProbability": 0.3,
        "windSpeed": 7.5,
    }
    data.update(overrides)
    return {key: value for key, value in data.items() if value is not None}


def _response(timezone="UTC", days=None):
    if days is None:
        days = [_day(START)]
    return WeatherResponse.from_dict({"timezone": timezone, "daily": {"data": days}})


LOCATION = Location(name="Harbour", latitude=45.0, longitude=-122.5, link=None)


class FakeClient:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    async def weather(self, api_key, lat_and_long_or_time, exclude=None, **kwargs):
        self.calls.append((api_key, lat_and_long_or_time, exclude))
        if self.error is not None:
            raise self.error
        return self.response


def test_build_forecast_formats_date_and_weekday():
    forecast = build_forecast(_response(), LOCATION)
    (day,) = forecast.days
    assert day.date == "Jan 01"
    assert day.week_day == "Mon"
    assert day.is_weekend == (day.week_day in ("Sat", "Sun"))


def test_build_forecast_copies_values():
    forecast = build_forecast(_response(), LOCATION)
    day = forecast.days[0]
    assert day.summary == "Clear"
    assert day.icon == "clear-day"
    assert day.apparent_temperature_low == 40.5
    assert day.apparent_temperature_high == 60.25
    assert day.temperature_low == 42.0
    assert day.temperature_high == 61.0
    assert day.precip_probability == 0.3
    assert day.wind_speed == 7.5
    assert forecast.location == LOCATION


def test_weekend_flag_matches_weekday_over_a_week():
    days = [_day(START + i * DAY) for i in range(7)]
    forecast = build_forecast(_response(days=days), LOCATION)
    assert len(forecast.days) == 7
    assert len({d.week_day for d in forecast.days}) == 7
    for day in forecast.days:
        assert day.is_weekend == (day.week_day in ("Sat", "Sun"))
    assert any(d.is_weekend for d in forecast.days)


def test_timezone_changes_local_date():
    utc = build_forecast(_response("UTC"), LOCATION).days[0]
    west = build_forecast(_response("America/New_York"), LOCATION).days[0]
    assert utc.date != west.date
    assert utc.week_day != west.week_day


def test_days_keep_response_order():
    days = [_day(START + 2 * DAY, summary="c"), _day(START, summary="a")]
    forecast = build_forecast(_response(days=days), LOCATION)
    assert [d.summary for d in forecast.days] == ["c", "a"]


def test_missing_timezone_is_an_error():
    weather = WeatherResponse.from_dict({"daily": {"data": [_day(START)]}})
    with pytest.raises(ForecastError):
        build_forecast(weather, LOCATION)


def test_unknown_timezone_is_an_error():
    with pytest.raises(ForecastError):
        build_forecast(_response("Nowhere/Atlantis"), LOCATION)


def test_missing_daily_block_is_an_error():
    weather = WeatherResponse.from_dict({"timezone": "UTC"})
    with pytest.raises(ForecastError, match="No daily object"):
        build_forecast(weather, LOCATION)


def test_missing_daily_data_is_an_error():
    weather = WeatherResponse.from_dict({"timezone": "UTC", "daily": {"summary": "x"}})
    with pytest.raises(ForecastError, match="No daily data"):
        build_forecast(weather, LOCATION)


def test_missing_day_time_is_an_error():
    with pytest.raises(ForecastError, match="No day time"):
        build_forecast(_response(days=[_day(None)]), LOCATION)


@pytest.mark.parametrize("field", ["icon", "summary", "windSpeed", "temperatureHigh"])
def test_missing_day_value_is_an_error(field):
    with pytest.raises(ForecastError):
        build_forecast(_response(days=[_day(START, **{field: None})]), LOCATION)


def test_empty_daily_data_gives_no_days():
    forecast = build_forecast(_response(days=[]), LOCATION)
    assert forecast.days == []


def test_to_dict_holds_days_and_location():
    forecast = build_forecast(_response(), LOCATION)
    data = forecast.to_dict()
    assert data["location"] == {
        "name": LOCATION.name,
        "latitude": LOCATION.latitude,
        "longitude": LOCATION.longitude,
        "link": None,
    }
    assert data["days"][0]["summary"] == forecast.days[0].summary
    assert set(data["days"][0]) == {f for f in TemplateDay.__dataclass_fields__}


@pytest.mark.asyncio
async def test_get_forecast_requests_location_without_extra_blocks():
    client = FakeClient(response=_response())
    forecast = await get_forecast(client, "placeholder", LOCATION)
    assert client.calls == [("placeholder", "45,-122.5", EXCLUDED_BLOCKS)]
    assert forecast.location == LOCATION
    assert len(forecast.days) == 1


@pytest.mark.asyncio
async def test_get_forecast_keeps_fractional_coordinates():
    location = Location(name="Point", latitude=12.25, longitude=0.5)
    client = FakeClient(response=_response())
    await get_forecast(client, "placeholder", location)
    assert client.calls[0][1] == "12.25,0.5"


@pytest.mark.asyncio
async def test_get_forecast_propagates_client_errors():
    client = FakeClient(error=ResponseError(502, "{}"))
    with pytest.raises(ResponseError):
        await get_forecast(client, "placeholder", LOCATION)


@pytest.mark.asyncio
async def test_get_forecast_reports_bad_response():
    client = FakeClient(response=WeatherResponse.from_dict({"timezone": "UTC"}))
    with pytest.raises(ForecastError):
        await get_forecast(client, "placeholder", LOCATION)