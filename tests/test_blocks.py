import pytest

from weatherboard.blocks import (
    Alert,
    Currently,
    Daily,
    Hourly,
    Minutely,
    WeatherResponse,
)
from weatherboard.datapoints import DailyDataPoint, HourlyDataPoint, MinutelyDataPoint
from weatherboard.flags import Flags


CURRENTLY_JSON = {
    "time": 1700000000,
    "summary": "Clear",
    "icon": "clear-day",
    "nearestStormDistance": 12.5,
    "nearestStormBearing": 270,
    "apparentTemperature": 40.1,
    "uvIndex": 3,
    "currentDayLiquid": 0.2,
    "stationPressure": 1001.5,
    "cape": 10,
}

RESPONSE_JSON = {
    "latitude": 45.42,
    "longitude": -75.69,
    "timezone": "America/Toronto",
    "offset": -5.0,
    "elevation": 70.0,
    "currently": CURRENTLY_JSON,
    "minutely": {
        "summary": "Dry",
        "icon": "clear-day",
        "data": [{"time": 1700000000, "precipIntensity": 0.0}],
    },
    "hourly": {
        "summary": "Cloudy",
        "icon": "cloudy",
        "data": [{"time": 1700000000, "temperature": 38.5}],
    },
    "daily": {
        "summary": "Rain later",
        "icon": "rain",
        "data": [
            {"time": 1700000000, "temperatureHigh": 45.0, "precipProbability": 0.3},
            {"time": 1700086400, "temperatureHigh": 47.0, "precipProbability": 0.6},
        ],
    },
    "alerts": [
        {
            "title": "Wind warning",
            "regions": ["North", "South"],
            "severity": "Severe",
            "time": 1700000000,
            "expires": 1700050000,
            "description": "Strong winds",
            "uri": "https://alerts.example.com/1",
        }
    ],
    "flags": {"sources": ["gfs", "hrrr"], "units": "us", "version": "V2.8"},
}


def test_currently_reads_camel_case_keys():
    current = Currently.from_dict(CURRENTLY_JSON)
    assert current.time == 1700000000
    assert current.nearest_storm_distance == 12.5
    assert current.nearest_storm_bearing == 270
    assert current.apparent_temperature == 40.1
    assert current.current_day_liquid == 0.2
    assert current.station_pressure == 1001.5
    assert current.cape == 10


def test_currently_integer_becomes_float_for_float_field():
    current = Currently.from_dict({"uvIndex": 3})
    assert current.uv_index == 3
    assert isinstance(current.uv_index, float)


def test_currently_round_trip():
    current = Currently.from_dict(CURRENTLY_JSON)
    assert Currently.from_dict(current.to_dict()) == current


def test_to_dict_omits_unset_fields():
    assert Currently(summary="Clear").to_dict() == {"summary": "Clear"}
    assert WeatherResponse().to_dict() == {}


def test_empty_object_equals_default():
    assert WeatherResponse.from_dict({}) == WeatherResponse()
    assert Alert.from_dict({}) == Alert()


def test_null_treated_as_missing():
    alert = Alert.from_dict({"title": None, "severity": "Minor"})
    assert alert.title is None
    assert alert.to_dict() == {"severity": "Minor"}


def test_unknown_keys_ignored():
    daily = Daily.from_dict({"summary": "Sunny", "somethingNew": 5})
    assert daily == Daily(summary="Sunny")


def test_alert_regions_round_trip():
    alert = Alert.from_dict(RESPONSE_JSON["alerts"][0])
    assert alert.regions == ["North", "South"]
    assert alert.expires == 1700050000
    assert alert.to_dict() == RESPONSE_JSON["alerts"][0]


def test_response_nested_types():
    weather = WeatherResponse.from_dict(RESPONSE_JSON)
    assert weather.timezone == "America/Toronto"
    assert isinstance(weather.currently, Currently)
    assert isinstance(weather.daily, Daily)
    assert all(isinstance(d, DailyDataPoint) for d in weather.daily.data)
    assert isinstance(weather.hourly.data[0], HourlyDataPoint)
    assert isinstance(weather.minutely.data[0], MinutelyDataPoint)
    assert isinstance(weather.flags, Flags)
    assert weather.flags.sources == ["gfs", "hrrr"]
    assert [d.temperature_high for d in weather.daily.data] == [45.0, 47.0]
    assert weather.alerts[0].title == "Wind warning"


def test_response_round_trip_to_same_json():
    weather = WeatherResponse.from_dict(RESPONSE_JSON)
    assert weather.to_dict() == RESPONSE_JSON
    assert WeatherResponse.from_dict(weather.to_dict()) == weather


def test_hourly_and_minutely_round_trip():
    hourly = Hourly.from_dict(RESPONSE_JSON["hourly"])
    minutely = Minutely.from_dict(RESPONSE_JSON["minutely"])
    assert hourly.to_dict() == RESPONSE_JSON["hourly"]
    assert minutely.to_dict() == RESPONSE_JSON["minutely"]


def test_list_field_rejects_non_list():
    with pytest.raises(TypeError):
        Alert.from_dict({"regions": "North"})


def test_nested_block_rejects_non_object():
    with pytest.raises(TypeError):
        WeatherResponse.from_dict({"daily": "rain"})


def test_daily_data_rejects_bad_entry():
    with pytest.raises(TypeError):
        Daily.from_dict({"data": [{"time": "noon"}]})


def test_integer_field_out_of_range():
    with pytest.raises(ValueError):
        Currently.from_dict({"time": 2**31})


def test_integer_field_rejects_bool_and_float():
    with pytest.raises(TypeError):
        Currently.from_dict({"time": True})
    with pytest.raises(TypeError):
        Alert.from_dict({"expires": 1.5})


def test_string_field_rejects_number():
    with pytest.raises(TypeError):
        WeatherResponse.from_dict({"timezone": 5})


def test_top_level_must_be_object():
    with pytest.raises(TypeError):
        WeatherResponse.from_dict([1, 2])