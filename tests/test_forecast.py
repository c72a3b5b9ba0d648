"""Tests for forecast payload parsing, solar window resolution, and hourly lookup."""

import json
import logging
import math
from datetime import date
from pathlib import Path

import pytest

from solarsync.forecast import (
    ForecastError,
    forecast_days,
    is_selectable,
    load_forecast,
    lookup_hourly_sample,
    minutes_from_iso,
    parse_forecast,
    resolve_solar_window,
    round_half_up,
    selectable_dates,
)
from solarsync.models import (
    DEFAULT_SOLAR_WINDOW,
    FALLBACK_SAMPLE,
    DailyForecastTable,
    HourlyForecastTable,
    SolarWindow,
)

SAMPLE_PATH = Path(__file__).parent.parent / "resources" / "sample_forecast.json"
DAY = date(2025, 10, 27)


def _daily(**overrides):
    columns = {
        "time": ("2025-10-27", "2025-10-28"),
        "sunrise": ("2025-10-27T06:55", "2025-10-28T06:57"),
        "sunset": ("2025-10-27T16:38", "2025-10-28T16:36"),
    }
    columns.update(overrides)
    return DailyForecastTable(**columns)


def _hourly():
    return HourlyForecastTable(
        time=("2025-10-27T11:00", "2025-10-27T12:00", "2025-10-27T13:00"),
        temperature_2m=(12.5, -0.5, math.nan),
        weathercode=(3, 61, 0),
        uv_index=(1.6, 1.8, 1.7),
    )


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------
class TestRoundHalfUp:
    def test_half_rounds_up(self):
        """12.5 → 13, unlike banker's rounding."""
        assert round_half_up(12.5) == 13

    def test_negative_half_rounds_towards_positive(self):
        """-0.5 → 0 and -1.5 → -1."""
        assert round_half_up(-0.5) == 0
        assert round_half_up(-1.5) == -1

    def test_below_half(self):
        assert round_half_up(7.49) == 7


# ---------------------------------------------------------------------------
# Payload parsing
# ---------------------------------------------------------------------------
class TestParseForecast:
    def test_full_payload(self):
        """Both sections and the provider timezone are carried over."""
        payload = json.loads(SAMPLE_PATH.read_text(encoding="utf-8"))
        forecast = parse_forecast(payload)
        assert forecast.timezone == "Europe/London"
        assert forecast.daily.time == ("2025-10-27", "2025-10-28")
        assert len(forecast.hourly.time) == 12
        assert forecast.hourly.weathercode[5] == 61

    def test_missing_sections_are_none(self):
        """An empty object is a forecast with nothing loaded."""
        forecast = parse_forecast({})
        assert forecast.daily is None
        assert forecast.hourly is None
        assert forecast.timezone is None

    def test_not_an_object(self):
        with pytest.raises(ForecastError):
            parse_forecast([1, 2, 3])

    def test_misaligned_daily_columns(self):
        """Columns must share one index."""
        payload = {
            "daily": {
                "time": ["2025-10-27", "2025-10-28"],
                "sunrise": ["2025-10-27T06:55"],
                "sunset": ["2025-10-27T16:38", "2025-10-28T16:36"],
            }
        }
        with pytest.raises(ForecastError, match="index-aligned"):
            parse_forecast(payload)

    def test_missing_hourly_column(self):
        payload = {"hourly": {"time": [], "temperature_2m": [], "weathercode": []}}
        with pytest.raises(ForecastError, match="missing column"):
            parse_forecast(payload)

    def test_duplicate_dates(self):
        payload = {
            "daily": {
                "time": ["2025-10-27", "2025-10-27"],
                "sunrise": ["2025-10-27T06:55", "2025-10-27T06:55"],
                "sunset": ["2025-10-27T16:38", "2025-10-27T16:38"],
            }
        }
        with pytest.raises(ForecastError, match="duplicate"):
            parse_forecast(payload)

    def test_null_hourly_values(self):
        """Nulls become NaN temperature, code 1, and UV 0."""
        payload = {
            "hourly": {
                "time": ["2025-10-27T12:00"],
                "temperature_2m": [None],
                "weathercode": [None],
                "uv_index": [None],
            }
        }
        hourly = parse_forecast(payload).hourly
        assert math.isnan(hourly.temperature_2m[0])
        assert hourly.weathercode == (1,)
        assert hourly.uv_index == (0.0,)

    def test_non_numeric_hourly_value(self):
        payload = {
            "hourly": {
                "time": ["2025-10-27T12:00"],
                "temperature_2m": ["warm"],
                "weathercode": [0],
                "uv_index": [1.0],
            }
        }
        with pytest.raises(ForecastError, match="non-numeric"):
            parse_forecast(payload)


class TestLoadForecast:
    def test_sample_file(self):
        forecast = load_forecast(SAMPLE_PATH)
        assert forecast.daily.sunrise[0] == "2025-10-27T06:55"

    def test_missing_file(self, tmp_path):
        with pytest.raises(ForecastError, match="cannot read"):
            load_forecast(tmp_path / "absent.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ForecastError):
            load_forecast(path)


# ---------------------------------------------------------------------------
# Solar window
# ---------------------------------------------------------------------------
class TestResolveSolarWindow:
    def test_date_in_table(self):
        """06:55 / 16:38 → 415 / 998 minutes."""
        window = resolve_solar_window(DAY, _daily())
        assert window == SolarWindow(sunrise_minutes=415, sunset_minutes=998)

    def test_second_row(self):
        window = resolve_solar_window(date(2025, 10, 28), _daily())
        assert window == SolarWindow(sunrise_minutes=417, sunset_minutes=996)

    def test_no_table(self):
        """Feed not loaded → 06:30-18:30."""
        assert resolve_solar_window(DAY, None) == DEFAULT_SOLAR_WINDOW
        assert DEFAULT_SOLAR_WINDOW == SolarWindow(390, 1110)

    def test_date_not_covered(self):
        assert resolve_solar_window(date(2025, 11, 5), _daily()) == DEFAULT_SOLAR_WINDOW

    def test_unparseable_row(self, caplog):
        """A garbled timestamp falls back to the default and is logged."""
        daily = _daily(sunrise=("soon", "2025-10-28T06:57"))
        with caplog.at_level(logging.WARNING, logger="solarsync.forecast"):
            assert resolve_solar_window(DAY, daily) == DEFAULT_SOLAR_WINDOW
        assert "Unparseable" in caplog.text

    def test_minutes_ignore_date_part(self):
        assert minutes_from_iso("2025-10-27T00:00") == 0
        assert minutes_from_iso("2025-10-27T23:59") == 1439


# ---------------------------------------------------------------------------
# Hourly lookup
# ---------------------------------------------------------------------------
class TestLookupHourlySample:
    def test_exact_hour(self):
        """12:00 → temperature -0.5 rounds to 0, code 61, UV 1.8."""
        sample = lookup_hourly_sample(DAY, 12, _hourly())
        assert sample.temperature == 0
        assert sample.weather_code == 61
        assert sample.uv_index == 1.8

    def test_temperature_rounds_half_up(self):
        assert lookup_hourly_sample(DAY, 11, _hourly()).temperature == 13

    def test_missing_temperature_uses_fallback_value(self):
        """NaN temperature → 20°, other fields from the row."""
        sample = lookup_hourly_sample(DAY, 13, _hourly())
        assert sample.temperature == 20
        assert sample.weather_code == 0

    def test_hour_not_covered(self):
        assert lookup_hourly_sample(DAY, 3, _hourly()) == FALLBACK_SAMPLE

    def test_other_day(self):
        assert lookup_hourly_sample(date(2025, 10, 28), 12, _hourly()) == FALLBACK_SAMPLE

    def test_no_table(self):
        sample = lookup_hourly_sample(DAY, 12, None)
        assert (sample.temperature, sample.uv_index, sample.weather_code) == (20, 0.0, 1)

    def test_prefix_match_with_seconds(self):
        """Timestamps carrying seconds still match their hour."""
        hourly = HourlyForecastTable(
            time=("2025-10-27T09:00:00",),
            temperature_2m=(9.9,),
            weathercode=(2,),
            uv_index=(0.6,),
        )
        assert lookup_hourly_sample(DAY, 9, hourly).temperature == 10


# ---------------------------------------------------------------------------
# Date picker
# ---------------------------------------------------------------------------
class TestSelectableDates:
    def test_today_through_seven_days(self):
        dates = selectable_dates(DAY)
        assert len(dates) == 8
        assert dates[0] == DAY
        assert dates[-1] == date(2025, 11, 3)

    def test_is_selectable(self):
        assert is_selectable(DAY, DAY)
        assert is_selectable(date(2025, 11, 3), DAY)
        assert not is_selectable(date(2025, 11, 4), DAY)
        assert not is_selectable(date(2025, 10, 26), DAY)

    def test_forecast_days(self):
        rows = forecast_days(_daily())
        assert [r.day for r in rows] == [DAY, date(2025, 10, 28)]
        assert rows[0].day_length_minutes == 583

    def test_forecast_days_skips_malformed_rows(self):
        rows = forecast_days(_daily(time=("2025-10-27", "someday")))
        assert len(rows) == 1

    def test_forecast_days_without_table(self):
        assert forecast_days(None) == ()
