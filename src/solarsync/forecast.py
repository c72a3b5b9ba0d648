"""Forecast feed layer: payload parsing, solar window resolution, and hourly lookup.

The payload follows the Open-Meteo ``/v1/forecast`` response shape
(``daily=sunrise,sunset`` and ``hourly=temperature_2m,weathercode,uv_index``
with ``timezone=auto``). Fetching it is the caller's job.
"""

import json
import logging
import math
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any

from solarsync.models import (
    DEFAULT_SOLAR_WINDOW,
    FALLBACK_SAMPLE,
    DailyForecastTable,
    DayOverview,
    Forecast,
    HourlyForecastTable,
    HourlySample,
    SolarWindow,
)

_LOGGER = logging.getLogger(__name__)

FORECAST_HORIZON_DAYS = 7


class ForecastError(Exception):
    """Malformed or unreadable forecast payload."""


def round_half_up(value: float) -> int:
    """Round .5 towards +inf, the way the dashboard always displayed values."""
    return math.floor(value + 0.5)


def _aligned(section: str, columns: dict[str, list[Any]]) -> None:
    lengths = {name: len(col) for name, col in columns.items()}
    if len(set(lengths.values())) > 1:
        raise ForecastError(f"{section} columns are not index-aligned: {lengths}")


def _daily_from_payload(section: dict[str, Any]) -> DailyForecastTable:
    try:
        columns = {k: list(section[k]) for k in ("time", "sunrise", "sunset")}
    except (KeyError, TypeError) as e:
        raise ForecastError(f"daily section missing column: {e}") from e
    _aligned("daily", columns)
    if len(set(columns["time"])) != len(columns["time"]):
        raise ForecastError("daily section has duplicate dates")
    return DailyForecastTable(
        time=tuple(str(v) for v in columns["time"]),
        sunrise=tuple(str(v) for v in columns["sunrise"]),
        sunset=tuple(str(v) for v in columns["sunset"]),
    )


def _hourly_from_payload(section: dict[str, Any]) -> HourlyForecastTable:
    names = ("time", "temperature_2m", "weathercode", "uv_index")
    try:
        columns = {k: list(section[k]) for k in names}
    except (KeyError, TypeError) as e:
        raise ForecastError(f"hourly section missing column: {e}") from e
    _aligned("hourly", columns)
    try:
        # Open-Meteo reports null for hours it has no value for
        return HourlyForecastTable(
            time=tuple(str(v) for v in columns["time"]),
            temperature_2m=tuple(
                float(v) if v is not None else math.nan
                for v in columns["temperature_2m"]
            ),
            weathercode=tuple(
                int(v) if v is not None else FALLBACK_SAMPLE.weather_code
                for v in columns["weathercode"]
            ),
            uv_index=tuple(
                float(v) if v is not None else 0.0 for v in columns["uv_index"]
            ),
        )
    except (TypeError, ValueError) as e:
        raise ForecastError(f"hourly section has a non-numeric value: {e}") from e


def parse_forecast(payload: dict[str, Any]) -> Forecast:
    """Build a Forecast from a decoded provider response.

    Args:
        payload: Decoded JSON object. ``daily`` and ``hourly`` are optional.

    Returns:
        Forecast with ``None`` for each absent section.

    Raises:
        ForecastError: When a present section is misaligned or malformed.
    """
    if not isinstance(payload, dict):
        raise ForecastError("forecast payload must be a JSON object")
    daily = payload.get("daily")
    hourly = payload.get("hourly")
    return Forecast(
        daily=_daily_from_payload(daily) if daily is not None else None,
        hourly=_hourly_from_payload(hourly) if hourly is not None else None,
        timezone=payload.get("timezone"),
    )


def load_forecast(path: str | Path) -> Forecast:
    """Read a forecast payload saved as JSON.

    Raises:
        ForecastError: When the file cannot be read or decoded.
    """
    path = Path(path)
    try:
        with path.open(encoding="utf-8") as f:
            payload = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise ForecastError(f"cannot read forecast file {path}: {e}") from e
    forecast = parse_forecast(payload)
    _LOGGER.debug(
        "Loaded forecast from %s (%d days, %d hours)",
        path,
        len(forecast.daily.time) if forecast.daily else 0,
        len(forecast.hourly.time) if forecast.hourly else 0,
    )
    return forecast


def minutes_from_iso(iso: str) -> int:
    """Minutes from midnight of a local ISO date-time. The date part is dropped."""
    dt = datetime.fromisoformat(iso)
    return dt.hour * 60 + dt.minute


def resolve_solar_window(day: date, daily: DailyForecastTable | None) -> SolarWindow:
    """Return the sunrise/sunset window for ``day``.

    Falls back to DEFAULT_SOLAR_WINDOW (06:30-18:30) when the feed is absent,
    the date is not covered, or the matching row cannot be parsed.
    """
    key = day.strftime("%Y-%m-%d")
    if daily is None or key not in daily.time:
        _LOGGER.debug("No daily row for %s, using default window", key)
        return DEFAULT_SOLAR_WINDOW
    i = daily.time.index(key)
    try:
        return SolarWindow(
            sunrise_minutes=minutes_from_iso(daily.sunrise[i]),
            sunset_minutes=minutes_from_iso(daily.sunset[i]),
        )
    except ValueError:
        _LOGGER.warning(
            "Unparseable sunrise/sunset for %s: %r/%r",
            key,
            daily.sunrise[i],
            daily.sunset[i],
        )
        return DEFAULT_SOLAR_WINDOW


def lookup_hourly_sample(
    day: date, hour: int, hourly: HourlyForecastTable | None
) -> HourlySample:
    """Return the weather sample for ``hour`` on ``day``.

    Matches the first timestamp starting with ``YYYY-MM-DDThh:00``; anything
    outside the fetched range yields FALLBACK_SAMPLE (20°, UV 0, code 1).
    """
    if hourly is None:
        return FALLBACK_SAMPLE
    prefix = f"{day.strftime('%Y-%m-%d')}T{hour:02d}:00"
    for i, stamp in enumerate(hourly.time):
        if stamp.startswith(prefix):
            temperature = hourly.temperature_2m[i]
            return HourlySample(
                temperature=(
                    round_half_up(temperature)
                    if math.isfinite(temperature)
                    else FALLBACK_SAMPLE.temperature
                ),
                uv_index=hourly.uv_index[i],
                weather_code=hourly.weathercode[i],
            )
    _LOGGER.debug("No hourly sample for %s, using fallback", prefix)
    return FALLBACK_SAMPLE


def forecast_days(daily: DailyForecastTable | None) -> tuple[DayOverview, ...]:
    """Rows for the 7-day picker, skipping rows that cannot be parsed."""
    if daily is None:
        return ()
    rows: list[DayOverview] = []
    for key, rise, set_ in zip(daily.time, daily.sunrise, daily.sunset):
        try:
            rows.append(
                DayOverview(
                    day=date.fromisoformat(key),
                    sunrise_minutes=minutes_from_iso(rise),
                    sunset_minutes=minutes_from_iso(set_),
                )
            )
        except ValueError:
            _LOGGER.warning("Skipping malformed daily row %r", key)
    return tuple(rows)


def selectable_dates(
    today: date, horizon: int = FORECAST_HORIZON_DAYS
) -> tuple[date, ...]:
    """Dates the calendar lets the user pick: today through today + horizon."""
    return tuple(today + timedelta(days=i) for i in range(horizon + 1))


def is_selectable(
    day: date, today: date, horizon: int = FORECAST_HORIZON_DAYS
) -> bool:
    return today <= day <= today + timedelta(days=horizon)
