"""User configuration: preferences, location resolution, and the local wall clock.

Preferences are read from the environment once at startup (entry points call
``load_dotenv()`` first) and replaced only through ``save_preferences``.
"""

import dataclasses
import logging
import os
from datetime import datetime

from pytz import UnknownTimeZoneError, timezone, utc
from timezonefinder import TimezoneFinder

from solarsync.models import Location, Preferences

_LOGGER = logging.getLogger(__name__)
_tf = TimezoneFinder()

DEFAULT_LOCATION = Location(name="London, UK", lat=51.5074, lng=-0.1278, country_code="GB")
CURRENT_LOCATION_NAME = "Current Location"

SKIN_TYPES: dict[str, str] = {
    "Type I": "Pale white; burns always, never tans.",
    "Type II": "White; burns easily, tans poorly.",
    "Type III": "Cream white; burns sometimes, tans uniformly.",
    "Type IV": "Light brown; burns minimally, tans easily.",
    "Type V": "Moderate brown; rarely burns, tans very easily.",
    "Type VI": "Dark brown/black; never burns, tans always.",
}

CHRONOTYPES: dict[str, tuple[str, str]] = {
    "Lion": ("Lion (Early)", "Wakes up early, most productive in the morning."),
    "Bear": ("Bear (Medium)", "Follows solar cycle, energy peaks mid-day."),
    "Wolf": ("Wolf (Late)", "Wakes up late, most productive in the evening."),
    "Dolphin": ("Dolphin (Irregular)", "Light sleeper, irregular energy patterns."),
}

DEFAULT_SKIN_TYPE = "Type III"
DEFAULT_CHRONOTYPE = "Bear"


class ConfigError(Exception):
    """Invalid configuration value or unresolvable location."""


def _float_env(name: str) -> float | None:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return None
    try:
        return float(raw)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from e


def _saved_location_from_env() -> Location | None:
    lat = _float_env("SOLARSYNC_LOCATION_LAT")
    lng = _float_env("SOLARSYNC_LOCATION_LNG")
    if lat is None or lng is None:
        return None
    if not (-90 <= lat <= 90 and -180 <= lng <= 180):
        raise ConfigError(f"Location out of range: lat={lat}, lng={lng}")
    name = os.environ.get("SOLARSYNC_LOCATION_NAME") or f"{lat:.2f}, {lng:.2f}"
    return Location(name=name, lat=lat, lng=lng)


def preferences_from_env() -> Preferences:
    """Build Preferences from SOLARSYNC_* environment variables.

    Unknown skin type or chronotype ids fall back to the defaults.

    Raises:
        ConfigError: When saved-location coordinates are not valid numbers.
    """
    skin_type = os.environ.get("SOLARSYNC_SKIN_TYPE", DEFAULT_SKIN_TYPE)
    if skin_type not in SKIN_TYPES:
        _LOGGER.warning("Unknown skin type %r, using %s", skin_type, DEFAULT_SKIN_TYPE)
        skin_type = DEFAULT_SKIN_TYPE
    chronotype = os.environ.get("SOLARSYNC_CHRONOTYPE", DEFAULT_CHRONOTYPE)
    if chronotype not in CHRONOTYPES:
        _LOGGER.warning("Unknown chronotype %r, using %s", chronotype, DEFAULT_CHRONOTYPE)
        chronotype = DEFAULT_CHRONOTYPE
    return Preferences(
        skin_type=skin_type,
        chronotype=chronotype,
        # Anything but an explicit "false" keeps GPS on
        use_precise_location=os.environ.get("SOLARSYNC_USE_PRECISE", "true").lower() != "false",
        saved_location=_saved_location_from_env(),
    )


def save_preferences(prefs: Preferences, **changes: object) -> Preferences:
    """Return the preferences with ``changes`` applied.

    Switching to precise location forgets the manually saved one.

    Raises:
        ConfigError: On an unknown field, skin type, or chronotype.
    """
    fields = {f.name for f in dataclasses.fields(Preferences)}
    unknown = set(changes) - fields
    if unknown:
        raise ConfigError(f"Unknown preference field(s): {', '.join(sorted(unknown))}")
    updated = dataclasses.replace(prefs, **changes)  # type: ignore[arg-type]
    if updated.skin_type not in SKIN_TYPES:
        raise ConfigError(f"Unknown skin type: {updated.skin_type}")
    if updated.chronotype not in CHRONOTYPES:
        raise ConfigError(f"Unknown chronotype: {updated.chronotype}")
    if updated.use_precise_location:
        updated = dataclasses.replace(updated, saved_location=None)
    return updated


def resolve_location(
    prefs: Preferences, gps: tuple[float, float] | None = None
) -> Location:
    """Pick the location to show: GPS if allowed and available, then saved, then default."""
    if prefs.use_precise_location and gps is not None:
        lat, lng = gps
        return Location(name=CURRENT_LOCATION_NAME, lat=lat, lng=lng)
    if prefs.saved_location is not None:
        return prefs.saved_location
    return DEFAULT_LOCATION


def timezone_name(location: Location) -> str:
    """IANA timezone at the location.

    Raises:
        ConfigError: When no timezone is known for the coordinates.
    """
    tz_str = _tf.timezone_at(lat=location.lat, lng=location.lng)
    if tz_str is None:
        raise ConfigError(f"Timezone not found: lat={location.lat}, lng={location.lng}")
    return tz_str


def local_now(
    location: Location, now: datetime | None = None, tz_name: str | None = None
) -> datetime:
    """Current local time at the location.

    Args:
        location: Where the clock is read.
        now: UTC instant to convert (defaults to the current time).
        tz_name: Timezone reported by the forecast provider, if any; skips
            the coordinate lookup.

    Raises:
        ConfigError: When the timezone cannot be determined.
    """
    if now is None:
        now = datetime.now(utc)
    elif now.tzinfo is None:
        now = utc.localize(now)
    tz_str = tz_name or timezone_name(location)
    try:
        local_tz = timezone(tz_str)
    except UnknownTimeZoneError as e:
        raise ConfigError(f"Unknown timezone: {tz_str}") from e
    return now.astimezone(local_tz)


def wall_clock_minutes(
    location: Location, now: datetime | None = None, tz_name: str | None = None
) -> int:
    local = local_now(location, now, tz_name)
    return local.hour * 60 + local.minute


def forecast_path() -> str | None:
    return os.environ.get("SOLARSYNC_FORECAST_PATH") or None
