"""WMO weather code classification and display metadata."""

from solarsync.models import WeatherDisplay, WeatherType

_CLEAR_CODES = frozenset({0, 1})
_SNOW_SHOWER_CODES = frozenset({85, 86})

WEATHER_DISPLAY: dict[WeatherType, WeatherDisplay] = {
    WeatherType.SUNNY: WeatherDisplay(icon="wb_sunny", description="Clear", color="#facc15"),
    WeatherType.CLOUDY: WeatherDisplay(icon="cloud", description="Cloudy", color="#ffffff"),
    WeatherType.RAIN: WeatherDisplay(icon="rainy", description="Rain", color="#60a5fa"),
    WeatherType.SNOW: WeatherDisplay(icon="ac_unit", description="Snow", color="#ffffff"),
    WeatherType.NIGHT: WeatherDisplay(
        icon="bedtime", description="Clear Night", color="#bfdbfe"
    ),
}


def classify_weather(code: int, is_night: bool) -> WeatherType:
    """Map a WMO weather code to a WeatherType.

    First match wins:
      1. night and clear sky (0, 1) → NIGHT
      2. clear sky (0, 1)           → SUNNY
      3. code <= 48 (clouds, fog)   → CLOUDY
      4. 71-77 or 85-86 (snow)      → SNOW
      5. anything else              → RAIN

    Night only overrides the clear-sky codes; cloudy or wet hours look the
    same after dark.
    """
    if code in _CLEAR_CODES:
        return WeatherType.NIGHT if is_night else WeatherType.SUNNY
    if code <= 48:
        return WeatherType.CLOUDY
    if 71 <= code <= 77 or code in _SNOW_SHOWER_CODES:
        return WeatherType.SNOW
    return WeatherType.RAIN


def weather_display(weather_type: WeatherType) -> WeatherDisplay:
    return WEATHER_DISPLAY[weather_type]
