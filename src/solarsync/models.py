"""Records passed between the forecast feeds, the timeline computation, and the renderers."""

from dataclasses import dataclass
from datetime import date
from enum import Enum

MINUTES_PER_DAY = 1440


@dataclass(frozen=True)
class DailyForecastTable:
    """Per-day sunrise/sunset feed. Index-aligned, one row per calendar date."""

    time: tuple[str, ...]  # "YYYY-MM-DD"
    sunrise: tuple[str, ...]  # "YYYY-MM-DDTHH:MM", local to the location
    sunset: tuple[str, ...]  # "YYYY-MM-DDTHH:MM", local to the location


@dataclass(frozen=True)
class HourlyForecastTable:
    """Per-hour weather feed. Index-aligned, one row per hour."""

    time: tuple[str, ...]  # "YYYY-MM-DDTHH:00", local to the location
    temperature_2m: tuple[float, ...]  # Degrees
    weathercode: tuple[int, ...]  # WMO weather code
    uv_index: tuple[float, ...]  # Non-negative


@dataclass(frozen=True)
class Forecast:
    """Both feeds as delivered by the data collaborator. Either may be missing."""

    daily: DailyForecastTable | None
    hourly: HourlyForecastTable | None
    timezone: str | None = None  # IANA name reported by the provider


@dataclass(frozen=True)
class SolarWindow:
    """Sunrise/sunset for one date, in minutes from local midnight."""

    sunrise_minutes: int
    sunset_minutes: int

    @property
    def span(self) -> int:
        return self.sunset_minutes - self.sunrise_minutes

    @property
    def is_valid(self) -> bool:
        return 0 <= self.sunrise_minutes < self.sunset_minutes < MINUTES_PER_DAY


DEFAULT_SOLAR_WINDOW = SolarWindow(sunrise_minutes=390, sunset_minutes=1110)


@dataclass(frozen=True)
class HourlySample:
    """Weather values for one hour of the selected date."""

    temperature: int  # Rounded degrees
    uv_index: float
    weather_code: int


FALLBACK_SAMPLE = HourlySample(temperature=20, uv_index=0.0, weather_code=1)


@dataclass(frozen=True)
class DayOverview:
    """One row of the 7-day picker."""

    day: date
    sunrise_minutes: int
    sunset_minutes: int

    @property
    def day_length_minutes(self) -> int:
        return self.sunset_minutes - self.sunrise_minutes


class WeatherType(Enum):
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAIN = "Rain"
    SNOW = "Snow"
    NIGHT = "Night"


@dataclass(frozen=True)
class WeatherDisplay:
    """Icon/label/colour shown next to the temperature."""

    icon: str  # Material Symbols name
    description: str
    color: str  # CSS colour


@dataclass(frozen=True)
class UVStatus:
    value: float
    level: str  # "None", "Low", "Moderate", "High", "Very High", "Extreme"

    @property
    def label(self) -> str:
        return f"{self.value:.1f}"


@dataclass(frozen=True)
class VitaminDStatus:
    value: str  # "Synthesizing", "Low", "Inactive"
    subtitle: str
    active: bool


@dataclass(frozen=True)
class PhaseInfo:
    title: str
    subtitle: str


@dataclass(frozen=True)
class NextEvent:
    """Countdown to the next sunrise or sunset."""

    name: str  # "Sunrise" or "Sunset"
    remaining_minutes: int
    remaining: str  # "3h 5m"
    subtitle: str  # "until dawn", "remaining", "until tomorrow"
    icon: str


@dataclass(frozen=True)
class WidgetBounds:
    """Rendered pixel rectangle of the timeline widget (like a DOMRect)."""

    left: float
    top: float
    width: float
    height: float


@dataclass(frozen=True)
class DerivedState:
    """Everything the dashboard shows for one timeline position. Fully computed."""

    time_label: str  # "12:30"
    period: str  # "AM" / "PM"
    weather: WeatherType
    weather_display: WeatherDisplay
    temperature: int
    uv: UVStatus
    vitamin_d: VitaminDStatus
    phase: PhaseInfo
    tip: str
    next_event: NextEvent
    window: SolarWindow  # Window actually used (after degenerate-data fallback)
    progress: float  # Unclamped: <0 pre-dawn, >1 post-sunset
    clamped_progress: float  # [0, 1], visual placement only
    minute_of_day: int  # [0, 1440)
    is_night: bool
    simulating: bool  # True while a drag override drives the progress


@dataclass(frozen=True)
class Location:
    """A named point on the map."""

    name: str
    lat: float  # Latitude (decimal degrees)
    lng: float  # Longitude (decimal degrees)
    country_code: str | None = None


@dataclass(frozen=True)
class Preferences:
    """User settings. Loaded once at startup, replaced only by an explicit save."""

    skin_type: str  # Fitzpatrick id, e.g. "Type III"
    chronotype: str  # "Lion", "Bear", "Wolf", "Dolphin"
    use_precise_location: bool
    saved_location: Location | None = None
