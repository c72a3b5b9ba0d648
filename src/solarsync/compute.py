"""Derived-state computation — timeline progress to clock, weather, UV, and circadian phase.

Everything here is a pure function of its arguments: the same progress, date,
feeds, and wall clock always produce an equal DerivedState.
"""

import logging
import math
from datetime import date

from solarsync.forecast import lookup_hourly_sample, resolve_solar_window, round_half_up
from solarsync.models import (
    DEFAULT_SOLAR_WINDOW,
    MINUTES_PER_DAY,
    DailyForecastTable,
    DerivedState,
    HourlyForecastTable,
    NextEvent,
    PhaseInfo,
    SolarWindow,
    UVStatus,
    VitaminDStatus,
    WeatherType,
)
from solarsync.weather import classify_weather, weather_display

_LOGGER = logging.getLogger(__name__)

UV_BAR_MAX = 11

RAIN_TIP = "Rainy day? Indoor lighting is often too dim. Sit by a window."
SOLAR_NOON_UV_TIP = "UV is high. Limit direct exposure or use protection."

# (upper bound of clamped progress, title, subtitle, tip)
_DAYLIGHT_PHASES: tuple[tuple[float, str, str, str], ...] = (
    (
        0.2,
        "Sunrise Phase",
        "Critical for circadian reset.",
        "Get 10-30 mins of light now to anchor your wake/sleep cycle.",
    ),
    (
        0.4,
        "Morning Rise",
        "Cortisol is elevating naturally.",
        "Great time for caffeine or exercise. Alertness is rising.",
    ),
    (
        0.6,
        "Solar Noon",
        "Sun is at highest elevation.",
        "Take a walk. Brightest light of the day.",
    ),
    (
        0.8,
        "Afternoon",
        "Natural energy dip.",
        "Naps should be <20 mins. A walk is better than caffeine now.",
    ),
    (
        1.0,
        "Sunset Phase",
        "Signal to body day is ending.",
        "View the sunset. The color spectrum signals safety to your brain.",
    ),
)
_PRE_DAWN = (
    PhaseInfo(title="Pre-Dawn", subtitle="Melatonin is peaking."),
    "Keep environments dark to preserve sleep quality until wake time.",
)
_POST_SUNSET = (
    PhaseInfo(title="Post-Sunset", subtitle="Melatonin production begins."),
    "Avoid blue light now. Use warm lighting to prepare for bed.",
)


def clamp_progress(progress: float) -> float:
    return max(0.0, min(1.0, progress))


def usable_window(window: SolarWindow) -> SolarWindow:
    """Replace a degenerate window (sunset <= sunrise) with the default one."""
    if window.is_valid:
        return window
    _LOGGER.warning(
        "Degenerate solar window %d-%d, using default",
        window.sunrise_minutes,
        window.sunset_minutes,
    )
    return DEFAULT_SOLAR_WINDOW


def effective_progress(
    window: SolarWindow, wall_clock_minutes: int, override: float | None = None
) -> float:
    """Drag override if one is active, else the wall clock's position in the window.

    The result is not clamped: negative before sunrise, above 1 after sunset.
    """
    if override is not None:
        return override
    return (wall_clock_minutes - window.sunrise_minutes) / window.span


def minute_of_day(window: SolarWindow, progress: float) -> int:
    """Absolute minute for a progress value, wrapped into [0, 1440)."""
    return round_half_up(window.sunrise_minutes + progress * window.span) % MINUTES_PER_DAY


def clock_label(minutes: int) -> tuple[str, str]:
    """12-hour ``h:mm`` label and AM/PM period for a minute of the day."""
    hours, mins = divmod(minutes, 60)
    period = "PM" if hours >= 12 else "AM"
    if hours > 12:
        hours -= 12
    elif hours == 0:
        hours = 12
    return f"{hours}:{mins:02d}", period


def uv_level(uv_index: float) -> str:
    """UV index category. Thresholds are lower-inclusive: 3.0 is Moderate."""
    if uv_index == 0:
        return "None"
    if uv_index < 3:
        return "Low"
    if uv_index < 6:
        return "Moderate"
    if uv_index < 8:
        return "High"
    if uv_index < 11:
        return "Very High"
    return "Extreme"


def uv_bar_percent(uv_index: float) -> float:
    """Fill of the UV gauge, full at UV 11."""
    return min(100.0, uv_index / UV_BAR_MAX * 100)


def vitamin_d_status(uv_index: float) -> VitaminDStatus:
    """Vitamin D synthesis needs UVB, which is present from about UV index 3."""
    if uv_index >= 3:
        return VitaminDStatus(value="Synthesizing", subtitle="Optimal production", active=True)
    if uv_index >= 1:
        return VitaminDStatus(value="Low", subtitle="Inefficient production", active=False)
    return VitaminDStatus(value="Inactive", subtitle="UV Index too low", active=False)


def circadian_phase(progress: float, uv_index: float) -> tuple[PhaseInfo, str]:
    """Phase title/subtitle and tip for an unclamped progress value.

    The sign of the raw progress selects pre-dawn and post-sunset; daylight is
    bucketed on the clamped value in steps of 0.2.
    """
    if progress < 0:
        return _PRE_DAWN
    if progress > 1:
        return _POST_SUNSET
    clamped = clamp_progress(progress)
    _, title, subtitle, tip = next(
        phase for phase in _DAYLIGHT_PHASES if clamped < phase[0] or phase[0] == 1.0
    )
    if title == "Solar Noon" and uv_index > 5:
        tip = SOLAR_NOON_UV_TIP
    return PhaseInfo(title=title, subtitle=subtitle), tip


def format_duration(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours}h {mins}m"


def next_event(minutes: int, window: SolarWindow) -> NextEvent:
    """Countdown from ``minutes`` to the next sunrise or sunset."""
    if minutes < window.sunrise_minutes:
        remaining = window.sunrise_minutes - minutes
        return NextEvent(
            name="Sunrise",
            remaining_minutes=remaining,
            remaining=format_duration(remaining),
            subtitle="until dawn",
            icon="wb_twilight",
        )
    if minutes < window.sunset_minutes:
        remaining = window.sunset_minutes - minutes
        return NextEvent(
            name="Sunset",
            remaining_minutes=remaining,
            remaining=format_duration(remaining),
            subtitle="remaining",
            icon="bedtime",
        )
    remaining = (MINUTES_PER_DAY - minutes) + window.sunrise_minutes
    return NextEvent(
        name="Sunrise",
        remaining_minutes=remaining,
        remaining=format_duration(remaining),
        subtitle="until tomorrow",
        icon="wb_twilight",
    )


def derive(
    progress: float | None,
    selected_date: date,
    daily: DailyForecastTable | None,
    hourly: HourlyForecastTable | None,
    wall_clock_minutes: int,
) -> DerivedState:
    """Compute the dashboard state for one timeline position.

    Args:
        progress: Drag override (0 = sunrise, 1 = sunset), or None to follow
            the wall clock. A non-finite override is ignored.
        selected_date: Calendar date being viewed.
        daily: Sunrise/sunset feed, or None if not loaded yet.
        hourly: Temperature/weather/UV feed, or None if not loaded yet.
        wall_clock_minutes: Current local time in minutes from midnight.

    Returns:
        DerivedState for the resolved minute of ``selected_date``.
    """
    if progress is not None and not math.isfinite(progress):
        _LOGGER.warning("Ignoring non-finite timeline override %r", progress)
        progress = None
    window = usable_window(resolve_solar_window(selected_date, daily))
    raw = effective_progress(window, wall_clock_minutes, progress)
    minutes = minute_of_day(window, raw)
    time_label, period = clock_label(minutes)

    sample = lookup_hourly_sample(selected_date, minutes // 60, hourly)
    is_night = minutes < window.sunrise_minutes or minutes > window.sunset_minutes
    weather = classify_weather(sample.weather_code, is_night)

    phase, tip = circadian_phase(raw, sample.uv_index)
    if weather is WeatherType.RAIN:
        tip = RAIN_TIP

    return DerivedState(
        time_label=time_label,
        period=period,
        weather=weather,
        weather_display=weather_display(weather),
        temperature=sample.temperature,
        uv=UVStatus(value=sample.uv_index, level=uv_level(sample.uv_index)),
        vitamin_d=vitamin_d_status(sample.uv_index),
        phase=phase,
        tip=tip,
        next_event=next_event(minutes, window),
        window=window,
        progress=raw,
        clamped_progress=clamp_progress(raw),
        minute_of_day=minutes,
        is_night=is_night,
        simulating=progress is not None,
    )
