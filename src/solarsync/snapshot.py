"""CLI entry point for a one-off dashboard snapshot.

Set SOLARSYNC_FORECAST_PATH (or edit the variables below), then run:
    uv run python src/solarsync/snapshot.py
"""

import logging
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

from solarsync.compute import derive  # noqa: E402
from solarsync.config import (  # noqa: E402
    forecast_path,
    local_now,
    preferences_from_env,
    resolve_location,
)
from solarsync.forecast import load_forecast  # noqa: E402
from solarsync.i18n import date_label  # noqa: E402
from solarsync.models import Forecast  # noqa: E402
from solarsync.renderers.svg_arc import render_arc_svg  # noqa: E402

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

progress: float | None = None  # e.g. 0.5 to simulate solar noon
svg_out = Path("results") / "arc.svg"

path = forecast_path()
forecast = load_forecast(path) if path else Forecast(daily=None, hourly=None)
location = resolve_location(preferences_from_env())
now = local_now(location, tz_name=forecast.timezone)

state = derive(
    progress, now.date(), forecast.daily, forecast.hourly, now.hour * 60 + now.minute
)

print(f"{location.name} — {date_label(now.date(), 'en')}")
print(f"{state.time_label} {state.period}  {state.phase.title}: {state.phase.subtitle}")
print(f"{state.temperature}° {state.weather_display.description}  UV {state.uv.label} ({state.uv.level})")
print(f"Vitamin D: {state.vitamin_d.value} ({state.vitamin_d.subtitle})")
print(f"Next {state.next_event.name}: {state.next_event.remaining} {state.next_event.subtitle}")
print(f"Tip: {state.tip}")

svg_out.parent.mkdir(parents=True, exist_ok=True)
svg_out.write_text(render_arc_svg(state), encoding="utf-8")
print(f"Saved: {svg_out}")
