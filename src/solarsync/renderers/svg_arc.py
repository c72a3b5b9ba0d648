"""SVG solar arc renderer.

Produces a self-contained SVG string for embedding via st.markdown() or
st.components.v1.html(). Uses viewBox="0 0 360 180"; the browser handles
all scaling, so pointer positions are mapped back with the ratio of the
viewBox to the rendered size (see timeline.map_pointer_to_progress).

Coordinate system (matches timeline.py):
  arc centre (180, 160), radius 140
  x=40 is sunrise, x=320 is sunset, y=160 is the horizon
"""

from __future__ import annotations

from solarsync.i18n import clock_hhmm
from solarsync.models import DerivedState
from solarsync.timeline import (
    ARC_CENTER_X,
    ARC_CENTER_Y,
    ARC_LENGTH,
    ARC_RADIUS,
    VIEWBOX_HEIGHT,
    VIEWBOX_WIDTH,
    arc_dash_offset,
    marker_position,
)

_SUN_COLOR = "#f4c025"
_MOON_COLOR = "#a0aec0"
_TRACK_COLOR = "rgba(255,255,255,0.1)"
_TICK_ANGLES = (-90, -45, 0, 45, 90)


def _arc_path() -> str:
    left = ARC_CENTER_X - ARC_RADIUS
    right = ARC_CENTER_X + ARC_RADIUS
    return (
        f"M {left:g} {ARC_CENTER_Y:g} "
        f"A {ARC_RADIUS:g} {ARC_RADIUS:g} 0 0 1 {right:g} {ARC_CENTER_Y:g}"
    )


def _orb_svg(x: float, y: float, after_sunset: bool, simulating: bool) -> str:
    """Moon after sunset, sun otherwise. The sun grows while it is being dragged."""
    if after_sunset:
        return (
            f'<circle cx="{x:.2f}" cy="{y:.2f}" r="20" fill="{_MOON_COLOR}" fill-opacity="0.3"/>'
            f'<circle cx="{x:.2f}" cy="{y:.2f}" r="12" fill="{_MOON_COLOR}"/>'
        )
    core_r, halo_r = (16, 26) if simulating else (14, 22)
    return (
        f'<circle cx="{x:.2f}" cy="{y:.2f}" r="{halo_r}" fill="{_SUN_COLOR}" fill-opacity="0.3"/>'
        f'<circle cx="{x:.2f}" cy="{y:.2f}" r="{core_r}" fill="{_SUN_COLOR}"/>'
    )


def render_arc_svg(state: DerivedState, width: int = 340) -> str:
    """Return an SVG drawing of the sun's position between sunrise and sunset.

    The background arc is the whole day; the gold overlay covers the part
    already travelled (clamped progress). The orb turns into the moon once
    the progress passes sunset.

    Args:
        state: Derived dashboard state.
        width: Rendered width in pixels; height keeps the 2:1 viewBox ratio.

    Returns:
        SVG markup string.
    """
    path = _arc_path()
    x, y = marker_position(state.clamped_progress)
    offset = arc_dash_offset(state.clamped_progress)
    height = round(width * VIEWBOX_HEIGHT / VIEWBOX_WIDTH)

    tick_top = ARC_CENTER_Y - ARC_RADIUS
    ticks = "\n    ".join(
        f'<rect x="{ARC_CENTER_X - 0.5:g}" y="{tick_top:g}" width="1" height="6" fill="#ffffff"'
        f' transform="rotate({angle} {ARC_CENTER_X:g} {ARC_CENTER_Y:g})"/>'
        for angle in _TICK_ANGLES
    )

    sunrise_label = clock_hhmm(state.window.sunrise_minutes)
    sunset_label = clock_hhmm(state.window.sunset_minutes)

    return f"""<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 {VIEWBOX_WIDTH:g} {VIEWBOX_HEIGHT:g}"
     width="{width}" height="{height}" overflow="visible">
  <path d="{path}" fill="none" stroke="{_TRACK_COLOR}" stroke-linecap="round" stroke-width="2"/>
  <g opacity="0.3">
    {ticks}
  </g>
  <path d="{path}" fill="none" stroke="{_SUN_COLOR}" stroke-linecap="round" stroke-width="4"
        stroke-dasharray="{ARC_LENGTH:g}" stroke-dashoffset="{offset:.2f}"/>
  {_orb_svg(x, y, state.progress > 1, state.simulating)}
  <line x1="20" y1="{ARC_CENTER_Y:g}" x2="340" y2="{ARC_CENTER_Y:g}" stroke="{_TRACK_COLOR}"
        stroke-dasharray="4 4" stroke-width="1"/>
  <text x="25" y="178" fill="#ffffff" font-size="14" font-weight="700">{sunrise_label}</text>
  <text x="335" y="178" fill="#ffffff" font-size="14" font-weight="700" text-anchor="end">{sunset_label}</text>
</svg>"""
