"""Solar arc timeline: pointer mapping, marker geometry, and the drag gesture lifecycle.

Widget-local coordinate system (matches renderers/svg_arc.py):
  viewBox 360 x 180, arc centre (180, 160), radius 140.
  Progress 0 is the left end of the arc (sunrise), 1 the right end (sunset).
"""

from __future__ import annotations

import logging
import math
from collections.abc import Callable, Iterator
from contextlib import ExitStack, contextmanager
from datetime import date

from solarsync.compute import clamp_progress, derive
from solarsync.models import (
    DailyForecastTable,
    DerivedState,
    HourlyForecastTable,
    WidgetBounds,
)

_LOGGER = logging.getLogger(__name__)

VIEWBOX_WIDTH = 360.0
VIEWBOX_HEIGHT = 180.0
ARC_CENTER_X = 180.0
ARC_CENTER_Y = 160.0
ARC_RADIUS = 140.0
ARC_LENGTH = 440.0  # Dash length of the half-circle path, rounded up

CHANNELS = ("move", "end", "cancel")


def map_pointer_to_progress(
    pointer_x: float, pointer_y: float, bounds: WidgetBounds
) -> float:
    """Convert a screen pointer position over the widget into progress in [0, 1].

    Pointer positions below the horizon line (positive atan2 angle) snap to
    the nearer end of the arc instead of wrapping around.

    Args:
        pointer_x: Pointer x in screen pixels.
        pointer_y: Pointer y in screen pixels.
        bounds: Rendered rectangle of the widget in screen pixels.

    Returns:
        Progress along the arc, 0 = sunrise end, 1 = sunset end.
    """
    if bounds.width <= 0 or bounds.height <= 0:
        # Widget not laid out yet
        return 0.0
    scale_x = VIEWBOX_WIDTH / bounds.width
    scale_y = VIEWBOX_HEIGHT / bounds.height
    dx = (pointer_x - bounds.left) * scale_x - ARC_CENTER_X
    dy = (pointer_y - bounds.top) * scale_y - ARC_CENTER_Y

    angle = math.atan2(dy, dx)
    if angle > 0:
        angle = -math.pi if dx < 0 else 0.0
    return clamp_progress((angle + math.pi) / math.pi)


def marker_position(progress: float) -> tuple[float, float]:
    """Widget-local centre of the sun/moon orb. Progress is clamped first."""
    angle = -math.pi + clamp_progress(progress) * math.pi
    return (
        ARC_CENTER_X + ARC_RADIUS * math.cos(angle),
        ARC_CENTER_Y + ARC_RADIUS * math.sin(angle),
    )


def arc_dash_offset(progress: float) -> float:
    """stroke-dashoffset that reveals the travelled part of the arc."""
    return ARC_LENGTH * (1 - clamp_progress(progress))


class PointerHub:
    """Pointer event channels (move/end/cancel) that listeners attach to."""

    def __init__(self) -> None:
        self._listeners: dict[str, list[Callable[..., None]]] = {
            channel: [] for channel in CHANNELS
        }

    def add_listener(self, channel: str, handler: Callable[..., None]) -> None:
        self._listeners[channel].append(handler)

    def remove_listener(self, channel: str, handler: Callable[..., None]) -> None:
        self._listeners[channel].remove(handler)

    def listener_count(self, channel: str | None = None) -> int:
        if channel is None:
            return sum(len(handlers) for handlers in self._listeners.values())
        return len(self._listeners[channel])

    def dispatch(self, channel: str, *args: float) -> None:
        # Copy: an end/cancel handler may detach listeners mid-dispatch
        for handler in list(self._listeners[channel]):
            handler(*args)

    @contextmanager
    def listen(self, channel: str, handler: Callable[..., None]) -> Iterator[None]:
        """Attach ``handler`` for the duration of the block."""
        self.add_listener(channel, handler)
        try:
            yield
        finally:
            self.remove_listener(channel, handler)


class TimelineSession:
    """Timeline state for one dashboard: selected date and the drag override.

    The override exists only while a drag is active; ending or cancelling the
    gesture reverts the timeline to wall-clock progress.
    """

    def __init__(self, selected_date: date) -> None:
        self.selected_date = selected_date
        self._gesture: ExitStack | None = None  # Listener scope of the active drag
        self._drag_progress: float | None = None

    @property
    def dragging(self) -> bool:
        return self._gesture is not None

    @property
    def progress_override(self) -> float | None:
        return self._drag_progress if self.dragging else None

    def move_to(self, progress: float) -> None:
        """Set the override directly. Ignored outside a drag; last call wins."""
        if self.dragging:
            self._drag_progress = clamp_progress(progress)

    def _finish(self) -> None:
        gesture, self._gesture = self._gesture, None
        self._drag_progress = None
        if gesture is not None:
            gesture.close()
            _LOGGER.debug("Drag gesture released")

    @contextmanager
    def drag(self, hub: PointerHub, bounds: WidgetBounds) -> Iterator[TimelineSession]:
        """Run a drag gesture.

        Pointer-move events on ``hub`` update the override while the block
        runs. An ``end`` or ``cancel`` event finishes the gesture at once and
        detaches its listeners; otherwise they are detached when the block
        exits, on every exit path.
        """
        if self._gesture is not None:
            raise RuntimeError("a drag gesture is already active")

        stack = ExitStack()

        def on_move(pointer_x: float, pointer_y: float) -> None:
            self.move_to(map_pointer_to_progress(pointer_x, pointer_y, bounds))

        def on_finish(*_: float) -> None:
            if self._gesture is stack:
                self._finish()

        stack.enter_context(hub.listen("move", on_move))
        stack.enter_context(hub.listen("end", on_finish))
        stack.enter_context(hub.listen("cancel", on_finish))
        self._gesture = stack
        try:
            yield self
        finally:
            # A gesture started after this one ended early is left alone
            if self._gesture is stack:
                self._finish()
            stack.close()

    def derive(
        self,
        daily: DailyForecastTable | None,
        hourly: HourlyForecastTable | None,
        wall_clock_minutes: int,
    ) -> DerivedState:
        return derive(
            self.progress_override,
            self.selected_date,
            daily,
            hourly,
            wall_clock_minutes,
        )
