"""Tests for pointer mapping, arc geometry, and the drag gesture lifecycle."""

import math
from datetime import date

import pytest

from solarsync.models import WidgetBounds
from solarsync.timeline import (
    ARC_LENGTH,
    PointerHub,
    TimelineSession,
    arc_dash_offset,
    map_pointer_to_progress,
    marker_position,
)

# Rendered at viewBox size: screen pixels equal viewBox units
BOUNDS = WidgetBounds(left=0, top=0, width=360, height=180)
DAY = date(2025, 10, 27)


# ---------------------------------------------------------------------------
# Pointer mapping
# ---------------------------------------------------------------------------
class TestMapPointerToProgress:
    def test_sunrise_end(self):
        assert map_pointer_to_progress(40, 160, BOUNDS) == 0.0

    def test_sunset_end(self):
        assert map_pointer_to_progress(320, 160, BOUNDS) == 1.0

    def test_zenith(self):
        assert map_pointer_to_progress(180, 20, BOUNDS) == pytest.approx(0.5)

    def test_below_horizon_left_snaps_to_sunrise(self):
        assert map_pointer_to_progress(100, 170, BOUNDS) == 0.0

    def test_below_horizon_right_snaps_to_sunset(self):
        assert map_pointer_to_progress(300, 175, BOUNDS) == 1.0

    def test_scaled_and_offset_widget(self):
        """Widget drawn at twice the size, 10/20 px from the page origin."""
        bounds = WidgetBounds(left=10, top=20, width=720, height=360)
        assert map_pointer_to_progress(10 + 360, 20 + 40, bounds) == pytest.approx(0.5)

    def test_zero_size_widget(self):
        """Not laid out yet → 0 instead of a division error."""
        assert map_pointer_to_progress(50, 50, WidgetBounds(0, 0, 0, 0)) == 0.0

    def test_always_in_unit_range(self):
        for x in range(-100, 500, 37):
            for y in range(-100, 400, 41):
                assert 0.0 <= map_pointer_to_progress(x, y, BOUNDS) <= 1.0

    def test_monotonic_along_arc(self):
        """Sweeping left to right over the arc never decreases progress."""
        values = []
        for i in range(21):
            angle = -math.pi + i * math.pi / 20
            x = 180 + 140 * math.cos(angle)
            y = 160 + 140 * math.sin(angle)
            values.append(map_pointer_to_progress(x, y, BOUNDS))
        assert values == sorted(values)


# ---------------------------------------------------------------------------
# Geometry
# ---------------------------------------------------------------------------
class TestArcGeometry:
    def test_marker_at_sunrise(self):
        x, y = marker_position(0.0)
        assert x == pytest.approx(40)
        assert y == pytest.approx(160)

    def test_marker_at_zenith(self):
        x, y = marker_position(0.5)
        assert x == pytest.approx(180)
        assert y == pytest.approx(20)

    def test_marker_clamped_after_sunset(self):
        assert marker_position(1.4) == marker_position(1.0)

    def test_dash_offset(self):
        assert arc_dash_offset(0.0) == ARC_LENGTH
        assert arc_dash_offset(0.5) == pytest.approx(ARC_LENGTH / 2)
        assert arc_dash_offset(1.0) == 0.0
        assert arc_dash_offset(-0.5) == ARC_LENGTH


# ---------------------------------------------------------------------------
# Pointer hub
# ---------------------------------------------------------------------------
class TestPointerHub:
    def test_listen_detaches(self):
        hub = PointerHub()
        calls = []
        with hub.listen("move", lambda x, y: calls.append((x, y))):
            assert hub.listener_count("move") == 1
            hub.dispatch("move", 1.0, 2.0)
        hub.dispatch("move", 3.0, 4.0)
        assert calls == [(1.0, 2.0)]
        assert hub.listener_count() == 0

    def test_unknown_channel(self):
        with pytest.raises(KeyError):
            PointerHub().add_listener("wheel", print)


# ---------------------------------------------------------------------------
# Drag gesture
# ---------------------------------------------------------------------------
class TestTimelineSessionDrag:
    def test_no_override_outside_drag(self):
        session = TimelineSession(DAY)
        session.move_to(0.7)
        assert session.progress_override is None
        assert not session.dragging

    def test_move_events_update_override(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS):
            assert hub.listener_count() == 3
            hub.dispatch("move", 180, 20)
            assert session.progress_override == pytest.approx(0.5)

    def test_last_move_wins(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS) as gesture:
            hub.dispatch("move", 40, 160)
            hub.dispatch("move", 320, 160)
            assert gesture.progress_override == 1.0
            gesture.move_to(0.25)
            assert gesture.progress_override == 0.25

    def test_move_to_clamps(self):
        session = TimelineSession(DAY)
        with session.drag(PointerHub(), BOUNDS):
            session.move_to(1.5)
            assert session.progress_override == 1.0

    def test_block_exit_releases(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS):
            hub.dispatch("move", 180, 20)
        assert hub.listener_count() == 0
        assert session.progress_override is None
        assert not session.dragging

    @pytest.mark.parametrize("channel", ["end", "cancel"])
    def test_end_and_cancel_revert(self, channel):
        """Ending the gesture drops the override and detaches its listeners at once."""
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS):
            hub.dispatch("move", 180, 20)
            hub.dispatch(channel)
            assert hub.listener_count() == 0
            assert not session.dragging
            assert session.progress_override is None
            hub.dispatch("move", 320, 160)
            assert session.progress_override is None
        assert hub.listener_count() == 0

    def test_new_drag_after_end_inside_block(self):
        """A gesture started after an early end only sees its own move handler."""
        hub = PointerHub()
        session = TimelineSession(DAY)
        scaled = WidgetBounds(left=0, top=0, width=720, height=360)
        with session.drag(hub, BOUNDS):
            hub.dispatch("end")
            with session.drag(hub, scaled):
                assert hub.listener_count() == 3
                hub.dispatch("move", 360, 40)
                assert session.progress_override == pytest.approx(0.5)
            assert hub.listener_count() == 0
        assert hub.listener_count() == 0
        assert not session.dragging

    def test_outer_exit_keeps_later_gesture(self):
        """Leaving the first block does not finish a gesture started after its end."""
        hub = PointerHub()
        session = TimelineSession(DAY)
        first = session.drag(hub, BOUNDS)
        first.__enter__()
        hub.dispatch("cancel")
        with session.drag(hub, BOUNDS):
            first.__exit__(None, None, None)
            assert session.dragging
            assert hub.listener_count() == 3
        assert hub.listener_count() == 0

    def test_exception_releases_listeners(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with pytest.raises(ValueError):
            with session.drag(hub, BOUNDS):
                hub.dispatch("move", 180, 20)
                raise ValueError("boom")
        assert hub.listener_count() == 0
        assert not session.dragging

    def test_nested_drag_rejected(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS):
            with pytest.raises(RuntimeError):
                with session.drag(hub, BOUNDS):
                    pass
            assert hub.listener_count() == 3
        assert hub.listener_count() == 0

    def test_new_drag_after_release(self):
        hub = PointerHub()
        session = TimelineSession(DAY)
        with session.drag(hub, BOUNDS):
            pass
        with session.drag(hub, BOUNDS):
            assert session.dragging


class TestTimelineSessionDerive:
    def test_follows_wall_clock(self):
        state = TimelineSession(DAY).derive(None, None, 750)
        assert state.time_label == "12:30"
        assert not state.simulating

    def test_uses_drag_override(self):
        session = TimelineSession(DAY)
        with session.drag(PointerHub(), BOUNDS) as gesture:
            gesture.move_to(0.0)
            state = gesture.derive(None, None, 750)
        assert state.time_label == "6:30"
        assert state.simulating
        assert not session.derive(None, None, 750).simulating
