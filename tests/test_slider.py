import logging
import math

import pytest

from gamesense.core.signal import SIGNAL_POINTER_MOVE, SIGNAL_POINTER_UP
from gamesense.ui.widgets.slider import (
    Slider, snap_value, fraction_to_value, value_to_fraction, format_value,
)


# -----------------------------------------------------------------------------
# Value mapping
# -----------------------------------------------------------------------------

def test_fraction_044_snaps_down_to_40():
    assert fraction_to_value(0.44, 0, 100, 10) == 40


def test_half_step_rounds_up():
    assert snap_value(45, 0, 100, 10) == 50
    assert snap_value(44.9, 0, 100, 10) == 40


def test_snap_clamps_to_range():
    assert snap_value(-20, 0, 100, 10) == 0
    assert snap_value(250, 0, 100, 10) == 100


def test_snap_is_relative_to_min():
    # Grid is 3, 8, 13, ...
    assert snap_value(9, 3, 30, 5) == 8
    assert snap_value(11, 3, 30, 5) == 13


def test_snap_never_overshoots_unaligned_max():
    # 95 rounds to 100 on the grid, which is out of range
    assert snap_value(95, 0, 95, 10) == 90
    assert fraction_to_value(1.0, 0, 95, 10) == 90


def test_integer_grid_stays_integer():
    value = fraction_to_value(0.44, 0, 100, 10)
    assert isinstance(value, int)


def test_float_increment_has_no_float_noise():
    assert snap_value(0.83, 0, 1, 0.05) == 0.85
    assert snap_value(0.3, 0, 1, 0.1) == 0.3
    assert format_value(snap_value(0.3, 0, 1, 0.1)) == "0.3"


def test_decimal_ties_round_up():
    assert snap_value(0.35, 0, 1, 0.1) == 0.4
    assert snap_value(0.25, 0, 1, 0.1) == 0.3
    assert snap_value(1.15, 1, 2, 0.1) == 1.2
    assert snap_value(0.34, 0, 1, 0.1) == 0.3
    assert fraction_to_value(0.35, 0, 1, 0.1) == 0.4


def test_decimal_tie_drag_and_set_value_agree():
    typed = Slider(min_value=0, max_value=1, increment=0.1)
    dragged = Slider(min_value=0, max_value=1, increment=0.1)

    typed.set_value(0.35)
    dragged.set_fraction(0.35)

    assert typed.value == dragged.value == 0.4
    assert typed.display_text == dragged.display_text == "0.4"


def test_fraction_is_clamped():
    assert fraction_to_value(-1.0, 0, 100, 1) == 0
    assert fraction_to_value(2.0, 0, 100, 1) == 100


@pytest.mark.parametrize("lo,hi,inc", [
    (0, 100, 10),
    (0, 95, 10),
    (-50, 50, 7),
    (0, 1, 0.05),
    (10, 10, 1),
    (1, 2, 0.25),
])
def test_every_fraction_maps_into_range_on_grid(lo, hi, inc):
    for i in range(101):
        f = i / 100
        v = fraction_to_value(f, lo, hi, inc)
        assert lo <= v <= hi
        steps = (v - lo) / inc
        assert math.isclose(steps, round(steps), abs_tol=1e-9)


def test_value_to_fraction():
    assert value_to_fraction(40, 0, 100) == 0.4
    assert value_to_fraction(5, 5, 5) == 0.0


def test_snap_rejects_bad_increment():
    with pytest.raises(ValueError):
        snap_value(1, 0, 10, 0)


def test_format_value():
    assert format_value(40) == "40"
    assert format_value(40.0) == "40"
    assert format_value(0.85) == "0.85"
    assert format_value(-3) == "-3"


# -----------------------------------------------------------------------------
# Slider widget
# -----------------------------------------------------------------------------

def test_initial_value_does_not_notify():
    calls = []
    slider = Slider(name="FOV", min_value=0, max_value=100, increment=10, value=44, callback=calls.append)

    assert calls == []
    assert slider.get_value() == 40
    assert slider.display_text == "40"


def test_initial_value_defaults_to_min():
    slider = Slider(min_value=20, max_value=80)
    assert slider.value == 20
    assert slider.fill_fraction == 0.0


def test_set_value_snaps_and_notifies():
    calls = []
    slider = Slider(name="FOV", min_value=0, max_value=100, increment=10, suffix="%", callback=calls.append)

    slider.set_value(67)

    assert slider.value == 70
    assert slider.display_text == "70%"
    assert slider.fill_fraction == pytest.approx(0.7)
    assert calls == [70]


def test_degenerate_range_has_empty_fill():
    slider = Slider(min_value=5, max_value=5)
    slider.set_value(100)
    assert slider.value == 5
    assert slider.fill_fraction == 0.0


def test_unlaid_out_slider_reads_fraction_zero():
    slider = Slider()
    assert slider.fraction_at(500) == 0.0


def test_invalid_construction():
    with pytest.raises(ValueError):
        Slider(min_value=10, max_value=0)
    with pytest.raises(ValueError):
        Slider(increment=0)


def test_raising_callback_keeps_value(caplog):
    def broken(value):
        raise RuntimeError("callback failed")

    slider = Slider(name="Broken", min_value=0, max_value=10, callback=broken)
    with caplog.at_level(logging.ERROR):
        slider.set_value(7)

    assert slider.value == 7
    assert slider.display_text == "7"
    assert "slider:Broken" in caplog.text


# -----------------------------------------------------------------------------
# Slider in a window
# -----------------------------------------------------------------------------

def _track_point(slider, fraction):
    track = slider.absolute_track_rect()
    return (track.x + fraction * track.w, track.y + track.h / 2)


def test_drag_and_set_value_agree(window, pointer):
    dragged_calls = []
    tab = window.create_tab(name="Main")
    dragged = tab.create_slider(name="Dragged", range=(0, 100), increment=10, suffix="%",
                                callback=dragged_calls.append)
    typed = tab.create_slider(name="Typed", range=(0, 100), increment=10, suffix="%")

    x, y = _track_point(dragged, 0.44)
    pointer.down(x, y)
    pointer.up(x, y)

    typed.set_value(0 + 0.44 * (100 - 0))

    assert dragged.value == typed.value == 40
    assert dragged.display_text == typed.display_text == "40%"
    assert dragged_calls == [40]


def test_drag_tracks_pointer_until_release(window, pointer, bus):
    calls = []
    tab = window.create_tab(name="Main")
    slider = tab.create_slider(name="Volume", range=(0, 100), increment=1, callback=calls.append)

    x, y = _track_point(slider, 0.25)
    pointer.down(x, y)
    assert slider.dragging
    assert bus.connection_count(SIGNAL_POINTER_MOVE) == 1

    # Past the right end clamps to max
    track = slider.absolute_track_rect()
    pointer.move(track.right + 50, y + 100)
    assert slider.value == 100

    pointer.up(track.right + 50, y + 100)
    assert not slider.dragging
    assert bus.connection_count(SIGNAL_POINTER_MOVE) == 0

    # Further movement is ignored
    pointer.move(track.x, y)
    assert slider.value == 100
    assert calls == [25, 100]


def test_drag_reports_only_changes(window, pointer):
    calls = []
    tab = window.create_tab(name="Main")
    slider = tab.create_slider(name="Coarse", range=(0, 100), increment=50, callback=calls.append)

    x, y = _track_point(slider, 0.1)
    pointer.down(x, y)
    pointer.move(*_track_point(slider, 0.2))
    pointer.move(*_track_point(slider, 0.9))
    pointer.up(*_track_point(slider, 0.9))

    assert calls == [0, 100]


def test_press_on_label_row_does_not_start_drag(window, pointer, bus):
    tab = window.create_tab(name="Main")
    slider = tab.create_slider(name="FOV", current_value=30)

    rect = slider.get_absolute_rect()
    pointer.down(rect.x + rect.w * 0.9, rect.y + 5)

    assert not slider.dragging
    assert slider.value == 30
    assert bus.connection_count(SIGNAL_POINTER_MOVE) == 0
    pointer.up(rect.x + rect.w * 0.9, rect.y + 5)


def test_destroy_mid_drag_releases_subscriptions(window, pointer, bus):
    tab = window.create_tab(name="Main")
    slider = tab.create_slider(name="FOV")

    pointer.down(*_track_point(slider, 0.5))
    window.destroy()

    assert bus.connection_count(SIGNAL_POINTER_MOVE) == 0
    assert bus.connection_count(SIGNAL_POINTER_UP) == 0
