import logging

from gamesense.core.signal import SIGNAL_POINTER_MOVE, SIGNAL_POINTER_UP
from gamesense.core.config import WindowConfig, TabConfig, ToggleConfig
from gamesense.ui.style import DEFAULT_THEME
from gamesense.ui.widget import WidgetState
from gamesense.ui.widgets import SectionTitle
from gamesense.ui.window import Window


def _visible_pages(window):
    return [tab for tab in window.tabs if tab.content.visible]


def test_first_tab_is_activated_automatically(window):
    aim = window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")

    assert window.active_tab is aim
    assert aim.active
    assert not visuals.active
    assert _visible_pages(window) == [aim]


def test_auto_activation_can_be_disabled(bus):
    with Window(bus, WindowConfig(auto_activate_first_tab=False)) as window:
        aim = window.create_tab(name="Aim")
        assert window.active_tab is None
        assert _visible_pages(window) == []

        assert window.select_tab("Aim")
        assert window.active_tab is aim


def test_switching_leaves_exactly_one_visible_tab(window):
    aim = window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")
    misc = window.create_tab(name="Misc")

    assert window.select_tab("Visuals")

    assert window.active_tab is visuals
    assert _visible_pages(window) == [visuals]
    assert visuals.button.active
    assert not aim.button.active
    assert not misc.button.active


def test_button_colors_follow_activation(window):
    aim = window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")
    theme = DEFAULT_THEME

    window.select_tab("Visuals")

    assert visuals.button.style.background == theme.tab_active
    assert visuals.button.style.font_color == theme.accent
    assert aim.button.style.background == theme.frame
    assert aim.button.style.font_color == theme.text_disabled


def test_reselecting_active_tab_keeps_state(window):
    aim = window.create_tab(name="Aim")
    window.create_tab(name="Visuals")

    assert window.select_tab("Aim")
    assert window.active_tab is aim
    assert _visible_pages(window) == [aim]


def test_unknown_tab_leaves_active_unchanged(window, caplog):
    aim = window.create_tab(name="Aim")

    with caplog.at_level(logging.WARNING, logger="gamesense.ui.window"):
        assert window.select_tab("Nope") is False

    assert window.active_tab is aim
    assert _visible_pages(window) == [aim]
    assert "Nope" in caplog.text


def test_get_tab(window, caplog):
    aim = window.create_tab(name="Aim")
    assert window.get_tab("Aim") is aim

    with caplog.at_level(logging.WARNING, logger="gamesense.ui.window"):
        assert window.get_tab("Missing") is None
    assert "Missing" in caplog.text


def test_duplicate_tab_returns_existing(window, caplog):
    first = window.create_tab(name="Aim")

    with caplog.at_level(logging.WARNING, logger="gamesense.ui.window"):
        second = window.create_tab(name="Aim", icon="X")

    assert second is first
    assert len(window.tabs) == 1
    assert len(window.sidebar.children) == 1
    assert "already exists" in caplog.text


def test_tab_order_defaults_and_sorting(window):
    a = window.create_tab(name="A")
    b = window.create_tab(name="B")
    first = window.create_tab(TabConfig(name="First", order=0))

    assert a.order == 1
    assert b.order == 2
    assert window.sidebar.ordered_children() == [first.button, a.button, b.button]


def test_sidebar_click_selects_tab(window, pointer):
    window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")

    pointer.click_widget(visuals.button)

    assert window.active_tab is visuals
    assert _visible_pages(window) == [visuals]


def test_tab_select_method(window):
    window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")

    assert visuals.select()
    assert window.active_tab is visuals


def test_element_order_counts_existing_children(window):
    tab = window.create_tab(name="Main")

    section = tab.create_section(name="General")
    toggle = tab.create_toggle(name="Enabled")
    slider = tab.create_slider(name="FOV", order=0)

    assert section.order == 1
    assert toggle.order == 2
    assert slider.order == 0
    assert tab.content.ordered_children() == [slider, section, toggle]


def test_elements_registry(window):
    tab = window.create_tab(name="Main")

    section = tab.create_section(name="General")
    toggle = tab.create_toggle(ToggleConfig(name="Enabled", current_value=True))
    keybind = tab.create_keybind(name="Key")

    assert isinstance(section, SectionTitle)
    assert section.text == "GENERAL"
    assert list(tab.elements) == ["Enabled", "Key"]
    assert tab.elements["Enabled"] is toggle
    assert tab.get_element("Key") is keybind
    assert toggle.get_value() is True


def test_elements_of_hidden_tab_are_not_hit(window, pointer):
    aim = window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")
    aim_toggle = aim.create_toggle(name="Enabled")
    visuals_toggle = visuals.create_toggle(name="Boxes")

    # Both toggles share a slot; only the active page receives the click
    pointer.click_widget(aim_toggle)

    assert aim_toggle.value is True
    assert visuals_toggle.value is False


# -----------------------------------------------------------------------------
# Hiding a page releases its input
# -----------------------------------------------------------------------------

def test_switching_away_blurs_focused_textbox(window, pointer):
    aim = window.create_tab(name="Aim")
    window.create_tab(name="Visuals")
    calls = []
    box = aim.create_textbox(name="Tag", callback=calls.append)

    pointer.click_widget(box)
    pointer.type("ab")
    assert box.editing

    window.select_tab("Visuals")
    pointer.type("xyz")

    assert not box.editing
    assert not box.focused
    assert window.root.focused_widget is None
    assert box.get_value() == "ab"
    assert calls == ["ab"]


def test_switching_away_cancels_listening_keybind(window, pointer):
    aim = window.create_tab(name="Aim")
    visuals = window.create_tab(name="Visuals")
    calls = []
    bind = aim.create_keybind(name="Trigger", current_value="E", callback=calls.append)

    pointer.click_widget(bind)
    assert bind.listening

    visuals.select()
    pointer.key("Q")

    assert not bind.listening
    assert bind.get_value() == "E"
    assert calls == []


def test_switching_away_cancels_slider_drag(window, pointer, bus):
    aim = window.create_tab(name="Aim")
    window.create_tab(name="Visuals")
    calls = []
    slider = aim.create_slider(name="Fov", range=(0, 100), increment=10, callback=calls.append)

    track = slider.absolute_track_rect()
    y = track.y + track.h / 2
    pointer.down(track.x + 0.2 * track.w, y)
    assert slider.dragging
    assert calls == [20]

    window.select_tab("Visuals")

    assert not slider.dragging
    assert bus.connection_count(SIGNAL_POINTER_MOVE) == 0
    assert bus.connection_count(SIGNAL_POINTER_UP) == 1

    pointer.move(track.x + 0.9 * track.w, y)
    pointer.up(track.x + 0.9 * track.w, y)

    assert slider.value == 20
    assert calls == [20]
    assert slider.state is WidgetState.NORMAL


def test_reselecting_active_tab_keeps_focus(window, pointer):
    aim = window.create_tab(name="Aim")
    box = aim.create_textbox(name="Tag")

    pointer.click_widget(box)
    aim.select()
    pointer.type("ok")

    assert box.editing
    assert box.text == "ok"
