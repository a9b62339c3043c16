import logging

from gamesense.core.signal import KEY_BACKSPACE, KEY_DELETE, KEY_ESCAPE, KEY_RETURN
from gamesense.ui.widget import Event, EventType
from gamesense.ui.widgets import Toggle, Button, Textbox, Keybind, SectionTitle


# -----------------------------------------------------------------------------
# Toggle
# -----------------------------------------------------------------------------

def test_toggle_click_flips_and_notifies(window, pointer):
    calls = []
    toggle = window.create_tab(name="Main").create_toggle(name="Enabled", callback=calls.append)

    pointer.click_widget(toggle)
    assert toggle.get_value() is True
    pointer.click_widget(toggle)
    assert toggle.get_value() is False

    assert calls == [True, False]


def test_toggle_set_value():
    calls = []
    toggle = Toggle(name="Enabled", callback=calls.append)
    toggle.set_value(True)
    assert toggle.value is True
    assert calls == [True]


def test_toggle_raising_callback_keeps_value(caplog):
    def broken(value):
        raise RuntimeError("nope")

    toggle = Toggle(name="Enabled", callback=broken)
    with caplog.at_level(logging.ERROR):
        toggle.set_value(True)

    assert toggle.value is True
    assert "toggle:Enabled" in caplog.text


def test_toggle_release_outside_is_not_a_click(window, pointer):
    toggle = window.create_tab(name="Main").create_toggle(name="Enabled")
    rect = toggle.get_absolute_rect()

    pointer.down(rect.x + 2, rect.y + 2)
    pointer.up(5, 5)

    assert toggle.value is False


# -----------------------------------------------------------------------------
# Button
# -----------------------------------------------------------------------------

def test_button_click_invokes_callback(window, pointer):
    clicks = []
    button = window.create_tab(name="Main").create_button(name="Save", callback=lambda: clicks.append(1))

    pointer.click_widget(button)

    assert clicks == [1]


def test_disabled_button_ignores_clicks(window, pointer):
    clicks = []
    button = window.create_tab(name="Main").create_button(name="Save", callback=lambda: clicks.append(1))
    button.set_enabled(False)

    pointer.click_widget(button)
    button.click()

    assert clicks == []


def test_button_raising_callback_is_contained(caplog):
    def broken():
        raise ValueError("bad")

    button = Button(text="Boom", on_click=broken)
    with caplog.at_level(logging.ERROR):
        button.click()

    assert "button:Boom" in caplog.text


# -----------------------------------------------------------------------------
# Section
# -----------------------------------------------------------------------------

def test_section_title_is_uppercase_and_passive():
    section = SectionTitle(name="Anti Aim")
    assert section.text == "ANTI AIM"
    assert section.name == "Anti Aim"
    assert section.style.pointer_events is False


# -----------------------------------------------------------------------------
# Textbox
# -----------------------------------------------------------------------------

def test_textbox_typing_and_return_commits(window, pointer):
    calls = []
    box = window.create_tab(name="Main").create_textbox(name="Config", callback=calls.append)

    pointer.click_widget(box)
    assert box.editing
    pointer.type("abcd")
    pointer.key(KEY_BACKSPACE)

    assert box.text == "abc"
    assert box.get_value() == ""
    assert calls == []

    pointer.key(KEY_RETURN)

    assert not box.editing
    assert box.get_value() == "abc"
    assert box.get_text() == "abc"
    assert calls == ["abc"]


def test_textbox_click_elsewhere_commits(window, pointer):
    calls = []
    box = window.create_tab(name="Main").create_textbox(name="Config", current_value="x", callback=calls.append)

    pointer.click_widget(box)
    pointer.type("y")
    pointer.click(2, 2)

    assert box.value == "xy"
    assert calls == ["xy"]


def test_textbox_escape_also_commits(window, pointer):
    calls = []
    box = window.create_tab(name="Main").create_textbox(name="Config", callback=calls.append)

    pointer.click_widget(box)
    pointer.type("hi")
    pointer.key(KEY_ESCAPE)

    assert box.value == "hi"
    assert calls == ["hi"]


def test_textbox_clear_on_focus_lost(window, pointer):
    calls = []
    box = window.create_tab(name="Main").create_textbox(
        name="Chat", clear_on_focus_lost=True, callback=calls.append,
    )

    pointer.click_widget(box)
    pointer.type("gg")
    pointer.key(KEY_RETURN)

    assert calls == ["gg"]
    assert box.value == ""
    assert box.text == ""


def test_textbox_ignores_typing_without_focus(window, pointer):
    box = window.create_tab(name="Main").create_textbox(name="Config")
    pointer.type("zzz")
    assert box.text == ""


def test_textbox_set_value():
    calls = []
    box = Textbox(name="Config", placeholder="name", callback=calls.append)
    box.set_value("legit")
    assert box.get_value() == "legit"
    assert box.text == "legit"
    assert calls == ["legit"]


# -----------------------------------------------------------------------------
# Keybind
# -----------------------------------------------------------------------------

def test_keybind_listens_then_binds(window, pointer):
    calls = []
    bind = window.create_tab(name="Main").create_keybind(name="Trigger", callback=calls.append)
    assert bind.display_text == "None"

    pointer.click_widget(bind)
    assert bind.listening
    assert bind.display_text == "..."

    pointer.key("F")

    assert not bind.listening
    assert bind.get_value() == "F"
    assert bind.display_text == "F"
    assert calls == ["F"]


def test_keybind_escape_cancels(window, pointer):
    calls = []
    bind = window.create_tab(name="Main").create_keybind(name="Trigger", current_value="E", callback=calls.append)

    pointer.click_widget(bind)
    pointer.key(KEY_ESCAPE)

    assert not bind.listening
    assert bind.value == "E"
    assert calls == []


def test_keybind_backspace_and_delete_unbind(window, pointer):
    calls = []
    bind = window.create_tab(name="Main").create_keybind(name="Trigger", current_value="E", callback=calls.append)

    pointer.click_widget(bind)
    pointer.key(KEY_BACKSPACE)
    assert bind.value is None

    bind.set_value("Q")
    pointer.click_widget(bind)
    pointer.key(KEY_DELETE)
    assert bind.value is None

    assert calls == [None, "Q", None]


def test_keybind_focus_loss_cancels_listening(window, pointer):
    bind = window.create_tab(name="Main").create_keybind(name="Trigger", current_value="E")

    pointer.click_widget(bind)
    pointer.click(2, 2)
    pointer.key("R")

    assert not bind.listening
    assert bind.value == "E"


def test_keybind_ignores_keys_when_not_listening():
    bind = Keybind(name="Trigger", value="E")
    bind.set_focused(True)
    bind.handle_event(Event(EventType.KEY_DOWN, key="X"))
    assert bind.value == "E"
