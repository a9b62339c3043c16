import pytest

from gamesense.core.signal import (
    SignalBridge,
    SIGNAL_POINTER_DOWN,
    SIGNAL_POINTER_MOVE,
    SIGNAL_POINTER_UP,
    SIGNAL_KEY_DOWN,
    SIGNAL_TEXT_INPUT,
)
from gamesense.ui.window import Window


class Pointer:
    """Drives the bus the way a host input loop would."""

    def __init__(self, bus: SignalBridge):
        self.bus = bus

    def down(self, x, y, button=1):
        self.bus.emit(SIGNAL_POINTER_DOWN, x, y, button)

    def move(self, x, y):
        self.bus.emit(SIGNAL_POINTER_MOVE, x, y)

    def up(self, x, y, button=1):
        self.bus.emit(SIGNAL_POINTER_UP, x, y, button)

    def click(self, x, y):
        self.down(x, y)
        self.up(x, y)

    def click_widget(self, widget):
        x, y = center_of(widget)
        self.click(x, y)

    def key(self, name, modifiers=0):
        self.bus.emit(SIGNAL_KEY_DOWN, name, modifiers)

    def type(self, text):
        for ch in text:
            self.bus.emit(SIGNAL_TEXT_INPUT, ch)


def center_of(widget):
    rect = widget.get_absolute_rect()
    assert rect is not None, f"{widget!r} has not been laid out"
    return (rect.x + rect.w / 2, rect.y + rect.h / 2)


@pytest.fixture
def bus():
    return SignalBridge()


@pytest.fixture
def pointer(bus):
    return Pointer(bus)


@pytest.fixture
def window(bus):
    win = Window(bus)
    yield win
    win.destroy()
