"""
Keybind Widget

Label plus a key box. Click the box, then press a key to bind it.
"""

from __future__ import annotations
from typing import Callable, Any, Optional, TYPE_CHECKING
import logging

from gamesense.core.signal import safe_call, KEY_BACKSPACE, KEY_DELETE, KEY_ESCAPE
from gamesense.ui.widget import Widget, Event, EventType
from gamesense.ui.style import Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext

logger = logging.getLogger(__name__)

LISTENING_TEXT = "..."
UNBOUND_TEXT = "None"


class Keybind(Widget):
    """
    Key binding control.

    Click      -> listening (box shows "...")
    key_down   -> bind that key, stop listening
    Escape     -> stop listening, keep the old key
    Backspace / Delete -> unbind (value None)
    Losing focus while listening cancels it.
    """

    def __init__(
        self,
        name: str = "Keybind",
        value: Optional[str] = None,
        callback: Optional[Callable[[Optional[str]], Any]] = None,
        theme: Theme = DEFAULT_THEME,
        order: int = 0,
    ):
        self.theme = theme
        self._value = value
        self._callback = callback
        self._listening = False

        super().__init__(style=theme.element_style(), name=name, order=order)

        self.on(EventType.CLICK, self._on_click)
        self.on(EventType.KEY_DOWN, self._on_key_down)
        self.on(EventType.BLUR, self._on_blur)

    @property
    def value(self) -> Optional[str]:
        return self._value

    @property
    def listening(self) -> bool:
        return self._listening

    @property
    def display_text(self) -> str:
        if self._listening:
            return LISTENING_TEXT
        return self._value if self._value is not None else UNBOUND_TEXT

    def get_value(self) -> Optional[str]:
        return self._value

    def set_value(self, key: Optional[str]):
        self._value = key
        logger.debug(f"Keybind [{self.name}] -> {key!r}")
        safe_call(self._callback, key, label=f"keybind:{self.name}")

    def start_listening(self):
        self._listening = True

    def stop_listening(self):
        self._listening = False

    def _on_click(self, event: Event):
        event.stop_propagation()
        self.start_listening()

    def _on_key_down(self, event: Event):
        if not self._listening:
            return
        event.stop_propagation()
        self._listening = False

        if event.key == KEY_ESCAPE:
            return
        if event.key in (KEY_BACKSPACE, KEY_DELETE):
            self.set_value(None)
        else:
            self.set_value(event.key)

    def _on_blur(self, event: Event):
        self._listening = False

    # -------------------------------------------------------------------------
    # Layout / Draw
    # -------------------------------------------------------------------------

    def key_box_rect(self, local_rect: Rect) -> Rect:
        text_w = len(self.display_text) * self.theme.font_size * 0.6 + self.theme.padding * 2
        w = min(local_rect.w / 2, max(40.0, text_w))
        return Rect(local_rect.w - w, 0, w, local_rect.h)

    def measure(self, constraints: Constraints):
        return constraints.constrain(0, self.theme.element_height)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        box = self.key_box_rect(local_rect)

        ctx.draw_text_in_rect(
            self.name,
            Rect(0, 0, max(0, box.x - theme.padding), local_rect.h),
            theme.text,
            font_size=theme.font_size,
            font_id=theme.font_secondary,
        )

        ctx.draw_rect(box, theme.frame)
        ctx.draw_rect_outline(
            box,
            theme.accent if self._listening else theme.border,
            width=theme.border_size,
        )
        ctx.draw_text_in_rect(
            self.display_text,
            box,
            theme.accent if self._listening else theme.text_disabled,
            font_size=theme.font_size_small,
            font_id=theme.font_primary,
            align="center",
        )
