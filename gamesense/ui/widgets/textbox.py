"""
Textbox Widget

Single-line text entry with a label above the input box.

Editing happens in a buffer while focused; the buffer becomes the value
when focus is lost, however that happens (Return, Escape, or a click
elsewhere).
"""

from __future__ import annotations
from typing import Callable, Any, Optional, TYPE_CHECKING
import logging

from gamesense.core.signal import (
    safe_call, KEY_BACKSPACE, KEY_RETURN, KEY_ENTER, KEY_ESCAPE,
)
from gamesense.ui.widget import Widget, Event, EventType
from gamesense.ui.style import Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext

logger = logging.getLogger(__name__)


class Textbox(Widget):
    """
    Text entry control.

    While focused:
    - text_input appends to the buffer
    - Backspace deletes the last character
    - Return / Enter / Escape release focus
    On focus loss the buffer is committed and the callback runs; with
    ``clear_on_focus_lost`` both buffer and value are emptied afterwards.
    """

    def __init__(
        self,
        name: str = "Textbox",
        placeholder: str = "",
        value: str = "",
        clear_on_focus_lost: bool = False,
        callback: Optional[Callable[[str], Any]] = None,
        theme: Theme = DEFAULT_THEME,
        order: int = 0,
    ):
        self.theme = theme
        self.placeholder = placeholder
        self.clear_on_focus_lost = clear_on_focus_lost
        self._callback = callback
        self._value = value
        self._text = value

        super().__init__(style=theme.element_style(rows=1.5), name=name, order=order)

        self.on(EventType.CLICK, self._on_click)
        self.on(EventType.TEXT_INPUT, self._on_text_input)
        self.on(EventType.KEY_DOWN, self._on_key_down)
        self.on(EventType.FOCUS, self._on_focus)
        self.on(EventType.BLUR, self._on_blur)

    # -------------------------------------------------------------------------
    # Value
    # -------------------------------------------------------------------------

    @property
    def value(self) -> str:
        return self._value

    @property
    def text(self) -> str:
        """What the box currently shows (the edit buffer)."""
        return self._text

    @property
    def editing(self) -> bool:
        return self.focused

    def get_value(self) -> str:
        return self._value

    def get_text(self) -> str:
        return self._value

    def set_value(self, text: str):
        self._value = text
        self._text = text
        safe_call(self._callback, text, label=f"textbox:{self.name}")

    # -------------------------------------------------------------------------
    # Events
    # -------------------------------------------------------------------------

    def _on_click(self, event: Event):
        event.stop_propagation()

    def _on_focus(self, event: Event):
        self._text = self._value

    def _on_text_input(self, event: Event):
        event.stop_propagation()
        if self.focused and event.text:
            self._text += event.text

    def _on_key_down(self, event: Event):
        if not self.focused:
            return
        event.stop_propagation()
        if event.key == KEY_BACKSPACE:
            self._text = self._text[:-1]
        elif event.key in (KEY_RETURN, KEY_ENTER, KEY_ESCAPE):
            self.release_focus()

    def release_focus(self):
        """Drop keyboard focus, committing the buffer."""
        root = self.get_input_root()
        if root is not None and root.focused_widget is self:
            root.set_focus(None)
        else:
            self.set_focused(False)

    def _on_blur(self, event: Event):
        self._value = self._text
        logger.debug(f"Textbox commit [{self.name}] {self._value!r}")
        safe_call(self._callback, self._value, label=f"textbox:{self.name}")
        if self.clear_on_focus_lost:
            self._text = ""
            self._value = ""

    # -------------------------------------------------------------------------
    # Layout / Draw
    # -------------------------------------------------------------------------

    def input_rect(self, local_rect: Rect) -> Rect:
        h = self.theme.element_height
        return Rect(0, local_rect.h - h, local_rect.w, h)

    def measure(self, constraints: Constraints):
        return constraints.constrain(0, self.theme.element_height * 1.5)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        box = self.input_rect(local_rect)

        ctx.draw_text_in_rect(
            self.name,
            Rect(0, 0, local_rect.w, box.y),
            theme.text,
            font_size=theme.font_size_small,
            font_id=theme.font_secondary,
        )

        ctx.draw_rect(box, theme.frame)
        border = theme.accent if self.focused else theme.border
        ctx.draw_rect_outline(box, border, width=theme.border_size)

        inner = box.inset(0, theme.padding, 0, theme.padding)
        if self._text:
            ctx.draw_text_in_rect(
                self._text,
                inner,
                theme.text,
                font_size=theme.font_size,
                font_id=theme.font_secondary,
            )
        elif self.placeholder:
            ctx.draw_text_in_rect(
                self.placeholder,
                inner,
                theme.text_disabled,
                font_size=theme.font_size,
                font_id=theme.font_secondary,
            )
