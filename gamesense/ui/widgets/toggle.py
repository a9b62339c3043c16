"""
Toggle Widget

Checkbox with a label; the whole row is the click area.
"""

from __future__ import annotations
from typing import Callable, Any, Optional, TYPE_CHECKING

from gamesense.core.signal import safe_call
from gamesense.ui.widget import Widget, Event, EventType
from gamesense.ui.style import Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext


class Toggle(Widget):
    """
    Boolean control.

    Clicking flips the value. set_value() always stores first and then
    runs the callback, so a failing callback cannot lose the update.
    """

    def __init__(
        self,
        name: str = "Toggle",
        value: bool = False,
        callback: Optional[Callable[[bool], Any]] = None,
        theme: Theme = DEFAULT_THEME,
        order: int = 0,
    ):
        self.theme = theme
        self._value = bool(value)
        self._callback = callback

        super().__init__(style=theme.element_style(), name=name, order=order)

        self.on(EventType.CLICK, self._handle_click)

    @property
    def value(self) -> bool:
        return self._value

    def get_value(self) -> bool:
        return self._value

    def set_value(self, value: bool):
        self._value = bool(value)
        safe_call(self._callback, self._value, label=f"toggle:{self.name}")

    def _handle_click(self, event: Event):
        event.stop_propagation()
        self.set_value(not self._value)

    # -------------------------------------------------------------------------
    # Geometry
    # -------------------------------------------------------------------------

    @property
    def checkbox_size(self) -> float:
        return self.theme.element_height * 0.6

    def checkbox_rect(self, local_rect: Rect) -> Rect:
        size = self.checkbox_size
        return Rect(0, (local_rect.h - size) / 2, size, size)

    def measure(self, constraints: Constraints):
        # Width comes from the column stretching us
        return constraints.constrain(0, self.theme.element_height)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        box = self.checkbox_rect(local_rect)

        ctx.draw_rect(box, theme.frame)
        ctx.draw_rect_outline(box, theme.border, width=theme.border_size)
        if self._value:
            ctx.draw_rect(box.inset(2, 2, 2, 2), theme.accent)

        label_x = self.checkbox_size + theme.padding
        ctx.draw_text_in_rect(
            self.name,
            Rect(label_x, 0, max(0, local_rect.w - label_x - theme.padding), local_rect.h),
            theme.text if self.enabled else theme.text_disabled,
            font_size=theme.font_size,
            font_id=theme.font_secondary,
        )
