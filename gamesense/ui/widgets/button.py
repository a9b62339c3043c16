"""
Button Widgets

Clickable button with press feedback, and the sidebar tab button.
"""

from __future__ import annotations
from typing import Optional, Callable, Any, TYPE_CHECKING
from dataclasses import replace

from gamesense.core.signal import safe_call
from gamesense.ui.widget import Widget, WidgetState, Event, EventType
from gamesense.ui.style import Style, Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext


class Button(Widget):
    """
    Clickable button.

    Features:
    - Text label
    - Press visual feedback
    - Disabled state
    - Callback isolated from widget state (see safe_call)
    """

    def __init__(
        self,
        text: str = "",
        on_click: Callable[[], Any] = None,
        style: Style = None,
        pressed_style: Style = None,
        disabled_style: Style = None,
        theme: Theme = DEFAULT_THEME,
        name: str = "",
        order: int = 0,
    ):
        self._text = text
        self._callback = on_click
        self.theme = theme

        if style is None:
            style = theme.button_style()

        self._base_style = style
        self._pressed_style = pressed_style or self._make_pressed_style(style)
        self._disabled_style = disabled_style or self._make_disabled_style(style)

        super().__init__(style=style, name=name or text, order=order)

        self.on(EventType.CLICK, self._handle_click)

    def _make_pressed_style(self, base: Style) -> Style:
        """Generate pressed style from base."""
        if base.background:
            r, g, b, a = base.background
            pressed_bg = (
                min(1.0, r + 0.08),
                min(1.0, g + 0.08),
                min(1.0, b + 0.08),
                a,
            )
            return replace(base, background=pressed_bg)
        return base

    def _make_disabled_style(self, base: Style) -> Style:
        """Generate disabled style from base."""
        return replace(base, font_color=self.theme.text_disabled)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str):
        self._text = value

    @property
    def current_style(self) -> Style:
        """Get style based on current state."""
        state = self.state
        if state == WidgetState.DISABLED:
            return self._disabled_style
        elif state == WidgetState.PRESSED:
            return self._pressed_style
        return self._base_style

    def _handle_click(self, event: Event):
        event.stop_propagation()
        self.click()

    def click(self):
        """Invoke the callback as if clicked."""
        if not self.enabled:
            return
        safe_call(self._callback, label=f"button:{self.name}")

    def measure(self, constraints: Constraints):
        """Measure button size based on text."""
        style = self._base_style

        char_width = style.font_size * 0.6
        width = len(self._text) * char_width + style.padding.horizontal
        height = style.font_size * style.line_height + style.padding.vertical

        if style.width.is_fixed():
            width = style.width.resolve(constraints.max_w)
        if style.height.is_fixed():
            height = style.height.resolve(constraints.max_h)

        return constraints.constrain(width, height)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        style = self.current_style

        if style.background:
            ctx.draw_rect(local_rect, style.background)

        if style.border and style.border.width > 0:
            ctx.draw_rect_outline(
                local_rect,
                style.border.color,
                width=style.border.width,
            )

        if self._text:
            ctx.draw_text_in_rect(
                self._text,
                self._layout.content_rect,
                style.font_color,
                font_size=style.font_size,
                font_id=style.font_id,
                align="center",
                valign="center",
            )


class TabButton(Button):
    """
    Sidebar selector for one tab.

    Inactive: frame background, disabled text color.
    Active: raised background, accent text color.
    """

    def __init__(
        self,
        text: str = "",
        icon: Optional[str] = None,
        on_select: Callable[[], Any] = None,
        theme: Theme = DEFAULT_THEME,
        order: int = 0,
    ):
        self._icon = icon
        self._active = False
        super().__init__(
            text=text,
            on_click=on_select,
            style=theme.tab_button_style(active=False),
            theme=theme,
            name=text,
            order=order,
        )

    @property
    def icon(self) -> Optional[str]:
        return self._icon

    @property
    def active(self) -> bool:
        return self._active

    def set_active(self, active: bool):
        """Apply the active or inactive look."""
        self._active = active
        style = self.theme.tab_button_style(active=active)
        self.style = style
        self._base_style = style
        self._pressed_style = style
        self._disabled_style = self._make_disabled_style(style)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        super().draw_self(ctx, local_rect)
        if self._icon:
            # Icon glyph in the top-left corner until image support exists
            style = self.current_style
            ctx.draw_text(
                self._icon[:2],
                2,
                2,
                style.font_color,
                font_size=style.font_size * 0.7,
                font_id=style.font_id,
            )
