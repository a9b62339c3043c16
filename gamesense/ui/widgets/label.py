"""
Label Widgets

Text display with styling, and the uppercase section header.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
from dataclasses import replace

from gamesense.ui.widget import Widget
from gamesense.ui.style import Style, Color, Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext


class Label(Widget):
    """
    Text label.

    Displays text with configurable style.
    Does not wrap text (single line).
    """

    def __init__(
        self,
        text: str = "",
        color: Color = (1.0, 1.0, 1.0, 1.0),
        font_size: float = 14.0,
        align: str = "left",
        style: Style = None,
        **kwargs,
    ):
        self._text = text

        if style is None:
            style = Style(
                font_color=color,
                font_size=font_size,
                text_align=align,
            )

        super().__init__(style=style, **kwargs)

    @property
    def text(self) -> str:
        return self._text

    @text.setter
    def text(self, value: str):
        self._text = value

    def measure(self, constraints: Constraints):
        """Measure text size."""
        # ~0.6 * font_size per character; no font metrics available
        char_width = self.style.font_size * 0.6
        text_width = len(self._text) * char_width
        text_height = self.style.font_size * self.style.line_height

        width = text_width + self.style.padding.horizontal
        height = text_height + self.style.padding.vertical

        if self.style.width.is_fixed():
            width = self.style.width.resolve(constraints.max_w)
        if self.style.height.is_fixed():
            height = self.style.height.resolve(constraints.max_h)

        return constraints.constrain(width, height)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        style = self.style

        if style.background is not None:
            ctx.draw_rect(local_rect, style.background)

        if self._text:
            content = self._layout.content_rect
            ctx.draw_text_in_rect(
                self._text,
                content,
                style.font_color,
                font_size=style.font_size,
                font_id=style.font_id,
                align=style.text_align,
                valign="center",
            )


class SectionTitle(Label):
    """
    Section header: uppercase title with a separator line above it.
    """

    def __init__(self, name: str = "Section", order: int = 0, theme: Theme = DEFAULT_THEME):
        self.theme = theme
        super().__init__(
            text=name.upper(),
            style=replace(theme.section_style(), pointer_events=False),
            name=name,
            order=order,
        )

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        # Separator sits just above the title text
        line_y = -theme.padding / 2
        ctx.draw_rect(
            Rect(0, line_y, local_rect.w, theme.border_size),
            theme.border,
        )
        super().draw_self(ctx, local_rect)
