"""
Panel Widgets

Window chrome: a draggable title bar and the floating frame that holds it.
"""

from __future__ import annotations
from typing import Callable, Optional, Tuple, TYPE_CHECKING
from dataclasses import replace
import logging

from gamesense.ui.widget import Widget, Event, EventType, DragSession
from gamesense.ui.style import Theme, DEFAULT_THEME, SizeValue
from gamesense.ui.layout import FlexLayout, LayoutDirection, Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext

logger = logging.getLogger(__name__)


class TitleBar(Widget):
    """
    Window title bar.

    Pressing it starts a drag session on the input bus. on_drag receives
    the total cursor delta since the press, not per-move deltas.
    """

    def __init__(
        self,
        title: str = "",
        theme: Theme = DEFAULT_THEME,
        on_drag_start: Callable[[], None] = None,
        on_drag: Callable[[float, float], None] = None,
        on_drag_end: Callable[[], None] = None,
    ):
        self._title = title
        self.theme = theme
        self._on_drag_start = on_drag_start
        self._on_drag = on_drag
        self._on_drag_end = on_drag_end

        # Drag state
        self._drag: Optional[DragSession] = None
        self._drag_start_x = 0.0
        self._drag_start_y = 0.0

        super().__init__(style=theme.title_bar_style(), name="TitleBar")

        self.on(EventType.POINTER_DOWN, self._on_pointer_down)

    @property
    def title(self) -> str:
        return self._title

    @title.setter
    def title(self, value: str):
        self._title = value

    @property
    def dragging(self) -> bool:
        return self._drag is not None and self._drag.active

    def _on_pointer_down(self, event: Event):
        event.stop_propagation()
        root = self.get_input_root()
        if root is None:
            return

        abs_rect = self.get_absolute_rect()
        self._drag_start_x = event.x + (abs_rect.x if abs_rect else 0.0)
        self._drag_start_y = event.y + (abs_rect.y if abs_rect else 0.0)

        self.cancel_drag()
        if self._on_drag_start:
            self._on_drag_start()
        self._drag = root.begin_drag(self._on_pointer_move, self._on_pointer_up)
        logger.debug(f"Title bar drag start [{self._title}] at ({self._drag_start_x}, {self._drag_start_y})")

    def _on_pointer_move(self, x: float, y: float):
        if self._on_drag:
            self._on_drag(x - self._drag_start_x, y - self._drag_start_y)

    def _on_pointer_up(self, x: float, y: float):
        self._drag = None
        logger.debug(f"Title bar drag end [{self._title}]")
        if self._on_drag_end:
            self._on_drag_end()

    def cancel_drag(self):
        if self._drag is not None:
            self._drag.cancel()
            self._drag = None

    def measure(self, constraints: Constraints):
        return constraints.constrain(0, self.theme.title_bar_height)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        style = self.style

        ctx.draw_rect(local_rect, style.background)

        # Bottom border
        ctx.draw_rect(
            Rect(0, local_rect.h - theme.border_size, local_rect.w, theme.border_size),
            theme.border,
        )

        ctx.draw_text_in_rect(
            self._title,
            self._layout.content_rect,
            style.font_color,
            font_size=style.font_size,
            font_id=style.font_id,
            align="left",
            valign="center",
        )

    def destroy(self):
        self.cancel_drag()
        super().destroy()


class WindowFrame(Widget):
    """
    Fixed-size frame placed at an absolute screen position.

    With no position it centers itself in the parent's content area.
    """

    def __init__(
        self,
        size: Tuple[float, float],
        position: Optional[Tuple[float, float]] = None,
        theme: Theme = DEFAULT_THEME,
        name: str = "",
    ):
        w, h = size
        style = replace(
            theme.window_style(),
            width=SizeValue.px(w),
            height=SizeValue.px(h),
        )
        super().__init__(
            style=style,
            flex=FlexLayout(direction=LayoutDirection.COLUMN),
            name=name,
        )
        self._size = (float(w), float(h))
        self._position = position

    @property
    def size(self) -> Tuple[float, float]:
        return self._size

    @property
    def position(self) -> Optional[Tuple[float, float]]:
        return self._position

    def set_position(self, x: float, y: float):
        self._position = (x, y)

    def resolve_position(self, screen: Rect) -> Tuple[float, float]:
        """Top-left corner inside the given screen rect."""
        if self._position is not None:
            return self._position
        w, h = self._size
        return (screen.x + (screen.w - w) / 2, screen.y + (screen.h - h) / 2)

    def measure(self, constraints: Constraints):
        return self._size

    def layout(self, rect: Rect):
        """Ignore the parent's slot; use our own position and size."""
        screen = rect
        if self.parent is not None and self.parent.content_rect is not None:
            screen = self.parent.content_rect
        x, y = self.resolve_position(screen)
        w, h = self._size
        super().layout(Rect(x, y, w, h))
