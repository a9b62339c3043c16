"""
Draw Context

Widgets emit quads, outline lines and text into a DrawBatch; the
renderer uploads quads and lines, and text waits for a font atlas.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from gamesense.ui.layout import Rect
from gamesense.ui.style import Color, color_rgba

RGBA = Tuple[float, float, float, float]


# =============================================================================
# Draw Commands
# =============================================================================

@dataclass
class DrawQuad:
    """Filled rectangle in screen pixels."""
    x: float
    y: float
    w: float
    h: float
    color: RGBA
    z_index: int = 0


@dataclass
class DrawLine:
    x0: float
    y0: float
    x1: float
    y1: float
    color: RGBA
    width: float = 1.0
    z_index: int = 0


@dataclass
class DrawText:
    """Text anchored at (x, y); ``align`` says which edge x refers to."""
    text: str
    x: float
    y: float
    color: RGBA
    font_size: float = 14.0
    font_id: str = "default"
    align: str = "left"  # left, center, right
    z_index: int = 0


# =============================================================================
# Draw Batch
# =============================================================================

@dataclass
class DrawBatch:
    """
    One frame of draw commands.

    Commands carry the z-index they were issued with; finalize() sorts
    each list so the renderer can draw them back to front.
    """
    quads: List[DrawQuad] = field(default_factory=list)
    lines: List[DrawLine] = field(default_factory=list)
    texts: List[DrawText] = field(default_factory=list)

    def finalize(self) -> DrawBatch:
        self.quads.sort(key=lambda q: q.z_index)
        self.lines.sort(key=lambda ln: ln.z_index)
        # Group runs of the same font within a layer
        self.texts.sort(key=lambda t: (t.z_index, t.font_id))
        return self

    def clear(self):
        self.quads.clear()
        self.lines.clear()
        self.texts.clear()

    def text_strings(self) -> List[str]:
        """All text payloads, in draw order."""
        return [t.text for t in self.texts]

    @property
    def quad_count(self) -> int:
        return len(self.quads)


# =============================================================================
# Draw Context
# =============================================================================

class DrawContext:
    """
    Collects draw commands while a widget tree draws itself.

    Widgets draw in local coordinates. push_offset() moves the origin to a
    child's position and push_clip() narrows the visible area; every
    primitive is translated to screen space, culled when it falls wholly
    outside the current clip, and stamped with the next z-index.
    """

    def __init__(self, window_width: int, window_height: int):
        self.window_width = window_width
        self.window_height = window_height
        self.batch = DrawBatch()

        self._origin = (0.0, 0.0)
        self._origins: List[Tuple[float, float]] = []
        self._clip: Optional[Rect] = None
        self._clips: List[Optional[Rect]] = []
        self._z_index = 0

    # -------------------------------------------------------------------------
    # Origin / Clip Stacks
    # -------------------------------------------------------------------------

    def push_offset(self, x: float, y: float):
        self._origins.append(self._origin)
        ox, oy = self._origin
        self._origin = (ox + x, oy + y)

    def pop_offset(self):
        if self._origins:
            self._origin = self._origins.pop()

    def push_clip(self, rect: Rect):
        """Intersect the clip with ``rect`` (local coordinates)."""
        clip = self._to_screen(rect)
        if self._clip is not None:
            clip = self._clip.intersect(clip)
        self._clips.append(self._clip)
        self._clip = clip

    def pop_clip(self):
        if self._clips:
            self._clip = self._clips.pop()

    def _to_screen(self, rect: Rect) -> Rect:
        ox, oy = self._origin
        return Rect(rect.x + ox, rect.y + oy, rect.w, rect.h)

    def _culled(self, screen_rect: Rect) -> bool:
        """True when screen_rect lies entirely outside the clip."""
        c = self._clip
        if c is None:
            return False
        return (
            screen_rect.right <= c.x or screen_rect.x >= c.right
            or screen_rect.bottom <= c.y or screen_rect.y >= c.bottom
        )

    def _next_z(self) -> int:
        z = self._z_index
        self._z_index += 1
        return z

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def draw_rect(self, rect: Rect, color: Color):
        if rect.w <= 0 or rect.h <= 0:
            return
        s = self._to_screen(rect)
        if self._culled(s):
            return
        self.batch.quads.append(
            DrawQuad(s.x, s.y, s.w, s.h, color_rgba(color), z_index=self._next_z())
        )

    def draw_rect_outline(self, rect: Rect, color: Color, width: float = 1.0):
        """Four edge lines sharing one z-index. Corners are square."""
        s = self._to_screen(rect)
        if self._culled(s):
            return
        c = color_rgba(color)
        z = self._next_z()
        corners = [(s.x, s.y), (s.right, s.y), (s.right, s.bottom), (s.x, s.bottom)]
        for (x0, y0), (x1, y1) in zip(corners, corners[1:] + corners[:1]):
            self.batch.lines.append(DrawLine(x0, y0, x1, y1, c, width, z))

    def draw_text(
        self,
        text: str,
        x: float,
        y: float,
        color: Color,
        font_size: float = 14.0,
        font_id: str = "default",
        align: str = "left",
    ):
        ox, oy = self._origin
        self.batch.texts.append(DrawText(
            text,
            x + ox,
            y + oy,
            color_rgba(color),
            font_size=font_size,
            font_id=font_id,
            align=align,
            z_index=self._next_z(),
        ))

    def draw_text_in_rect(
        self,
        text: str,
        rect: Rect,
        color: Color,
        font_size: float = 14.0,
        font_id: str = "default",
        align: str = "left",
        valign: str = "center",
    ):
        """Single line of text aligned inside ``rect``; skipped when rect is clipped away."""
        if self._culled(self._to_screen(rect)):
            return

        x = {"center": rect.center_x, "right": rect.right}.get(align, rect.x)
        if valign == "center":
            y = rect.center_y - font_size / 2
        elif valign == "bottom":
            y = rect.bottom - font_size
        else:
            y = rect.y

        self.draw_text(text, x, y, color, font_size, font_id, align)

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def finalize(self) -> DrawBatch:
        return self.batch.finalize()

    def clear(self):
        """Reset for the next frame."""
        self.batch.clear()
        self._z_index = 0
        self._origin = (0.0, 0.0)
        self._origins.clear()
        self._clip = None
        self._clips.clear()
