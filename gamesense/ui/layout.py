"""
Layout Engine

List layout in the flexbox style, enough for sidebars and tab content:
- direction (row/column)
- justify-content (main axis distribution)
- align-items (cross axis alignment)
- gap
- flex-grow/flex-shrink on children
- children ordered by their ``order`` (layout order), stable for ties
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List, Tuple, TYPE_CHECKING
from enum import Enum, auto

if TYPE_CHECKING:
    from gamesense.ui.widget import Widget


# =============================================================================
# Enums
# =============================================================================

class LayoutDirection(Enum):
    ROW = auto()      # Horizontal, left to right
    COLUMN = auto()   # Vertical, top to bottom


class Justify(Enum):
    """Main axis distribution."""
    START = auto()
    END = auto()
    CENTER = auto()
    SPACE_BETWEEN = auto()


class Align(Enum):
    """Cross axis alignment."""
    START = auto()
    END = auto()
    CENTER = auto()
    STRETCH = auto()


# =============================================================================
# Rect
# =============================================================================

@dataclass
class Rect:
    """Rectangle with position and size."""
    x: float = 0.0
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0

    def contains(self, px: float, py: float) -> bool:
        return self.x <= px < (self.x + self.w) and self.y <= py < (self.y + self.h)

    def inset(self, top: float, right: float, bottom: float, left: float) -> Rect:
        """Return new rect inset by the given amounts."""
        return Rect(
            x=self.x + left,
            y=self.y + top,
            w=max(0, self.w - left - right),
            h=max(0, self.h - top - bottom),
        )

    def intersect(self, other: Rect) -> Rect:
        x = max(self.x, other.x)
        y = max(self.y, other.y)
        r = min(self.right, other.right)
        bot = min(self.bottom, other.bottom)
        return Rect(x, y, max(0, r - x), max(0, bot - y))

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def bottom(self) -> float:
        return self.y + self.h

    @property
    def center_x(self) -> float:
        return self.x + self.w / 2

    @property
    def center_y(self) -> float:
        return self.y + self.h / 2

    def copy(self) -> Rect:
        return Rect(self.x, self.y, self.w, self.h)


# =============================================================================
# Size Constraints
# =============================================================================

@dataclass
class Constraints:
    """
    Size constraints for layout.
    Similar to Flutter's BoxConstraints.
    """
    min_w: float = 0.0
    min_h: float = 0.0
    max_w: float = float('inf')
    max_h: float = float('inf')

    def constrain(self, w: float, h: float) -> Tuple[float, float]:
        """Constrain a size to these constraints."""
        return (
            max(self.min_w, min(self.max_w, w)),
            max(self.min_h, min(self.max_h, h)),
        )

    @staticmethod
    def tight(w: float, h: float) -> Constraints:
        """Exact size constraints."""
        return Constraints(w, h, w, h)

    @staticmethod
    def loose(max_w: float, max_h: float) -> Constraints:
        """Maximum size constraints with no minimum."""
        return Constraints(0, 0, max_w, max_h)

    def loosen(self) -> Constraints:
        """Remove minimum constraints."""
        return Constraints(0, 0, self.max_w, self.max_h)


# =============================================================================
# Flex Layout
# =============================================================================

@dataclass
class FlexLayout:
    """
    Flexbox-style layout configuration.

    Attach to a widget to control how its children are laid out.
    """
    direction: LayoutDirection = LayoutDirection.COLUMN
    justify: Justify = Justify.START
    align: Align = Align.STRETCH
    gap: float = 0.0

    def is_row(self) -> bool:
        return self.direction == LayoutDirection.ROW

    def is_column(self) -> bool:
        return self.direction == LayoutDirection.COLUMN


# =============================================================================
# Layout Algorithm
# =============================================================================

_ALIGN_SELF = {
    "start": Align.START,
    "end": Align.END,
    "center": Align.CENTER,
    "stretch": Align.STRETCH,
}


def sort_by_order(children: List[Widget]) -> List[Widget]:
    """Children in layout order; insertion order breaks ties."""
    return sorted(children, key=lambda c: c.order)


def _main_cross(flex: FlexLayout, w: float, h: float) -> Tuple[float, float]:
    """(main, cross) for a width/height pair."""
    return (w, h) if flex.is_row() else (h, w)


def _resolve_main_sizes(
    preferred: List[float],
    grows: List[float],
    shrinks: List[float],
    free: float,
) -> List[float]:
    """Hand positive free space out by flex_grow, take overflow back by flex_shrink * size."""
    sizes = list(preferred)

    if free > 0:
        total = sum(grows)
        if total > 0:
            sizes = [s + free * g / total for s, g in zip(sizes, grows)]
    elif free < 0:
        weights = [k * s for k, s in zip(shrinks, preferred)]
        total = sum(weights)
        if total > 0:
            sizes = [max(0.0, s + free * wt / total) for s, wt in zip(sizes, weights)]

    return sizes


def _justify_offsets(justify: Justify, remaining: float, n: int) -> Tuple[float, float]:
    """(start offset, extra spacing between children) on the main axis."""
    if justify == Justify.END:
        return remaining, 0.0
    if justify == Justify.CENTER:
        return remaining / 2, 0.0
    if justify == Justify.SPACE_BETWEEN and n > 1:
        return 0.0, remaining / (n - 1)
    return 0.0, 0.0


def _cross_placement(align: Align, cross_size: float, child_cross: float) -> Tuple[float, float]:
    """(offset, size) on the cross axis."""
    if align == Align.START:
        return 0.0, child_cross
    if align == Align.END:
        return cross_size - child_cross, child_cross
    if align == Align.CENTER:
        return (cross_size - child_cross) / 2, child_cross
    return 0.0, cross_size


def layout_flex(
    children: List[Widget],
    available: Rect,
    flex: FlexLayout,
) -> List[Rect]:
    """
    Place children inside ``available``.

    Returns one Rect per child, in the order given. Children are measured
    against loose constraints, then grown or shrunk along the main axis,
    offset by ``justify`` and placed on the cross axis by ``align`` (or
    the child's ``align_self``).
    """
    if not children:
        return []

    main_size, cross_size = _main_cross(flex, available.w, available.h)
    loose = Constraints.loose(available.w, available.h)

    preferred: List[float] = []
    crosses: List[float] = []
    for child in children:
        main, cross = _main_cross(flex, *child.measure(loose))
        preferred.append(main)
        crosses.append(cross)

    n = len(children)
    gaps = flex.gap * (n - 1)
    sizes = _resolve_main_sizes(
        preferred,
        [c.style.flex_grow for c in children],
        [c.style.flex_shrink for c in children],
        main_size - gaps - sum(preferred),
    )

    pos, spacing = _justify_offsets(flex.justify, main_size - gaps - sum(sizes), n)

    rects: List[Rect] = []
    for child, main, cross in zip(children, sizes, crosses):
        align = _ALIGN_SELF.get(child.style.align_self, flex.align)
        cross_pos, cross_len = _cross_placement(align, cross_size, cross)
        if flex.is_row():
            rects.append(Rect(available.x + pos, available.y + cross_pos, main, cross_len))
        else:
            rects.append(Rect(available.x + cross_pos, available.y + pos, cross_len, main))
        pos += main + flex.gap + spacing

    return rects


def measure_flex(
    children: List[Widget],
    flex: FlexLayout,
    constraints: Constraints,
) -> Tuple[float, float]:
    """Size that fits all children: main axis summed with gaps, cross axis maxed."""
    if not children:
        return (0.0, 0.0)

    inner = constraints.loosen()
    main_total = flex.gap * (len(children) - 1)
    cross_max = 0.0

    for child in children:
        main, cross = _main_cross(flex, *child.measure(inner))
        main_total += main
        cross_max = max(cross_max, cross)

    if flex.is_row():
        return constraints.constrain(main_total, cross_max)
    return constraints.constrain(cross_max, main_total)
