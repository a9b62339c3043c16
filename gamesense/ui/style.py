"""
Style System

Flat styles without cascading or selectors, plus the gamesense Theme.
Each widget has its own Style instance.

Design principles:
- No inheritance/cascading (explicit is better)
- Immutable after creation (use replace() for variants)
- All measurements in pixels
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Tuple, Optional
import numpy as np


# =============================================================================
# Color
# =============================================================================

# Color can be:
# - Tuple of 3-4 floats (RGB or RGBA, 0.0-1.0)
# - None (transparent)
Color = Optional[Tuple[float, ...]]


def rgb(r: int, g: int, b: int, a: float = 1.0) -> Color:
    """Color from 0-255 channel values."""
    return (r / 255, g / 255, b / 255, a)


def color_rgba(c: Color) -> Tuple[float, float, float, float]:
    """Normalize color to RGBA tuple."""
    if c is None:
        return (0.0, 0.0, 0.0, 0.0)
    if len(c) == 3:
        return (c[0], c[1], c[2], 1.0)
    return (c[0], c[1], c[2], c[3])


def color_to_array(c: Color) -> np.ndarray:
    """Convert color to numpy array."""
    return np.array(color_rgba(c), dtype=np.float32)


def hex_to_color(hex_str: str) -> Color:
    """Convert hex string to color. Supports #RGB, #RGBA, #RRGGBB, #RRGGBBAA."""
    h = hex_str.lstrip('#')
    if len(h) == 3:
        r, g, b = int(h[0], 16) / 15, int(h[1], 16) / 15, int(h[2], 16) / 15
        return (r, g, b, 1.0)
    elif len(h) == 4:
        r, g, b, a = (int(ch, 16) / 15 for ch in h)
        return (r, g, b, a)
    elif len(h) == 6:
        return rgb(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    elif len(h) == 8:
        return rgb(int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16), int(h[6:8], 16) / 255)
    raise ValueError(f"Invalid hex color: {hex_str}")


# =============================================================================
# Edge Insets (padding, margin)
# =============================================================================

@dataclass(frozen=True)
class EdgeInsets:
    """
    Insets for padding/margin (top, right, bottom, left).
    Follows CSS order: top, right, bottom, left.
    """
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0

    @staticmethod
    def all(value: float) -> EdgeInsets:
        return EdgeInsets(value, value, value, value)

    @staticmethod
    def symmetric(vertical: float = 0.0, horizontal: float = 0.0) -> EdgeInsets:
        return EdgeInsets(vertical, horizontal, vertical, horizontal)

    @property
    def horizontal(self) -> float:
        return self.left + self.right

    @property
    def vertical(self) -> float:
        return self.top + self.bottom


# =============================================================================
# Border
# =============================================================================

@dataclass(frozen=True)
class Border:
    """Border style."""
    width: float = 1.0
    color: Color = (0.5, 0.5, 0.5, 1.0)


# =============================================================================
# Size Value
# =============================================================================

@dataclass(frozen=True)
class SizeValue:
    """
    Size value that can be:
    - Fixed pixels
    - Percentage of parent
    - Auto (content-based)
    - Fill (expand to available)
    """
    value: float = 0.0
    unit: str = "auto"  # "px", "pct", "auto", "fill"

    @staticmethod
    def px(value: float) -> SizeValue:
        return SizeValue(value, "px")

    @staticmethod
    def pct(value: float) -> SizeValue:
        return SizeValue(value, "pct")

    @staticmethod
    def auto() -> SizeValue:
        return SizeValue(0.0, "auto")

    @staticmethod
    def fill() -> SizeValue:
        return SizeValue(0.0, "fill")

    def resolve(self, available: float, content: float = 0.0) -> float:
        """Resolve to actual pixels given available space and content size."""
        if self.unit == "px":
            return self.value
        elif self.unit == "pct":
            return available * (self.value / 100.0)
        elif self.unit == "fill":
            return available
        else:  # auto
            return content

    def is_fixed(self) -> bool:
        return self.unit == "px"

    def is_flexible(self) -> bool:
        return self.unit in ("pct", "fill")


# =============================================================================
# Style
# =============================================================================

@dataclass(frozen=True)
class Style:
    """
    Complete style for a widget.

    Immutable - use dataclasses.replace() for variants.
    """

    # --- Box Model ---
    width: SizeValue = field(default_factory=SizeValue.auto)
    height: SizeValue = field(default_factory=SizeValue.auto)
    min_width: Optional[float] = None
    min_height: Optional[float] = None
    max_width: Optional[float] = None
    max_height: Optional[float] = None

    padding: EdgeInsets = field(default_factory=lambda: EdgeInsets.all(0))

    # --- Visual ---
    background: Color = None
    border: Optional[Border] = None
    clip: bool = False

    # --- Text ---
    font_size: float = 14.0
    font_color: Color = (1.0, 1.0, 1.0, 1.0)
    font_id: str = "default"
    text_align: str = "left"  # "left", "center", "right"
    line_height: float = 1.4

    # --- Flex Item ---
    flex_grow: float = 0.0
    flex_shrink: float = 1.0
    align_self: str = "auto"  # "auto", "start", "end", "center", "stretch"

    # --- Interaction ---
    pointer_events: bool = True  # False to pass through


# =============================================================================
# Theme
# =============================================================================

@dataclass
class Theme:
    """
    Palette, fonts and metrics shared by every widget of a window.
    Not a cascade - widgets read what they need when built.
    """

    # Colors
    background: Color = rgb(18, 18, 18)
    frame: Color = rgb(30, 30, 30)
    accent: Color = rgb(170, 255, 0)
    text: Color = rgb(240, 240, 240)
    text_disabled: Color = rgb(100, 100, 100)
    border: Color = rgb(45, 45, 45)
    tab_active: Color = rgb(45, 45, 45)

    # Fonts
    font_primary: str = "GothamSemibold"
    font_secondary: str = "Gotham"
    font_size: float = 14.0
    font_size_small: float = 12.0

    # Metrics
    padding: float = 5.0
    title_bar_height: float = 25.0
    border_size: float = 1.0
    sidebar_width: float = 60.0
    element_height: float = 20.0
    tab_button_height: float = 40.0
    slider_height: float = 10.0

    def window_style(self) -> Style:
        return Style(
            background=self.background,
            border=Border(width=self.border_size, color=self.border),
            clip=True,
        )

    def title_bar_style(self) -> Style:
        return Style(
            background=self.frame,
            height=SizeValue.px(self.title_bar_height),
            flex_shrink=0.0,
            padding=EdgeInsets.symmetric(0, self.padding),
            font_color=self.text,
            font_size=self.font_size,
            font_id=self.font_primary,
        )

    def sidebar_style(self) -> Style:
        return Style(
            background=self.frame,
            width=SizeValue.px(self.sidebar_width),
            flex_shrink=0.0,
            padding=EdgeInsets.symmetric(self.padding, 0),
            border=Border(width=self.border_size, color=self.border),
        )

    def content_style(self) -> Style:
        return Style(
            background=self.background,
            padding=EdgeInsets.all(self.padding),
            flex_grow=1.0,
            clip=True,
        )

    def tab_button_style(self, active: bool = False) -> Style:
        return Style(
            background=self.tab_active if active else self.frame,
            width=SizeValue.px(self.sidebar_width - self.padding * 2),
            height=SizeValue.px(self.tab_button_height),
            flex_shrink=0.0,
            font_color=self.accent if active else self.text_disabled,
            font_size=self.font_size,
            font_id=self.font_primary,
            text_align="center",
        )

    def element_style(self, rows: float = 1.0) -> Style:
        """Transparent row of ``rows`` element heights."""
        return Style(
            height=SizeValue.px(self.element_height * rows),
            flex_shrink=0.0,
            font_color=self.text,
            font_size=self.font_size,
            font_id=self.font_secondary,
        )

    def button_style(self) -> Style:
        return Style(
            background=self.frame,
            border=Border(width=self.border_size, color=self.border),
            height=SizeValue.px(self.element_height),
            flex_shrink=0.0,
            font_color=self.text,
            font_size=self.font_size,
            font_id=self.font_primary,
            text_align="center",
        )

    def section_style(self) -> Style:
        return Style(
            height=SizeValue.px(self.element_height),
            flex_shrink=0.0,
            font_color=self.text,
            font_size=self.font_size_small,
            font_id=self.font_primary,
        )


# Default gamesense theme
DEFAULT_THEME = Theme()
