"""
Container Widgets

Basic layout containers:
- Container: Generic flex container
- Row / Column: Fixed-direction shorthands
- Stack: Children overlap, each filling the content area
"""

from __future__ import annotations
from typing import List

from gamesense.ui.widget import Widget
from gamesense.ui.style import Style, EdgeInsets, Color
from gamesense.ui.layout import FlexLayout, LayoutDirection, Rect, Align, Constraints


class Container(Widget):
    """
    Generic flex container.

    Just a Widget with convenient constructor for common patterns.
    """

    def __init__(
        self,
        children: List[Widget] = None,
        direction: LayoutDirection = LayoutDirection.COLUMN,
        gap: float = 0,
        padding: float = 0,
        background: Color = None,
        align: Align = Align.STRETCH,
        style: Style = None,
        **kwargs,
    ):
        if style is None:
            style = Style(
                padding=EdgeInsets.all(padding) if isinstance(padding, (int, float)) else padding,
                background=background,
            )

        flex = FlexLayout(direction=direction, gap=gap, align=align)

        super().__init__(
            style=style,
            flex=flex,
            children=children,
            **kwargs,
        )


class Row(Container):
    """Horizontal flex container."""

    def __init__(self, children: List[Widget] = None, gap: float = 0, **kwargs):
        super().__init__(
            children=children,
            direction=LayoutDirection.ROW,
            gap=gap,
            **kwargs,
        )


class Column(Container):
    """Vertical flex container."""

    def __init__(self, children: List[Widget] = None, gap: float = 0, **kwargs):
        super().__init__(
            children=children,
            direction=LayoutDirection.COLUMN,
            gap=gap,
            **kwargs,
        )


class Stack(Widget):
    """
    Overlay container.

    Every child gets the full content rect; visibility decides which one
    is seen and hit. Used for tab pages.
    """

    def layout_children(self, content: Rect):
        for child in self.ordered_children():
            child.layout(content.copy())

    def measure(self, constraints: Constraints):
        """Largest child plus padding."""
        style = self.style
        w, h = 0.0, 0.0
        for child in self._children:
            cw, ch = child.measure(constraints.loosen())
            w, h = max(w, cw), max(h, ch)
        return constraints.constrain(w + style.padding.horizontal, h + style.padding.vertical)
