"""
UI System

Flat styling with flexbox layout, rendered in GL.

Components:
- style: Flat style dataclass and the gamesense Theme
- layout: Flexbox-inspired layout engine
- widget: Base widget class, RootWidget bound to the input bus, drag sessions
- draw: Batched draw commands
- renderer: moderngl renderer for draw batches
- widgets/: Concrete widget implementations
- tab / window: The gamesense window and its tabs

Example usage:

    from gamesense.core import SignalBridge
    from gamesense.ui import create_window, DrawContext, UIRenderer

    bus = SignalBridge()
    window = create_window(bus, name="Overlay")
    misc = window.create_tab(name="Misc")
    misc.create_button(name="Unload", callback=window.destroy)

    # In render loop:
    ctx = DrawContext(width, height)
    window.draw(ctx)
    ui_renderer.render(ctx.finalize(), width, height)
"""

from gamesense.ui.style import (
    Style, Color, EdgeInsets, Border, SizeValue,
    Theme, DEFAULT_THEME, rgb, hex_to_color,
)
from gamesense.ui.layout import (
    FlexLayout, LayoutDirection, Align, Justify,
    Rect, Constraints,
)
from gamesense.ui.widget import (
    Widget, RootWidget, DragSession, LayoutResult,
    Event, EventType, EventHandler, WidgetState,
)
from gamesense.ui.draw import DrawContext, DrawBatch, DrawQuad, DrawLine, DrawText
from gamesense.ui.renderer import UIRenderer
from gamesense.ui.widgets import (
    Container, Row, Column, Stack,
    TitleBar, WindowFrame,
    Label, SectionTitle,
    Button, TabButton,
    Toggle, Slider, Textbox, Keybind,
)
from gamesense.ui.tab import Tab
from gamesense.ui.window import Window, create_window

__all__ = [
    # Style
    "Style", "Color", "EdgeInsets", "Border", "SizeValue",
    "Theme", "DEFAULT_THEME", "rgb", "hex_to_color",
    # Layout
    "FlexLayout", "LayoutDirection", "Align", "Justify",
    "Rect", "Constraints",
    # Widget
    "Widget", "RootWidget", "DragSession", "LayoutResult",
    "Event", "EventType", "EventHandler", "WidgetState",
    # Draw
    "DrawContext", "DrawBatch", "DrawQuad", "DrawLine", "DrawText", "UIRenderer",
    # Widgets
    "Container", "Row", "Column", "Stack",
    "TitleBar", "WindowFrame",
    "Label", "SectionTitle",
    "Button", "TabButton",
    "Toggle", "Slider", "Textbox", "Keybind",
    # Window
    "Tab", "Window", "create_window",
]
