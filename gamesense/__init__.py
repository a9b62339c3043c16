# gamesense/__init__.py
"""
gamesense - Themed overlay widgets.

A draggable window with a tab sidebar, sections and controls (toggle,
slider, button, textbox, keybind), driven by an injected input bus and
drawn through batched draw commands.

Core components:
- SignalBridge: Input event bus the host feeds
- Window / Tab: Declarative construction of the overlay
- DrawContext / UIRenderer: Draw command batching and GL rendering
"""

from .core import (
    SignalBridge,
    ConnectionScope,
    WindowConfig,
    TabConfig,
    SectionConfig,
    ToggleConfig,
    SliderConfig,
    ButtonConfig,
    TextboxConfig,
    KeybindConfig,
)
from .ui import (
    Window,
    Tab,
    create_window,
    Theme,
    DEFAULT_THEME,
    DrawContext,
    UIRenderer,
)

__version__ = "0.1.0"

__all__ = [
    'SignalBridge',
    'ConnectionScope',
    'WindowConfig',
    'TabConfig',
    'SectionConfig',
    'ToggleConfig',
    'SliderConfig',
    'ButtonConfig',
    'TextboxConfig',
    'KeybindConfig',
    'Window',
    'Tab',
    'create_window',
    'Theme',
    'DEFAULT_THEME',
    'DrawContext',
    'UIRenderer',
]
