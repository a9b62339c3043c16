"""
Built-in Widgets

Layout:
- Container: Generic flex container (Row, Column)
- Stack: Overlapping pages (tab contents)
- Panel: Window chrome (TitleBar, WindowFrame)

Controls:
- Label / SectionTitle: Text display and section headers
- Button / TabButton: Clickable buttons
- Toggle: Checkbox
- Slider: Snapped numeric value
- Textbox: Single-line text entry
- Keybind: Key capture
"""

from gamesense.ui.widgets.container import Container, Row, Column, Stack
from gamesense.ui.widgets.panel import TitleBar, WindowFrame
from gamesense.ui.widgets.label import Label, SectionTitle
from gamesense.ui.widgets.button import Button, TabButton
from gamesense.ui.widgets.toggle import Toggle
from gamesense.ui.widgets.slider import (
    Slider,
    snap_value,
    fraction_to_value,
    value_to_fraction,
    format_value,
)
from gamesense.ui.widgets.textbox import Textbox
from gamesense.ui.widgets.keybind import Keybind

__all__ = [
    # Layout
    "Container",
    "Row",
    "Column",
    "Stack",
    "TitleBar",
    "WindowFrame",
    # Controls
    "Label",
    "SectionTitle",
    "Button",
    "TabButton",
    "Toggle",
    "Slider",
    "Textbox",
    "Keybind",
    # Slider value mapping
    "snap_value",
    "fraction_to_value",
    "value_to_fraction",
    "format_value",
]
