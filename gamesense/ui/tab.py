"""
Tab

One sidebar button plus one content page. The page is a column of
sections and controls sorted by ``order``; controls are registered by
name in ``elements``.
"""

from __future__ import annotations
from typing import Dict, Optional, TYPE_CHECKING
import logging

from gamesense.core.config import (
    SectionConfig, ToggleConfig, SliderConfig, ButtonConfig,
    TextboxConfig, KeybindConfig, resolve_config,
)
from gamesense.ui.widget import Widget
from gamesense.ui.style import Style, Theme
from gamesense.ui.widgets import (
    Column, TabButton, SectionTitle, Toggle, Slider, Button, Textbox, Keybind,
)

if TYPE_CHECKING:
    from gamesense.ui.window import Window

logger = logging.getLogger(__name__)


class Tab:
    """
    Tab handle returned by Window.create_tab().

    Usage:
        tab = window.create_tab(name="Aimbot")
        tab.create_section(name="General")
        enabled = tab.create_toggle(name="Enabled", callback=on_enabled)
        fov = tab.create_slider(name="FOV", range=(0, 180), increment=5, suffix="deg")
    """

    def __init__(
        self,
        window: Window,
        name: str,
        icon: Optional[str],
        order: int,
        theme: Theme,
    ):
        self.window = window
        self.name = name
        self.icon = icon
        self.order = order
        self.theme = theme

        self.elements: Dict[str, Widget] = {}

        self.button = TabButton(
            text=name,
            icon=icon,
            on_select=self.select,
            theme=theme,
            order=order,
        )
        self.content = Column(
            gap=theme.padding * 2,
            style=Style(pointer_events=False),
            name=f"{name}_Content",
            order=order,
        )
        self.content.set_visible(False)

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def active(self) -> bool:
        return self.window.active_tab is self

    def select(self) -> bool:
        """Make this tab the window's active tab."""
        return self.window.select_tab(self.name)

    def _apply_active(self, active: bool):
        self.button.set_active(active)
        self.content.set_visible(active)

    # -------------------------------------------------------------------------
    # Element Factories
    # -------------------------------------------------------------------------

    def _next_order(self, order: Optional[int]) -> int:
        if order is not None:
            return order
        return len(self.content.children) + 1

    def _register(self, name: str, widget: Widget) -> Widget:
        if name in self.elements:
            logger.debug(f"Tab [{self.name}] element {name!r} replaced in registry")
        self.content.add_child(widget)
        self.elements[name] = widget
        self.window.layout()
        return widget

    def create_section(self, config: SectionConfig = None, **fields) -> SectionTitle:
        """Section header. Not registered in ``elements``."""
        cfg = resolve_config(SectionConfig, config, **fields)
        section = SectionTitle(
            name=cfg.name,
            order=self._next_order(cfg.order),
            theme=self.theme,
        )
        self.content.add_child(section)
        self.window.layout()
        return section

    def create_toggle(self, config: ToggleConfig = None, **fields) -> Toggle:
        cfg = resolve_config(ToggleConfig, config, **fields)
        toggle = Toggle(
            name=cfg.name,
            value=cfg.current_value,
            callback=cfg.callback,
            theme=self.theme,
            order=self._next_order(cfg.order),
        )
        return self._register(cfg.name, toggle)

    def create_slider(self, config: SliderConfig = None, **fields) -> Slider:
        cfg = resolve_config(SliderConfig, config, **fields)
        slider = Slider(
            name=cfg.name,
            min_value=cfg.min_value,
            max_value=cfg.max_value,
            increment=cfg.increment,
            value=cfg.current_value,
            suffix=cfg.suffix,
            callback=cfg.callback,
            theme=self.theme,
            order=self._next_order(cfg.order),
        )
        return self._register(cfg.name, slider)

    def create_button(self, config: ButtonConfig = None, **fields) -> Button:
        cfg = resolve_config(ButtonConfig, config, **fields)
        button = Button(
            text=cfg.name,
            on_click=cfg.callback,
            theme=self.theme,
            name=cfg.name,
            order=self._next_order(cfg.order),
        )
        return self._register(cfg.name, button)

    def create_textbox(self, config: TextboxConfig = None, **fields) -> Textbox:
        cfg = resolve_config(TextboxConfig, config, **fields)
        textbox = Textbox(
            name=cfg.name,
            placeholder=cfg.placeholder,
            value=cfg.current_value,
            clear_on_focus_lost=cfg.clear_on_focus_lost,
            callback=cfg.callback,
            theme=self.theme,
            order=self._next_order(cfg.order),
        )
        return self._register(cfg.name, textbox)

    def create_keybind(self, config: KeybindConfig = None, **fields) -> Keybind:
        cfg = resolve_config(KeybindConfig, config, **fields)
        keybind = Keybind(
            name=cfg.name,
            value=cfg.current_value,
            callback=cfg.callback,
            theme=self.theme,
            order=self._next_order(cfg.order),
        )
        return self._register(cfg.name, keybind)

    def get_element(self, name: str) -> Optional[Widget]:
        return self.elements.get(name)

    def __repr__(self) -> str:
        return f"Tab(name={self.name!r}, order={self.order}, elements={len(self.elements)})"
