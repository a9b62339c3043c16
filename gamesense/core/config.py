# gamesense/core/config.py
"""
Construction-time configuration for windows, tabs and controls.

Every field is optional. ``order=None`` appends after the existing
children of the target container.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Optional, Tuple, Any


@dataclass
class WindowConfig:
    name: str = "GamesenseUI"
    size: Tuple[float, float] = (500.0, 350.0)
    position: Optional[Tuple[float, float]] = None  # None = centered on screen
    auto_activate_first_tab: bool = True

    def __post_init__(self):
        w, h = self.size
        if w <= 0 or h <= 0:
            raise ValueError(f"Window size must be positive, got {self.size!r}")


@dataclass
class TabConfig:
    name: str = "Tab"
    icon: Optional[str] = None
    order: Optional[int] = None


@dataclass
class SectionConfig:
    name: str = "Section"
    order: Optional[int] = None


@dataclass
class ToggleConfig:
    name: str = "Toggle"
    current_value: bool = False
    order: Optional[int] = None
    callback: Optional[Callable[[bool], Any]] = None


@dataclass
class SliderConfig:
    name: str = "Slider"
    range: Tuple[float, float] = (0, 100)
    increment: float = 1
    current_value: Optional[float] = None  # None = range minimum
    suffix: str = ""
    order: Optional[int] = None
    callback: Optional[Callable[[float], Any]] = None

    def __post_init__(self):
        lo, hi = self.range
        if lo > hi:
            raise ValueError(f"Slider range minimum exceeds maximum: {self.range!r}")
        if self.increment <= 0:
            raise ValueError(f"Slider increment must be positive, got {self.increment!r}")

    @property
    def min_value(self) -> float:
        return self.range[0]

    @property
    def max_value(self) -> float:
        return self.range[1]


@dataclass
class ButtonConfig:
    name: str = "Button"
    order: Optional[int] = None
    callback: Optional[Callable[[], Any]] = None


@dataclass
class TextboxConfig:
    name: str = "Textbox"
    placeholder: str = ""
    current_value: str = ""
    clear_on_focus_lost: bool = False
    order: Optional[int] = None
    callback: Optional[Callable[[str], Any]] = None


@dataclass
class KeybindConfig:
    name: str = "Keybind"
    current_value: Optional[str] = None
    order: Optional[int] = None
    callback: Optional[Callable[[Optional[str]], Any]] = None


def resolve_config(config_cls, config=None, **fields):
    """
    Return ``config`` if given, otherwise build one from keyword fields.

    Passing both is ambiguous and rejected.
    """
    if config is not None:
        if fields:
            raise TypeError(
                f"Pass either a {config_cls.__name__} or keyword fields, not both"
            )
        if not isinstance(config, config_cls):
            raise TypeError(f"Expected {config_cls.__name__}, got {type(config).__name__}")
        return config
    return config_cls(**fields)
