# gamesense/core/__init__.py
"""Core: input event bus, callback isolation and configuration."""

from .signal import (
    SignalBridge,
    Connection,
    ConnectionScope,
    SignalDebugger,
    safe_call,
    SIGNAL_POINTER_DOWN,
    SIGNAL_POINTER_MOVE,
    SIGNAL_POINTER_UP,
    SIGNAL_KEY_DOWN,
    SIGNAL_KEY_UP,
    SIGNAL_TEXT_INPUT,
    SIGNAL_RESIZE,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_RETURN,
    KEY_ENTER,
    KEY_ESCAPE,
)
from .config import (
    WindowConfig,
    TabConfig,
    SectionConfig,
    ToggleConfig,
    SliderConfig,
    ButtonConfig,
    TextboxConfig,
    KeybindConfig,
    resolve_config,
)

__all__ = [
    'SignalBridge',
    'Connection',
    'ConnectionScope',
    'SignalDebugger',
    'safe_call',
    'SIGNAL_POINTER_DOWN',
    'SIGNAL_POINTER_MOVE',
    'SIGNAL_POINTER_UP',
    'SIGNAL_KEY_DOWN',
    'SIGNAL_KEY_UP',
    'SIGNAL_TEXT_INPUT',
    'SIGNAL_RESIZE',
    'KEY_BACKSPACE',
    'KEY_DELETE',
    'KEY_RETURN',
    'KEY_ENTER',
    'KEY_ESCAPE',
    'WindowConfig',
    'TabConfig',
    'SectionConfig',
    'ToggleConfig',
    'SliderConfig',
    'ButtonConfig',
    'TextboxConfig',
    'KeybindConfig',
    'resolve_config',
]
