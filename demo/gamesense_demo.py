"""
Gamesense Demo

Builds a window with a few tabs and every control type, and forwards
moderngl_window input to the SignalBridge the window listens on.

Controls:
- Drag the title bar to move the window
- Click sidebar buttons to switch tabs
- Textbox: click, type, Return to commit
- Keybind: click, then press a key (Escape cancels, Backspace clears)

Run:
    python demo/gamesense_demo.py
"""

from __future__ import annotations
import sys
import logging
from pathlib import Path

import moderngl_window as mglw

# Ensure project root is on path
_root = Path(__file__).resolve().parent.parent
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from gamesense.core import (
    SignalBridge,
    SignalDebugger,
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
    KEY_ESCAPE,
)
from gamesense.ui import DrawContext, UIRenderer, create_window

logger = logging.getLogger("gamesense.demo")

MOD_SHIFT = 1
MOD_CTRL = 2
MOD_ALT = 4

# moderngl_window key attribute -> bus key name
_SPECIAL_KEYS = {
    "BACKSPACE": KEY_BACKSPACE,
    "DELETE": KEY_DELETE,
    "ENTER": KEY_RETURN,
    "ESCAPE": KEY_ESCAPE,
}


class GamesenseDemo(mglw.WindowConfig):
    gl_version = (3, 3)
    title = "Gamesense Demo"
    window_size = (1280, 720)
    aspect_ratio = None

    @classmethod
    def add_arguments(cls, parser):
        parser.add_argument("--debug-signals", action="store_true", help="Log every bus signal")
        parser.add_argument("--verbose", action="store_true", help="DEBUG level logging")

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        self.ctx.enable(self.ctx.BLEND)
        self.ctx.blend_func = self.ctx.SRC_ALPHA, self.ctx.ONE_MINUS_SRC_ALPHA

        self.bus = SignalBridge()
        if self.argv.debug_signals:
            self.debugger = SignalDebugger(self.bus)
            self.debugger.watch_all()

        self._key_names = self._build_key_names()

        w, h = self.window_size
        self.window = create_window(self.bus, name="gamesense", size=(500, 350), screen_size=(w, h))
        self._build_tabs()

        self.draw_ctx = DrawContext(w, h)
        self.ui_renderer = UIRenderer(self.ctx)

    def _build_tabs(self):
        aim = self.window.create_tab(name="Aim", icon="A")
        aim.create_section(name="General")
        aim.create_toggle(name="Enabled", callback=lambda v: logger.info(f"Aim enabled: {v}"))
        aim.create_slider(
            name="Field of view",
            range=(0, 180),
            increment=5,
            current_value=90,
            suffix="°",
            callback=lambda v: logger.info(f"FOV: {v}"),
        )
        aim.create_keybind(name="Aim key", current_value="E", callback=lambda k: logger.info(f"Aim key: {k}"))

        visuals = self.window.create_tab(name="Visuals", icon="V")
        visuals.create_section(name="ESP")
        visuals.create_toggle(name="Boxes", current_value=True)
        visuals.create_slider(name="Opacity", range=(0, 1), increment=0.05, current_value=0.8)

        misc = self.window.create_tab(name="Misc", icon="M")
        misc.create_section(name="Config")
        misc.create_textbox(
            name="Config name",
            placeholder="default",
            callback=lambda text: logger.info(f"Config name: {text!r}"),
        )
        misc.create_button(name="Print state", callback=self._print_state)

    def _print_state(self):
        for tab in self.window.tabs:
            for name, element in tab.elements.items():
                getter = getattr(element, "get_value", None)
                if getter is not None:
                    logger.info(f"[{tab.name}] {name} = {getter()!r}")

    def _build_key_names(self):
        names = {}
        keys = self.wnd.keys
        for attr in dir(keys):
            if not attr.isupper() or attr.startswith("ACTION_"):
                continue
            code = getattr(keys, attr)
            if attr in _SPECIAL_KEYS:
                names[code] = _SPECIAL_KEYS[attr]
            elif attr.startswith("NUMBER_"):
                names[code] = attr[len("NUMBER_"):]
            elif len(attr) == 1:
                names[code] = attr
            else:
                names.setdefault(code, attr.title())
        return names

    @staticmethod
    def _modifier_flags(modifiers) -> int:
        flags = 0
        if getattr(modifiers, "shift", False):
            flags |= MOD_SHIFT
        if getattr(modifiers, "ctrl", False):
            flags |= MOD_CTRL
        if getattr(modifiers, "alt", False):
            flags |= MOD_ALT
        return flags

    # =========================================================================
    # RENDER
    # =========================================================================

    def on_render(self, t: float, frame_time: float):
        w, h = self.wnd.size
        self.ctx.viewport = (0, 0, w, h)
        self.ctx.clear(0.05, 0.05, 0.05, 1.0)

        if self.window.destroyed:
            return

        self.draw_ctx.clear()
        self.window.draw(self.draw_ctx)
        self.ui_renderer.render(self.draw_ctx.finalize(), w, h)

    # =========================================================================
    # INPUT
    # =========================================================================

    def key_event(self, key, action, modifiers):
        name = self._key_names.get(key)
        if name is None:
            return
        flags = self._modifier_flags(modifiers)
        if action == self.wnd.keys.ACTION_PRESS:
            self.bus.emit(SIGNAL_KEY_DOWN, name, flags)
        elif action == self.wnd.keys.ACTION_RELEASE:
            self.bus.emit(SIGNAL_KEY_UP, name, flags)

    def unicode_char_entered(self, char: str):
        if char.isprintable():
            self.bus.emit(SIGNAL_TEXT_INPUT, char)

    def mouse_position_event(self, x: int, y: int, dx: int, dy: int):
        self.bus.emit(SIGNAL_POINTER_MOVE, x, y)

    def mouse_drag_event(self, x: int, y: int, dx: int, dy: int):
        self.bus.emit(SIGNAL_POINTER_MOVE, x, y)

    def mouse_press_event(self, x: int, y: int, button: int):
        self.bus.emit(SIGNAL_POINTER_DOWN, x, y, button)

    def mouse_release_event(self, x: int, y: int, button: int):
        self.bus.emit(SIGNAL_POINTER_UP, x, y, button)

    def resize(self, width: int, height: int):
        self.draw_ctx = DrawContext(width, height)
        self.bus.emit(SIGNAL_RESIZE, width, height)

    def close(self):
        self.window.destroy()
        self.ui_renderer.release()


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.DEBUG if "--verbose" in sys.argv else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    mglw.run_window_config(GamesenseDemo)
