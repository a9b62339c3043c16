"""
Window

Top-level gamesense window bound to an input bus.

Widget tree:

    RootWidget (screen, pass-through)
    └── WindowFrame (absolute position, fixed size, clips)
        ├── TitleBar (drag to move)
        └── Row (body)
            ├── Column (sidebar: one TabButton per tab)
            └── Stack (content: one page per tab, only the active one visible)

Example:

    bus = SignalBridge()
    with Window(bus, name="Overlay", size=(500, 350)) as window:
        visuals = window.create_tab(name="Visuals")
        visuals.create_section(name="ESP")
        visuals.create_toggle(name="Boxes", callback=set_boxes)

        # per frame
        ctx.clear()
        window.draw(ctx)
        renderer.render(ctx.finalize(), *window.screen_size)
"""

from __future__ import annotations
from typing import Dict, List, Optional, Tuple
import logging

from gamesense.core.signal import SignalBridge
from gamesense.core.config import WindowConfig, TabConfig, resolve_config
from gamesense.ui.widget import RootWidget
from gamesense.ui.style import Style, Theme, DEFAULT_THEME
from gamesense.ui.layout import Align, Rect
from gamesense.ui.draw import DrawContext
from gamesense.ui.tab import Tab
from gamesense.ui.widgets import Row, Column, Stack, TitleBar, WindowFrame

logger = logging.getLogger(__name__)


class Window:
    """
    Window with a title bar, a tab sidebar and a content area.

    Tab activation:
    - at most one tab is active
    - selecting a tab first restores the previous tab's button and hides
      its page, then marks the new button and shows its page
    - selecting an unknown name logs a warning and changes nothing
    """

    def __init__(
        self,
        bus: SignalBridge,
        config: WindowConfig = None,
        *,
        screen_size: Tuple[int, int] = (1280, 720),
        theme: Theme = DEFAULT_THEME,
        **fields,
    ):
        self.config = resolve_config(WindowConfig, config, **fields)
        self.bus = bus
        self.theme = theme

        self._tabs: Dict[str, Tab] = {}
        self._active_tab: Optional[Tab] = None
        self._drag_origin: Tuple[float, float] = (0.0, 0.0)
        self._destroyed = False

        screen_w, screen_h = screen_size
        self.root = RootWidget(
            bus,
            screen_w,
            screen_h,
            style=Style(pointer_events=False),
            name=f"{self.config.name}_Root",
        )

        self.frame = WindowFrame(
            size=self.config.size,
            position=self.config.position,
            theme=theme,
            name=self.config.name,
        )
        self.title_bar = TitleBar(
            title=self.config.name,
            theme=theme,
            on_drag_start=self._on_drag_start,
            on_drag=self._on_drag,
        )
        self.sidebar = Column(
            gap=theme.padding,
            align=Align.CENTER,
            style=theme.sidebar_style(),
            name="Sidebar",
        )
        self.content = Stack(style=theme.content_style(), name="Content")
        self.body = Row(
            children=[self.sidebar, self.content],
            style=Style(flex_grow=1.0, pointer_events=False),
            name="Body",
        )

        self.frame.add_child(self.title_bar)
        self.frame.add_child(self.body)
        self.root.add_child(self.frame)

        self.layout()
        logger.debug(f"Window created [{self.config.name}] size={self.config.size}")

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def title(self) -> str:
        return self.title_bar.title

    @property
    def size(self) -> Tuple[float, float]:
        return self.frame.size

    @property
    def screen_size(self) -> Tuple[int, int]:
        return self.root.size

    @property
    def position(self) -> Tuple[float, float]:
        """Current top-left corner on screen."""
        rect = self.frame.rect
        if rect is not None:
            return (rect.x, rect.y)
        w, h = self.root.size
        return self.frame.resolve_position(Rect(0, 0, w, h))

    @property
    def active_tab(self) -> Optional[Tab]:
        return self._active_tab

    @property
    def tabs(self) -> List[Tab]:
        """Tabs in registration order."""
        return list(self._tabs.values())

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # -------------------------------------------------------------------------
    # Tabs
    # -------------------------------------------------------------------------

    def create_tab(self, config: TabConfig = None, **fields) -> Tab:
        """
        Add a tab button to the sidebar and a page to the content area.

        A repeated name returns the existing tab unchanged.
        """
        cfg = resolve_config(TabConfig, config, **fields)

        existing = self._tabs.get(cfg.name)
        if existing is not None:
            logger.warning(f"Tab {cfg.name!r} already exists in [{self.title}]; returning it")
            return existing

        order = cfg.order if cfg.order is not None else len(self._tabs) + 1
        tab = Tab(self, cfg.name, cfg.icon, order, self.theme)
        self._tabs[cfg.name] = tab
        self.sidebar.add_child(tab.button)
        self.content.add_child(tab.content)

        if self.config.auto_activate_first_tab and len(self._tabs) == 1:
            self.select_tab(cfg.name)

        self.layout()
        return tab

    def get_tab(self, name: str) -> Optional[Tab]:
        tab = self._tabs.get(name)
        if tab is None:
            logger.warning(f"Unknown tab {name!r} in [{self.title}]")
        return tab

    def select_tab(self, name: str) -> bool:
        """Activate a tab by name. Returns False (and does nothing) for unknown names."""
        tab = self._tabs.get(name)
        if tab is None:
            logger.warning(f"Cannot select unknown tab {name!r} in [{self.title}]")
            return False

        previous = self._active_tab
        if previous is not None and previous is not tab:
            # A hidden page keeps no focus, capture or drag
            self.root.release_input(previous.content)
            previous._apply_active(False)

        tab._apply_active(True)
        self._active_tab = tab
        logger.debug(f"Tab activated [{self.title}] {name!r}")
        return True

    # -------------------------------------------------------------------------
    # Position
    # -------------------------------------------------------------------------

    def move_to(self, x: float, y: float):
        self.frame.set_position(x, y)
        self.layout()

    def _on_drag_start(self):
        self._drag_origin = self.position

    def _on_drag(self, dx: float, dy: float):
        ox, oy = self._drag_origin
        self.move_to(ox + dx, oy + dy)

    # -------------------------------------------------------------------------
    # Frame
    # -------------------------------------------------------------------------

    def layout(self):
        """Lay out the whole tree against the current screen size."""
        if self._destroyed:
            return
        self.root.do_layout()

    def draw(self, ctx: DrawContext):
        """Lay out and emit draw commands for the window."""
        if self._destroyed:
            return
        self.layout()
        self.root.draw(ctx)

    def destroy(self):
        """Release every bus subscription and tear down the widget tree."""
        if self._destroyed:
            return
        self.root.destroy()
        self._tabs.clear()
        self._active_tab = None
        self._destroyed = True
        logger.debug(f"Window destroyed [{self.config.name}]")

    def __enter__(self) -> Window:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.destroy()
        return False

    def __repr__(self) -> str:
        active = self._active_tab.name if self._active_tab else None
        return f"Window(title={self.title!r}, tabs={len(self._tabs)}, active={active!r})"


def create_window(
    bus: SignalBridge,
    config: WindowConfig = None,
    *,
    screen_size: Tuple[int, int] = (1280, 720),
    theme: Theme = DEFAULT_THEME,
    **fields,
) -> Window:
    """Build a Window; see Window for arguments."""
    return Window(bus, config, screen_size=screen_size, theme=theme, **fields)
