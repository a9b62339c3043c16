"""
Widget Base Class

Core widget tree with:
- Measure/layout/draw phases
- Event propagation
- Hit testing
- Focus management
- Drag sessions on the shared input bus
- Explicit teardown
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional, Callable, Dict, Iterator, Tuple, TYPE_CHECKING
from enum import Enum, auto
import logging

from gamesense.core.signal import (
    SignalBridge, ConnectionScope, Connection,
    SIGNAL_POINTER_DOWN, SIGNAL_POINTER_MOVE, SIGNAL_POINTER_UP,
    SIGNAL_KEY_DOWN, SIGNAL_KEY_UP, SIGNAL_TEXT_INPUT, SIGNAL_RESIZE,
)
from gamesense.ui.style import Style
from gamesense.ui.layout import (
    FlexLayout, Rect, Constraints,
    layout_flex, measure_flex, sort_by_order,
)

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext

logger = logging.getLogger(__name__)


# =============================================================================
# Layout Result
# =============================================================================

@dataclass
class LayoutResult:
    """Result of layout pass, stored on widget."""
    rect: Rect  # Position and size in parent coordinates
    content_rect: Rect  # Inner rect after padding


# =============================================================================
# Event Types
# =============================================================================

class EventType(Enum):
    POINTER_DOWN = auto()
    POINTER_UP = auto()
    POINTER_MOVE = auto()
    CLICK = auto()
    KEY_DOWN = auto()
    KEY_UP = auto()
    TEXT_INPUT = auto()
    FOCUS = auto()
    BLUR = auto()


@dataclass
class Event:
    """UI event."""
    type: EventType
    x: float = 0.0  # Position in widget-local coordinates
    y: float = 0.0
    button: int = 0  # Mouse button (1=left, 2=right, 3=middle)
    key: str = ""  # Key name
    modifiers: int = 0  # Modifier flags
    text: str = ""  # Typed text for TEXT_INPUT

    # Propagation control
    _stopped: bool = field(default=False, repr=False)

    def stop_propagation(self):
        """Stop event from bubbling to parent."""
        self._stopped = True

    @property
    def stopped(self) -> bool:
        return self._stopped


# Event handler signature
EventHandler = Callable[[Event], None]


# =============================================================================
# Widget State
# =============================================================================

class WidgetState(Enum):
    """Interactive state for styling."""
    NORMAL = auto()
    PRESSED = auto()
    FOCUSED = auto()
    DISABLED = auto()


# =============================================================================
# Widget
# =============================================================================

class Widget:
    """
    Base class for all UI widgets.

    Lifecycle:
    1. measure(constraints) -> (width, height) - compute preferred size
    2. layout(rect) -> set position and layout children
    3. draw(ctx) -> emit draw commands
    4. handle_event(event) -> process input
    5. destroy() -> detach and drop handlers

    Tree structure:
    - parent: Optional[Widget]
    - children: List[Widget], laid out and drawn by ``order``
    """

    def __init__(
        self,
        style: Style = None,
        flex: FlexLayout = None,
        children: List[Widget] = None,
        name: str = "",
        order: int = 0,
        on_click: EventHandler = None,
    ):
        self.style = style or Style()
        self.flex = flex or FlexLayout()
        self.name = name
        self.order = order

        # Tree
        self.parent: Optional[Widget] = None
        self._children: List[Widget] = []
        if children:
            for child in children:
                self.add_child(child)

        # Layout result (set during layout pass)
        self._layout: Optional[LayoutResult] = None

        # State
        self._pressed = False
        self._focused = False
        self._enabled = True
        self._visible = True
        self._destroyed = False

        # Event handlers
        self._handlers: Dict[EventType, List[EventHandler]] = {}
        if on_click:
            self.on(EventType.CLICK, on_click)

    # -------------------------------------------------------------------------
    # Tree Management
    # -------------------------------------------------------------------------

    @property
    def children(self) -> List[Widget]:
        return self._children

    def ordered_children(self) -> List[Widget]:
        return sort_by_order(self._children)

    def add_child(self, child: Widget) -> Widget:
        """Add a child widget."""
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.append(child)
        return child

    def remove_child(self, child: Widget):
        """Remove a child widget."""
        if child in self._children:
            self._children.remove(child)
            child.parent = None

    def clear_children(self):
        """Remove all children."""
        for child in self._children:
            child.parent = None
        self._children.clear()

    def get_root(self) -> Widget:
        """Get the root of the widget tree."""
        w = self
        while w.parent is not None:
            w = w.parent
        return w

    def is_descendant_of(self, other: Widget) -> bool:
        w = self
        while w is not None:
            if w is other:
                return True
            w = w.parent
        return False

    def walk(self) -> Iterator[Widget]:
        """Yield this widget and its descendants, depth first."""
        yield self
        for child in self._children:
            yield from child.walk()

    def find(self, name: str) -> Optional[Widget]:
        """Depth-first search for a descendant (or self) by name."""
        return next((w for w in self.walk() if w.name == name), None)

    # -------------------------------------------------------------------------
    # Layout
    # -------------------------------------------------------------------------

    @property
    def rect(self) -> Optional[Rect]:
        """Get layout rect (None if not laid out yet)."""
        return self._layout.rect if self._layout else None

    @property
    def content_rect(self) -> Optional[Rect]:
        """Get content rect (after padding), in local coordinates."""
        return self._layout.content_rect if self._layout else None

    def measure(self, constraints: Constraints) -> Tuple[float, float]:
        """
        Measure preferred size given constraints.

        Override in subclasses for custom measurement.
        Default: measure children with flex layout.
        """
        style = self.style

        content_w = 0.0
        content_h = 0.0

        if self._children:
            content_w, content_h = measure_flex(
                self.ordered_children(), self.flex, constraints
            )

        total_w = content_w + style.padding.horizontal
        total_h = content_h + style.padding.vertical

        if style.width.is_fixed() or style.width.is_flexible():
            total_w = style.width.resolve(constraints.max_w, total_w)
        if style.height.is_fixed() or style.height.is_flexible():
            total_h = style.height.resolve(constraints.max_h, total_h)

        if style.min_width is not None:
            total_w = max(style.min_width, total_w)
        if style.min_height is not None:
            total_h = max(style.min_height, total_h)
        if style.max_width is not None:
            total_w = min(style.max_width, total_w)
        if style.max_height is not None:
            total_h = min(style.max_height, total_h)

        return constraints.constrain(total_w, total_h)

    def layout(self, rect: Rect):
        """
        Perform layout within the given rect.

        Sets self._layout and recursively lays out children.
        """
        style = self.style

        # Content rect in local coordinates (inside padding)
        content = Rect(
            x=style.padding.left,
            y=style.padding.top,
            w=max(0, rect.w - style.padding.horizontal),
            h=max(0, rect.h - style.padding.vertical),
        )

        self._layout = LayoutResult(rect=rect, content_rect=content)
        self.layout_children(content)

    def layout_children(self, content: Rect):
        """Lay out children inside content (local coordinates)."""
        if self._children:
            ordered = self.ordered_children()
            child_rects = layout_flex(ordered, content, self.flex)
            for child, child_rect in zip(ordered, child_rects):
                child.layout(child_rect)

    # -------------------------------------------------------------------------
    # Drawing
    # -------------------------------------------------------------------------

    def draw(self, ctx: DrawContext):
        """
        Draw this widget and its children.

        Override draw_self() for custom visuals; children are drawn
        in local coordinates on top.
        """
        if not self._visible or not self._layout:
            return

        rect = self._layout.rect
        local_rect = Rect(0, 0, rect.w, rect.h)

        ctx.push_offset(rect.x, rect.y)
        if self.style.clip:
            ctx.push_clip(local_rect)
        try:
            self.draw_self(ctx, local_rect)
            for child in self.ordered_children():
                child.draw(ctx)
        finally:
            if self.style.clip:
                ctx.pop_clip()
            ctx.pop_offset()

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        """Draw background and border."""
        style = self.style

        if style.background is not None:
            ctx.draw_rect(local_rect, style.background)

        if style.border and style.border.width > 0:
            ctx.draw_rect_outline(
                local_rect,
                style.border.color,
                width=style.border.width,
            )

    # -------------------------------------------------------------------------
    # Hit Testing
    # -------------------------------------------------------------------------

    def hit_test(self, x: float, y: float) -> Optional[Widget]:
        """
        Find the deepest widget at the given point.

        Returns None if point is outside this widget.
        Coordinates are in parent space.
        """
        if not self._visible or not self._layout:
            return None

        rect = self._layout.rect

        if not rect.contains(x, y):
            return None

        local_x = x - rect.x
        local_y = y - rect.y

        # Top-most first
        for child in reversed(self.ordered_children()):
            hit = child.hit_test(local_x, local_y)
            if hit is not None:
                return hit

        if not self.style.pointer_events:
            return None

        return self

    # -------------------------------------------------------------------------
    # Event Handling
    # -------------------------------------------------------------------------

    def on(self, event_type: EventType, handler: EventHandler):
        """Register an event handler."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def off(self, event_type: EventType, handler: EventHandler):
        """Unregister an event handler."""
        if event_type in self._handlers and handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def emit(self, event: Event):
        """Emit an event to registered handlers."""
        handlers = list(self._handlers.get(event.type, []))
        for handler in handlers:
            if event.stopped:
                break
            handler(event)

    def handle_event(self, event: Event) -> bool:
        """
        Handle an event, with bubbling.

        Returns True if propagation was stopped.
        """
        self.emit(event)

        if not event.stopped and self.parent:
            if self._layout:
                event.x += self._layout.rect.x
                event.y += self._layout.rect.y
            self.parent.handle_event(event)

        return event.stopped

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def state(self) -> WidgetState:
        """Get current interactive state."""
        if not self._enabled:
            return WidgetState.DISABLED
        if self._pressed:
            return WidgetState.PRESSED
        if self._focused:
            return WidgetState.FOCUSED
        return WidgetState.NORMAL

    def set_pressed(self, pressed: bool):
        self._pressed = pressed

    def set_focused(self, focused: bool):
        """Set focus state, emitting FOCUS or BLUR on change."""
        if self._focused != focused:
            self._focused = focused
            if focused:
                self.emit(Event(EventType.FOCUS))
            else:
                self.emit(Event(EventType.BLUR))

    def set_enabled(self, enabled: bool):
        self._enabled = enabled

    def set_visible(self, visible: bool):
        self._visible = visible

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def focused(self) -> bool:
        return self._focused

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    # -------------------------------------------------------------------------
    # Input Bus Access
    # -------------------------------------------------------------------------

    def get_input_root(self) -> Optional[RootWidget]:
        root = self.get_root()
        return root if isinstance(root, RootWidget) else None

    def cancel_drag(self):
        """Stop any pointer drag this widget holds. Widgets that drag override this."""

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def destroy(self):
        """Tear down this widget and its subtree."""
        if self._destroyed:
            return
        for child in list(self._children):
            child.destroy()
        self._children.clear()
        self._handlers.clear()
        if self.parent is not None:
            self.parent.remove_child(self)
        self._destroyed = True

    # -------------------------------------------------------------------------
    # Debug
    # -------------------------------------------------------------------------

    def __repr__(self) -> str:
        cls = self.__class__.__name__
        rect = self._layout.rect if self._layout else None
        return f"{cls}(name={self.name!r}, rect={rect}, children={len(self._children)})"

    def get_absolute_rect(self) -> Optional[Rect]:
        """Get this widget's rect in screen coordinates."""
        if self._layout is None:
            return None

        x = self._layout.rect.x
        y = self._layout.rect.y
        w = self._layout.rect.w
        h = self._layout.rect.h

        parent = self.parent
        while parent is not None and parent._layout is not None:
            x += parent._layout.rect.x
            y += parent._layout.rect.y
            parent = parent.parent

        return Rect(x, y, w, h)


# =============================================================================
# Drag Session
# =============================================================================

class DragSession:
    """
    Pointer tracking while a button is held.

    Holds pointer_move and pointer_up subscriptions on the root's bus;
    both are released on pointer up, on cancel(), or when the root's
    scope is disposed.
    """

    def __init__(
        self,
        root: RootWidget,
        on_move: Callable[[float, float], None],
        on_end: Optional[Callable[[float, float], None]] = None,
    ):
        self._root = root
        self._on_move = on_move
        self._on_end = on_end
        self._move_conn: Optional[Connection] = root.scope.subscribe(
            SIGNAL_POINTER_MOVE, self._handle_move
        )
        self._up_conn: Optional[Connection] = root.scope.subscribe(
            SIGNAL_POINTER_UP, self._handle_up
        )

    @property
    def active(self) -> bool:
        return (
            self._move_conn is not None
            and self._move_conn.connected
            and self._up_conn is not None
            and self._up_conn.connected
        )

    def _handle_move(self, x: float, y: float, *args):
        if self.active:
            self._on_move(x, y)

    def _handle_up(self, x: float, y: float, *args):
        if not self.active:
            return
        self.cancel()
        if self._on_end:
            self._on_end(x, y)

    def cancel(self):
        """Release both subscriptions without calling on_end."""
        self._root.scope.release(self._move_conn)
        self._root.scope.release(self._up_conn)
        self._move_conn = None
        self._up_conn = None


# =============================================================================
# Root Widget
# =============================================================================

class RootWidget(Widget):
    """
    Screen-sized root bound to an input bus.

    Handles:
    - Screen resize
    - Pointer dispatch with capture between down and up
    - Click synthesis (release inside the pressed widget)
    - Keyboard focus
    - Subscription lifetime (one ConnectionScope for the whole tree)
    """

    def __init__(self, bus: SignalBridge, width: int = 1280, height: int = 720, **kwargs):
        super().__init__(**kwargs)
        self.bus = bus
        self.scope = ConnectionScope(bus)
        self._window_width = width
        self._window_height = height
        self._focused_widget: Optional[Widget] = None
        self._captured_widget: Optional[Widget] = None

        self.scope.subscribe(SIGNAL_POINTER_DOWN, self._on_pointer_down)
        self.scope.subscribe(SIGNAL_POINTER_UP, self._on_pointer_up)
        self.scope.subscribe(SIGNAL_KEY_DOWN, self._on_key_down)
        self.scope.subscribe(SIGNAL_KEY_UP, self._on_key_up)
        self.scope.subscribe(SIGNAL_TEXT_INPUT, self._on_text_input)
        self.scope.subscribe(SIGNAL_RESIZE, self.set_window_size)

    @property
    def size(self) -> Tuple[int, int]:
        return (self._window_width, self._window_height)

    @property
    def focused_widget(self) -> Optional[Widget]:
        return self._focused_widget

    def set_window_size(self, width: int, height: int):
        """Update screen size and re-layout."""
        self._window_width = width
        self._window_height = height
        self.do_layout()

    def do_layout(self):
        """Perform full layout pass."""
        rect = Rect(0, 0, self._window_width, self._window_height)
        self.layout(rect)

    # -------------------------------------------------------------------------
    # Bus Handlers
    # -------------------------------------------------------------------------

    def _on_pointer_down(self, x: float, y: float, button: int = 1):
        self.dispatch_pointer_event(EventType.POINTER_DOWN, x, y, button)

    def _on_pointer_up(self, x: float, y: float, button: int = 1):
        self.dispatch_pointer_event(EventType.POINTER_UP, x, y, button)

    def _on_key_down(self, key: str, modifiers: int = 0):
        self.dispatch_key_event(EventType.KEY_DOWN, key, modifiers)

    def _on_key_up(self, key: str, modifiers: int = 0):
        self.dispatch_key_event(EventType.KEY_UP, key, modifiers)

    def _on_text_input(self, text: str):
        if self._focused_widget:
            self._focused_widget.handle_event(Event(EventType.TEXT_INPUT, text=text))

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def dispatch_pointer_event(self, event_type: EventType, x: float, y: float, button: int = 1):
        """Dispatch a pointer event to the appropriate widget."""
        if event_type == EventType.POINTER_UP and self._captured_widget is not None:
            target = self._captured_widget
            self._captured_widget = None
            target.set_pressed(False)
            if target.destroyed:
                return

            local_x, local_y = self._to_local(target, x, y)
            target.handle_event(Event(EventType.POINTER_UP, x=local_x, y=local_y, button=button))

            # Click only when released over the widget that was pressed
            hit = self.hit_test(x, y)
            if hit is not None and hit.is_descendant_of(target) and target.enabled:
                local_x, local_y = self._to_local(target, x, y)
                target.handle_event(Event(EventType.CLICK, x=local_x, y=local_y, button=button))
            return

        target = self.hit_test(x, y)

        if event_type == EventType.POINTER_DOWN:
            if target is not None and not target.enabled:
                return
            self.set_focus(target)
            if target is None:
                return
            target.set_pressed(True)
            self._captured_widget = target

        if target is None:
            return

        local_x, local_y = self._to_local(target, x, y)
        event = Event(type=event_type, x=local_x, y=local_y, button=button)
        target.handle_event(event)

    def dispatch_key_event(self, event_type: EventType, key: str, modifiers: int = 0):
        """Dispatch key event to focused widget."""
        if self._focused_widget:
            event = Event(type=event_type, key=key, modifiers=modifiers)
            self._focused_widget.handle_event(event)

    def set_focus(self, widget: Optional[Widget]):
        """Set keyboard focus to widget."""
        if self._focused_widget == widget:
            return

        previous = self._focused_widget
        self._focused_widget = widget

        if previous:
            previous.set_focused(False)

        if widget:
            widget.set_focused(True)

    def release_input(self, subtree: Widget):
        """Drop keyboard focus and pointer capture held inside subtree."""
        focused = self._focused_widget
        if focused is not None and focused.is_descendant_of(subtree):
            self.set_focus(None)

        captured = self._captured_widget
        if captured is not None and captured.is_descendant_of(subtree):
            captured.set_pressed(False)
            self._captured_widget = None

        for widget in subtree.walk():
            widget.cancel_drag()

    def begin_drag(
        self,
        on_move: Callable[[float, float], None],
        on_end: Optional[Callable[[float, float], None]] = None,
    ) -> DragSession:
        """Track the pointer until release; see DragSession."""
        return DragSession(self, on_move, on_end)

    def _to_local(self, widget: Widget, x: float, y: float) -> Tuple[float, float]:
        """Convert screen coordinates to widget-local coordinates."""
        offsets_x, offsets_y = 0.0, 0.0
        w = widget
        while w is not None and w._layout is not None:
            offsets_x += w._layout.rect.x
            offsets_y += w._layout.rect.y
            w = w.parent

        return (x - offsets_x, y - offsets_y)

    # -------------------------------------------------------------------------
    # Teardown
    # -------------------------------------------------------------------------

    def destroy(self):
        """Release every bus subscription, then tear down the tree."""
        if self._destroyed:
            return
        self.scope.dispose()
        # Silent: no BLUR side effects during teardown
        self._focused_widget = None
        self._captured_widget = None
        logger.debug("Root widget destroyed")
        super().destroy()
