# gamesense/core/signal.py
"""
SignalBridge - Input event bus shared by the host loop and the widget tree.

The host forwards raw input (pointer, keys, text, resize) by emitting
signals; windows and widgets subscribe through Connections that they
collect in a ConnectionScope and release on teardown.
"""

from __future__ import annotations
from typing import Callable, Dict, List, Any, Optional
from dataclasses import dataclass
import logging

logger = logging.getLogger(__name__)

# =============================================================================
# Signal Types
# =============================================================================

SIGNAL_POINTER_DOWN = 'pointer_down'    # (x, y, button)
SIGNAL_POINTER_MOVE = 'pointer_move'    # (x, y)
SIGNAL_POINTER_UP = 'pointer_up'        # (x, y, button)
SIGNAL_KEY_DOWN = 'key_down'            # (key, modifiers)
SIGNAL_KEY_UP = 'key_up'                # (key, modifiers)
SIGNAL_TEXT_INPUT = 'text_input'        # (text,)
SIGNAL_RESIZE = 'resize'                # (width, height)

# Key names carried by key_down / key_up. Printable keys use their
# character ("a", "F1" and friends are passed through as the host names them).
KEY_BACKSPACE = 'Backspace'
KEY_DELETE = 'Delete'
KEY_RETURN = 'Return'
KEY_ENTER = 'Enter'
KEY_ESCAPE = 'Escape'


# =============================================================================
# Callback Isolation
# =============================================================================

def safe_call(callback: Optional[Callable], *args, label: str = "callback") -> Any:
    """
    Invoke a user callback, logging and suppressing any exception.

    Returns the callback's result, or None if it is missing or raised.
    """
    if callback is None:
        return None
    try:
        return callback(*args)
    except Exception:
        logger.exception(f"User callback failed [{label}]")
        return None


# =============================================================================
# Connection Handle
# =============================================================================

@dataclass
class Connection:
    """Handle to a signal connection."""
    signal: str
    callback_id: int
    bridge: SignalBridge = None

    @property
    def connected(self) -> bool:
        return self.bridge is not None

    def disconnect(self):
        if self.bridge:
            self.bridge._remove_connection(self.signal, self.callback_id)
            self.bridge = None


# =============================================================================
# Signal Bridge
# =============================================================================

class SignalBridge:
    """Central hub for signal routing."""

    def __init__(self):
        self._connections: Dict[str, Dict[int, Callable]] = {}
        self._next_id: int = 0
        self._blocked: set = set()
        self._emit_depth: int = 0
        self._pending_removes: List[tuple] = []
        self._handles: Dict[int, Connection] = {}

    def connect(self, signal: str, handler: Callable) -> Connection:
        if signal not in self._connections:
            self._connections[signal] = {}

        callback_id = self._next_id
        self._next_id += 1

        self._connections[signal][callback_id] = handler

        conn = Connection(signal=signal, callback_id=callback_id, bridge=self)
        self._handles[callback_id] = conn
        return conn

    def disconnect_all(self, signal: str = None):
        """Drop every handler, or every handler of one signal. Their handles go dead."""
        if signal:
            dropped = list(self._connections.pop(signal, {}))
        else:
            dropped = [cid for handlers in self._connections.values() for cid in handlers]
            self._connections.clear()

        for callback_id in dropped:
            conn = self._handles.pop(callback_id, None)
            if conn is not None:
                conn.bridge = None

    def emit(self, signal: str, *args, **kwargs):
        if signal in self._blocked:
            return

        handlers = self._connections.get(signal, {})
        if not handlers:
            return

        self._emit_depth += 1

        try:
            for callback_id, handler in list(handlers.items()):
                # Removed earlier in this same emission
                if callback_id not in self._handles:
                    continue
                if (signal, callback_id) in self._pending_removes:
                    continue
                try:
                    handler(*args, **kwargs)
                except Exception as e:
                    logger.error(f"Signal handler error [{signal}]: {e}")
        finally:
            self._emit_depth -= 1

            if self._emit_depth == 0 and self._pending_removes:
                for sig, cid in self._pending_removes:
                    self._do_remove(sig, cid)
                self._pending_removes.clear()

    def block(self, signal: str):
        self._blocked.add(signal)

    def unblock(self, signal: str):
        self._blocked.discard(signal)

    def connection_count(self, signal: str) -> int:
        handlers = self._connections.get(signal, {})
        pending = sum(1 for sig, cid in self._pending_removes if sig == signal and cid in handlers)
        return len(handlers) - pending

    def is_connected(self, signal: str) -> bool:
        return self.connection_count(signal) > 0

    def _remove_connection(self, signal: str, callback_id: int):
        if self._emit_depth > 0:
            self._pending_removes.append((signal, callback_id))
        else:
            self._do_remove(signal, callback_id)

    def _do_remove(self, signal: str, callback_id: int):
        self._handles.pop(callback_id, None)
        if signal in self._connections:
            self._connections[signal].pop(callback_id, None)
            if not self._connections[signal]:
                del self._connections[signal]


# =============================================================================
# Connection Scope
# =============================================================================

class ConnectionScope:
    """
    Owns a set of connections and releases them together.

    Usable as a context manager: every connection added inside the
    ``with`` block is disconnected when the block exits, however it exits.
    """

    def __init__(self, bridge: SignalBridge):
        self.bridge = bridge
        self._connections: List[Connection] = []
        self._disposed = False

    def subscribe(self, signal: str, handler: Callable) -> Connection:
        """Connect handler to signal and track the connection."""
        conn = self.bridge.connect(signal, handler)
        return self.add(conn)

    def add(self, conn: Connection) -> Connection:
        if self._disposed:
            # Late subscriptions on a dead scope must not leak
            conn.disconnect()
            return conn
        self._connections.append(conn)
        return conn

    def release(self, conn: Optional[Connection]):
        """Disconnect a single connection and stop tracking it."""
        if conn is None:
            return
        conn.disconnect()
        if conn in self._connections:
            self._connections.remove(conn)

    def dispose(self):
        """Disconnect everything. Safe to call more than once."""
        for conn in self._connections:
            conn.disconnect()
        self._connections.clear()
        self._disposed = True

    @property
    def disposed(self) -> bool:
        return self._disposed

    def __len__(self) -> int:
        return len(self._connections)

    def __enter__(self) -> ConnectionScope:
        return self

    def __exit__(self, exc_type, exc, tb):
        self.dispose()
        return False


# =============================================================================
# Signal Debugger
# =============================================================================

class SignalDebugger:
    """Debug wrapper that logs all signal activity."""

    def __init__(self, bridge: SignalBridge):
        self.bridge = bridge
        self._original_emit = bridge.emit
        self._watched: set = set()
        self._watch_all: bool = False
        bridge.emit = self._debug_emit

    def watch(self, signal: str):
        self._watched.add(signal)

    def unwatch(self, signal: str):
        self._watched.discard(signal)

    def watch_all(self, enabled: bool = True):
        self._watch_all = enabled

    def _debug_emit(self, signal: str, *args, **kwargs):
        if self._watch_all or signal in self._watched:
            args_str = ', '.join(repr(a) for a in args)
            kwargs_str = ', '.join(f"{k}={v!r}" for k, v in kwargs.items())
            all_args = ', '.join(filter(None, [args_str, kwargs_str]))
            logger.debug(f"SIGNAL: {signal}({all_args})")

        self._original_emit(signal, *args, **kwargs)

    def detach(self):
        self.bridge.emit = self._original_emit
