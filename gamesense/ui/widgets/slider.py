"""
Slider Widget

Numeric control with a label, a right-aligned value readout and a track.

Value mapping:
    pointer fraction f in [0, 1]
      -> raw = min + f * (max - min)
      -> clamp to [min, max]
      -> snap to min + k * increment (half-up)
Programmatic set_value() goes through the same clamp/snap, so the stored
value, the readout and the value handed to the callback always agree.
"""

from __future__ import annotations
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Any, Optional, Union, TYPE_CHECKING
import logging
import math

from gamesense.core.signal import safe_call
from gamesense.ui.widget import Widget, Event, EventType, DragSession
from gamesense.ui.style import Theme, DEFAULT_THEME
from gamesense.ui.layout import Rect, Constraints

if TYPE_CHECKING:
    from gamesense.ui.draw import DrawContext

logger = logging.getLogger(__name__)

Number = Union[int, float]


# =============================================================================
# Value Mapping
# =============================================================================

def _is_int(x) -> bool:
    return isinstance(x, int) and not isinstance(x, bool)


def _decimals(x: Number) -> int:
    """Digits after the decimal point in x's shortest repr."""
    if _is_int(x):
        return 0
    exponent = Decimal(repr(float(x))).as_tuple().exponent
    return max(0, -exponent)


def _to_decimal(x: Number) -> Decimal:
    return Decimal(x) if _is_int(x) else Decimal(repr(float(x)))


def _grid_steps(value: Number, lo: Number, increment: Number) -> int:
    """Increments from lo to the grid point nearest value, ties rounding up."""
    if _is_int(lo) and _is_int(increment):
        return math.floor((value - lo) / increment + 0.5)
    # Decimal grid: 0.35 on a 0.1 grid is a tie, not 3.4999...
    steps = (_to_decimal(value) - _to_decimal(lo)) / _to_decimal(increment)
    return int(steps.to_integral_value(rounding=ROUND_HALF_UP))


def _normalize(value: float, lo: Number, increment: Number) -> Number:
    """Strip float noise from a grid point: ints stay ints."""
    if _is_int(lo) and _is_int(increment):
        return int(round(value))
    return round(value, max(_decimals(lo), _decimals(increment)))


def clamp(value: float, lo: float, hi: float) -> float:
    return max(lo, min(hi, value))


def snap_value(value: Number, lo: Number, hi: Number, increment: Number) -> Number:
    """
    Clamp value to [lo, hi] and snap it to the grid lo + k * increment.

    Ties round up. When hi is not on the grid and rounding overshoots it,
    the result steps back one increment so it stays in range.
    """
    if increment <= 0:
        raise ValueError(f"increment must be positive, got {increment!r}")

    clamped = clamp(value, lo, hi)
    steps = _grid_steps(clamped, lo, increment)
    snapped = _normalize(lo + steps * increment, lo, increment)

    if snapped > hi:
        snapped = _normalize(lo + (steps - 1) * increment, lo, increment)
    if snapped < lo:
        snapped = lo

    return snapped


def fraction_to_value(fraction: float, lo: Number, hi: Number, increment: Number) -> Number:
    """Map a track fraction to a snapped value."""
    f = clamp(fraction, 0.0, 1.0)
    return snap_value(lo + f * (hi - lo), lo, hi, increment)


def value_to_fraction(value: Number, lo: Number, hi: Number) -> float:
    """Fill fraction for a value; 0 for a degenerate range."""
    if hi == lo:
        return 0.0
    return clamp((value - lo) / (hi - lo), 0.0, 1.0)


def format_value(value: Number) -> str:
    """Readout text: integral values print without a decimal point."""
    if _is_int(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    return format(value, ".14g")


# =============================================================================
# Slider
# =============================================================================

class Slider(Widget):
    """
    Slider control.

    Layout (one element row of labels, then the track):
        | Name                      40% |
        |==========-------------------- |
    """

    def __init__(
        self,
        name: str = "Slider",
        min_value: Number = 0,
        max_value: Number = 100,
        increment: Number = 1,
        value: Optional[Number] = None,
        suffix: str = "",
        callback: Optional[Callable[[Number], Any]] = None,
        theme: Theme = DEFAULT_THEME,
        order: int = 0,
    ):
        if min_value > max_value:
            raise ValueError(f"Slider {name!r}: min {min_value!r} > max {max_value!r}")
        if increment <= 0:
            raise ValueError(f"Slider {name!r}: increment must be positive, got {increment!r}")

        self.theme = theme
        self.min_value = min_value
        self.max_value = max_value
        self.increment = increment
        self.suffix = suffix
        self._callback = callback

        self._value: Number = min_value
        self._display_text = ""
        self._fill_fraction = 0.0
        self._drag: Optional[DragSession] = None

        super().__init__(style=theme.element_style(rows=1.5), name=name, order=order)

        self.on(EventType.POINTER_DOWN, self._on_pointer_down)

        # Initial placement does not notify
        self._apply(min_value if value is None else value, notify=False)

    # -------------------------------------------------------------------------
    # Value
    # -------------------------------------------------------------------------

    @property
    def value(self) -> Number:
        return self._value

    def get_value(self) -> Number:
        return self._value

    def set_value(self, value: Number):
        """Clamp, snap, store, refresh the readout, then notify."""
        self._apply(value, notify=True)

    def set_fraction(self, fraction: float, notify: bool = True) -> Number:
        """Set from a track fraction, as a pointer at that position would."""
        f = clamp(fraction, 0.0, 1.0)
        raw = self.min_value + f * (self.max_value - self.min_value)
        return self._apply(raw, notify=notify)

    @property
    def display_text(self) -> str:
        return self._display_text

    @property
    def fill_fraction(self) -> float:
        return self._fill_fraction

    def _apply(self, raw: Number, notify: bool) -> Number:
        snapped = snap_value(raw, self.min_value, self.max_value, self.increment)
        self._value = snapped
        self._fill_fraction = value_to_fraction(snapped, self.min_value, self.max_value)
        self._display_text = format_value(snapped) + self.suffix
        if notify:
            safe_call(self._callback, snapped, label=f"slider:{self.name}")
        return snapped

    # -------------------------------------------------------------------------
    # Pointer
    # -------------------------------------------------------------------------

    @property
    def dragging(self) -> bool:
        return self._drag is not None and self._drag.active

    def track_rect(self) -> Rect:
        """Track rect in local coordinates."""
        w = self._layout.rect.w if self._layout else 0.0
        return Rect(0, self.theme.element_height, w, self.theme.slider_height)

    def absolute_track_rect(self) -> Optional[Rect]:
        abs_rect = self.get_absolute_rect()
        if abs_rect is None:
            return None
        track = self.track_rect()
        return Rect(abs_rect.x + track.x, abs_rect.y + track.y, track.w, track.h)

    def fraction_at(self, screen_x: float) -> float:
        """Track fraction under a screen x coordinate."""
        track = self.absolute_track_rect()
        if track is None or track.w <= 0:
            return 0.0
        return clamp((screen_x - track.x) / track.w, 0.0, 1.0)

    def _on_pointer_down(self, event: Event):
        if not self.track_rect().contains(event.x, event.y):
            return
        event.stop_propagation()

        # Pointer down always reports, like a click
        self.set_fraction(self.fraction_at(self._screen_x(event.x)))

        root = self.get_input_root()
        if root is None:
            return
        self.cancel_drag()
        self._drag = root.begin_drag(self._on_drag_move, self._on_drag_end)
        logger.debug(f"Slider drag start [{self.name}]")

    def _screen_x(self, local_x: float) -> float:
        abs_rect = self.get_absolute_rect()
        return local_x + (abs_rect.x if abs_rect else 0.0)

    def _on_drag_move(self, x: float, y: float):
        previous = self._value
        snapped = self.set_fraction(self.fraction_at(x), notify=False)
        if snapped != previous:
            safe_call(self._callback, snapped, label=f"slider:{self.name}")

    def _on_drag_end(self, x: float, y: float):
        self._drag = None
        logger.debug(f"Slider drag end [{self.name}] value={self._value!r}")

    def cancel_drag(self):
        if self._drag is not None:
            self._drag.cancel()
            self._drag = None
            logger.debug(f"Slider drag cancelled [{self.name}]")

    # -------------------------------------------------------------------------
    # Layout / Draw
    # -------------------------------------------------------------------------

    def measure(self, constraints: Constraints):
        return constraints.constrain(0, self.theme.element_height * 1.5)

    def draw_self(self, ctx: DrawContext, local_rect: Rect):
        theme = self.theme
        half = max(0, local_rect.w / 2 - theme.padding)

        ctx.draw_text_in_rect(
            self.name,
            Rect(0, 0, half, theme.element_height),
            theme.text,
            font_size=theme.font_size,
            font_id=theme.font_secondary,
        )
        ctx.draw_text_in_rect(
            self._display_text,
            Rect(local_rect.w - half, 0, half, theme.element_height),
            theme.text_disabled,
            font_size=theme.font_size,
            font_id=theme.font_secondary,
            align="right",
        )

        track = Rect(0, theme.element_height, local_rect.w, theme.slider_height)
        ctx.draw_rect(track, theme.frame)
        ctx.draw_rect_outline(track, theme.border, width=theme.border_size)
        fill_w = track.w * self._fill_fraction
        if fill_w > 0:
            ctx.draw_rect(Rect(track.x, track.y, fill_w, track.h), theme.accent)

    def destroy(self):
        self.cancel_drag()
        super().destroy()
