"""Pin states and pins: the wires of a simulated circuit.

Durations handed to pin handlers are seconds since the simulation started,
as floats.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, MutableSequence, Optional, Sequence

PinHandler = Callable[["Pin", float], None]


class PinState(Enum):
    """Logic level of a pin; the values are nominal voltages."""

    LOW = 0
    HIGH = 5
    Z = -1

    def __invert__(self) -> PinState:
        if self is PinState.Z:
            raise ValueError("a floating (Z) pin state cannot be inverted")
        return PinState(5 - self.value)

    def __and__(self, other: PinState) -> PinState:
        return PinState.HIGH if self.value + other.value > 5 else PinState.LOW

    def __or__(self, other: PinState) -> PinState:
        return PinState.HIGH if self.value + other.value > 0 else PinState.LOW

    def __xor__(self, other: PinState) -> PinState:
        return PinState.HIGH if self.value + other.value == 5 else PinState.LOW

    def __str__(self) -> str:
        return _SYMBOLS[self]

    def __format__(self, spec: str) -> str:
        return format(str(self), spec)


_SYMBOLS = {PinState.HIGH: "H", PinState.LOW: "L", PinState.Z: "Z"}


@dataclass(eq=False)
class Pin:
    """A single pin.

    ``state`` is the committed level, ``new_state`` the level being worked
    out in the current simulation step. A pin with a ``feed`` follows the
    level of that pin; a pin with a ``drive`` pushes its level onto it while
    driving.
    """

    pin_nr: int = 1
    name: str = ""
    state: PinState = PinState.Z
    driving: bool = False
    new_state: PinState = PinState.Z
    new_driving: bool = False
    feed: Optional[Pin] = field(default=None, repr=False)
    drive: Optional[Pin] = field(default=None, repr=False)
    on_change: Optional[PinHandler] = field(default=None, repr=False)
    on_update: Optional[PinHandler] = field(default=None, repr=False)
    on_drive: Optional[PinHandler] = field(default=None, repr=False)

    def update(self, d: float) -> bool:
        """Pull the level from the feed (or run ``on_update``); report a change."""
        if self.feed is not None:
            fed = self.feed.new_state
            if fed is not PinState.Z and fed is not self.new_state:
                self.new_state = fed
        elif self.on_update is not None:
            self.on_update(self, d)
        return self.state is not self.new_state

    def on(self) -> bool:
        return self.new_state is PinState.HIGH

    def off(self) -> bool:
        return self.new_state is not PinState.HIGH

    def flip(self) -> None:
        self.new_state = ~self.new_state


def set_pins(pins: Sequence[Pin], value: int) -> None:
    """Put ``value`` on the pins, least significant bit on the first pin."""
    for pin in pins:
        pin.new_state = PinState.HIGH if value & 0x01 else PinState.LOW
        value >>= 1


def get_pins(pins: Sequence[Pin]) -> int:
    """Read the pins as a number, first pin least significant.

    If any pin floats, every bit of the result is set.
    """
    value = 0
    for pin in reversed(pins):
        if pin.new_state is PinState.Z:
            return (1 << len(pins)) - 1
        value = (value << 1) | (1 if pin.new_state is PinState.HIGH else 0)
    return value


def _check_span(
    source: Sequence, target: Sequence, count: int, source_offset: int, target_offset: int
) -> None:
    if count < 0 or source_offset < 0 or target_offset < 0:
        raise ValueError("count and offsets must not be negative")
    if source_offset + count > len(source) or target_offset + count > len(target):
        raise ValueError(
            f"cannot take {count} pins at offsets {source_offset}/{target_offset} "
            f"from {len(source)} into {len(target)} pins"
        )


def assign_pins(
    source: Sequence[Pin],
    target: MutableSequence[Pin],
    count: Optional[int] = None,
    source_offset: int = 0,
    target_offset: int = 0,
) -> None:
    """Copy ``count`` pin references from ``source`` into ``target``."""
    if count is None:
        count = len(source) - source_offset
    _check_span(source, target, count, source_offset, target_offset)
    target[target_offset:target_offset + count] = source[source_offset:source_offset + count]