"""Tie-downs and momentary switches."""

from __future__ import annotations

from typing import Optional

from simul.circuit import Device
from simul.pin import PinState


class TieDown(Device):
    """A single output pin held at a fixed starting level."""

    def __init__(self, state: PinState = PinState.LOW, ref: str = "") -> None:
        super().__init__("TieDown", ref)
        self.Y = self.add_pin(1, "Y")
        self.Y.state = state

    def on(self) -> bool:
        return self.Y.on()


class Switch(Device):
    """A momentary switch: once high, it drops back low after the pulse length."""

    def __init__(self, pulse_ms: int = 200, ref: str = "") -> None:
        super().__init__(ref)
        self.Y = self.add_pin(1, "Y", PinState.LOW)
        self.pulse_length = pulse_ms / 1000.0
        self.last_pulse: Optional[float] = None
        self.simulate_device = self._simulate

    def _simulate(self, _device: Device, d: float) -> None:
        if self.Y.on():
            if self.last_pulse is None:
                self.last_pulse = d
            elif d - self.last_pulse > self.pulse_length:
                self.Y.new_state = PinState.LOW
                self.last_pulse = None
        elif self.last_pulse is not None:
            self.last_pulse = None