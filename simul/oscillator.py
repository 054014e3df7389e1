"""Clock sources: a free-running oscillator and a burst trigger."""

from __future__ import annotations

from typing import Callable, Optional

from simul.circuit import Device
from simul.pin import Pin, PinState

OscillatorCallback = Callable[["Oscillator"], None]


class Oscillator(Device):
    """Toggles its output ``Y`` every period (seconds = 1 / frequency)."""

    def __init__(self, frequency: float) -> None:
        if frequency <= 0:
            raise ValueError(f"oscillator frequency must be positive, got {frequency}")
        super().__init__("Oscillator")
        self.period = 1.0 / frequency
        self.last_pulse = 0.0
        self.on_high: Optional[OscillatorCallback] = None
        self.on_low: Optional[OscillatorCallback] = None
        self.Y = self.add_pin(1, "Phi")
        self.Y.state = PinState.LOW
        self.Y.on_update = self._update

    def _update(self, _pin: Pin, d: float) -> None:
        if d - self.last_pulse <= self.period:
            return
        self.Y.new_state = ~self.Y.new_state
        self.last_pulse = d
        if self.Y.new_state is PinState.LOW and self.on_low is not None:
            self.on_low(self)
        if self.Y.new_state is PinState.HIGH and self.on_high is not None:
            self.on_high(self)


class BurstTrigger(Device):
    """On a rising edge of ``A``, raises ``Y`` for ``burst`` seconds."""

    def __init__(self, burst: float) -> None:
        super().__init__("BurstTrigger")
        self.burst = burst
        self.last_pulse = 0.0
        self.A = self.add_pin(1, "A", PinState.LOW)
        self.Y = self.add_pin(2, "Y", PinState.LOW)
        self.simulate_device = self._simulate

    def _simulate(self, _device: Device, d: float) -> None:
        if self.A.on():
            if self.Y.on():
                if d - self.last_pulse > self.burst:
                    self.Y.new_state = PinState.LOW
            elif self.A.state is not self.A.new_state:
                self.Y.new_state = PinState.HIGH
                self.last_pulse = d
        else:
            self.Y.new_state = PinState.LOW