"""Logic gates, the inverter and the tri-state buffer."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from simul.circuit import Device
from simul.pin import Pin, PinState


class Inverter(Device):
    """A NOT gate; a floating input gives a floating output."""

    def __init__(
        self,
        ref: str = "",
        pin_in: Optional[Pin] = None,
        pin_out: Optional[Pin] = None,
    ) -> None:
        super().__init__("Inverter", ref)
        self.A = self.add_pin(1, "A")
        self.Y = self.add_pin(2, "Y")
        self.simulate_device = self._simulate
        if pin_in is not None:
            self.A.feed = pin_in
        if pin_out is not None:
            pin_out.feed = self.Y

    @classmethod
    def between(cls, pin_in: Pin, pin_out: Pin) -> Inverter:
        """Build an inverter fed by ``pin_in`` that feeds ``pin_out``.

        The caller still has to attach it to a device to have it simulated.
        """
        return cls(pin_in=pin_in, pin_out=pin_out)

    def _simulate(self, _device: Device, _d: float) -> None:
        if self.A.new_state is not PinState.Z:
            self.Y.new_state = ~self.A.new_state
        else:
            self.Y.new_state = PinState.Z


class LogicGate(Device, ABC):
    """A gate that folds its inputs with ``operate`` and then ``finalize``."""

    def __init__(self, name: str, inputs: int = 2, ref: str = "") -> None:
        if inputs < 2:
            raise ValueError(f"a logic gate needs at least 2 inputs, got {inputs}")
        super().__init__(name, ref)
        self.A1 = self.add_pin(1, "A1")
        self.A2 = self.add_pin(2, "A2")
        for nr in range(3, inputs + 1):
            self.add_pin(nr, f"A{nr}")
        self.Y = self.add_pin(inputs + 1, "Y")
        self.simulate_device = self._simulate

    @abstractmethod
    def operate(self, s1: PinState, s2: PinState) -> PinState:
        """Combine two input levels."""

    def finalize(self, s: PinState) -> PinState:
        return s

    def _simulate(self, _device: Device, _d: float) -> None:
        state = self.operate(self.A1.new_state, self.A2.new_state)
        for pin in self.pins[2:-1]:
            state = self.operate(state, pin.new_state)
        self.Y.new_state = self.finalize(state)


class AndGate(LogicGate):
    gate_name = "AND"

    def __init__(self, inputs: int = 2, ref: str = "") -> None:
        super().__init__(self.gate_name, inputs, ref)

    def operate(self, s1: PinState, s2: PinState) -> PinState:
        return s1 & s2


class NandGate(AndGate):
    gate_name = "NAND"

    def finalize(self, s: PinState) -> PinState:
        return ~s


class OrGate(LogicGate):
    gate_name = "OR"

    def __init__(self, inputs: int = 2, ref: str = "") -> None:
        super().__init__(self.gate_name, inputs, ref)

    def operate(self, s1: PinState, s2: PinState) -> PinState:
        return s1 | s2


class NorGate(OrGate):
    gate_name = "NOR"

    def finalize(self, s: PinState) -> PinState:
        return ~s


class XorGate(LogicGate):
    gate_name = "XOR"

    def __init__(self, ref: str = "") -> None:
        super().__init__(self.gate_name, 2, ref)

    def operate(self, s1: PinState, s2: PinState) -> PinState:
        return s1 ^ s2


class XNorGate(XorGate):
    gate_name = "XNOR"

    def finalize(self, s: PinState) -> PinState:
        return ~s


class TriStateBuffer(Device):
    """Passes A to Y while E is high; otherwise Y stops driving."""

    def __init__(self, ref: str = "") -> None:
        super().__init__("Tri-state buffer", ref)
        self.A = self.add_pin(1, "A")
        self.E = self.add_pin(1, "E", PinState.LOW)
        self.Y = self.add_pin(2, "Y")
        self.simulate_device = self._simulate

    def _simulate(self, _device: Device, _d: float) -> None:
        if self.E.new_state is PinState.HIGH:
            self.Y.new_driving = True
            self.Y.new_state = self.A.new_state
        else:
            self.Y.new_driving = False