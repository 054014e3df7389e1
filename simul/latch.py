"""Latches and flip-flops built from NAND, AND and XOR gates."""

from __future__ import annotations

import time

from simul.circuit import Circuit, Device
from simul.gates import AndGate, NandGate, XorGate
from simul.pin import PinState


def _expect(condition: bool, message: str) -> None:
    if not condition:
        raise AssertionError(message)


class SRLatch(Device):
    """Set/reset latch with active-low inputs made of two cross-coupled NANDs.

    With ``inputs`` greater than one, each NAND gets extra inputs (pin 3 and
    up) that other circuits can use.
    """

    def __init__(self, inputs: int = 1) -> None:
        if inputs < 1:
            raise ValueError(f"an S/R latch needs at least 1 input, got {inputs}")
        super().__init__("S/R Latch")
        self.S_Gate = self.add_component(NandGate, inputs + 1, "S_Gate")
        self.R_Gate = self.add_component(NandGate, inputs + 1, "R_Gate")
        self.Q = self.S_Gate.Y
        self.Q_ = self.R_Gate.Y
        self.S_ = self.S_Gate.A1
        self.S_.state = PinState.LOW
        self.S_Gate.A2.state = PinState.LOW
        self.R_ = self.R_Gate.A1
        self.R_.state = PinState.LOW
        self.R_Gate.A2.state = PinState.HIGH
        self.Q.state = PinState.HIGH
        self.Q_.state = PinState.LOW
        self.S_Gate.A2.feed = self.Q_
        self.R_Gate.A2.feed = self.Q

    def test_setup(self, circuit: Circuit) -> None:
        self.S_.state = PinState.LOW
        self.R_.state = PinState.HIGH

    def test_run(self, circuit: Circuit) -> None:
        _expect(self.Q.state is not self.Q_.state, "Q and Q_ must differ")
        q = self.Q.state
        self.S_.new_state = PinState.HIGH
        self.R_.new_state = PinState.LOW
        time.sleep(0.005)
        circuit.yield_()
        _expect(self.Q.state is not q, "Q did not change after reset")


class GatedSRLatch(Device):
    """S/R latch whose active-low inputs only take effect while E is high."""

    def __init__(self, inputs: int = 1) -> None:
        if inputs < 1:
            raise ValueError(f"a gated S/R latch needs at least 1 input, got {inputs}")
        super().__init__("Gated S/R Latch")
        self._Snand = self.add_component(NandGate)
        self._Rnand = self.add_component(NandGate)
        self._setAnd = self.add_component(AndGate)
        self._clrAnd = self.add_component(AndGate)
        self._SgateNand = self.add_component(NandGate, inputs + 1)
        self._RgateNand = self.add_component(NandGate, inputs + 1)

        self.S_ = [self._SgateNand.pin(nr) for nr in range(1, inputs + 1)]
        self.R_ = [self._RgateNand.pin(nr) for nr in range(1, inputs + 1)]
        self.E = self._RgateNand.pin(inputs + 1)
        self._SgateNand.pin(inputs + 1).feed = self.E

        vcc = Circuit.the().VCC
        self._setAnd.A1.feed = self._SgateNand.Y
        self.SET_ = self._setAnd.A2
        self.SET_.feed = vcc

        self._clrAnd.A1.feed = self._RgateNand.Y
        self.CLR_ = self._clrAnd.A2
        self.CLR_.feed = vcc

        self._Snand.A1.feed = self._setAnd.Y
        self._Snand.A2.feed = self._Rnand.Y
        self._Rnand.A1.feed = self._clrAnd.Y
        self._Rnand.A2.feed = self._Snand.Y
        self.Q = self._Snand.Y
        self.Q_ = self._Rnand.Y

    def test_setup(self, circuit: Circuit) -> None:
        self.S_[0].state = PinState.LOW
        self.R_[0].state = PinState.HIGH
        self.E.state = PinState.HIGH

    def test_run(self, circuit: Circuit) -> None:
        _expect(self.Q.state is not self.Q_.state, "Q and Q_ must differ")
        q = self.Q.state
        self.E.new_state = PinState.LOW
        self.S_[0].new_state = PinState.HIGH
        self.R_[0].new_state = PinState.LOW
        circuit.yield_()
        _expect(self.Q.state is q, "Q changed while the latch was disabled")
        self.E.new_state = PinState.HIGH
        circuit.yield_()
        _expect(self.Q.state is not q, "Q did not change when enabled")


class DFlipFlop(Device):
    """Positive-edge D flip-flop with active-low set and clear."""

    def __init__(self) -> None:
        super().__init__("DFlipFlop")
        self._output = self.add_component(SRLatch, 2)
        self._d_input = self.add_component(SRLatch, 2)
        self._a_input = self.add_component(SRLatch, 2)
        output, d_input, a_input = self._output, self._d_input, self._a_input

        self.Q = output.Q
        self.Q_ = output.Q_
        self.Q.state = PinState.LOW
        self.Q_.state = PinState.HIGH

        a_input.S_.feed = d_input.Q_
        a_input.Q.state = PinState.LOW
        a_input.Q_.state = PinState.HIGH
        self.SET_ = a_input.S_Gate.pin(3)
        self.CLK = a_input.R_
        self.CLR_ = a_input.R_Gate.pin(3)
        self.SET_.state = PinState.HIGH
        self.CLR_.state = PinState.HIGH

        d_input.S_.feed = self.CLK
        d_input.S_Gate.pin(3).feed = a_input.Q_
        d_input.Q.state = PinState.HIGH
        d_input.Q_.state = PinState.LOW
        self.D = d_input.R_
        d_input.R_Gate.pin(3).feed = self.CLR_

        output.S_.feed = a_input.Q_
        output.S_Gate.pin(3).feed = self.SET_
        output.R_.feed = d_input.Q
        output.R_Gate.pin(3).feed = self.CLR_

    def test_run(self, circuit: Circuit) -> None:
        self.CLK.new_state = PinState.LOW
        self.D.new_state = PinState.HIGH
        circuit.yield_()
        self.CLK.new_state = PinState.HIGH
        circuit.yield_()
        _expect(self.Q.on() and self.Q_.off(), "a high D was not latched")
        self.CLK.new_state = PinState.LOW
        circuit.yield_()
        self.D.new_state = PinState.LOW
        self.CLK.new_state = PinState.HIGH
        circuit.yield_()
        _expect(self.Q.off() and self.Q_.on(), "a low D was not latched")


class JKFlipFlop(Device):
    """J/K flip-flop with active-low set and clear."""

    def __init__(self) -> None:
        super().__init__("J/K Flip-flop with set and clear")
        self.J_gate = self.add_component(NandGate, 3)
        self.K_gate = self.add_component(NandGate, 3)
        self.secondary = self.add_component(SRLatch)
        self.clr = self.add_component(AndGate)
        self.set = self.add_component(AndGate)

        self.Q = self.secondary.Q
        self.Q_ = self.secondary.Q_

        self.CLK = self.J_gate.A1
        self.J = self.J_gate.A2
        self.J_gate.pin(3).feed = self.secondary.Q_

        self.SET_ = self.set.A1
        self.SET_.state = PinState.HIGH
        self.set.A2.feed = self.J_gate.Y

        self.K_gate.A1.feed = self.CLK
        self.K = self.K_gate.A2
        self.K_gate.pin(3).feed = self.secondary.Q

        self.CLR_ = self.clr.A1
        self.CLR_.state = PinState.HIGH
        self.clr.A2.feed = self.J_gate.Y

        self.secondary.S_.feed = self.set.Y
        self.secondary.R_.feed = self.clr.Y

    def test_setup(self, circuit: Circuit) -> None:
        """Nothing to prepare."""

    def test_run(self, circuit: Circuit) -> None:
        self.CLR_.new_state = PinState.HIGH
        self.SET_.new_state = PinState.HIGH
        self.CLK.new_state = PinState.LOW
        self.J.new_state = PinState.HIGH
        self.K.new_state = PinState.LOW
        circuit.yield_()

        self.CLK.new_state = PinState.HIGH
        circuit.yield_()
        _expect(self.Q.on(), "J did not set Q")
        self.CLK.new_state = PinState.LOW
        circuit.yield_()

        _expect(self.Q.on(), "Q did not hold")
        self.J.new_state = PinState.HIGH
        self.K.new_state = PinState.HIGH
        self.CLK.new_state = PinState.HIGH
        circuit.yield_()

        _expect(self.Q.off(), "Q did not toggle low")
        self.CLK.new_state = PinState.LOW
        circuit.yield_()

        _expect(self.Q.off(), "Q did not hold low")
        self.CLK.new_state = PinState.HIGH
        circuit.yield_()

        _expect(self.Q.on(), "Q did not toggle high")
        self.SET_.new_state = PinState.LOW
        circuit.yield_()

        _expect(self.Q.on(), "SET_ did not keep Q high")
        self.CLR_.new_state = PinState.LOW
        circuit.yield_()

        _expect(self.Q.off(), "CLR_ did not clear Q")


class TFlipFlop(Device):
    """Toggle flip-flop: a D flip-flop fed with T xor Q."""

    def __init__(self) -> None:
        super().__init__("TFlipFlop")
        self.flip_flop = self.add_component(DFlipFlop)
        self.toggle = self.add_component(XorGate)

        self.Q = self.flip_flop.Q
        self.Q_ = self.flip_flop.Q_
        self.CLK = self.flip_flop.CLK
        self.SET_ = self.flip_flop.SET_
        self.CLR_ = self.flip_flop.CLR_
        self.T = self.toggle.A1
        self.toggle.A2.feed = self.Q
        self.flip_flop.D.feed = self.toggle.Y