"""The backplane bus that every card of the machine plugs into."""

from __future__ import annotations

from simul.circuit import Device
from simul.oscillator import BurstTrigger, Oscillator
from simul.pin import PinState, set_pins
from simul.utility import Switch, TieDown

NO_REGISTER = 0xFF
BUS_LINES = 40
CONTROL_LINES = 24


class ControlBus(Device):
    """Forty bus lines: power, clock, control signals, data and address.

    Line layout: 0 GND, 1 VCC, 2 CLK, 3 CLK_, 4 CLK burst, 5 HLT_, 6 SUS_,
    7 XDATA_, 8 XADDR_, 9 SACK_, 10-13 OP, 14 RST, 15 IO_, 16-19 PUT,
    20-23 GET, 24-31 D, 32-39 ADDR.
    """

    def __init__(self) -> None:
        super().__init__("BUS")
        self.clock_switch = self.add_component(Switch, 200)
        self.oscillator = self.add_component(Oscillator, 1)
        self.tiedowns = [self.add_component(TieDown, PinState.LOW) for _ in range(BUS_LINES)]
        lines = [tiedown.Y for tiedown in self.tiedowns]

        self.GND = lines[0]
        self.GND.state = PinState.LOW
        self.VCC = lines[1]
        self.VCC.state = PinState.HIGH
        self.CLK = lines[2]
        self.CLK.feed = self.clock_switch.Y
        self.CLK_ = lines[3]
        self.invert(self.CLK, self.CLK_)
        self.CLKburst = lines[4]
        burst = self.add_component(BurstTrigger, 0.1)
        burst.A.feed = self.CLK
        self.CLKburst.feed = burst.Y
        self.HLT_ = lines[5]
        self.HLT_.state = PinState.HIGH
        self.SUS_ = lines[6]
        self.SUS_.state = PinState.HIGH
        self.XDATA_ = lines[7]
        self.XDATA_.state = PinState.HIGH
        self.XADDR_ = lines[8]
        self.XADDR_.state = PinState.HIGH
        self.SACK_ = lines[9]
        self.SACK_.state = PinState.HIGH
        self.RST = lines[14]
        self.IO_ = lines[15]
        self.IO_.state = PinState.HIGH

        self.controls = lines[:CONTROL_LINES]
        self.OP = lines[10:14]
        self.PUT = lines[16:20]
        self.GET = lines[20:24]
        self.D = lines[24:32]
        self.ADDR = lines[32:40]

    def set_op(self, op: int) -> None:
        set_pins(self.OP, op)

    def set_put(self, op: int) -> None:
        set_pins(self.PUT, op)

    def set_get(self, op: int) -> None:
        set_pins(self.GET, op)

    def set_data(self, op: int) -> None:
        set_pins(self.D, op)

    def set_addr(self, op: int) -> None:
        set_pins(self.ADDR, op)

    def _transfer(self, source: int, target: int, op: int) -> None:
        if source != NO_REGISTER:
            set_pins(self.GET, source & 0x0F)
        if target != NO_REGISTER:
            set_pins(self.PUT, target & 0x0F)
        set_pins(self.OP, op & 0x0F)

    def data_transfer(self, source: int, target: int, op: int = 0) -> None:
        """Set up a data-bus transfer; 0xFF leaves that side unchanged."""
        self.XDATA_.new_state = PinState.LOW
        self.XADDR_.new_state = PinState.HIGH
        self._transfer(source, target, op)

    def addr_transfer(self, source: int, target: int, op: int = 0) -> None:
        """Set up an address-bus transfer; 0xFF leaves that side unchanged."""
        self.XDATA_.new_state = PinState.HIGH
        self.XADDR_.new_state = PinState.LOW
        self._transfer(source, target, op)

    def enable_oscillator(self) -> None:
        self.CLK.feed = self.oscillator.Y

    def disable_oscillator(self) -> None:
        self.CLK.feed = self.clock_switch.Y