"""Byte-wide memory chips: an EEPROM and a static RAM."""

from __future__ import annotations

from enum import Enum

from simul.circuit import Device
from simul.gates import Inverter, TriStateBuffer
from simul.pin import PinState, get_pins, set_pins


class MemoryIC(Enum):
    EEPROM_28C256 = "28C256"
    SRAM_LY62256 = "LY62256"


class Memory(Device):
    """A memory chip with 8 data pins and active-low CE_, WE_ and OE_."""

    def __init__(self, ic: MemoryIC, address_bits: int, writable: bool = True) -> None:
        if not 0 < address_bits < 17:
            raise ValueError(f"address bits must be between 1 and 16, got {address_bits}")
        super().__init__(ic.value)
        self.ic = ic
        self.writable = writable
        self.bytes = bytearray(1 << address_bits)

        oe_inverter = self.add_component(Inverter)
        self.OE_ = oe_inverter.A
        self.buffers: list[TriStateBuffer] = []
        for _ in range(8):
            buffer = self.add_component(TriStateBuffer)
            buffer.E.feed = oe_inverter.Y
            self.buffers.append(buffer)
        self.I = [buffer.A for buffer in self.buffers]
        self.D = [buffer.Y for buffer in self.buffers]
        self.A = [self.add_pin(9 + bit, f"A{bit}", PinState.LOW) for bit in range(address_bits)]
        self.CE_ = self.add_pin(25, "CE_", PinState.HIGH)
        self.WE_ = self.add_pin(25, "WE_", PinState.HIGH)
        self.simulate_device = self._simulate

    def _simulate(self, _device: Device, _d: float) -> None:
        if self.CE_.on():
            for pin in self.D:
                pin.new_driving = False
            return
        address = get_pins(self.A)
        if self.WE_.off() and self.writable:
            self.bytes[address] = get_pins(self.D) & 0xFF
        if self.OE_.off():
            set_pins(self.I, self.bytes[address])


class EEPROM28C256(Memory):
    """32 KiB EEPROM; writes through the pins are ignored."""

    def __init__(self) -> None:
        super().__init__(MemoryIC.EEPROM_28C256, 15, False)


class SRAMLY62256(Memory):
    """32 KiB static RAM."""

    def __init__(self) -> None:
        super().__init__(MemoryIC.SRAM_LY62256, 15, True)