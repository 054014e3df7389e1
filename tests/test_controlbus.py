import pytest

from simul.circuit import Circuit
from simul.controlbus import ControlBus
from simul.pin import PinState, get_pins


@pytest.fixture
def circuit():
    c = Circuit.the()
    c.initialize("bus test")
    return c


@pytest.fixture
def bus(circuit):
    return circuit.add_component(ControlBus)


def test_line_layout(bus):
    assert len(bus.tiedowns) == 40
    assert bus.controls == [t.Y for t in bus.tiedowns[:24]]
    assert bus.OP == [t.Y for t in bus.tiedowns[10:14]]
    assert bus.D == [t.Y for t in bus.tiedowns[24:32]]
    assert bus.ADDR == [t.Y for t in bus.tiedowns[32:40]]
    assert bus.RST is bus.tiedowns[14].Y
    assert bus.IO_ is bus.tiedowns[15].Y


def test_initial_levels(bus):
    assert bus.GND.state is PinState.LOW
    assert bus.VCC.state is PinState.HIGH
    assert bus.XDATA_.state is PinState.HIGH
    assert bus.XADDR_.state is PinState.HIGH
    assert bus.IO_.state is PinState.HIGH


def test_set_data_and_addr_round_trip(bus):
    bus.set_data(0xA5)
    bus.set_addr(0x3C)
    assert get_pins(bus.D) == 0xA5
    assert get_pins(bus.ADDR) == 0x3C


def test_set_op_put_get(bus):
    bus.set_op(0x9)
    bus.set_put(0x3)
    bus.set_get(0xC)
    assert get_pins(bus.OP) == 0x9
    assert get_pins(bus.PUT) == 0x3
    assert get_pins(bus.GET) == 0xC


def test_data_transfer(bus):
    bus.data_transfer(0x02, 0x0B, 0x1)
    assert bus.XDATA_.new_state is PinState.LOW
    assert bus.XADDR_.new_state is PinState.HIGH
    assert get_pins(bus.GET) == 0x02
    assert get_pins(bus.PUT) == 0x0B
    assert get_pins(bus.OP) == 0x1


def test_addr_transfer_masks_register_numbers(bus):
    bus.addr_transfer(0x14, 0x15)
    assert bus.XDATA_.new_state is PinState.HIGH
    assert bus.XADDR_.new_state is PinState.LOW
    assert get_pins(bus.GET) == 0x14 & 0x0F
    assert get_pins(bus.PUT) == 0x15 & 0x0F
    assert get_pins(bus.OP) == 0


def test_transfer_leaves_unused_side(bus):
    bus.set_put(0x6)
    bus.data_transfer(0x01, 0xFF)
    assert get_pins(bus.PUT) == 0x6
    bus.set_get(0x7)
    bus.addr_transfer(0xFF, 0x08)
    assert get_pins(bus.GET) == 0x7
    assert get_pins(bus.PUT) == 0x8


def test_oscillator_switching(bus):
    assert bus.CLK.feed is bus.clock_switch.Y
    bus.enable_oscillator()
    assert bus.CLK.feed is bus.oscillator.Y
    bus.disable_oscillator()
    assert bus.CLK.feed is bus.clock_switch.Y


def test_clock_inverted_on_clk_(circuit, bus):
    for pin in circuit.all_pins:
        pin.new_state = pin.state
    bus.clock_switch.Y.new_state = PinState.HIGH
    for _ in range(4):
        circuit.simulate(0.0)
    assert bus.CLK.state is PinState.HIGH
    assert bus.CLK_.state is PinState.LOW