import pytest

from simul.circuit import Circuit
from simul.latch import DFlipFlop, GatedSRLatch, JKFlipFlop, SRLatch, TFlipFlop
from simul.pin import PinState

H, L = PinState.HIGH, PinState.LOW


@pytest.fixture
def circuit():
    c = Circuit.the()
    c.initialize("latch test")
    return c


def prime(circuit):
    for pin in circuit.all_pins:
        pin.new_state = pin.state


def settle(circuit, steps=30):
    for _ in range(steps):
        circuit.simulate(0.0)


def test_sr_latch_set_reset_hold(circuit):
    latch = circuit.add_component(SRLatch)
    prime(circuit)
    latch.S_.new_state, latch.R_.new_state = L, H
    settle(circuit)
    assert latch.Q.on() and latch.Q_.off()
    latch.S_.new_state, latch.R_.new_state = H, L
    settle(circuit)
    assert latch.Q.off() and latch.Q_.on()
    latch.R_.new_state = H
    settle(circuit)
    assert latch.Q.off() and latch.Q_.on()


def test_sr_latch_rejects_zero_inputs(circuit):
    with pytest.raises(ValueError):
        SRLatch(0)


def test_d_flip_flop_latches_on_rising_edge(circuit):
    ff = circuit.add_component(DFlipFlop)
    prime(circuit)
    ff.CLK.new_state, ff.D.new_state = L, H
    settle(circuit)
    ff.CLK.new_state = H
    settle(circuit)
    assert ff.Q.on() and ff.Q_.off()
    ff.CLK.new_state = L
    settle(circuit)
    ff.D.new_state = L
    settle(circuit)
    assert ff.Q.on()
    ff.CLK.new_state = H
    settle(circuit)
    assert ff.Q.off() and ff.Q_.on()


def test_jk_flip_flop_set_and_clear(circuit):
    ff = circuit.add_component(JKFlipFlop)
    prime(circuit)
    ff.CLK.new_state = L
    ff.J.new_state = ff.K.new_state = L
    ff.SET_.new_state, ff.CLR_.new_state = H, L
    settle(circuit)
    assert ff.Q.off() and ff.Q_.on()
    ff.SET_.new_state, ff.CLR_.new_state = L, H
    settle(circuit)
    assert ff.Q.on() and ff.Q_.off()


def test_t_flip_flop_toggles(circuit):
    ff = circuit.add_component(TFlipFlop)
    prime(circuit)
    ff.T.new_state = H
    ff.CLK.new_state = L
    settle(circuit)
    start = ff.Q.new_state
    ff.CLK.new_state = H
    settle(circuit)
    first = ff.Q.new_state
    assert first is not start
    ff.CLK.new_state = L
    settle(circuit)
    ff.CLK.new_state = H
    settle(circuit)
    assert ff.Q.new_state is start