import pytest

from simul.pin import Pin, PinState, assign_pins, get_pins, set_pins

H, L, Z = PinState.HIGH, PinState.LOW, PinState.Z


def test_invert():
    assert PinState.__invert__(H) is L
    assert PinState.__invert__(L) is H


def test_invert_floating_raises():
    with pytest.raises(ValueError):
        PinState.__invert__(Z)


@pytest.mark.parametrize(
    "a,b,expected",
    [(H, H, H), (H, L, L), (L, L, L), (H, Z, L), (Z, Z, L)],
)
def test_and(a, b, expected):
    assert (a & b) is expected


@pytest.mark.parametrize(
    "a,b,expected",
    [(L, L, L), (H, L, H), (Z, H, H), (Z, L, L), (H, H, H)],
)
def test_or(a, b, expected):
    assert (a | b) is expected


@pytest.mark.parametrize(
    "a,b,expected",
    [(H, L, H), (L, H, H), (H, H, L), (L, L, L)],
)
def test_xor(a, b, expected):
    assert (a ^ b) is expected


def test_str_symbols():
    assert [PinState.__str__(s) for s in (H, L, Z)] == ["H", "L", "Z"]
    assert f"{H}{L}" == "HL"


def test_new_pin_starts_floating():
    pin = Pin(3, "A3", H)
    assert pin.state is H
    assert pin.new_state is Z
    assert pin.pin_nr == 3 and pin.name == "A3"


def test_update_follows_feed():
    source = Pin(1, "S", L)
    source.new_state = H
    pin = Pin(2, "P", L)
    pin.feed = source
    assert pin.update(0.0) is True
    assert pin.new_state is H


def test_update_ignores_floating_feed():
    source = Pin(1, "S", Z)
    pin = Pin(2, "P", L)
    pin.new_state = L
    pin.feed = source
    assert pin.update(0.0) is False
    assert pin.new_state is L


def test_update_calls_handler_without_feed():
    calls = []
    pin = Pin(1, "P", L)
    pin.new_state = L

    def handler(p, d):
        calls.append((p, d))
        p.new_state = H

    pin.on_update = handler
    assert pin.update(0.25) is True
    assert calls == [(pin, 0.25)]


def test_handler_not_called_with_feed():
    calls = []
    pin = Pin(1, "P", L)
    pin.feed = Pin(2, "S", L)
    pin.on_update = lambda p, d: calls.append(d)
    pin.update(0.0)
    assert calls == []


def test_on_off_flip():
    pin = Pin(1, "P", L)
    pin.new_state = L
    assert pin.off() and not pin.on()
    pin.flip()
    assert pin.on() and not pin.off()
    pin.flip()
    assert pin.new_state is L


def test_floating_pin_is_off():
    pin = Pin()
    assert pin.off()


def test_set_pins_least_significant_first():
    pins = [Pin(i, f"D{i}", Z) for i in range(8)]
    set_pins(pins, 0x01)
    assert pins[0].new_state is H
    assert all(p.new_state is L for p in pins[1:])


@pytest.mark.parametrize("value", [0x00, 0x01, 0x5A, 0xA5, 0xFF])
def test_set_get_round_trip(value):
    pins = [Pin(i, f"D{i}", Z) for i in range(8)]
    set_pins(pins, value)
    assert get_pins(pins) == value


def test_get_pins_floating_sets_all_bits():
    pins = [Pin(i, f"D{i}", Z) for i in range(8)]
    set_pins(pins, 0x12)
    pins[4].new_state = Z
    assert get_pins(pins) == 0xFF


def test_assign_pins_with_offsets():
    source = [Pin(i, f"S{i}") for i in range(4)]
    target = [None] * 8
    assign_pins(source, target, 2, 1, 5)
    assert target[5] is source[1]
    assert target[6] is source[2]
    assert target[:5] == [None] * 5 and target[7] is None


def test_assign_pins_whole():
    source = [Pin(i, f"S{i}") for i in range(3)]
    target = [None] * 3
    assign_pins(source, target)
    assert all(t is s for t, s in zip(target, source))


def test_assign_pins_out_of_range():
    source = [Pin(i, f"S{i}") for i in range(4)]
    target = [None] * 4
    with pytest.raises(ValueError):
        assign_pins(source, target, 4, 1, 0)