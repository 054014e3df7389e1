"""Microcode steps for driving the bus, and applying them to the machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterable, Optional, Sequence, Type, TypeVar, Union

from simul.pin import Pin, PinState, set_pins

Token = Union[int, str]
P = TypeVar("P")


class MicroCodeAction(Enum):
    XDATA = 0x00
    XADDR = 0x01
    SET_MEM = 0x02
    MONITOR = 0x03


class Register(IntEnum):
    A = 0x00
    B = 0x01
    C = 0x02
    D = 0x03
    LHS = 0x04
    RHS = 0x05
    IR = 0x06
    Mem = 0x07
    PC = 0x08
    SP = 0x09
    Si = 0x0A
    Di = 0x0B
    TX = 0x0C
    Mon = 0x0D
    MemAddr = 0x0E
    Res = 0x14
    Flags = 0x15

    @classmethod
    def from_name(cls, name: str) -> Register:
        """Look a register up by its exact name."""
        try:
            return cls.__members__[name]
        except KeyError:
            raise ValueError(f"unknown register {name!r}") from None


@dataclass
class Transfer:
    get_from: int = 0
    put_to: int = 0
    op_bits: int = 0


@dataclass
class MemBlock:
    address: int = 0
    bytes: list[int] = field(default_factory=list)


@dataclass
class MonitorValue:
    d: int = 0
    a: int = 0


Payload = Union[Transfer, MemBlock, MonitorValue]


@dataclass
class MicroCodeStep:
    action: MicroCodeAction
    payload: Payload


_ACTIONS = {
    "D": (MicroCodeAction.XDATA, Transfer),
    "A": (MicroCodeAction.XADDR, Transfer),
    "M": (MicroCodeAction.SET_MEM, MemBlock),
    "S": (MicroCodeAction.MONITOR, MonitorValue),
}


def _number(token: Token, limit: int) -> int:
    if isinstance(token, bool):
        raise ValueError(f"expected a number, got {token!r}")
    if isinstance(token, str):
        try:
            value = int(token, 0)
        except ValueError:
            raise ValueError(f"expected a number, got {token!r}") from None
    else:
        value = int(token)
    if not 0 <= value <= limit:
        raise ValueError(f"number {value} out of range 0..{limit}")
    return value


def _register(token: Token) -> int:
    if isinstance(token, str):
        try:
            return _number(token, 0xFF) & 0x0F
        except ValueError:
            return int(Register.from_name(token)) & 0x0F
    return _number(token, 0xFF) & 0x0F


class MicroCodeBuilder:
    """Collects microcode steps from the actions of a microcode parser."""

    def __init__(self) -> None:
        self.steps: list[MicroCodeStep] = []

    def _payload(self, kind: Type[P]) -> P:
        if not self.steps:
            raise ValueError("no microcode step has been started")
        payload = self.steps[-1].payload
        if not isinstance(payload, kind):
            raise ValueError(
                f"current step holds a {type(payload).__name__}, not a {kind.__name__}"
            )
        return payload

    def set_action(self, token: str) -> MicroCodeStep:
        """Start a new step: D, A, M or S."""
        try:
            action, kind = _ACTIONS[token]
        except KeyError:
            raise ValueError(f"unknown microcode action {token!r}") from None
        step = MicroCodeStep(action, kind())
        self.steps.append(step)
        return step

    def set_get_reg(self, token: Token) -> None:
        self._payload(Transfer).get_from = _register(token)

    def set_put_reg(self, token: Token) -> None:
        self._payload(Transfer).put_to = _register(token)

    def set_op_bits(self, value: Token) -> None:
        self._payload(Transfer).op_bits = _number(value, 0xFF) & 0x0F

    def set_address(self, value: Token) -> None:
        self._payload(MemBlock).address = _number(value, 0xFFFF)

    def append_value(self, value: Token) -> None:
        self._payload(MemBlock).bytes.append(_number(value, 0xFF))

    def set_d_value(self, value: Token) -> None:
        self._payload(MonitorValue).d = _number(value, 0xFF)

    def set_a_value(self, value: Token) -> None:
        self._payload(MonitorValue).a = _number(value, 0xFF)


def load_memory(steps: Iterable[MicroCodeStep], rom, ram) -> None:
    """Write every memory block into ROM (bit 15 set) or RAM."""
    for step in steps:
        if step.action is not MicroCodeAction.SET_MEM:
            continue
        block = step.payload
        for offset, value in enumerate(block.bytes):
            address = block.address + offset
            if address & 0x8000:
                rom.bytes[address & 0x7FFF] = value
            else:
                ram.bytes[address] = value


def apply_step(
    step: MicroCodeStep,
    bus,
    d_switches: Optional[Sequence[Pin]] = None,
    a_switches: Optional[Sequence[Pin]] = None,
) -> None:
    """Put one step on the bus, or on the monitor's switches."""
    if step.action is MicroCodeAction.XDATA:
        bus.XDATA_.new_state = PinState.LOW
        bus.XADDR_.new_state = PinState.HIGH
        bus.IO_.new_state = PinState.HIGH
    elif step.action is MicroCodeAction.XADDR:
        bus.XDATA_.new_state = PinState.HIGH
        bus.XADDR_.new_state = PinState.LOW
        bus.IO_.new_state = PinState.HIGH

    payload = step.payload
    if isinstance(payload, Transfer):
        bus.set_get(payload.get_from)
        bus.set_put(payload.put_to)
        bus.set_op(payload.op_bits)
    elif isinstance(payload, MonitorValue):
        if d_switches is not None:
            set_pins(d_switches, payload.d)
        if a_switches is not None:
            set_pins(a_switches, payload.a)