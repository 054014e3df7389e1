"""Devices, and the circuit that owns all pins and runs the simulation."""

from __future__ import annotations

import threading
import time
from enum import Enum, auto
from typing import Any, Callable, Iterator, Optional, Sequence, Type, TypeVar

from simul.pin import Pin, PinState, _check_span

DeviceHandler = Callable[["Device", float], None]
D = TypeVar("D", bound="Device")


class SimStatus(Enum):
    UNSTARTED = auto()
    STARTING = auto()
    STARTED = auto()
    STOPPING = auto()
    DONE = auto()


class Device:
    """A component with pins, sub-components and an optional step handler."""

    def __init__(self, name: str, ref: str = "") -> None:
        self.name = name
        self.ref = ref
        self.pins: list[Pin] = []
        self.components: list[Device] = []
        self.parent: Optional[Device] = None
        self.simulate_device: Optional[DeviceHandler] = None

    def pin(self, nr: int) -> Optional[Pin]:
        """Return the first pin with number ``nr``, or None."""
        return next((p for p in self.pins if p.pin_nr == nr), None)

    def add_pin(self, nr: int, pin_name: str, state: PinState = PinState.Z) -> Pin:
        pin = Circuit.the().allocate_pin(nr, pin_name, state)
        self.pins.append(pin)
        return pin

    def invert(self, pin_in: Pin, pin_out: Pin) -> None:
        """Make ``pin_out`` follow the inverse of ``pin_in``."""
        from simul.gates import Inverter

        inverter = self.add_component(Inverter)
        inverter.A.feed = pin_in
        pin_out.feed = inverter.Y

    def connect_pins(
        self,
        source: Sequence[Pin],
        target: Sequence[Pin],
        count: Optional[int] = None,
        source_offset: int = 0,
        target_offset: int = 0,
    ) -> None:
        """Feed each target pin from the corresponding source pin."""
        if count is None:
            count = len(source) - source_offset
        _check_span(source, target, count, source_offset, target_offset)
        for src, dst in zip(
            source[source_offset:source_offset + count],
            target[target_offset:target_offset + count],
        ):
            dst.feed = src

    def drive_pins(
        self,
        source: Sequence[Pin],
        target: Sequence[Pin],
        count: Optional[int] = None,
        source_offset: int = 0,
        target_offset: int = 0,
    ) -> None:
        """Let each source pin drive the corresponding target pin."""
        if count is None:
            count = len(source) - source_offset
        _check_span(source, target, count, source_offset, target_offset)
        for src, dst in zip(
            source[source_offset:source_offset + count],
            target[target_offset:target_offset + count],
        ):
            src.drive = dst

    def add_component(self, cls: Type[D], *args: Any, **kwargs: Any) -> D:
        device = cls(*args, **kwargs)
        device.parent = self
        self.components.append(device)
        return device

    def test_setup(self, circuit: Circuit) -> None:
        """Prepare a self-test; the default does nothing."""

    def test_run(self, circuit: Circuit) -> None:
        """Run a self-test against a running simulation; the default does nothing."""


def _walk(device: Device) -> Iterator[Device]:
    """Yield every device below ``device``, children before parents."""
    for component in device.components:
        yield from _walk(component)
    yield device


class Circuit(Device):
    """The top-level device; holds every pin and steps the simulation."""

    MAX_PINS = 64 * 1024
    _the: Optional[Circuit] = None

    def __init__(self) -> None:
        super().__init__("")
        self.VCC = Pin(-1, "VCC", PinState.HIGH)
        self.GND = Pin(-2, "GND", PinState.LOW)
        self.all_pins: list[Pin] = [self.VCC, self.GND]
        self.status = SimStatus.UNSTARTED
        self._yielder = threading.Condition()

    @classmethod
    def the(cls) -> Circuit:
        """Return the one circuit every device allocates its pins in."""
        if Circuit._the is None:
            Circuit._the = Circuit()
        return Circuit._the

    @property
    def pin_count(self) -> int:
        return len(self.all_pins)

    def initialize(self, name: str = "") -> None:
        """Drop every component and pin except VCC and GND."""
        if self.status not in (SimStatus.UNSTARTED, SimStatus.DONE):
            raise RuntimeError(f"cannot initialize a circuit while {self.status.name}")
        self.name = name
        self.components.clear()
        del self.all_pins[2:]

    def start(self) -> None:
        if self.status is SimStatus.UNSTARTED:
            self.status = SimStatus.STARTED

    def stop(self) -> None:
        if self.status is SimStatus.STARTED:
            self.status = SimStatus.STOPPING

    def done(self) -> None:
        if self.status is SimStatus.STOPPING:
            self.status = SimStatus.DONE

    def allocate_pin(self, nr: int, pin_name: str, state: PinState = PinState.Z) -> Pin:
        if len(self.all_pins) >= self.MAX_PINS:
            raise RuntimeError(f"circuit cannot hold more than {self.MAX_PINS} pins")
        pin = Pin(nr, pin_name, state)
        self.all_pins.append(pin)
        return pin

    def simulate(self, d: float) -> int:
        """Run one step; return how many pins changed while updating."""
        changed = sum(1 for pin in reversed(self.all_pins) if pin.update(d))
        for pin in self.all_pins:
            if pin.state is not pin.new_state and pin.on_change is not None:
                pin.on_change(pin, d)
        for device in _walk(self):
            if device.simulate_device is not None:
                device.simulate_device(device, d)
        for pin in self.all_pins:
            if pin.on_drive is not None:
                pin.on_drive(pin, d)
            if pin.new_driving and pin.drive is not None and pin.new_state is not PinState.Z:
                pin.drive.new_state = pin.new_state
        for pin in self.all_pins:
            pin.state = pin.new_state
            pin.driving = pin.new_driving
        return changed

    def start_simulation(self) -> threading.Thread:
        """Start stepping in a thread; return once the first step is done."""
        if self.status not in (SimStatus.UNSTARTED, SimStatus.DONE):
            raise RuntimeError(f"simulation cannot start while {self.status.name}")
        with self._yielder:
            for pin in self.all_pins:
                if pin.on_update is not None:
                    pin.on_update(pin, 0.0)
                if pin.on_change is not None:
                    pin.on_change(pin, 0.0)
            for device in _walk(self):
                if device.simulate_device is not None:
                    device.simulate_device(device, 0.0)
            for pin in self.all_pins:
                pin.new_state = pin.state
                pin.new_driving = pin.driving
            thread = threading.Thread(target=self._run, name="simulation", daemon=True)
            thread.start()
            self._yielder.wait()
        return thread

    def _run(self) -> None:
        start = time.perf_counter()
        self.status = SimStatus.STARTING
        try:
            while True:
                with self._yielder:
                    self.simulate(time.perf_counter() - start)
                    if self.status is SimStatus.STARTING:
                        self.status = SimStatus.STARTED
                    self._yielder.notify_all()
                if self.status is SimStatus.STOPPING:
                    break
                time.sleep(1e-6)
        finally:
            with self._yielder:
                self.status = SimStatus.DONE
                self._yielder.notify_all()

    def yield_(self) -> None:
        """Wait until the running simulation has completed another step."""
        with self._yielder:
            if self.status in (SimStatus.STARTING, SimStatus.STARTED):
                self._yielder.wait()


def test_device(device_class: Type[D]) -> D:
    """Add a device to the circuit and run its self-test in a live simulation."""
    circuit = Circuit.the()
    chip = circuit.add_component(device_class)
    chip.test_setup(circuit)
    thread = circuit.start_simulation()
    try:
        chip.test_run(circuit)
    finally:
        circuit.stop()
        thread.join()
    return chip


test_device.__test__ = False