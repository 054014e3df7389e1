# simul

A pin-level simulator for digital logic circuits. Every signal is a `Pin`
with a tri-state level (`PinState.LOW`, `PinState.HIGH`, `PinState.Z`), and
every component is a `Device` whose step handler reads its input pins and sets
its output pins once per simulation step. All pins live in one shared circuit,
`Circuit.the()`.

## Modules

- `simul.pin`: `PinState` (with `~`, `&`, `|` and `^`, printed as `H`, `L`
  or `Z`), `Pin` (`update`, `on`, `off`, `flip`) and the helpers `set_pins`,
  `get_pins` and `assign_pins` for treating a group of pins as a binary number,
  first pin least significant. `get_pins` returns all bits set if any pin floats.
- `simul.circuit`: `Device` (`pin`, `add_pin`, `invert`, `connect_pins`,
  `drive_pins`, `add_component`), `Circuit` (`the`, `initialize`,
  `allocate_pin`, `simulate`, `start_simulation`, `yield_`, `start`, `stop`,
  `done`), `SimStatus`, and `test_device`, which adds a device to the circuit
  and runs its `test_setup` / `test_run` self-test against a live simulation.
- `simul.gates`: `Inverter` (with `Inverter.between`), the abstract
  `LogicGate`, `AndGate`, `NandGate`, `OrGate`, `NorGate` (all with any number
  of inputs from two up), `XorGate`, `XNorGate` and `TriStateBuffer`.
- `simul.utility`: `TieDown`, a single output pin with a starting level, and
  `Switch`, which drops back low a set number of milliseconds after going high.
- `simul.oscillator`: `Oscillator`, a clock that toggles every `1 / frequency`
  seconds and can call `on_low` / `on_high`, and `BurstTrigger`, which raises
  its output for a fixed time on a rising input.
- `simul.latch`: `SRLatch`, `GatedSRLatch`, `DFlipFlop`, `JKFlipFlop` and
  `TFlipFlop`, built from the gates. The first four carry self-tests for
  `test_device`.
- `simul.memory`: `Memory` (8 data pins, active-low `CE_`, `WE_`, `OE_`),
  `MemoryIC`, and the 32 KiB chips `EEPROM28C256` (read-only through its pins)
  and `SRAMLY62256`.
- `simul.controlbus`: `ControlBus`, forty bus lines (power, clock, control,
  `OP`, `PUT`, `GET`, data `D` and `ADDR`) with `set_op`, `set_put`,
  `set_get`, `set_data`, `set_addr`, `data_transfer`, `addr_transfer`,
  `enable_oscillator` and `disable_oscillator`.
- `simul.microcode`: `MicroCodeAction`, `Register` (with `Register.from_name`),
  the payloads `Transfer`, `MemBlock` and `MonitorValue`, `MicroCodeStep`,
  `MicroCodeBuilder` to assemble steps token by token, `load_memory` to write
  memory blocks into ROM (addresses with bit 15 set) or RAM, and `apply_step`
  to put one step on the bus or on a pair of switch pin groups.

Durations handed to handlers are seconds since the simulation started, as floats.

## Installing

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Examples

A gate in a running simulation:

```python
from simul.circuit import Circuit
from simul.gates import AndGate
from simul.pin import PinState

circuit = Circuit.the()
circuit.initialize("demo")
gate = circuit.add_component(AndGate)
gate.A1.state = PinState.HIGH
gate.A2.state = PinState.HIGH
thread = circuit.start_simulation()
circuit.yield_()
print(gate.Y.state)  # H
circuit.stop()
thread.join()
```

Groups of pins carry numbers:

```python
from simul.pin import Pin, PinState, set_pins, get_pins

bus = [Pin(nr, f"D{nr}", PinState.LOW) for nr in range(8)]
set_pins(bus, 0xA5)
assert get_pins(bus) == 0xA5
```

Building a microcode step and putting it on the bus:

```python
from simul.controlbus import ControlBus
from simul.microcode import MicroCodeBuilder, apply_step

bus = ControlBus()
builder = MicroCodeBuilder()
step = builder.set_action("D")   # data transfer
builder.set_get_reg("A")
builder.set_put_reg("LHS")
builder.set_op_bits(0)
apply_step(step, bus)
```

## What it does not do

- There is no graphical display of boards, LEDs or switches, and no
  command-line program; circuits are built and driven from Python code.
- There is no reader for microcode files. `MicroCodeBuilder` takes tokens one
  at a time, so a parser has to be supplied by the caller.
- The machine's register, ALU, memory and monitor cards are not included; only
  the `ControlBus` they would plug into is.
- Microcode is not stepped by the clock automatically: `apply_step` is called
  for each step, for instance from an `Oscillator.on_low` callback.