"""Pin-level digital logic simulation: pins, gates, latches, memory chips, a control bus and microcode steps."""

__version__ = "0.1.0"

__all__ = [
    "circuit",
    "controlbus",
    "gates",
    "latch",
    "memory",
    "microcode",
    "oscillator",
    "pin",
    "utility",
]