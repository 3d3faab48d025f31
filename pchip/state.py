#!/usr/bin/env python3

"""
Machine State

Plain container for the CPU's registers, program counter, call stack and
timers, along with the flag marking an Fx0A key wait in progress.  It has no behaviour of its own beyond construction and reset, as the
CPU enforces every rule about how these values change.

VF (v[0xF]) doubles as the carry, borrow, shift-out and sprite collision flag,
so its contents are overwritten by several instructions.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, PROGRAM_START, STACK_DEPTH
from .stack import Stack


class MachineState:
    def __init__(self):
        self.v = memoryview(bytearray(NUM_REGISTERS))  # Bytearrays are mutable, so register updates are fast
        self.stack = Stack(STACK_DEPTH)
        self.reset()

    def reset(self):
        self.v[:] = bytes(NUM_REGISTERS)
        self.i = 0               # Index register
        self.pc = PROGRAM_START  # Addresses below this hold interpreter data (the font)
        self.stack.clear()
        self.delay_timer = 0
        self.sound_timer = 0
        self.awaiting_keypress = False  # Set while an Fx0A wait is in progress

    @property
    def sp(self):
        # Derived, so it cannot get out of step with the stack
        return len(self.stack)
