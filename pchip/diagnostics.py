#!/usr/bin/env python3

"""
CPU Diagnostics

Formats the machine state for error reports:
    * All 16 of the [V] registers, starting with most significant (Vf) and
      reducing to least significant (V0)
    * I  - Index register
    * DT - Delay timer
    * ST - Sound timer
    * PC - Program counter of the instruction being executed
    * OP - OpCode number

If verbose, the stack contents are added on a second line.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


def describe_state(cpu, verbose=False):
    state = cpu.state
    debug_str = (
        "V: 0x" + ("{:02x}" * 16) + " I: 0x{:04x} DT: 0x{:02x} ST: 0x{:02x} PC: 0x{:03x} OP: 0x{:04x}"
    ).format(
        *[state.v[reg_num] for reg_num in range(15, -1, -1)] +
        [state.i, state.delay_timer, state.sound_timer, cpu.debug_pc, cpu.opcode]
    )

    if verbose:
        stack_items = state.stack.get_items()
        stack_str = (" 0x{:03x}" * len(stack_items)).format(*stack_items)
        debug_str += "\nStack:{}".format(stack_str or " (Empty)")

    return debug_str
