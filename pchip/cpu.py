#!/usr/bin/env python3

"""
CPU Emulator (CHIP-8)

Like a real computer, this is where most of the processing happens.  The CPU
owns the system memory (with the font preloaded), the machine state, the
framebuffer and the keypad.  It is driven from outside: every call to step()
fetches, decodes and executes exactly one instruction, and tick_timers() is
called separately at the timer rate (normally 60Hz).

Instructions that change the framebuffer raise the draw flag.  The CPU never
lowers it again; that is up to whoever draws the framebuffer.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from .constants import (
    APP_INTRO, MEM_SIZE, FONT_LOCATION, FONT_GLYPH_SIZE, PROGRAM_START, MAX_ROM_SIZE, SYSTEM_FONT, STEP_EXECUTED,
    STEP_AWAITING_KEY
)
from .diagnostics import describe_state
from .framebuffer import Framebuffer
from .keypad import Keypad
from .ram import RAM
from .state import MachineState

CPU_ENDIAN = "big"  # CHIP-8 is big-endian
ADDR_BITMASK = 0xFFFF  # PC and I are 16-bit registers


class CPUError(Exception):
    pass


class UnknownOpcodeError(CPUError):
    def __init__(self, message, opcode, address):
        super().__init__(message)
        self.opcode = opcode
        self.address = address


class RomTooLargeError(CPUError):
    pass


class CPU:
    def __init__(self, shift_quirks=None, load_quirks=None, logic_quirks=None, rng=None):
        self.ram = RAM(MEM_SIZE)
        self.ram.write_block(FONT_LOCATION, SYSTEM_FONT)
        self.state = MachineState()
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.rng = Random() if rng is None else rng  # Never shared between CPUs

        """
        Quirks
        ------

        - Shift quirks: 8xy6/8xyE shift Vy and put the result in Vx (original COSMAC VIP), rather than shifting Vx.
        - Load quirks : Fx55/Fx65 leave I pointing after the last register transferred.
        - Logic quirks: 8xy1/8xy2/8xy3 reset Vf.
        """

        self.shift_quirks = False if shift_quirks is None else shift_quirks
        self.load_quirks = False if load_quirks is None else load_quirks
        self.logic_quirks = False if logic_quirks is None else logic_quirks

        # Define instruction pointers.
        # n = Nibble
        # kk = Byte
        # nnn = address
        # x/y = register (0-15)
        self.instructions = {
            # Initial lookup for instructions' first nibble
            0x0: self._0nnn,  # Alias for bitmask 0xFFFF
            0x1: self._1nnn,
            0x2: self._2nnn,
            0x3: self._3xkk,
            0x4: self._4xkk,
            0x5: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x6: self._6xkk,
            0x7: self._7xkk,
            0x8: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0x9: self._5nnn_8nnn_9nnn,  # Alias for bitmask 0xF00F
            0xA: self._Annn,
            0xB: self._Bnnn,
            0xC: self._Cxkk,
            0xD: self._Dxyn,
            0xE: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            0xF: self._Ennn_Fnnn,  # Alias for bitmask 0xF0FF
            # Instructions beginning with nibble 0x0, bitmask 0xFFFF (i.e., exact match)
            0x00E0: self._00E0,
            0x00EE: self._00EE,
            # Instructions beginning with nibble 0x5/0x8/0x9, bitmask 0xF00F
            0x5000: self._5xy0,
            0x8000: self._8xy0,
            0x8001: self._8xy1,
            0x8002: self._8xy2,
            0x8003: self._8xy3,
            0x8004: self._8xy4,
            0x8005: self._8xy5,
            0x8006: self._8xy6,
            0x8007: self._8xy7,
            0x800E: self._8xyE,
            0x9000: self._9xy0,
            # Instructions beginning with nibble 0xE/0xF, bitmask 0xF0FF
            0xE09E: self._Ex9E,
            0xE0A1: self._ExA1,
            0xF007: self._Fx07,
            0xF00A: self._Fx0A,
            0xF015: self._Fx15,
            0xF018: self._Fx18,
            0xF01E: self._Fx1E,
            0xF029: self._Fx29,
            0xF033: self._Fx33,
            0xF055: self._Fx55,
            0xF065: self._Fx65
        }

        # Current opcode, and the address it was fetched from (for error reports)
        self.debug_pc = 0
        self.opcode = 0

        # Set by instructions that change the framebuffer, cleared by the consumer
        self.draw_flag = False

    def load(self, rom):
        rom_size = len(rom)

        if rom_size > MAX_ROM_SIZE:
            raise RomTooLargeError(
                "ROM is {} bytes, but only {} bytes are available from address 0x{:03x}".format(
                    rom_size, MAX_ROM_SIZE, PROGRAM_START
                )
            )

        self.ram.write_block(PROGRAM_START, rom)

    def step(self):
        # Keep track of the program counter before altering it in any way for error reports
        self.debug_pc = self.state.pc
        self.opcode = self.fetch()
        self.inc_pc()  # Program counter updates after fetch, but before execute
        self.decode_exec()
        return STEP_AWAITING_KEY if self.state.awaiting_keypress else STEP_EXECUTED

    def tick_timers(self):
        state = self.state

        if state.delay_timer > 0:
            state.delay_timer -= 1

        if state.sound_timer > 0:
            state.sound_timer -= 1

    def set_key(self, key, pressed):
        self.keypad.set_key(key, pressed)

    def clear_draw_flag(self):
        self.draw_flag = False

    def fetch(self):
        return int.from_bytes(self.ram.read_block(self.state.pc, 2), CPU_ENDIAN, signed=False)

    def _call_masked_instruction(self, masked_opcode):
        instruction = self.instructions.get(masked_opcode)

        if instruction is None:
            self._opcode_unsupported()

        instruction()

    def decode_exec(self):
        self._call_masked_instruction((0xF000 & self.opcode) >> 12)

    def inc_pc(self):
        self.state.pc = (self.state.pc + 2) & ADDR_BITMASK

    def dec_pc(self):
        # Only used to re-run an instruction (keypress wait)
        self.state.pc = (self.state.pc - 2) & ADDR_BITMASK

    # References to Vx, Vy, byte and addr are always in the same opcode position throughout all instructions, so avoid
    # excessive code duplication (ever so slight slowdown).  Don't reference these more than necessary as they are
    # recalculated each time.
    @property
    def vx(self):
        return (self.opcode & 0xF00) >> 8

    @property
    def vy(self):
        return (self.opcode & 0xF0) >> 4

    @property
    def addr(self):
        return self.opcode & 0xFFF

    @property
    def byte(self):
        return self.opcode & 0xFF

    @property
    def nibble(self):
        return self.opcode & 0xF

    def _opcode_unsupported(self):
        raise UnknownOpcodeError(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\nOpcode 0x{:04x} at address 0x{:03x} is not a known instruction."
            ).format(
                APP_INTRO, describe_state(self, verbose=True), self.opcode, self.debug_pc
            ),
            self.opcode,
            self.debug_pc
        ) from None

    def _0nnn(self):
        opcode = self.opcode

        if opcode < 0x10:
            # Opcodes 0x0 - 0xF are used internally for indexing
            self._opcode_unsupported()

        self._call_masked_instruction(opcode)

    def _5nnn_8nnn_9nnn(self):
        self._call_masked_instruction(self.opcode & 0xF00F)

    def _Ennn_Fnnn(self):
        self._call_masked_instruction(self.opcode & 0xF0FF)

    def _00E0(self):  # CLS
        self.framebuffer.clear()
        self.draw_flag = True

    def _00EE(self):  # RET
        self.state.pc = self.state.stack.pop()

    def _1nnn(self):  # JP addr
        self.state.pc = self.addr

    def _2nnn(self):  # CALL addr
        state = self.state
        state.stack.push(state.pc)
        state.pc = self.addr

    def _post_skip(self):
        self.inc_pc()

    def _3xkk(self):  # SE Vx, byte
        if self.state.v[self.vx] == self.byte:
            self._post_skip()

    def _4xkk(self):  # SNE Vx, byte
        if self.state.v[self.vx] != self.byte:
            self._post_skip()

    def _5xy0(self):  # SE Vx, Vy
        v = self.state.v

        if v[self.vx] == v[self.vy]:
            self._post_skip()

    def _6xkk(self):  # LD Vx, byte
        self.state.v[self.vx] = self.byte

    def _7xkk(self):  # ADD Vx, byte
        v = self.state.v
        vx = self.vx
        v[vx] = (v[vx] + self.byte) & 0xFF  # No carry flag

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.state.v[0xF] = 0

    def _8xy0(self):  # LD Vx, Vy
        v = self.state.v
        v[self.vx] = v[self.vy]

    def _8xy1(self):  # OR Vx, Vy
        v = self.state.v
        v[self.vx] |= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self):  # AND Vx, Vy
        v = self.state.v
        v[self.vx] &= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self):  # XOR Vx, Vy
        v = self.state.v
        v[self.vx] ^= v[self.vy]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self):  # ADD Vx, Vy
        v = self.state.v
        val = v[self.vx] + v[self.vy]
        v[self.vx] = val & 0xFF
        v[0xF] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, val):  # Post-SUB/SUBN
        v = self.state.v
        v[self.vx] = val & 0xFF
        # Vf is set when NOT borrowing, and this must happen AFTER Vx is set, as Vf may be one of the parameters
        v[0xF] = int(val >= 0)

    def _8xy5(self):  # SUB Vx, Vy
        v = self.state.v
        self._post_8xy5_8xy7(v[self.vx] - v[self.vy])

    def _8xy6(self):  # SHR Vx {, Vy}
        v = self.state.v
        val = v[self.vy if self.shift_quirks else self.vx]
        v[self.vx] = val >> 1  # The result is put in Vx either way
        v[0xF] = val & 1

    def _8xy7(self):  # SUBN Vx, Vy
        v = self.state.v
        self._post_8xy5_8xy7(v[self.vy] - v[self.vx])

    def _8xyE(self):  # SHL Vx {, Vy}
        v = self.state.v
        val = v[self.vy if self.shift_quirks else self.vx]
        v[self.vx] = (val << 1) & 0xFF
        v[0xF] = val >> 7

    def _9xy0(self):  # SNE Vx, Vy
        v = self.state.v

        if v[self.vx] != v[self.vy]:
            self._post_skip()

    def _Annn(self):  # LD I, addr
        self.state.i = self.addr

    def _Bnnn(self):  # JP V0, addr
        state = self.state
        state.pc = (state.v[0] + self.addr) & ADDR_BITMASK

    def _Cxkk(self):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.state.v[self.vx] = self.rng.randint(0, 0xFF) & self.byte

    def _Dxyn(self):  # DRW Vx, Vy, nibble
        state = self.state
        v = state.v
        framebuffer = self.framebuffer

        # The sprite's start always wraps, and so does every pixel drawn from it
        vid_width, vid_height = framebuffer.get_vid_size()
        vx_pos = v[self.vx] % vid_width
        vy_pos = v[self.vy] % vid_height

        # Fetch the whole sprite first, so a bad address fails before anything is drawn
        sprite = self.ram.read_block(state.i, self.nibble)
        collided = False

        for y, spr_data in enumerate(sprite):
            for x in range(8):
                if spr_data & (0x80 >> x) and framebuffer.xor_pixel(vx_pos + x, vy_pos + y):
                    # Don't stop drawing.  Set the flag, and never unset it for this sprite.
                    collided = True

        v[0xF] = int(collided)
        self.draw_flag = True

    def _Ex9E(self):  # SKP Vx
        if self.keypad.is_key_down(self.state.v[self.vx] & 0xF):
            self._post_skip()

    def _ExA1(self):  # SKNP Vx
        if not self.keypad.is_key_down(self.state.v[self.vx] & 0xF):
            self._post_skip()

    def _Fx07(self):  # LD Vx, DT
        self.state.v[self.vx] = self.state.delay_timer

    def _Fx0A(self):  # LD Vx, K
        # This opcode waits for a keypress, but since the timers still need to expire and the display still needs
        # updating, we'll return control to the caller and simply decrement the incremented program counter.  The
        # caller sees STEP_AWAITING_KEY until a key goes down.

        if self.state.awaiting_keypress:
            key = self.keypad.get_keypress()
        else:
            self.keypad.setup_keypress()  # Ignore any currently/previously pressed/held keys.
            self.state.awaiting_keypress = True
            key = None

        if key is None:
            # We need to come back here on the next instruction, because no key has been pressed.
            self.dec_pc()
        else:
            self.state.v[self.vx] = key
            self.state.awaiting_keypress = False

    def _Fx15(self):  # LD DT, Vx
        self.state.delay_timer = self.state.v[self.vx]

    def _Fx18(self):  # LD ST, Vx
        self.state.sound_timer = self.state.v[self.vx]

    def _Fx1E(self):  # ADD I, Vx
        state = self.state
        state.i = (state.i + state.v[self.vx]) & ADDR_BITMASK

    def _Fx29(self):  # LD F, Vx
        # Only the low nibble selects a glyph
        self.state.i = FONT_LOCATION + FONT_GLYPH_SIZE * (self.state.v[self.vx] & 0xF)

    def _Fx33(self):  # LD B, Vx
        state = self.state
        val = state.v[self.vx]
        # Most-significant digit first
        self.ram.write_block(state.i, bytes((val // 100, (val // 10) % 10, val % 10)))

    def _post_Fx55_Fx65(self):
        if self.load_quirks:
            state = self.state
            state.i = (state.i + self.vx + 1) & ADDR_BITMASK

    def _Fx55(self):  # LD [I], Vx
        state = self.state
        # Ensure with +1s that the final register is copied
        self.ram.write_block(state.i, state.v[:self.vx + 1])
        self._post_Fx55_Fx65()

    def _Fx65(self):  # LD Vx, [I]
        state = self.state
        count = self.vx + 1
        state.v[:count] = self.ram.read_block(state.i, count)
        self._post_Fx55_Fx65()
