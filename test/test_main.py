#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import os
import tempfile
import unittest
from contextlib import redirect_stdout
from io import StringIO
from pchip import main, StartupError
from pchip.constants import DEFAULT_KEYMAP
from pchip.cpu import RomTooLargeError, UnknownOpcodeError
from pchip.stack import StackUnderflowError


class TestMain(unittest.TestCase):
    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(self.temp_dir.cleanup)

    def _write_rom(self, data):
        filename = os.path.join(self.temp_dir.name, "test.ch8")

        with open(filename, "wb") as f:
            f.write(data)

        return filename

    def _args(self, filename, **overrides):
        args = {
            "filename": filename,
            "cycles_per_frame": None,
            "renderer": "null",
            "scale": None,
            "smoothing": None,
            "keymap": DEFAULT_KEYMAP,
            "curses_cursor_mode": None,
            "pygame_palette": None,
            "shift_quirks": None,
            "load_quirks": None,
            "logic_quirks": None
        }
        args.update(overrides)
        return args

    def _main(self, args):
        with redirect_stdout(StringIO()) as output:
            main(args)

        return output.getvalue()

    def test_main_missing_rom(self):
        self.assertRaises(
            StartupError, self._main, self._args(os.path.join(self.temp_dir.name, "NoFile.ch8"))
        )

    def test_main_unknown_renderer(self):
        self.assertRaises(StartupError, self._main, self._args(self._write_rom(b"\x12\x00"), renderer="vga"))

    def test_main_bad_cycles(self):
        self.assertRaises(StartupError, self._main, self._args(self._write_rom(b"\x12\x00"), cycles_per_frame=0))

    def test_main_rom_too_large(self):
        self.assertRaises(RomTooLargeError, self._main, self._args(self._write_rom(b"\x00" * 0xE01)))

    def test_main_fatal_opcode(self):
        # Clear the screen, set a register, then crash
        filename = self._write_rom(b"\x00\xE0\x60\x01\xFF\xFF")
        self.assertRaises(UnknownOpcodeError, self._main, self._args(filename))

    def test_main_fatal_return(self):
        self.assertRaises(StackUnderflowError, self._main, self._args(self._write_rom(b"\x00\xEE"), shift_quirks=1))
