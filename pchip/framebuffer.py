#!/usr/bin/env python3

"""
Framebuffer Emulator

Pixels are written here by the CPU, and are only drawn to the actual display
(the host rendering system) when the CPU has flagged that a redraw is needed.
Renderers never write into the framebuffer, they only read it.

Programs for this system cannot write directly into video RAM.  Instead,
sprites are drawn to the screen by XORing their pixels against the existing
ones.  Collisions (where any pixel was set, but was unset by an XOR) are
reported back to the caller.

Each cell holds 0 (off) or 1 (on), stored row-major, so the cell for (x, y) is
at y * width + x.  Coordinates wrap on each axis independently, so a sprite
hanging off the right edge reappears on the left of the same row, never on the
next one.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import DISPLAY_WIDTH, DISPLAY_HEIGHT
from .ram import RAM


class Framebuffer():
    def __init__(self, vid_width=DISPLAY_WIDTH, vid_height=DISPLAY_HEIGHT):
        self.vid_width = vid_width
        self.vid_height = vid_height
        self.vid_size = vid_width * vid_height
        self.ram_bank = RAM(self.vid_size)

    def clear(self):
        self.ram_bank.clear()

    def xor_pixel(self, x, y):
        # Returns True if a lit pixel was switched off
        vram_loc = (y % self.vid_height) * self.vid_width + (x % self.vid_width)
        pixel = self.ram_bank.read(vram_loc)
        self.ram_bank.write(vram_loc, pixel ^ 1)
        return pixel != 0

    def get_pixel(self, x, y):
        return self.ram_bank.read(y * self.vid_width + x)

    def get_cells(self):
        # Read-only view for renderers and tests
        return self.ram_bank.mem.toreadonly()

    def get_vid_size(self):
        return self.vid_width, self.vid_height
