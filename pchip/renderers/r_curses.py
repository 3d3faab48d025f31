#!/usr/bin/env python3

"""
Curses Renderer Plugin

Shows the display inside a terminal (Linux TTY, Windows Command Prompt or
PowerShell).  A lit cell is a run of reverse-video spaces, an unlit cell is a
run of plain ones.  Terminal characters are about twice as tall as they are
wide, so every cell is 'scale' characters across.

Row 0 of the pad carries the title, and the display starts on row 1.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import curses
import _curses
from .r_null import Renderer as RendererBase

TITLE_ROWS = 1


class Renderer(RendererBase):
    def __init__(self, scale=None, curses_cursor_mode=None, **kwargs):
        self.cell_text = None
        self.pad = None
        self.dirty = False
        self.known_size = None  # Terminal (rows, columns) at the last full redraw
        self.cursor_mode = 0 if curses_cursor_mode is None else curses_cursor_mode
        self.screen = curses.initscr()
        self._set_cursor(self.cursor_mode)
        curses.noecho()
        curses.cbreak()

        super().__init__(2 if scale is None else scale)
        self.cell_text = " " * self.scale

    def _set_cursor(self, mode):
        try:
            curses.curs_set(mode)
        except _curses.error:
            pass  # Cursor visibility is fixed on this terminal

    def set_resolution(self, width, height):
        super().set_resolution(width, height)

        if width and height:
            # The extra column stops addstr failing when it writes the bottom-right cell
            self.pad = curses.newpad(height + TITLE_ROWS, width * self.scale + 1)
            self.dirty = True

    def set_pixel(self, x, y, colour):
        attribute = curses.A_REVERSE if colour else curses.A_NORMAL
        self.pad.addstr(y + TITLE_ROWS, x * self.scale, self.cell_text, attribute)
        self.dirty = True

    def refresh_display(self, content_changed=False):
        rows, columns = self.screen.getmaxyx()  # Windows consoles may always report the starting size

        if (rows, columns) != self.known_size:
            self.known_size = (rows, columns)
            self.screen.clear()

            if hasattr(curses, "resizeterm"):
                curses.resizeterm(rows, columns)

            self.screen.refresh()
            self.dirty = True  # Pad goes out on the next call
            return

        if self.dirty and self.pad is not None:
            self.pad.refresh(0, 0, 0, 0, rows - 1, columns - 1)
            self.dirty = False

    def set_title(self, title):
        line_len = self.width * self.scale

        # Titles that don't fit are dropped rather than cut short
        if self.pad is not None and len(title) < line_len:
            self.pad.addstr(0, 0, title.ljust(line_len), curses.A_REVERSE)
            self.dirty = True

    def shutdown(self):
        curses.nocbreak()
        curses.echo()

        if self.cursor_mode != 1:
            self._set_cursor(1)

        curses.endwin()
        super().shutdown()

    def get_curses_screen(self):
        # Input plugin reads keys from the same screen
        return self.screen
