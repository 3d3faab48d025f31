#!/usr/bin/env python3

"""
PyGame Input Plugin

SDL reports real key down and key up events, so presses and releases are passed
straight through to the keypad.  Polling the event queue is not free, so this
should be called once per frame and no more.

Closing the window, or letting go of ESC, asks the program to quit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .i_null import Inputs as InputsBase


class Inputs(InputsBase):
    def process_messages(self):
        quit_program = False

        # Drain the whole queue even after a quit request, so no events are left behind
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                quit_program = True
            elif event.type == pygame.KEYDOWN:
                self._forward(event.key, True)
            elif event.type == pygame.KEYUP:
                if event.key == pygame.K_ESCAPE:
                    quit_program = True
                else:
                    self._forward(event.key, False)

        return quit_program

    def _forward(self, scancode, pressed):
        hex_key = self.keymap_dict.get(scancode)

        if hex_key is not None:
            self.set_key(hex_key, pressed)
