#!/usr/bin/env python3

"""
Keypad

Holds the state of the 16 hexadecimal keys (0-F).  Input plugins write to it
whenever a host key mapped to a keypad key is pressed or released, and the CPU
reads it when executing key instructions.

The first key to go down is remembered so that a program waiting for a keypress
can pick it up.  The 'reset' switch (setup_keypress) must be called when a wait
begins, so that keys pressed (or held) beforehand are not mistaken for new ones.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.key_down = [False] * NUM_KEYS
        self.last_keypress = None

    def set_key(self, key, pressed):
        if not 0 <= key < NUM_KEYS:
            raise KeypadError("Key 0x{:x} does not exist, keys must be 0x0-0xf".format(key))

        pressed = bool(pressed)

        # Only the first new press since the last reset is kept
        if pressed and not self.key_down[key] and self.last_keypress is None:
            self.last_keypress = key

        self.key_down[key] = pressed

    def is_key_down(self, key):
        return self.key_down[key]

    def setup_keypress(self):
        self.last_keypress = None

    def get_keypress(self):
        return self.last_keypress
