#!/usr/bin/env python3

"""
Curses TTY Terminal Input Plugin

A terminal only delivers characters.  It never says when a key goes down or
comes back up, so both events have to be guessed.

A background reader blocks on the terminal and passes every mapped character to
the main thread over a queue.  The main thread treats a character as a key
press, and holds that key down for KEYBOARD_FAKE_KEYDOWN_TIME seconds.  While a
key is held, the keyboard's auto-repeat keeps sending the character, which
pushes the release time back.  Once the character stops arriving, the key is
released.

ESC (27) or CTRL+C (3) in the terminal asks the program to quit.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import queue
from threading import Event, Thread
from time import time
from .i_null import Inputs as InputsBase
from ..constants import NUM_KEYS

KEYBOARD_FAKE_KEYDOWN_TIME = 0.2
QUIT_CHARS = (27, 3)


class KeyReader(Thread):
    """
    Waits on the terminal for characters and queues the keypad key for each
    mapped one.  A None in the queue means the user asked to quit.

    getch() blocks, so a stop request is only noticed once another character
    arrives.  The thread is a daemon, so it never holds up interpreter exit.
    """

    def __init__(self, screen, keymap_dict, key_queue):
        super().__init__(daemon=True)
        self.screen = screen
        self.keymap_dict = keymap_dict
        self.key_queue = key_queue
        self.stop_event = Event()

    def run(self):
        while not self.stop_event.is_set():
            char = self.screen.getch()

            if char < 0:
                continue  # Interrupted, or nothing to read

            char = ord(chr(char).lower())

            if char in QUIT_CHARS:
                self.key_queue.put(None)
                return

            hex_key = self.keymap_dict.get(char)

            if hex_key is not None:
                try:
                    self.key_queue.put_nowait(hex_key)
                except queue.Full:
                    pass  # Auto-repeat will send it again

    def stop(self):
        self.stop_event.set()


class Inputs(InputsBase):
    def __init__(self, keymap, renderer, set_key):
        super().__init__(keymap, renderer, set_key, force_lowercase=True)

        # Release deadline for each key, 0.0 while the key is up
        self.key_timers = [0.0] * NUM_KEYS
        self.input_queue = queue.Queue(NUM_KEYS)
        self.reader = KeyReader(renderer.get_curses_screen(), self.keymap_dict, self.input_queue)
        self.reader.start()

    def process_messages(self):
        now = time()
        self._release_expired(now)
        return self._take_queued(now)

    def _release_expired(self, now):
        for hex_key, deadline in enumerate(self.key_timers):
            if deadline and deadline <= now:
                self.key_timers[hex_key] = 0.0
                self.set_key(hex_key, False)

    def _take_queued(self, now):
        while True:
            try:
                hex_key = self.input_queue.get_nowait()
            except queue.Empty:
                return False

            if hex_key is None:
                return True

            self.key_timers[hex_key] = now + KEYBOARD_FAKE_KEYDOWN_TIME
            self.set_key(hex_key, True)

    def shutdown(self):
        # Not joined, as the reader is most likely still blocked in getch()
        self.reader.stop()
        super().shutdown()
