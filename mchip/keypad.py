#!/usr/bin/env python3

"""
Keypad Emulator

Holds the state of the 16 hexadecimal keys (0 - F).  Input plugins report the
current level of every key before each tick, and the CPU reads them back.

As well as the level, each key has a 'newly pressed' latch.  The latch is set
whenever a key goes from released to pressed, and stays set until the CPU
consumes it.  This way, the wait-for-key instruction reacts to a fresh press
only (not to a key that was already being held), and a tap that is pressed and
released between two ticks is never missed.

Input plugins may run on their own thread, so all state is guarded by a lock.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from threading import Lock
from .constants import NUM_KEYS


class KeypadError(Exception):
    pass


class Keypad:
    def __init__(self):
        self.levels = [False] * NUM_KEYS
        self.newly_pressed = [False] * NUM_KEYS
        self.lock = Lock()

    def set_state(self, levels):
        # The latest reported level always wins
        if len(levels) != NUM_KEYS:
            raise KeypadError("Key state must contain exactly 16 levels")

        with self.lock:
            for key, level in enumerate(levels):
                level = bool(level)

                if level and not self.levels[key]:
                    self.newly_pressed[key] = True

                self.levels[key] = level

    def press(self, key):
        with self.lock:
            if not self.levels[key]:
                self.newly_pressed[key] = True

            self.levels[key] = True

    def release(self, key):
        with self.lock:
            self.levels[key] = False

    def is_pressed(self, key):
        return self.levels[key & 0xF]

    def consume_newly_pressed(self):
        # Returns the lowest key code pressed since it was last consumed, or None
        with self.lock:
            for key in range(NUM_KEYS):
                if self.newly_pressed[key]:
                    self.newly_pressed[key] = False
                    return key

        return None

    def clear_newly_pressed(self):
        with self.lock:
            self.newly_pressed = [False] * NUM_KEYS
