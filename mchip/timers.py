#!/usr/bin/env python3

"""
Delay and Sound Timers

Both timers are single bytes that count down towards zero at 60Hz, no matter
how fast the CPU is running.  Only the Scheduler calls 'decrement', and only
the CPU sets them.  A nonzero sound timer means the buzzer should be sounding.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Timers:
    def __init__(self):
        self.delay = 0
        self.sound = 0

    def set_delay(self, value):
        self.delay = value & 0xFF

    def set_sound(self, value):
        self.sound = value & 0xFF

    def decrement(self):
        # Clamp at zero, never wrap to 255
        if self.delay > 0:
            self.delay -= 1

        if self.sound > 0:
            self.sound -= 1

    def is_sound_active(self):
        return self.sound > 0
