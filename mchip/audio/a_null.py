#!/usr/bin/env python3

"""
Null Audio Plugin

Serves as a base class for other Audio plugins.  Can be used on its own if no
sound is required.

The only sound the machine can make is a single tone, heard whenever the sound
timer is above zero.  The Scheduler switches the buzzer on and off to match.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"


class Audio:
    def __init__(self):
        # Buzzer should be disabled (not playing sounds) by default
        self.buzzer_enabled = False

    def enable_buzzer(self, enabled):
        self.buzzer_enabled = enabled

    def is_null(self):
        # Only the null audio device should return True
        return True

    def shutdown(self):
        pass
