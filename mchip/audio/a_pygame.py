#!/usr/bin/env python3

"""
PyGame Audio Plugin

Plays the buzzer through PyGame / SDL.

The emulated buzzer is simply 'on' or 'off'.  While it is on, a square wave
tone is looped.  A whole number of wave cycles is rendered into an unsigned
8-bit buffer once at startup, so looping it never clicks.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import pygame
from .a_null import Audio as AudioBase

PLAYBACK_FREQUENCY = 44100
TONE_FREQUENCY = 680.0
TONE_CYCLES = 17  # 17 cycles at 680Hz fit almost exactly into 1102 samples
DEFAULT_VOLUME = 0.1


def square_wave(frequency, cycles, playback_frequency=PLAYBACK_FREQUENCY):
    samples_per_cycle = playback_frequency / frequency
    buffer_size = int(round(samples_per_cycle * cycles))
    buffer = bytearray(buffer_size)

    for sample in range(buffer_size):
        # High for the first half of each cycle, low for the second
        buffer[sample] = 0xFF if (sample % samples_per_cycle) < samples_per_cycle / 2 else 0x00

    return buffer


class Audio(AudioBase):
    def __init__(self):
        super().__init__()
        pygame.mixer.pre_init(PLAYBACK_FREQUENCY, size=8, channels=1, buffer=512, allowedchanges=0)
        pygame.mixer.init()
        self.sound = pygame.mixer.Sound(buffer=square_wave(TONE_FREQUENCY, TONE_CYCLES))
        self.sound.set_volume(DEFAULT_VOLUME)

    def enable_buzzer(self, enabled):
        # If the buzzer is already in the requested state, the sound isn't restarted
        if enabled:
            if not self.buzzer_enabled:
                self.sound.play(-1)
        else:
            if self.buzzer_enabled:
                self.sound.stop()

        super().enable_buzzer(enabled)

    def shutdown(self):
        if self.sound:
            self.sound.stop()

        pygame.mixer.quit()
        super().shutdown()

    def is_null(self):
        return False
