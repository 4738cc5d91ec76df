#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.timers import Timers


class TestTimers(unittest.TestCase):
    def setUp(self):
        self.timers = Timers()

    def test_timers_init(self):
        self.assertEqual(0, self.timers.delay)
        self.assertEqual(0, self.timers.sound)
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_one_second_decay(self):
        self.timers.set_delay(10)
        self.timers.set_sound(10)

        for _ in range(60):
            self.timers.decrement()
            self.assertGreaterEqual(self.timers.delay, 0)

        self.assertEqual(0, self.timers.delay)
        self.assertEqual(0, self.timers.sound)

    def test_timers_independent(self):
        self.timers.set_delay(3)
        self.timers.set_sound(1)
        self.assertTrue(self.timers.is_sound_active())
        self.timers.decrement()
        self.assertEqual(2, self.timers.delay)
        self.assertEqual(0, self.timers.sound)
        self.assertFalse(self.timers.is_sound_active())

    def test_timers_full_range(self):
        self.timers.set_delay(0xFF)

        for _ in range(0x100):
            self.timers.decrement()

        self.assertEqual(0, self.timers.delay)
