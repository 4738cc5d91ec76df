#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.fonts import SYSTEM_FONT
from mchip.framebuffer import Framebuffer
from mchip.hostio import ROMError
from mchip.keypad import Keypad
from mchip.machine import Machine
from mchip.renderers.r_null import Renderer


class TestMachine(unittest.TestCase):
    def test_machine_layout(self):
        machine = Machine(Framebuffer(Renderer()), b"\x12\x00")
        self.assertEqual(SYSTEM_FONT, machine.ram.read_block(0x50, 80))
        self.assertEqual(0x1200, machine.ram.read_word(0x200))
        self.assertEqual(0x200, machine.registers.pc)
        self.assertEqual(0, machine.ram.read(0x202))
        self.assertEqual(0, machine.timers.delay)
        self.assertEqual(0, machine.stack.sp)

    def test_machine_max_program(self):
        machine = Machine(Framebuffer(Renderer()), bytes([0xAB]) * 3584)
        self.assertEqual(0xAB, machine.ram.read(0xFFF))

    def test_machine_oversized_program(self):
        self.assertRaises(ROMError, Machine, Framebuffer(Renderer()), bytes(3585))

    def test_machine_shared_keypad(self):
        keypad = Keypad()
        machine = Machine(Framebuffer(Renderer()), keypad=keypad)
        self.assertIs(keypad, machine.keypad)

    def test_machines_are_independent(self):
        machine_a = Machine(Framebuffer(Renderer()), b"\x60\x01")
        machine_b = Machine(Framebuffer(Renderer()), b"\x60\x02")
        machine_a.registers.v[0x0] = 0x12
        machine_a.ram.write(0x300, 0x34)
        self.assertEqual(0, machine_b.registers.v[0x0])
        self.assertEqual(0, machine_b.ram.read(0x300))
        self.assertEqual(0x6002, machine_b.ram.read_word(0x200))
