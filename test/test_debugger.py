#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

import unittest
from mchip.cpu import CPU
from mchip.debugger import Debugger
from mchip.framebuffer import Framebuffer
from mchip.machine import Machine
from mchip.renderers.r_null import Renderer


class TestDebugger(unittest.TestCase):
    def setUp(self):
        self.debugger = Debugger()
        self.cpu = CPU(Machine(Framebuffer(Renderer()), b"\x6A\x2B"), self.debugger)

    def test_debugger_line(self):
        self.cpu.step()
        debug_str = self.debugger.debug(self.cpu, "LD Va, 0x2b")
        self.assertTrue(debug_str.startswith("V: 0x00000000002b"))
        self.assertIn("I: 0x0000 DT: 0x00 ST: 0x00 PC: 0x200 OP: 0x6a2b IN: LD Va, 0x2b", debug_str)
        self.assertNotIn("\n", debug_str)

    def test_debugger_before_first_fetch(self):
        self.assertIn("OP: ----", self.debugger.debug(self.cpu, None))

    def test_debugger_verbose(self):
        self.assertIn("\nSP: 0 Stack: (Empty)\nState: Running", self.debugger.debug(self.cpu, None, True))
        self.cpu.machine.stack.push(0x202)
        self.cpu.machine.stack.push(0x304)
        self.assertIn("\nSP: 2 Stack: 0x202 0x304\n", self.debugger.debug(self.cpu, None, True))

    def test_debugger_live(self):
        self.assertFalse(self.debugger.is_live())
        self.debugger.set_live(True)
        self.assertTrue(self.debugger.is_live())
