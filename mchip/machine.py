#!/usr/bin/env python3

"""
Machine

Everything the running program can change lives here: RAM, the register file,
the call stack, both timers, the framebuffer and the keypad.  One Machine is
built per run and handed to the CPU, so there is no hidden global state, and
tests can build as many independent machines as they like.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import FONT_LOCATION, PROGRAM_LOCATION
from .fonts import SYSTEM_FONT
from .hostio import check_rom_size
from .keypad import Keypad
from .ram import RAM
from .registers import Registers
from .stack import Stack
from .timers import Timers


class Machine:
    def __init__(self, framebuffer, program=b"", keypad=None, font=SYSTEM_FONT):
        self.ram = RAM()
        self.registers = Registers()
        self.stack = Stack()
        self.timers = Timers()
        self.framebuffer = framebuffer
        self.keypad = Keypad() if keypad is None else keypad

        # Write the system font into RAM, then the program above it
        self.ram.write_block(FONT_LOCATION, font)
        self.load_program(program)

    def load_program(self, program):
        check_rom_size(program)
        self.ram.write_block(PROGRAM_LOCATION, program)
        self.registers.pc = PROGRAM_LOCATION
