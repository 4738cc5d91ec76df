#!/usr/bin/env python3

"""
Register File

Sixteen 8-bit general purpose registers (V0 - Vf), the 16-bit index register
(I), and the program counter.  Vf doubles as the flag register, and is written
implicitly by the carry, borrow, shift and sprite collision instructions.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import NUM_REGISTERS, PROGRAM_LOCATION


class Registers:
    def __init__(self):
        # Bytearrays are mutable and only hold 0-255, so an out-of-range write fails loudly instead of going unnoticed
        self.v = memoryview(bytearray(NUM_REGISTERS))
        self.i = 0
        self.pc = PROGRAM_LOCATION

