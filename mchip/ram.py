#!/usr/bin/env python3

"""
RAM Emulator

A flat, fixed-size store of bytes.  The system font lives at the bottom, and
programs are loaded from address 0x200 upwards.

Every access is bounds-checked.  Unlike real hardware, reading or writing past
the top of memory doesn't wrap, it raises a RAMError, which the CPU reports as
a memory fault.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MEM_SIZE


class RAMError(Exception):
    pass


class RAM:
    def __init__(self, mem_size=MEM_SIZE):
        self.mem = memoryview(bytearray(mem_size))
        self.mem_top = mem_size - 1
        self.mem_size = mem_size

    def read(self, location):
        self.check_bounds(location)
        return self.mem[location]

    def read_block(self, location, size=1):
        if size > 0:
            self.check_bounds(location)
            self.check_bounds(location + size - 1)

        return bytes(self.mem[location:location + size])

    def read_word(self, location):
        # Instructions are big-endian
        return (self.read(location) << 8) | self.read(location + 1)

    def write(self, location, byte):
        self.check_bounds(location)
        self.mem[location] = byte & 0xFF

    def write_block(self, location, block):
        block_size = len(block)

        if block_size == 0:
            return

        block_top = location + block_size
        self.check_bounds(location)
        self.check_bounds(block_top - 1)
        self.mem[location:block_top] = block

    def check_bounds(self, location):
        if location < 0 or location > self.mem_top:
            raise RAMError("Memory access out of range at 0x{:04x}".format(location))
