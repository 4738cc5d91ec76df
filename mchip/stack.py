#!/usr/bin/env python3

"""
Stack Emulator

The call stack holds up to 16 return addresses.  It isn't mapped into system
RAM, because nothing running on the machine can see it directly; only CALL and
RET use it.

A fixed array of 16-bit slots and an explicit stack pointer are used, so the
stack pointer can be shown in debug output exactly as the hardware would hold
it.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from array import array
from .constants import STACK_DEPTH


class StackError(Exception):
    pass


class Stack:
    def __init__(self, size=STACK_DEPTH):
        self.slots = array("H", [0] * size)
        self.size = size
        self.sp = 0  # Index of the next free slot

    def push(self, address):
        if self.sp >= self.size:
            raise StackError("Stack overflow")

        self.slots[self.sp] = address
        self.sp += 1

    def pop(self):
        if self.sp <= 0:
            raise StackError("Stack underflow")

        self.sp -= 1
        return self.slots[self.sp]

    def get_items(self):
        # For debugging, oldest return address first
        return list(self.slots[:self.sp])
