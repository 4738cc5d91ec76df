#!/usr/bin/env python3

"""
Host I/O Functionality

Handles loading ROM binaries and the base system font for later writing into
RAM.  Machine state is never saved, so there is nothing to write back.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from .constants import MAX_ROM_SIZE
from .fonts import SYSTEM_FONT


class ROMError(Exception):
    pass


class Loader:
    def load_binary(self, filename):
        with open(filename, "rb") as f:
            return f.read()

    def load_rom(self, filename):
        # Unreadable or oversized ROMs are rejected before anything runs
        try:
            data = self.load_binary(filename)
        except OSError as err:
            raise ROMError("Unable to read ROM '{}': {}".format(filename, err.strerror or err)) from err

        check_rom_size(data)
        return data

    def load_system_font(self):
        return SYSTEM_FONT


def check_rom_size(data):
    if len(data) > MAX_ROM_SIZE:
        raise ROMError(
            "ROM is {} bytes, but at most {} bytes fit in memory.".format(len(data), MAX_ROM_SIZE)
        )
