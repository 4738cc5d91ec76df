#!/usr/bin/env python3

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

# App identification
APP_NAME = "MonoChip Emulator"
APP_VERSION = "1.0.0"
APP_COPYRIGHT = "Copyright (C) 2022 Gregory Maynard-Hoare, licensed under GNU Affero General Public License v3.0"
APP_INTRO = "{} V{} -- ".format(APP_NAME, APP_VERSION)

# Memory map
MEM_SIZE = 0x1000
MEM_TOP = MEM_SIZE - 1
FONT_LOCATION = 0x50
PROGRAM_LOCATION = 0x200
MAX_ROM_SIZE = MEM_SIZE - PROGRAM_LOCATION  # 3584 bytes

# Register file
NUM_REGISTERS = 0x10
STACK_DEPTH = 16
FLAG_REGISTER = 0xF

# Display
VID_WIDTH = 64
VID_HEIGHT = 32

# Keypad
NUM_KEYS = 0x10

# Timing
DEFAULT_CLOCK_SPEED = 400  # Instructions per second
TIMER_FREQ = 60.0          # Delay and sound timers always decay at 60Hz
DISPLAY_FREQ = 60.0        # Host display refresh and input polling

# Default mappings for keys 0-F.  Note that the keyscans (on a UK QWERTY keyboard) and ASCII characters for these are
# the same code, so this works for both PyGame and Curses.  Laid out as the usual 4x4 block starting at '1'.
DEFAULT_KEYMAP = "120,49,50,51,113,119,101,97,115,100,122,99,52,114,102,118"

# Default foreground (lit pixel) colour as R,G,B
DEFAULT_COLOUR = "0,0,255"

# Quirks, which can each be switched on or off from the command line
CPU_QUIRKS = ["load", "shift", "logic", "jump"]
