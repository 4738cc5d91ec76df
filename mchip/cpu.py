#!/usr/bin/env python3

"""
CPU Emulator

Like a real computer, this is where most of the processing happens.  Each call
to 'step' runs exactly one tick: fetch the instruction word at the program
counter, decode it, and execute it against the Machine.

The CPU has two states.  'Running' is the normal fetch-decode-execute state.
'AwaitingKey' is entered by the 'LD Vx, K' instruction, and while in it, a tick
only checks the keypad for a fresh keypress.  The program counter is left
pointing at the waiting instruction, so it doesn't move until a key arrives.
Nothing ever blocks, so the Scheduler can keep the timers and the display going
in the meantime.

Any fault (an unknown instruction, a stack overflow or underflow, or memory
accessed out of range) halts the CPU for good.  The raised error carries the
program counter and the raw instruction word, and its message includes a full
register dump.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from random import Random
from . import instructions as ins
from .constants import APP_INTRO, FLAG_REGISTER, FONT_LOCATION, PROGRAM_LOCATION, MEM_TOP
from .debugger import Debugger
from .fonts import GLYPH_SIZE
from .instructions import DecodeError, decode, disassemble
from .ram import RAMError
from .stack import StackError

# CPU states
RUNNING = "Running"
AWAITING_KEY = "AwaitingKey"


class CPUError(Exception):
    def __init__(self, message, pc=None, opcode=None):
        super().__init__(message)
        self.pc = pc
        self.opcode = opcode


class OpcodeError(CPUError):
    pass


class StackFaultError(CPUError):
    pass


class MemoryFaultError(CPUError):
    pass


class CPU:
    def __init__(self, machine, debugger=None, load_quirks=False, shift_quirks=False, logic_quirks=False,
                 jump_quirks=False, rng=None):

        self.machine = machine
        self.ram = machine.ram
        self.registers = machine.registers
        self.v = machine.registers.v
        self.stack = machine.stack
        self.timers = machine.timers
        self.framebuffer = machine.framebuffer
        self.keypad = machine.keypad
        self.debugger = Debugger() if debugger is None else debugger
        self.live_debug = self.debugger.is_live()
        self.rng = Random() if rng is None else rng

        """
        Quirks
        ------

        - Load quirks : 'LD [I], Vx' and 'LD Vx, [I]' leave I pointing past the last register transferred.
        - Shift quirks: 'SHR' and 'SHL' shift Vx in place, rather than shifting Vy into Vx.
        - Logic quirks: 'OR', 'AND' and 'XOR' reset Vf to zero.
        - Jump quirks : 'JP V0, addr' becomes 'JP Vx, xnn', using the register in the second nibble.

        All are disabled by default.
        """

        self.load_quirks = load_quirks
        self.shift_quirks = shift_quirks
        self.logic_quirks = logic_quirks
        self.jump_quirks = jump_quirks

        self.instructions = {
            ins.CLS:       self._00E0,
            ins.RET:       self._00EE,
            ins.JP:        self._1nnn,
            ins.CALL:      self._2nnn,
            ins.SE_BYTE:   self._3xkk,
            ins.SNE_BYTE:  self._4xkk,
            ins.SE_REG:    self._5xy0,
            ins.LD_BYTE:   self._6xkk,
            ins.ADD_BYTE:  self._7xkk,
            ins.LD_REG:    self._8xy0,
            ins.OR:        self._8xy1,
            ins.AND:       self._8xy2,
            ins.XOR:       self._8xy3,
            ins.ADD_REG:   self._8xy4,
            ins.SUB:       self._8xy5,
            ins.SHR:       self._8xy6,
            ins.SUBN:      self._8xy7,
            ins.SHL:       self._8xyE,
            ins.SNE_REG:   self._9xy0,
            ins.LD_I:      self._Annn,
            ins.JP_V0:     self._Bnnn,
            ins.RND:       self._Cxkk,
            ins.DRW:       self._Dxyn,
            ins.SKP:       self._Ex9E,
            ins.SKNP:      self._ExA1,
            ins.LD_VX_DT:  self._Fx07,
            ins.LD_VX_K:   self._Fx0A,
            ins.LD_DT_VX:  self._Fx15,
            ins.LD_ST_VX:  self._Fx18,
            ins.ADD_I:     self._Fx1E,
            ins.LD_F:      self._Fx29,
            ins.LD_B:      self._Fx33,
            ins.LD_MEM_VX: self._Fx55,
            ins.LD_VX_MEM: self._Fx65
        }

        self.state = RUNNING
        self.key_register = 0  # Register to receive the key when leaving AwaitingKey
        self.halted = False

        # Program counter and opcode of the instruction being executed, kept for debugging
        self.debug_pc = self.registers.pc
        self.opcode = None

    def step(self):
        if self.halted:
            raise CPUError("Emulation halted.  The CPU cannot continue after a fault.", self.debug_pc, self.opcode)

        if self.state == AWAITING_KEY:
            self._poll_keypress()
            return

        registers = self.registers
        self.debug_pc = registers.pc  # Do this all the time in case there is a crash
        self.opcode = None

        try:
            self.opcode = self.fetch()
            instruction = decode(self.opcode)
            registers.pc += 2  # Program counter updates after fetch and decode, but before execute

            if self.live_debug:
                self.debug(disassemble(instruction))

            self.instructions[instruction.op](instruction)
        except DecodeError as err:
            self._fault(OpcodeError, "Opcode 0x{:04x} is not a recognised instruction".format(self.opcode), err)
        except StackError as err:
            self._fault(StackFaultError, str(err), err)
        except RAMError as err:
            self._fault(MemoryFaultError, str(err), err)

    def fetch(self):
        pc = self.registers.pc

        # Both bytes of the word must sit inside program memory
        if pc < PROGRAM_LOCATION or pc + 1 > MEM_TOP:
            raise RAMError("Program counter 0x{:04x} is outside program memory".format(pc))

        return self.ram.read_word(pc)

    def is_awaiting_key(self):
        return self.state == AWAITING_KEY

    def _poll_keypress(self):
        key = self.keypad.consume_newly_pressed()

        if key is not None:
            self.v[self.key_register] = key
            self.registers.pc += 2  # Finally move past the waiting instruction
            self.state = RUNNING

    def _fault(self, error_class, reason, cause):
        self.halted = True
        opcode_str = "unavailable" if self.opcode is None else "0x{:04x}".format(self.opcode)

        raise error_class(
            (
                "Emulation halted.\n\n" +
                "{}Debug info:\n" +
                "{}\n\n{} at address 0x{:03x} (opcode {})."
            ).format(
                APP_INTRO, self.debugger.debug(self, "???", verbose=True), reason, self.debug_pc, opcode_str
            ),
            self.debug_pc,
            self.opcode
        ) from cause

    def debug(self, instruction):
        self.debugger.output(self, instruction)

    def _skip(self):
        self.registers.pc += 2

    def _00E0(self, _):  # CLS
        self.framebuffer.clear()

    def _00EE(self, _):  # RET
        self.registers.pc = self.stack.pop()

    def _1nnn(self, op):  # JP addr
        self.registers.pc = op.nnn

    def _2nnn(self, op):  # CALL addr
        # The program counter has already moved on, so this is the return address
        self.stack.push(self.registers.pc)
        self.registers.pc = op.nnn

    def _3xkk(self, op):  # SE Vx, byte
        if self.v[op.x] == op.kk:
            self._skip()

    def _4xkk(self, op):  # SNE Vx, byte
        if self.v[op.x] != op.kk:
            self._skip()

    def _5xy0(self, op):  # SE Vx, Vy
        if self.v[op.x] == self.v[op.y]:
            self._skip()

    def _6xkk(self, op):  # LD Vx, byte
        self.v[op.x] = op.kk

    def _7xkk(self, op):  # ADD Vx, byte
        # No carry flag for this one
        self.v[op.x] = (self.v[op.x] + op.kk) & 0xFF

    def _post_8xy1_8xy2_8xy3(self):
        if self.logic_quirks:
            self.v[FLAG_REGISTER] = 0

    def _8xy0(self, op):  # LD Vx, Vy
        self.v[op.x] = self.v[op.y]

    def _8xy1(self, op):  # OR Vx, Vy
        self.v[op.x] |= self.v[op.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy2(self, op):  # AND Vx, Vy
        self.v[op.x] &= self.v[op.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy3(self, op):  # XOR Vx, Vy
        self.v[op.x] ^= self.v[op.y]
        self._post_8xy1_8xy2_8xy3()

    def _8xy4(self, op):  # ADD Vx, Vy
        val = self.v[op.x] + self.v[op.y]
        self.v[op.x] = val & 0xFF
        self.v[FLAG_REGISTER] = int(val > 0xFF)  # Vf is set when carrying

    def _post_8xy5_8xy7(self, x, val):  # Post-SUB/SUBN
        self.v[x] = val & 0xFF
        # Vf is set when NOT borrowing, and this should happen AFTER Vx is set, as sometimes Vf is specified in the
        # parameters.
        self.v[FLAG_REGISTER] = int(val >= 0)

    def _8xy5(self, op):  # SUB Vx, Vy
        self._post_8xy5_8xy7(op.x, self.v[op.x] - self.v[op.y])

    def _8xy6(self, op):  # SHR Vx, Vy
        val = self.v[op.x if self.shift_quirks else op.y]
        self.v[op.x] = val >> 1
        self.v[FLAG_REGISTER] = val & 1  # Bit shifted out

    def _8xy7(self, op):  # SUBN Vx, Vy
        self._post_8xy5_8xy7(op.x, self.v[op.y] - self.v[op.x])

    def _8xyE(self, op):  # SHL Vx, Vy
        val = self.v[op.x if self.shift_quirks else op.y]
        self.v[op.x] = (val << 1) & 0xFF
        self.v[FLAG_REGISTER] = val >> 7  # Bit shifted out

    def _9xy0(self, op):  # SNE Vx, Vy
        if self.v[op.x] != self.v[op.y]:
            self._skip()

    def _Annn(self, op):  # LD I, addr
        self.registers.i = op.nnn

    def _Bnnn(self, op):  # JP V0, addr
        # Jumping past the top of memory isn't caught here, but the next fetch will fault
        vr = op.x if self.jump_quirks else 0
        self.registers.pc = self.v[vr] + op.nnn

    def _Cxkk(self, op):  # RND Vx, byte
        # The ANDing here is intentional.  This is not a random number between 0 and 'byte' inclusive.
        self.v[op.x] = self.rng.randint(0, 0xFF) & op.kk

    def _Dxyn(self, op):  # DRW Vx, Vy, nibble
        sprite = self.ram.read_block(self.registers.i, op.n)
        collision = self.framebuffer.draw(self.v[op.x], self.v[op.y], sprite)
        self.v[FLAG_REGISTER] = int(collision)

    def _Ex9E(self, op):  # SKP Vx
        if self.keypad.is_pressed(self.v[op.x] & 0xF):
            self._skip()

    def _ExA1(self, op):  # SKNP Vx
        if not self.keypad.is_pressed(self.v[op.x] & 0xF):
            self._skip()

    def _Fx07(self, op):  # LD Vx, DT
        self.v[op.x] = self.timers.delay

    def _Fx0A(self, op):  # LD Vx, K
        # Rather than blocking here, wind the program counter back onto this instruction and switch state.  The
        # timers and display carry on, and each following tick checks for a fresh keypress.
        self.keypad.clear_newly_pressed()  # Ignore anything pressed or held before now
        self.key_register = op.x
        self.state = AWAITING_KEY
        self.registers.pc -= 2

    def _Fx15(self, op):  # LD DT, Vx
        self.timers.set_delay(self.v[op.x])

    def _Fx18(self, op):  # LD ST, Vx
        self.timers.set_sound(self.v[op.x])

    def _Fx1E(self, op):  # ADD I, Vx
        self.registers.i = (self.registers.i + self.v[op.x]) & 0xFFFF

    def _Fx29(self, op):  # LD F, Vx
        self.registers.i = FONT_LOCATION + GLYPH_SIZE * (self.v[op.x] & 0xF)

    def _Fx33(self, op):  # LD B, Vx
        val = self.v[op.x]
        i = self.registers.i
        self.ram.write(i, val // 100)            # Most-significant digit
        self.ram.write(i + 1, (val // 10) % 10)  # Middle digit
        self.ram.write(i + 2, val % 10)          # Least-significant digit

    def _post_Fx55_Fx65(self, x):
        if self.load_quirks:
            self.registers.i = (self.registers.i + x + 1) & 0xFFFF

    def _Fx55(self, op):  # LD [I], Vx
        i = self.registers.i

        for reg in range(op.x + 1):
            self.ram.write(i + reg, self.v[reg])

        self._post_Fx55_Fx65(op.x)

    def _Fx65(self, op):  # LD Vx, [I]
        i = self.registers.i

        for reg in range(op.x + 1):
            self.v[reg] = self.ram.read(i + reg)

        self._post_Fx55_Fx65(op.x)
