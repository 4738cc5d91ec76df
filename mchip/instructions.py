#!/usr/bin/env python3

"""
Instruction Decoder

Turns a raw 16-bit instruction word into an Instruction: a small tuple holding
the operation name and every operand field the word could carry.

n   = Nibble (lowest 4 bits)
kk  = Byte (lowest 8 bits)
nnn = Address (lowest 12 bits)
x/y = Register (0-15), second and third nibbles

Each instruction is identified by masking the word.  The first nibble selects
the mask, and the masked word is then looked up in a single table, so any word
not listed is rejected instead of falling through to a neighbouring
instruction.
"""

__copyright__ = "Copyright (C) 2022 Gregory Maynard-Hoare"
__license__ = "GNU Affero General Public License v3.0"

from collections import namedtuple


class DecodeError(Exception):
    pass


Instruction = namedtuple("Instruction", ["op", "x", "y", "n", "kk", "nnn", "word"])

# Operations
CLS = "CLS"
RET = "RET"
JP = "JP"
CALL = "CALL"
SE_BYTE = "SE_BYTE"
SNE_BYTE = "SNE_BYTE"
SE_REG = "SE_REG"
LD_BYTE = "LD_BYTE"
ADD_BYTE = "ADD_BYTE"
LD_REG = "LD_REG"
OR = "OR"
AND = "AND"
XOR = "XOR"
ADD_REG = "ADD_REG"
SUB = "SUB"
SHR = "SHR"
SUBN = "SUBN"
SHL = "SHL"
SNE_REG = "SNE_REG"
LD_I = "LD_I"
JP_V0 = "JP_V0"
RND = "RND"
DRW = "DRW"
SKP = "SKP"
SKNP = "SKNP"
LD_VX_DT = "LD_VX_DT"
LD_VX_K = "LD_VX_K"
LD_DT_VX = "LD_DT_VX"
LD_ST_VX = "LD_ST_VX"
ADD_I = "ADD_I"
LD_F = "LD_F"
LD_B = "LD_B"
LD_MEM_VX = "LD_MEM_VX"
LD_VX_MEM = "LD_VX_MEM"

# Bitmask to apply for each first nibble
NIBBLE_MASKS = (
    0xFFFF,  # 0x0: exact match, so machine code calls are rejected
    0xF000, 0xF000, 0xF000, 0xF000,
    0xF00F,  # 0x5
    0xF000, 0xF000,
    0xF00F,  # 0x8
    0xF00F,  # 0x9
    0xF000, 0xF000, 0xF000, 0xF000,
    0xF0FF,  # 0xE
    0xF0FF   # 0xF
)

OPCODES = {
    0x00E0: CLS,
    0x00EE: RET,
    0x1000: JP,
    0x2000: CALL,
    0x3000: SE_BYTE,
    0x4000: SNE_BYTE,
    0x5000: SE_REG,
    0x6000: LD_BYTE,
    0x7000: ADD_BYTE,
    0x8000: LD_REG,
    0x8001: OR,
    0x8002: AND,
    0x8003: XOR,
    0x8004: ADD_REG,
    0x8005: SUB,
    0x8006: SHR,
    0x8007: SUBN,
    0x800E: SHL,
    0x9000: SNE_REG,
    0xA000: LD_I,
    0xB000: JP_V0,
    0xC000: RND,
    0xD000: DRW,
    0xE09E: SKP,
    0xE0A1: SKNP,
    0xF007: LD_VX_DT,
    0xF00A: LD_VX_K,
    0xF015: LD_DT_VX,
    0xF018: LD_ST_VX,
    0xF01E: ADD_I,
    0xF029: LD_F,
    0xF033: LD_B,
    0xF055: LD_MEM_VX,
    0xF065: LD_VX_MEM
}

# Disassembly formats.  Fields are taken from the Instruction by name.
MNEMONICS = {
    CLS:       "CLS",
    RET:       "RET",
    JP:        "JP 0x{nnn:03x}",
    CALL:      "CALL 0x{nnn:03x}",
    SE_BYTE:   "SE V{x:01x}, 0x{kk:02x}",
    SNE_BYTE:  "SNE V{x:01x}, 0x{kk:02x}",
    SE_REG:    "SE V{x:01x}, V{y:01x}",
    LD_BYTE:   "LD V{x:01x}, 0x{kk:02x}",
    ADD_BYTE:  "ADD V{x:01x}, 0x{kk:02x}",
    LD_REG:    "LD V{x:01x}, V{y:01x}",
    OR:        "OR V{x:01x}, V{y:01x}",
    AND:       "AND V{x:01x}, V{y:01x}",
    XOR:       "XOR V{x:01x}, V{y:01x}",
    ADD_REG:   "ADD V{x:01x}, V{y:01x}",
    SUB:       "SUB V{x:01x}, V{y:01x}",
    SHR:       "SHR V{x:01x}, V{y:01x}",
    SUBN:      "SUBN V{x:01x}, V{y:01x}",
    SHL:       "SHL V{x:01x}, V{y:01x}",
    SNE_REG:   "SNE V{x:01x}, V{y:01x}",
    LD_I:      "LD I, 0x{nnn:03x}",
    JP_V0:     "JP V0, 0x{nnn:03x}",
    RND:       "RND V{x:01x}, 0x{kk:02x}",
    DRW:       "DRW V{x:01x}, V{y:01x}, 0x{n:01x}",
    SKP:       "SKP V{x:01x}",
    SKNP:      "SKNP V{x:01x}",
    LD_VX_DT:  "LD V{x:01x}, DT",
    LD_VX_K:   "LD V{x:01x}, K",
    LD_DT_VX:  "LD DT, V{x:01x}",
    LD_ST_VX:  "LD ST, V{x:01x}",
    ADD_I:     "ADD I, V{x:01x}",
    LD_F:      "LD F, V{x:01x}",
    LD_B:      "LD B, V{x:01x}",
    LD_MEM_VX: "LD [I], V{x:01x}",
    LD_VX_MEM: "LD V{x:01x}, [I]"
}


def decode(word):
    op = OPCODES.get(word & NIBBLE_MASKS[word >> 12])

    if op is None:
        raise DecodeError("Unknown instruction 0x{:04x}".format(word))

    return Instruction(
        op,
        (word & 0xF00) >> 8,
        (word & 0xF0) >> 4,
        word & 0xF,
        word & 0xFF,
        word & 0xFFF,
        word
    )


def disassemble(instruction):
    return MNEMONICS[instruction.op].format(**instruction._asdict())
