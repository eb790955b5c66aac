# retro_chip8/arch/chip8/instructions/__init__.py
"""
CHIP-8命令セット実装パッケージ。
"""
from typing import TYPE_CHECKING

from retro_chip8.common.num import nibbles
from retro_chip8.core.errors import UnsupportedOpcodeError
from .base import Instruction, Op
from .maps import DECODE_MAP, EXECUTE_MAP

if TYPE_CHECKING:
    from retro_chip8.arch.chip8.cpu import Chip8Cpu

# @intent:responsibility 16bit命令ワードをCHIP-8の命令としてデコードします。
# @intent:post-condition 未定義のパターン、および廃止された 0NNN (SYS addr) は UnsupportedOpcodeError を送出します。
def decode_opcode(opcode: int) -> Instruction:
    """
    CHIP-8のオペコードをデコードし、Instructionオブジェクトを返します。
    デコードはCPUの状態に依存しない純粋関数です。
    """
    high, x, y, n = nibbles(opcode)
    for mask, value, op in DECODE_MAP[high]:
        if opcode & mask == value:
            return Instruction(
                opcode=opcode,
                op=op,
                x=x,
                y=y,
                n=n,
                kk=opcode & 0x00FF,
                nnn=opcode & 0x0FFF,
            )
    if high == 0x0:
        raise UnsupportedOpcodeError(opcode, "0NNN - `SYS addr` deprecated")
    raise UnsupportedOpcodeError(opcode)

# @intent:responsibility デコードされたCHIP-8命令を実行します。
def execute_instruction(instruction: Instruction, cpu: "Chip8Cpu") -> None:
    """
    デコードされたCHIP-8命令を実行し、CPUの状態を変更します。
    """
    EXECUTE_MAP[instruction.op](cpu, instruction)
