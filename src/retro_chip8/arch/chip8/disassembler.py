# src/retro_chip8/arch/chip8/disassembler.py
"""
CHIP-8 Disassembler

メモリ上のバイナリデータを解析し、CHIP-8のアセンブリ言語（ニーモニック）に変換します。
Instruction Layerのデコードロジックを再利用します。
"""
from typing import List, Tuple

from retro_chip8.arch.chip8.memory import Memory, INSTRUCTION_SIZE, RAM_SIZE
from retro_chip8.arch.chip8.instructions import decode_opcode
from retro_chip8.core.errors import UnsupportedOpcodeError

# @intent:responsibility 指定されたメモリ範囲を逆アセンブルし、表示用データを生成します。
# @intent:rationale プログラム領域にはデータも混在するため、デコードできないワードは例外にせずデータとして表示する。
def disassemble(memory: Memory, start_addr: int, length: int,
                jump_uses_vx: bool = False) -> List[Tuple[int, str, str]]:
    """
    指定された範囲のメモリを逆アセンブルします。

    Returns:
        List of (address, hex_bytes, mnemonic) tuples.
    """
    result = []
    current_addr = start_addr
    end_addr = min(start_addr + length, RAM_SIZE - 1)

    while current_addr < end_addr:
        hi = memory.peek(current_addr)
        lo = memory.peek(current_addr + 1)
        opcode = (hi << 8) | lo
        hex_bytes = f"{hi:02X} {lo:02X}"

        try:
            instruction = decode_opcode(opcode)
        except UnsupportedOpcodeError:
            mnemonic_str = f"DW 0x{opcode:04X}"
        else:
            operation = instruction.to_operation(jump_uses_vx)
            mnemonic_str = operation.text

        result.append((current_addr, hex_bytes, mnemonic_str))
        current_addr += INSTRUCTION_SIZE

    return result
