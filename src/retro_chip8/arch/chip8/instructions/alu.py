# retro_chip8/arch/chip8/instructions/alu.py
"""
算術論理演算命令の実装。

VF はフラグレジスタを兼ねるため、書き込み順序が結果に影響します。
加減算は結果を VX に書いてからフラグを設定し、シフトはフラグを設定してから結果を書きます。
"""
from typing import TYPE_CHECKING

from retro_chip8.arch.chip8.instructions.base import Instruction

if TYPE_CHECKING:
    from retro_chip8.arch.chip8.cpu import Chip8Cpu

# --- ADD Vx, byte ---
# @intent:responsibility 8bitで折り返す加算。VF は変化しません。
def execute_add_vx_byte(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = (cpu.v[ins.x] + ins.kk) & 0xFF

# --- Bit operations ---
def _logic_flag(cpu: "Chip8Cpu") -> None:
    if cpu.quirks.logic_resets_vf:
        cpu.v.set_flag(0)

def execute_or(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.v[ins.x] | cpu.v[ins.y]
    _logic_flag(cpu)

def execute_and(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.v[ins.x] & cpu.v[ins.y]
    _logic_flag(cpu)

def execute_xor(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.v[ins.x] ^ cpu.v[ins.y]
    _logic_flag(cpu)

# --- ADD Vx, Vy ---
# @intent:responsibility VX = VX + VY。8bitを超えた場合 VF=1、そうでなければ VF=0。
def execute_add_vx_vy(cpu: "Chip8Cpu", ins: Instruction) -> None:
    res = cpu.v[ins.x] + cpu.v[ins.y]
    cpu.v[ins.x] = res & 0xFF
    cpu.v.set_flag(1 if res > 0xFF else 0)

# --- SUB / SUBN ---
# @intent:utility_function 減算を行い、ボローが発生しなかった場合に VF=1 とします。
def _subtract(cpu: "Chip8Cpu", x: int, minuend: int, subtrahend: int) -> None:
    cpu.v[x] = (minuend - subtrahend) & 0xFF
    cpu.v.set_flag(1 if minuend >= subtrahend else 0)

# @intent:responsibility SUB Vx, Vy: VX = VX - VY, VF = NOT borrow
def execute_sub(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _subtract(cpu, ins.x, cpu.v[ins.x], cpu.v[ins.y])

# @intent:responsibility SUBN Vx, Vy: VX = VY - VX, VF = NOT borrow
def execute_subn(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _subtract(cpu, ins.x, cpu.v[ins.y], cpu.v[ins.x])

# --- SHR / SHL ---
# @intent:utility_function シフト元の値を互換モードに従って選択します (CLASSIC: VY, それ以外: VX)。
def _shift_source(cpu: "Chip8Cpu", ins: Instruction) -> int:
    return cpu.v[ins.y] if cpu.quirks.shift_uses_vy else cpu.v[ins.x]

# @intent:responsibility SHR Vx {, Vy}: 押し出された最下位ビットを VF に入れ、右シフト結果を VX に格納します。
def execute_shr(cpu: "Chip8Cpu", ins: Instruction) -> None:
    src = _shift_source(cpu, ins)
    cpu.v.set_flag(src & 0x1)
    cpu.v[ins.x] = src >> 1

# @intent:responsibility SHL Vx {, Vy}: 押し出された最上位ビットを VF に入れ、左シフト結果を VX に格納します。
def execute_shl(cpu: "Chip8Cpu", ins: Instruction) -> None:
    src = _shift_source(cpu, ins)
    cpu.v.set_flag((src & 0x80) >> 7)
    cpu.v[ins.x] = (src << 1) & 0xFF

# --- RND ---
# @intent:responsibility RND Vx, byte: 乱数バイトと KK の論理積を VX に格納します。
def execute_rnd(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.rng.randint(0, 0xFF) & ins.kk
