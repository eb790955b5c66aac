# retro_chip8/arch/chip8/instructions/load.py
"""
転送命令（レジスタ、タイマー、Iレジスタ、メモリ）の実装。
"""
from typing import TYPE_CHECKING

from retro_chip8.arch.chip8.instructions.base import Instruction

if TYPE_CHECKING:
    from retro_chip8.arch.chip8.cpu import Chip8Cpu

# --- Registers ---
def execute_ld_vx_byte(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = ins.kk

def execute_ld_vx_vy(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.v[ins.y]

# --- Timers ---
def execute_ld_vx_dt(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v[ins.x] = cpu.delay_timer.load()

def execute_ld_dt_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.delay_timer.store(cpu.v[ins.x])

def execute_ld_st_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.sound_timer.store(cpu.v[ins.x])

# --- The I register ---
def execute_ld_i(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.i.store(ins.nnn)

# @intent:responsibility ADD I, Vx: MODERN では桁あふれを VF に反映し、CLASSIC では範囲外を致命的エラーとします。
def execute_add_i_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    flag_overflow = cpu.quirks.index_overflow_flag
    overflowed = cpu.memory.i.add_and_check(cpu.v[ins.x], flag_overflow)
    if flag_overflow:
        cpu.v.set_flag(1 if overflowed else 0)

# @intent:responsibility LD F, Vx: I を VX の16進フォントグリフの先頭に設定します。
def execute_ld_f_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.i.point_to_font_glyph(cpu.v[ins.x], cpu.quirks.font_masks_low_nibble)

# @intent:responsibility LD B, Vx: VX のBCD表現を I, I+1, I+2 に格納します。I は変化しません。
def execute_ld_b_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.store_bcd(cpu.v[ins.x])

# --- Register dump / load ---
# @intent:responsibility LD [I], Vx: V0..VX を I から始まるメモリへ書き込みます。
def execute_ld_i_vx(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.write_bytes(cpu.v.dump(ins.x))
    if cpu.quirks.load_store_increments_i:
        cpu.memory.i.advance(ins.x + 1)

# @intent:responsibility LD Vx, [I]: I から始まるメモリを V0..VX へ読み込みます。
def execute_ld_vx_i(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.v.load(ins.x, cpu.memory.read_bytes(ins.x + 1))
    if cpu.quirks.load_store_increments_i:
        cpu.memory.i.advance(ins.x + 1)
