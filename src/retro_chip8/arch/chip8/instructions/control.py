# retro_chip8/arch/chip8/instructions/control.py
"""
制御命令（ジャンプ、サブルーチン、条件スキップ）の実装。
"""
from typing import TYPE_CHECKING

from retro_chip8.arch.chip8.instructions.base import Instruction

if TYPE_CHECKING:
    from retro_chip8.arch.chip8.cpu import Chip8Cpu

# @intent:utility_function 条件が成立した場合に次の命令を読み飛ばします。
def _skip_if(cpu: "Chip8Cpu", condition: bool) -> None:
    if condition:
        cpu.memory.pc.skip_next()

# --- JP ---
# @intent:responsibility JP addr: PC を NNN に設定します。
def execute_jp(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.pc.set(ins.nnn)

# @intent:responsibility JP V0, addr: PC を NNN + V0 (MODERN では NNN + VX) に設定します。
def execute_jp_v0(cpu: "Chip8Cpu", ins: Instruction) -> None:
    reg = ins.x if cpu.quirks.jump_uses_vx else 0
    cpu.memory.pc.set((ins.nnn + cpu.v[reg]) & 0xFFFF)

# --- CALL / RET ---
# @intent:responsibility CALL addr: 戻りアドレスをスタックに積み、NNN へジャンプします。
def execute_call(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.stack.push(cpu.memory.pc.value)
    cpu.memory.pc.set(ins.nnn)

# @intent:responsibility RET: スタックから戻りアドレスを取り出して復帰します。
def execute_ret(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.memory.pc.set(cpu.stack.pop())

# --- Conditional skips ---
def execute_se_vx_byte(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, cpu.v[ins.x] == ins.kk)

def execute_sne_vx_byte(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, cpu.v[ins.x] != ins.kk)

def execute_se_vx_vy(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, cpu.v[ins.x] == cpu.v[ins.y])

def execute_sne_vx_vy(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, cpu.v[ins.x] != cpu.v[ins.y])

# --- Keypad skips ---
# @intent:responsibility SKP Vx: キー VX が押されていれば次の命令を読み飛ばします。
def execute_skp(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, cpu.keypad.is_down(cpu.v[ins.x]))

# @intent:responsibility SKNP Vx: キー VX が押されていなければ次の命令を読み飛ばします。
def execute_sknp(cpu: "Chip8Cpu", ins: Instruction) -> None:
    _skip_if(cpu, not cpu.keypad.is_down(cpu.v[ins.x]))
