# retro_chip8/arch/chip8/instructions/io.py
"""
画面とキー入力待ちの命令の実装。
"""
from typing import TYPE_CHECKING

from retro_chip8.core.state import RunState
from retro_chip8.arch.chip8.instructions.base import Instruction

if TYPE_CHECKING:
    from retro_chip8.arch.chip8.cpu import Chip8Cpu

# --- CLS ---
def execute_cls(cpu: "Chip8Cpu", ins: Instruction) -> None:
    cpu.display.clear()
    cpu.mark_redraw()

# --- DRW ---
# @intent:responsibility DRW Vx, Vy, n: I から n バイトのスプライトを (VX, VY) に描画し、衝突を VF に設定します。
def execute_drw(cpu: "Chip8Cpu", ins: Instruction) -> None:
    sprite = cpu.memory.read_bytes(ins.n)
    collision = cpu.display.draw(cpu.v[ins.x], cpu.v[ins.y], sprite)
    cpu.v.set_flag(1 if collision else 0)
    cpu.mark_redraw()

# --- LD Vx, K ---
# @intent:responsibility キーが押されていれば最小番号のキーを VX に格納します。
# @intent:rationale 押されていなければ入力待ち状態へ遷移し、PC を戻して同じ命令を再フェッチさせる。
#                  状態を RUNNING へ戻すのはホストの責務。
def execute_ld_vx_k(cpu: "Chip8Cpu", ins: Instruction) -> None:
    key = cpu.keypad.any_pressed()
    if key is None:
        cpu.memory.pc.rewind()
        cpu.run_state = RunState.PAUSED_AWAITING_KEY
    else:
        cpu.v[ins.x] = key
