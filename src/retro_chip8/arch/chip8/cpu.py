# src/retro_chip8/arch/chip8/cpu.py
"""
CHIP-8 CPUエミュレーションの中心モジュール。

CPUはメモリ、レジスタ、スタック、タイマー、キー入力、画面の全てを所有し、
1サイクルごとに フェッチ→デコード→実行 を行います。
ホストは execute_cycle() の戻り値が True の場合にのみ画面を再描画します。
"""
import random
import time
from typing import Callable, Dict, List, Optional, Tuple

from retro_chip8.common.types import Framebuffer, RegisterInfo, RegisterLayoutInfo
from retro_chip8.config.models import CompatMode, Quirks
from retro_chip8.core.cpu import AbstractCpu
from retro_chip8.core.snapshot import Metadata, Operation, Snapshot
from retro_chip8.core.state import RunState
from retro_chip8.arch.chip8 import disassembler
from retro_chip8.arch.chip8.display import Display
from retro_chip8.arch.chip8.instructions import decode_opcode, execute_instruction
from retro_chip8.arch.chip8.instructions.base import Instruction
from retro_chip8.arch.chip8.keypad import KeyState
from retro_chip8.arch.chip8.memory import Memory
from retro_chip8.arch.chip8.registers import Registers
from retro_chip8.arch.chip8.stack import CallStack
from retro_chip8.arch.chip8.state import Chip8CpuState
from retro_chip8.arch.chip8.timers import DelayTimer, SoundTimer

# @intent:responsibility CHIP-8 CPUの具体的なエミュレーションロジック（フェッチ、デコード、実行）を提供します。
class Chip8Cpu(AbstractCpu):
    """
    CHIP-8 CPUをエミュレートするクラス。

    互換モード（Quirks）は生成時に決まり、画面サイズもそれに従います。
    実行はシングルスレッドで、execute_cycle() はI/Oや待機を行いません。
    """
    # @intent:responsibility 全てのコンポーネントを初期状態で生成します。
    # @intent:pre-condition rng を渡す場合は randint(a, b) を持つオブジェクトである必要があります。
    def __init__(self, quirks: Optional[Quirks] = None, rng: Optional[random.Random] = None,
                 clock: Callable[[], float] = time.monotonic):
        super().__init__()
        self.quirks = quirks if quirks is not None else Quirks.for_mode(CompatMode.MODERN)
        self.rng = rng if rng is not None else random.Random()
        self.memory = Memory()
        self.v = Registers()
        self.stack = CallStack()
        self.delay_timer = DelayTimer(clock)
        self.sound_timer = SoundTimer()
        self.keypad = KeyState()
        self.display = Display(self.quirks.display_width, self.quirks.display_height)
        self.run_state = RunState.RUNNING
        self._should_draw = True

    # @intent:responsibility 全てのコンポーネントを初期状態に戻します。フォントも再配置されます。
    def reset(self) -> None:
        super().reset()
        self.memory.reset()
        self.v.reset()
        self.stack.reset()
        self.delay_timer.reset()
        self.sound_timer.reset()
        self.keypad.reset()
        self.display.reset()
        self.run_state = RunState.RUNNING
        self._should_draw = True

    # @intent:responsibility プログラムイメージをロードします。他の状態はリセットしません。
    # @intent:post-condition イメージが大きすぎる場合は RomTooBigError を送出し、メモリは変更されない。
    def load_game(self, data: bytes) -> None:
        self.memory.load_program(data)

    # @intent:responsibility 1命令サイクルを実行し、画面が変更されたかどうかを返します。
    def execute_cycle(self) -> bool:
        return self.step().redraw

    # @intent:responsibility 外部からのキー押下/解放イベントを反映します。
    # @intent:rationale 入力待ちからの復帰はホストが run_state を RUNNING に戻すことで行う。ここでは状態を変更しない。
    def set_key_state(self, key: int, pressed: bool) -> None:
        self.keypad.set(key, pressed)

    # @intent:responsibility 現在のフレームバッファの読み取り専用ビューを返します。
    def get_framebuffer(self) -> Framebuffer:
        return self.display.get_buffer()

    # @intent:responsibility 命令実行中に画面が変更されたことを記録します。
    def mark_redraw(self) -> None:
        self._should_draw = True

    @property
    def sound_active(self) -> bool:
        return self.sound_timer.is_active

    # --- Template hooks ---

    def _begin_cycle(self) -> None:
        self._should_draw = False

    # @intent:responsibility 入力待ち中は何も実行せず、空のスナップショットを返します。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        if self.run_state is not RunState.PAUSED_AWAITING_KEY:
            return None
        return Snapshot(
            state=self.get_state(),
            operation=Operation("----", "WAIT", ["K"], cycle_count=0),
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=f"{current_pc:#06x}: WAIT K"),
            redraw=False
        )

    def _current_pc(self) -> int:
        return self.memory.pc.value

    def _fetch(self) -> int:
        return self.memory.fetch()

    def _decode(self, opcode: int) -> Instruction:
        return decode_opcode(opcode)

    def _execute(self, instruction: Instruction) -> None:
        execute_instruction(instruction, self)

    # @intent:responsibility サウンドタイマーは実時間ではなく実行サイクルに同期して減少する。
    def _end_cycle(self) -> None:
        self.sound_timer.decrease()

    def _describe(self, instruction: Instruction) -> Operation:
        return instruction.to_operation(self.quirks.jump_uses_vx)

    def _redraw_pending(self) -> bool:
        return self._should_draw

    # --- Inspection ---

    # @intent:responsibility 現在の状態のコピーを返します。
    def get_state(self) -> Chip8CpuState:
        return Chip8CpuState(
            pc=self.memory.pc.value,
            sp=self.stack.depth,
            v=self.v.as_list(),
            i=self.memory.i.value,
            dt=self.delay_timer.peek(),
            st=self.sound_timer.value,
            run_state=self.run_state,
        )

    # @intent:responsibility 表示用に、現在のレジスタ値を辞書形式で提供します。
    def get_register_map(self) -> Dict[str, int]:
        regs = {f"V{i:X}": value for i, value in enumerate(self.v.as_list())}
        regs.update({
            "I": self.memory.i.value,
            "PC": self.memory.pc.value,
            "SP": self.stack.depth,
            "DT": self.delay_timer.peek(),
            "ST": self.sound_timer.value,
        })
        return regs

    # @intent:responsibility レジスタ表示レイアウト（グループ化）を定義します。
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        return [
            RegisterLayoutInfo("General", [RegisterInfo(f"V{i:X}", 8) for i in range(16)]),
            RegisterLayoutInfo("Address", [
                RegisterInfo("I", 16), RegisterInfo("PC", 16), RegisterInfo("SP", 8)
            ]),
            RegisterLayoutInfo("Timers", [
                RegisterInfo("DT", 8), RegisterInfo("ST", 8)
            ])
        ]

    # @intent:responsibility 表示用に、現在のフラグ状態を辞書形式で提供します。
    def get_flag_state(self) -> Dict[str, bool]:
        return {"VF": self.v.flag != 0}

    # @intent:responsibility 指定範囲のメモリを逆アセンブルします。
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        return disassembler.disassemble(self.memory, start_addr, length, self.quirks.jump_uses_vx)
