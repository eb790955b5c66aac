# retro_chip8/arch/chip8/state.py
"""
CHIP-8 CPU固有の状態定義。
"""
from dataclasses import dataclass, field
from typing import List

from retro_chip8.core.state import CpuState, RunState

# @intent:responsibility ある時点の CHIP-8 のレジスタ、タイマー、実行モードの値を保持します。
# @intent:rationale 各コンポーネントの実体はCPUが所有する。これはスナップショット用のコピーであり、変更してもCPUには反映されない。
@dataclass
class Chip8CpuState(CpuState):
    """
    CHIP-8 CPUのレジスタ状態を保持するデータクラス。
    sp はコールスタックの深さを表します。
    """
    v: List[int] = field(default_factory=lambda: [0] * 16)
    i: int = 0x0000
    dt: int = 0x00
    st: int = 0x00
    run_state: RunState = RunState.RUNNING

    @property
    def vf(self) -> int:
        return self.v[0xF]
