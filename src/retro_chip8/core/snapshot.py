# retro_chip8/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、1命令サイクル実行後のCPUの状態を記録した不変のデータ構造を定義します。
ホストへの情報提供と、テスト時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from retro_chip8.core.state import CpuState

# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "A22A"
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["I", "0x22A"]
    cycle_count: int = 1 # 命令実行に必要なサイクル数
    length: int = 2 # 命令のバイト長

    @property
    def text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、命令テキストなど）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "0x0208: DRW V0, V1, 0x5"

# @intent:responsibility ある一時点におけるCPUの状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    1命令サイクル実行後のCPUの状態を記録した不変のデータ構造。
    redraw は、このサイクルでフレームバッファが変更されたかどうかを示します。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    redraw: bool = False

    # @intent:rationale state には生成時点のコピーを渡すこと。CPU内部の可変オブジェクトを共有すると不変性が崩れる。
