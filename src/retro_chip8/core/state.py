# retro_chip8/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CPUの基本的な状態（レジスタ群）を保持するデータ構造と、
CPUの実行モードを定義します。
"""
from dataclasses import dataclass
from enum import Enum

# @intent:responsibility CPUの実行モードを定義します。
# @intent:rationale キー入力待ちはスレッドをブロックできないため、ホストが参照する明示的な状態として表現します。
class RunState(Enum):
    RUNNING = "RUNNING"                          # 毎サイクル フェッチ/実行 を行う
    STEP = "STEP"                                # ホスト主導の1命令ずつの実行
    PAUSED_AWAITING_KEY = "PAUSED_AWAITING_KEY"  # キー入力待ち。ホストがRUNNINGへ戻すまで停止

# @intent:responsibility CPUのレジスタ状態を保持します。アーキテクチャ固有のレジスタはこれを拡張します。
@dataclass
class CpuState:
    """
    CPUのレジスタ状態を保持するデータクラス。
    これは抽象的な基底状態であり、特定のCPUアーキテクチャに応じて拡張されます。
    """
    pc: int = 0x0000  # Program Counter
    sp: int = 0x0000  # Stack Pointer (スタックの深さ)
