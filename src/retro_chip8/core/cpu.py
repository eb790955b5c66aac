# retro_chip8/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from retro_chip8.core.snapshot import Snapshot, Operation, Metadata
from retro_chip8.core.state import CpuState
from retro_chip8.common.types import RegisterLayoutInfo

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    基本的な状態管理と、命令サイクルの抽象化を提供します。
    """
    def __init__(self):
        self._cycle_count: int = 0

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._cycle_count = 0

    # @intent:responsibility 累計の実行サイクル数を返します。
    @property
    def cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 現在のCPUの状態を返します。
    @abstractmethod
    def get_state(self) -> CpuState:
        """
        現在のCPUの状態（レジスタ値など）のコピーを返します。
        """
        pass

    # @intent:responsibility 現在のPCを返します。状態全体を組み立てずに参照するためのフック。
    @abstractmethod
    def _current_pc(self) -> int:
        pass

    # @intent:responsibility メモリから次の命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        """
        現在のPCからメモリの次の命令（オペコード）をフェッチし、その値を返します。
        フェッチ後、PCは次の命令の先頭を指すように更新されるべきです。
        """
        pass

    # @intent:responsibility フェッチしたオペコードをアーキテクチャ固有の命令表現に変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Any:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, instruction: Any) -> None:
        pass

    # @intent:responsibility デコードされた命令を、スナップショット用のOperationに変換します。
    @abstractmethod
    def _describe(self, instruction: Any) -> Operation:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （前処理→停止判定→フェッチ→デコード→実行→後処理→Snapshot生成）を定義します。
    #                  アーキテクチャ固有の振る舞い（入力待ち停止など）はフックメソッドで対応します。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUの状態を含むSnapshotオブジェクトを返します。
        """
        # 1. 前処理
        self._begin_cycle()
        initial_pc = self._current_pc()

        # 2. 停止判定 (Hook)
        halt_snapshot = self._handle_halt(initial_pc)
        if halt_snapshot:
            return halt_snapshot

        # 3. フェッチ (PC更新を含む)
        opcode = self._fetch()

        # 4. デコード
        instruction = self._decode(opcode)

        # 5. 実行
        self._execute(instruction)

        # 6. 後処理 (Hook)
        self._end_cycle()

        # 7. Snapshot生成
        return self._create_snapshot(initial_pc, self._describe(instruction))

    # @intent:responsibility サイクル開始時の処理を行います。デフォルトは何もしない。
    def _begin_cycle(self) -> None:
        pass

    # @intent:responsibility サイクル終了時の処理（タイマー更新など）を行います。デフォルトは何もしない。
    def _end_cycle(self) -> None:
        pass

    # @intent:responsibility 停止状態の場合の処理を行います。
    # @intent:return 停止中であればその状態のSnapshot、そうでなければNone。
    def _handle_halt(self, current_pc: int) -> Optional[Snapshot]:
        """
        停止状態の場合の処理。デフォルトは何もしない（Noneを返す）。
        """
        return None

    # @intent:responsibility このサイクルで画面が変更されたかどうかを返します。
    def _redraw_pending(self) -> bool:
        return False

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        """
        実行結果からSnapshotオブジェクトを生成する共通ロジック。
        """
        self._cycle_count += operation.cycle_count
        symbol_info = f"{initial_pc:#06x}: {operation.text}"

        return Snapshot(
            state=self.get_state(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=symbol_info),
            redraw=self._redraw_pending()
        )

    @abstractmethod
    def get_register_map(self) -> Dict[str, int]:
        """
        現在のレジスタ値を辞書形式で返す。
        ホストがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        """
        現在のフラグの状態を辞書形式で返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[Tuple[int, str, str]]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
