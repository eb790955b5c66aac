from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Optional

# @intent:responsibility 命令の歴史的な解釈の違いを選択する互換モード。
class CompatMode(Enum):
    CLASSIC = "classic"    # COSMAC VIP のオリジナル動作
    MODERN = "modern"      # 広く採用されている再解釈 (CHIP-48 / SUPER-CHIP 系)
    EXTENDED = "extended"  # MODERN に 128x64 の拡張画面を加えたもの

# @intent:responsibility 互換モードによって挙動が分かれる各命令の設定値を保持します。
@dataclass(frozen=True)
class Quirks:
    shift_uses_vy: bool = False           # 8XY6/8XYE のシフト元を VY とする
    jump_uses_vx: bool = True             # BNNN で V0 ではなく VX (X=NNNの上位ニブル) を加算する
    font_masks_low_nibble: bool = False   # FX29 で VX の下位4bitのみを使う（False なら範囲外は致命的）
    index_overflow_flag: bool = True      # FX1E で I の桁あふれを VF に反映する（False なら範囲外は致命的）
    load_store_increments_i: bool = False # FX55/FX65 の後に I を X+1 進める
    logic_resets_vf: bool = False         # 8XY1/8XY2/8XY3 の後に VF を0にする
    display_width: int = 64
    display_height: int = 32

    # @intent:responsibility 互換モードに対応するプリセットを返します。
    @classmethod
    def for_mode(cls, mode: CompatMode) -> "Quirks":
        if mode is CompatMode.CLASSIC:
            return cls(
                shift_uses_vy=True,
                jump_uses_vx=False,
                font_masks_low_nibble=True,
                index_overflow_flag=False,
                load_store_increments_i=True,
                logic_resets_vf=True,
            )
        if mode is CompatMode.EXTENDED:
            return cls(display_width=128, display_height=64)
        return cls()

    def replace(self, **changes: Any) -> "Quirks":
        return replace(self, **changes)

@dataclass
class MachineConfig:
    mode: CompatMode = CompatMode.MODERN
    quirk_overrides: Dict[str, Any] = field(default_factory=dict)
    rng_seed: Optional[int] = None
