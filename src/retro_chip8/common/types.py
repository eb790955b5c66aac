"""
共通の型定義を提供するモジュール。
プロジェクト全体で使用される汎用的な型エイリアスなどを定義します。
"""
from typing import List, NamedTuple, Sequence

# @intent:data_structure フレームバッファの読み取り専用ビュー。行優先で width × height 個の bool を並べたもの。
Framebuffer = Sequence[bool]

# @intent:data_structure 単一のレジスタの表示定義。ホスト側が動的にフィールドを生成するために使用される。
class RegisterInfo(NamedTuple):
    name: str
    width: int  # ビット幅 (8 or 16)

# @intent:data_structure レジスタグループの表示定義。関連するレジスタ（例: "General", "Address"）をまとめる。
class RegisterLayoutInfo(NamedTuple):
    group_name: str
    registers: List[RegisterInfo]
