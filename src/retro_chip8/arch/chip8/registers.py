# retro_chip8/arch/chip8/registers.py
"""
CHIP-8 汎用レジスタファイル (V0-VF)。
"""
from typing import List, Sequence

REG_TOTAL = 16
FLAG_REGISTER = 0xF

# @intent:responsibility 16本の8bit汎用レジスタを保持します。VFはフラグレジスタを兼ねます。
class Registers:
    """
    V0-VF の16本の8bitレジスタ。
    インデックスの範囲はデコーダ（4bitオペランド）によって保証されます。
    """
    def __init__(self):
        self._v = bytearray(REG_TOTAL)

    def __getitem__(self, x: int) -> int:
        return self._v[x]

    # @intent:pre-condition value は 0-255 の範囲である必要があります。呼び出し側でマスクすること。
    def __setitem__(self, x: int, value: int) -> None:
        if not 0 <= value <= 0xFF:
            raise ValueError(f"Register value {value} is not an 8-bit value.")
        self._v[x] = value

    def __len__(self) -> int:
        return REG_TOTAL

    # @intent:responsibility フラグレジスタ(VF)に値を書き込みます。
    def set_flag(self, value: int) -> None:
        self[FLAG_REGISTER] = value

    @property
    def flag(self) -> int:
        return self._v[FLAG_REGISTER]

    # @intent:responsibility V0からVnまでの値のコピーを返します（レジスタダンプ命令用）。
    def dump(self, n: int) -> bytes:
        return bytes(self._v[:n + 1])

    # @intent:responsibility V0からVnまでに値を書き込みます（レジスタロード命令用）。
    # @intent:pre-condition data の長さは n+1 である必要があります。
    def load(self, n: int, data: Sequence[int]) -> None:
        if len(data) != n + 1:
            raise ValueError(f"Expected {n + 1} bytes for V0..V{n:X}, got {len(data)}.")
        self._v[:n + 1] = bytes(data)

    def as_list(self) -> List[int]:
        return list(self._v)

    def reset(self) -> None:
        self._v[:] = bytes(REG_TOTAL)

    def __repr__(self) -> str:
        header = "  ".join(f"V{i:X} " for i in range(REG_TOTAL))
        values = "  ".join(f"{v:02X} " for v in self._v)
        return f"[{header.rstrip()}]\n[{values.rstrip()}]"
