# retro_chip8/core/errors.py
"""
例外の定義。

ロード時の回復可能なエラーと、エミュレート中のプログラムを継続できなくなる
致命的なCPUフォルトを区別します。いずれも既存の組み込み例外を継承しているため、
ValueError / IndexError を捕捉している呼び出し元からも扱えます。
"""

class Chip8Error(Exception):
    """このパッケージが送出する例外の基底クラス。"""


# @intent:responsibility プログラムイメージが利用可能な領域に収まらないことを通知します。
# @intent:rationale 呼び出し元が回復できる唯一のエラー。部分的なロードは行われません。
class RomTooBigError(Chip8Error, ValueError):
    def __init__(self, size: int, available: int):
        super().__init__(f"loaded rom is too big: {size} >= {available}")
        self.size = size
        self.available = available


# @intent:responsibility エミュレーションを継続できない致命的な状態を表す基底クラス。
class CpuFault(Chip8Error, RuntimeError):
    pass


class StackOverflowError(CpuFault):
    pass


class StackUnderflowError(CpuFault):
    pass


# @intent:responsibility 未定義、または廃止された命令パターンのデコード失敗を表します。
class UnsupportedOpcodeError(CpuFault):
    def __init__(self, opcode: int, reason: str = "no such instruction"):
        super().__init__(f"{reason}: {opcode:04X}")
        self.opcode = opcode


# @intent:responsibility PCまたはIレジスタの範囲チェック違反を表します。
class AddressRangeError(CpuFault, IndexError):
    pass
