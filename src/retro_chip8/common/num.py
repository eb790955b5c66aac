# retro_chip8/common/num.py
"""
数値ユーティリティ。

16bit命令ワードのニブル分解、スプライト描画用のビット列展開、
およびBCD分解を提供します。いずれも副作用のない純粋関数です。
"""
from typing import Iterator, Tuple

# @intent:responsibility 16bitの命令ワードを4つのニブル（上位から順）に分解します。
def nibbles(word: int) -> Tuple[int, int, int, int]:
    """
    16bitの命令ワードを上位ニブルから順に4つの4bit値へ分解します。
    """
    return (
        (word & 0xF000) >> 12,
        (word & 0x0F00) >> 8,
        (word & 0x00F0) >> 4,
        word & 0x000F,
    )

# @intent:responsibility 8bit値を最上位ビットから順に真偽値として遅延生成します。
# @intent:rationale ジェネレータは巻き戻せないため、再走査する場合は呼び出し直す必要があります。
def bit_stream(byte: int) -> Iterator[bool]:
    """
    1バイトのビットをMSBから順にboolとして返すジェネレータ。
    スプライトの1行分を描画する際に使用します。
    """
    for shift in range(7, -1, -1):
        yield ((byte >> shift) & 0x1) != 0

# @intent:responsibility 8bit値を百の位・十の位・一の位に分解します。
def bcd(value: int) -> Tuple[int, int, int]:
    return (value // 100, value // 10 % 10, value % 10)
