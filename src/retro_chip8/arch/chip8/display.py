# retro_chip8/arch/chip8/display.py
"""
CHIP-8 モノクロフレームバッファ。

スプライトは XOR で描画され、点灯していたピクセルを消した場合に衝突として報告されます。
描画原点は画面サイズで折り返しますが、スプライト本体は右端・下端でクリップされます。
"""
from typing import List

from retro_chip8.common.num import bit_stream
from retro_chip8.common.types import Framebuffer

WIDTH = 64
HEIGHT = 32
EXTENDED_WIDTH = 128
EXTENDED_HEIGHT = 64
PIXELS_WIDE = 8

# @intent:responsibility 固定サイズの2次元フレームバッファを保持し、スプライト描画と衝突判定を行います。
class Display:
    """
    行優先で width × height 個のセルを持つフレームバッファ。
    サイズは生成時に決まり、以後変化しません。
    """
    # @intent:pre-condition width, height は正の整数である必要があります。
    def __init__(self, width: int = WIDTH, height: int = HEIGHT):
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid display size {width}x{height}.")
        self._width = width
        self._height = height
        self._vram = bytearray(width * height)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    # @intent:responsibility (x, y) を左上とする位置にスプライトを描画し、衝突の有無を返します。
    # @intent:rationale 原点のみ折り返し、はみ出した列と行は描画しない（クリップ）。
    def draw(self, x: int, y: int, sprite_rows: bytes) -> bool:
        """
        スプライトの各行（1バイト=8ピクセル）を MSB から順に XOR で描画します。
        既に点灯していたセルに点灯ビットが重なった場合、衝突として True を返します。
        """
        collision = False
        x %= self._width
        y %= self._height
        x_end = min(x + PIXELS_WIDE, self._width)
        for row, byte in zip(range(y, self._height), sprite_rows):
            base = row * self._width
            for col, bit in zip(range(x, x_end), bit_stream(byte)):
                if not bit:
                    continue
                coord = base + col
                if self._vram[coord]:
                    collision = True
                self._vram[coord] ^= 1
        return collision

    def pixel(self, x: int, y: int) -> bool:
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise IndexError(f"Pixel ({x}, {y}) out of bounds for {self._width}x{self._height} display.")
        return self._vram[y * self._width + x] != 0

    # @intent:responsibility フレームバッファの読み取り専用ビューを返します。
    def get_buffer(self) -> Framebuffer:
        return memoryview(self._vram).cast('?').toreadonly()

    # @intent:responsibility 各行を '#'(点灯) と '.'(消灯) の文字列として返します。診断表示用。
    def render_rows(self) -> List[str]:
        rows = []
        for y in range(self._height):
            line = self._vram[y * self._width:(y + 1) * self._width]
            rows.append("".join("#" if cell else "." for cell in line))
        return rows

    def clear(self) -> None:
        self._vram[:] = bytes(len(self._vram))

    def reset(self) -> None:
        self.clear()
