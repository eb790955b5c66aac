# retro_chip8/arch/chip8/memory.py
"""
CHIP-8 メモリモデル。

4KBのRAM、組み込みフォント、プログラムカウンタ(PC)、インデックスレジスタ(I)を管理します。

メモリマップ:
    0x000-0x1FF  インタプリタ予約領域（0x050 からフォントグリフ）
    0x200-0xE9F  プログラムおよび作業データ
    0xEA0-0xFFF  コールスタック/表示用の予約領域（このモデルではメモリとして扱わない）
"""
from typing import Sequence

from retro_chip8.common.num import bcd
from retro_chip8.core.errors import AddressRangeError, RomTooBigError
from retro_chip8.transport.ram import RAM

RAM_SIZE = 1 << 12
ROM_START_ADDR = 0x200
CALL_STACK_START_ADDR = 0xEA0
INSTRUCTION_SIZE = 2
FONTS_SET_ADDR = 0x050
AVAILABLE_STORAGE = CALL_STACK_START_ADDR - ROM_START_ADDR

EACH_FONT_SIZE = 5
TOTAL_HEXI = 16
# Hexadecimal digits: 0-9A-F
FONTS_SET = bytes([
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
])


# @intent:responsibility プログラムカウンタ。プログラム領域内に制約され、命令長単位で進みます。
class ProgramCounter:
    def __init__(self, addr: int = ROM_START_ADDR):
        self._addr = addr

    @property
    def value(self) -> int:
        return self._addr

    # @intent:pre-condition ROM_START_ADDR <= addr <= CALL_STACK_START_ADDR
    def set(self, addr: int) -> None:
        if not ROM_START_ADDR <= addr <= CALL_STACK_START_ADDR:
            raise AddressRangeError(
                f"Program counter {addr:#05x} outside {ROM_START_ADDR:#05x}-{CALL_STACK_START_ADDR:#05x}."
            )
        self._addr = addr

    # @intent:responsibility 次の命令を読み飛ばします（条件スキップ命令用）。
    def skip_next(self) -> None:
        self._addr += INSTRUCTION_SIZE

    # @intent:responsibility 直前にフェッチした命令を指すよう1命令分戻します（キー入力待ちの再試行用）。
    def rewind(self) -> None:
        self._addr -= INSTRUCTION_SIZE

    # @intent:responsibility 現在のアドレスを返し、1命令分進めます（フェッチ用）。
    def advance(self) -> int:
        addr = self._addr
        self._addr += INSTRUCTION_SIZE
        return addr


# @intent:responsibility インデックスレジスタ(I)。スプライトや一括メモリ操作のアドレスを保持します。
class IndexRegister:
    def __init__(self, addr: int = FONTS_SET_ADDR):
        self._addr = addr

    @property
    def value(self) -> int:
        return self._addr

    # @intent:pre-condition addr はアドレス空間(0x000-0xFFF)内である必要があります。
    def store(self, addr: int) -> None:
        if not 0 <= addr < RAM_SIZE:
            raise AddressRangeError(f"Index register {addr:#05x} outside addressable space.")
        self._addr = addr

    # @intent:responsibility 16進数字 digit のフォントグリフの先頭を指すよう I を設定します。
    # @intent:rationale mask_low_nibble=True は COSMAC VIP 同様に下位4bitのみを使い、False は範囲外を致命的エラーとする。
    def point_to_font_glyph(self, digit: int, mask_low_nibble: bool) -> None:
        if mask_low_nibble:
            digit &= 0xF
        elif not 0 <= digit < TOTAL_HEXI:
            raise AddressRangeError(f"No built-in font glyph for {digit:#04x}.")
        self._addr = FONTS_SET_ADDR + EACH_FONT_SIZE * digit

    # @intent:responsibility I に value を加算し、アドレス空間を超えたかどうかを返します。
    # @intent:post-condition flag_overflow=True なら I は12bitで折り返し、超過の有無を返す。
    #                        False なら超過は致命的エラーとなり、常に False を返す。
    def add_and_check(self, value: int, flag_overflow: bool) -> bool:
        total = self._addr + value
        if flag_overflow:
            self._addr = total & (RAM_SIZE - 1)
            return total >= RAM_SIZE
        if total >= RAM_SIZE:
            raise AddressRangeError(f"Index register {total:#05x} outside addressable space.")
        self._addr = total
        return False

    # @intent:responsibility 一括転送の後に I を count 進めます（COSMAC VIP の FX55/FX65）。
    # @intent:rationale 転送自体は範囲内で完了しているため、末尾 0xFFF までのアクセスの後は12bitで折り返す。
    def advance(self, count: int) -> None:
        self._addr = (self._addr + count) & (RAM_SIZE - 1)


# @intent:responsibility RAM、フォント、PC、Iをまとめて管理し、フェッチとI基準の読み書きを提供します。
class Memory:
    """
    CHIP-8 の 4KB メモリ。
    生成時およびリセット時に組み込みフォントが 0x050 へ配置されます。
    """
    def __init__(self):
        self._ram = RAM(RAM_SIZE)
        self.pc = ProgramCounter()
        self.i = IndexRegister()
        self._load_fonts()

    def _load_fonts(self) -> None:
        self._ram.write_block(FONTS_SET_ADDR, FONTS_SET)

    def reset(self) -> None:
        self._ram.clear()
        self._load_fonts()
        self.pc = ProgramCounter()
        self.i = IndexRegister()

    # @intent:responsibility プログラムイメージを 0x200 から配置します。
    # @intent:pre-condition イメージは予約領域の手前までに収まる必要があります。収まらない場合は何も書き込まない。
    def load_program(self, data: bytes) -> None:
        if len(data) >= AVAILABLE_STORAGE:
            raise RomTooBigError(len(data), AVAILABLE_STORAGE)
        self._ram.write_block(ROM_START_ADDR, data)

    # @intent:responsibility PCの位置からビッグエンディアンの16bit命令を読み出し、PCを進めます。
    # @intent:pre-condition 命令全体がプログラム領域内にある必要があります。範囲外ならPCは変化しない。
    def fetch(self) -> int:
        if self.pc.value + INSTRUCTION_SIZE > CALL_STACK_START_ADDR:
            raise AddressRangeError(
                f"Cannot fetch at {self.pc.value:#05x}: outside program area below {CALL_STACK_START_ADDR:#05x}."
            )
        hi, lo = self._ram.read_block(self.pc.advance(), INSTRUCTION_SIZE)
        return (hi << 8) | lo

    def _check_window(self, count: int) -> None:
        if self.i.value + count > RAM_SIZE:
            raise AddressRangeError(
                f"Access of {count} bytes at I={self.i.value:#05x} runs past the end of memory."
            )

    # @intent:responsibility I から count バイトを読み出します。
    def read_bytes(self, count: int) -> bytes:
        self._check_window(count)
        return self._ram.read_block(self.i.value, count)

    # @intent:responsibility I から data を書き込みます。範囲外なら1バイトも書き込まない。
    def write_bytes(self, data: Sequence[int]) -> None:
        block = bytes(data)
        self._check_window(len(block))
        self._ram.write_block(self.i.value, block)

    # @intent:responsibility value のBCD表現（百・十・一の位）を I, I+1, I+2 に書き込みます。
    def store_bcd(self, value: int) -> None:
        self.write_bytes(bcd(value))

    # @intent:responsibility 任意アドレスの1バイトを読み出します（逆アセンブル・検査用）。
    def peek(self, address: int) -> int:
        return self._ram.read(address)
