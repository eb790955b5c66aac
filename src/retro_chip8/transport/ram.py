# retro_chip8/transport/ram.py
"""
Transport Layer (RAMデバイス)

固定サイズのバイト配列を保持し、境界チェック付きの読み書きを提供します。
サイズは生成時に一度だけ決まり、実行中に変化しません。
"""
from typing import Iterable

# @intent:responsibility 基本的なRAMデバイスの機能を提供します。
class RAM:
    """
    固定サイズのメモリデバイス。全てのアクセスは境界チェックされます。
    """
    # @intent:responsibility 指定されたサイズのメモリ領域を初期化します。
    # @intent:pre-condition sizeは正の整数である必要があります。
    def __init__(self, size: int):
        if not isinstance(size, int) or size <= 0:
            raise ValueError("RAM size must be a positive integer.")
        self._memory = bytearray(size)
        self._size = size

    def _check_range(self, address: int, length: int = 1) -> None:
        if not (0 <= address and address + length <= self._size):
            raise IndexError(f"Address {address} out of bounds for RAM of size {self._size}.")

    # @intent:responsibility 指定されたアドレスから8bitのデータを読み出します。
    # @intent:pre-condition アドレスはRAMの有効範囲内である必要があります。
    def read(self, address: int) -> int:
        self._check_range(address)
        return self._memory[address]

    # @intent:responsibility 指定されたアドレスに8bitのデータを書き込みます。
    # @intent:pre-condition アドレスはRAMの有効範囲内であり、データは8bit値である必要があります。
    def write(self, address: int, data: int) -> None:
        self._check_range(address)
        if not 0 <= data <= 0xFF:
            raise ValueError(f"Data {data} is not an 8-bit value.")
        self._memory[address] = data

    # @intent:responsibility 連続した領域をまとめて読み出します。
    def read_block(self, address: int, length: int) -> bytes:
        self._check_range(address, length)
        return bytes(self._memory[address:address + length])

    # @intent:responsibility 連続した領域へまとめて書き込みます。
    # @intent:rationale 範囲外なら1バイトも書き込まない（部分的な書き込みを残さない）。
    def write_block(self, address: int, data: Iterable[int]) -> None:
        block = bytes(data)
        self._check_range(address, len(block))
        self._memory[address:address + len(block)] = block

    # @intent:responsibility 全領域をゼロクリアします。サイズは変化しません。
    def clear(self) -> None:
        self._memory[:] = bytes(self._size)

    # @intent:responsibility RAMのサイズを返します。
    def get_size(self) -> int:
        return self._size
