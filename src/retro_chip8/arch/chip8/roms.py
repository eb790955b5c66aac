# retro_chip8/arch/chip8/roms.py
"""
同梱のデモROM。

ROMファイルが指定されない場合にホストが使用する既定のプログラムです。
"""

# @intent:constant 組み込みフォントの "C" を (0, 0) に、"8" を (5, 0) に描画し、自己ジャンプで停止する。
DEFAULT_ROM = bytes([
    0x60, 0x00,  # 0x200: LD V0, 0x0
    0x61, 0x00,  # 0x202: LD V1, 0x0
    0x62, 0x0C,  # 0x204: LD V2, 0xC
    0xF2, 0x29,  # 0x206: LD F, V2
    0xD0, 0x15,  # 0x208: DRW V0, V1, 0x5
    0x60, 0x05,  # 0x20A: LD V0, 0x5
    0x62, 0x08,  # 0x20C: LD V2, 0x8
    0xF2, 0x29,  # 0x20E: LD F, V2
    0xD0, 0x15,  # 0x210: DRW V0, V1, 0x5
    0x12, 0x12,  # 0x212: JP 0x212
])
