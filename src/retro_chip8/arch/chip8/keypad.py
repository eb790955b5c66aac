# retro_chip8/arch/chip8/keypad.py
"""
CHIP-8 の16キー入力状態。
"""
from typing import Optional

KEYCODE_SIZE = 16

# @intent:responsibility 論理キー 0x0-0xF の押下状態を保持します。外部イベントによってのみ変更されます。
class KeyState:
    def __init__(self):
        self._keys = [False] * KEYCODE_SIZE

    def _check_key(self, key: int) -> None:
        if not 0 <= key < KEYCODE_SIZE:
            raise IndexError(f"Key {key} out of range 0x0-0xF.")

    def set(self, key: int, pressed: bool) -> None:
        self._check_key(key)
        self._keys[key] = bool(pressed)

    def is_down(self, key: int) -> bool:
        self._check_key(key)
        return self._keys[key]

    # @intent:responsibility 押されているキーのうち最も小さい番号を返します。なければNone。
    def any_pressed(self) -> Optional[int]:
        for key, pressed in enumerate(self._keys):
            if pressed:
                return key
        return None

    def reset(self) -> None:
        self._keys = [False] * KEYCODE_SIZE
