# retro_chip8/arch/chip8/stack.py
"""
CHIP-8 コールスタック。
"""
from typing import List

from retro_chip8.core.errors import StackOverflowError, StackUnderflowError

MAX_STACK = 16

# @intent:responsibility サブルーチン呼び出しの戻りアドレスを最大16段まで保持します。
# @intent:rationale 溢れた場合に古い要素を上書きせず、致命的フォルトとして送出します。
class CallStack:
    def __init__(self):
        self._storage: List[int] = []

    def push(self, addr: int) -> None:
        if len(self._storage) >= MAX_STACK:
            raise StackOverflowError(f"stack overflow: cannot push {addr:#05x}, depth is {MAX_STACK}")
        self._storage.append(addr)

    def pop(self) -> int:
        if not self._storage:
            raise StackUnderflowError("stack is empty: cannot pop from stack")
        return self._storage.pop()

    # @intent:responsibility 現在積まれているアドレスを古い順に返します（検査用）。
    def peek_all(self) -> List[int]:
        return list(self._storage)

    @property
    def depth(self) -> int:
        return len(self._storage)

    def __len__(self) -> int:
        return len(self._storage)

    def reset(self) -> None:
        self._storage.clear()
