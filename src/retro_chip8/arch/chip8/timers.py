# retro_chip8/arch/chip8/timers.py
"""
CHIP-8 のタイマー。

DelayTimer は実時間に同期し、SoundTimer は実行サイクルに同期します。
ディレイタイマーはバックグラウンドで刻むのではなく、読み出し時に
経過時間から現在値を求めます。
"""
import time
from typing import Callable, Tuple

# COSMAC VIP のマニュアルで、サウンドタイマーが反応する最小値
MIN_SOUND_DURATION = 2
FPS = 60

# @intent:responsibility (値, 基準時刻, 現在時刻) から現在のタイマー値と新しい基準時刻を求めます。
# @intent:post-condition 1単位(1/60秒)以上経過していれば基準時刻は now へ進み、値は0未満にならない。
def project_delay(value: int, reference: float, now: float) -> Tuple[int, float]:
    ticks = int((now - reference) * FPS)
    if ticks <= 0:
        return value, reference
    return max(value - ticks, 0), now


# @intent:responsibility ゲームのタイミング制御に使われるタイマー。値の設定と読み出しができる。
class DelayTimer:
    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._value = 0
        self._reference = clock()

    # @intent:responsibility 値を設定し、基準時刻を現在時刻にリセットします。
    def store(self, value: int) -> None:
        self._value = value & 0xFF
        self._reference = self._clock()

    # @intent:responsibility 経過時間を反映した現在値を返します。
    def load(self) -> int:
        if self._value == 0:
            return 0
        self._value, self._reference = project_delay(self._value, self._reference, self._clock())
        return self._value

    # @intent:responsibility 現在値を返します。基準時刻は更新しません（検査・スナップショット用）。
    def peek(self) -> int:
        if self._value == 0:
            return 0
        return project_delay(self._value, self._reference, self._clock())[0]

    def reset(self) -> None:
        self._value = 0
        self._reference = self._clock()


# @intent:responsibility 効果音用のタイマー。値が0でない間、ホストはビープ音を鳴らすべき。
class SoundTimer:
    def __init__(self):
        self._value = 0

    # @intent:pre-condition value は MIN_SOUND_DURATION 以上である必要があります。
    def store(self, value: int) -> None:
        if value < MIN_SOUND_DURATION:
            raise ValueError(f"Sound timer value {value} is below the minimum duration {MIN_SOUND_DURATION}.")
        self._value = value & 0xFF

    # @intent:responsibility 1サイクル分 値を減らします（0で止まる）。
    def decrease(self) -> None:
        if self._value > 0:
            self._value -= 1

    @property
    def value(self) -> int:
        return self._value

    @property
    def is_active(self) -> bool:
        return self._value > 0

    def reset(self) -> None:
        self._value = 0
