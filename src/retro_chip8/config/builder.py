import random
import warnings
from dataclasses import fields

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from .models import MachineConfig, Quirks

# @intent:responsibility 設定（Config）に基づいて互換モードを解決し、CPUを生成します。
class SystemBuilder:
    def build_system(self, config: MachineConfig) -> Chip8Cpu:
        quirks = self.resolve_quirks(config)
        rng = random.Random(config.rng_seed)
        return Chip8Cpu(quirks=quirks, rng=rng)

    # @intent:responsibility モードのプリセットに個別の上書き設定を適用します。
    # @intent:rationale 未知のキーは警告を出して無視し、構築自体は継続する。
    def resolve_quirks(self, config: MachineConfig) -> Quirks:
        quirks = Quirks.for_mode(config.mode)
        known = {f.name for f in fields(Quirks)}

        changes = {}
        for name, value in config.quirk_overrides.items():
            if name not in known:
                warnings.warn(f"Unknown quirk '{name}' for mode {config.mode.value}, ignoring")
                continue
            changes[name] = value

        if changes:
            quirks = quirks.replace(**changes)
        return quirks
