# tests/config/test_config.py
"""
retro_chip8.configパッケージの単体テスト。
"""
import pytest

from retro_chip8.arch.chip8.cpu import Chip8Cpu
from retro_chip8.config.builder import SystemBuilder
from retro_chip8.config.loader import ConfigLoader
from retro_chip8.config.models import CompatMode, MachineConfig, Quirks

# @intent:test_suite YAML設定の読み込み、互換モードのプリセット、システム構築を検証します。

class TestQuirks:
    def test_modern_preset(self):
        q = Quirks.for_mode(CompatMode.MODERN)
        assert q.shift_uses_vy is False
        assert q.jump_uses_vx is True
        assert q.index_overflow_flag is True
        assert q.load_store_increments_i is False
        assert (q.display_width, q.display_height) == (64, 32)

    def test_classic_preset(self):
        q = Quirks.for_mode(CompatMode.CLASSIC)
        assert q.shift_uses_vy is True
        assert q.jump_uses_vx is False
        assert q.font_masks_low_nibble is True
        assert q.index_overflow_flag is False
        assert q.load_store_increments_i is True
        assert q.logic_resets_vf is True

    def test_extended_preset(self):
        q = Quirks.for_mode(CompatMode.EXTENDED)
        assert (q.display_width, q.display_height) == (128, 64)
        assert q.jump_uses_vx is True

    def test_replace_returns_new_instance(self):
        q = Quirks()
        q2 = q.replace(shift_uses_vy=True)
        assert q.shift_uses_vy is False
        assert q2.shift_uses_vy is True

class TestConfigLoader:
    # @intent:test_case_load YAMLファイルから設定を読み込めることを検証します。
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "machine.yaml"
        path.write_text(
            "mode: classic\n"
            "rng_seed: 0x2A\n"
            "quirks:\n"
            "  shift_uses_vy: false\n"
            "  display_width: \"0x80\"\n"
        )
        config = ConfigLoader().load_from_file(str(path))
        assert config.mode is CompatMode.CLASSIC
        assert config.rng_seed == 42
        assert config.quirk_overrides == {"shift_uses_vy": False, "display_width": 0x80}

    def test_empty_file_uses_defaults(self, tmp_path):
        path = tmp_path / "empty.yaml"
        path.write_text("")
        config = ConfigLoader().load_from_file(str(path))
        assert config.mode is CompatMode.MODERN
        assert config.quirk_overrides == {}
        assert config.rng_seed is None

    def test_mode_is_case_insensitive(self):
        config = ConfigLoader()._parse_config({"mode": "EXTENDED"})
        assert config.mode is CompatMode.EXTENDED

    # @intent:test_case_invalid_mode 未知の互換モードでValueErrorが発生することを検証します。
    def test_unknown_mode(self):
        with pytest.raises(ValueError, match="Unsupported compatibility mode: cosmac"):
            ConfigLoader()._parse_config({"mode": "cosmac"})

    def test_invalid_quirks_section(self):
        with pytest.raises(ValueError):
            ConfigLoader()._parse_config({"quirks": ["shift_uses_vy"]})

    # @intent:test_case_strict_bool 文字列の "false" などを真偽値として受け付けないことを検証します。
    def test_quirk_flag_must_be_boolean(self):
        loader = ConfigLoader()
        for value in ("false", "no", 0, 1):
            with pytest.raises(ValueError, match="Invalid boolean format"):
                loader._parse_config({"quirks": {"shift_uses_vy": value}})

    def test_quirk_flag_from_yaml(self, tmp_path):
        path = tmp_path / "quoted.yaml"
        path.write_text("quirks:\n  shift_uses_vy: \"false\"\n")
        with pytest.raises(ValueError):
            ConfigLoader().load_from_file(str(path))
        path.write_text("quirks:\n  shift_uses_vy: no\n")
        config = ConfigLoader().load_from_file(str(path))
        assert config.quirk_overrides == {"shift_uses_vy": False}

    def test_parse_int(self):
        loader = ConfigLoader()
        assert loader._parse_int(10) == 10
        assert loader._parse_int("0x10") == 16
        assert loader._parse_int("12") == 12
        with pytest.raises(ValueError):
            loader._parse_int(True)
        with pytest.raises(ValueError):
            loader._parse_int(1.5)

class TestSystemBuilder:
    def test_build_default(self):
        cpu = SystemBuilder().build_system(MachineConfig())
        assert isinstance(cpu, Chip8Cpu)
        assert cpu.quirks == Quirks.for_mode(CompatMode.MODERN)

    def test_overrides_applied(self):
        config = MachineConfig(mode=CompatMode.MODERN, quirk_overrides={"shift_uses_vy": True})
        quirks = SystemBuilder().resolve_quirks(config)
        assert quirks.shift_uses_vy is True
        assert quirks.jump_uses_vx is True

    # @intent:test_case_unknown_quirk 未知の設定キーは警告を出して無視されることを検証します。
    def test_unknown_quirk_warns(self):
        config = MachineConfig(mode=CompatMode.CLASSIC, quirk_overrides={"wrap_sprites": True})
        with pytest.warns(UserWarning, match="Unknown quirk 'wrap_sprites' for mode classic"):
            quirks = SystemBuilder().resolve_quirks(config)
        assert quirks == Quirks.for_mode(CompatMode.CLASSIC)

    def test_seed_makes_rng_reproducible(self):
        config = MachineConfig(rng_seed=99)
        a = SystemBuilder().build_system(config)
        b = SystemBuilder().build_system(config)
        assert a.rng.randint(0, 0xFF) == b.rng.randint(0, 0xFF)

    def test_extended_display(self):
        cpu = SystemBuilder().build_system(MachineConfig(mode=CompatMode.EXTENDED))
        assert cpu.display.width == 128
        assert cpu.display.height == 64
