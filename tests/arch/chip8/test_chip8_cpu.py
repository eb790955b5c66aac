# tests/arch/chip8/test_chip8_cpu.py
"""
retro_chip8.arch.chip8.cpuモジュールの統合テスト。
"""
import random
import pytest

from retro_chip8.arch.chip8 import Chip8Cpu, Chip8CpuState, DEFAULT_ROM, DISPLAY_WIDTH, DISPLAY_HEIGHT
from retro_chip8.config.models import CompatMode, Quirks
from retro_chip8.core.errors import AddressRangeError, CpuFault, RomTooBigError, UnsupportedOpcodeError
from retro_chip8.core.state import RunState

# @intent:test_suite CPUの実行サイクル、再描画フラグ、キー入力待ち、リセット、検査APIを検証します。

GLYPH_C = [0xF0, 0x80, 0x80, 0x80, 0xF0]
GLYPH_8 = [0xF0, 0x90, 0xF0, 0x90, 0xF0]

def _words(*opcodes) -> bytes:
    return b"".join(bytes([op >> 8, op & 0xFF]) for op in opcodes)

def _glyph_at(cpu, x0, y0):
    rows = []
    for y in range(y0, y0 + 5):
        byte = 0
        for x in range(x0, x0 + 8):
            byte = (byte << 1) | int(cpu.display.pixel(x, y))
        rows.append(byte)
    return rows

def _run_until_redraw(cpu, limit=32):
    for _ in range(limit):
        if cpu.execute_cycle():
            return True
    return False

@pytest.fixture
def cpu():
    return Chip8Cpu(rng=random.Random(0))

class TestChip8CpuInit:
    def test_initial_state(self, cpu):
        state = cpu.get_state()
        assert isinstance(state, Chip8CpuState)
        assert state.pc == 0x200
        assert state.i == 0x50
        assert state.sp == 0
        assert state.v == [0] * 16
        assert state.dt == 0
        assert state.st == 0
        assert state.run_state is RunState.RUNNING
        assert cpu.display.width == DISPLAY_WIDTH
        assert cpu.display.height == DISPLAY_HEIGHT

    def test_default_quirks_are_modern(self, cpu):
        assert cpu.quirks == Quirks.for_mode(CompatMode.MODERN)

    def test_extended_mode_display(self):
        cpu = Chip8Cpu(Quirks.for_mode(CompatMode.EXTENDED))
        assert len(cpu.get_framebuffer()) == 128 * 64

    def test_framebuffer_initially_blank(self, cpu):
        fb = cpu.get_framebuffer()
        assert len(fb) == 64 * 32
        assert not any(fb)

class TestChip8CpuExecution:
    # @intent:test_case_default_rom デモROMの最初の再描画で "C" が、2回目で "8" が描かれることを検証します。
    def test_default_rom_draws_known_pattern(self, cpu):
        cpu.load_game(DEFAULT_ROM)
        assert _run_until_redraw(cpu)
        assert cpu.get_state().pc == 0x20A
        assert _glyph_at(cpu, 0, 0) == GLYPH_C
        assert cpu.v.flag == 0

        assert _run_until_redraw(cpu)
        assert _glyph_at(cpu, 5, 0) == GLYPH_8
        assert _glyph_at(cpu, 0, 0)[0] == 0xF7 # "C" の上辺と "8" の上辺が並ぶ
        assert cpu.v.flag == 0

        # 以降は自己ジャンプのみで再描画しない
        for _ in range(10):
            assert cpu.execute_cycle() is False
        assert cpu.get_state().pc == 0x212

    def test_redraw_flag_set_by_cls(self, cpu):
        cpu.load_game(_words(0x6000, 0x00E0))
        assert cpu.execute_cycle() is False
        assert cpu.execute_cycle() is True

    # @intent:test_case_collision 重ねて描画した場合に VF=1 となり、ピクセルが消えることを検証します。
    def test_draw_collision_sets_vf(self, cpu):
        cpu.load_game(_words(0xD015, 0xD015))
        cpu.execute_cycle()
        assert cpu.v.flag == 0
        cpu.execute_cycle()
        assert cpu.v.flag == 1
        assert not any(cpu.get_framebuffer())

    def test_snapshot_contents(self, cpu):
        cpu.load_game(_words(0xA22A))
        snapshot = cpu.step()
        assert snapshot.operation.opcode_hex == "A22A"
        assert snapshot.operation.text == "LD I, 0x22A"
        assert snapshot.metadata.symbol_info == "0x0200: LD I, 0x22A"
        assert snapshot.metadata.cycle_count == 1
        assert snapshot.state.i == 0x22A
        assert snapshot.redraw is False

    def test_snapshot_state_is_a_copy(self, cpu):
        cpu.load_game(_words(0x6142, 0x6155))
        snapshot = cpu.step()
        cpu.step()
        assert snapshot.state.v[1] == 0x42
        snapshot.state.v[1] = 0x00
        assert cpu.v[1] == 0x55

    def test_unsupported_opcode_is_fatal(self, cpu):
        cpu.load_game(_words(0x0123))
        with pytest.raises(UnsupportedOpcodeError):
            cpu.execute_cycle()

    # @intent:test_case_sound サウンドタイマーが実行サイクルごとに1減ることを検証します。
    def test_sound_timer_decrements_per_cycle(self, cpu):
        cpu.load_game(_words(0x6003, 0xF018, 0x1204))
        cpu.execute_cycle()
        cpu.execute_cycle()
        assert cpu.sound_timer.value == 2 # 設定したサイクルの終わりで1減る
        assert cpu.sound_active
        cpu.execute_cycle()
        cpu.execute_cycle()
        assert cpu.sound_timer.value == 0
        assert not cpu.sound_active

class TestChip8CpuKeyWait:
    # @intent:test_case_key_wait キーが押されていない場合に一時停止し、ホストが再開させるまで何もしないことを検証します。
    def test_pause_and_resume(self, cpu):
        cpu.load_game(_words(0x6004, 0xF018, 0xF30A, 0x1206))
        cpu.execute_cycle()
        cpu.execute_cycle()
        sound = cpu.sound_timer.value

        assert cpu.execute_cycle() is False
        assert cpu.run_state is RunState.PAUSED_AWAITING_KEY
        assert cpu.get_state().pc == 0x204 # 同じ命令を指したまま
        assert cpu.sound_timer.value == sound - 1

        # 停止中は何も実行しない
        for _ in range(5):
            snapshot = cpu.step()
            assert snapshot.operation.mnemonic == "WAIT"
            assert snapshot.redraw is False
        assert cpu.get_state().pc == 0x204
        assert cpu.sound_timer.value == sound - 1

        cpu.set_key_state(0x7, True)
        assert cpu.run_state is RunState.PAUSED_AWAITING_KEY # キー入力だけでは再開しない
        cpu.run_state = RunState.RUNNING
        cpu.execute_cycle()
        assert cpu.v[0x3] == 0x7
        assert cpu.get_state().pc == 0x206

    def test_key_already_pressed(self, cpu):
        cpu.load_game(_words(0xF50A))
        cpu.set_key_state(0xB, True)
        cpu.set_key_state(0xE, True)
        cpu.execute_cycle()
        assert cpu.v[0x5] == 0xB
        assert cpu.run_state is RunState.RUNNING

    def test_step_state_behaves_like_running(self, cpu):
        cpu.load_game(_words(0x6A01))
        cpu.run_state = RunState.STEP
        cpu.execute_cycle()
        assert cpu.v[0xA] == 0x01

class TestChip8CpuLifecycle:
    def test_load_game_too_big(self, cpu):
        with pytest.raises(RomTooBigError):
            cpu.load_game(b"\x00" * 4096)
        assert cpu.memory.peek(0x200) == 0x00

    # @intent:test_case_reset reset() で全てのコンポーネントが初期状態に戻ることを検証します。
    def test_reset(self, cpu):
        cpu.load_game(DEFAULT_ROM)
        _run_until_redraw(cpu)
        cpu.set_key_state(1, True)
        cpu.stack.push(0x300)
        cpu.reset()

        state = cpu.get_state()
        assert state.pc == 0x200
        assert state.i == 0x50
        assert state.v == [0] * 16
        assert state.sp == 0
        assert cpu.cycle_count == 0
        assert not any(cpu.get_framebuffer())
        assert cpu.keypad.any_pressed() is None
        assert cpu.memory.peek(0x200) == 0x00 # プログラムも消える
        assert cpu.memory.peek(0x50) == 0xF0 # フォントは再配置される

    def test_load_game_does_not_reset_state(self, cpu):
        cpu.v[0x1] = 0x11
        cpu.load_game(_words(0x00E0))
        assert cpu.v[0x1] == 0x11

class TestChip8CpuInspection:
    def test_register_map(self, cpu):
        cpu.v[0xA] = 0x12
        regs = cpu.get_register_map()
        assert regs["VA"] == 0x12
        assert regs["PC"] == 0x200
        assert regs["I"] == 0x50
        assert set(regs) >= {"V0", "VF", "SP", "DT", "ST"}

    def test_register_layout(self, cpu):
        layout = cpu.get_register_layout()
        assert [group.group_name for group in layout] == ["General", "Address", "Timers"]
        assert len(layout[0].registers) == 16

    def test_flag_state(self, cpu):
        assert cpu.get_flag_state() == {"VF": False}
        cpu.v.set_flag(1)
        assert cpu.get_flag_state() == {"VF": True}

    def test_disassemble_default_rom(self, cpu):
        cpu.load_game(DEFAULT_ROM)
        lines = cpu.disassemble(0x200, len(DEFAULT_ROM))
        assert lines[0] == (0x200, "60 00", "LD V0, 0x0")
        assert lines[4] == (0x208, "D0 15", "DRW V0, V1, 0x5")
        assert lines[-1] == (0x212, "12 12", "JP 0x212")

class FakeClock:
    __test__ = False

    def __init__(self):
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

class TestChip8CpuDelayTimer:
    # @intent:test_case_delay_realtime DTを読まないプログラムでも、ディレイタイマーが実時間で60単位/秒減ることを検証します。
    def test_delay_timer_keeps_real_time_without_reads(self):
        clock = FakeClock()
        cpu = Chip8Cpu(clock=clock)
        cpu.v[0x0] = 60
        # 0x200: LD DT, V0 / 0x202: JP 0x202
        cpu.load_game(_words(0xF015, 0x1202))
        cpu.execute_cycle()

        # 1サイクルあたり 1/64 秒 (1単位未満) 進める
        for _ in range(32):
            clock.now += 1 / 64
            cpu.execute_cycle()
        assert cpu.get_state().dt == 30
        assert cpu.get_register_map()["DT"] == 30

        for _ in range(32):
            clock.now += 1 / 64
            cpu.execute_cycle()
        assert cpu.delay_timer.load() == 0

    # @intent:test_case_inspection_is_pure 状態の検査を繰り返してもタイマーの進みが変わらないことを検証します。
    def test_inspection_does_not_disturb_delay_timer(self):
        clock = FakeClock()
        cpu = Chip8Cpu(clock=clock)
        cpu.delay_timer.store(10)
        for _ in range(8):
            clock.now += 1 / 128
            cpu.get_state()
            cpu.get_register_map()
        assert cpu.delay_timer.load() == 7 # 0.0625秒 = 3.75単位

class TestChip8CpuMemoryFaults:
    # @intent:test_case_draw_past_end スプライトがメモリ末尾を越える場合、CPUフォルトとなることを検証します。
    def test_draw_past_end_of_memory(self):
        cpu = Chip8Cpu()
        cpu.load_game(_words(0xD015))
        cpu.memory.i.store(0xFFE)
        with pytest.raises(AddressRangeError):
            cpu.execute_cycle()

    # @intent:test_case_run_off_program プログラム領域の末尾を越えて実行すると、CPUフォルトとなることを検証します。
    def test_running_off_program_area(self):
        cpu = Chip8Cpu()
        cpu.memory._ram.write_block(0xE9E, _words(0x6A01)) # プログラム領域の最後の命令
        cpu.memory.pc.set(0xE9E)
        cpu.execute_cycle()
        assert cpu.v[0xA] == 0x01
        assert cpu.get_state().pc == 0xEA0
        with pytest.raises(CpuFault):
            cpu.execute_cycle()
        assert cpu.get_state().pc == 0xEA0
