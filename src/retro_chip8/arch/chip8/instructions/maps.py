# retro_chip8/arch/chip8/instructions/maps.py
"""
オペコードと命令実装のマッピング定義。
"""
from . import control
from . import alu
from . import load
from . import io
from .base import Op

# @intent:map 上位ニブルから (マスク, 一致値, 命令種別) の候補リストへのマッピングテーブル。
# @intent:rationale 同じ上位ニブル内では先に現れたパターンが優先される。
DECODE_MAP = {
    0x0: [
        (0xFFFF, 0x00E0, Op.CLS),
        (0xFFFF, 0x00EE, Op.RET),
    ],
    0x1: [(0xF000, 0x1000, Op.JP)],
    0x2: [(0xF000, 0x2000, Op.CALL)],
    0x3: [(0xF000, 0x3000, Op.SE_VX_BYTE)],
    0x4: [(0xF000, 0x4000, Op.SNE_VX_BYTE)],
    0x5: [(0xF00F, 0x5000, Op.SE_VX_VY)],
    0x6: [(0xF000, 0x6000, Op.LD_VX_BYTE)],
    0x7: [(0xF000, 0x7000, Op.ADD_VX_BYTE)],
    0x8: [
        (0xF00F, 0x8000, Op.LD_VX_VY),
        (0xF00F, 0x8001, Op.OR),
        (0xF00F, 0x8002, Op.AND),
        (0xF00F, 0x8003, Op.XOR),
        (0xF00F, 0x8004, Op.ADD_VX_VY),
        (0xF00F, 0x8005, Op.SUB),
        (0xF00F, 0x8007, Op.SUBN),
        (0xF00F, 0x8006, Op.SHR),
        (0xF00F, 0x800E, Op.SHL),
    ],
    0x9: [(0xF00F, 0x9000, Op.SNE_VX_VY)],
    0xA: [(0xF000, 0xA000, Op.LD_I)],
    0xB: [(0xF000, 0xB000, Op.JP_V0)],
    0xC: [(0xF000, 0xC000, Op.RND)],
    0xD: [(0xF000, 0xD000, Op.DRW)],
    0xE: [
        (0xF0FF, 0xE09E, Op.SKP),
        (0xF0FF, 0xE0A1, Op.SKNP),
    ],
    0xF: [
        (0xF0FF, 0xF007, Op.LD_VX_DT),
        (0xF0FF, 0xF015, Op.LD_DT_VX),
        (0xF0FF, 0xF018, Op.LD_ST_VX),
        (0xF0FF, 0xF00A, Op.LD_VX_K),
        (0xF0FF, 0xF01E, Op.ADD_I_VX),
        (0xF0FF, 0xF033, Op.LD_B_VX),
        (0xF0FF, 0xF055, Op.LD_I_VX),
        (0xF0FF, 0xF065, Op.LD_VX_I),
        (0xF0FF, 0xF029, Op.LD_F_VX),
    ],
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP = {
    # Control
    Op.JP: control.execute_jp,
    Op.JP_V0: control.execute_jp_v0,
    Op.CALL: control.execute_call,
    Op.RET: control.execute_ret,
    Op.SE_VX_BYTE: control.execute_se_vx_byte,
    Op.SNE_VX_BYTE: control.execute_sne_vx_byte,
    Op.SE_VX_VY: control.execute_se_vx_vy,
    Op.SNE_VX_VY: control.execute_sne_vx_vy,
    Op.SKP: control.execute_skp,
    Op.SKNP: control.execute_sknp,

    # ALU
    Op.ADD_VX_BYTE: alu.execute_add_vx_byte,
    Op.OR: alu.execute_or,
    Op.AND: alu.execute_and,
    Op.XOR: alu.execute_xor,
    Op.ADD_VX_VY: alu.execute_add_vx_vy,
    Op.SUB: alu.execute_sub,
    Op.SUBN: alu.execute_subn,
    Op.SHR: alu.execute_shr,
    Op.SHL: alu.execute_shl,
    Op.RND: alu.execute_rnd,

    # Load/Store
    Op.LD_VX_BYTE: load.execute_ld_vx_byte,
    Op.LD_VX_VY: load.execute_ld_vx_vy,
    Op.LD_VX_DT: load.execute_ld_vx_dt,
    Op.LD_DT_VX: load.execute_ld_dt_vx,
    Op.LD_ST_VX: load.execute_ld_st_vx,
    Op.LD_I: load.execute_ld_i,
    Op.ADD_I_VX: load.execute_add_i_vx,
    Op.LD_F_VX: load.execute_ld_f_vx,
    Op.LD_B_VX: load.execute_ld_b_vx,
    Op.LD_I_VX: load.execute_ld_i_vx,
    Op.LD_VX_I: load.execute_ld_vx_i,

    # Display / Input
    Op.CLS: io.execute_cls,
    Op.DRW: io.execute_drw,
    Op.LD_VX_K: io.execute_ld_vx_k,
}
