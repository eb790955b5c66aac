# retro_chip8/arch/chip8/instructions/base.py
"""
CHIP-8 命令の共通定義。

デコード結果は閉じた命令種別(Op)とオペランドの組として表現されます。
"""
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

from retro_chip8.core.snapshot import Operation

# @intent:responsibility CHIP-8 の実行可能な命令種別（閉じた集合）を定義します。
# @intent:rationale 0NNN (SYS addr) は廃止命令のためデコード時に失敗させ、ここには含めない。
class Op(Enum):
    CLS = "00E0"
    RET = "00EE"
    JP = "1NNN"
    CALL = "2NNN"
    SE_VX_BYTE = "3XKK"
    SNE_VX_BYTE = "4XKK"
    SE_VX_VY = "5XY0"
    LD_VX_BYTE = "6XKK"
    ADD_VX_BYTE = "7XKK"
    LD_VX_VY = "8XY0"
    OR = "8XY1"
    AND = "8XY2"
    XOR = "8XY3"
    ADD_VX_VY = "8XY4"
    SUB = "8XY5"
    SHR = "8XY6"
    SUBN = "8XY7"
    SHL = "8XYE"
    SNE_VX_VY = "9XY0"
    LD_I = "ANNN"
    JP_V0 = "BNNN"
    RND = "CXKK"
    DRW = "DXYN"
    SKP = "EX9E"
    SKNP = "EXA1"
    LD_VX_DT = "FX07"
    LD_VX_K = "FX0A"
    LD_DT_VX = "FX15"
    LD_ST_VX = "FX18"
    ADD_I_VX = "FX1E"
    LD_F_VX = "FX29"
    LD_B_VX = "FX33"
    LD_I_VX = "FX55"
    LD_VX_I = "FX65"

# @intent:map 命令種別からアセンブリ表記（ニーモニック, オペランドの書式）へのマッピング。
TEXT_FORMATS: Dict[Op, Tuple[str, List[str]]] = {
    Op.CLS: ("CLS", []),
    Op.RET: ("RET", []),
    Op.JP: ("JP", ["0x{nnn:X}"]),
    Op.CALL: ("CALL", ["0x{nnn:X}"]),
    Op.SE_VX_BYTE: ("SE", ["V{x:X}", "0x{kk:X}"]),
    Op.SNE_VX_BYTE: ("SNE", ["V{x:X}", "0x{kk:X}"]),
    Op.SE_VX_VY: ("SE", ["V{x:X}", "V{y:X}"]),
    Op.LD_VX_BYTE: ("LD", ["V{x:X}", "0x{kk:X}"]),
    Op.ADD_VX_BYTE: ("ADD", ["V{x:X}", "0x{kk:X}"]),
    Op.LD_VX_VY: ("LD", ["V{x:X}", "V{y:X}"]),
    Op.OR: ("OR", ["V{x:X}", "V{y:X}"]),
    Op.AND: ("AND", ["V{x:X}", "V{y:X}"]),
    Op.XOR: ("XOR", ["V{x:X}", "V{y:X}"]),
    Op.ADD_VX_VY: ("ADD", ["V{x:X}", "V{y:X}"]),
    Op.SUB: ("SUB", ["V{x:X}", "V{y:X}"]),
    Op.SHR: ("SHR", ["V{x:X} {{", "V{y:X}}}"]),
    Op.SUBN: ("SUBN", ["V{x:X}", "V{y:X}"]),
    Op.SHL: ("SHL", ["V{x:X} {{", "V{y:X}}}"]),
    Op.SNE_VX_VY: ("SNE", ["V{x:X}", "V{y:X}"]),
    Op.LD_I: ("LD", ["I", "0x{nnn:X}"]),
    Op.JP_V0: ("JP", ["V0", "0x{nnn:X}"]),
    Op.RND: ("RND", ["V{x:X}", "0x{kk:X}"]),
    Op.DRW: ("DRW", ["V{x:X}", "V{y:X}", "0x{n:X}"]),
    Op.SKP: ("SKP", ["V{x:X}"]),
    Op.SKNP: ("SKNP", ["V{x:X}"]),
    Op.LD_VX_DT: ("LD", ["V{x:X}", "DT"]),
    Op.LD_VX_K: ("LD", ["V{x:X}", "K"]),
    Op.LD_DT_VX: ("LD", ["DT", "V{x:X}"]),
    Op.LD_ST_VX: ("LD", ["ST", "V{x:X}"]),
    Op.ADD_I_VX: ("ADD", ["I", "V{x:X}"]),
    Op.LD_F_VX: ("LD", ["F", "V{x:X}"]),
    Op.LD_B_VX: ("LD", ["B", "V{x:X}"]),
    Op.LD_I_VX: ("LD", ["[I]", "V{x:X}"]),
    Op.LD_VX_I: ("LD", ["V{x:X}", "[I]"]),
}

# @intent:responsibility デコード済みの1命令（命令種別とオペランド）を保持します。
@dataclass(frozen=True)
class Instruction:
    """
    16bit 命令ワードをデコードした結果。
    x, y は4bitのレジスタ番号、n は4bit、kk は8bit、nnn は12bitの即値です。
    """
    opcode: int
    op: Op
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0

    @property
    def mnemonic(self) -> str:
        return TEXT_FORMATS[self.op][0]

    # @intent:responsibility オペランドをアセンブリ表記の文字列リストとして返します。
    # @intent:rationale BNNN は互換モードにより V0 または VX を加算するため、表記も呼び出し側で選択させる。
    def operand_texts(self, jump_uses_vx: bool = False) -> List[str]:
        if self.op is Op.JP_V0 and jump_uses_vx:
            return [f"V{self.x:X}", f"0x{self.nnn:X}"]
        fields = dict(x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn)
        return [fmt.format(**fields) for fmt in TEXT_FORMATS[self.op][1]]

    @property
    def text(self) -> str:
        operands = self.operand_texts()
        if operands:
            return f"{self.mnemonic} " + ", ".join(operands)
        return self.mnemonic

    # @intent:responsibility スナップショット用のOperationに変換します。
    def to_operation(self, jump_uses_vx: bool = False) -> Operation:
        return Operation(f"{self.opcode:04X}", self.mnemonic, self.operand_texts(jump_uses_vx))
