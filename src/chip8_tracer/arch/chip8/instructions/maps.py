# src/chip8_tracer/arch/chip8/instructions/maps.py
"""
命令語パターンと命令実装のマッピング定義。
"""
from typing import Callable, Dict, List, Tuple

from . import alu
from . import control
from . import display
from . import load
from .base import Chip8Operation, ExecutionContext, OpcodePattern as P

# Decode Rule: (Mask, Match, Pattern)
DecodeRule = Tuple[int, int, P]
ExecFunc = Callable[[ExecutionContext, Chip8Operation], None]

# @intent:map 先頭ニブルから候補となるデコード規則へのマッピングテーブル。
# @intent:rationale 先頭ニブルだけで確定する命令は全ビットを無視するマスク、
#                  末尾ニブルや下位バイトで細分される命令はそれを含むマスクを用いる。
DECODE_MAP: Dict[int, List[DecodeRule]] = {
    0x0: [
        (0xFFFF, 0x00E0, P.CLS),
        (0xFFFF, 0x00EE, P.RET),
    ],
    0x1: [(0xF000, 0x1000, P.JP)],
    0x2: [(0xF000, 0x2000, P.CALL)],
    0x3: [(0xF000, 0x3000, P.SE_VX_NN)],
    0x4: [(0xF000, 0x4000, P.SNE_VX_NN)],
    0x5: [(0xF00F, 0x5000, P.SE_VX_VY)],
    0x6: [(0xF000, 0x6000, P.LD_VX_NN)],
    0x7: [(0xF000, 0x7000, P.ADD_VX_NN)],
    0x8: [
        (0xF00F, 0x8000, P.LD_VX_VY),
        (0xF00F, 0x8001, P.OR),
        (0xF00F, 0x8002, P.AND),
        (0xF00F, 0x8003, P.XOR),
        (0xF00F, 0x8004, P.ADD_VX_VY),
        (0xF00F, 0x8005, P.SUB),
        (0xF00F, 0x8006, P.SHR),
        (0xF00F, 0x8007, P.SUBN),
        (0xF00F, 0x800E, P.SHL),
    ],
    0x9: [(0xF00F, 0x9000, P.SNE_VX_VY)],
    0xA: [(0xF000, 0xA000, P.LD_I)],
    0xB: [(0xF000, 0xB000, P.JP_V0)],
    0xD: [(0xF000, 0xD000, P.DRW)],
    0xF: [
        (0xF0FF, 0xF015, P.LD_DT_VX),
        (0xF0FF, 0xF033, P.LD_B_VX),
        (0xF0FF, 0xF055, P.LD_MEM_VX),
        (0xF0FF, 0xF065, P.LD_VX_MEM),
    ],
}

# @intent:map 命令種別から実行関数へのマッピングテーブル。
EXECUTE_MAP: Dict[P, ExecFunc] = {
    # Display
    P.CLS: display.execute_cls,
    P.DRW: display.execute_drw,

    # Control
    P.RET: control.execute_ret,
    P.JP: control.execute_jp,
    P.CALL: control.execute_call,
    P.SE_VX_NN: control.execute_se_vx_nn,
    P.SNE_VX_NN: control.execute_sne_vx_nn,
    P.SE_VX_VY: control.execute_se_vx_vy,
    P.SNE_VX_VY: control.execute_sne_vx_vy,
    P.JP_V0: control.execute_jp_v0,

    # Load/Store
    P.LD_VX_NN: load.execute_ld_vx_nn,
    P.ADD_VX_NN: load.execute_add_vx_nn,
    P.LD_VX_VY: load.execute_ld_vx_vy,
    P.LD_I: load.execute_ld_i,
    P.LD_DT_VX: load.execute_ld_dt_vx,
    P.LD_B_VX: load.execute_ld_b_vx,
    P.LD_MEM_VX: load.execute_ld_mem_vx,
    P.LD_VX_MEM: load.execute_ld_vx_mem,

    # ALU
    P.OR: alu.execute_or,
    P.AND: alu.execute_and,
    P.XOR: alu.execute_xor,
    P.ADD_VX_VY: alu.execute_add_vx_vy,
    P.SUB: alu.execute_sub,
    P.SHR: alu.execute_shr,
    P.SUBN: alu.execute_subn,
    P.SHL: alu.execute_shl,
}

# @intent:map 命令種別から (ニーモニック, オペランド書式) へのマッピングテーブル。
# 書式中の {x} {y} {n} {nn} {nnn} はデコード済みオペランドで置換される。
SYNTAX_MAP: Dict[P, Tuple[str, List[str]]] = {
    P.CLS: ("CLS", []),
    P.RET: ("RET", []),
    P.JP: ("JP", ["${nnn:03X}"]),
    P.CALL: ("CALL", ["${nnn:03X}"]),
    P.SE_VX_NN: ("SE", ["V{x:X}", "#${nn:02X}"]),
    P.SNE_VX_NN: ("SNE", ["V{x:X}", "#${nn:02X}"]),
    P.SE_VX_VY: ("SE", ["V{x:X}", "V{y:X}"]),
    P.LD_VX_NN: ("LD", ["V{x:X}", "#${nn:02X}"]),
    P.ADD_VX_NN: ("ADD", ["V{x:X}", "#${nn:02X}"]),
    P.LD_VX_VY: ("LD", ["V{x:X}", "V{y:X}"]),
    P.OR: ("OR", ["V{x:X}", "V{y:X}"]),
    P.AND: ("AND", ["V{x:X}", "V{y:X}"]),
    P.XOR: ("XOR", ["V{x:X}", "V{y:X}"]),
    P.ADD_VX_VY: ("ADD", ["V{x:X}", "V{y:X}"]),
    P.SUB: ("SUB", ["V{x:X}", "V{y:X}"]),
    P.SHR: ("SHR", ["V{x:X}"]),
    P.SUBN: ("SUBN", ["V{x:X}", "V{y:X}"]),
    P.SHL: ("SHL", ["V{x:X}"]),
    P.SNE_VX_VY: ("SNE", ["V{x:X}", "V{y:X}"]),
    P.LD_I: ("LD", ["I", "${nnn:03X}"]),
    P.JP_V0: ("JP", ["V0", "${nnn:03X}"]),
    P.DRW: ("DRW", ["V{x:X}", "V{y:X}", "{n}"]),
    P.LD_DT_VX: ("LD", ["DT", "V{x:X}"]),
    P.LD_B_VX: ("LD", ["B", "V{x:X}"]),
    P.LD_MEM_VX: ("LD", ["[I]", "V{x:X}"]),
    P.LD_VX_MEM: ("LD", ["V{x:X}", "[I]"]),
}
