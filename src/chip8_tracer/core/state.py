# chip8_tracer/core/state.py
"""
Core Layer (CPU状態)

このモジュールは、CPUの基本的な状態（レジスタ群）を保持するデータ構造を定義します。
"""
import copy
from dataclasses import dataclass, fields

from chip8_tracer.common.types import RegisterMap

# @intent:responsibility CPUのレジスタ状態を保持します。アーキテクチャ固有のレジスタはこれを拡張します。
@dataclass
class CpuState:
    """
    CPUのレジスタ状態を保持するデータクラス。
    これは抽象的な基底状態であり、特定のCPUアーキテクチャに応じて拡張されます。
    """
    pc: int = 0x0000  # Program Counter
    sp: int = 0x0000  # Stack Pointer

    # @intent:responsibility 状態の完全な複製を返します。
    # @intent:rationale サブクラスはリスト等の可変フィールドを持つため、浅いコピーでは
    #                  Snapshotやロールバック用の退避状態が後続の実行で書き換わってしまう。
    def copy(self) -> "CpuState":
        return copy.deepcopy(self)

    # @intent:responsibility 別の状態の全フィールドをこのインスタンスへ書き戻します。
    # @intent:rationale get_state()で取得済みの参照を保持している呼び出し側からも、
    #                  ロールバックや巻き戻しの結果が見えるようにインスタンスを差し替えない。
    def restore_from(self, other: "CpuState") -> None:
        for f in fields(self):
            setattr(self, f.name, copy.deepcopy(getattr(other, f.name)))

    # @intent:responsibility 名前付きレジスタの値を辞書形式で返します。
    def as_register_map(self) -> RegisterMap:
        return {"PC": self.pc, "SP": self.sp}
