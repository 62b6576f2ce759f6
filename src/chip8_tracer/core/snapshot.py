# chip8_tracer/core/snapshot.py
"""
実行状態の不変スナップショット

このモジュールは、CPUとバスとフレームバッファの状態を記録した不変のデータ構造を定義します。
UIへの情報提供と、デバッグ時の状態記録に用いる責務を負います。
"""
from dataclasses import dataclass, field
from typing import List, Optional

from chip8_tracer.common.types import PixelGrid
from chip8_tracer.core.state import CpuState
from chip8_tracer.transport.bus import BusAccessType, BusAccess


# @intent:responsibility 実行された命令の詳細を記録します。
@dataclass(frozen=True) # 不変データ構造
class Operation:
    """
    実行された命令の詳細（HEX、ニーモニック、オペランド）を記録するデータクラス。
    """
    opcode_hex: str # 例: "A2F0"
    mnemonic: str # 例: "LD"
    operands: List[str] = field(default_factory=list) # 例: ["I", "$2F0"]
    operand_bytes: List[int] = field(default_factory=list) # 生の命令バイト
    cycle_count: int = 0 # 命令実行に必要なサイクル数
    length: int = 1 # 命令のバイト長

    # @intent:responsibility 逆アセンブル表示用の文字列を返します。
    def to_text(self) -> str:
        if self.operands:
            return f"{self.mnemonic} " + ", ".join(self.operands)
        return self.mnemonic

# @intent:responsibility 実行に関するメタデータを記録します。
@dataclass(frozen=True) # 不変データ構造
class Metadata:
    """
    実行に関するメタデータ（累計サイクル数、表示用の命令文字列など）を記録するデータクラス。
    """
    cycle_count: int
    symbol_info: Optional[str] = None # 例: "DRW V0, V1, 5"

# @intent:responsibility ある一時点におけるCPU、バス、画面の状態を不変に記録します。
@dataclass(frozen=True) # 不変データ構造
class Snapshot:
    """
    ある一時点における、CPUとバスの完全な状態を記録した不変のデータ構造。
    stateは実行直後の状態のコピーであり、後続のstep()で変化しません。
    """
    state: CpuState
    operation: Operation
    metadata: Metadata
    bus_activity: List[BusAccess] = field(default_factory=list)
    framebuffer: Optional[PixelGrid] = None # 画面を持たないCPUではNone

    # @intent:rationale Snapshotは不変であるべきという原則に従い、frozen=Trueを設定。
    #                  リストなどのミュータブルなフィールドはdefault_factoryを使用し、
    #                  インスタンスごとに新しいリストが生成されるようにする。

    # @intent:responsibility このサイクルで指定種別のアクセスがあったアドレスを列挙します。
    def addresses(self, access_type: BusAccessType) -> List[int]:
        return [access.address for access in self.bus_activity if access.access_type == access_type]
