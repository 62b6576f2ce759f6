# chip8_tracer/core/cpu.py
"""
Core Layer (抽象CPU)

このモジュールは、CPUの基本的な状態管理と命令サイクルの駆動に関する抽象化を提供します。
具体的な命令の振る舞いはInstruction Layerに移譲されます。
"""
from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from chip8_tracer.transport.bus import Bus
from chip8_tracer.core.snapshot import Snapshot, Operation, Metadata
from chip8_tracer.core.state import CpuState
from chip8_tracer.core.errors import EmulationError
from chip8_tracer.common.types import DisassemblyLine, PixelGrid, RegisterLayoutInfo, RegisterMap

# @intent:responsibility 抽象CPUの基本機能とインターフェースを定義します。
class AbstractCpu(ABC):
    """
    全てのCPUエミュレーションの基底となる抽象クラス。
    Busとのインターフェース、基本的な状態管理、命令サイクルの抽象化を提供します。
    """
    # @intent:pre-condition `bus`は有効なBusオブジェクトである必要があります。
    def __init__(self, bus: Bus):
        self._bus = bus
        self._state: CpuState = self._create_initial_state()
        self._cycle_count: int = 0
        # @intent:rationale Stateオブジェクトの直接操作を避けるため、protectedな命名規則を採用。
        #                  外部からのアクセスは`get_state()`メソッドを介して行う。

    # @intent:responsibility 初期状態のCpuStateオブジェクトを生成します。
    @abstractmethod
    def _create_initial_state(self) -> CpuState:
        """
        CPUの初期状態を生成して返します。
        具体的なCPUアーキテクチャはこのメソッドを実装し、
        そのアーキテクチャに特化したCpuStateのサブクラスを返すことができます。
        """
        pass

    # @intent:responsibility CPUをリセットし、初期状態に戻します。
    def reset(self) -> None:
        self._state = self._create_initial_state()
        self._cycle_count = 0

    # @intent:responsibility 現在のCPUの状態を返します。
    def get_state(self) -> CpuState:
        return self._state

    # @intent:responsibility 外部（デバッガ）が保持していた状態をCPUに書き戻します。
    def restore_state(self, state: CpuState) -> None:
        self._state.restore_from(state)

    # @intent:responsibility 接続されたバスを返します。
    def get_bus(self) -> Bus:
        return self._bus

    # @intent:responsibility 累計サイクル数を返します。
    def get_cycle_count(self) -> int:
        return self._cycle_count

    # @intent:responsibility 画面の読み取り専用ビューを返します。画面を持たないCPUではNone。
    def capture_display(self) -> Optional[PixelGrid]:
        return None

    # @intent:responsibility capture_displayで得たビューを画面に書き戻します。
    def restore_display(self, pixels: PixelGrid) -> None:
        pass

    # @intent:responsibility メモリから次の命令（オペコード）をフェッチします。
    @abstractmethod
    def _fetch(self) -> int:
        pass

    # @intent:responsibility フェッチしたオペコードを解析し、Operationオブジェクトに変換します。
    @abstractmethod
    def _decode(self, opcode: int) -> Operation:
        pass

    # @intent:responsibility デコードされた命令を実行し、CPUの状態を更新します。
    @abstractmethod
    def _execute(self, operation: Operation) -> None:
        pass

    # @intent:responsibility CPUを1命令サイクル進め、その結果のスナップショットを返します。
    # @intent:rationale Template Methodパターンを採用し、共通の実行フロー
    #                  （ログクリア→タイマー→フェッチ→デコード→PC更新→実行→Snapshot生成）を定義します。
    # @intent:post-condition EmulationErrorが送出された場合、CPU状態は呼び出し前の値に戻っています。
    def step(self) -> Snapshot:
        """
        CPUを1命令サイクル進め、その時点でのCPUとバスの状態を含むSnapshotオブジェクトを返します。
        """
        # 1. 前処理: 前サイクルまでの残存ログを破棄し、ロールバック用に状態を退避
        self._bus.get_and_clear_activity_log()
        saved_state = self._state.copy()
        initial_pc = self._state.pc

        try:
            # 2. サイクル開始時の処理 (Hook)
            self._begin_cycle()

            # 3. フェッチ
            opcode = self._fetch()

            # 4. デコード
            operation = self._decode(opcode)

            # 5. PC更新 (Hook)
            self._update_pc(operation)

            # 6. 実行
            self._execute(operation)
        except EmulationError:
            self._state.restore_from(saved_state)
            self._bus.get_and_clear_activity_log()
            raise

        # 7. 後処理 & Snapshot生成
        return self._create_snapshot(initial_pc, operation)

    # @intent:responsibility フェッチ前の処理（タイマー更新など）。デフォルトは何もしない。
    def _begin_cycle(self) -> None:
        pass

    # @intent:responsibility 命令実行前にPCを更新します。
    def _update_pc(self, operation: Operation) -> None:
        self._state.pc = (self._state.pc + operation.length) & 0xFFFF

    # @intent:responsibility スナップショットを生成します。
    def _create_snapshot(self, initial_pc: int, operation: Operation) -> Snapshot:
        bus_activity = self._bus.get_and_clear_activity_log()
        self._cycle_count += operation.cycle_count

        return Snapshot(
            state=self._state.copy(),
            operation=operation,
            metadata=Metadata(cycle_count=self._cycle_count, symbol_info=operation.to_text()),
            bus_activity=bus_activity,
            framebuffer=self.capture_display(),
        )

    @abstractmethod
    def get_register_map(self) -> RegisterMap:
        """
        現在のレジスタ値を辞書形式で返す。
        UIがCPUの内部構造を知らなくても値を表示できるようにするために使用される。
        """
        pass

    @abstractmethod
    def get_register_layout(self) -> List[RegisterLayoutInfo]:
        """
        レジスタをUI上でどのように配置・グループ化すべきかの定義を返す。
        """
        pass

    @abstractmethod
    def get_flag_state(self) -> Dict[str, bool]:
        """
        現在のフラグの状態を辞書形式で返す。
        """
        pass

    @abstractmethod
    def disassemble(self, start_addr: int, length: int) -> List[DisassemblyLine]:
        """
        指定されたメモリ範囲を逆アセンブルし、(address, hex_bytes, mnemonic) のタプルリストを返す。
        """
        pass
