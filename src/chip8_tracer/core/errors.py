# chip8_tracer/core/errors.py
"""
Core Layer (実行時エラー)

命令サイクル中に発生する致命的な状態を表す例外階層を定義します。
step()はこれらの例外を送出する前にCPU状態をロールバックするため、
ホスト側は停止・リセット・診断表示のいずれかを選択できます。
"""
import warnings


# @intent:responsibility エミュレーション継続が不可能な状態の基底例外。
class EmulationError(Exception):
    """
    命令実行中に検出された致命的なエラー。
    addressはエラーを起こした命令の先頭アドレスです。
    """
    def __init__(self, message: str, address: int):
        super().__init__(message)
        self.address = address


# @intent:responsibility どのデコード規則にも一致しない命令語を表します。
class UnimplementedOpcodeError(EmulationError):
    def __init__(self, opcode: int, address: int):
        super().__init__(f"Unimplemented opcode {opcode:#06x} at {address:#06x}", address)
        self.opcode = opcode


# @intent:responsibility スタック満杯時のCALLを表します。
class StackOverflowError(EmulationError):
    def __init__(self, address: int, depth: int):
        super().__init__(f"Call stack overflow at {address:#06x} (depth {depth})", address)
        self.depth = depth


# @intent:responsibility スタックが空の状態でのRETを表します。
class StackUnderflowError(EmulationError):
    def __init__(self, address: int):
        super().__init__(f"Call stack underflow at {address:#06x}", address)


# @intent:responsibility アドレス空間外へのメモリアクセスを表します。
class MemoryAccessError(EmulationError):
    def __init__(self, address: int, target: int, count: int = 1):
        super().__init__(
            f"Memory access {target:#06x}+{count} out of range at {address:#06x}", address
        )
        self.target = target
        self.count = count


# @intent:responsibility プログラム領域外を指すPCからのフェッチを表します。
class InvalidProgramCounterError(EmulationError):
    def __init__(self, address: int):
        super().__init__(f"Program counter {address:#06x} outside program area", address)


# @intent:responsibility ロード時の切り捨てを通知する警告カテゴリ（エラーではない）。
class ProgramTruncatedWarning(UserWarning):
    pass


# @intent:utility_function 切り捨てられたバイト数を警告として通知します。
def warn_truncated(dropped: int, size: int) -> None:
    warnings.warn(
        f"Program image of {size} bytes truncated: {dropped} bytes beyond the address space were dropped.",
        ProgramTruncatedWarning,
        stacklevel=3,
    )
