"""Errors raised while executing bytecode, and the VM's numeric error codes."""

from __future__ import annotations

import enum


class VmExecutionError(Exception):
    """Base class for failures during bytecode execution."""

    message = "VM execution error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message if message is not None else self.message)


class InternalError(VmExecutionError):
    """An unexpected failure inside the VM, wrapping its cause."""

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Internal error: {cause}")
        self.cause = cause
        self.__cause__ = cause


class StackOverflowError(VmExecutionError):
    message = "Stack overflow"


class StackUnderflowError(VmExecutionError):
    message = "Stack underflow"


class NullPointerError(VmExecutionError):
    message = "Null Pointer Exception"


class SegmentationFaultError(VmExecutionError):
    message = "Segmantation Fault"


class InvalidOpCodeError(VmExecutionError):
    message = "Invalid OpCode"


class UnexpectedEOFError(VmExecutionError):
    message = "Unexpected End of File"


class VmErrorCode(enum.IntEnum):
    """Error codes a running program can set."""

    NONE = 0
    OVERFLOW = 1
    UNDERFLOW = 2
    DIVISION_BY_ZERO = 3
    INVALID_REGISTER_ACCESS = 4
    FLOAT_INVALID_RESULT = 5


__all__ = [
    "InternalError",
    "InvalidOpCodeError",
    "NullPointerError",
    "SegmentationFaultError",
    "StackOverflowError",
    "StackUnderflowError",
    "UnexpectedEOFError",
    "VmErrorCode",
    "VmExecutionError",
]