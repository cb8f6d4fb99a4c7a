"""Parsing and big-endian encoding of instruction arguments and registers."""

from __future__ import annotations

import enum
import math
import re
import struct
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Union

MAX_OPCODES = 65536
SIZE_OF_REGISTER = 1

Value = Union[int, float, "RegisterType"]


class VmParseError(ValueError):
    """Text could not be turned into instruction arguments."""


class InvalidRegisterError(VmParseError):
    """A register operand was malformed or out of range."""

    def __init__(self, text: str) -> None:
        super().__init__(f"invalid register: {text}")
        self.text = text


class InvalidArgumentError(VmParseError):
    """A numeric operand could not be parsed for its type."""

    def __init__(self, text: str) -> None:
        super().__init__(f"invalid argument: {text}")
        self.text = text


class WrongArgumentCountError(VmParseError):
    """An instruction was given the wrong number of operands."""

    def __init__(self, expected: int, got: int) -> None:
        super().__init__(f"expected {expected} arguments, got {got}")
        self.expected = expected
        self.got = got


_DIGITS = {2: "[01]", 8: "[0-7]", 10: "[0-9]", 16: "[0-9a-fA-F]"}
_PREFIXES = (("0x", 16), ("0b", 2), ("0o", 8))


def _parse_integer(digits: str, radix: int, low: int, high: int) -> int | None:
    """Parse an optionally signed integer in a radix; None if invalid or out of range."""
    sign = "[+-]?" if low < 0 else r"\+?"
    if re.fullmatch(f"{sign}{_DIGITS[radix]}+", digits) is None:
        return None
    value = int(digits, radix)
    if not low <= value <= high:
        return None
    return value


@dataclass(frozen=True, order=True)
class RegisterType:
    """A register operand, identified by its index in the register file."""

    index: int

    def __post_init__(self) -> None:
        if not 0 <= self.index <= 0xFF:
            raise ValueError(f"register index {self.index} does not fit in a byte")

    @classmethod
    def parse(cls, text: str, max_registers: int | None = None) -> RegisterType:
        """Parse 'R<n>', rejecting indices at or beyond max_registers when given."""
        if not text.startswith("R"):
            raise InvalidRegisterError(text)
        index = _parse_integer(text[1:], 10, 0, 0xFF)
        if index is None:
            raise InvalidRegisterError(text)
        if max_registers is not None and index >= max_registers:
            raise InvalidRegisterError(f"Register index {index} out of range")
        return cls(index)

    def to_be_bytes(self) -> bytes:
        """The register index as a single byte."""
        return bytes([self.index])

    def __int__(self) -> int:
        return self.index

    def __index__(self) -> int:
        return self.index

    def __str__(self) -> str:
        return str(self.index)


_INT_RANGES = {
    "u8": (0, 2**8 - 1),
    "u16": (0, 2**16 - 1),
    "u32": (0, 2**32 - 1),
    "u64": (0, 2**64 - 1),
    "i8": (-(2**7), 2**7 - 1),
    "i16": (-(2**15), 2**15 - 1),
    "i32": (-(2**31), 2**31 - 1),
    "i64": (-(2**63), 2**63 - 1),
}

_FORMATS = {
    "u8": "B",
    "u16": "H",
    "u32": "I",
    "u64": "Q",
    "i8": "b",
    "i16": "h",
    "i32": "i",
    "i64": "q",
    "f32": "f",
    "f64": "d",
    "register": "B",
}


def _to_f32(value: float) -> float:
    """Round a float to single precision, saturating to infinity on overflow."""
    try:
        return struct.unpack(">f", struct.pack(">f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


class ArgType(enum.Enum):
    """The type of one instruction operand and how it is written in bytecode."""

    U8 = "u8"
    U16 = "u16"
    U32 = "u32"
    U64 = "u64"
    I8 = "i8"
    I16 = "i16"
    I32 = "i32"
    I64 = "i64"
    F32 = "f32"
    F64 = "f64"
    REGISTER = "register"

    @property
    def size(self) -> int:
        """Number of bytes the operand occupies."""
        return struct.calcsize(">" + _FORMATS[self.value])

    @property
    def is_float(self) -> bool:
        return self in (ArgType.F32, ArgType.F64)

    def parse(self, text: str) -> Value:
        """Parse operand text: 'R<n>' for registers, 0x/0b/0o prefixes for integers."""
        if self is ArgType.REGISTER:
            return RegisterType.parse(text)
        if self.is_float:
            return self._parse_float(text)
        low, high = _INT_RANGES[self.value]
        radix, digits = 10, text
        for prefix, prefix_radix in _PREFIXES:
            if text.startswith(prefix):
                radix, digits = prefix_radix, text[len(prefix):]
                break
        value = _parse_integer(digits, radix, low, high)
        if value is None:
            raise InvalidArgumentError(text)
        return value

    def _parse_float(self, text: str) -> float:
        if text != text.strip() or "_" in text:
            raise InvalidArgumentError(text)
        try:
            value = float(text)
        except ValueError:
            raise InvalidArgumentError(text) from None
        return _to_f32(value) if self is ArgType.F32 else value

    def encode(self, value: Value) -> bytes:
        """Big-endian bytes for a value of this type."""
        fmt = ">" + _FORMATS[self.value]
        if self.is_float:
            if isinstance(value, RegisterType):
                raise TypeError(f"{self.value} operand needs a number")
            number = float(value)
            if self is ArgType.F32:
                number = _to_f32(number)
            return struct.pack(fmt, number)
        if self is ArgType.REGISTER:
            register = value if isinstance(value, RegisterType) else RegisterType(int(value))
            return register.to_be_bytes()
        if not isinstance(value, int) or isinstance(value, RegisterType):
            raise TypeError(f"{self.value} operand needs an integer")
        low, high = _INT_RANGES[self.value]
        if not low <= value <= high:
            raise ValueError(f"{value} does not fit in {self.value}")
        return struct.pack(fmt, value)

    def decode(self, data: bytes) -> Value:
        """Read a value from exactly size big-endian bytes."""
        if len(data) != self.size:
            raise ValueError(
                f"{self.value} needs {self.size} bytes, got {len(data)}"
            )
        return self._unpack(">", data)

    def _unpack(self, order: str, data: bytes) -> Value:
        (value,) = struct.unpack(order + _FORMATS[self.value], bytes(data))
        if self is ArgType.REGISTER:
            return RegisterType(value)
        return value


def _leading(arg_type: ArgType, data: bytes) -> bytes:
    if len(data) < arg_type.size:
        raise ValueError(
            f"{arg_type.value} needs {arg_type.size} bytes, got {len(data)}"
        )
    return bytes(data[: arg_type.size])


def read_be(arg_type: ArgType, data: bytes) -> Value:
    """Read a big-endian value from the start of data."""
    return arg_type._unpack(">", _leading(arg_type, data))


def read_le(arg_type: ArgType, data: bytes) -> Value:
    """Read a little-endian value from the start of data."""
    return arg_type._unpack("<", _leading(arg_type, data))


def args_size(arg_types: Iterable[ArgType]) -> int:
    """Total encoded size of a sequence of operands."""
    return sum(arg_type.size for arg_type in arg_types)


def encode_args(arg_types: Sequence[ArgType], values: Sequence[Value]) -> bytes:
    """Concatenate the big-endian encodings of the operands."""
    if len(arg_types) != len(values):
        raise ValueError(f"expected {len(arg_types)} values, got {len(values)}")
    return b"".join(t.encode(v) for t, v in zip(arg_types, values))


def decode_args(arg_types: Sequence[ArgType], data: bytes) -> tuple[Value, ...]:
    """Read operands one after another from the start of data."""
    values: list[Value] = []
    cursor = 0
    for arg_type in arg_types:
        values.append(read_be(arg_type, data[cursor:]))
        cursor += arg_type.size
    return tuple(values)


def parse_args(arg_types: Sequence[ArgType], texts: Sequence[str]) -> tuple[Value, ...]:
    """Parse operand texts, one for each operand type."""
    if len(arg_types) != len(texts):
        raise WrongArgumentCountError(len(arg_types), len(texts))
    return tuple(t.parse(text) for t, text in zip(arg_types, texts))


def encode_args_from_strs(arg_types: Sequence[ArgType], texts: Sequence[str]) -> bytes:
    """Parse operand texts and encode them as bytecode."""
    return encode_args(arg_types, parse_args(arg_types, texts))


__all__ = [
    "MAX_OPCODES",
    "SIZE_OF_REGISTER",
    "ArgType",
    "InvalidArgumentError",
    "InvalidRegisterError",
    "RegisterType",
    "VmParseError",
    "WrongArgumentCountError",
    "args_size",
    "decode_args",
    "encode_args",
    "encode_args_from_strs",
    "parse_args",
    "read_be",
    "read_le",
]