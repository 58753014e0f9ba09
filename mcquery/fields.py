"""Binary field types used on the wire by the Minecraft protocol."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Any, ClassVar

__all__ = [
    "FieldError",
    "Primitive",
    "Boolean",
    "Byte",
    "UnsignedByte",
    "Short",
    "UnsignedShort",
    "Int",
    "UnsignedInt",
    "Long",
    "Float",
    "Double",
    "VarInt",
    "VarLong",
    "String",
    "encode_varint",
    "decode_varint",
]

_U64_MASK = (1 << 64) - 1
# VarInt and VarLong decoding both accept up to this many bytes' worth of shift.
_VAR_DECODE_LIMIT = 8
_STRING_LENGTH_LIMIT = 4


class FieldError(ValueError):
    """Raised when a field cannot be encoded or decoded."""


def _to_signed(value: int, bits: int) -> int:
    value &= (1 << bits) - 1
    if value >> (bits - 1):
        value -= 1 << bits
    return value


def encode_varint(value: int, num_bytes: int) -> bytes:
    """Encode the low ``num_bytes`` bytes of ``value`` as a LEB128-style varint."""
    value &= (1 << (num_bytes * 8)) - 1
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            byte |= 0x80
        out.append(byte)
        if not value:
            return bytes(out)


def decode_varint(data: bytes, max_bytes: int) -> tuple[int, int]:
    """Decode a varint from the start of ``data``.

    Returns the unsigned 64-bit value and the number of bytes consumed.
    """
    result = 0
    shift = 0
    for count, byte in enumerate(data, start=1):
        result |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return result & _U64_MASK, count
        shift += 7
        if shift > max_bytes * 8:
            raise FieldError("varint too long")
    raise FieldError("varint: incomplete input")


@dataclass(frozen=True)
class Primitive:
    """A fixed-size big-endian value."""

    value: Any
    _FORMAT: ClassVar[str] = ""

    def to_bytes(self) -> bytes:
        try:
            return struct.pack(">" + self._FORMAT, self.value)
        except struct.error as exc:
            raise FieldError(f"cannot encode {self.value!r} as {type(self).__name__}: {exc}") from exc

    @classmethod
    def from_bytes(cls, data: bytes) -> tuple[Primitive, int]:
        fmt = ">" + cls._FORMAT
        size = struct.calcsize(fmt)
        if len(data) < size:
            raise FieldError(f"{cls.__name__} needs {size} bytes, got {len(data)}")
        (value,) = struct.unpack_from(fmt, data)
        return cls(value), size


@dataclass(frozen=True)
class Boolean(Primitive):
    _FORMAT: ClassVar[str] = "?"


@dataclass(frozen=True)
class Byte(Primitive):
    _FORMAT: ClassVar[str] = "b"


@dataclass(frozen=True)
class UnsignedByte(Primitive):
    _FORMAT: ClassVar[str] = "B"


@dataclass(frozen=True)
class Short(Primitive):
    _FORMAT: ClassVar[str] = "h"


@dataclass(frozen=True)
class UnsignedShort(Primitive):
    _FORMAT: ClassVar[str] = "H"


@dataclass(frozen=True)
class Int(Primitive):
    _FORMAT: ClassVar[str] = "i"


@dataclass(frozen=True)
class UnsignedInt(Primitive):
    # Stored on the wire as a signed 32-bit value.
    _FORMAT: ClassVar[str] = "i"


@dataclass(frozen=True)
class Long(Primitive):
    _FORMAT: ClassVar[str] = "q"


@dataclass(frozen=True)
class Float(Primitive):
    _FORMAT: ClassVar[str] = "f"


@dataclass(frozen=True)
class Double(Primitive):
    _FORMAT: ClassVar[str] = "d"


@dataclass(frozen=True)
class VarInt:
    """A signed 32-bit integer in varint encoding."""

    value: int

    _BITS: ClassVar[int] = 32

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _to_signed(int(self.value), self._BITS))

    def to_bytes(self) -> bytes:
        return encode_varint(self.value, self._BITS // 8)

    @classmethod
    def from_bytes(cls, data: bytes) -> tuple[VarInt, int]:
        value, read = decode_varint(data, _VAR_DECODE_LIMIT)
        return cls(value), read


@dataclass(frozen=True)
class VarLong:
    """A signed 64-bit integer in varint encoding."""

    value: int

    _BITS: ClassVar[int] = 64

    def __post_init__(self) -> None:
        object.__setattr__(self, "value", _to_signed(int(self.value), self._BITS))

    def to_bytes(self) -> bytes:
        return encode_varint(self.value, self._BITS // 8)

    @classmethod
    def from_bytes(cls, data: bytes) -> tuple[VarLong, int]:
        value, read = decode_varint(data, _VAR_DECODE_LIMIT)
        return cls(value), read


@dataclass(frozen=True)
class String:
    """A UTF-8 string prefixed by its byte length as a VarInt."""

    text: str
    max_len: int

    def to_bytes(self) -> bytes:
        encoded = self.text.encode("utf-8", "surrogateescape")
        if len(encoded) > self.max_len:
            raise FieldError("string length is > max_len")
        return VarInt(len(encoded)).to_bytes() + encoded

    @classmethod
    def from_bytes(cls, data: bytes, max_len: int) -> tuple[String, int]:
        length, prefix = decode_varint(data, _STRING_LENGTH_LIMIT)
        if length > max_len:
            raise FieldError("string length is > max_len")
        end = prefix + length
        if end > len(data):
            raise FieldError("string: incomplete input")
        text = bytes(data[prefix:end]).decode("utf-8", "surrogateescape")
        return cls(text, max_len), end