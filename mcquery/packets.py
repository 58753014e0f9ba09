"""Framing of protocol packets and the handshake/status exchange."""

from __future__ import annotations

import enum
import socket
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from mcquery.fields import String, UnsignedShort, VarInt

__all__ = [
    "PacketError",
    "HandshakeIntent",
    "Handshake",
    "StatusRequest",
    "StatusResponse",
    "serialize_packet",
    "deserialize_packet",
    "send_packet",
    "receive_packet",
    "HANDSHAKE_ADDR_MAX_LEN",
    "STATUS_JSON_MAX_LEN",
]

HANDSHAKE_ID = 0x00
STATUS_REQUEST_ID = 0x00
STATUS_RESPONSE_ID = 0x00
HANDSHAKE_ADDR_MAX_LEN = 255
STATUS_JSON_MAX_LEN = 32767
_RECEIVE_BUFFER = STATUS_JSON_MAX_LEN + 100


class PacketError(ValueError):
    """Raised when a packet cannot be sent, received or decoded."""


class _Writable(Protocol):
    def to_bytes(self) -> bytes: ...


Decoder = Callable[[bytes], "tuple[Any, int]"]


class HandshakeIntent(enum.IntEnum):
    STATUS = 1
    LOGIN = 2
    TRANSFER = 3


def serialize_packet(packet_id: int, *fields: _Writable) -> bytes:
    """Frame a packet: VarInt length, VarInt packet id, then the fields."""
    body = VarInt(packet_id).to_bytes() + b"".join(f.to_bytes() for f in fields)
    return VarInt(len(body)).to_bytes() + body


def deserialize_packet(data: bytes, packet_id: int, *decoders: Decoder) -> tuple[tuple[Any, ...], int]:
    """Decode a framed packet with the expected id.

    Each decoder takes the remaining bytes and returns ``(value, bytes_read)``.
    Returns the decoded values and the total number of bytes consumed.
    """
    data = bytes(data)
    _, offset = VarInt.from_bytes(data)
    read_id, id_len = VarInt.from_bytes(data[offset:])
    if read_id.value != VarInt(packet_id).value:
        raise PacketError("packet IDs do not match")
    offset += id_len
    values = []
    for decode in decoders:
        value, used = decode(data[offset:])
        values.append(value)
        offset += used
    return tuple(values), offset


def send_packet(sock: socket.socket, packet_id: int, *fields: _Writable) -> None:
    """Serialize a packet and write all of it to ``sock``."""
    sock.sendall(serialize_packet(packet_id, *fields))


def receive_packet(sock: socket.socket, packet_id: int, *decoders: Decoder) -> tuple[tuple[Any, ...], int]:
    """Read one chunk from ``sock`` and decode it as a single packet."""
    data = sock.recv(_RECEIVE_BUFFER)
    if not data:
        raise PacketError("connection closed before a packet arrived")
    values, read = deserialize_packet(data, packet_id, *decoders)
    if read != len(data):
        raise PacketError("packet data not fully processed")
    return values, read


@dataclass(frozen=True)
class Handshake:
    """The packet that opens a connection and selects the next state."""

    protocol_version: int
    server_address: str = ""
    server_port: int = 0
    intent: HandshakeIntent = HandshakeIntent.STATUS

    def _fields(self) -> tuple[_Writable, ...]:
        return (
            VarInt(self.protocol_version),
            String(self.server_address, HANDSHAKE_ADDR_MAX_LEN),
            UnsignedShort(self.server_port),
            VarInt(int(self.intent)),
        )

    def to_bytes(self) -> bytes:
        return serialize_packet(HANDSHAKE_ID, *self._fields())

    def send(self, sock: socket.socket) -> None:
        send_packet(sock, HANDSHAKE_ID, *self._fields())


@dataclass(frozen=True)
class StatusRequest:
    """An empty request for the server's status."""

    def to_bytes(self) -> bytes:
        return serialize_packet(STATUS_REQUEST_ID)

    def send(self, sock: socket.socket) -> None:
        send_packet(sock, STATUS_REQUEST_ID)


def _decode_status_json(data: bytes) -> tuple[String, int]:
    return String.from_bytes(data, STATUS_JSON_MAX_LEN)


@dataclass(frozen=True)
class StatusResponse:
    """The server's reply carrying the status JSON document."""

    json_response: str

    @classmethod
    def from_bytes(cls, data: bytes) -> tuple[StatusResponse, int]:
        (text,), read = deserialize_packet(data, STATUS_RESPONSE_ID, _decode_status_json)
        return cls(text.text), read

    @classmethod
    def receive(cls, sock: socket.socket) -> tuple[StatusResponse, int]:
        (text,), read = receive_packet(sock, STATUS_RESPONSE_ID, _decode_status_json)
        return cls(text.text), read