"""The server status document returned in a status response."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, TypeVar

__all__ = [
    "Status",
    "Version",
    "Players",
    "PlayerSample",
    "deserialize_status",
]

_T = TypeVar("_T")
_INT_MIN = -(2**63)
_INT_MAX = 2**63 - 1


@dataclass
class Version:
    name: str = ""
    protocol: int = 0


@dataclass
class PlayerSample:
    id: str = ""
    name: str = ""


@dataclass
class Players:
    max: int = 0
    online: int = 0
    sample: list[PlayerSample] = field(default_factory=list)


@dataclass
class Status:
    version: Version = field(default_factory=Version)
    description: Any = None
    players: Players = field(default_factory=Players)

    def description_text(self) -> str | None:
        """Plain text of the description, or None when it has no usable text."""
        if isinstance(self.description, str):
            return self.description
        if isinstance(self.description, dict):
            text = self.description.get("text")
            if isinstance(text, str):
                return text
        return None


def _members(obj: dict[str, Any], names: tuple[str, ...]) -> dict[str, Any]:
    """Match JSON keys to field names case-insensitively; the last match wins."""
    by_fold = {name.casefold(): name for name in names}
    found: dict[str, Any] = {}
    for key, value in obj.items():
        name = by_fold.get(key.casefold())
        if name is not None:
            found[name] = value
    return found


def _as_int(value: Any, where: str) -> int:
    if value is None:
        return 0
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"cannot read {value!r} as integer for {where}")
    if not _INT_MIN <= value <= _INT_MAX:
        raise ValueError(f"number {value} overflows integer for {where}")
    return value


def _as_str(value: Any, where: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"cannot read {value!r} as string for {where}")
    return value


def _as_object(value: Any, where: str, build: Callable[[dict[str, Any]], _T], default: Callable[[], _T]) -> _T:
    if value is None:
        return default()
    if not isinstance(value, dict):
        raise ValueError(f"cannot read {value!r} as object for {where}")
    return build(value)


def _version(obj: dict[str, Any]) -> Version:
    found = _members(obj, ("name", "protocol"))
    return Version(
        name=_as_str(found.get("name"), "version.name"),
        protocol=_as_int(found.get("protocol"), "version.protocol"),
    )


def _sample(obj: dict[str, Any]) -> PlayerSample:
    found = _members(obj, ("id", "name"))
    return PlayerSample(
        id=_as_str(found.get("id"), "players.sample.id"),
        name=_as_str(found.get("name"), "players.sample.name"),
    )


def _players(obj: dict[str, Any]) -> Players:
    found = _members(obj, ("max", "online", "sample"))
    raw_sample = found.get("sample")
    if raw_sample is None:
        sample: list[PlayerSample] = []
    elif isinstance(raw_sample, list):
        sample = [_as_object(item, "players.sample", _sample, PlayerSample) for item in raw_sample]
    else:
        raise ValueError(f"cannot read {raw_sample!r} as array for players.sample")
    return Players(
        max=_as_int(found.get("max"), "players.max"),
        online=_as_int(found.get("online"), "players.online"),
        sample=sample,
    )


def _status(obj: dict[str, Any]) -> Status:
    found = _members(obj, ("version", "description", "players"))
    return Status(
        version=_as_object(found.get("version"), "version", _version, Version),
        description=found.get("description"),
        players=_as_object(found.get("players"), "players", _players, Players),
    )


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON value {name}")


def deserialize_status(text: str) -> Status:
    """Parse a status JSON document; raises ValueError on malformed input."""
    document = json.loads(text, parse_constant=_reject_constant)
    return _as_object(document, "status", _status, Status)