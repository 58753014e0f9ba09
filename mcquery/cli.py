"""Command-line entry point: query a server and print its status."""

from __future__ import annotations

import logging
import os
import re
import socket
import sys
from typing import Callable, Sequence

from termcolor import colored

from mcquery.packets import (
    STATUS_JSON_MAX_LEN,
    Handshake,
    HandshakeIntent,
    StatusRequest,
    StatusResponse,
)
from mcquery.status import Status, deserialize_status

__all__ = ["DEFAULT_PORT", "PROTOCOL_VERSION", "USAGE", "format_status", "query", "main"]

DEFAULT_PORT = 25565
# Protocol version of release 1.21.8.
PROTOCOL_VERSION = 772
# Largest status JSON plus some padding.
_RECEIVE_BUFFER = STATUS_JSON_MAX_LEN + 100
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1
_DECIMAL = re.compile(r"[+-]?[0-9]+")

USAGE = f"""USAGE:
\tmc-query <server-ip> [<port>]

ARGS:
\tserver-ip   valid server ip address
\tport        port number to use (default = {DEFAULT_PORT})"""

log = logging.getLogger("mcquery")


class _UsageError(Exception):
    """Bad command-line arguments."""


def _styler(colour: bool, *, color: str | None = None, attrs: list[str] | None = None) -> Callable[[object], str]:
    if not colour:
        return str

    def style(value: object) -> str:
        return colored(str(value), color, attrs=attrs, force_color=True)

    return style


def format_status(status: Status, colour: bool) -> str:
    """Render the server status as the text block printed by the command."""
    underline = _styler(colour, attrs=["underline"])
    red = _styler(colour, color="red")
    green = _styler(colour, color="green")
    blue = _styler(colour, color="blue")

    sample = "[" + ", ".join(blue(player.name) for player in status.players.sample) + "]"

    parts = [underline("Server Info:")]
    description = status.description
    if isinstance(description, str):
        parts.append(f'\nDescription:        "{red(description)}"')
    elif isinstance(description, dict):
        text = status.description_text()
        if text is None:
            parts.append(f"\nDescription:        {red('<unknown>')}")
        else:
            parts.append(f'\nDescription:        "{red(text)}"')

    parts.append(
        f"\nMax Player Count:   {green(status.players.max)}"
        f"\nOnline Players:     {green(status.players.online)}"
        f"\n        Sample:     {sample}\n"
    )
    return "".join(parts)


def query(host: str, port: int) -> Status:
    """Connect to a server, perform the status exchange and return its status."""
    log.info("Attempting to connect to IP %s:%d", host, port)
    with socket.create_connection((host, port)) as sock:
        handshake = Handshake(PROTOCOL_VERSION, "", 0, HandshakeIntent.STATUS)
        handshake.send(sock)
        log.info("Sent Handshake packet: %s", handshake)

        StatusRequest().send(sock)
        log.info("Sent StatusRequest packet")

        data = sock.recv(_RECEIVE_BUFFER)
        response, read = StatusResponse.from_bytes(data)
        if read != len(data):
            log.warning("Packet data not fully processed (%d of %d bytes)", read, len(data))
        log.info("Response %d: %s", read, response.json_response)

    return deserialize_status(response.json_response)


def _parse_port(text: str) -> int:
    if not _DECIMAL.fullmatch(text):
        raise _UsageError(f"Bad port: {text} (invalid syntax)")
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        raise _UsageError(f"Bad port: {text} (value out of range)")
    return value


def _configure_logging() -> None:
    log.handlers.clear()
    log.propagate = False
    if "LOG_LEVEL" in os.environ:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
        log.addHandler(handler)
        log.setLevel(logging.DEBUG)
        log.disabled = False
    else:
        log.disabled = True


def _print_usage() -> None:
    print(USAGE, file=sys.stderr)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command; returns the process exit code."""
    args = list(sys.argv[1:] if argv is None else argv)

    try:
        if not args:
            raise _UsageError("Not enough arguments!")
        if args[0] in ("-h", "--help"):
            _print_usage()
            return 0
        port = _parse_port(args[1]) if len(args) > 1 else DEFAULT_PORT
    except _UsageError as exc:
        print(exc, file=sys.stderr)
        _print_usage()
        return 1

    _configure_logging()

    try:
        status = query(args[0], port)
    except (OSError, ValueError, OverflowError) as exc:
        log.error("%s", exc)
        return 1

    colour = sys.stdout.isatty() and "NO_COLOR" not in os.environ
    sys.stdout.write(format_status(status, colour))
    return 0


if __name__ == "__main__":
    sys.exit(main())