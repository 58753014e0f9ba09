# mcquery

Ask a Minecraft Java Edition server for its status: its description, its
player limit, how many players are online and a sample of their names.

## Installation

    pip install .

## Command line

    mc-query <server-ip> [<port>]

`server-ip` is the address of the server, and `port` is the port to connect
to (25565 when left out). `-h` or `--help` prints the usage. A missing
address or a port that is not a whole number prints an error and the usage,
and the command exits with status 1; so does a failure to connect or to read
the server's reply.

Example:

    mc-query 192.0.2.10
    mc-query 192.0.2.10 25570

The output looks like this:

    Server Info:
    Description:        "A Minecraft Server"
    Max Player Count:   20
    Online Players:     2
            Sample:     [alice, bob]

When the description is an object without a `text` string, it is shown as
`<unknown>`. Output is coloured when standard output is a terminal and the
`NO_COLOR` environment variable is not set.

Diagnostic logging is silent by default. Set the environment variable
`LOG_LEVEL` (to any value) to have the connection, the packets sent and the
reply received logged to standard error.

## Library use

```python
from mcquery.fields import VarInt, String
from mcquery.packets import Handshake, HandshakeIntent, StatusRequest, StatusResponse
from mcquery.status import deserialize_status
from mcquery.cli import query, format_status

VarInt(25565).to_bytes()           # b"\xdd\xc7\x01"
String("hello", 5).to_bytes()      # b"\x05hello"
VarInt.from_bytes(b"\xdd\xc7\x01") # (VarInt(value=25565), 3)

Handshake(772, "", 0, HandshakeIntent.STATUS).to_bytes()
StatusRequest().to_bytes()         # b"\x01\x00"

status = query("192.0.2.10", 25565)
print(format_status(status, colour=False))
print(status.description_text())   # None when the description has no text
```

- `mcquery.fields` holds the big-endian primitives (`Boolean`, `Byte`,
  `UnsignedByte`, `Short`, `UnsignedShort`, `Int`, `UnsignedInt`, `Long`,
  `Float`, `Double`), `VarInt` and `VarLong`, and the length-prefixed
  `String`, together with `encode_varint` and `decode_varint`. Every
  `from_bytes` returns the decoded value and the number of bytes it used.
  Bad or incomplete input raises `FieldError`.
- `mcquery.packets` frames packets (`serialize_packet`,
  `deserialize_packet`, `send_packet`, `receive_packet`) and defines the
  `Handshake`, `StatusRequest` and `StatusResponse` packets. A wrong packet
  id or leftover data raises `PacketError`.
- `mcquery.status` turns the server's JSON reply into `Status`, `Version`,
  `Players` and `PlayerSample` objects with `deserialize_status`, which
  raises `ValueError` on malformed input.

`FieldError` and `PacketError` are both subclasses of `ValueError`.

## What it does not do

Only the status exchange is covered: handshake, status request and status
response. There is no ping/pong latency measurement, no login or play
state, and no compression or encryption of packets. The status reply is
read with a single receive call, so a reply split over several TCP
segments is not reassembled.

## Tests

    pip install .[test]
    pytest