# euiccdrv

Building blocks for talking to an eUICC (embedded SIM) from Python. The package
depends on nothing outside the standard library.

## Modules

- `euiccdrv.base64`: `encode(data)` produces padded standard base64 text.
  `decode(text)` is lenient. It stops at the first character outside the
  alphabet, so padding and trailing data are ignored, and it drops a single
  dangling character. `encoded_length(length)` gives the size of the text, and
  `decoded_length(text)` gives an upper bound on the number of decoded bytes.
- `euiccdrv.derutil`: a small DER/BER-TLV toolkit with one- and two-byte tags.
  - `unpack_first(buffer)` parses one `Node` and raises `DerError`, a
    `ValueError`, on malformed data.
  - `iter_nodes(buffer)` yields consecutive nodes and stops quietly at the end
    or at bad data.
  - `find_tag(buffer, tag)` and `find_alias_tags(buffer, tags)` return the first
    matching node, or `None` if there is no match.
  - A `Node` has `tag`, `value`, `nested` children, a `headless` flag (pack only
    the content), and, once unpacked, its `raw` encoding. `Node.children()`
    returns the nested nodes, or parses `value` if none were given.
    `Node.encoded_length()` gives the size of the node once packed.
  - `pack(*nodes)` encodes sibling nodes and their children.
  - `bin2long` and `long2bin` convert between bytes and 64-bit integers, using
    minimal DER INTEGER bodies.
  - `bits2bin(bits)` builds a BIT STRING body from bit positions.
    `bin2bits_str(data, desc)` returns the names in `desc` of the bits that are
    set.
- `euiccdrv.es10a`: `get_euicc_configured_addresses(command)` returns a frozen
  `ConfiguredAddresses` with `default_dp_address` and `root_ds_address`. Either
  can be `None`. `set_default_dp_address(command, smdp)` returns the card's
  result code. `command` is any callable that takes the encoded request bytes
  and returns the response bytes. If the response lacks the expected node,
  `DerError` is raised.
- `euiccdrv.interface`: the abstract bases `ApduDriver` and `HttpDriver`, the
  `DriverType` enum (`APDU`, `HTTP`) and `DriverError`.
  - An APDU driver provides `connect()`, `disconnect()`,
    `logic_channel_open(aid)`, `logic_channel_close(channel)` and
    `transmit(tx)`.
  - An HTTP driver provides `transmit(url, tx, headers)`, which returns
    `(status_code, body)`.
  - Both kinds have `main(argv)`, which returns 0 and accepts only string
    arguments, and `close()`. Both can be used as context managers.

## Drivers

| Class | Type | Name |
|---|---|---|
| `euiccdrv.apdu_at.AtApduDriver` | APDU | `at` |
| `euiccdrv.apdu_stdio.StdioApduDriver` | APDU | `stdio` |
| `euiccdrv.http_client.UrllibHttpDriver` | HTTP | `urllib` |
| `euiccdrv.http_stdio.StdioHttpDriver` | HTTP | `stdio` |

### `AtApduDriver`

Talks to a modem using `AT+CCHO`, `AT+CGLA` and `AT+CCHC`.

- The device comes from the `device` argument, else from `AT_DEVICE`, else it is
  `/dev/ttyUSB0`. You can pass an open text `stream` instead.
- `connect()` checks that the modem supports all three commands.
- `logic_channel_open` first closes channels 1 to 4, and then reuses the channel
  it opens.
- Setting `AT_DEBUG` echoes every line the modem returns to standard output.

### `StdioApduDriver` and `StdioHttpDriver`

These drivers write one JSON line per request and read one JSON line as the
reply. They use standard output and standard input unless you pass other
streams as `stdin` and `stdout`.

### `UrllibHttpDriver`

- Sends a POST when there is a body and a GET when there is none.
- Does not verify TLS certificates.
- Does not follow redirects.
- Returns every status code to the caller. Error statuses are returned, not
  raised.
- Connection failures raise `DriverError`.
- An optional `timeout` can be given.

## Selecting drivers

`euiccdrv.driver.find_driver(driver_type, name)` returns the driver class with
that name, or `None` if none matches. With `name=None` it returns the first
driver of the type, which is `at` for APDU and `urllib` for HTTP.

`init_drivers(apdu_name, http_name)` creates both drivers and returns a
`DriverSet`. The set holds `apdu` and `http`, and provides `close()`,
`main_apdu(argv)` and `main_http(argv)`. If no driver matches, or a driver fails
to start, `DriverError` is raised.

```python
from euiccdrv.driver import init_drivers

with init_drivers("stdio", "stdio") as drivers:
    drivers.apdu.connect()
    channel = drivers.apdu.logic_channel_open(bytes.fromhex("A0000005591010FFFFFFFF8900000100"))
    response = drivers.apdu.transmit(bytes.fromhex("80E2910003BF3C00"))
```

## Working with TLV data

```python
from euiccdrv.derutil import Node, find_tag, pack

encoded = pack(Node(tag=0xBF3F, nested=[Node(tag=0x80, value=b"smdp.example.com")]))
node = find_tag(encoded, 0xBF3F)
print(hex(node.tag), node.children()[0].value)
```

## Base64

```python
from euiccdrv import base64

text = base64.encode(b"\x01\x02\x03")
assert base64.decode(text) == b"\x01\x02\x03"
```

## The stdio JSON protocol

Binary values are always written as hexadecimal strings. Requests end with
`\r\n`.

APDU requests look like this:

```json
{"type":"apdu","payload":{"func":"transmit","param":"80AA..."}}
```

`func` is one of `connect`, `disconnect`, `logic_channel_open`,
`logic_channel_close` and `transmit`. `param` is `null` when there is no
parameter. The reply looks like this:

```json
{"type":"apdu","payload":{"ecode":0,"data":"...9000"}}
```

A negative `ecode` raises `DriverError`. For `logic_channel_open`, `ecode` is the
channel number.

HTTP requests look like this:

```json
{"type":"http","payload":{"url":"...","tx":"...","headers":[...]}}
```

The reply looks like this:

```json
{"type":"http","payload":{"rcode":200,"rx":"..."}}
```

## What this package does not do

- There is no command-line program. The drivers' `main` does nothing and
  returns 0.
- The only APDU transports are AT commands and stdio. There is no smart-card
  reader or modem-management transport.
- The only eUICC commands are the ES10a address commands. Profile download,
  listing and management are not included.