# gamesrv

Shared building blocks for a distributed game server: unique ids, key
exchange and AES, Redis locks and master election, start-up flags, an HTTP
app with JSON replies, and the framing and dispatching of client packets.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Purpose |
| --- | --- |
| `gamesrv.bitflag` | `Flag`, a small bit set with `add`, `has` and `remove` |
| `gamesrv.rand` | `WeightedPicker`, `RandNotRepeated`, `rand_rate`, range helpers, `rand_token`, `new_uuid` |
| `gamesrv.convert` | lenient string parsing (`parse_int32`, `parse_uint64`, `parse_bool`, ...) returning 0 / False on bad input; `to_string`, `make_key`, `make_uint32_key` |
| `gamesrv.timeutil` | day, week and month numbering with a reset offset (`zero_day`, `zero_week`, `zero_month`, `is_same_day`), `reset_time`, local time formatting |
| `gamesrv.dh` | Diffie–Hellman key exchange: `exchange`, `get_key` |
| `gamesrv.aes` | AES-CBC with PKCS#7 padding: `new_encrypter`, `new_decrypter`, `encrypt`, `decrypt`, and one-shot `configure`, `encrypt_once`, `decrypt_once` |
| `gamesrv.snowflake` | 64-bit snowflake ids: `Generator`, `init_generator`, `gen`, `extract`, `extract_machine_id` |
| `gamesrv.threads` | `run_safe`, `go_safe`, `wait_exit`, `print_stack`, `func_caller`, `exec_command` |
| `gamesrv.flags` | start-up options and environment overrides: `Flags`, `parse_flags`, `split_host_name`, `is_ready`, `set_ready` |
| `gamesrv.model` | Redis key names: `key_role`, `key_account`; role/account id conversions |
| `gamesrv.db` | `RedisConfig`, `MongoConfig`, `new_redis`, `new_mongo`, `create_index_if_not_exist` |
| `gamesrv.lock` | distributed `Locker` and `locked_do`, optimistic `do` / `do_with_save_pipe`, try-lock `SimpleLock` |
| `gamesrv.master` | master election through Redis: `check_and_set_master`, `is_master`, `delete_master_flag` |
| `gamesrv.http` | Flask app with `/health`, CORS, request logging and JSON error replies (`create_app`, `serve`, `ok`, `fail`); an outbound `requests` session (`new_client`); `set_trace` |
| `gamesrv.version` | build information: `version_string`, `log_version`, `main` |
| `gamesrv.registry` | `TypeMeta`, a message id ⇄ message type registry, with `c2s`, `s2c` and `s2s` instances |
| `gamesrv.packet` | client wire format: `Packet`, `read_packet`, `write_packet` (big-endian id and sequence, optional AES) |
| `gamesrv.route` | `Route`, decoding payloads and dispatching them to handlers by message id |
| `gamesrv.timer` | `TimeEvter`, periodic tasks checked on each `run` |

## Examples

Snowflake ids carry the machine id they were made on:

```python
from gamesrv import snowflake

snowflake.init_generator(3)
new_id = snowflake.gen()
assert snowflake.extract_machine_id(new_id) == 3
```

Two sides agree on a shared key:

```python
from gamesrv import dh

private_a, public_a = dh.exchange()
private_b, public_b = dh.exchange()
assert dh.get_key(private_a, public_b) == dh.get_key(private_b, public_a)
```

AES round trip with the one-shot functions:

```python
from gamesrv import aes

cipher_text = aes.encrypt_once(b"hello")
assert aes.decrypt_once(cipher_text) == b"hello"
```

The one-shot functions start with an all-zero placeholder key; call
`aes.configure(key, iv)` with 16-byte values to set a real one.

Framing a packet and reading it back:

```python
from gamesrv.packet import read_packet, write_packet

raw = write_packet(7, b"payload", seq=1)
packet = read_packet(raw)
assert packet.msg_id == 7
```

Weighted random choice:

```python
from gamesrv.rand import WeightedPicker

picker = WeightedPicker()
picker.add(9000, "common")
picker.add(1000, "rare")
print(picker.get())
```

A small HTTP service:

```python
import threading
from gamesrv.http import create_app, ok, serve

app = create_app()

@app.route("/hello")
def hello():
    return ok("world")

stop = threading.Event()
serve(app, 8080, stop)  # runs until stop.set() is called from another thread
```

## Command line

Print the build information:

```
gamesrv-version
```

## What it does not do

- It defines no message types: the `c2s`, `s2c` and `s2s` registries start
  empty, and messages must be registered by the application.
- It has no WebSocket client session or robot that connects to a server and
  logs in; `packet`, `route` and `timer` are the pieces such a client is built
  from.
- It does not load the server configuration from a store or file, and does
  not set up log files, console log formatting or alert posting; it logs
  through the standard `logging` module and leaves handlers to the
  application.