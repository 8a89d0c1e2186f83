# tikvkit

Client-side building blocks for a distributed, transactional key-value store
that splits its key space into regions managed by a placement driver (PD).
It has no third-party dependencies.

## What is in it

- `tikvkit.key`: `Key` (an ordered byte string; built from `bytes`, `str`,
  a list of byte values or another `Key`), `KvPair`, `Bound` with its
  `BoundKind` (included, excluded, unbounded), `to_key` and `hex_repr`.
  `Key.into_lower_bound` and `Key.into_upper_bound` read a trailing zero byte
  as flipping a bound between inclusive and exclusive; `Key.to_encoded`
  returns the memcomparable encoding of the key.
- `tikvkit.bound_range`: `BoundRange`, built with `range_from`, `half_open`,
  `inclusive`, `up_to`, `up_to_inclusive`, `full`, `from_keys`,
  `from_bounds` or `from_key_range`. `into_keys` gives the inclusive start
  key and exclusive end key of a scan (`None` for no end); `to_key_range`
  gives the wire-level `KeyRange`, where an empty end key means no end.
- `tikvkit.codec`: the memcomparable byte encoding, ascending or descending:
  `encode_bytes`, `decode_bytes` and `max_encoded_bytes_size`. Malformed
  input makes `decode_bytes` raise `CodecError` (a `ValueError`).
- `tikvkit.backoff`: `Backoff` with `no_backoff`, `no_jitter_backoff`,
  `full_jitter_backoff`, `equal_jitter_backoff` and
  `decorrelated_jitter_backoff`. `next_delay_duration` returns a
  `datetime.timedelta`, or `None` once the attempts are used up. Invalid
  delays raise `ValueError`. The module also defines
  `DEFAULT_REGION_BACKOFF`, `OPTIMISTIC_BACKOFF` and `PESSIMISTIC_BACKOFF`;
  they hold state, so copy them before use.
- `tikvkit.config`: `Config`, an immutable dataclass holding the CA,
  certificate and key paths and a request timeout (two seconds by default),
  with `with_security` and `with_timeout` returning changed copies.
- `tikvkit.cli`: `parse_args(app_name, argv)` reads `--pd` (also
  `--pd-endpoint`, `--pd-endpoints`; comma-separated, default
  `localhost:2379`), `--ca`, `--cert` and `--key` (also `--private-key`)
  into `CommandArgs`. The three security options must be given together,
  otherwise argparse reports a usage error and exits. `CommandArgs.to_config`
  builds a `Config`.
- `tikvkit.retry`: `retry(client, call)` awaits `call(client.cluster)` up to
  ten times, calling `client.reconnect` after each failure; five failed
  reconnects in a row raise the reconnect error, and when every attempt
  fails the last error from `call` is raised. `Reconnectable` is the
  abstract interface; `ReconnectingCluster` wraps a cluster and a
  reconnect coroutine and reconnects at most once per interval.
- `tikvkit.pd_client`: `Region`, `Store`, `decode_region` and the abstract
  `PdClient`, which on top of `region_for_key`, `region_for_id` and
  `map_region_to_store` provides `store_for_key`, `store_for_id` and the
  async generators `group_keys_by_region`, `stores_for_range` and
  `group_ranges_by_region`. `KvClientCache` connects to each store address
  once. `MockPdClient` and `MockKvClient` give a fixed two-region layout
  (region 1 below key `[10]`, region 2 from `[10]`) for testing; an unknown
  region id raises `RegionNotFoundError`.
- `tikvkit.store`: `KvStore`, a thread-safe in-memory map with `raw_get`,
  `raw_put`, `raw_delete` and their batch forms.

## Examples

Backoff between retries:

```python
from tikvkit.backoff import Backoff

backoff = Backoff.no_jitter_backoff(2, 500, 10)
while (delay := backoff.next_delay_duration()) is not None:
    ...  # wait for `delay`, then retry
```

Configuration:

```python
from datetime import timedelta

from tikvkit.config import Config

config = Config().with_security("root.ca", "internal.cert", "internal.key")
config = config.with_timeout(timedelta(seconds=10))
```

Options from the command line:

```python
from tikvkit.cli import parse_args

args = parse_args("txn", ["--pd", "127.0.0.1:2379,127.0.0.1:2381"])
assert args.pd == ["127.0.0.1:2379", "127.0.0.1:2381"]
config = args.to_config()
```

Encoding keys:

```python
from tikvkit.codec import decode_bytes, encode_bytes

encoded = encode_bytes(b"\x01\x02\x03", False)
assert encoded == bytes([1, 2, 3, 0, 0, 0, 0, 0, 250])
assert decode_bytes(encoded, False) == b"\x01\x02\x03"
```

Ranges for scans:

```python
from tikvkit.bound_range import BoundRange
from tikvkit.key import Key

start, end = BoundRange.inclusive(b"a", b"z").into_keys()
assert (start, end) == (Key(b"a"), Key(b"z\x00"))

start, end = BoundRange.range_from(b"a").into_keys()
assert end is None
```

An in-memory store:

```python
from tikvkit.store import KvStore

store = KvStore()
store.raw_put(b"k1", b"v1")
assert store.raw_get(b"k1") == b"v1"
store.raw_delete(b"k1")
assert store.raw_get(b"k1") is None
```

Grouping keys by region with the mock PD client:

```python
import asyncio

from tikvkit.pd_client import MockPdClient

async def regions():
    client = MockPdClient()
    async for region_id, keys in client.group_keys_by_region([b"\x01", b"\x02", b"\x0c"]):
        print(region_id, keys)

asyncio.run(regions())
```

## What it does not do

There is no network layer: no connection to PD or to storage nodes, no gRPC,
no raw or transactional client and no server. `PdClient` and `retry` work
with whatever cluster and store clients you supply; the package itself only
ships the in-memory `KvStore` and the mock clients. It installs no
command-line program; `tikvkit.cli` only parses options for programs you
write.

## Tests

The test suite uses pytest and pytest-asyncio, available through the `test`
extra.