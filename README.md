# infrakit

Infrastructure building blocks for service applications. The package is a
library: there is no command to run. Import the parts you need.

## What is inside

- `infrakit.helper.strings`: bcrypt password hashing (`generate_password`,
  `verify_password`), random strings (`random_string`, `RandomStringMode`,
  `random_number_string`), GBK/UTF-8 conversion, `create_order_no`,
  `replace_string` and masking of phone numbers, e-mail addresses, identity
  numbers and names.
- `infrakit.helper.numbers`: `rand_area_num`, `big_number_thousand_format`,
  `file_size_format`, `ternary` and `ternary_func`.
- `infrakit.helper.slices`: `index_of`, `contain`, `is_contain_slice`,
  `diff_slice` (symmetric difference) and `random_slice_unique`.
- `infrakit.helper.convert`: loose conversion of any value to a string, a
  signed or an unsigned 64-bit integer.
- `infrakit.helper.misc`: `get_local_ip`, `cartesian` and
  `remove_markdown_link`.
- `infrakit.helper.dates`: calendar helpers such as `month_days`,
  `last_day_of_month`, `week_day`, Chinese weekday names, `resolve_time`
  and `calculate_age`.
- `infrakit.crypto.digest`: `md5`, `sha256`, `file_md5` and `file_sha1`.
- `infrakit.crypto.aes`: AES-CBC `encrypt`/`decrypt` with PKCS#7 padding.
- `infrakit.crypto.rsa`: `sign` and `check` for RSA PKCS#1 v1.5 signatures
  over SHA-256 with PEM keys (PKCS#8 private, PKIX public).
- `infrakit.model.status`: `BinaryStatus` and its constructors.
- `infrakit.model.units`: `Weight` (grams), `Price` (fen), `Percent`
  (hundredths of a percent) and `Score` (tenths), with formatting helpers.
- `infrakit.model.fields`: database codecs for JSON arrays, raw JSON and
  AES-encrypted text (`crypto_to_db` / `crypto_from_db`).
- `infrakit.model.times`: `JSONTime`, `JSONDate` and `TimeOnly` with their
  JSON and database conversions.
- `infrakit.model.table`: `table_comment_sql` for MySQL and PostgreSQL.
- `infrakit.pipeline`: `Pipeline` runs callables in order or concurrently,
  stopping at (and raising) the first error.
- `infrakit.cache.simple`: string caches, `MemoryCache` and `RedisCache`,
  and `new_cache`.
- `infrakit.persistence`: byte cache drivers (`MemoryDriver`,
  `RedisDriver`), `JSONSerializer` and `MsgpackSerializer`, `SingleFlight`,
  and `TypedCache`, a value cache with tag-versioned invalidation and
  single-flight loading.
- `infrakit.event`: `BaseEvent`, `BaseDomainEvent`, `DomainEventHandler`,
  the `Handler` protocol, `MQEventBus` and `ConsumerService`.
- `infrakit.server`: the `Server` protocol, a TCP `HealthServer` that
  answers every connection with `running`, and `EventServer`.

## Examples

Masking personal data:

```python
from infrakit.helper.strings import hide_real_name, mask_cred_no

mask_cred_no("ABCD12345678WXYZ")   # "ABCD********WXYZ"
hide_real_name("张三丰")             # "张*丰"
```

Formatting sizes:

```python
from infrakit.helper.numbers import file_size_format

file_size_format(0)      # "0B"
file_size_format(2048)   # "2.00KB"
```

AES round trip:

```python
from infrakit.crypto.aes import decrypt, encrypt

key = bytes(range(16))
ciphertext = encrypt(b"hello", key, key)
decrypt(ciphertext, key, key)   # b"hello"
```

Running a pipeline, stopping at the first error:

```python
from infrakit.pipeline import Pipeline

steps = []
Pipeline().then(lambda: steps.append("a"), lambda: steps.append("b")).execute()
```

A typed cache with tags: values stored under a tag stop being found once
the tag is invalidated, with no key scan.

```python
from infrakit.persistence.drivers import MemoryDriver
from infrakit.persistence.typed_cache import TypedCache

with MemoryDriver() as driver:
    cache = TypedCache("user", driver)
    cache.set("id:1", {"name": "demo"}, 0, "user:1")
    cache.get("id:1", "user:1")        # ({"name": "demo"}, True)
    cache.invalidate_tags("user:1")
    cache.get("id:1", "user:1")        # (None, False)
```

`MemoryCache` and `MemoryDriver` run a background thread that drops expired
entries; call `close()` or use them as context managers to stop it.

## What it does not do

- It brings no Redis client. `RedisCache` and `RedisDriver` take a client
  you supply, one with `exists`, `get`, `set` (accepting `px`), `delete`,
  `scan` (with `cursor`, `match`, `count`) and, for the driver, `incr`.
- It brings no message queue. `MQEventBus` sends through a `Producer` and
  `ConsumerService` listens through a `Consumer`; both are abstract classes
  you implement for your queue.
- It has no HTTP, gRPC or WebSocket server, no database connection or
  migrations, no configuration loading and no logging setup. The model
  module only produces values and SQL text for you to use with your own
  database layer.

## Tests

The test suite uses pytest; install the `test` extra to get it.