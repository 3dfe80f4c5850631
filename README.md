# ezlogger

A small logging library made of a few plain parts:

- **Levels and records** (`ezlogger.common`): the `LogLevel` enum (`TRACE`, `DEBUG`, `INFO`,
  `WARN`, `ERROR`, `FATAL`, `OFF`), `SourceLocation` (file name without its directory, line and
  function) and the frozen `LogMsg` record.
- **Formatters** (`ezlogger.formatter`): `DefaultFormatter` produces lines such as
  `[2025-01-01 00:00:00] [I] [file.py:11] [pid:tid] message`. Subclass `Formatter` to write
  your own.
- **Sinks** (`ezlogger.sinks`): `ConsoleSink` writes one formatted line per record to a text
  stream, or to the current standard output when no stream is given. Subclass `LogSink` for
  other destinations.
- **Handles** (`ezlogger.handle`): `LogHandle` drops records below its `level` and hands the
  rest to every sink. `VariadicLogHandle.logf` also fills in a `str.format` template, and only
  does so when the record will be kept.
- **A process-wide logger** (`ezlogger.logger`): `init_logger` installs a handle, and `trace`,
  `debug`, `info`, `warn`, `error` and `critical` log through it, tagging each record with the
  caller's file, line and function. `log_with` does the same through a handle you pass in.

## Installation

```
pip install ezlogger
```

## Logging

```python
from ezlogger.common import LogLevel
from ezlogger.handle import VariadicLogHandle
from ezlogger.sinks import ConsoleSink
from ezlogger import logger

handle = VariadicLogHandle([ConsoleSink()])
handle.level = LogLevel.DEBUG
logger.init_logger(handle)

logger.info("service started on port {}", 8080)
logger.debug("cache size {}", 42)
logger.trace("not shown: below the handle's level")
```

A handle starts at `LogLevel.INFO`. It drops anything below its level, and anything logged while
it has no sinks. When no handle is installed, the level-named functions do nothing.

## Background tasks

`ezlogger.thread_pool.ThreadPool` runs callables on a fixed number of worker threads.
`submit_ret_task` returns a `concurrent.futures.Future`.

`ezlogger.executor.Executor` keeps task runners under integer tags. A runner is a pool with a
single thread, so tasks posted to one runner run one at a time, in the order they were posted.
`add_task_runner` assigns a fresh tag when the one you ask for is already taken. The executor also
has `post_delayed_task`, `post_repeated_task` (which returns an id for `cancel_repeated_task`) and
`post_task_and_get_result`. Delays are `timedelta` values or numbers of seconds.

`ezlogger.context` holds one shared executor for the whole process:

```python
from ezlogger import context

runner = context.new_task_runner(1)
context.post_task(runner, lambda: print("runs on the runner's own thread"))
context.wait_task_idle(runner)
```

## Memory-mapped buffer

`ezlogger.mmap_aux.MMapAux` is a byte buffer that you can only append to, stored in a
memory-mapped file. The file starts with a small header: a magic number and the number of bytes
in use. The buffer grows one page at a time as you `push` data. `data`, `size`, `ratio`, `clear`,
`sync` and `close` do what their names say. It also works as a context manager.

## Byte sizes

```python
from ezlogger.space import kilobytes, megabytes

total = megabytes(1) + kilobytes(512)
assert total == kilobytes(1536)
```

`Space` values with different units are converted to the smaller unit before they are added,
subtracted, compared or divided. `space_cast` and `Space.cast` convert to another unit, and
truncate integer counts.

## Encryption

```python
from ezlogger.crypt import AESCrypt

crypt = AESCrypt(AESCrypt.generate_key())
sealed = crypt.encrypt(b"log line")
assert crypt.decrypt(sealed) == b"log line"
```

Every ciphertext starts with a new random 16-byte IV. AES-CBC with PKCS#7 padding encrypts the
data that follows it. `generate_ecdh_key` and `generate_ecdh_shared_key` perform a P-256 key
exchange on raw key bytes. `binary_key_to_hex` and `hex_key_to_binary` convert keys to and from
hexadecimal text.

## Small helpers

- `ezlogger.defer.ExecuteOnScopeExit` calls a function when a `with` block is left, unless you
  call `cancel()` first.
- `ezlogger.timing.TimeCount` measures a `with` block in microseconds and keeps the result in
  `elapsed_us`.
- `ezlogger.timing.internal_log` prints diagnostics only when the environment variable
  `EZLOGGER_ENABLE_LOG` is set to `1`, `true`, `yes` or `on`.

## What it does not do

The only sink is `ConsoleSink`. There is no sink that writes log files, rotates or deletes them,
or compresses or encrypts records on their way to disk. `MMapAux`, `Executor`, `Space` and
`AESCrypt` are there to build such a sink, but the package does not put them together. It also has
no binary or structured record format and no command-line tool.

## Running the tests

```
pip install -e ".[test]"
pytest
```