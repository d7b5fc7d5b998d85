# afina

A small key-value cache that speaks a subset of the memcached text protocol
over TCP, backed by a least-recently-used store bounded by size.

## Modules

- `afina.storage`: the abstract `Storage` interface (`put`, `put_if_absent`,
  `set`, `delete`, `get`, plus no-op `start` and `stop`) and `SimpleLRU`, an
  LRU cache in which the combined length of all keys and values never exceeds
  `max_size` (default 1024). When an entry would overflow the limit, the least
  recently used entries are evicted. An entry whose key and value together are
  longer than `max_size` is refused, and the call returns `False`. `get` returns
  the value or `None`, and marks the entry as recently used. `SimpleLRU` also
  offers `len()`, `in`, and the `max_size` and `current_size` properties.
  `ThreadSafeSimpleLRU` does the same work behind a lock.
- `afina.commands`: the commands `Set`, `Add`, `Append`, `Replace`, `Delete`,
  `Get` and `Stats`. Each has an `execute(storage, args)` method that returns the
  reply text: `STORED` / `NOT_STORED`, `DELETED` / `NOT_FOUND`, or `VALUE ...`
  lines followed by `END`.
- `afina.protocol`: `Parser`, an incremental parser for command lines.
  `parse(data)` accepts `str` or `bytes` and returns `(complete, consumed)`.
  `build()` returns `(command, body_size)` once a line is complete, and `None`
  before that. `reset()` prepares the parser for the next command. Malformed
  input raises `ProtocolError`.
- `afina.server`: the abstract `Server` and `BlockingServer`, a TCP server that
  serves connections one at a time in a single background thread.
- `afina.logging_config`: data classes that describe logging setup:
  `AppenderType`, `Appender`, `Level`, `LoggerConfig` and `Config`.

## Using the cache

```python
from afina.storage import SimpleLRU

cache = SimpleLRU(1024)
cache.put("greeting", "hello")            # True
cache.get("greeting")                     # "hello"
cache.put_if_absent("greeting", "other")  # False, key already present
cache.set("missing", "x")                 # False, set only updates existing keys
cache.delete("greeting")                  # True
cache.get("greeting")                     # None
```

## Parsing a command

```python
from afina.protocol import Parser
from afina.storage import SimpleLRU

parser = Parser()
complete, consumed = parser.parse(b"set key 0 0 5\r\n")
command, body_size = parser.build()       # Set(key="key", ...), 5
command.execute(SimpleLRU(), "value")     # "STORED"
```

## Running a server

```python
from afina.server import BlockingServer
from afina.storage import ThreadSafeSimpleLRU

server = BlockingServer(ThreadSafeSimpleLRU(1024 * 1024))
server.start(11211, 1, 1)   # port 0 picks a free port; see server.port
# ... serve clients ...
server.stop()
server.join()
```

Connect with any client that speaks the memcached text protocol:

```
set key 0 0 5
value
STORED
get key
VALUE key 5
value
END
```

Messages are written with the standard `logging` module, to the
`afina.network` logger.

## Limitations

- The parser recognises `set`, `add`, `append`, `get` and `stats`. The names
  `prepend` and `gets` are accepted while the line is read, but building the
  command raises `ProtocolError`. There is no wire syntax for `delete` or
  `replace`; the `Delete` and `Replace` commands can only be used from Python.
- Flags and expiration times are parsed and kept on the command, but they are
  not stored, and entries never expire.
- `stats` always replies with an empty list (`END`).
- `BlockingServer` handles one connection at a time. Its `acceptors` and
  `workers` arguments are accepted and ignored. After a protocol error the
  server logs it and closes the connection.
- The `afina.logging_config` classes only describe a configuration. Nothing in
  the package applies them.
- There is no command-line program. Start the server from Python as shown
  above.

## Tests

Install the `test` extra and run `pytest`.