# sgrelay

Small building blocks for a relay service, written in plain Python with no
third-party dependencies.

## Modules

### `sgrelay.sglist`

`SgList(capacity)` keeps items sorted by unsigned 32-bit key.

- `add(item)` stores the item under a key one above the largest key (0 for an
  empty list) and returns that key.
- `put(key, item)` inserts or replaces and returns the item's index.
- `get(key)`, `get_repeat(key, previous_index)`, `first()`, `next_after(key)`
  and `nearest(key)` look items up; a missing key raises `KeyError`.
- `delete(key)` removes an entry and returns its item.
- `len()` and iteration over `(key, item)` pairs are supported.

A list at its capacity raises `SgListFull`; running out of keys in `add()`
raises `SgListError`.

### `sgrelay.sgqueue`

`SgQueue(item_size, heap_size, excluding=False)` is a bounded FIFO holding
`heap_size // item_size` items of exactly `item_size` bytes. `put(item)` adds
an item and `receive()` returns the oldest one. A full queue raises
`QueueFull`, an empty one `QueueEmpty`, and an excluding queue refuses an item
equal to one already waiting with `ItemAlreadyExists`. All three derive from
`QueueError`.

### `sgrelay.sgdialog`

`Dialog(store)` reads and edits the dialog container format: a 10-byte
versioned header, typed items (`ItemType`) with ids, an end tag and a CRC-16
trailer (`crc16()`). Storage is a `BytesStore` in memory or a `FileStore` on
disk.

- `create()` writes an empty dialog.
- `items()` returns every `DialogItem` in stored order.
- `read_item(item_id, max_size)` returns one item.
- `add_item(item_type, data)` appends an item under the next free id and
  returns the id.
- `remove_item(item_id)` and `modify_item(item_id, item_type, data)` return
  whether the item was found.

Truncated, corrupt or newer-version data raises `DialogFormatError`.
`QuestItem` and `DialogDTO` are plain records for dialog summaries and for a
question with its answers and next steps.

### `sgrelay.cmdline`

`ArgParser(argv, mode, params)` splits a command line into flags, `name value`
parameters and positional arguments. `Mode` selects the behaviour:
`PREFER_FLAG_FOR_UNREG_OPTION`, `PREFER_PARAM_FOR_UNREG_OPTION`,
`NO_SPLIT_ON_EQUALSIGN` and `SINGLE_DASH_IS_MULTIFLAG`. Use `add_param()` to
register names that always take a value, then `parse()`, `flag()`,
`value()`, `all_values()`, `positional()`, the `flags`, `params` and
`pos_args` properties, or `parser[i]` / `parser["name"]`.

### `sgrelay.platform_port`

- `symbol_to_utf8(code)` and `symbol_to_console(code)` convert a single-byte
  Cyrillic symbol code to UTF-8 or to the DOS console code page.
- `split_timeout(timeout_ms)` gives `(seconds, microseconds)`.
- `configure_server_socket()`, `set_socket_recv_timeout()`,
  `set_socket_send_timeout()` and `close_server_socket()` act on a socket.
- `set_min_stack_size(size)` and `set_files_limit(limit, quiet)` adjust
  process resource limits and return `None` where the platform has none.

### `sgrelay.files`

`file_exists(filename)` tells whether a file can be opened for reading.

### `sgrelay.workers`

`ThreadBase` is an abstract base for a background worker. `start()` runs the
subclass's `execute()` once on a daemon thread, `stop()` sets `terminated`,
and `wait_for_completion()` joins the thread. `execute()` is expected to loop
until `terminated`, pausing `polling_time` milliseconds between rounds (set
with `set_polling_time()`).

## Example

```python
from sgrelay.sglist import SgList
from sgrelay.sgdialog import BytesStore, Dialog, ItemType

items = SgList(capacity=16)
key = items.add("first")
items.put(10, "tenth")
print(items.get(10))

dialog = Dialog(BytesStore())
dialog.create()
new_id = dialog.add_item(ItemType.QUESTION, b"How are you?")
for item in dialog.items():
    print(item)
```

## What it does not do

The package is a library only. It has no command to run, no relay server or
client, no message protocol and no account handling; those have to be built
on top of these modules.

## Tests

Install with the `test` extra and run `pytest`.