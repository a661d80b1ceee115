# osdrills

Two small operating-systems exercises built around threads and shared state.
The package has no dependencies outside the standard library.

## Keyed queue

`osdrills.keyqueue.KeyedQueue` is a thread-safe FIFO queue of `Item`s. Each key
appears only once. If you enqueue an `Item` whose key is already present, the
queue replaces the stored value and keeps the entry where it was in the order.
The queue shallow-copies values when they go in and again when they come out.

```python
from osdrills.keyqueue import Item, KeyedQueue, QueueEmptyError

queue = KeyedQueue()
queue.enqueue(Item(key=3, value=b"three"))
queue.enqueue(Item(key=7, value=b"seven"))
queue.enqueue(Item(key=3, value=b"THREE"))   # overwrites key 3 in place

len(queue)                   # 2
3 in queue                   # True
[i.key for i in queue]       # [3, 7]
subset = queue.range(1, 5)   # a new KeyedQueue holding the items with 1 <= key <= 5

queue.dequeue()              # Item(key=3, value=b'THREE')
```

- An `Item` key must be an `int` from 0 to 0xFFFFFFFF. A key that is not an
  `int` raises `TypeError`. A key outside that range raises `ValueError`.
- `dequeue()` on an empty queue raises `QueueEmptyError`, which is a subclass
  of `LookupError`.
- `Node.clone()` returns a new node that holds the same item and points to the
  same next node.

### Workload driver

`osdrills.workload` drives a queue from one or more client threads:

- `make_requests(count, rng)` returns `count // 2` SET requests, for keys 0, 1, …,
  each with a random value below 1,000,000. After them come the remaining GET
  requests.
- `run_client(queue, requests, totals)` runs the requests in order. Each
  successful SET or GET adds its item's key and value to a `ClientTotals`. A GET
  on an empty queue is skipped.
- `run_workload(requests, clients=1)` runs `clients` threads against one shared
  queue and returns the combined `ClientTotals`.

The `osdrills-workload` command runs a workload and prints the two sums:

```
osdrills-workload [--requests N] [--clients N] [--seed N]
```

By default it runs 10000 requests on one client with an unseeded generator.

The driver adds up keys and values and nothing else. It does not measure
response times or latency.

## Counter panel

`osdrills-counters` starts several counters, each on its own thread. A counter
counts at a fixed frequency and wraps to 0 after its maximum. A terminal panel
shows every counter:

```
osdrills-counters n=3 freq=10 max=99
```

All three arguments are required:

- `n`: the number of counters (positive),
- `freq`: how many times per second a counter advances (positive),
- `max`: the highest value before the counter wraps to 0 (0 to 2147483647).

You can write numbers in decimal, in hex (`0x` prefix) or in octal (leading `0`).
If an argument is missing or invalid, the command prints a usage line and exits
with status 1.

Keys in the panel:

- space pauses or resumes the selected counter (every counter starts paused),
- `n` selects the next counter,
- `q` quits.

After a key press, a short message appears below the counters and clears after
two seconds.

You can also use the pieces directly: `parse_args`, `CounterTask`,
`CounterTaskPool` (a context manager that stops its threads on exit),
`CounterPanel`, `UiRenderer` and `Terminal`. To get a frame without a terminal,
call `CounterPanel.render()`.

## Tests

```
pip install .[test]
pytest
```