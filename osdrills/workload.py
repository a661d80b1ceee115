"""A small client workload that drives a KeyedQueue and sums the replies."""

from __future__ import annotations

import argparse
import enum
import random
import threading
from dataclasses import dataclass, field

from osdrills.keyqueue import Item, KeyedQueue, QueueEmptyError

REQUESTS_PER_CLIENT = 10000
VALUE_LIMIT = 1000000


class Operation(enum.Enum):
    GET = enum.auto()
    SET = enum.auto()
    GETRANGE = enum.auto()


@dataclass(frozen=True)
class Request:
    op: Operation
    item: Item | None = None


@dataclass
class ClientTotals:
    """Running sums of the keys and values returned to clients."""

    sum_key: int = 0
    sum_value: int = 0
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def add(self, item: Item) -> None:
        with self._lock:
            self.sum_key += item.key
            self.sum_value += item.value if item.value is not None else 0


def make_requests(count: int, rng: random.Random) -> list[Request]:
    """Build ``count`` requests: the first half SETs keys 0.., the rest GETs."""
    half = count // 2
    sets = [
        Request(Operation.SET, Item(key, rng.randrange(VALUE_LIMIT)))
        for key in range(half)
    ]
    gets = [Request(Operation.GET) for _ in range(count - half)]
    return sets + gets


def run_client(queue: KeyedQueue, requests: list[Request], totals: ClientTotals) -> None:
    """Play ``requests`` against ``queue``, adding every successful reply to ``totals``."""
    for request in requests:
        if request.op is Operation.GET:
            try:
                item = queue.dequeue()
            except QueueEmptyError:
                continue
        else:
            if request.item is None:
                raise ValueError(f"{request.op.name} request carries no item")
            queue.enqueue(request.item)
            item = request.item
        totals.add(item)


def run_workload(requests: list[Request], clients: int = 1) -> ClientTotals:
    """Run ``clients`` threads, each replaying ``requests`` on one shared queue."""
    if clients < 1:
        raise ValueError("at least one client is required")
    queue = KeyedQueue()
    totals = ClientTotals()
    threads = [
        threading.Thread(target=run_client, args=(queue, requests, totals))
        for _ in range(clients)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return totals


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Drive a keyed queue with a simple workload.")
    parser.add_argument("--requests", type=int, default=REQUESTS_PER_CLIENT)
    parser.add_argument("--clients", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    if args.requests < 0:
        parser.error("--requests must not be negative")
    if args.clients < 1:
        parser.error("--clients must be at least 1")

    requests = make_requests(args.requests, random.Random(args.seed))
    totals = run_workload(requests, args.clients)
    print(f"sum of returned keys = {totals.sum_key}")
    print(f"sum of returned values = {totals.sum_value}")
    return 0