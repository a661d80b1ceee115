import random

import pytest

from osdrills.keyqueue import Item, KeyedQueue
from osdrills.workload import (
    VALUE_LIMIT,
    ClientTotals,
    Operation,
    Request,
    main,
    make_requests,
    run_client,
    run_workload,
)


def test_make_requests_layout():
    requests = make_requests(10, random.Random(3))
    assert [r.op for r in requests] == [Operation.SET] * 5 + [Operation.GET] * 5
    assert [r.item.key for r in requests[:5]] == list(range(5))
    assert all(r.item is None for r in requests[5:])


def test_make_requests_values_in_range():
    requests = make_requests(200, random.Random(1))
    values = [r.item.value for r in requests if r.op is Operation.SET]
    assert len(values) == 100
    assert all(0 <= v < VALUE_LIMIT for v in values)


def test_make_requests_odd_count():
    requests = make_requests(7, random.Random(0))
    assert sum(r.op is Operation.SET for r in requests) == 3
    assert len(requests) == 7


def test_make_requests_is_deterministic_for_seed():
    first = make_requests(20, random.Random(42))
    second = make_requests(20, random.Random(42))
    assert first == second


def test_run_client_counts_sets_and_gets():
    requests = make_requests(100, random.Random(5))
    set_values = [r.item.value for r in requests[:50]]
    queue = KeyedQueue()
    totals = ClientTotals()
    run_client(queue, requests, totals)
    assert totals.sum_key == 2 * sum(range(50))
    assert totals.sum_value == 2 * sum(set_values)
    assert len(queue) == 0


def test_run_client_ignores_get_on_empty_queue():
    totals = ClientTotals()
    queue = KeyedQueue()
    run_client(queue, [Request(Operation.GET)] * 3 + [Request(Operation.SET, Item(4, 10))], totals)
    assert (totals.sum_key, totals.sum_value) == (4, 10)
    assert 4 in queue


def test_run_client_rejects_set_without_item():
    with pytest.raises(ValueError):
        run_client(KeyedQueue(), [Request(Operation.SET)], ClientTotals())


def test_run_workload_single_client():
    requests = make_requests(40, random.Random(9))
    set_values = [r.item.value for r in requests[:20]]
    totals = run_workload(requests)
    assert totals.sum_key == 2 * sum(range(20))
    assert totals.sum_value == 2 * sum(set_values)


def test_run_workload_rejects_zero_clients():
    with pytest.raises(ValueError):
        run_workload([], clients=0)


def test_run_workload_many_clients_bounds():
    requests = make_requests(100, random.Random(2))
    totals = run_workload(requests, clients=4)
    set_key_total = sum(range(50))
    assert 4 * set_key_total <= totals.sum_key <= 8 * set_key_total


def test_main_prints_sums(capsys):
    assert main(["--requests", "10", "--seed", "1"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"sum of returned keys = {2 * sum(range(5))}"
    assert lines[1].startswith("sum of returned values = ")


def test_main_rejects_bad_clients():
    with pytest.raises(SystemExit):
        main(["--clients", "0"])