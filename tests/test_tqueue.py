import threading
from concurrent.futures import ThreadPoolExecutor

from cachesim.tqueue import ThreadSafeQueue


def test_new_queue_is_empty():
    q = ThreadSafeQueue()
    assert q.empty() is True
    assert q.try_pop() is None


def test_fifo_order():
    q = ThreadSafeQueue()
    for value in ("a", "b", "c"):
        q.push(value)
    assert [q.try_pop(), q.try_pop(), q.try_pop()] == ["a", "b", "c"]
    assert q.empty() is True


def test_wait_and_pop_returns_available_item():
    q = ThreadSafeQueue()
    q.push(10)
    q.push(20)
    assert q.wait_and_pop(lambda: False) == 10
    assert q.try_pop() == 20


def test_wait_and_pop_prefers_items_over_stop():
    q = ThreadSafeQueue()
    q.push("x")
    assert q.wait_and_pop(lambda: True) == "x"


def test_wait_and_pop_stopped_on_empty_returns_none():
    q = ThreadSafeQueue()
    assert q.wait_and_pop(lambda: True) is None


def test_wait_and_pop_wakes_on_push_from_other_thread():
    q = ThreadSafeQueue()
    with ThreadPoolExecutor(max_workers=1) as pool:
        future = pool.submit(q.wait_and_pop, lambda: False)
        q.push("hello")
        assert future.result(timeout=5) == "hello"
    assert q.empty() is True


def test_many_producers_deliver_every_item():
    q = ThreadSafeQueue()
    threads = [
        threading.Thread(target=lambda base=base: [q.push(base + i) for i in range(50)])
        for base in (0, 1000, 2000)
    ]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    drained = []
    while (item := q.try_pop()) is not None:
        drained.append(item)
    expected = [b + i for b in (0, 1000, 2000) for i in range(50)]
    assert sorted(drained) == expected