"""
Tests de la cola acotada de avisos.
"""

import threading
from queue import Empty, Full

import pytest

from services import QueueClosed, WarnQueue


def test_fifo_and_capacity():
    q = WarnQueue(2)
    q.put(1)
    q.put(2)
    assert q.qsize() == 2
    with pytest.raises(Full):
        q.put(3, timeout=0.05)
    assert q.get() == 1
    assert q.get_nowait() == 2
    with pytest.raises(Empty):
        q.get(timeout=0.05)
    with pytest.raises(Empty):
        q.get_nowait()


def test_put_blocks_until_consumer_drains():
    q = WarnQueue(1)
    q.put("a")
    done = threading.Event()

    def producer():
        q.put("b")
        done.set()

    t = threading.Thread(target=producer)
    t.start()
    assert not done.wait(0.1)
    assert q.get() == "a"
    assert done.wait(2)
    t.join(2)
    assert q.get() == "b"


def test_close_drains_then_signals():
    q = WarnQueue(4)
    q.put("a")
    q.close()
    assert q.closed
    assert q.get() == "a"
    with pytest.raises(QueueClosed):
        q.get()
    with pytest.raises(QueueClosed):
        q.get_nowait()


def test_close_wakes_blocked_consumer():
    q = WarnQueue(1)
    result = []

    def consumer():
        result.extend(list(q))

    t = threading.Thread(target=consumer)
    t.start()
    q.put("a")
    q.close()
    t.join(2)
    assert not t.is_alive()
    assert result == ["a"]


def test_close_twice_is_an_error():
    q = WarnQueue(1)
    q.close()
    with pytest.raises(RuntimeError):
        q.close()


def test_put_after_close_is_an_error():
    q = WarnQueue(1)
    q.close()
    with pytest.raises(QueueClosed):
        q.put("a")


def test_drain_is_non_blocking():
    q = WarnQueue(3)
    assert q.drain() == []
    q.put(1)
    q.put(2)
    assert q.drain() == [1, 2]
    assert q.qsize() == 0


def test_capacity_must_be_positive():
    with pytest.raises(ValueError):
        WarnQueue(0)
