import pytest

from lightweb.circular_queue import CircularQueue
from lightweb.errors import FailedPrecondition, ResourceExhausted


def test_push_pop():
    q = CircularQueue(5)
    assert len(q) == 0
    assert q.empty()
    assert not q.full()

    assert q.try_push_back(1)
    assert len(q) == 1
    assert not q.empty()
    assert not q.full()

    q.push_back(2)
    assert len(q) == 2
    assert not q.empty()
    assert not q.full()

    q.push_back(3)
    q.push_back(4)
    q.push_back(5)
    assert len(q) == 5
    assert not q.empty()
    assert q.full()

    assert not q.try_push_back(6)
    with pytest.raises(ResourceExhausted):
        q.push_back(6)

    assert q.pop_front() == 1
    assert len(q) == 4
    assert not q.empty()
    assert not q.full()

    assert q.pop_front() == 2
    assert q.try_push_back(6)
    assert len(q) == 4
    assert not q.empty()
    assert not q.full()

    assert q.try_push_back(7)
    assert len(q) == 5
    assert not q.empty()
    assert q.full()

    assert q.pop_front() == 3
    assert q.pop_front() == 4
    assert q.pop_front() == 5
    assert q.pop_front() == 6
    assert q.pop_front() == 7

    assert len(q) == 0
    assert q.empty()
    assert not q.full()

    with pytest.raises(FailedPrecondition):
        q.pop_front()


def test_preserves_order_across_wraparound():
    q = CircularQueue(3)
    popped = []
    for value in range(10):
        q.push_back(value)
        if q.full():
            popped.append(q.pop_front())
    while not q.empty():
        popped.append(q.pop_front())
    assert popped == list(range(10))


def test_capacity_is_reported():
    q = CircularQueue(4)
    assert q.capacity == 4