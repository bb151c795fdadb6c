"""Fixed-capacity first-in first-out queue over a ring of slots."""

from .errors import FailedPrecondition, ResourceExhausted


class CircularQueue:
    """A queue with a fixed number of slots; nothing shifts when popping."""

    def __init__(self, capacity):
        self._capacity = capacity
        self._slots = [None] * capacity
        self._size = 0
        self._head = 0
        self._tail = 0

    @property
    def capacity(self):
        return self._capacity

    def __len__(self):
        return self._size

    def empty(self):
        return self._size == 0

    def full(self):
        return self._size == self._capacity

    def _next_index(self, index):
        return (index + 1) % self._capacity

    def pop_front(self):
        if self.empty():
            raise FailedPrecondition("CircularQueue is empty, nothing to pop.")
        value = self._slots[self._tail]
        self._slots[self._tail] = None
        self._tail = self._next_index(self._tail)
        self._size -= 1
        return value

    def try_push_back(self, value):
        """Add ``value`` if there is room; return whether it was added."""
        if self.full():
            return False
        self._slots[self._head] = value
        self._head = self._next_index(self._head)
        self._size += 1
        return True

    def push_back(self, value):
        if not self.try_push_back(value):
            raise ResourceExhausted(
                f"CircularQueue at capacity ({self._capacity}), "
                "cannot add more items."
            )