"""Case-insensitive header mapping."""

from collections.abc import MutableMapping


class Headers(MutableMapping):
    """A mapping whose keys compare without regard to case.

    Iteration yields keys ordered case-insensitively. The spelling of a key is
    that of its first insertion.
    """

    def __init__(self, data=None):
        self._items = {}
        if data is not None:
            self.update(data)

    def __getitem__(self, key):
        return self._items[key.lower()][1]

    def __setitem__(self, key, value):
        folded = key.lower()
        existing = self._items.get(folded)
        name = existing[0] if existing is not None else key
        self._items[folded] = (name, value)

    def __delitem__(self, key):
        folded = key.lower()
        if folded not in self._items:
            raise KeyError(key)
        self._items.pop(folded)

    def __contains__(self, key):
        return isinstance(key, str) and key.lower() in self._items

    def __iter__(self):
        for folded in sorted(self._items):
            yield self._items[folded][0]

    def __len__(self):
        return len(self._items)

    def __repr__(self):
        return f"{type(self).__name__}({dict(self.items())!r})"