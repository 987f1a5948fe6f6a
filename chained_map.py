import logging
from typing import List, TypeVar, Tuple, Optional, Iterator, Iterable


logger = logging.getLogger(__name__)

INITIAL_BUCKETS = 1
LOAD_FACTOR_NUMERATOR = 3
LOAD_FACTOR_DENOMINATOR = 4


K = TypeVar('K')
V = TypeVar('V')


def bucket_index(key, buckets: int) -> int:
    """
    :param key: Any hashable object.
    :param buckets: The number of buckets, must be greater than zero.
    :return: The index of the bucket the key belongs to.
    """
    return hash(key) % buckets


def grow_limit(buckets: int) -> int:
    """
    :param buckets: The current number of buckets.
    :return: The entry count above which the next insertion grows the table.
    """
    return LOAD_FACTOR_NUMERATOR * buckets // LOAD_FACTOR_DENOMINATOR


class ChainedHashMap:
    """
    Hash map resolving collisions by chaining.

    Each bucket is a plain list of (key, value) tuples. The bucket list is allocated lazily on the
    first insertion and doubles every time the entry count exceeds three quarters of the bucket count.
    No ordering is kept, neither across buckets nor inside them.

    Not safe for concurrent mutation, guard it with a lock when shared between threads.
    """
    _buckets: List[List[Tuple[K, V]]]
    _items: int

    def __init__(self):
        self._buckets = []
        self._items = 0

    def _bucket_(self, key) -> List[Tuple[K, V]]:
        return self._buckets[bucket_index(key, len(self._buckets))]

    def _find_(self, key) -> Tuple[bool, Optional[V], int]:
        """
        Find the given key.

        :param key: The key to search for, or any object hashing and comparing equal to it.
        :return: A tuple containing three elements
            - a boolean indicating if the key was found,
            - an optional value associated with the key (if found)
            - the position of the pair inside its bucket (-1 if not found)
        """
        if not self._buckets:
            return False, None, -1

        for position, (stored, value) in enumerate(self._bucket_(key)):
            if key == stored:
                return True, value, position

        return False, None, -1

    def _should_grow_(self) -> bool:
        return not self._buckets or self._items > grow_limit(len(self._buckets))

    def bucket_count(self) -> int:
        return len(self._buckets)

    def resize(self):
        """
        Grow the table: one bucket if it has none yet, otherwise twice as many.

        Every pair is moved into its bucket in the new list, which then replaces the old one.
        The entry count is unchanged.
        """
        current = len(self._buckets)
        target = INITIAL_BUCKETS if current == 0 else current * 2

        buckets = [[] for _ in range(target)]

        for bucket in self._buckets:
            for key, value in bucket:
                buckets[bucket_index(key, target)].append((key, value))

            bucket.clear()

        self._buckets = buckets

        logger.debug("Resized from %d to %d buckets holding %d entries", current, target, self._items)

    def put(self, key: K, value: V) -> Optional[V]:
        """
        :param key: The key to be inserted into the hash map.
        :param value: The value corresponding to the key.
        :return: The old value if the key already exists in the hash map, otherwise None.

        The growth condition is checked before the lookup, so a pure replacement can grow the table as well.
        A replaced pair keeps its position in the bucket, a new pair is appended to it.
        """
        if self._should_grow_():
            self.resize()

        found, old_value, position = self._find_(key)
        bucket = self._bucket_(key)

        if found:
            bucket[position] = (bucket[position][0], value)
        else:
            bucket.append((key, value))
            self._items += 1

        return old_value

    def get(self, key, default: Optional[V] = None) -> Optional[V]:
        """
        :param key: The key to look up. Any object with the same hash that compares equal to a stored key
            finds it, e.g. a lightweight view over an owned key.
        :param default: Returned when the key is absent.
        :return: The value associated with the key, or default.
        """
        found, value, _ = self._find_(key)

        if not found:
            return default

        return value

    def contains_key(self, key) -> bool:
        found, _, _ = self._find_(key)

        return found

    def __contains__(self, key):
        return self.contains_key(key)

    def __getitem__(self, key):
        found, value, _ = self._find_(key)

        if not found:
            raise KeyError(key)

        return value

    def remove(self, key) -> Optional[V]:
        """
        :param key: The key to be removed from the hash map.
        :return: The value associated with the key, or None if the key is not found.

        The pair is swapped with the last pair of its bucket before being popped, so the
        removal is O(1) and does not keep the order of the remaining pairs in that bucket.
        """
        found, value, position = self._find_(key)

        if not found:
            return None

        bucket = self._bucket_(key)
        bucket[position], bucket[-1] = bucket[-1], bucket[position]
        bucket.pop()

        self._items -= 1

        return value

    def __delitem__(self, key):
        if not self.contains_key(key):
            raise KeyError(key)

        self.remove(key)

    def __setitem__(self, key: K, value: V):
        self.put(key, value)

    def __len__(self):
        return self._items

    def is_empty(self) -> bool:
        return self._items == 0

    def __bool__(self):
        return not self.is_empty()

    def __iter__(self) -> Iterator[Tuple[K, V]]:
        buckets = self._buckets
        items = self._items

        for bucket in buckets:
            for pair in bucket:
                if buckets is not self._buckets or items != self._items:
                    raise RuntimeError("ChainedHashMap changed size during iteration")

                yield pair

        if buckets is not self._buckets or items != self._items:
            raise RuntimeError("ChainedHashMap changed size during iteration")

    def items(self) -> Iterator[Tuple[K, V]]:
        return self.__iter__()

    def keys(self) -> Iterator[K]:
        return (k for k, _ in self)

    def values(self) -> Iterator[V]:
        return (v for _, v in self)

    def __add__(self, other: Iterable[Tuple[K, V]]):
        for k, v in other:
            self.put(k, v)

        return self

    def __sub__(self, other: Iterable[Tuple[K, V]]):
        for k, _ in other:
            self.remove(k)

        return self

    def __str__(self):
        return f"{list(self.__iter__())}, buckets={len(self._buckets)}"

    def __repr__(self):
        return self.__str__()
