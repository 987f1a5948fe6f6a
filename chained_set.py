from typing import TypeVar, Iterator

from chained_map import ChainedHashMap


V = TypeVar('V')


class ChainedHashSet:
    def __init__(self, values=()):
        self._map = ChainedHashMap()

        for value in values:
            self.add(value)

    def add(self, value: V):
        self._map.put(value, None)

    def __contains__(self, item):
        return self._map.contains_key(item)

    def remove(self, value: V):
        self._map.remove(value)

    def __iter__(self) -> Iterator[V]:
        return self._map.keys()

    def __add__(self, other):
        return self.union(other)

    def __sub__(self, other):
        return self.difference(other)

    def __len__(self):
        return len(self._map)

    def intersection(self, other):
        return ChainedHashSet(value for value in self if value in other)

    def union(self, other):
        hash_set = ChainedHashSet(other)
        hash_set._map += self._map

        return hash_set

    def difference(self, other):
        return ChainedHashSet(value for value in self if value not in other)

    def __str__(self):
        keys = [k.__str__() for k in self]

        return ", ".join(keys)

    def __repr__(self):
        return self.__str__()
