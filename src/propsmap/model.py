# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2024/11/02 21:03:47
# @Author : Kariko Lin

"""Ordered `key=value` properties, with dot-separated hierarchical keys.

Mainly for things like this (e.g. Arduino `boards.txt`):

    ```properties
    uno.name=Arduino Uno
    uno.upload.tool=avrdude
    uno.upload.speed=115200
    uno.build.mcu=atmega328p
    ```

The map keeps insertion order, while an update *moves* the key to the end,
just as if it was removed and then inserted again.
"""

from collections.abc import Mapping, MutableMapping
from typing import Iterator, Self

from .expand import expand_props, is_property_missing
from .hierarchy import HierarchyMixin

__all__ = ['PropertiesMap', 'merge_maps_of_properties']


class PropertiesMap(HierarchyMixin, MutableMapping[str, str]):
    """Insertion-ordered `str: str` dict.

    Lookups of absent keys are *not* errors with the helpers here:
    `get()` gives an empty string, `get_ok()` a `('', False)` pair,
    and `remove()` does nothing. Only the `m[key]` / `del m[key]`
    protocol raises `KeyError`, as any mapping does.

    Not thread safe. `clone()` one before handing it to another owner.
    """

    def __init__(self, pairs_to_import: Mapping[str, str] | None = None):
        # py3.7+ dicts already keep insertion order,
        # so one dict maintains both pairs and order.
        self.__kv: dict[str, str] = {}
        self.debug = False
        if pairs_to_import:
            self.update(pairs_to_import)

    @classmethod
    def from_hashmap(cls, orig: Mapping[str, str]) -> Self:
        """Order follows iteration of `orig`, whatever it is."""
        ret = cls()
        for k, v in orig.items():
            ret.set(k, v)
        return ret

    def __getitem__(self, key: str) -> str:
        return self.__kv[key]

    def __setitem__(self, key: str, value: str) -> None:
        if key in self.__kv:
            del self.__kv[key]
        self.__kv[key] = value

    def __delitem__(self, key: str) -> None:
        del self.__kv[key]

    def __contains__(self, key: object) -> bool:
        return key in self.__kv

    def __len__(self) -> int:
        return len(self.__kv)

    def __iter__(self) -> Iterator[str]:
        return iter(self.__kv)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PropertiesMap):
            return NotImplemented
        return self.equals(other)

    def __repr__(self) -> str:
        return 'PropertiesMap { .cnt = %d }' % len(self.__kv)

    def get(self, key: str, default: str = '') -> str:
        return self.__kv.get(key, default)

    def get_ok(self, key: str) -> tuple[str, bool]:
        """Get the value, along with whether the key exists at all."""
        if key in self.__kv:
            return self.__kv[key], True
        return '', False

    def set(self, key: str, value: str) -> None:
        self[key] = value

    def remove(self, key: str) -> None:
        self.__kv.pop(key, None)

    def size(self) -> int:
        return len(self.__kv)

    def contains_key(self, key: str) -> bool:
        return key in self.__kv

    def contains_value(self, value: str) -> bool:
        return value in self.__kv.values()

    def get_boolean(self, key: str) -> bool:
        return self.__kv.get(key) == 'true'

    def set_boolean(self, key: str, value: bool) -> None:
        self.set(key, 'true' if value else 'false')

    # snapshots, not views. caller may do whatever to them.
    def keys(self) -> list[str]:  # type: ignore[override]
        return list(self.__kv)

    def values(self) -> list[str]:  # type: ignore[override]
        return list(self.__kv.values())

    def as_dict(self) -> dict[str, str]:
        """Plain dict copy, for when the order doesn't matter."""
        return self.__kv.copy()

    def as_key_value_lines(self) -> list[str]:
        """`key=value` per key in order.

        Note `=` inside values is NOT escaped,
        the first `=` of each line is the delimiter when reading back.
        """
        return [f'{k}={v}' for k, v in self.__kv.items()]

    def clone(self) -> Self:
        return type(self)().merge(self)

    def merge(self, *sources: 'PropertiesMap') -> Self:
        """Merge `sources` into self one by one, latter overrides former."""
        for src in sources:
            for k, v in list(src.items()):
                self.set(k, v)
        return self

    def equals(self, other: 'PropertiesMap') -> bool:
        """Same pairs, regardless of the order."""
        return self.__kv == other.as_dict()

    def equals_with_order(self, other: 'PropertiesMap') -> bool:
        """Same pairs, inserted in the same order."""
        return self.keys() == other.keys() and self.equals(other)

    def expand_props_in_string(self, src: str) -> str:
        """Replace `{key}` markers in `src`. See `propsmap.expand`."""
        return expand_props(self, src)

    def debug_expand_props_in_string(self, src: str) -> str:
        return expand_props(self, src, debug=True)

    def is_property_missing_in_expand_props_in_string(
        self, prop: str, src: str
    ) -> bool:
        return is_property_missing(self, prop, src)

    def dump(self) -> str:
        """Literal-like representation, for debugging purposes."""
        ret = 'PropertiesMap({\n'
        for k, v in self.__kv.items():
            k = k.replace('"', '\\"')
            v = v.replace('"', '\\"')
            ret += f'  "{k}": "{v}",\n'
        return ret + '})'


def merge_maps_of_properties(
    target: dict[str, PropertiesMap],
    *sources: Mapping[str, PropertiesMap]
) -> dict[str, PropertiesMap]:
    """Merge map-of-maps (see `PropertiesMap.first_level_of()`) into `target`.

    Whole entries get replaced, the inner maps are NOT merged.
    """
    for src in sources:
        for k, v in src.items():
            target[k] = v
    return target
