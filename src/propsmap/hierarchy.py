# -*- encoding: utf-8 -*-
# @File   : hierarchy.py
# @Time   : 2024/11/03 14:08:51
# @Author : Kariko Lin

"""Dot-separated key hierarchy helpers.

Nothing models the tree explicitly. `a.b.c` is just a key, and the
"hierarchy" is whatever the methods below carve out of it on demand.
So a key may be a leaf and a prefix at the same time:

    ```properties
    root.lev1 = A
    root.lev1.prop = hi
    ```
"""

from typing import Self


def _is_digits(key: str) -> bool:
    # str.isdigit() also accepts things like '²'.
    return len(key) > 0 and all('0' <= c <= '9' for c in key)


class HierarchyMixin:
    """Read-only hierarchy queries for `PropertiesMap`.

    Every query builds *new* maps, so mutating a result never
    touches the source.
    """

    def sub_tree(self, root: str) -> Self:
        """Extract every `root.xxx` key as `xxx`, keeping their order.

        e.g. `{'uno.name': 'Uno', 'uno.upload.tool': 'avrdude'}`
        with `sub_tree('uno')` gives `{'name': 'Uno', 'upload.tool': 'avrdude'}`.
        """
        root += '.'
        ret = type(self)()
        for key in self:
            if key.startswith(root):
                ret.set(key[len(root):], self[key])
        return ret

    def first_level_of(self) -> dict[str, Self]:
        """Group keys by their first segment, i.e. a map-of-maps.

        Keys without any dot have nothing left after the first segment,
        thus they are skipped.
        """
        ret: dict[str, Self] = {}
        for key in self:
            if '.' not in key:
                continue
            first, rest = key.split('.', 1)
            if first not in ret:
                ret[first] = type(self)()
            ret[first].set(rest, self[key])
        return ret

    def first_level_keys(self) -> list[str]:
        """First segments of all keys, unique, in order of appearance."""
        ret: dict[str, None] = {}
        for key in self:
            ret.setdefault(key.split('.', 1)[0], None)
        return list(ret)

    def extract_sub_index_sets(self, root: str) -> list[Self]:
        """Like `sub_tree()`, but `root.N.xxx` are split into one map per N.

        Indices are probed from 0 upwards. Both 0 and 1 are always probed
        (lists may be 1-based), after that the first gap ends the scan.
        If there is no indexed subset at all, the whole `root` subtree
        is returned as the only element.
        """
        props = self.sub_tree(root)
        if not len(props):
            return []

        ret: list[Self] = []
        idx = 0
        while True:
            subset = props.sub_tree(str(idx))
            idx += 1
            if len(subset):
                ret.append(subset)
            elif idx > 1:
                break

        if not ret:
            ret.append(props)
        return ret

    def extract_sub_index_lists(self, root: str) -> list[str]:
        """Collect values of `root.N` in ascending N.

        Holes are allowed. `05` and `5` are the same index, and only the
        canonical spelling `5` gets read. Without any numeric child,
        fall back to the value of `root` itself (if any).
        """
        props = self.sub_tree(root)
        indexes = sorted(int(k) for k in props if _is_digits(k))

        ret: list[str] = []
        prev: int | None = None
        for idx in indexes:
            if idx == prev:
                continue
            prev = idx
            value, ok = props.get_ok(str(idx))
            if ok:
                ret.append(value)

        if not ret:
            value, ok = self.get_ok(root)
            if ok:
                ret.append(value)
        return ret
