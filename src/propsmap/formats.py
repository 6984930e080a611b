# -*- encoding: utf-8 -*-
# @File   : formats.py
# @Time   : 2024/11/05 22:41:18
# @Author : Kariko Lin

"""JSON & YAML import/export of `PropertiesMap`.

Both are *flat* documents, one `"key": "value"` pair per property,
in the map's order. Nested objects are not taken as hierarchy,
use dotted keys instead.
"""

import json
import warnings
from typing import Any, Mapping

import yaml

from .abstract import FileHandler
from .model import PropertiesMap

__all__ = ['PropertiesJsonHandler', 'PropertiesYamlHandler']


def _to_props(src: Mapping[str, Any] | None, fn: str) -> PropertiesMap:
    ret = PropertiesMap()
    if src is None:  # empty yaml doc
        return ret
    if not isinstance(src, Mapping):
        raise TypeError(f'{fn}: top level should be a mapping.')
    for k, v in src.items():
        if isinstance(v, (dict, list)):
            raise TypeError(f'{fn}: value of "{k}" is not a scalar.')
        if v is None:
            v = ''
        elif isinstance(v, bool):  # or str(True) gives 'True'
            v = 'true' if v else 'false'
        elif not isinstance(v, str):
            warnings.warn(f'{fn}: value of "{k}" ({v!r}) is taken as string.')
            v = str(v)
        ret.set(str(k), v)
    return ret


class PropertiesJsonHandler(FileHandler[PropertiesMap]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> PropertiesMap:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _to_props(json.load(fp), self._fn)

    def write(self, instance: PropertiesMap, indent: int = 2) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            json.dump(dict(instance.items()), fp,
                      ensure_ascii=False, indent=indent)


class PropertiesYamlHandler(FileHandler[PropertiesMap]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename, encoding)

    def read(self) -> PropertiesMap:
        with open(self._fn, 'r', encoding=self._codec) as fp:
            return _to_props(yaml.safe_load(fp), self._fn)

    def write(self, instance: PropertiesMap) -> None:
        with open(self._fn, 'w', encoding=self._codec) as fp:
            yaml.safe_dump(dict(instance.items()), fp,
                           allow_unicode=True, sort_keys=False)
