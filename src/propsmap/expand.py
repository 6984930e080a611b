# -*- encoding: utf-8 -*-
# @File   : expand.py
# @Time   : 2024/11/03 16:40:12
# @Author : Kariko Lin

"""`{key}` placeholder expansion.

Values may refer to other keys, like build recipes do:

    ```properties
    compiler.path = {runtime.tools.gcc.path}/bin/
    recipe.c.o.pattern = "{compiler.path}gcc" -c {includes} "{source_file}"
    ```

so the expansion runs in passes until nothing changes any more,
but no more than `MAX_PASSES` times. A cyclic reference just stays
in the output as a literal marker.
"""

import logging
from re import compile as regex
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .model import PropertiesMap

__all__ = ['expand_props', 'is_property_missing', 'delete_unexpanded_props']

MAX_PASSES = 10
_PROBE_PREFIX = '__propsmap_probe_'
_UNEXPANDED = regex(r'\{.+?\}')

_log = logging.getLogger(__name__)


def expand_props(props: 'PropertiesMap', src: str, debug: bool = False) -> str:
    """Replace `{key}` markers in `src` with values of `props`.

    With `debug` (or `props.debug`) each pass and each substitution
    get logged.
    """
    debug = debug or props.debug
    kv = props.as_dict()
    for i in range(MAX_PASSES):
        if debug:
            _log.info('pass %d: %s', i, src)
        cur = src
        for key, value in kv.items():
            marker = '{%s}' % key
            if marker not in cur:
                continue
            if debug:
                _log.info('  Replacing %s -> %s', key, value)
            cur = cur.replace(marker, value)
        if cur == src:
            break
        src = cur
    return src


def _probe_token(props: 'PropertiesMap', src: str) -> str:
    # deterministic, yet collision-free against src, keys and values.
    n = len(src)
    while True:
        token = f'{_PROBE_PREFIX}{n}__'
        if (token not in src
                and not props.contains_key(token)
                and not props.contains_value(token)):
            return token
        n += 1


def is_property_missing(props: 'PropertiesMap', prop: str, src: str) -> bool:
    """Tell whether `prop` is needed, yet undefined, to expand `src`.

    `False` if `prop` is defined, or if `src` never reaches `{prop}`
    (even through other values). `props` itself is left untouched.
    """
    if props.contains_key(prop):
        return False

    probe = props.clone()
    token = _probe_token(probe, src)
    probe.set(prop, token)
    return token in expand_props(probe, src)


def delete_unexpanded_props(src: str) -> str:
    """Drop every `{xxx}` marker left over after expansion."""
    return _UNEXPANDED.sub('', src)
