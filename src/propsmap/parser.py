# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/11/04 01:27:05
# @Author : Kariko Lin

"""`key=value` properties file IO.

Lines are like:

    ```properties
    # comment lines (and blank ones) are skipped.
    name = Arduino Uno
    tools.avrdude.path = {runtime.tools.avrdude.path}
    tools.avrdude.path.windows = C:/avrdude
    ```

Platform specific keys, like the `.windows` one above, collapse onto the
plain key when parsing *on that platform*. Which platform is meant is up to
the `os_suffix` argument, default to the running one.

Files are expected in UTF-8. If not, we would guess with `chardet`,
and finally fallback to ISO-8859-1 as legacy Arduino cores have done.
"""

import logging
import sys
from os.path import exists
from typing import Iterable

import chardet

from .abstract import FileHandler
from .model import PropertiesMap

__all__ = [
    'InvalidPropertiesLine', 'PropertiesParser',
    'current_os_suffix', 'parse_line', 'decode_bytes',
    'load_from_lines', 'load_from_bytes', 'load', 'safe_load'
]

_log = logging.getLogger(__name__)


class InvalidPropertiesLine(Exception):
    """A line which is not a comment, yet holds no `=`."""

    def __init__(self, index: int, line: str) -> None:
        super().__init__(
            f"error parsing line {index}: "
            f"invalid line format, should be 'key=value': {line!r}")
        self.index = index
        self.line = line


def current_os_suffix() -> str:
    match sys.platform:
        case 'darwin':
            return 'macosx'
        case 'win32' | 'cygwin':
            return 'windows'
        case p if p.startswith('linux'):
            return 'linux'
        case p:
            return p


def parse_line(
    props: PropertiesMap, line: str, os_suffix: str | None = None
) -> bool:
    """Parse one line into `props`.

    Returns `False` for a line that's skipped (blank or comment),
    or raise `ValueError` for a line without `=`.
    """
    line = line.strip()
    if not line or line[0] == '#':
        return False
    if '=' not in line:
        raise ValueError(line)

    key, val = line.split('=', 1)
    if os_suffix is None:
        os_suffix = current_os_suffix()
    key = key.strip()
    if os_suffix:
        key = key.replace(f'.{os_suffix}', '', 1)
    props.set(key, val.strip())
    return True


def load_from_lines(
    lines: Iterable[str], os_suffix: str | None = None
) -> PropertiesMap:
    """Make a map out of `lines`, all or nothing.

    Raises:
        InvalidPropertiesLine: with 0-based `index` of the first bad line.
    """
    if os_suffix is None:
        os_suffix = current_os_suffix()
    ret = PropertiesMap()
    for idx, line in enumerate(lines):
        try:
            parse_line(ret, line, os_suffix)
        except ValueError:
            raise InvalidPropertiesLine(idx, line) from None
    return ret


def decode_bytes(raw: bytes, fallback: str = 'iso-8859-1') -> str:
    try:
        return raw.decode('utf-8')
    except UnicodeDecodeError:
        pass

    codec = chardet.detect(raw)
    if codec['encoding'] is not None and codec['confidence'] >= 0.8:
        try:
            buf = raw.decode(codec['encoding'])
            _log.debug('decoded as %s (confidence %.2f)',
                       codec['encoding'], codec['confidence'])
            return buf
        except (UnicodeDecodeError, LookupError):
            pass
    # every byte is a valid latin-1 char, never fails.
    _log.debug('not UTF-8, fallback to %s', fallback)
    return raw.decode(fallback)


def _split_lines(text: str) -> list[str]:
    return text.replace('\r\n', '\n').replace('\r', '\n').split('\n')


def load_from_bytes(raw: bytes, os_suffix: str | None = None) -> PropertiesMap:
    return load_from_lines(_split_lines(decode_bytes(raw)), os_suffix)


def load(path: str, os_suffix: str | None = None) -> PropertiesMap:
    return PropertiesParser(path, os_suffix=os_suffix).read()


def safe_load(path: str, os_suffix: str | None = None) -> PropertiesMap:
    """Like `load()`, but an empty map for a file that doesn't exist."""
    if not exists(path):
        _log.warning('%s not found, use empty properties instead.', path)
        return PropertiesMap()
    return load(path, os_suffix)


class PropertiesParser(FileHandler[PropertiesMap]):
    def __init__(
        self, filename: str, encoding: str | None = None, *,
        os_suffix: str | None = None
    ) -> None:
        """`encoding=None` means UTF-8, or guessing if not."""
        super().__init__(filename, encoding)
        self._os = os_suffix if os_suffix is not None else current_os_suffix()

    @property
    def os_suffix(self) -> str:
        return self._os

    def read(self) -> PropertiesMap:
        with open(self._fn, 'rb') as fp:
            raw = fp.read()
        text = (decode_bytes(raw) if self._codec is None
                else raw.decode(self._codec))
        return load_from_lines(_split_lines(text), self._os)

    def write(self, instance: PropertiesMap) -> None:
        with open(self._fn, 'w', encoding=self._codec or 'utf-8') as fp:
            for i in instance.as_key_value_lines():
                fp.write(f'{i}\n')

    def __str__(self) -> str:
        return f'properties: {super().__str__()} ({self._os})'
