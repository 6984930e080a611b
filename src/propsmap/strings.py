# -*- encoding: utf-8 -*-
# @File   : strings.py
# @Time   : 2024/11/04 00:12:36
# @Author : Kariko Lin

__all__ = ['InvalidQuoting', 'split_quoted_string']


class InvalidQuoting(Exception):
    """An opening quote char that never gets closed.

    `tokens` keeps whatever was split before the broken quote.
    """

    def __init__(self, quote: str, tokens: list[str]) -> None:
        super().__init__(f'invalid quoting, no closing `{quote}` char found')
        self.quote = quote
        self.tokens = tokens


def split_quoted_string(
    src: str,
    quote_chars: str,
    accept_empty_arguments: bool = False
) -> list[str]:
    """Split `src` by spaces, while quoted parts stay as one element.

    e.g.

        >>> split_quoted_string('This \\'is an\\' "Hello World!" example', '\\'"')
        ['This', 'is an', 'Hello World!', 'example']

    A quoted part opens with any char of `quote_chars`,
    and closes with *the same* char. Escaping is not supported.

    Empty (or blank) elements are dropped,
    unless `accept_empty_arguments` is set.

    Raises:
        InvalidQuoting: if a quote is never closed.
    """
    ret: list[str] = []
    quote = ''
    quoted = ''

    def commit(arg: str) -> None:
        if accept_empty_arguments or arg.strip():
            ret.append(arg)

    for cur in src.split(' '):
        if not quote:
            # str is indexed by code point, no worry about multi-byte chars.
            if not cur or cur[0] not in quote_chars:
                commit(cur)
                continue
            quote, cur, quoted = cur[0], cur[1:], ''

        if not cur or cur[-1] != quote:
            quoted += cur + ' '
            continue

        commit(quoted + cur[:-1])
        quote = ''

    if quote:
        raise InvalidQuoting(quote, ret)
    return ret
