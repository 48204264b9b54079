"""Word tokenization for news text.

Tokens are runs of Unicode letters, lowercased. Everything else
(whitespace, punctuation, digits, underscores) separates tokens, so
``"Hello, World!"`` becomes ``["hello", "world"]`` and ``"G8 summit"``
becomes ``["g", "summit"]``.

Tokenization is lazy: ``tokenize`` is a generator that scans the text
on demand, and ``Tokens`` wraps a string as a restartable iterable.
"""

from __future__ import annotations

import re
from collections.abc import Iterator

# Letters only: \w minus digits and underscore
_WORD_RE = re.compile(r"[^\W\d_]+")


def tokenize(text: str) -> Iterator[str]:
    """Yield lowercase word tokens from text, left to right."""
    for match in _WORD_RE.finditer(text):
        yield match.group().lower()


class Tokens:
    """Restartable token sequence over a piece of text.

    Each call to ``iter()`` rescans the text, so the sequence can be
    consumed any number of times without materializing it.

    Example::

        words = Tokens("Oil prices rise; oil stocks fall")
        list(words)   # ['oil', 'prices', 'rise', 'oil', 'stocks', 'fall']
        len(words)    # 6
    """

    __slots__ = ("_text",)

    def __init__(self, text: str) -> None:
        self._text = text

    def __iter__(self) -> Iterator[str]:
        return tokenize(self._text)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        preview = self._text if len(self._text) <= 40 else self._text[:37] + "..."
        return f"Tokens({preview!r})"
