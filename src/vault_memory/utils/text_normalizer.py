"""
Diacritic-insensitive text normalization for mixed Vietnamese/English memories.

Both functions are pure. normalize() folds text to lowercase with combining
marks removed, so "Phở bò" and "pho bo" compare equal. tokenize() splits the
normalized text on whitespace and Unicode punctuation.
"""

import unicodedata
from typing import List

# Letters that carry a stroke rather than a combining mark, so NFD leaves them alone.
_STROKE_LETTERS = str.maketrans({"đ": "d", "Đ": "d"})


def normalize(text: str) -> str:
    """
    Fold text to a diacritic-insensitive lowercase form.

    Lowercases, applies canonical decomposition (NFD), then drops combining
    marks. Idempotent: normalize(normalize(t)) == normalize(t).

    Example:
        >>> normalize("Tôi thích Đà Lạt")
        'toi thich da lat'
    """
    decomposed = unicodedata.normalize("NFD", text.translate(_STROKE_LETTERS).lower())
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def _is_separator(ch: str) -> bool:
    return ch.isspace() or unicodedata.category(ch).startswith("P")


def tokenize(text: str) -> List[str]:
    """
    Split normalized text into tokens on whitespace and punctuation.

    Empty tokens are dropped.

    Example:
        >>> tokenize("Cà phê, sữa đá!")
        ['ca', 'phe', 'sua', 'da']
    """
    tokens: List[str] = []
    current: List[str] = []
    for ch in normalize(text):
        if _is_separator(ch):
            if current:
                tokens.append("".join(current))
                current = []
        else:
            current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens
