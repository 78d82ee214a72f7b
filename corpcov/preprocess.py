import re
import string
import unicodedata

import pandas as pd

# Rewrites run in a fixed order: symbols, urls, repeated letters, transliteration.
# Steps 2 and 3 look at the transliterated form of each word so that step 4
# cannot bring back a url or a doubled letter.

URL_PREFIX = 'http'

_SYMBOL_RE = re.compile(r'(?:[^\w\s]|[\d_])+')
_REPEAT_RE = re.compile(r'(\w)\1')
_ASCII_LETTERS = frozenset(string.ascii_letters)

# Letters that NFKD leaves alone but ASCII//TRANSLIT knows how to spell
_TRANSLIT_TABLE = str.maketrans({
    'ß': 'ss', 'æ': 'ae', 'Æ': 'AE', 'œ': 'oe', 'Œ': 'OE',
    'ø': 'o', 'Ø': 'O', 'đ': 'd', 'Đ': 'D', 'ð': 'd', 'Ð': 'D',
    'ł': 'l', 'Ł': 'L', 'þ': 'th', 'Þ': 'TH', 'ı': 'i',
})


def transliterate(text: str) -> str:
    s = unicodedata.normalize('NFKD', text.translate(_TRANSLIT_TABLE))
    return ''.join(ch for ch in s if ch in _ASCII_LETTERS or ch.isspace())


def strip_symbols(text: str) -> str:
    # digits and underscore are word characters for the regex engine, so drop them explicitly
    return _SYMBOL_RE.sub('', text)


def strip_urls(text: str) -> str:
    return ' '.join(w for w in text.split() if not transliterate(w).startswith(URL_PREFIX))


def has_repeated_letter(word: str) -> bool:
    """True when any character occurs twice in a row anywhere in the word.

    This is a blunt heuristic: it catches "sooo" but also every ordinary
    word with a double letter ("book", "all", "letter"). That is the
    intended behavior and callers should not expect a softer filter.
    """
    return _REPEAT_RE.search(transliterate(word)) is not None


def strip_repeated_letters(text: str) -> str:
    return ' '.join(w for w in text.split() if not has_repeated_letter(w))


def clean_text(text: str) -> str:
    if not isinstance(text, str):
        return ''
    s = strip_symbols(text)
    s = strip_urls(s)
    s = strip_repeated_letters(s)
    words = (transliterate(w) for w in s.split())
    return ' '.join(w for w in words if w)


def clean_series(texts: pd.Series) -> pd.Series:
    return texts.map(clean_text)
