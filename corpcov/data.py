import logging
import os
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_SOURCES = ('blogs', 'news', 'twitter')
SOURCE_FILE_PATTERN = 'en_US.{name}.txt'
PROFANITY_FILE = 'en_US.swearWords.csv'

_WORD_RE = re.compile(r'\w+')


class ConfigurationError(RuntimeError):
    """A resource the pipeline cannot run without is missing or unreadable."""


@dataclass
class SourceCorpus:
    name: str
    lines: List[str] = field(default_factory=list)
    size_bytes: int = 0

    def __len__(self) -> int:
        return len(self.lines)


def read_lines(path: str) -> List[str]:
    # null bytes are dropped, the way readLines(skipNul = TRUE) does
    with open(path, 'r', encoding='utf-8', errors='replace') as fh:
        return [line.rstrip('\r\n').replace('\x00', '') for line in fh]


def load_corpus(path: str, name: Optional[str] = None) -> SourceCorpus:
    if name is None:
        name = os.path.splitext(os.path.basename(path))[0]
    lines = read_lines(path)
    size = os.path.getsize(path)
    logger.info('loaded %s: %d lines, %.1f MB', name, len(lines), size / 2 ** 20)
    return SourceCorpus(name=name, lines=lines, size_bytes=size)


def load_sources(data_dir: str, names: Sequence[str] = DEFAULT_SOURCES,
                 pattern: str = SOURCE_FILE_PATTERN) -> List[SourceCorpus]:
    return [load_corpus(os.path.join(data_dir, pattern.format(name=name)), name=name) for name in names]


def _ensure_nltk():
    import nltk
    try:
        nltk.data.find('corpora/stopwords')
    except LookupError:
        nltk.download('stopwords', quiet=True)


def _words_from_lines(lines: Iterable[str]) -> FrozenSet[str]:
    words = set()
    for line in lines:
        words.update(_WORD_RE.findall(line.lower()))
    return frozenset(words)


def load_word_list(path: str) -> FrozenSet[str]:
    """Read a one-entry-per-line word list into a set of lowercase words."""
    if not os.path.isfile(path):
        raise ConfigurationError(f'word list not found: {path}')
    words = _words_from_lines(read_lines(path))
    if not words:
        raise ConfigurationError(f'word list is empty: {path}')
    return words


def load_stopwords(path: Optional[str] = None, language: str = 'english') -> FrozenSet[str]:
    """Stopwords from `path` if given, otherwise from the NLTK stopword corpus."""
    if path is not None:
        return load_word_list(path)
    try:
        _ensure_nltk()
        from nltk.corpus import stopwords
        words = stopwords.words(language)
    except (LookupError, OSError) as exc:
        raise ConfigurationError(f'NLTK stopwords for {language!r} are unavailable') from exc
    return frozenset(w.lower() for w in words)


def load_profanity(path: str) -> FrozenSet[str]:
    return load_word_list(path)


def corpus_summary(corpora: Sequence[SourceCorpus]) -> pd.DataFrame:
    """Per-source size, line, character and word totals with shares of the whole."""
    rows: List[Dict] = []
    for c in corpora:
        rows.append({
            'source': c.name,
            'size_bytes': int(c.size_bytes),
            'size_mb': c.size_bytes / 2 ** 20,
            'lines': len(c.lines),
            'n_char': sum(len(line) for line in c.lines),
            'n_words': sum(len(line.split()) for line in c.lines),
        })
    df = pd.DataFrame(rows, columns=['source', 'size_bytes', 'size_mb', 'lines', 'n_char', 'n_words'])
    for col, pct in (('n_char', 'pct_n_char'), ('lines', 'pct_lines'), ('n_words', 'pct_words')):
        total = df[col].sum()
        df[pct] = (df[col] / total).round(2) if total else 0.0
    return df


def chars_per_line(corpora: Sequence[SourceCorpus]) -> pd.DataFrame:
    """Long table of line lengths, one row per line, for distribution plots."""
    frames = [pd.DataFrame({'source': c.name, 'n_char': [len(line) for line in c.lines]}) for c in corpora]
    if not frames:
        return pd.DataFrame(columns=['source', 'n_char'])
    return pd.concat(frames, ignore_index=True)
