from typing import AbstractSet, Iterable, Iterator, List, Optional

SEPARATOR = ' '


class NGramSequence:
    """All contiguous n-word windows of one cleaned line.

    Words are split once; every iteration walks the windows again, so the
    sequence can be consumed any number of times.
    """

    def __init__(self, text: str, n: int = 1, lowercase: bool = False):
        if n < 1:
            raise ValueError(f'n must be >= 1, got {n}')
        if lowercase:
            text = text.lower()
        self.words = text.split()
        self.n = n

    def __len__(self) -> int:
        return max(0, len(self.words) - self.n + 1)

    def __iter__(self) -> Iterator[str]:
        n = self.n
        for i in range(len(self)):
            yield SEPARATOR.join(self.words[i:i + n])

    def __repr__(self) -> str:
        return f'NGramSequence(n={self.n}, words={len(self.words)})'


def ngrams(text: str, n: int = 1, lowercase: bool = False) -> NGramSequence:
    return NGramSequence(text, n=n, lowercase=lowercase)


def filter_tokens(tokens: Iterable[str], stopwords: AbstractSet[str],
                  profanity: AbstractSet[str]) -> Iterator[str]:
    """Drop tokens whose lowercase form is a stopword or a profane word."""
    for tok in tokens:
        key = tok.lower()
        if key in stopwords or key in profanity:
            continue
        yield tok


class TokenStream:
    """Tokens of a whole collection of cleaned lines, optionally filtered.

    Like NGramSequence this is restartable: iterating again re-walks the
    lines without cleaning them again.
    """

    def __init__(self, texts: Iterable[str], n: int = 1, lowercase: bool = False,
                 stopwords: Optional[AbstractSet[str]] = None,
                 profanity: Optional[AbstractSet[str]] = None):
        if n < 1:
            raise ValueError(f'n must be >= 1, got {n}')
        self.texts: List[str] = list(texts)
        self.n = n
        self.lowercase = lowercase
        self.stopwords = stopwords
        self.profanity = profanity

    @property
    def filtered(self) -> bool:
        return self.stopwords is not None or self.profanity is not None

    def __iter__(self) -> Iterator[str]:
        for text in self.texts:
            toks: Iterable[str] = NGramSequence(text, n=self.n, lowercase=self.lowercase)
            if self.filtered:
                toks = filter_tokens(toks, self.stopwords or frozenset(), self.profanity or frozenset())
            yield from toks
