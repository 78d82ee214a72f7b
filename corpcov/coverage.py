import logging
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Tuple

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

TABLE_COLUMNS = ['token', 'n', 'proportion', 'coverage']
# proportion first, then count, then token text so equal counts never depend on hash order
SORT_KEYS = ['proportion', 'n', 'token']
SORT_ASCENDING = [False, False, True]


def count_tokens(tokens: Iterable[str]) -> Counter:
    return Counter(tokens)


def merge_counts(parts: Iterable[Mapping[str, int]]) -> Counter:
    """Merge counts computed over separate partitions of one population."""
    total: Counter = Counter()
    for part in parts:
        total.update(part)
    return total


def _empty_table() -> pd.DataFrame:
    return pd.DataFrame({
        'token': pd.Series([], dtype=object),
        'n': pd.Series([], dtype=np.int64),
        'proportion': pd.Series([], dtype=np.float64),
        'coverage': pd.Series([], dtype=np.float64),
    })


def rank_counts(counts: Mapping[str, int]) -> pd.DataFrame:
    """Full ranking of a count mapping with proportions and running coverage."""
    if not counts:
        return _empty_table()
    df = pd.DataFrame({
        'token': pd.Series(list(counts.keys()), dtype=object),
        'n': np.fromiter(counts.values(), dtype=np.int64, count=len(counts)),
    })
    total = int(df['n'].sum())
    df['proportion'] = df['n'] / total
    df = df.sort_values(SORT_KEYS, ascending=SORT_ASCENDING).reset_index(drop=True)
    # np.cumsum adds strictly left to right, in rank order
    df['coverage'] = np.cumsum(df['proportion'].to_numpy())
    return df[TABLE_COLUMNS]


def prefix_size(coverage: np.ndarray, threshold: float) -> int:
    """Length of the longest prefix whose cumulative proportion is <= threshold."""
    if threshold >= 1.0:
        return len(coverage)
    return int(np.searchsorted(coverage, threshold, side='right'))


@dataclass(frozen=True, eq=False)
class CoverageSet:
    threshold: float
    table: pd.DataFrame
    total: int
    distinct: int

    @property
    def size(self) -> int:
        return len(self.table)

    def records(self) -> List[Tuple[str, int, float, float]]:
        return [(t, int(n), float(p), float(c)) for t, n, p, c in self.table[TABLE_COLUMNS].itertuples(index=False)]

    def tokens(self) -> List[str]:
        return self.table['token'].tolist()

    def top(self, k: int = 20) -> pd.DataFrame:
        return self.table.head(k)

    def split_tokens(self, n: int) -> pd.DataFrame:
        """Spread n-gram tokens over word1..wordN columns.

        Tokens with fewer than n words are padded with NaN on the right.
        """
        cols = [f'word{i + 1}' for i in range(n)]
        if self.table.empty:
            parts = pd.DataFrame(columns=cols)
        else:
            parts = self.table['token'].str.split(' ', n=n - 1, expand=True)
            parts = parts.reindex(columns=range(n))
            parts.columns = cols
        return pd.concat([parts, self.table.drop(columns=['token'])], axis=1)


class FrequencyTable:
    """Counts of one token population, ranked once and read many times."""

    def __init__(self, counts: Mapping[str, int]):
        self.table = rank_counts(counts)
        self.total = int(self.table['n'].sum())

    @classmethod
    def from_tokens(cls, tokens: Iterable[str]) -> 'FrequencyTable':
        return cls(count_tokens(tokens))

    def __len__(self) -> int:
        return len(self.table)

    @property
    def mass(self) -> float:
        return float(self.table['proportion'].sum())

    def coverage(self, threshold: float) -> CoverageSet:
        k = prefix_size(self.table['coverage'].to_numpy(), threshold)
        kept = self.table.iloc[:k].reset_index(drop=True)
        logger.debug('coverage %.2f kept %d of %d tokens', threshold, k, len(self.table))
        return CoverageSet(threshold=threshold, table=kept, total=self.total, distinct=len(self.table))


def coverage_set(tokens: Iterable[str], threshold: float) -> CoverageSet:
    return FrequencyTable.from_tokens(tokens).coverage(threshold)


def source_proportions(tokens_by_source: Mapping[str, Iterable[str]]) -> pd.DataFrame:
    """Token proportions computed within each source separately."""
    frames = []
    for source, tokens in tokens_by_source.items():
        counts = count_tokens(tokens)
        if not counts:
            continue
        df = pd.DataFrame({'token': list(counts.keys()), 'n': list(counts.values())})
        df['proportion'] = df['n'] / df['n'].sum()
        df.insert(0, 'source', source)
        frames.append(df)
    if not frames:
        return pd.DataFrame(columns=['source', 'token', 'n', 'proportion'])
    out = pd.concat(frames, ignore_index=True)
    out = out.sort_values(['proportion', 'n', 'source', 'token'], ascending=[False, False, True, True])
    return out.reset_index(drop=True)


def coverage_sizes(sets: Dict[str, CoverageSet]) -> Dict[str, int]:
    return {name: cs.size for name, cs in sets.items()}
