import json
import logging
import os
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import AbstractSet, Dict, List, Optional, Sequence, Tuple

import pandas as pd

from .coverage import CoverageSet, FrequencyTable, source_proportions
from .data import ConfigurationError, SourceCorpus, corpus_summary
from .preprocess import clean_series
from .sampling import DEFAULT_FRACTION, DEFAULT_SEED, sample_sources
from .tokens import TokenStream

logger = logging.getLogger(__name__)

GRANULARITY_NAMES = {1: 'word', 2: 'bigram', 3: 'trigram', 4: 'quadgram'}


def granularity_name(n: int) -> str:
    return GRANULARITY_NAMES.get(n, f'{n}gram')


@dataclass(frozen=True)
class Granularity:
    n: int
    thresholds: Tuple[float, ...]
    filtered: bool = False

    @property
    def name(self) -> str:
        return granularity_name(self.n)


@dataclass
class PipelineConfig:
    sample_fraction: float = DEFAULT_FRACTION
    seed: int = DEFAULT_SEED
    word_thresholds: Tuple[float, ...] = (0.5, 0.9)
    ngram_sizes: Tuple[int, ...] = (2, 3, 4)
    ngram_threshold: float = 0.9
    lowercase: bool = True
    workers: int = 1

    def granularities(self) -> List[Granularity]:
        # only the word path goes through the stopword / profanity filter
        out = [Granularity(n=1, thresholds=tuple(self.word_thresholds), filtered=True)]
        out += [Granularity(n=n, thresholds=(self.ngram_threshold,)) for n in self.ngram_sizes]
        return out


@dataclass
class GranularityResult:
    granularity: Granularity
    table: FrequencyTable
    coverage: Dict[float, CoverageSet] = field(default_factory=dict)


@dataclass
class PipelineResult:
    config: PipelineConfig
    summary: pd.DataFrame
    sample: pd.DataFrame
    granularities: Dict[str, GranularityResult]
    word_proportions: pd.DataFrame

    @property
    def distinct_words(self) -> int:
        return len(self.granularities['word'].table)

    def coverage_sets(self) -> Dict[str, CoverageSet]:
        out = {}
        for name, res in self.granularities.items():
            for t, cs in res.coverage.items():
                out[f'{name}_cover_{round(t * 100):d}'] = cs
        return out

    def coverage_sizes(self) -> Dict[str, int]:
        return {key: cs.size for key, cs in self.coverage_sets().items()}


def analyze_granularity(texts: Sequence[str], granularity: Granularity, lowercase: bool = True,
                        stopwords: Optional[AbstractSet[str]] = None,
                        profanity: Optional[AbstractSet[str]] = None) -> GranularityResult:
    """Count one token population and cut it at each of its thresholds."""
    if granularity.filtered:
        stream = TokenStream(texts, n=granularity.n, lowercase=lowercase,
                             stopwords=stopwords or frozenset(), profanity=profanity or frozenset())
    else:
        stream = TokenStream(texts, n=granularity.n, lowercase=lowercase)
    table = FrequencyTable.from_tokens(stream)
    result = GranularityResult(granularity=granularity, table=table)
    for t in granularity.thresholds:
        result.coverage[t] = table.coverage(t)
        logger.info('%s: %d of %d distinct tokens reach %.0f%% coverage',
                    granularity.name, result.coverage[t].size, len(table), t * 100)
    return result


def clean_sample(corpora: Sequence[SourceCorpus], config: PipelineConfig) -> pd.DataFrame:
    sample = sample_sources({c.name: c.lines for c in corpora}, config.sample_fraction, config.seed)
    sample['text'] = clean_series(sample['text'])
    return sample


def run_pipeline(corpora: Sequence[SourceCorpus], stopwords: AbstractSet[str], profanity: AbstractSet[str],
                 config: Optional[PipelineConfig] = None) -> PipelineResult:
    if stopwords is None or profanity is None:
        raise ConfigurationError('stopword and profanity sets are required')
    config = config or PipelineConfig()
    summary = corpus_summary(corpora)
    sample = clean_sample(corpora, config)
    texts = sample['text'].tolist()
    grans = config.granularities()

    if config.workers > 1:
        with ProcessPoolExecutor(max_workers=config.workers) as pool:
            futures = [pool.submit(analyze_granularity, texts, g, config.lowercase, stopwords, profanity)
                       for g in grans]
            results = [f.result() for f in futures]
    else:
        results = [analyze_granularity(texts, g, config.lowercase, stopwords, profanity) for g in grans]

    by_source = {
        str(src): TokenStream(grp['text'], n=1, lowercase=config.lowercase,
                              stopwords=stopwords, profanity=profanity)
        for src, grp in sample.groupby('source', observed=True, sort=False)
    }
    return PipelineResult(
        config=config,
        summary=summary,
        sample=sample,
        granularities={r.granularity.name: r for r in results},
        word_proportions=source_proportions(by_source),
    )


def save_results(result: PipelineResult, out_dir: str) -> List[str]:
    os.makedirs(out_dir, exist_ok=True)
    paths = []
    summary_path = os.path.join(out_dir, 'repo_summary.csv')
    result.summary.to_csv(summary_path, index=False)
    paths.append(summary_path)
    for key, cs in result.coverage_sets().items():
        path = os.path.join(out_dir, f'{key}.csv')
        cs.table.to_csv(path, index=False)
        paths.append(path)
    sizes_path = os.path.join(out_dir, 'coverage_sizes.json')
    payload = {
        'distinct_words': result.distinct_words,
        'sample_rows': int(len(result.sample)),
        'coverage_sizes': result.coverage_sizes(),
    }
    with open(sizes_path, 'w', encoding='utf-8') as fh:
        json.dump(payload, fh, ensure_ascii=False, indent=2)
    paths.append(sizes_path)
    return paths
