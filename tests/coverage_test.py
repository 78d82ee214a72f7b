from collections import Counter

import numpy as np
import pandas as pd

from corpcov.coverage import (FrequencyTable, count_tokens, coverage_set, merge_counts, rank_counts,
                              source_proportions)


def test_half_coverage_scenario():
    cs = coverage_set(['a', 'a', 'b', 'c'], 0.5)
    assert cs.records() == [('a', 2, 0.5, 0.5)]
    assert cs.size == 1
    assert cs.total == 4
    assert cs.distinct == 3


def test_full_ranking_breaks_ties_by_token():
    table = FrequencyTable({'c': 1, 'b': 2, 'a': 2, 'd': 1})
    assert table.table['token'].tolist() == ['a', 'b', 'c', 'd']
    assert table.table['n'].tolist() == [2, 2, 1, 1]


def test_empty_population():
    table = FrequencyTable.from_tokens([])
    assert len(table) == 0
    cs = table.coverage(0.9)
    assert cs.size == 0
    assert list(cs.table.columns) == ['token', 'n', 'proportion', 'coverage']


def test_degenerate_thresholds():
    table = FrequencyTable.from_tokens(list('abcdefghij'))
    # 0.1 summed ten times lands just under 1.0, the whole table is still returned
    assert table.coverage(1.0).size == 10
    assert table.coverage(1.5).size == 10
    assert table.coverage(0.0).size == 0
    assert table.coverage(-0.2).size == 0


def _random_counts(seed=7, size=500):
    rng = np.random.default_rng(seed)
    words = [f'w{i}' for i in range(size)]
    draws = rng.zipf(1.5, size=5000) % size
    return Counter(words[i] for i in draws)


def test_mass_conservation():
    table = FrequencyTable(_random_counts())
    assert abs(table.mass - 1.0) < 1e-9
    assert abs(table.table['coverage'].iloc[-1] - 1.0) < 1e-9


def test_threshold_boundary():
    table = FrequencyTable(_random_counts())
    cov = table.table['coverage'].to_numpy()
    for t in (0.1, 0.5, 0.9):
        k = table.coverage(t).size
        assert k < len(table)
        if k:
            assert cov[k - 1] <= t
        assert cov[k] > t


def test_ranking_is_non_increasing():
    df = rank_counts(_random_counts())
    assert (np.diff(df['proportion'].to_numpy()) <= 0).all()
    assert (np.diff(df['coverage'].to_numpy()) >= 0).all()


def test_monotone_in_threshold():
    table = FrequencyTable(_random_counts())
    prev = []
    for t in np.linspace(0.05, 1.0, 20):
        toks = table.coverage(float(t)).tokens()
        assert toks[:len(prev)] == prev
        prev = toks


def test_deterministic_regardless_of_input_order():
    tokens = ['x', 'y', 'y', 'z', 'x', 'w', 'z', 'z']
    a = FrequencyTable.from_tokens(tokens).coverage(0.9)
    b = FrequencyTable.from_tokens(list(reversed(tokens))).coverage(0.9)
    pd.testing.assert_frame_equal(a.table, b.table)


def test_partitioned_counts_merge():
    tokens = list('abracadabra')
    parts = [count_tokens(tokens[:4]), count_tokens(tokens[4:])]
    assert merge_counts(parts) == count_tokens(tokens)


def test_split_tokens():
    cs = coverage_set(['the cat sat on', 'the cat sat on', 'a dog ran off'], 1.0)
    split = cs.split_tokens(4)
    assert list(split.columns[:4]) == ['word1', 'word2', 'word3', 'word4']
    assert split.iloc[0][['word1', 'word4']].tolist() == ['the', 'on']
    assert split['n'].tolist() == [2, 1]


def test_split_tokens_pads_short_tokens():
    split = coverage_set(['a b', 'a b'], 1.0).split_tokens(4)
    assert list(split.columns[:4]) == ['word1', 'word2', 'word3', 'word4']
    assert split.iloc[0][['word1', 'word2']].tolist() == ['a', 'b']
    assert split[['word3', 'word4']].isna().all().all()


def test_coverage_set_equality_is_identity():
    cs = coverage_set(['a', 'a', 'b'], 0.9)
    other = coverage_set(['a', 'a', 'b'], 0.9)
    assert cs == cs
    assert cs != other
    assert len({cs, other}) == 2


def test_source_proportions():
    props = source_proportions({
        'blogs': ['cat', 'sat', 'cat', 'ran'],
        'news': ['dog', 'sat'],
    })
    assert props.iloc[0].tolist() == ['blogs', 'cat', 2, 0.5]
    assert props.groupby('source')['proportion'].sum().round(9).tolist() == [1.0, 1.0]
    assert props['token'].tolist() == ['cat', 'dog', 'sat', 'ran', 'sat']
