import os

import pytest

from corpcov.data import (ConfigurationError, SourceCorpus, chars_per_line, corpus_summary, load_corpus,
                          load_profanity, load_sources, load_stopwords)


def test_load_corpus_strips_nul(tmp_path):
    path = tmp_path / 'en_US.blogs.txt'
    path.write_bytes(b'first\x00 line\nsecond line\n\nlast')
    corpus = load_corpus(str(path))
    assert corpus.name == 'en_US.blogs'
    assert corpus.lines == ['first line', 'second line', '', 'last']
    assert corpus.size_bytes == os.path.getsize(path)


def test_load_sources(tmp_path):
    for name in ('blogs', 'news'):
        (tmp_path / f'en_US.{name}.txt').write_text(f'{name} text\n', encoding='utf-8')
    corpora = load_sources(str(tmp_path), ['blogs', 'news'])
    assert [c.name for c in corpora] == ['blogs', 'news']
    assert corpora[1].lines == ['news text']


def test_profanity_list(tmp_path):
    path = tmp_path / 'swear.csv'
    path.write_text('Damn\nbloody hell\n', encoding='utf-8')
    assert load_profanity(str(path)) == frozenset({'damn', 'bloody', 'hell'})


def test_missing_resources_are_fatal(tmp_path):
    with pytest.raises(ConfigurationError):
        load_profanity(str(tmp_path / 'nope.csv'))
    empty = tmp_path / 'empty.txt'
    empty.write_text('\n\n', encoding='utf-8')
    with pytest.raises(ConfigurationError):
        load_stopwords(str(empty))


def test_stopwords_from_file(tmp_path):
    path = tmp_path / 'stop.txt'
    path.write_text('The\nand\n', encoding='utf-8')
    assert load_stopwords(str(path)) == frozenset({'the', 'and'})


def test_corpus_summary():
    corpora = [
        SourceCorpus('blogs', ['one two three', 'four'], size_bytes=3 * 2 ** 20),
        SourceCorpus('news', ['five six'], size_bytes=2 ** 20),
    ]
    df = corpus_summary(corpora)
    assert df['source'].tolist() == ['blogs', 'news']
    assert df['lines'].tolist() == [2, 1]
    assert df['n_char'].tolist() == [17, 8]
    assert df['n_words'].tolist() == [4, 2]
    assert df['size_mb'].tolist() == [3.0, 1.0]
    assert df['pct_lines'].tolist() == [0.67, 0.33]
    assert df['pct_words'].tolist() == [0.67, 0.33]


def test_chars_per_line():
    df = chars_per_line([SourceCorpus('a', ['xy', '']), SourceCorpus('b', ['xyz'])])
    assert df.values.tolist() == [['a', 2], ['a', 0], ['b', 3]]
