import argparse
import os
from typing import List, Optional

from .data import DEFAULT_SOURCES, PROFANITY_FILE, chars_per_line, load_profanity, load_sources, load_stopwords
from .log import setup_logger
from .pipeline import PipelineConfig, run_pipeline, save_results
from .sampling import DEFAULT_FRACTION, DEFAULT_SEED

"""
Corpus coverage runner:
- Load each source file and the stopword / profanity lists
- Sample, clean and tokenize into words, bigrams, trigrams and quadgrams
- Count tokens and cut each population at its coverage thresholds
- Write the summary, coverage tables and charts
"""


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Word and n-gram coverage analysis of a multi-source text corpus')
    ap.add_argument('--data-dir', default='data/final/en_US', help='Directory holding the source files')
    ap.add_argument('--sources', nargs='+', default=list(DEFAULT_SOURCES), help='Source names to load')
    ap.add_argument('--profanity', default=None, help=f'Profanity list (default: <data-dir>/{PROFANITY_FILE})')
    ap.add_argument('--stopwords', default=None, help='Stopword list; the NLTK English list when omitted')
    ap.add_argument('--sample-fraction', type=float, default=DEFAULT_FRACTION)
    ap.add_argument('--seed', type=int, default=DEFAULT_SEED)
    ap.add_argument('--workers', type=int, default=1, help='Processes used for the per-granularity counts')
    ap.add_argument('--out-dir', default='clean_repos')
    ap.add_argument('--no-plots', action='store_true')
    return ap


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    logger = setup_logger()

    stopwords = load_stopwords(args.stopwords)
    profanity = load_profanity(args.profanity or os.path.join(args.data_dir, PROFANITY_FILE))
    corpora = load_sources(args.data_dir, args.sources)

    config = PipelineConfig(sample_fraction=args.sample_fraction, seed=args.seed, workers=args.workers)
    result = run_pipeline(corpora, stopwords, profanity, config)
    logger.info('%d distinct words after filtering', result.distinct_words)

    paths = save_results(result, args.out_dir)
    if not args.no_plots:
        import matplotlib
        matplotlib.use('Agg')
        from .viz import plot_chars_per_line, plot_source_proportions, plot_top_tokens
        plot_dir = os.path.join(args.out_dir, 'plots')
        paths.append(plot_chars_per_line(plot_dir, chars_per_line(corpora)))
        for key, cs in result.coverage_sets().items():
            if cs.size:
                paths.append(plot_top_tokens(plot_dir, cs, picname=key, title=key.replace('_', ' ')))
        if not result.word_proportions.empty:
            paths.append(plot_source_proportions(plot_dir, result.word_proportions))
    print('Artifacts saved:', *paths, sep='\n  ')


if __name__ == '__main__':
    main()
