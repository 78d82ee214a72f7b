# Word and n-gram coverage analysis of a multi-source English text corpus.
# Cleans and samples each source, tokenizes into words and 2/3/4-grams, counts
# frequencies and finds the smallest token sets covering 50% / 90% of the mass.

from .preprocess import clean_text
from .sampling import sample_sources
from .tokens import NGramSequence, TokenStream, filter_tokens, ngrams
from .coverage import CoverageSet, FrequencyTable, coverage_set
from .data import ConfigurationError, SourceCorpus, corpus_summary, load_profanity, load_stopwords
from .pipeline import PipelineConfig, run_pipeline
