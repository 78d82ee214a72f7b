import logging
import math
from typing import Dict, List, Sequence

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_SEED = 1001
DEFAULT_FRACTION = 0.1


def sample_size(n_rows: int, fraction: float) -> int:
    if not 0.0 < fraction <= 1.0:
        raise ValueError(f'sampling fraction must be in (0, 1], got {fraction}')
    return int(math.floor(n_rows * fraction))


def sample_lines(lines: Sequence[str], fraction: float, rng: np.random.Generator) -> List[str]:
    """Draw floor(len(lines) * fraction) lines without replacement."""
    k = sample_size(len(lines), fraction)
    if k == 0:
        return []
    idx = rng.choice(len(lines), size=k, replace=False)
    return [lines[i] for i in idx]


def sample_sources(sources: Dict[str, Sequence[str]], fraction: float = DEFAULT_FRACTION,
                   seed: int = DEFAULT_SEED) -> pd.DataFrame:
    """Sample every source on its own, then stack the samples with a source tag.

    One generator seeded with `seed` is consumed source by source in the
    mapping's order, so the same inputs always give the same rows.
    Returns a DataFrame with columns `text` and `source` (categorical).
    """
    rng = np.random.default_rng(seed)
    frames = []
    for name, lines in sources.items():
        picked = sample_lines(lines, fraction, rng)
        logger.info('sampled %d of %d lines from %s', len(picked), len(lines), name)
        frames.append(pd.DataFrame({'text': pd.Series(picked, dtype=object), 'source': name}))
    names = list(sources.keys())
    if frames:
        sample = pd.concat(frames, ignore_index=True)
    else:
        sample = pd.DataFrame({'text': pd.Series([], dtype=object), 'source': pd.Series([], dtype=object)})
    sample['source'] = pd.Categorical(sample['source'], categories=names)
    return sample
