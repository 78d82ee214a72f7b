import os

import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns

from .coverage import CoverageSet

sns.set_style('whitegrid')


def plot_chars_per_line(output_dir: str, lengths: pd.DataFrame, picname: str = 'repo') -> str:
    """
    lengths: long table with `source` and `n_char` columns, one row per line
    """
    os.makedirs(output_dir, exist_ok=True)
    fig, ax = plt.subplots(figsize=(8, 6), dpi=150, constrained_layout=True)
    # log scale cannot show empty lines
    data = lengths[lengths['n_char'] > 0]
    sns.boxplot(data=data, x='source', y='n_char', ax=ax, color='#5178c6')
    ax.set_yscale('log')
    ax.set_xlabel('File Name')
    ax.set_ylabel('log(Number of Characters)')
    ax.set_title('Comparing Distributions of Characters per Line')
    out_path = os.path.join(output_dir, f'{picname}_chars_per_line.png')
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path


def plot_top_tokens(output_dir: str, cover: CoverageSet, picname: str, title: str, topn: int = 20) -> str:
    os.makedirs(output_dir, exist_ok=True)
    top = cover.top(topn).iloc[::-1]
    fig, ax = plt.subplots(figsize=(8, max(3, 0.3 * len(top) + 1)), dpi=150, constrained_layout=True)
    ax.barh(top['token'], top['proportion'], color='#509863')
    ax.set_xlabel('proportion')
    ax.set_title(title)
    out_path = os.path.join(output_dir, f'{picname}_top_{topn}.png')
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path


def plot_source_proportions(output_dir: str, proportions: pd.DataFrame, min_proportion: float = 0.002,
                            picname: str = 'word') -> str:
    os.makedirs(output_dir, exist_ok=True)
    data = proportions[proportions['proportion'] > min_proportion]
    sources = list(dict.fromkeys(data['source'])) or ['']
    fig, axes = plt.subplots(1, len(sources), figsize=(5 * len(sources), 8), dpi=150,
                             constrained_layout=True, squeeze=False)
    for ax, src in zip(axes[0], sources):
        sub = data[data['source'] == src].sort_values('proportion')
        ax.barh(sub['token'], sub['proportion'], color='#5178c6')
        ax.set_title(src)
    fig.suptitle('Word proportions by source', fontsize=14)
    out_path = os.path.join(output_dir, f'{picname}_by_source.png')
    plt.savefig(out_path, bbox_inches='tight')
    plt.close(fig)
    return out_path
