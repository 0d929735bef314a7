"""
Synthetic gaussian event tables for benchmarks and tests.

Variables are named var0..var{n-1}; every value is drawn from N(mean, sigma)
with a seeded generator so repeated runs see identical data.
"""
from __future__ import annotations

import numpy as np
import pandas as pd

from xgbridge.data.sources import ColumnTable, EventClass, Split, SplitSource, TaggedSource


def variable_names(n_vars: int) -> list:
    return [f"var{i}" for i in range(n_vars)]


def generate_frame(n_events: int, n_vars: int, mean: float, sigma: float, seed: int) -> pd.DataFrame:
    rng = np.random.default_rng(seed)
    data = rng.normal(loc=mean, scale=sigma, size=(n_events, n_vars)).astype(np.float32)
    return pd.DataFrame(data, columns=variable_names(n_vars))


def generate_table(n_events: int, n_vars: int, mean: float, sigma: float, seed: int) -> ColumnTable:
    """One table of ``n_events`` rows and ``n_vars`` gaussian columns."""
    return ColumnTable(generate_frame(n_events, n_vars, mean, sigma, seed))


def generate_split_source(
        n_events: int,
        n_vars: int,
        signal_mean: float = 0.3,
        background_mean: float = -0.3,
        sigma: float = 0.5,
        signal_seed: int = 100,
        background_seed: int = 101,
) -> SplitSource:
    """Signal and background tables of ``n_events`` rows each."""
    return SplitSource(
        signal=generate_table(n_events, n_vars, signal_mean, sigma, signal_seed),
        background=generate_table(n_events, n_vars, background_mean, sigma, background_seed),
    )


def generate_tagged_source(
        n_train: int,
        n_test: int,
        n_vars: int,
        signal_mean: float = 0.3,
        background_mean: float = -0.3,
        sigma: float = 0.5,
        seed: int = 102,
) -> TaggedSource:
    """
    Mixed table with ``n_train`` training and ``n_test`` testing events per class.

    Training rows come first, then testing rows (block split). Within each block
    signal and background rows alternate, starting with signal.
    """
    rng = np.random.default_rng(seed)
    columns = variable_names(n_vars)
    blocks = []

    for split, n_events in ((Split.TRAINING, n_train), (Split.TESTING, n_test)):
        sig = rng.normal(signal_mean, sigma, size=(n_events, n_vars))
        bgd = rng.normal(background_mean, sigma, size=(n_events, n_vars))

        mixed = np.empty((2 * n_events, n_vars), dtype=np.float32)
        mixed[0::2] = sig
        mixed[1::2] = bgd

        block = pd.DataFrame(mixed, columns=columns)
        block["class"] = [EventClass.SIGNAL.value, EventClass.BACKGROUND.value] * n_events
        block["split"] = split.value
        block["weight"] = 1.0
        blocks.append(block)

    frame = pd.concat(blocks, ignore_index=True)
    return TaggedSource(table=ColumnTable(frame), variables=columns)
