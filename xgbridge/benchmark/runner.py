"""
BenchmarkRunner: time xgboost training and prediction over a parameter grid.

Training uses a synthetic split source (signal and background tables); testing
loads the saved model and scores the testing split of a synthetic tagged
source.
"""
from __future__ import annotations

import itertools
import os
import time
from dataclasses import dataclass
from typing import List, Optional

from tqdm import tqdm

from xgbridge.backend import NumericBackend, default_backend
from xgbridge.config import BenchmarkConfig
from xgbridge.data.builder import MatrixBuilder
from xgbridge.data.sources import Split
from xgbridge.data.synthetic import generate_split_source, generate_tagged_source, variable_names
from xgbridge.training.predict import predict
from xgbridge.training.trainer import Trainer
from xgbridge.util.logger import logger


@dataclass
class BenchmarkResult:
    """Results from a single benchmark run."""
    mode: str  # "training" or "testing"
    n_trees: int
    max_depth: int
    n_rows: int
    elapsed_s: float
    model_path: str

    def to_dict(self) -> dict:
        return {
            "mode": self.mode,
            "n_trees": self.n_trees,
            "max_depth": self.max_depth,
            "n_rows": self.n_rows,
            "elapsed_s": round(self.elapsed_s, 4),
            "model_path": self.model_path,
        }


class BenchmarkRunner:
    """
    Runs the BDT training / testing benchmark.

    Each training run builds one matrix, trains ``n_trees`` rounds with the
    given ``max_depth``, saves the model and releases the matrix.
    """

    def __init__(self, config: Optional[BenchmarkConfig] = None, backend: Optional[NumericBackend] = None):
        self.config = config or BenchmarkConfig()
        self.backend = backend or default_backend()
        self.builder = MatrixBuilder(backend=self.backend, config=self.config.matrix)
        self.trainer = Trainer()

    def model_path(self, n_trees: int, max_depth: int) -> str:
        return os.path.join(self.config.model_dir, f"BDT_{n_trees}_{max_depth}.model")

    def run_training(self, n_trees: int, max_depth: int) -> BenchmarkResult:
        cfg = self.config
        source = generate_split_source(
            cfg.n_events,
            cfg.n_vars,
            signal_mean=cfg.signal_mean,
            background_mean=cfg.background_mean,
            sigma=cfg.sigma,
            signal_seed=cfg.signal_seed,
            background_seed=cfg.background_seed,
        )
        path = self.model_path(n_trees, max_depth)
        os.makedirs(cfg.model_dir, exist_ok=True)

        with self.builder.build(source, variable_names(cfg.n_vars)) as matrix:
            start = time.perf_counter()
            model = self.trainer.train(matrix, {"max_depth": max_depth}, n_trees)
            elapsed = time.perf_counter() - start
            n_rows = matrix.n_rows

        self.backend.save_model(model, path)
        logger.info(f"Training {n_trees} trees / depth {max_depth}: {elapsed:.3f}s -> {path}")
        return BenchmarkResult("training", n_trees, max_depth, n_rows, elapsed, path)

    def run_testing(self, n_trees: int, max_depth: int) -> BenchmarkResult:
        cfg = self.config
        path = self.model_path(n_trees, max_depth)
        if not os.path.exists(path):
            raise FileNotFoundError(f"Model not found: {path} (run training first)")

        model = self.backend.load_model(path)
        # n_events // 2 per class, so n_events testing rows in total
        n_test = max(cfg.n_events // 2, 1)
        source = generate_tagged_source(
            n_train=1,
            n_test=n_test,
            n_vars=cfg.n_vars,
            signal_mean=cfg.signal_mean,
            background_mean=cfg.background_mean,
            sigma=cfg.sigma,
            seed=cfg.test_seed,
        )

        with self.builder.build(source, split=Split.TESTING) as matrix:
            start = time.perf_counter()
            scores = predict(model, matrix, backend=self.backend)
            elapsed = time.perf_counter() - start

        logger.info(f"Testing {n_trees} trees / depth {max_depth}: {len(scores)} rows in {elapsed:.3f}s")
        return BenchmarkResult("testing", n_trees, max_depth, len(scores), elapsed, path)

    def run_grid(self) -> List[BenchmarkResult]:
        """Train then test every (n_trees, max_depth) combination."""
        grid = list(itertools.product(self.config.n_trees, self.config.max_depths))
        results: List[BenchmarkResult] = []

        for n_trees, max_depth in tqdm(grid, desc="Training"):
            results.append(self.run_training(n_trees, max_depth))

        for n_trees, max_depth in tqdm(grid, desc="Testing"):
            results.append(self.run_testing(n_trees, max_depth))

        return results
