from dataclasses import dataclass, field
from typing import Any, Tuple

# Benchmark defaults: 4 gaussian variables, 500 events per class
N_VARS = 4
N_EVENTS = 500
MODEL_DIR = "./models"


@dataclass
class MatrixConfig:
    """
    How the builder hands matrices to the backend.

    Attributes:
        missing: Value the backend treats as a missing entry
        attach_weights: Also attach the weight vector as the "weight" field.
                        Off by default, only labels are attached.
    """
    missing: float = float("nan")
    attach_weights: bool = False


@dataclass
class BenchmarkConfig:
    """
    Parameters of the training / testing benchmark grid.

    Signal events are drawn around +signal_mean and background events around
    background_mean, every variable with the same sigma.
    """
    n_vars: int = N_VARS
    n_events: int = N_EVENTS
    n_trees: Tuple[int, ...] = (2000, 1000, 400, 100)
    max_depths: Tuple[int, ...] = (10, 8, 6, 4, 2)
    signal_mean: float = 0.3
    background_mean: float = -0.3
    sigma: float = 0.5
    signal_seed: int = 100
    background_seed: int = 101
    test_seed: int = 102
    model_dir: str = MODEL_DIR
    matrix: MatrixConfig = field(default_factory=MatrixConfig)

    @classmethod
    def from_args(cls, args: Any) -> "BenchmarkConfig":
        """
        Factory: build a config from an argparse namespace.
        Options left unset on the command line keep their defaults.
        """
        overrides = {}
        if getattr(args, "vars", None) is not None:
            overrides["n_vars"] = args.vars
        if getattr(args, "events", None) is not None:
            overrides["n_events"] = args.events
        if getattr(args, "trees", None):
            overrides["n_trees"] = tuple(args.trees)
        if getattr(args, "depth", None):
            overrides["max_depths"] = tuple(args.depth)
        if getattr(args, "model_dir", None):
            overrides["model_dir"] = args.model_dir
        if getattr(args, "attach_weights", False):
            overrides["matrix"] = MatrixConfig(attach_weights=True)
        return cls(**overrides)

    def __post_init__(self):
        if self.n_vars <= 0:
            raise ValueError("n_vars must be positive")
        if self.n_events <= 0:
            raise ValueError("n_events must be positive")
