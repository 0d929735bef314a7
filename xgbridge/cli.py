import argparse
from typing import List, Optional

from xgbridge.benchmark import BenchmarkResult, BenchmarkRunner
from xgbridge.config import BenchmarkConfig


def print_results(results: List[BenchmarkResult]) -> None:
    """Print a formatted results table to the console."""
    print("\n" + "=" * 72)
    print(f"{'Mode':<10} | {'Trees':<6} | {'Depth':<5} | {'Rows':<6} | {'Seconds':<9} | Model")
    print("-" * 72)
    for r in results:
        print(f"{r.mode:<10} | {r.n_trees:<6} | {r.max_depth:<5} | {r.n_rows:<6} | {r.elapsed_s:<9.4f} | {r.model_path}")
    print("=" * 72 + "\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="BDT training / testing benchmark on xgboost")
    parser.add_argument(
        "mode",
        choices=["train", "test", "grid"],
        help="'train' or 'test' a single configuration per (trees, depth) pair, or run the full 'grid'."
    )
    parser.add_argument("--trees", type=int, nargs="+", help="Number of boosting rounds (one or more)")
    parser.add_argument("--depth", type=int, nargs="+", help="max_depth values (one or more)")
    parser.add_argument("--events", type=int, help="Events per class")
    parser.add_argument("--vars", type=int, help="Number of gaussian variables")
    parser.add_argument("--model-dir", dest="model_dir", help="Directory for saved models")
    parser.add_argument("--attach-weights", dest="attach_weights", action="store_true",
                        help="Attach balanced weights to the training matrix")
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    args = build_parser().parse_args(argv)
    runner = BenchmarkRunner(BenchmarkConfig.from_args(args))
    cfg = runner.config

    if args.mode == "grid":
        results = runner.run_grid()
    else:
        run = runner.run_training if args.mode == "train" else runner.run_testing
        results = [run(n_trees, depth) for n_trees in cfg.n_trees for depth in cfg.max_depths]

    print_results(results)


if __name__ == "__main__":
    main()
