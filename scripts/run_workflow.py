"""CLI script to profile a CSV file, train a model on a target column and print the results.

Modes
-----
- analyze: Column types, missing values and statistics (no training)
- train  : Analysis plus training and evaluation of ``--model`` on ``--target``

The CSV is read with pandas; everything after that runs in the engine.
Outputs plain-text tables to stdout.
"""

import argparse
import logging
import sys
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from automl_tlbx import EngineError, ModelKind, TabularDataset, TabularWorkflow


logger = logging.getLogger(__name__)


def print_analysis(wf: TabularWorkflow) -> None:
    analysis = wf.analyze()
    rows, cols = analysis.shape
    print(f"# Dataset analysis\n\n{rows} rows x {cols} columns\n")
    print(analysis.to_frame().to_string(float_format="{:.4f}".format))
    if analysis.target_column is not None:
        print(f"\nTarget: `{analysis.target_column}` ({analysis.problem_type})")
        if analysis.class_balance:
            print("\nClass balance:")
            for label, count in analysis.class_balance.items():
                print(f"- {label}: {count}")


def print_results(wf: TabularWorkflow, model: str, show_predictions: int) -> None:
    results = wf.train(model)
    print(f"\n# {results.model_name}\n")
    print(f"Trained in {results.training_time_ms:.1f} ms, evaluated on {results.n_test} held-out rows\n")
    for name, value in results.pretty_metrics().items():
        print(f"- {name}: {value}")
    confusion = results.confusion_frame()
    if confusion is not None:
        print("\nConfusion matrix (rows = actual, columns = predicted):\n")
        print(confusion.to_string())
    if show_predictions:
        print("\nPredictions:\n")
        print(results.prediction_table().head(show_predictions).to_string())


def main(argv: Iterable[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Profile a CSV file and train a model on one of its columns")
    p.add_argument("mode", choices=["analyze", "train"], help="analyze: profile only; train: profile and train")
    p.add_argument("csv", help="Path to the CSV file")
    p.add_argument("--target", help="Target column (required for train)")
    p.add_argument(
        "--model",
        default=ModelKind.AUTO.value,
        choices=[kind.value for kind in ModelKind],
        help="Model to train (default: auto)",
    )
    p.add_argument("--show-predictions", type=int, default=0, help="Number of prediction rows to print")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = p.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s: %(message)s",
    )

    path = Path(args.csv)
    if not path.exists():
        print(f"error: file not found: {path}", file=sys.stderr)
        return 2
    if args.mode == "train" and not args.target:
        print("error: --target is required in train mode", file=sys.stderr)
        return 2

    wf = TabularWorkflow(TabularDataset.from_frame(pd.read_csv(path)))
    try:
        wf.analyze()
        if args.target:
            wf.select_target(args.target)
        print_analysis(wf)
        if args.mode == "train":
            print_results(wf, args.model, args.show_predictions)
    except EngineError as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
