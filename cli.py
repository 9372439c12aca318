from __future__ import annotations

import argparse
import logging
from pathlib import Path

from shooting_outcome_predictor.constants import DATA_URL, DEFAULT_SEED, MAX_ITER, TEST_SIZE
from shooting_outcome_predictor.loader import DataLoadError
from shooting_outcome_predictor.logging_utils import setup_logging
from shooting_outcome_predictor.pipeline import run_pipeline
from shooting_outcome_predictor.report import format_report, write_outputs
from shooting_outcome_predictor.visualization import close_charts

logger = logging.getLogger("shooting_outcome_predictor.cli")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Shooting Outcome Predictor CLI")
    parser.add_argument("--input", default=DATA_URL, help="Incident CSV (URL or local path)")
    parser.add_argument("--out", default="shooting_outcome_results", help="Output directory")
    parser.add_argument("--test_size", type=float, default=TEST_SIZE, help="Test set ratio")
    parser.add_argument("--seed", type=int, default=DEFAULT_SEED, help="Random seed for the train/test split")
    parser.add_argument("--max_iter", type=int, default=MAX_ITER, help="Iteration bound for logistic regression")
    parser.add_argument("--no_plots", action="store_true", help="Skip chart rendering")
    parser.add_argument("--log_level", default="INFO", help="Logging level")
    args = parser.parse_args(argv)

    setup_logging(args.log_level)

    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    try:
        result = run_pipeline(
            args.input,
            seed=args.seed,
            test_size=args.test_size,
            max_iter=args.max_iter,
            render=not args.no_plots,
            chart_dir=out_dir / "charts",
        )
    except DataLoadError as exc:
        logger.error("%s", exc)
        return 1

    write_outputs(result, out_dir)
    close_charts(result.charts)

    print(format_report(result))
    print("Done. Output directory:", str(out_dir))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
