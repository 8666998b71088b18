from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path
from typing import List

# Matplotlib must be configured before importing pyplot.
_mpl_cache_dir = Path(tempfile.gettempdir()) / "matplotlib"
_mpl_cache_dir.mkdir(parents=True, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", str(_mpl_cache_dir))

import numpy as np
import pandas as pd


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bartbench.config import (  # noqa: E402
    BART_NUM_BURNIN,
    BART_NUM_GFR,
    BART_NUM_MCMC,
    BART_NUM_TREES,
    DART_PRIOR_A,
    DART_PRIOR_B,
    DART_PRIOR_RHO,
    DIMENSIONS,
    EXPERIMENT_NAMESPACE,
    MIN_DIMENSION,
    MODEL_LABELS,
    N_OBS,
    NOISE_SD,
    RANDOM_SEED,
    RF_MAX_FEATURES,
    RF_N_ESTIMATORS,
)
from bartbench.data.synthetic import generate_sparse_regression, summarize_dataset  # noqa: E402
from bartbench.evaluation.comparison import ModelFactories, run_comparison  # noqa: E402
from bartbench.models.bart import BartRegressor, DartRegressor  # noqa: E402
from bartbench.models.forest import RandomForestRegressorModel  # noqa: E402
from bartbench.reporting.figures import (  # noqa: E402
    close_figure,
    plot_predicted_vs_actual,
    plot_residual_boxplot,
    plot_variable_usage,
    save_figure,
)
from bartbench.utils.boundary import run_with_error_boundary  # noqa: E402
from bartbench.utils.logging import environment_info, utc_now_iso, write_json  # noqa: E402


def parse_dims(raw: str) -> List[int]:
    dims: List[int] = []
    for part in raw.split(","):
        part = part.strip()
        if not part:
            continue
        try:
            dims.append(int(part))
        except ValueError as exc:
            raise SystemExit(f"--dims must be a comma separated list of integers; got '{raw}'.") from exc
    if not dims:
        raise SystemExit("--dims must name at least one dimensionality.")
    return dims


def build_factories(args: argparse.Namespace, seed: int) -> ModelFactories:
    def bart():
        return BartRegressor(
            num_trees=args.num_trees,
            num_gfr=args.num_gfr,
            num_burnin=args.num_burnin,
            num_mcmc=args.num_mcmc,
            random_seed=seed,
        )

    def dart():
        return DartRegressor(
            num_trees=args.num_trees,
            num_gfr=args.num_gfr,
            num_burnin=args.num_burnin,
            num_mcmc=args.num_mcmc,
            random_seed=seed + 1,
            prior_a=args.prior_a,
            prior_b=args.prior_b,
            prior_rho=DART_PRIOR_RHO,
        )

    def forest():
        return RandomForestRegressorModel(
            n_estimators=args.rf_trees,
            max_features=RF_MAX_FEATURES,
            random_state=seed,
        )

    return ModelFactories(bart=bart, dart=dart, forest=forest)


def run_dataset(args: argparse.Namespace, p: int, seed: int, figures_dir: Path, tables_dir: Path) -> pd.DataFrame:
    print(f"\n=== Dataset: n={args.n}, p={p}, noise_sd={args.noise_sd}, seed={seed} ===")
    X, y = generate_sparse_regression(args.n, p, args.noise_sd, seed=seed)
    print(f"x shape: {X.shape}; y length: {y.shape[0]}")
    print(summarize_dataset(X, y).to_string(index=False))

    comparison = run_comparison(X, y, build_factories(args, seed))

    for name, fitted in comparison.items():
        fig = plot_predicted_vs_actual(y, fitted, f"{MODEL_LABELS[name]}: predicted vs actual (p={p})")
        save_figure(fig, figures_dir / f"pred_vs_actual_{name}_p{p}.png")
        close_figure(fig)

    fig = plot_residual_boxplot(comparison, y, f"Residuals by model (p={p})")
    save_figure(fig, figures_dir / f"residuals_boxplot_p{p}.png")
    close_figure(fig)

    fig = plot_variable_usage(comparison, MIN_DIMENSION, f"Variable usage (p={p})")
    save_figure(fig, figures_dir / f"variable_usage_p{p}.png")
    close_figure(fig)

    if comparison.dart.prior is not None:
        weights = comparison.dart.prior.weights
        top = np.argsort(weights)[::-1][:MIN_DIMENSION] + 1
        print(f"DART prior: alpha={comparison.dart.prior.alpha:.4f}; largest weights on predictors {top.tolist()}")

    metrics = comparison.metrics_frame(y, MIN_DIMENSION)
    metrics.insert(0, "p", p)
    tables_dir.mkdir(parents=True, exist_ok=True)
    metrics.to_csv(tables_dir / f"metrics_p{p}.csv", index=False)
    print(metrics.to_string(index=False))
    return metrics


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Compare BART, DART and a random forest on sparse-signal synthetic regression data."
    )
    parser.add_argument("--n", type=int, default=N_OBS, help="Observations per dataset.")
    parser.add_argument(
        "--dims",
        type=str,
        default=",".join(str(d) for d in DIMENSIONS),
        help="Comma separated dimensionalities to benchmark (each must be >= 5).",
    )
    parser.add_argument("--noise-sd", type=float, default=NOISE_SD, help="Standard deviation of the Gaussian noise.")
    parser.add_argument("--seed", type=int, default=RANDOM_SEED, help="Base random seed.")
    parser.add_argument("--num-trees", type=int, default=BART_NUM_TREES)
    parser.add_argument("--num-gfr", type=int, default=BART_NUM_GFR)
    parser.add_argument("--num-burnin", type=int, default=BART_NUM_BURNIN)
    parser.add_argument("--num-mcmc", type=int, default=BART_NUM_MCMC)
    parser.add_argument("--prior-a", type=float, default=DART_PRIOR_A)
    parser.add_argument("--prior-b", type=float, default=DART_PRIOR_B)
    parser.add_argument("--rf-trees", type=int, default=RF_N_ESTIMATORS)
    parser.add_argument("--outdir", type=Path, default=Path("outputs"), help="Output directory (default: outputs/).")
    args = parser.parse_args()

    if args.n <= 0:
        raise SystemExit("--n must be a positive integer.")
    if args.num_mcmc <= 0:
        raise SystemExit("--num-mcmc must be a positive integer.")
    if args.num_trees <= 0 or args.rf_trees <= 0:
        raise SystemExit("--num-trees and --rf-trees must be positive integers.")
    dims = parse_dims(args.dims)

    outdir = args.outdir if args.outdir.is_absolute() else (PROJECT_ROOT / args.outdir)
    figures_dir = outdir / "figures"
    tables_dir = outdir / "tables"
    logs_dir = outdir / "logs"

    run_meta = {
        "experiment": EXPERIMENT_NAMESPACE,
        "started_utc": utc_now_iso(),
        "args": {k: (str(v) if isinstance(v, Path) else v) for k, v in vars(args).items()},
        "dimensions": dims,
        **environment_info(),
    }

    all_metrics = []
    for i, p in enumerate(dims):
        all_metrics.append(run_dataset(args, p, args.seed + 100 * i, figures_dir, tables_dir))

    combined = pd.concat(all_metrics, ignore_index=True)
    run_meta["metrics"] = combined.to_dict(orient="records")
    run_meta["finished_utc"] = utc_now_iso()
    write_json(logs_dir / "benchmark_run_metadata.json", run_meta)

    print(f"\nWrote benchmark artifacts to {outdir}/")


if __name__ == "__main__":
    run_with_error_boundary(main)
