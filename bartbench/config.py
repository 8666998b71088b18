from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]

OUTPUTS_DIR = PROJECT_ROOT / "outputs"
LOGS_DIR = OUTPUTS_DIR / "logs"

# Experiment identifier (used in outputs/ metadata)
EXPERIMENT_NAMESPACE = "sparse_signal_benchmark_v1"

# Synthetic data
#
# The ground-truth function reads the first MIN_DIMENSION columns; every
# column after that is a distractor.
N_OBS = 500
DIMENSIONS = [10, 100]
NOISE_SD = 1.0
MIN_DIMENSION = 5
RANDOM_SEED = 2026

# Bayesian tree ensembles (BART / DART)
BART_NUM_TREES = 200
BART_NUM_GFR = 10
BART_NUM_BURNIN = 0
BART_NUM_MCMC = 100

# Sparse Dirichlet prior shape parameters: u ~ Beta(a, b), rho defaults to P.
DART_PRIOR_A = 0.5
DART_PRIOR_B = 1.0
DART_PRIOR_RHO = None

# Random forest
RF_N_ESTIMATORS = 500
RF_MAX_FEATURES = 1.0

MODEL_NAMES = ["bart", "dart", "forest"]
MODEL_LABELS = {
    "bart": "BART",
    "dart": "DART",
    "forest": "Random forest",
}
