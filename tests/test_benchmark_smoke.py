import json
import subprocess
import sys
from pathlib import Path

import pandas as pd
import pytest


def _script(repo_root: Path) -> str:
    return str(repo_root / "scripts" / "01_run_benchmark.py")


def test_benchmark_smoke(tmp_path: Path):
    pytest.importorskip("stochtree")
    repo_root = Path(__file__).resolve().parents[1]

    cmd = [
        sys.executable,
        _script(repo_root),
        "--n",
        "100",
        "--dims",
        "10",
        "--num-trees",
        "20",
        "--num-gfr",
        "5",
        "--num-mcmc",
        "20",
        "--rf-trees",
        "20",
        "--outdir",
        str(tmp_path),
    ]
    proc = subprocess.run(cmd, cwd=repo_root, check=True, capture_output=True, text=True)
    assert "x shape: (100, 10); y length: 100" in proc.stdout

    for name in ["bart", "dart", "forest"]:
        assert (tmp_path / "figures" / f"pred_vs_actual_{name}_p10.png").exists()
    assert (tmp_path / "figures" / "residuals_boxplot_p10.png").exists()
    assert (tmp_path / "figures" / "variable_usage_p10.png").exists()

    metrics = pd.read_csv(tmp_path / "tables" / "metrics_p10.csv")
    assert metrics["model"].tolist() == ["bart", "dart", "forest"]

    payload = json.loads((tmp_path / "logs" / "benchmark_run_metadata.json").read_text(encoding="utf-8"))
    assert payload["dimensions"] == [10]
    assert len(payload["metrics"]) == 3


def test_dimension_below_minimum_fails_run(tmp_path: Path):
    pytest.importorskip("stochtree")
    repo_root = Path(__file__).resolve().parents[1]

    cmd = [sys.executable, _script(repo_root), "--n", "100", "--dims", "4", "--outdir", str(tmp_path)]
    proc = subprocess.run(cmd, cwd=repo_root, capture_output=True, text=True)

    assert proc.returncode == 1
    assert "InvalidConfigurationError" in proc.stderr
    assert not (tmp_path / "figures").exists()
