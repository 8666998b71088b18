import sys

from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from bartbench.config import LOGS_DIR
from bartbench.utils.logging import environment_info, write_json


def main() -> None:
    info = environment_info()
    missing = sorted(pkg for pkg, version in info["packages"].items() if version is None)
    info["missing_packages"] = missing
    write_json(LOGS_DIR / "environment_check.json", info)
    print("Wrote outputs/logs/environment_check.json")
    if missing:
        raise SystemExit(f"Missing required packages: {missing}")


if __name__ == "__main__":
    main()
