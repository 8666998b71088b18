from __future__ import annotations

import sys
import traceback
import warnings
from typing import Callable


def run_with_error_boundary(main: Callable[[], None]) -> None:
    """Run main once; any unhandled exception prints its traceback and exits 1.

    SystemExit (argument errors, explicit exits) passes through unchanged.
    Numerical RuntimeWarnings from the libraries are shown but never fatal.
    """

    with warnings.catch_warnings():
        warnings.simplefilter("default", RuntimeWarning)
        try:
            main()
        except Exception:
            traceback.print_exc(file=sys.stderr)
            print("Benchmark run failed; see traceback above.", file=sys.stderr)
            raise SystemExit(1)
