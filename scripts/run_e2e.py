#!/usr/bin/env python3
"""Convenience runner for the tests that drive a real tesseract binary."""

from __future__ import annotations

import importlib
import shutil
import sys
import unittest


def main() -> int:
    try:
        importlib.import_module("PIL")
    except ModuleNotFoundError as exc:  # pragma: no cover - defensive
        missing = exc.name or "PIL"
        print(
            f"Missing dependency '{missing}'. Install the test extras first "
            "(e.g. `python -m pip install -e '.[test]'`).",
            file=sys.stderr,
        )
        return 1
    if shutil.which("tesseract") is None:
        print("tesseract is not on PATH; the end-to-end tests would be skipped.", file=sys.stderr)
        return 1

    suite = unittest.defaultTestLoader.loadTestsFromName("tests.test_e2e")
    result = unittest.TextTestRunner(verbosity=2).run(suite)
    return 0 if result.wasSuccessful() else 1


if __name__ == "__main__":
    sys.exit(main())
