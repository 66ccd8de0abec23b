#!/usr/bin/env python
"""
Launcher script for the Bakery Ledger CLI from a source checkout.

Puts src/ on the Python path so the CLI runs without `pip install -e .`.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent / "src"))

from bakery_ledger.cli import main  # noqa: E402

if __name__ == "__main__":
    sys.exit(main())
