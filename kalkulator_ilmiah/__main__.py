"""Main entry point for running kalkulator_ilmiah as a module.

This allows running Kalkulator Ilmiah with:
    python -m kalkulator_ilmiah
    python -m kalkulator_ilmiah --health-check
    python -m kalkulator_ilmiah -e "3 + 4 ="

This is equivalent to running:
    python -m kalkulator_ilmiah.cli
"""

from __future__ import annotations

import sys

from .cli import main_entry

if __name__ == "__main__":
    sys.exit(main_entry())
