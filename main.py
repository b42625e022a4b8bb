#!/usr/bin/env python3
"""
Entry point for the Calculator application.

Run:

    python main.py [--log-level DEBUG]
"""
import argparse
import logging
import sys
from pathlib import Path

# Ensure the repo root is on sys.path so backend/frontend import when run as a script
ROOT = Path(__file__).resolve().parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from frontend.gui import CalculatorGUI


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Four-function calculator")
    parser.add_argument("--log-level", default="WARNING",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        help="logging verbosity (default: WARNING)")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    app = CalculatorGUI()
    app.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
