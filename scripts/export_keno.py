#!/usr/bin/env python3
"""
export_keno.py — Compute the Keno probability matrix and expected values,
then write both tables to a workbook (or CSV files).

Outputs
-------
  Keno Probability Matrix     20 x 21 catch probabilities (spots x caught)
  Expected 'Pay Out' Values   expected value of a $1 bet, 1-9 spots marked

Settings come from the environment (a .env file is honoured):
  KENO_OUTPUT_DIR     output directory            (default: Data)
  KENO_OUTPUT_FILE    workbook file name          (default: Keno.xlsx)
  KENO_EXPORT_FORMAT  xlsx | csv                  (default: xlsx)
  LOG_LEVEL           logging level               (default: INFO)

Usage
-----
  python scripts/export_keno.py                       # Data/Keno.xlsx
  python scripts/export_keno.py --format csv          # Data/Keno/*.csv
  python scripts/export_keno.py --output /tmp/k.xlsx --verbose
"""

import argparse
import logging
import os
import sys
from pathlib import Path

# Ensure the project root (one level up from scripts/) is on sys.path so that
# `from keno_analyzer.xxx import ...` resolves when the script is run directly.
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from dotenv import load_dotenv

load_dotenv()

from keno_analyzer.keno_model import KenoModel
from keno_analyzer.services.export import (
    SUPPORTED_FORMATS,
    build_sink,
    default_format,
    default_output_path,
)

logger = logging.getLogger(__name__)


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export Keno catch probabilities and $1-bet expected values."
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=None,
        help="Output workbook path (CSV: directory). Defaults to "
             "$KENO_OUTPUT_DIR/$KENO_OUTPUT_FILE.",
    )
    parser.add_argument(
        "--format",
        choices=SUPPORTED_FORMATS,
        default=None,
        help="Output format. Defaults to $KENO_EXPORT_FORMAT or xlsx.",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log every probability and expected-value term (DEBUG).",
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)

    level_name = "DEBUG" if args.verbose else os.getenv("LOG_LEVEL", "INFO").upper()
    # getLevelName maps unknown names to "Level <name>" instead of an int
    level = logging.getLevelName(level_name)
    logging.basicConfig(
        level=level if isinstance(level, int) else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    if not isinstance(level, int):
        logger.error("Invalid LOG_LEVEL %r", level_name)
        return 1

    fmt = args.format or default_format()
    output = args.output or default_output_path()

    try:
        model = KenoModel()
        analysis = model.analyze()

        for spots, row in analysis.summary().items():
            logger.info(
                "%d spot(s): expected value %.4f, house edge %.2f%%",
                spots, row["expected_value"], row["house_edge"] * 100,
            )
        logger.info("Best spot count: %d", analysis.best_spot_count())

        sink = build_sink(fmt, output)
        model.export(analysis, sink)
    except Exception as exc:
        root = exc.__cause__ or exc
        logger.error("Keno export failed: %s: %s", type(root).__name__, root)
        return 1

    logger.info("Keno export complete")
    return 0


if __name__ == "__main__":
    sys.exit(main())
