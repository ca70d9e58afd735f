"""
Tabular export for Keno results.

Builds the two worksheets of the Keno report and hands them to a
``BaseTabularSink``:

- "Keno Probability Matrix": spots marked × balls caught
- "Expected 'Pay Out' Values": spots marked × expected value

Concrete sinks write an ``.xlsx`` workbook (pandas + openpyxl) or one CSV
file per table (pandas).
"""

import logging
import os
import re
from pathlib import Path
from typing import Dict, Sequence

import numpy as np
import pandas as pd

from keno_analyzer.core.sink_interface import BaseTabularSink, KenoTable

logger = logging.getLogger(__name__)

PROBABILITY_SHEET = "Keno Probability Matrix"
EXPECTED_VALUE_SHEET = "Expected 'Pay Out' Values"
EXPECTED_VALUE_HEADER = "Expected Value"

ROW_HEADER_FMT = "{} Spot(s) Marked"
COL_HEADER_FMT = "{} Ball(s) Caught"

SUPPORTED_FORMATS = ("xlsx", "csv")


# ---------------------------------------------------------------------------
# Table builders
# ---------------------------------------------------------------------------

def spot_headers(n_rows: int) -> tuple:
    """Row labels "1 Spot(s) Marked" .. "N Spot(s) Marked"."""
    return tuple(ROW_HEADER_FMT.format(i + 1) for i in range(n_rows))


def catch_headers(n_cols: int) -> tuple:
    """Column labels "0 Ball(s) Caught" .. "N-1 Ball(s) Caught"."""
    return tuple(COL_HEADER_FMT.format(j) for j in range(n_cols))


def probability_table(matrix: np.ndarray) -> KenoTable:
    """Wrap the catch-probability matrix with its headers."""
    n_rows, n_cols = matrix.shape
    return KenoTable(
        name=PROBABILITY_SHEET,
        row_headers=spot_headers(n_rows),
        col_headers=catch_headers(n_cols),
        values=tuple(tuple(float(v) for v in row) for row in matrix),
    )


def expected_value_table(values: np.ndarray) -> KenoTable:
    """Wrap the expected-value vector as a one-column table."""
    return KenoTable(
        name=EXPECTED_VALUE_SHEET,
        row_headers=spot_headers(len(values)),
        col_headers=(EXPECTED_VALUE_HEADER,),
        values=tuple((float(v),) for v in values),
    )


def export_results(sink: BaseTabularSink, matrix: np.ndarray, values: np.ndarray) -> None:
    """
    Write both Keno tables to ``sink``, probability matrix first.

    The sink is not closed here; callers own its lifetime.
    """
    for table in (probability_table(matrix), expected_value_table(values)):
        table.validate()
        sink.write(table)
        logger.info(
            "Wrote table %r (%dx%d) to %s sink",
            table.name, *table.shape, sink.sink_name,
        )


# ---------------------------------------------------------------------------
# Concrete sinks
# ---------------------------------------------------------------------------

def _to_frame(
    name: str,
    row_headers: Sequence[str],
    col_headers: Sequence[str],
    values: Sequence[Sequence[float]],
) -> pd.DataFrame:
    table = KenoTable(
        name=name,
        row_headers=tuple(row_headers),
        col_headers=tuple(col_headers),
        values=tuple(tuple(float(v) for v in row) for row in values),
    )
    table.validate()
    return pd.DataFrame(
        list(table.values),
        index=list(table.row_headers),
        columns=list(table.col_headers),
    )


def _slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


class ExcelTabularSink(BaseTabularSink):
    """One worksheet per table in a single ``.xlsx`` workbook.

    Sheets are buffered and the workbook is saved on :meth:`close` through a
    ``.partial`` sibling that replaces ``path`` only once every sheet is in.
    """

    sink_name = "Excel"

    def __init__(self, path):
        self.path = Path(path)
        self._frames: Dict[str, pd.DataFrame] = {}

    @property
    def partial_path(self) -> Path:
        return self.path.with_name(self.path.name + ".partial")

    def write_table(self, name, row_headers, col_headers, values) -> None:
        self._frames[name] = _to_frame(name, row_headers, col_headers, values)

    def close(self) -> None:
        if not self._frames:
            logger.warning("No tables written; %s not created", self.path)
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with pd.ExcelWriter(self.partial_path, engine="openpyxl") as writer:
                for name, df in self._frames.items():
                    df.to_excel(writer, sheet_name=name)
            os.replace(self.partial_path, self.path)
        except Exception:
            self.partial_path.unlink(missing_ok=True)
            raise
        finally:
            self._frames = {}
        logger.info("Saved workbook %s", self.path)

    def abort(self) -> None:
        logger.warning(
            "Export aborted; discarding %d buffered sheet(s), %s left untouched",
            len(self._frames), self.path,
        )
        self._frames = {}


class CsvTabularSink(BaseTabularSink):
    """One ``<table_name>.csv`` file per table inside ``directory``.

    Files written before a failed export are removed on :meth:`abort`.
    """

    sink_name = "CSV"

    def __init__(self, directory):
        self.directory = Path(directory)
        self.written: list = []

    def write_table(self, name, row_headers, col_headers, values) -> None:
        df = _to_frame(name, row_headers, col_headers, values)
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self.directory / f"{_slugify(name)}.csv"
        df.to_csv(path)
        self.written.append(path)
        logger.info("Saved %s", path)

    def abort(self) -> None:
        for path in self.written:
            path.unlink(missing_ok=True)
        logger.warning("Export aborted; removed %d CSV file(s)", len(self.written))
        self.written = []


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def default_output_path() -> Path:
    """
    Report location from the environment.

    KENO_OUTPUT_DIR (default "Data") joined with KENO_OUTPUT_FILE
    (default "Keno.xlsx").
    """
    output_dir = os.getenv("KENO_OUTPUT_DIR", "Data")
    file_name = os.getenv("KENO_OUTPUT_FILE", "Keno.xlsx")
    return Path(output_dir) / file_name


def default_format() -> str:
    return os.getenv("KENO_EXPORT_FORMAT", "xlsx").lower()


def build_sink(fmt: str, output_path) -> BaseTabularSink:
    """
    Sink for ``fmt`` writing to ``output_path``.

    For "csv" a path with a suffix (``Data/Keno.xlsx``) becomes the
    directory ``Data/Keno``; a suffix-less path is used as-is.
    """
    fmt = fmt.lower()
    path = Path(output_path)
    if fmt == "xlsx":
        if path.suffix.lower() != ".xlsx":
            path = path.with_suffix(".xlsx")
        return ExcelTabularSink(path)
    if fmt == "csv":
        return CsvTabularSink(path.with_suffix("") if path.suffix else path)
    raise ValueError(
        f"Unsupported export format {fmt!r}; expected one of {SUPPORTED_FORMATS}."
    )
