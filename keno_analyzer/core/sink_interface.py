"""Dependency-injection interface for swappable tabular output sinks.

The export service never imports ``pandas`` writers or ``openpyxl``
workbooks directly in its orchestration code; it accepts a
:class:`BaseTabularSink` instead.  This enables:

* **Unit testing** — inject an :class:`InMemoryTabularSink` and assert on
  the captured :class:`KenoTable` objects without touching the filesystem.
* **Format extension** — add a new sink (HTML, database table, ...)
  without modifying the computation or the table builders.

Design choices
--------------
* :class:`BaseTabularSink` is an abstract base class (ABC) rather than a
  ``typing.Protocol`` so that concrete sinks inherit the context-manager
  behaviour and ``isinstance`` checks work at runtime.
* :class:`KenoTable` is frozen so a table handed to a sink cannot be
  mutated by it.  Values are stored as nested tuples; the sink decides how
  to materialise them.

Run tests with::

    pytest tests/test_export.py -v
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence


# ---------------------------------------------------------------------------
# Data transfer object
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class KenoTable:
    """A two-dimensional numeric table with row and column headers.

    Attributes:
        name: Table (worksheet) name.  Excel limits this to 31 characters.
        row_headers: One label per row, e.g. ``"3 Spot(s) Marked"``.
        col_headers: One label per column, e.g. ``"2 Ball(s) Caught"``.
        values: Row-major cell values, ``len(row_headers)`` rows of
            ``len(col_headers)`` floats each.
    """

    name: str
    row_headers: tuple[str, ...]
    col_headers: tuple[str, ...]
    values: tuple[tuple[float, ...], ...]

    def validate(self) -> None:
        """Check that the header counts match the value grid.

        Raises:
            ValueError: If the number of rows or any row's length disagrees
                with the headers, or the name is empty or too long.
        """
        if not self.name or len(self.name) > 31:
            raise ValueError(
                f"Table name {self.name!r} must be 1-31 characters long."
            )
        if len(self.values) != len(self.row_headers):
            raise ValueError(
                f"Table {self.name!r} has {len(self.values)} rows but "
                f"{len(self.row_headers)} row headers."
            )
        for idx, row in enumerate(self.values):
            if len(row) != len(self.col_headers):
                raise ValueError(
                    f"Table {self.name!r} row {idx} has {len(row)} cells but "
                    f"{len(self.col_headers)} column headers."
                )

    @property
    def shape(self) -> tuple[int, int]:
        return len(self.row_headers), len(self.col_headers)


# ---------------------------------------------------------------------------
# Abstract sink
# ---------------------------------------------------------------------------


class BaseTabularSink(ABC):
    """Contract that every tabular output sink must satisfy.

    A sink receives any number of tables through :meth:`write_table` and
    persists them on :meth:`close`, or discards them on :meth:`abort` when
    the export fails.  Sinks are context managers::

        with ExcelTabularSink(path) as sink:
            sink.write_table(name, row_headers, col_headers, values)
    """

    #: Short identifier used in log messages.
    sink_name: str = "BaseTabularSink"

    @abstractmethod
    def write_table(
        self,
        name: str,
        row_headers: Sequence[str],
        col_headers: Sequence[str],
        values: Sequence[Sequence[float]],
    ) -> None:
        """Render one table.

        Args:
            name: Table / worksheet name.
            row_headers: Labels for the leftmost column.
            col_headers: Labels for the top row.
            values: ``len(row_headers) × len(col_headers)`` numeric grid.

        Raises:
            ValueError: If the headers do not match the grid dimensions.
        """

    def write(self, table: KenoTable) -> None:
        """Render a prepared :class:`KenoTable`."""
        self.write_table(table.name, table.row_headers, table.col_headers, table.values)

    def close(self) -> None:
        """Flush any buffered output.  The default is a no-op."""

    def abort(self) -> None:
        """Discard buffered output after a failed export.  The default is a no-op.

        Called instead of :meth:`close` when the ``with`` block raises, so a
        half-written report never replaces a complete one.
        """

    def __enter__(self) -> BaseTabularSink:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            self.close()
        else:
            self.abort()


# ---------------------------------------------------------------------------
# In-memory sink — testing stub
# ---------------------------------------------------------------------------


class InMemoryTabularSink(BaseTabularSink):
    """Sink that keeps every written table in :attr:`tables`, keyed by name.

    Used in tests that need to inspect export output without I/O.
    """

    sink_name = "InMemory"

    def __init__(self) -> None:
        self.tables: dict[str, KenoTable] = {}
        self.closed = False
        self.aborted = False

    def write_table(self, name, row_headers, col_headers, values) -> None:
        table = KenoTable(
            name=name,
            row_headers=tuple(row_headers),
            col_headers=tuple(col_headers),
            values=tuple(tuple(float(v) for v in row) for row in values),
        )
        table.validate()
        self.tables[name] = table

    def close(self) -> None:
        self.closed = True

    def abort(self) -> None:
        self.aborted = True
