"""Game-level configuration — all Keno variant constants in one place.

This module is the **registry** for every constant that differs between
Keno variants.  Nowhere else in the codebase should ball counts or payout
figures be hard-coded.

Architecture
------------
:class:`KenoConfig` is a frozen dataclass carrying all per-variant constants.
The named constructor :meth:`KenoConfig.standard` returns the classic
80-ball / 20-draw game with the $1 payout sheet for 1-9 spots.  To model a
different house or a reduced test game:

1. Add a ``@classmethod`` constructor here, or
2. Derive from an existing config with :func:`dataclasses.replace`.

Typical usage::

    from keno_analyzer.core.game_config import KenoConfig

    cfg = KenoConfig.standard()
    matrix = build_probability_matrix(cfg)

    # Price a different payout sheet on the same ball counts:
    from dataclasses import replace
    house_cfg = replace(cfg, payout_table=((2.0,), (0.0, 10.0)))
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Final


#: Payout sheet for a $1 bet.  Row ``m`` = ``m + 1`` spots marked,
#: column ``c`` = ``c + 1`` balls caught.  Zero means no payout.
STANDARD_PAYOUT_TABLE: Final[tuple[tuple[float, ...], ...]] = (
    # Catch 1     2     3      4      5       6       7        8        9
    (3.0,  0.0,  0.0,   0.0,   0.0,    0.0,    0.0,     0.0,     0.0),  # 1 spot
    (0.0, 12.0,  0.0,   0.0,   0.0,    0.0,    0.0,     0.0,     0.0),  # 2 spots
    (0.0,  1.0, 42.0,   0.0,   0.0,    0.0,    0.0,     0.0,     0.0),  # 3 spots
    (0.0,  1.0,  3.0, 120.0,   0.0,    0.0,    0.0,     0.0,     0.0),  # 4 spots
    (0.0,  0.0,  1.0,   9.0, 800.0,    0.0,    0.0,     0.0,     0.0),  # 5 spots
    (0.0,  0.0,  1.0,   4.0,  88.0, 1500.0,    0.0,     0.0,     0.0),  # 6 spots
    (0.0,  0.0,  0.0,   2.0,  20.0,  350.0,  700.0,     0.0,     0.0),  # 7 spots
    (0.0,  0.0,  0.0,   0.0,   9.0,   90.0, 1500.0, 20000.0,     0.0),  # 8 spots
    (0.0,  0.0,  0.0,   0.0,   4.0,   43.0, 3000.0,  4000.0, 25000.0),  # 9 spots
)


@dataclass(frozen=True)
class KenoConfig:
    """Immutable configuration bundle for a single Keno variant.

    Attributes:
        name: Human-readable variant name for logging and display.
        total_balls: Balls in the hopper (80 in standard Keno).
        balls_drawn: Balls the house draws per game (20).
        max_spots: Most numbers a player may mark (20).  Sets the
            probability matrix shape to ``(max_spots, max_spots + 1)``.
        payout_table: Dollar payout per $1 bet.  Row ``m`` covers
            ``m + 1`` spots marked, column ``c`` covers ``c + 1`` caught.
            Rows may be shorter than ``max_spots``; missing cells pay 0.

    Raises:
        ValueError: On construction, if the ball counts are inconsistent or
            the payout table does not fit the probability grid.
    """

    name: str
    total_balls: int
    balls_drawn: int
    max_spots: int
    payout_table: tuple[tuple[float, ...], ...]

    def __post_init__(self) -> None:
        if not 0 < self.balls_drawn <= self.total_balls:
            raise ValueError(
                f"balls_drawn ({self.balls_drawn!r}) must be in "
                f"(0, total_balls={self.total_balls!r}]."
            )
        if not 0 < self.max_spots <= self.total_balls:
            raise ValueError(
                f"max_spots ({self.max_spots!r}) must be in "
                f"(0, total_balls={self.total_balls!r}]."
            )
        if len(self.payout_table) > self.max_spots:
            raise ValueError(
                f"payout_table has {len(self.payout_table)} rows but only "
                f"{self.max_spots} spots can be marked."
            )
        for m, row in enumerate(self.payout_table, start=1):
            if len(row) > self.max_spots:
                raise ValueError(
                    f"payout_table row for {m} spot(s) has {len(row)} catch "
                    f"columns; at most {self.max_spots} balls can be caught."
                )
            if any(p < 0 for p in row):
                raise ValueError(
                    f"payout_table row for {m} spot(s) contains a negative payout."
                )

    # ------------------------------------------------------------------ #
    #  Named constructors                                                  #
    # ------------------------------------------------------------------ #

    @classmethod
    def standard(cls) -> KenoConfig:
        """Return the classic 80-ball, 20-draw Keno game."""
        return cls(
            name="Standard Keno",
            total_balls=80,
            balls_drawn=20,
            max_spots=20,
            payout_table=STANDARD_PAYOUT_TABLE,
        )

    # ------------------------------------------------------------------ #
    #  Convenience accessors                                               #
    # ------------------------------------------------------------------ #

    @property
    def undrawn_balls(self) -> int:
        """Balls left in the hopper after the draw."""
        return self.total_balls - self.balls_drawn

    @property
    def payout_spots(self) -> int:
        """Number of spots-marked scenarios covered by the payout sheet."""
        return len(self.payout_table)

    def payout(self, spots: int, caught: int) -> float:
        """Dollar payout for catching ``caught`` of ``spots`` marked.

        Cells outside the sheet pay 0.0, including every catch of zero.
        """
        if not 1 <= spots <= self.payout_spots or caught < 1:
            return 0.0
        row = self.payout_table[spots - 1]
        if caught > len(row):
            return 0.0
        return row[caught - 1]

    def __repr__(self) -> str:
        return (
            f"KenoConfig(name={self.name!r}, "
            f"balls={self.total_balls}, "
            f"drawn={self.balls_drawn}, "
            f"max_spots={self.max_spots}, "
            f"payout_spots={self.payout_spots})"
        )
