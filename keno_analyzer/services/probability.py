"""
Hypergeometric catch probabilities for Keno.

The house draws ``balls_drawn`` of ``total_balls``.  A player who marks
``i`` spots catches exactly ``j`` of them with probability::

    P(j | i) = C(i, j) · P1 · P2 / P3

    P1 = balls_drawn · (balls_drawn − 1) · …          (j factors)
    P2 = undrawn · (undrawn − 1) · …                  (i − j factors)
    P3 = total_balls · (total_balls − 1) · …          (i factors)

The matrix produced here is the input to the expected-value engine and the
probability worksheet.
"""

import logging
from typing import Optional

import numpy as np

from keno_analyzer.core.combinatorics import combinations, partial_factorial
from keno_analyzer.core.game_config import KenoConfig

logger = logging.getLogger(__name__)

# Row sums must hit 1.0 within this tolerance
ROW_SUM_TOLERANCE = 1e-9


def keno_probability(num_marked: int, caught: int, config: Optional[KenoConfig] = None) -> float:
    """
    Probability of catching exactly ``caught`` balls out of ``num_marked`` spots.

    Args:
        num_marked: Spots the player marked, ``0 <= num_marked <= max_spots``
        caught: Catch size of interest
        config: Game constants (defaults to standard 80/20 Keno)

    Returns:
        Probability in [0, 1]; 0.0 when ``caught > num_marked``
    """
    config = config or KenoConfig.standard()

    if not 0 <= num_marked <= config.max_spots:
        raise ValueError(
            f"num_marked={num_marked!r} outside 0..{config.max_spots} "
            f"for {config.name}."
        )
    if caught < 0:
        raise ValueError(f"caught={caught!r} must be non-negative.")
    if caught > num_marked:
        return 0.0

    n_combinations = combinations(num_marked, caught)
    p1 = partial_factorial(config.balls_drawn, caught)
    p2 = partial_factorial(config.undrawn_balls, num_marked - caught)
    p3 = partial_factorial(config.total_balls, num_marked)

    prob = n_combinations * p1 * p2 / p3
    logger.debug(
        "P(catch %d of %d marked) = C=%d P1=%.1f P2=%.1f P3=%.1f -> %.20f",
        caught, num_marked, n_combinations, p1, p2, p3, prob,
    )
    return prob


def build_probability_matrix(config: Optional[KenoConfig] = None) -> np.ndarray:
    """
    Fill the catch-probability grid for every (spots marked, balls caught) pair.

    Row ``i`` holds ``i + 1`` spots marked; column ``j`` holds ``j`` caught.
    Cells with ``j > i + 1`` are impossible and stay 0.0.

    Returns:
        Array of shape ``(max_spots, max_spots + 1)``
    """
    config = config or KenoConfig.standard()
    rows, cols = config.max_spots, config.max_spots + 1
    matrix = np.zeros((rows, cols), dtype=float)

    for i in range(rows):
        spots = i + 1
        for j in range(cols):
            if j <= spots:
                matrix[i, j] = keno_probability(spots, j, config)

    logger.info(
        "Built %dx%d probability matrix for %s", rows, cols, config.name
    )
    return matrix


def validate_probability_matrix(matrix: np.ndarray, tol: float = ROW_SUM_TOLERANCE) -> None:
    """
    Check the invariants of a catch-probability matrix.

    - Every cell lies in [0, 1]
    - Impossible catches (column > spots marked) are exactly 0
    - Each row sums to 1.0 within ``tol``

    Raises:
        ValueError: Naming the first violated invariant
    """
    if matrix.ndim != 2 or matrix.shape[1] != matrix.shape[0] + 1:
        raise ValueError(
            f"Probability matrix must have shape (n, n + 1), got {matrix.shape}."
        )
    if np.any(matrix < 0.0) or np.any(matrix > 1.0):
        raise ValueError("Probability matrix has cells outside [0, 1].")

    for i, row in enumerate(matrix):
        spots = i + 1
        if np.any(row[spots + 1:] != 0.0):
            raise ValueError(
                f"Row for {spots} spot(s) has non-zero probability for a "
                f"catch larger than {spots}."
            )
        total = float(row.sum())
        if abs(total - 1.0) > tol:
            raise ValueError(
                f"Row for {spots} spot(s) sums to {total:.12f}, expected 1.0."
            )
