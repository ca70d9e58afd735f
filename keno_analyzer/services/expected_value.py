"""
Expected value of a $1 Keno bet for each spots-marked count on the payout sheet.

For ``M`` spots marked the value is averaged over the ``M + 1`` possible
catch counts (0..M)::

    EV(M) = Σ_c  KP(M, c) · PO(M, c) / (M + 1)

where ``KP`` is the catch probability and ``PO`` the sheet payout.  Catches
that pay nothing contribute nothing, so only paying cells are visited.
"""

import logging
from typing import Optional

import numpy as np

from keno_analyzer.core.game_config import KenoConfig

logger = logging.getLogger(__name__)


def expected_values(matrix: np.ndarray, config: Optional[KenoConfig] = None) -> np.ndarray:
    """
    Expected $1-bet value for 1..N spots marked, N = rows on the payout sheet.

    Args:
        matrix: Catch-probability grid from ``build_probability_matrix``
        config: Game constants carrying the payout sheet

    Returns:
        Array of shape ``(config.payout_spots,)``; entry ``i`` is ``i + 1`` spots
    """
    config = config or KenoConfig.standard()
    n_spots = config.payout_spots
    widest = max((len(row) for row in config.payout_table), default=0)

    if matrix.ndim != 2 or matrix.shape[0] < n_spots or matrix.shape[1] < widest + 1:
        raise ValueError(
            f"Probability matrix {matrix.shape} too small for a payout sheet "
            f"of {n_spots} spot rows and {widest} catch columns."
        )

    values = np.zeros(n_spots, dtype=float)
    for i in range(1, n_spots + 1):
        for j in range(1, widest + 1):
            payout = config.payout(i, j)
            if payout > 0:
                prob = matrix[i - 1, j]
                values[i - 1] += prob * payout / (i + 1)
                logger.debug(
                    "KP(%d,%d)=%.10f PO(%d,%d)=%.2f running EV=%.10f",
                    i, j, prob, i, j, payout, values[i - 1],
                )

    logger.info(
        "Expected values for %d spot counts: %s",
        n_spots,
        ", ".join(f"{i + 1}={v:.4f}" for i, v in enumerate(values)),
    )
    return values
