"""
Keno Edge Model - probability matrix, expected values and report export

Pipeline:
- Hypergeometric catch probabilities for every (spots, catch) pair
- Matrix invariants checked (zero upper triangle, unit row sums)
- Expected $1-bet value per spots-marked count from the payout sheet
- Both tables rendered to a tabular sink
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from keno_analyzer.core.game_config import KenoConfig
from keno_analyzer.core.sink_interface import BaseTabularSink
from keno_analyzer.services.expected_value import expected_values
from keno_analyzer.services.export import export_results
from keno_analyzer.services.probability import (
    build_probability_matrix,
    validate_probability_matrix,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class KenoAnalysis:
    """Complete analysis output"""
    config: KenoConfig

    # max_spots x (max_spots + 1) catch probabilities
    probability_matrix: np.ndarray

    # One entry per payout-sheet row
    expected_values: np.ndarray

    def best_spot_count(self) -> int:
        """Spots-marked count with the highest expected value"""
        return int(np.argmax(self.expected_values)) + 1

    def summary(self) -> Dict[int, Dict[str, float]]:
        """
        Per spots-marked count: expected value and house edge of a $1 bet.

        House edge is ``1 - expected value``.
        """
        return {
            i + 1: {
                "expected_value": float(ev),
                "house_edge": 1.0 - float(ev),
            }
            for i, ev in enumerate(self.expected_values)
        }


class KenoModel:
    """
    Computes the Keno report for one game variant.
    Deterministic: the same config always yields the same analysis.
    """

    def __init__(self, config: Optional[KenoConfig] = None):
        self.config = config or KenoConfig.standard()

    def analyze(self) -> KenoAnalysis:
        logger.info("Calculating Keno probabilities for %r", self.config)
        matrix = build_probability_matrix(self.config)
        validate_probability_matrix(matrix)

        logger.info("Calculating expected values")
        values = expected_values(matrix, self.config)

        # Results are read-only
        matrix.setflags(write=False)
        values.setflags(write=False)
        return KenoAnalysis(
            config=self.config,
            probability_matrix=matrix,
            expected_values=values,
        )

    def export(self, analysis: KenoAnalysis, sink: BaseTabularSink) -> None:
        """Write both tables of ``analysis`` and close ``sink``, or abort it on failure."""
        with sink:
            export_results(sink, analysis.probability_matrix, analysis.expected_values)
