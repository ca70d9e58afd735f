"""Keno Edge Analyzer: hypergeometric catch probabilities and $1-bet expected values."""

__version__ = "1.0.0"
