"""Core mathematics and configuration for the Keno Edge Analyzer.

This package contains pure, game-agnostic building blocks:

- ``combinatorics``  — factorial, partial (falling) factorial, combinations
- ``game_config``    — per-variant constants (ball counts, payout sheet)
- ``sink_interface`` — ABC and DTO for swappable tabular output sinks

Nothing in this package imports from ``keno_analyzer.services``.
All modules are side-effect-free and unit-testable in isolation.
"""
