"""Counting primitives for Keno probabilities — the single source of truth.

Every function here is **pure**: no I/O, no logging, no side effects.
Import from this module; never reimplement factorials locally in services.

The three pillars exposed are:

1. **Factorial** — exact integer ``n!``.
2. **Partial factorial** — the falling product ``n × (n−1) × … × (n−k+1)``.
3. **Combinations** — ``C(n, r)``, "n things taken r at a time".

Design decisions
----------------
* :func:`partial_factorial` returns a ``float``.  The Keno formula divides
  products of up to 20 terms drawn from 80 balls; computing ``80!`` outright
  and cancelling is wasteful, while the truncated product keeps magnitudes
  around 1e37 at most, comfortably inside double range.
* :func:`factorial` and :func:`combinations` stay exact integers.  Python
  integers are arbitrary precision, so the 64-bit overflow above 20!
  does not apply here.
* ``combinations(n, r)`` returns 0 for ``r > n`` instead of raising, because
  "no ways to choose" is the mathematically correct answer and lets callers
  enumerate grids without bounds checks.

Run tests with::

    pytest tests/test_combinatorics.py -v
"""

from __future__ import annotations

import math


# ---------------------------------------------------------------------------
# Factorials
# ---------------------------------------------------------------------------


def factorial(n: int) -> int:
    """Exact factorial ``n!``.

    Args:
        n: Non-negative integer.

    Returns:
        ``n!`` as an integer.  ``factorial(0) == factorial(1) == 1``.

    Raises:
        ValueError: If ``n`` is negative.
    """
    if n < 0:
        raise ValueError(f"factorial() is undefined for negative n={n!r}.")
    return math.factorial(n)


def partial_factorial(n: int, terms: int) -> float:
    """Product of the ``terms`` highest factors of ``n!``.

    Starts a factorial computation at ``n`` and stops after ``terms``
    factors::

        partial_factorial(10, 4) → 10 × 9 × 8 × 7 = 5040.0
        partial_factorial(80, 0) → 1.0

    When ``terms > n`` the product passes through zero and the result is
    0.0, which is the correct count of ordered draws of ``terms`` items
    from a pool of ``n``.

    Args:
        n: Initial (largest) factor.
        terms: Number of descending factors to multiply.

    Returns:
        The falling product as a float.

    Raises:
        ValueError: If ``terms`` is negative.
    """
    if terms < 0:
        raise ValueError(
            f"partial_factorial() needs a non-negative term count, got {terms!r}."
        )
    result = 1.0
    for i in range(terms):
        result *= n - i
    return result


# ---------------------------------------------------------------------------
# Combinations
# ---------------------------------------------------------------------------


def combinations(n: int, r: int) -> int:
    """Number of ``r``-sized subsets of an ``n``-element set.

    Order does not matter: from {apple, orange, pear} there are three
    2-combinations.  Computed as ``n! / (r! · (n−r)!)``.

    Args:
        n: Group size (number of things to choose from).
        r: Subgroup size (number of things chosen).

    Returns:
        ``C(n, r)``, or 0 when ``r > n`` or ``r < 0``.

    Raises:
        ValueError: If ``n`` is negative.

    Examples::

        combinations(9, 5)  → 126
        combinations(20, 0) → 1
        combinations(3, 4)  → 0
    """
    if n < 0:
        raise ValueError(f"combinations() is undefined for negative n={n!r}.")
    if r < 0 or r > n:
        return 0
    return factorial(n) // (factorial(r) * factorial(n - r))
