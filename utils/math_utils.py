"""
Mathematical utility functions for probability calculations.

This module provides log-space combinatorics and the hypergeometric
distribution used to price an opening hand. All probabilities returned
here are percentages in the range 0.0 to 100.0.
"""

import math


def log_binomial(n: int, k: int) -> float:
    """
    Calculate the natural logarithm of the binomial coefficient C(n, k).

    Works in log space so realistic deck sizes never overflow a factorial.

    Formula: ln C(n, k) = sum_{i=0}^{k-1} [ln(n - i) - ln(i + 1)]

    Args:
        n: Size of the pool being chosen from
        k: Number of items chosen

    Returns:
        ln(C(n, k)). ``0.0`` when ``k`` is 0, and ``-inf`` when the pool runs
        out before ``k`` items are chosen (the coefficient is zero).

    Example:
        >>> round(math.exp(log_binomial(10, 3)))
        120
    """
    result = 0.0
    for i in range(k):
        remaining = n - i
        if remaining <= 0:
            # ln(0) is -inf; C(n, k) is zero once the pool is exhausted
            return -math.inf
        result += math.log(remaining)
        result -= math.log(i + 1)
    return result


def hypergeometric(
    deck_size: int,
    hand_size: int,
    successes_in_deck: int,
    successes_needed: int,
) -> float:
    """
    Calculate the probability of drawing exactly ``successes_needed`` target cards.

    Formula: P(X = k) = [C(K, k) × C(N-K, n-k)] / C(N, n), evaluated as
    exp(ln numerator - ln denominator) to stay precise for large decks.

    Impossible or malformed requests return 0.0 instead of raising.

    Args:
        deck_size: Total number of cards in the deck (N)
        hand_size: Number of cards drawn (n)
        successes_in_deck: Number of target cards in the deck (K)
        successes_needed: Target number of cards to draw (k)

    Returns:
        Probability as a percentage between 0.0 and 100.0

    Example:
        >>> # Exactly 1 copy of a 3-of in a 5-card hand from 40 cards
        >>> hypergeometric(40, 5, 3, 1)
        30.11...
    """
    if successes_needed > successes_in_deck or successes_needed > hand_size:
        return 0.0
    if successes_needed < 0 or hand_size < 0 or successes_in_deck < 0:
        return 0.0
    if deck_size < hand_size:
        return 0.0

    log_numerator = log_binomial(successes_in_deck, successes_needed) + log_binomial(
        deck_size - successes_in_deck, hand_size - successes_needed
    )
    log_denominator = log_binomial(deck_size, hand_size)

    return math.exp(log_numerator - log_denominator) * 100


def hypergeometric_at_least(
    deck_size: int,
    hand_size: int,
    successes_in_deck: int,
    min_successes: int,
) -> float:
    """
    Calculate the probability of drawing at least ``min_successes`` target cards.

    Sums exact probabilities from ``min_successes`` up to the most target
    cards that could appear in the hand.

    Returns:
        Probability as a percentage between 0.0 and 100.0

    Example:
        >>> # At least 1 copy of a 3-of in a 5-card hand from 40 cards
        >>> hypergeometric_at_least(40, 5, 3, 1)
        33.75...
    """
    if min_successes <= 0:
        return 100.0

    max_successes = min(hand_size, successes_in_deck)
    if min_successes > max_successes:
        return 0.0

    total = 0.0
    for k in range(min_successes, max_successes + 1):
        total += hypergeometric(deck_size, hand_size, successes_in_deck, k)
    return total
