"""Multi-category hand probability built on the hypergeometric evaluator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence

from loguru import logger

from utils.math_utils import hypergeometric


@dataclass(frozen=True)
class CardCategory:
    """A partition of the deck with an allowed draw-count range."""

    amount: int
    min_count: int
    max_count: int
    name: str = ""

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CardCategory:
        return cls(
            amount=int(data["amount"]),
            min_count=int(data["min"]),
            max_count=int(data["max"]),
            name=str(data.get("name") or ""),
        )

    def is_consistent(self) -> bool:
        return (
            self.min_count <= self.amount
            and self.max_count <= self.amount
            and self.min_count <= self.max_count
        )


def _has_invalid_range(categories: Sequence[CardCategory]) -> bool:
    for category in categories:
        if not category.is_consistent():
            logger.debug(
                f"Rejecting category {category.name or '<unnamed>'}: "
                f"amount={category.amount} min={category.min_count} max={category.max_count}"
            )
            return True
    return False


def multi_condition(
    deck_size: int,
    hand_size: int,
    categories: Sequence[CardCategory],
) -> float:
    """
    Calculate the probability that a hand satisfies every category range at once.

    Categories are treated as a sequential partition of the hand: each one
    is evaluated against the hand slots left after the earlier categories'
    counts are fixed. Every candidate count is priced against the full deck.

    The caller folds uncategorized cards into a trailing miscellaneous
    category so that the amounts sum to ``deck_size``.

    Args:
        deck_size: Total number of cards in the deck
        hand_size: Number of cards drawn
        categories: Ordered categories; read only

    Returns:
        Probability as a percentage between 0.0 and 100.0. Inconsistent
        category ranges yield 0.0.
    """
    if _has_invalid_range(categories):
        return 0.0

    total = 0.0

    def generate_combinations(index: int, remaining_hand: int, probability: float) -> None:
        nonlocal total
        if index == len(categories):
            # >= 0 rather than == 0: leftover slots are tolerated
            if remaining_hand >= 0:
                total += probability
            return

        category = categories[index]
        upper = min(category.max_count, remaining_hand, category.amount)
        for drawn in range(category.min_count, upper + 1):
            current = hypergeometric(deck_size, remaining_hand, category.amount, drawn) / 100
            if current == 0:
                continue
            generate_combinations(index + 1, remaining_hand - drawn, probability * current)

    generate_combinations(0, hand_size, 1.0)
    return total * 100


def multi_condition_exact(
    deck_size: int,
    hand_size: int,
    categories: Sequence[CardCategory],
) -> float:
    """
    Calculate the exact multivariate hypergeometric probability for the ranges.

    Unlike :func:`multi_condition`, each category is drawn from the cards not
    yet claimed by earlier categories, so the result does not depend on
    category order. Deck cards outside every category fill whatever hand
    slots remain.
    """
    if _has_invalid_range(categories):
        return 0.0

    total = 0.0
    # explicit work stack of (index, remaining_deck, remaining_hand, probability)
    stack: list[tuple[int, int, int, float]] = [(0, deck_size, hand_size, 1.0)]
    while stack:
        index, remaining_deck, remaining_hand, probability = stack.pop()
        if index == len(categories):
            if remaining_hand >= 0:
                total += probability
            continue

        category = categories[index]
        upper = min(category.max_count, remaining_hand, category.amount)
        for drawn in range(category.min_count, upper + 1):
            current = (
                hypergeometric(remaining_deck, remaining_hand, category.amount, drawn) / 100
            )
            if current == 0:
                continue
            stack.append(
                (
                    index + 1,
                    remaining_deck - category.amount,
                    remaining_hand - drawn,
                    probability * current,
                )
            )

    return total * 100


__all__ = ["CardCategory", "multi_condition", "multi_condition_exact"]
