"""Opening-hand calculator that prepares categories for the probability core."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from loguru import logger

from services.combination_probability import (
    CardCategory,
    multi_condition,
    multi_condition_exact,
)
from utils.constants.calculator import (
    DEFAULT_DECK_SIZE,
    DEFAULT_HAND_SIZE,
    LOWEST_PROBABILITY_TIER,
    MISC_CATEGORY_NAME,
    PROBABILITY_TIERS,
)


def build_miscellaneous_category(
    entries: Sequence[CardCategory],
    deck_size: int,
    hand_size: int,
) -> CardCategory:
    """Return the catch-all category covering every card not in ``entries``."""
    amount = max(0, deck_size - sum(entry.amount for entry in entries))
    min_count = max(0, hand_size - sum(entry.max_count for entry in entries))
    max_count = hand_size - sum(entry.min_count for entry in entries)
    return CardCategory(
        amount=amount,
        min_count=min_count,
        max_count=max(max_count, min_count),
        name=MISC_CATEGORY_NAME,
    )


def probability_tier(percentage: float) -> str:
    for threshold, tier in PROBABILITY_TIERS:
        if percentage >= threshold:
            return tier
    return LOWEST_PROBABILITY_TIER


@dataclass(frozen=True)
class HandProbability:
    probability: float
    categories: tuple[CardCategory, ...]
    tier: str

    def summary(self) -> str:
        return f"You have a {self.probability:.2f}% chance to open this hand."


class HandCalculator:
    """Validate a deck layout and compute the chance of opening it."""

    def __init__(
        self,
        deck_size: int = DEFAULT_DECK_SIZE,
        hand_size: int = DEFAULT_HAND_SIZE,
    ) -> None:
        self.deck_size = deck_size
        self.hand_size = hand_size

    def with_miscellaneous(self, entries: Sequence[CardCategory]) -> list[CardCategory]:
        misc = build_miscellaneous_category(entries, self.deck_size, self.hand_size)
        return [*entries, misc]

    def validate(self, entries: Sequence[CardCategory]) -> list[CardCategory]:
        """
        Check deck/hand sizes and every entry, including the miscellaneous one.

        Returns:
            The entries with the miscellaneous category appended

        Raises:
            ValueError: With a user-facing message for the first problem found
        """
        if self.deck_size <= 0:
            raise ValueError("Deck size must be greater than 0.")
        if self.hand_size <= 0 or self.hand_size > self.deck_size:
            raise ValueError("Hand size must be between 1 and the deck size.")

        all_entries = self.with_miscellaneous(entries)
        for entry in all_entries:
            if entry.amount < 0 or entry.min_count < 0 or entry.max_count < 0:
                raise ValueError("All values must be non-negative.")
            if entry.min_count > entry.amount:
                raise ValueError("The min column cannot exceed the amount of cards entered.")
            if entry.max_count > entry.amount:
                raise ValueError("The max column cannot exceed the amount of cards entered.")
            if entry.min_count > entry.max_count:
                raise ValueError("The min value cannot be greater than the max value.")

        total_cards = sum(entry.amount for entry in all_entries)
        if total_cards != self.deck_size:
            raise ValueError("Total amount of cards must equal deck size.")

        return all_entries

    def calculate(self, entries: Sequence[CardCategory], *, exact: bool = False) -> HandProbability:
        try:
            all_entries = self.validate(entries)
        except ValueError as exc:
            logger.warning(f"Unable to calculate percentage: {exc}")
            raise

        compose = multi_condition_exact if exact else multi_condition
        probability = compose(self.deck_size, self.hand_size, all_entries)
        logger.debug(
            f"Hand probability {probability:.4f}% "
            f"(deck={self.deck_size}, hand={self.hand_size}, categories={len(all_entries)})"
        )
        return HandProbability(
            probability=probability,
            categories=tuple(all_entries),
            tier=probability_tier(probability),
        )


__all__ = [
    "HandCalculator",
    "HandProbability",
    "build_miscellaneous_category",
    "probability_tier",
]
