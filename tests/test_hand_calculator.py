"""Tests for the opening-hand calculator."""

from __future__ import annotations

import pytest

from services.combination_probability import CardCategory
from services.hand_calculator import (
    HandCalculator,
    HandProbability,
    build_miscellaneous_category,
    probability_tier,
)
from utils.constants.calculator import DEFAULT_DECK_SIZE, DEFAULT_HAND_SIZE, MISC_CATEGORY_NAME


@pytest.fixture
def allure_entries() -> list[CardCategory]:
    return [
        CardCategory(amount=1, min_count=1, max_count=1, name="Allure"),
        CardCategory(amount=10, min_count=1, max_count=4, name="DARK"),
    ]


# ---------------------------------------------------------------------------
# build_miscellaneous_category
# ---------------------------------------------------------------------------


def test_miscellaneous_covers_remaining_cards(allure_entries):
    misc = build_miscellaneous_category(allure_entries, 40, 5)
    assert misc == CardCategory(amount=29, min_count=0, max_count=3, name=MISC_CATEGORY_NAME)


def test_miscellaneous_min_fills_hand_beyond_entry_maximums():
    """If the entries can hold at most 1 card, the rest of the hand is misc."""
    entries = [CardCategory(amount=3, min_count=0, max_count=1)]
    misc = build_miscellaneous_category(entries, 40, 5)
    assert (misc.amount, misc.min_count, misc.max_count) == (37, 4, 5)


def test_miscellaneous_max_never_below_min():
    entries = [CardCategory(amount=3, min_count=3, max_count=3), CardCategory(5, 4, 4)]
    misc = build_miscellaneous_category(entries, 40, 5)
    assert misc.min_count == 0
    assert misc.max_count == 0


def test_miscellaneous_amount_never_negative():
    entries = [CardCategory(amount=45, min_count=0, max_count=5)]
    assert build_miscellaneous_category(entries, 40, 5).amount == 0


def test_miscellaneous_with_no_entries_is_whole_deck():
    misc = build_miscellaneous_category([], 40, 5)
    assert (misc.amount, misc.min_count, misc.max_count) == (40, 5, 5)


# ---------------------------------------------------------------------------
# probability_tier
# ---------------------------------------------------------------------------


@pytest.mark.parametrize(
    ("percentage", "tier"),
    [
        (100.0, "high"),
        (75.0, "high"),
        (74.99, "medium"),
        (50.0, "medium"),
        (30.0, "low"),
        (25.0, "low"),
        (8.75, "very_low"),
        (0.0, "very_low"),
    ],
)
def test_probability_tier(percentage, tier):
    assert probability_tier(percentage) == tier


# ---------------------------------------------------------------------------
# HandCalculator
# ---------------------------------------------------------------------------


class TestHandCalculatorValidation:
    """Validation failures raise ValueError with user-facing messages."""

    def test_defaults(self) -> None:
        calculator = HandCalculator()
        assert calculator.deck_size == DEFAULT_DECK_SIZE
        assert calculator.hand_size == DEFAULT_HAND_SIZE

    def test_deck_size_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="Deck size must be greater than 0"):
            HandCalculator(deck_size=0).validate([])

    @pytest.mark.parametrize("hand_size", [0, 41])
    def test_hand_size_must_fit_deck(self, hand_size: int) -> None:
        with pytest.raises(ValueError, match="Hand size must be between 1 and the deck size"):
            HandCalculator(deck_size=40, hand_size=hand_size).validate([])

    def test_negative_values_rejected(self) -> None:
        with pytest.raises(ValueError, match="All values must be non-negative"):
            HandCalculator().validate([CardCategory(amount=-1, min_count=0, max_count=0)])

    def test_min_cannot_exceed_amount(self) -> None:
        with pytest.raises(ValueError, match="min column cannot exceed"):
            HandCalculator().validate([CardCategory(amount=3, min_count=4, max_count=4)])

    def test_max_cannot_exceed_amount(self) -> None:
        with pytest.raises(ValueError, match="max column cannot exceed"):
            HandCalculator().validate([CardCategory(amount=3, min_count=0, max_count=4)])

    def test_min_cannot_exceed_max(self) -> None:
        with pytest.raises(ValueError, match="min value cannot be greater than the max value"):
            HandCalculator().validate([CardCategory(amount=3, min_count=2, max_count=1)])

    def test_total_must_equal_deck_size(self) -> None:
        """41 cards claimed in a 40-card deck leaves an empty misc bucket."""
        with pytest.raises(ValueError, match="Total amount of cards must equal deck size"):
            HandCalculator().validate([CardCategory(amount=41, min_count=5, max_count=5)])

    def test_validate_appends_miscellaneous(self, allure_entries) -> None:
        validated = HandCalculator().validate(allure_entries)
        assert validated[:2] == allure_entries
        assert validated[-1].name == MISC_CATEGORY_NAME
        assert sum(entry.amount for entry in validated) == 40


class TestHandCalculatorCalculate:
    """End-to-end calculations through the probability core."""

    def test_allure_example(self, allure_entries) -> None:
        result = HandCalculator(40, 5).calculate(allure_entries)
        assert isinstance(result, HandProbability)
        assert result.probability == pytest.approx(12.5 * 63985 / 91390, rel=1e-9)
        assert result.tier == "very_low"
        assert len(result.categories) == 3

    def test_allure_example_exact(self, allure_entries) -> None:
        result = HandCalculator(40, 5).calculate(allure_entries, exact=True)
        assert result.probability == pytest.approx(12.5 * 58500 / 82251, rel=1e-9)

    def test_no_entries_is_certain(self) -> None:
        result = HandCalculator(40, 5).calculate([])
        assert result.probability == pytest.approx(100.0, rel=1e-9)
        assert result.tier == "high"

    def test_summary(self, allure_entries) -> None:
        result = HandCalculator(40, 5).calculate(allure_entries)
        assert result.summary() == "You have a 8.75% chance to open this hand."

    def test_invalid_entries_raise(self) -> None:
        with pytest.raises(ValueError):
            HandCalculator(40, 5).calculate([CardCategory(amount=3, min_count=2, max_count=1)])
