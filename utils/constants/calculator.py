"""Hand calculator defaults and probability tiers."""

DEFAULT_DECK_SIZE = 40
DEFAULT_HAND_SIZE = 5

MISC_CATEGORY_NAME = "Miscellaneous"

# (lower bound in percent, tier name), checked top to bottom
PROBABILITY_TIERS = (
    (75.0, "high"),
    (50.0, "medium"),
    (25.0, "low"),
)
LOWEST_PROBABILITY_TIER = "very_low"
