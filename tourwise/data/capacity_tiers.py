"""Venue capacity tiers and the network compatibility tables keyed on them.

Static reference data used by the network trust scorer. Tiers are ordered from
smallest to largest; the distance between two tiers is the difference of their
positions in ``CAPACITY_TIERS``.
"""

# ---------- Tiers ----------

CAPACITY_TIERS: tuple[str, ...] = ("small", "medium", "large", "extra_large")

# Upper bound (inclusive) for each tier; extra_large is open-ended.
TIER_UPPER_BOUNDS: dict[str, int] = {
    "small": 500,
    "medium": 2000,
    "large": 5000,
}


# ---------- Compatibility by tier distance ----------

# 0 = same tier, 1 = adjacent, 2 = distant, 3 = incompatible
TIER_BASE_TRUST: dict[int, int] = {
    0: 85,
    1: 75,
    2: 65,
    3: 50,
}

# Heuristic prior that two venues would co-host a collaborative booking.
# Not a measured frequency.
TIER_COLLABORATION_LIKELIHOOD: dict[int, float] = {
    0: 0.8,
    1: 0.6,
    2: 0.3,
    3: 0.1,
}

SAME_REGION_BONUS = 10

MIN_TRUST_SCORE = 50
MAX_TRUST_SCORE = 100
