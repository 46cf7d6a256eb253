"""Taglines shown on the about page."""

import random

TAGLINES = (
    "Code like nobody is reviewing.",
    "Ship small, ship often.",
    "Every bug is a lesson in disguise.",
    "Read the error message. Then read it again.",
    "Simple is better than clever.",
    "Tests are the ninja's armour.",
)


def get_tagline(rng: random.Random | None = None) -> str:
    """Return one tagline chosen at random."""
    return (rng or random).choice(TAGLINES)
