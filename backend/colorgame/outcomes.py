import random
from typing import NamedTuple

from .models import Color

GREEN_NUMBERS = frozenset({1, 3, 7, 9})
RED_NUMBERS = frozenset({2, 4, 6, 8})


class Outcome(NamedTuple):
    color: str
    number: int


def color_for_number(number: int, rng: random.Random) -> str:
    """
    0 and 5 are split 50/50 with violet; every other digit has a fixed colour.
    """
    if number == 0:
        return Color.RED.value if rng.random() < 0.5 else Color.VIOLET.value
    if number == 5:
        return Color.GREEN.value if rng.random() < 0.5 else Color.VIOLET.value
    if number in GREEN_NUMBERS:
        return Color.GREEN.value
    if number in RED_NUMBERS:
        return Color.RED.value
    raise ValueError(f"Round number must be 0-9, got {number}")


class OutcomeGenerator:
    def __init__(self, rng=None):
        self.rng = rng or random.SystemRandom()

    def generate(self) -> Outcome:
        number = self.rng.randrange(10)
        return Outcome(color=color_for_number(number, self.rng), number=number)
