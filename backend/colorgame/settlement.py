from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, List, NamedTuple

from .models import Bet, Color

COLOR_MULTIPLIER = Decimal("1.95")
VIOLET_MULTIPLIER = Decimal("4.5")
NUMBER_MULTIPLIER = Decimal("9")

D0 = Decimal("0.00")


def q2(x: Decimal) -> Decimal:
    return x.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)


class BetResult(NamedTuple):
    bet_id: int
    status: str
    payout: Decimal


def _multiplier(bet, round_obj):
    """Returns the payout factor for a winning bet, or None if it lost."""
    if bet.bet_type == Bet.COLOR:
        if bet.bet_value != round_obj.color:
            return None
        return VIOLET_MULTIPLIER if round_obj.color == Color.VIOLET else COLOR_MULTIPLIER

    if bet.bet_type == Bet.NUMBER:
        try:
            picked = int(bet.bet_value)
        except (TypeError, ValueError):
            return None
        return NUMBER_MULTIPLIER if picked == round_obj.number else None

    return None


def settle(round_obj, bets: Iterable) -> List[BetResult]:
    """
    Win/loss and payout for every bet on a round. Pure: reads the round's
    colour and number and each bet's type, value and amount, writes nothing.
    """
    results = []
    for bet in bets:
        multiplier = _multiplier(bet, round_obj)
        if multiplier is None:
            results.append(BetResult(bet.id, Bet.LOST, D0))
        else:
            payout = q2(Decimal(bet.amount) * multiplier)
            results.append(BetResult(bet.id, Bet.WON, payout))
    return results
