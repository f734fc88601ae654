import logging
import uuid
from decimal import Decimal, InvalidOperation

from django.contrib.auth import get_user_model
from django.db import DatabaseError, transaction
from django.utils import timezone

from wallets.services import debit_for_bet
from .exceptions import BettingClosed, InvalidBet, NoActiveRound, PersistenceFailure, UserNotFound
from .models import Bet, Color, GameRound
from .queries import is_betting_open

logger = logging.getLogger(__name__)

User = get_user_model()

COLOR_VALUES = frozenset(c.value for c in Color)
NUMBER_VALUES = frozenset(str(n) for n in range(10))
# integer digits that fit the 12,2 amount columns
MAX_AMOUNT_DIGITS = 10


def validate_bet(bet_type, bet_value, amount):
    """
    Normalises raw request input. Returns (bet_type, bet_value, amount).
    """
    bet_type = (bet_type or "").strip().lower()
    bet_value = str(bet_value if bet_value is not None else "").strip().lower()

    if bet_type == Bet.COLOR:
        if bet_value not in COLOR_VALUES:
            raise InvalidBet(f"Unknown colour {bet_value!r}")
    elif bet_type == Bet.NUMBER:
        if bet_value not in NUMBER_VALUES:
            raise InvalidBet(f"Number bets take a single digit 0-9, got {bet_value!r}")
    else:
        raise InvalidBet(f"Unknown bet type {bet_type!r}")

    try:
        amount = Decimal(str(amount))
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidBet(f"Invalid bet amount {amount!r}")

    if not amount.is_finite() or amount <= 0:
        raise InvalidBet("Bet amount must be positive")
    if amount.as_tuple().exponent < -2:
        raise InvalidBet("Bet amount takes at most 2 decimal places")
    if amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidBet(f"Bet amount {amount} is too large")

    try:
        return bet_type, bet_value, amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise InvalidBet(f"Invalid bet amount {amount!r}")


def place_bet(user_id, bet_type, bet_value, amount, now=None) -> Bet:
    """
    Record a wager on the current round and take it out of the balance.

    Either the bet row and the debit both land, or neither does.
    """
    bet_type, bet_value, amount = validate_bet(bet_type, bet_value, amount)
    now = now or timezone.now()

    try:
        with transaction.atomic():
            round_obj = GameRound.objects.current()
            if round_obj is None:
                raise NoActiveRound()
            if not is_betting_open(round_obj, now):
                raise BettingClosed(round_obj.period_number)

            if not User.objects.filter(pk=user_id).exists():
                raise UserNotFound(user_id)

            ref = f"COLORBET-{round_obj.id}-{user_id}-{uuid.uuid4().hex[:12]}"
            debit_for_bet(
                user_id,
                amount,
                ref,
                meta={"reason": "color_bet", "period_number": round_obj.period_number},
            )

            bet = Bet.objects.create(
                user_id=user_id,
                round=round_obj,
                bet_type=bet_type,
                bet_value=bet_value,
                amount=amount,
            )
    except DatabaseError as e:
        logger.error("Bet placement failed for user %s: %s", user_id, e, exc_info=True)
        raise PersistenceFailure("Failed to place bet") from e

    logger.info(
        "User %s bet %s on %s=%s for period %s",
        user_id, amount, bet_type, bet_value, round_obj.period_number,
    )
    return bet
