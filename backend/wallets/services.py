from decimal import Decimal
from django.db import transaction
from django.db.models import F
from django.utils import timezone
from .models import Wallet, WalletTransaction
from colorgame.exceptions import InsufficientBalance, UserNotFound


# ======================================================
# INTERNAL
# ======================================================
def _get_wallet_for_update(user_id):
    try:
        return Wallet.objects.select_for_update().get(user_id=user_id)
    except Wallet.DoesNotExist:
        raise UserNotFound(user_id)


# ======================================================
# PLACE BET (DEBIT)
# ======================================================
@transaction.atomic
def debit_for_bet(user_id, amount: Decimal, reference: str, meta=None) -> Wallet:
    """
    Deduct a wager from the player's balance.

    The row is locked and the UPDATE only matches while the balance still
    covers the amount, so two concurrent placements can never drive the
    balance below zero.
    """
    if amount <= 0:
        raise ValueError("Invalid bet amount")

    wallet = _get_wallet_for_update(user_id)

    updated = Wallet.objects.filter(pk=wallet.pk, balance__gte=amount).update(
        balance=F("balance") - amount,
        updated_at=timezone.now(),
    )
    if not updated:
        raise InsufficientBalance(user_id, amount)

    WalletTransaction.objects.create(
        user_id=user_id,
        amount=amount,
        tx_type=WalletTransaction.DEBIT,
        reference=reference,
        meta=meta or {"reason": "color_bet"},
    )

    wallet.refresh_from_db(fields=["balance", "updated_at"])
    return wallet


# ======================================================
# PAYOUT (CREDIT)
# ======================================================
@transaction.atomic
def credit_payout(user_id, payout: Decimal, reference: str, meta=None) -> Wallet:
    if payout < 0:
        raise ValueError("Invalid payout amount")

    wallet = _get_wallet_for_update(user_id)

    Wallet.objects.filter(pk=wallet.pk).update(
        balance=F("balance") + payout,
        updated_at=timezone.now(),
    )

    WalletTransaction.objects.create(
        user_id=user_id,
        amount=payout,
        tx_type=WalletTransaction.CREDIT,
        reference=reference,
        meta=meta or {"reason": "color_payout"},
    )

    wallet.refresh_from_db(fields=["balance", "updated_at"])
    return wallet
