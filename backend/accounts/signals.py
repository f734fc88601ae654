# accounts/signals.py
from decimal import Decimal

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db.models.signals import post_save
from django.dispatch import receiver

from wallets.models import Wallet

User = get_user_model()


@receiver(post_save, sender=User)
def create_wallet(sender, instance, created, **kwargs):
    """
    Every new player starts with the house starting balance.
    """
    if not created:
        return

    Wallet.objects.get_or_create(
        user=instance,
        defaults={"balance": Decimal(settings.COLOR_STARTING_BALANCE)},
    )
