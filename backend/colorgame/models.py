from decimal import Decimal

from django.conf import settings
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models
from django.utils import timezone


class Color(models.TextChoices):
    RED = "red", "Red"
    GREEN = "green", "Green"
    VIOLET = "violet", "Violet"


class GameRoundQuerySet(models.QuerySet):
    def newest_first(self):
        return self.order_by("-created_at", "-id")

    def current(self):
        return self.newest_first().first()

    def recent(self, limit):
        return list(self.newest_first()[:limit])


class GameRound(models.Model):
    """
    One 30-second betting cycle. The outcome is drawn when the round is
    created and is only settled when the following round opens.
    """

    period_number = models.CharField(max_length=32, unique=True)
    color = models.CharField(max_length=8, choices=Color.choices)
    number = models.PositiveSmallIntegerField(
        validators=[MinValueValidator(0), MaxValueValidator(9)]
    )
    created_at = models.DateTimeField(default=timezone.now, db_index=True)

    objects = GameRoundQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Period {self.period_number} -> {self.number} {self.color}"


class BetQuerySet(models.QuerySet):
    def for_round(self, round_id):
        return self.filter(round_id=round_id)

    def pending(self):
        return self.filter(status=Bet.PENDING)

    def for_user(self, user_id, limit=10):
        return list(
            self.filter(user_id=user_id)
            .select_related("round")
            .order_by("-created_at", "-id")[:limit]
        )


class Bet(models.Model):
    COLOR = "color"
    NUMBER = "number"
    BET_TYPES = [
        (COLOR, "Color"),
        (NUMBER, "Number"),
    ]

    PENDING = "pending"
    WON = "won"
    LOST = "lost"
    BET_STATUS = [
        (PENDING, "Pending"),
        (WON, "Won"),
        (LOST, "Lost"),
    ]

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name="color_bets"
    )
    round = models.ForeignKey(GameRound, on_delete=models.PROTECT, related_name="bets")
    bet_type = models.CharField(max_length=8, choices=BET_TYPES)
    bet_value = models.CharField(max_length=8)
    amount = models.DecimalField(max_digits=12, decimal_places=2)
    payout = models.DecimalField(max_digits=12, decimal_places=2, default=Decimal("0.00"))
    status = models.CharField(max_length=8, choices=BET_STATUS, default=PENDING)
    created_at = models.DateTimeField(auto_now_add=True)
    settled_at = models.DateTimeField(null=True, blank=True)

    objects = BetQuerySet.as_manager()

    class Meta:
        indexes = [
            models.Index(fields=["round", "status"], name="color_bet_round_status_idx"),
            models.Index(fields=["user", "created_at"], name="color_bet_user_created_idx"),
        ]

    def __str__(self):
        return f"Bet {self.id} on {self.bet_type}={self.bet_value} ({self.status})"

    @property
    def is_pending(self):
        return self.status == self.PENDING

    def resolve(self, status, payout):
        """Move a pending bet to its terminal status. Only settlement calls this."""
        if not self.is_pending:
            raise ValueError(f"Bet {self.id} already settled as {self.status}")
        self.status = status
        self.payout = payout
        self.settled_at = timezone.now()
        self.save(update_fields=["status", "payout", "settled_at"])
