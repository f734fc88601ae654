from decimal import Decimal
from rest_framework import serializers
from .models import Bet, GameRound


class GameRoundSerializer(serializers.ModelSerializer):
    """
    The newest round's outcome is already stored but not yet settled; pass
    its id as `hidden_round_id` in the context to keep it out of the payload.
    """

    revealed = serializers.SerializerMethodField()

    class Meta:
        model = GameRound
        fields = [
            "id",
            "period_number",
            "color",
            "number",
            "created_at",
            "revealed",
        ]

    def get_revealed(self, obj):
        return obj.id != self.context.get("hidden_round_id")

    def to_representation(self, instance):
        data = super().to_representation(instance)
        if not data["revealed"]:
            data["color"] = None
            data["number"] = None
        return data


class BetSerializer(serializers.ModelSerializer):
    period_number = serializers.CharField(source="round.period_number", read_only=True)

    class Meta:
        model = Bet
        fields = [
            "id",
            "round",
            "period_number",
            "bet_type",
            "bet_value",
            "amount",
            "payout",
            "status",
            "created_at",
            "settled_at",
        ]


class PlaceBetIn(serializers.Serializer):
    bet_type = serializers.ChoiceField(choices=[c[0] for c in Bet.BET_TYPES])
    bet_value = serializers.CharField(max_length=8)
    amount = serializers.DecimalField(
        max_digits=12,
        decimal_places=2,
        min_value=Decimal("0.01"),
    )
