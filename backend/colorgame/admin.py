# colorgame/admin.py
from django.contrib import admin
from .models import Bet, GameRound

@admin.register(GameRound)
class GameRoundAdmin(admin.ModelAdmin):
    list_display = ("period_number", "number", "color", "created_at")
    list_filter = ("color",)
    search_fields = ("period_number",)
    readonly_fields = ("period_number", "color", "number", "created_at")

    def has_delete_permission(self, request, obj=None):
        return False

@admin.register(Bet)
class BetAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "round", "bet_type", "bet_value", "amount", "payout", "status", "created_at")
    list_filter = ("status", "bet_type")
    search_fields = ("user__username", "round__period_number")
    readonly_fields = ("user", "round", "bet_type", "bet_value", "amount", "payout", "status", "created_at", "settled_at")
