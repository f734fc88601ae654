"""
Read-only views of the live game, used by the API and the websocket
consumer. Nothing here writes.
"""
import math

from django.conf import settings
from django.utils import timezone

from .models import Bet, GameRound


def get_current_round():
    return GameRound.objects.current()


def get_recent_rounds(n):
    if n <= 0:
        return []
    return GameRound.objects.recent(n)


def seconds_remaining(round_obj, now=None) -> int:
    """Countdown shown to players, floored at zero."""
    now = now or timezone.now()
    elapsed = math.floor((now - round_obj.created_at).total_seconds())
    return max(0, settings.COLOR_ROUND_INTERVAL - elapsed)


def is_betting_open(round_obj, now=None) -> bool:
    return seconds_remaining(round_obj, now) > settings.COLOR_BET_GRACE


def get_game_state(history=None, now=None) -> dict:
    now = now or timezone.now()
    history = history if history is not None else settings.COLOR_HISTORY_SIZE

    current = get_current_round()
    return {
        "current_round": current,
        "recent_rounds": get_recent_rounds(history),
        "seconds_remaining": seconds_remaining(current, now) if current else 0,
        "betting_open": is_betting_open(current, now) if current else False,
        "server_time": now,
    }


def get_user_bets(user_id, limit=20):
    return Bet.objects.for_user(user_id, limit=limit)
