from datetime import timedelta

import pytest
from django.contrib.auth import get_user_model
from django.utils import timezone
from rest_framework.test import APIClient

from colorgame.models import GameRound
from colorgame.outcomes import Outcome

User = get_user_model()


@pytest.fixture(autouse=True)
def in_memory_channel_layer(settings):
    settings.CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
    }


@pytest.fixture
def player(db):
    # the post_save signal opens the wallet with the starting balance
    return User.objects.create_user(username="alice", password="secret123")


@pytest.fixture
def other_player(db):
    return User.objects.create_user(username="bob", password="secret123")


@pytest.fixture
def make_round(db):
    counter = {"n": 0}

    def _make(color="red", number=2, seconds_ago=0, period_number=None):
        counter["n"] += 1
        return GameRound.objects.create(
            period_number=period_number or f"127927270{counter['n']:03d}",
            color=color,
            number=number,
            created_at=timezone.now() - timedelta(seconds=seconds_ago),
        )

    return _make


@pytest.fixture
def api_client():
    return APIClient()


class FixedGenerator:
    """Hands out a scripted sequence of outcomes."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)

    def generate(self):
        color, number = self.outcomes.pop(0)
        return Outcome(color=color, number=number)


@pytest.fixture
def fixed_generator():
    return FixedGenerator
