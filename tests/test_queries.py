from datetime import timedelta

import pytest
from django.utils import timezone

from colorgame.queries import (
    get_current_round,
    get_game_state,
    get_recent_rounds,
    get_user_bets,
    is_betting_open,
    seconds_remaining,
)
from colorgame.services import place_bet


@pytest.mark.django_db
def test_no_rounds_yet():
    assert get_current_round() is None
    assert get_recent_rounds(5) == []

    state = get_game_state()
    assert state["current_round"] is None
    assert state["seconds_remaining"] == 0
    assert state["betting_open"] is False


@pytest.mark.django_db
def test_recent_rounds_newest_first_and_capped(make_round):
    rounds = [make_round(seconds_ago=30 * (5 - i)) for i in range(5)]

    recent = get_recent_rounds(3)

    assert [r.id for r in recent] == [r.id for r in reversed(rounds)][:3]
    assert get_current_round().id == rounds[-1].id
    assert len(get_recent_rounds(50)) == 5
    assert get_recent_rounds(0) == []


@pytest.mark.django_db
def test_same_timestamp_falls_back_to_id(make_round):
    now = timezone.now()
    a = make_round()
    b = make_round()
    type(a).objects.filter(pk__in=[a.pk, b.pk]).update(created_at=now)

    assert get_current_round().id == b.id


@pytest.mark.django_db
def test_countdown(make_round):
    round_obj = make_round()
    start = round_obj.created_at

    assert seconds_remaining(round_obj, start) == 30
    assert seconds_remaining(round_obj, start + timedelta(seconds=12.7)) == 18
    assert seconds_remaining(round_obj, start + timedelta(seconds=45)) == 0

    assert is_betting_open(round_obj, start + timedelta(seconds=24))
    assert not is_betting_open(round_obj, start + timedelta(seconds=25))


@pytest.mark.django_db
def test_countdown_follows_settings(make_round, settings):
    settings.COLOR_ROUND_INTERVAL = 60
    settings.COLOR_BET_GRACE = 10
    round_obj = make_round()
    start = round_obj.created_at

    assert seconds_remaining(round_obj, start + timedelta(seconds=45)) == 15
    assert is_betting_open(round_obj, start + timedelta(seconds=49))
    assert not is_betting_open(round_obj, start + timedelta(seconds=50))


@pytest.mark.django_db
def test_game_state(make_round):
    make_round(seconds_ago=40)
    current = make_round(seconds_ago=10)

    state = get_game_state(history=20, now=current.created_at + timedelta(seconds=10))

    assert state["current_round"].id == current.id
    assert len(state["recent_rounds"]) == 2
    assert state["seconds_remaining"] == 20
    assert state["betting_open"] is True


@pytest.mark.django_db
def test_user_bets_newest_first(player, other_player, make_round):
    make_round()
    first = place_bet(player.id, "color", "red", "1.00")
    second = place_bet(player.id, "number", "3", "2.00")
    place_bet(other_player.id, "color", "green", "1.00")

    bets = get_user_bets(player.id)

    assert [b.id for b in bets] == [second.id, first.id]
    assert len(get_user_bets(player.id, limit=1)) == 1
