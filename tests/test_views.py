from decimal import Decimal

import pytest
from django.urls import reverse

from colorgame.models import Bet
from wallets.models import Wallet


@pytest.mark.django_db
def test_register_starts_player_at_fifty(api_client):
    resp = api_client.post(
        reverse("register"), {"username": "carol", "password": "hunter22"}, format="json"
    )

    assert resp.status_code == 201
    assert resp.data["username"] == "carol"
    assert resp.data["balance"] == "50.00"
    assert len(resp.data["user_uid"]) == 8
    assert "password" not in resp.data


@pytest.mark.django_db
def test_register_rejects_duplicate_username(api_client, player):
    resp = api_client.post(
        reverse("register"), {"username": "Alice", "password": "hunter22"}, format="json"
    )
    assert resp.status_code == 400
    assert "username" in resp.data


@pytest.mark.django_db
def test_login_and_profile(api_client, player):
    bad = api_client.post(reverse("login"), {"username": "alice", "password": "nope"}, format="json")
    assert bad.status_code == 401

    resp = api_client.post(reverse("login"), {"username": "alice", "password": "secret123"}, format="json")
    assert resp.status_code == 200

    profile = api_client.get(reverse("profile"))
    assert profile.status_code == 200
    assert profile.data["balance"] == "50.00"


@pytest.mark.django_db
def test_current_game_hides_unsettled_outcome(api_client, make_round):
    previous = make_round(color="violet", number=0, seconds_ago=31)
    current = make_round(color="green", number=9, seconds_ago=3)

    resp = api_client.get(reverse("colorgame-current"))

    assert resp.status_code == 200
    assert resp.data["current_round"]["period_number"] == current.period_number
    assert resp.data["current_round"]["color"] is None
    assert resp.data["current_round"]["number"] is None
    assert resp.data["betting_open"] is True
    assert 0 < resp.data["seconds_remaining"] <= 27
    assert resp.data["round_duration"] == 30

    history = resp.data["recent_rounds"]
    assert [r["period_number"] for r in history] == [current.period_number, previous.period_number]
    assert history[0]["revealed"] is False
    assert (history[1]["color"], history[1]["number"]) == ("violet", 0)


@pytest.mark.django_db
def test_current_game_with_no_rounds(api_client):
    resp = api_client.get(reverse("colorgame-current"))
    assert resp.status_code == 200
    assert resp.data["current_round"] is None
    assert resp.data["recent_rounds"] == []


@pytest.mark.django_db
def test_place_bet_requires_login(api_client, make_round):
    make_round()
    resp = api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "color", "bet_value": "red", "amount": "10.00"},
        format="json",
    )
    assert resp.status_code in (401, 403)
    assert not Bet.objects.exists()


@pytest.mark.django_db
def test_place_bet(api_client, player, make_round):
    make_round()
    api_client.force_authenticate(player)

    resp = api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "color", "bet_value": "red", "amount": "10.00"},
        format="json",
    )

    assert resp.status_code == 201
    assert resp.data["balance"] == "40.00"
    assert resp.data["bet"]["status"] == "pending"
    assert resp.data["bet"]["amount"] == "10.00"
    assert Wallet.objects.get(user=player).balance == Decimal("40.00")


@pytest.mark.django_db
def test_place_bet_insufficient_balance(api_client, player, make_round):
    make_round()
    api_client.force_authenticate(player)

    resp = api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "number", "bet_value": "4", "amount": "75.00"},
        format="json",
    )

    assert resp.status_code == 400
    assert "Insufficient balance" in resp.data["error"]
    assert Wallet.objects.get(user=player).balance == Decimal("50.00")


@pytest.mark.django_db
def test_place_bet_after_cutoff(api_client, player, make_round):
    make_round(seconds_ago=27)
    api_client.force_authenticate(player)

    resp = api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "color", "bet_value": "green", "amount": "1.00"},
        format="json",
    )

    assert resp.status_code == 400
    assert "closed" in resp.data["error"]


@pytest.mark.django_db
def test_place_bet_without_round(api_client, player):
    api_client.force_authenticate(player)
    resp = api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "color", "bet_value": "green", "amount": "1.00"},
        format="json",
    )
    assert resp.status_code == 400
    assert resp.data["error"] == "No active round"


@pytest.mark.django_db
@pytest.mark.parametrize(
    "payload",
    [
        {"bet_type": "colour", "bet_value": "red", "amount": "1.00"},
        {"bet_type": "color", "bet_value": "pink", "amount": "1.00"},
        {"bet_type": "number", "bet_value": "12", "amount": "1.00"},
        {"bet_type": "color", "bet_value": "red", "amount": "0.00"},
        {"bet_type": "color", "bet_value": "red"},
    ],
)
def test_place_bet_invalid_payload(api_client, player, make_round, payload):
    make_round()
    api_client.force_authenticate(player)

    resp = api_client.post(reverse("colorgame-place-bet"), payload, format="json")

    assert resp.status_code == 400
    assert not Bet.objects.exists()


@pytest.mark.django_db
def test_my_bets(api_client, player, other_player, make_round):
    make_round()
    api_client.force_authenticate(player)
    api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "color", "bet_value": "red", "amount": "1.00"},
        format="json",
    )

    resp = api_client.get(reverse("colorgame-my-bets"))

    assert resp.status_code == 200
    assert len(resp.data) == 1
    assert resp.data[0]["bet_value"] == "red"
    assert resp.data[0]["period_number"].startswith("127927270")


@pytest.mark.django_db
def test_wallet_endpoints(api_client, player, make_round):
    make_round()
    api_client.force_authenticate(player)
    api_client.post(
        reverse("colorgame-place-bet"),
        {"bet_type": "number", "bet_value": "5", "amount": "2.50"},
        format="json",
    )

    balance = api_client.get(reverse("wallet-balance"))
    txs = api_client.get(reverse("wallet-transactions"))

    assert balance.data["balance"] == "47.50"
    assert [t["tx_type"] for t in txs.data] == ["DEBIT"]


@pytest.mark.django_db
def test_csrf_token_endpoint(api_client):
    resp = api_client.get(reverse("csrf"))
    assert resp.status_code == 200
    assert resp.data["csrfToken"]
    assert "csrftoken" in resp.cookies
