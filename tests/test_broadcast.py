import logging
from unittest import mock

import pytest
from channels.layers import get_channel_layer
from channels.testing import WebsocketCommunicator

from colorgame.broadcast import GROUP_NAME, broadcast_game_update
from colorgame.consumers import ColorGameConsumer


def test_broadcast_sends_to_game_group():
    layer = mock.Mock()
    layer.group_send = mock.AsyncMock()

    with mock.patch("colorgame.broadcast.get_channel_layer", return_value=layer):
        assert broadcast_game_update({"period_number": "127927270868"}) is True

    layer.group_send.assert_awaited_once_with(
        GROUP_NAME, {"type": "game.update", "data": {"period_number": "127927270868"}}
    )


def test_broadcast_without_layer():
    with mock.patch("colorgame.broadcast.get_channel_layer", return_value=None):
        assert broadcast_game_update() is False


def test_broadcast_failure_is_swallowed(caplog):
    with mock.patch("colorgame.broadcast.get_channel_layer", side_effect=RuntimeError("no redis")):
        with caplog.at_level(logging.WARNING, logger="colorgame.broadcast"):
            assert broadcast_game_update() is False
    assert "broadcast failed" in caplog.text


@pytest.mark.asyncio
@pytest.mark.django_db(transaction=True)
async def test_websocket_client_hears_game_updates():
    communicator = WebsocketCommunicator(ColorGameConsumer.as_asgi(), "/ws/colorgame/")
    connected, _ = await communicator.connect()
    assert connected

    hello = await communicator.receive_json_from()
    assert hello == {"type": "connected", "period_number": None}

    layer = get_channel_layer()
    await layer.group_send(GROUP_NAME, {"type": "game.update", "data": {"period_number": "127927270870"}})

    update = await communicator.receive_json_from()
    assert update == {"type": "game_update", "period_number": "127927270870"}

    await communicator.send_json_to({"type": "ping"})
    assert await communicator.receive_json_from() == {"type": "pong"}

    await communicator.disconnect()
