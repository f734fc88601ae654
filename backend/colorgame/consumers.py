from channels.generic.websocket import AsyncJsonWebsocketConsumer
from channels.db import database_sync_to_async
import logging

from .broadcast import GROUP_NAME
from .queries import get_current_round

logger = logging.getLogger(__name__)


class ColorGameConsumer(AsyncJsonWebsocketConsumer):
    """
    Push channel for the live game. Clients still poll the HTTP API for
    the actual state; this only says "something changed".
    """

    async def connect(self):
        await self.channel_layer.group_add(GROUP_NAME, self.channel_name)
        await self.accept()

        current_round = await self._get_current_round()
        await self.send_json({
            "type": "connected",
            "period_number": current_round.period_number if current_round else None,
        })

    async def disconnect(self, close_code):
        await self.channel_layer.group_discard(GROUP_NAME, self.channel_name)

    async def receive_json(self, content, **kwargs):
        if content.get("type") == "ping":
            await self.send_json({"type": "pong"})

    @database_sync_to_async
    def _get_current_round(self):
        return get_current_round()

    async def game_update(self, event):
        await self.send_json({"type": "game_update", **event.get("data", {})})
