import logging

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

logger = logging.getLogger(__name__)

GROUP_NAME = "colorgame"


def broadcast_game_update(data=None) -> bool:
    """
    Tell connected websocket clients that the game state changed.

    Fire-and-forget: delivery problems are logged and never raised, so the
    round engine carries on whether or not anybody is listening.
    """
    try:
        channel_layer = get_channel_layer()
        if channel_layer is None:
            return False

        async_to_sync(channel_layer.group_send)(
            GROUP_NAME,
            {
                "type": "game.update",
                "data": data or {},
            },
        )
        return True
    except Exception as e:
        logger.warning("Game update broadcast failed: %s", e)
        return False
