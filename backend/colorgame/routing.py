from django.urls import path
from .consumers import ColorGameConsumer

websocket_urlpatterns = [
    path("ws/colorgame/", ColorGameConsumer.as_asgi()),
]
