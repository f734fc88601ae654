from django.urls import path
from . import views

urlpatterns = [
    path('current/', views.current_game, name='colorgame-current'),
    path('bet/', views.place_bet_view, name='colorgame-place-bet'),
    path('bets/', views.my_bets, name='colorgame-my-bets'),
]
