from django.contrib import admin
from django.urls import path, include


urlpatterns = [
    path('admin/', admin.site.urls),

    # Core / Accounts
    path('api/accounts/', include('accounts.urls')),
    path('api/wallet/', include('wallets.urls')),

    # Live colour game
    path('api/game/', include('colorgame.urls')),
]
