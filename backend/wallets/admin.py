# wallets/admin.py
from django.contrib import admin
from .models import Wallet, WalletTransaction

@admin.register(Wallet)
class WalletAdmin(admin.ModelAdmin):
    list_display = ("user", "balance", "updated_at")
    search_fields = ("user__username", "user__user_uid")

@admin.register(WalletTransaction)
class WalletTransactionAdmin(admin.ModelAdmin):
    list_display = ("reference", "user", "tx_type", "amount", "created_at")
    list_filter = ("tx_type",)
    search_fields = ("reference", "user__username")
    readonly_fields = ("reference", "user", "tx_type", "amount", "meta", "created_at")
