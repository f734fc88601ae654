# accounts/admin.py
from django.contrib import admin
from django.contrib.auth.admin import UserAdmin

from .models import User


@admin.register(User)
class PlayerAdmin(UserAdmin):
    list_display = ("username", "user_uid", "is_staff", "is_active", "date_joined")
    search_fields = ("username", "user_uid")
    readonly_fields = ("user_uid",)
