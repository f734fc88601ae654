from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()

class UserSerializer(serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, min_length=6)
    balance = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = (
            "id",
            "user_uid",
            "username",
            "password",
            "balance",
            "date_joined",
        )
        read_only_fields = ("date_joined",)

    def validate_username(self, value):
        if User.objects.filter(username__iexact=value).exists():
            raise serializers.ValidationError("Username already exists.")
        return value

    def get_balance(self, obj):
        wallet = getattr(obj, "wallet", None)
        if wallet is None:
            return "0.00"
        return f"{wallet.balance:.2f}"

    def create(self, validated_data):
        password = validated_data.pop("password")

        user = User(**validated_data)
        user.set_password(password)
        user.save()
        return user
