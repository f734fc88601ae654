from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response

from .models import Wallet, WalletTransaction
from .serializers import WalletSerializer, WalletTransactionSerializer


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def wallet_balance(request):
    wallet = Wallet.objects.get(user=request.user)
    return Response(WalletSerializer(wallet).data)


@api_view(["GET"])
@permission_classes([IsAuthenticated])
def wallet_transactions(request):
    txs = WalletTransaction.objects.filter(user=request.user)[:50]
    return Response(WalletTransactionSerializer(txs, many=True).data)
