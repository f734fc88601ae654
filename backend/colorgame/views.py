import logging

from django.conf import settings
from rest_framework import status
from rest_framework.decorators import api_view, permission_classes
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from wallets.models import Wallet
from .exceptions import InsufficientBalance, InvalidBet, NoActiveRound, PersistenceFailure, UserNotFound
from .queries import get_game_state, get_user_bets
from .serializers import BetSerializer, GameRoundSerializer, PlaceBetIn
from .services import place_bet

logger = logging.getLogger(__name__)


@api_view(['GET'])
@permission_classes([AllowAny])
def current_game(request):
    """
    Polled by the client every couple of seconds: current round, history
    and the countdown.
    """
    state = get_game_state()
    current = state["current_round"]
    context = {"hidden_round_id": current.id if current else None}

    return Response({
        "current_round": GameRoundSerializer(current, context=context).data if current else None,
        "recent_rounds": GameRoundSerializer(state["recent_rounds"], many=True, context=context).data,
        "seconds_remaining": state["seconds_remaining"],
        "betting_open": state["betting_open"],
        "round_duration": settings.COLOR_ROUND_INTERVAL,
        "server_time": int(state["server_time"].timestamp() * 1000),
    })


@api_view(['POST'])
@permission_classes([IsAuthenticated])
def place_bet_view(request):
    serializer = PlaceBetIn(data=request.data)
    if not serializer.is_valid():
        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    data = serializer.validated_data
    try:
        bet = place_bet(
            request.user.id,
            data["bet_type"],
            data["bet_value"],
            data["amount"],
        )
    except (InvalidBet, NoActiveRound, InsufficientBalance) as e:
        return Response({'error': str(e)}, status=status.HTTP_400_BAD_REQUEST)
    except UserNotFound as e:
        return Response({'error': str(e)}, status=status.HTTP_404_NOT_FOUND)
    except PersistenceFailure:
        return Response(
            {'error': 'Failed to place bet'},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    wallet = Wallet.objects.get(user_id=request.user.id)
    return Response({
        'bet': BetSerializer(bet).data,
        'balance': f"{wallet.balance:.2f}",
        'message': 'Bet placed successfully',
    }, status=status.HTTP_201_CREATED)


@api_view(['GET'])
@permission_classes([IsAuthenticated])
def my_bets(request):
    bets = get_user_bets(request.user.id, limit=20)
    return Response(BetSerializer(bets, many=True).data)
