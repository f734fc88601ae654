"""
Errors raised by bet placement and the round engine.

The API layer maps each one to an HTTP status; none of them leave a bet
row or a balance change behind.
"""


class ColorGameError(Exception):
    """Base class for every colour game error."""
    pass


class NoActiveRound(ColorGameError):
    """There is no round open for betting."""

    def __init__(self, message="No active round"):
        super().__init__(message)


class BettingClosed(NoActiveRound):
    """The current round is inside its closing grace period."""

    def __init__(self, period_number):
        self.period_number = period_number
        super().__init__(f"Betting is closed for period {period_number}")


class InsufficientBalance(ColorGameError):
    def __init__(self, user_id, amount):
        self.user_id = user_id
        self.amount = amount
        super().__init__(f"Insufficient balance for a bet of {amount}")


class UserNotFound(ColorGameError):
    def __init__(self, user_id):
        self.user_id = user_id
        super().__init__(f"User {user_id} not found")


class PersistenceFailure(ColorGameError):
    """A storage operation failed; the original error is chained."""
    pass


class InvalidBet(ColorGameError):
    """Malformed bet type, value or amount."""
    pass


class EngineLockLost(ColorGameError):
    """Another engine instance took over the Redis lock."""
    pass
