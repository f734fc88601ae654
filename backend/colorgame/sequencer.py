import logging

from django.conf import settings

from .models import GameRound

logger = logging.getLogger(__name__)

SEQUENCE_MODULO = 1000


class PeriodSequencer:
    """
    Issues period labels: a fixed prefix plus a 3-digit rolling counter.

    Single writer: only the round engine owns an instance and calls next().
    """

    def __init__(self, prefix=None, start=None):
        self.prefix = prefix if prefix is not None else settings.COLOR_PERIOD_PREFIX
        self.counter = start if start is not None else settings.COLOR_SEQUENCE_DEFAULT

    def seed_from_history(self) -> int:
        """
        Continue from the last persisted label so restarts never reissue one.
        Falls back to the configured default when there is no usable history.
        """
        latest = GameRound.objects.current()
        if latest is None:
            logger.info("No previous rounds, period counter starts at %03d", self.counter)
            return self.counter

        suffix = latest.period_number[-3:]
        if not suffix.isdigit():
            logger.warning(
                "Cannot parse period label %r, period counter starts at %03d",
                latest.period_number,
                self.counter,
            )
            return self.counter

        self.counter = int(suffix)
        logger.info("Period counter seeded from %s", latest.period_number)
        return self.counter

    def next(self) -> str:
        self.counter = (self.counter + 1) % SEQUENCE_MODULO
        if self.counter == 0:
            # labels from here on repeat earlier ones and will hit the unique constraint
            logger.error(
                "Period counter wrapped under prefix %r, rotate COLOR_PERIOD_PREFIX",
                self.prefix,
            )
        return f"{self.prefix}{self.counter:03d}"
