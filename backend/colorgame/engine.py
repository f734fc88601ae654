import logging
import time

from django.conf import settings
from django.db import transaction

from wallets.services import credit_payout
from .broadcast import broadcast_game_update
from .models import Bet, GameRound
from .outcomes import OutcomeGenerator
from .sequencer import PeriodSequencer
from .settlement import settle

logger = logging.getLogger(__name__)

IDLE_SLICE = 1.0  # seconds


class RoundEngine:
    """
    Drives the live game: every interval it opens a new round and settles
    the one before it.

    Each round's outcome is drawn and stored when the round opens, but bets
    on it are only settled on the following tick, so settlement always
    trails by one round.
    """

    def __init__(
        self,
        sequencer=None,
        generator=None,
        notify=broadcast_game_update,
        interval=None,
        clock=time.monotonic,
        sleep=time.sleep,
    ):
        self.sequencer = sequencer or PeriodSequencer()
        self.generator = generator or OutcomeGenerator()
        self.notify = notify
        self.interval = interval if interval is not None else settings.COLOR_ROUND_INTERVAL
        self._clock = clock
        self._sleep = sleep
        self._started = False

    def start(self):
        """Seed the period counter from history. Runs once, before the first tick."""
        if self._started:
            return
        self.sequencer.seed_from_history()
        self._started = True

    # ------------------------------------------------------------------
    # OPEN
    # ------------------------------------------------------------------
    def open_round(self) -> GameRound:
        period_number = self.sequencer.next()
        outcome = self.generator.generate()

        round_obj = GameRound.objects.create(
            period_number=period_number,
            color=outcome.color,
            number=outcome.number,
        )
        logger.info("Opened period %s", period_number)
        return round_obj

    # ------------------------------------------------------------------
    # SETTLE
    # ------------------------------------------------------------------
    def settle_previous(self):
        """Settle the round that closed when the newest one opened."""
        recent = GameRound.objects.recent(2)
        if len(recent) < 2:
            return None
        return self.settle_round(recent[1])

    def settle_round(self, round_obj):
        pending = list(Bet.objects.for_round(round_obj.id).pending().order_by("id"))
        results = settle(round_obj, pending)

        won = 0
        for result in results:
            if self._apply_result(result):
                won += 1

        logger.info(
            "Settled period %s (%s %s): %d bets, %d won",
            round_obj.period_number, round_obj.number, round_obj.color, len(results), won,
        )
        return results

    @transaction.atomic
    def _apply_result(self, result) -> bool:
        bet = Bet.objects.select_for_update().get(pk=result.bet_id)
        if not bet.is_pending:
            # already settled elsewhere
            return False

        bet.resolve(result.status, result.payout)

        if result.status != Bet.WON:
            return False

        credit_payout(
            bet.user_id,
            result.payout,
            reference=f"COLORWIN-{bet.id}",
            meta={"reason": "color_payout", "bet_id": bet.id, "round_id": bet.round_id},
        )
        return True

    # ------------------------------------------------------------------
    # LOOP
    # ------------------------------------------------------------------
    def run_tick(self):
        """
        One full cycle. Failures are logged and the tick is skipped; observers
        are notified either way.
        """
        round_obj = None
        try:
            round_obj = self.open_round()
            self.settle_previous()
        except Exception:
            logger.exception("Round tick failed, skipping until the next interval")

        self.broadcast(round_obj)
        return round_obj

    def broadcast(self, round_obj=None):
        data = {"period_number": round_obj.period_number} if round_obj else {}
        try:
            self.notify(data)
        except Exception as e:
            logger.warning("Observer notification failed: %s", e)

    def run_forever(self, should_continue=None, max_ticks=None, on_idle=None) -> int:
        """
        First tick runs immediately, then one every `interval` seconds.
        Returns the number of ticks run.
        """
        should_continue = should_continue or (lambda: True)
        self.start()

        ticks = 0
        next_tick = self._clock()
        while should_continue():
            self.run_tick()
            ticks += 1
            if max_ticks is not None and ticks >= max_ticks:
                break

            next_tick += self.interval
            now = self._clock()
            if next_tick < now:
                logger.warning("Tick overran the %ss interval", self.interval)
                next_tick = now

            while should_continue():
                remaining = next_tick - self._clock()
                if remaining <= 0:
                    break
                if on_idle:
                    on_idle()
                self._sleep(min(IDLE_SLICE, remaining))

        return ticks
