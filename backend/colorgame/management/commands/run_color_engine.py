import signal
import time
from django.conf import settings
from django.core.management.base import BaseCommand
from colorgame.engine import RoundEngine
from colorgame.exceptions import EngineLockLost
from colorgame.redis_lock import RedisEngineLock, LockHeartbeat

LOCK_KEY = "colorgame:engine"


class Command(BaseCommand):
    help = "Run the live colour game round engine with a Redis single-instance lock"

    def add_arguments(self, parser):
        parser.add_argument(
            "--interval",
            type=int,
            default=settings.COLOR_ROUND_INTERVAL,
            help="Seconds between rounds (default: COLOR_ROUND_INTERVAL)",
        )
        parser.add_argument(
            "--lock-ttl",
            type=int,
            default=settings.COLOR_ENGINE_LOCK_TTL,
            help="Lock TTL in seconds (default: COLOR_ENGINE_LOCK_TTL)",
        )
        parser.add_argument(
            "--heartbeat-interval",
            type=float,
            default=10,
            help="Heartbeat interval in seconds (default: 10)",
        )
        parser.add_argument(
            "--no-lock",
            action="store_true",
            help="Skip the Redis lock (single local process only)",
        )
        parser.add_argument(
            "--max-ticks",
            type=int,
            default=None,
            help="Stop after this many rounds",
        )

    def handle(self, *args, **options):
        interval = options["interval"]
        lock_ttl = options["lock_ttl"]
        heartbeat_interval = options["heartbeat_interval"]

        self.stdout.write(f"[ENGINE] Starting with interval: {interval}s, lock TTL: {lock_ttl}s")

        lock = None
        heartbeat = None
        if not options["no_lock"]:
            lock = RedisEngineLock(LOCK_KEY, lock_ttl)
            if not lock.acquire():
                self.stdout.write(
                    self.style.WARNING("[ENGINE] Another engine already running. Exiting.")
                )
                return
            self.stdout.write(self.style.SUCCESS("[ENGINE] Lock acquired. Engine starting."))
            heartbeat = LockHeartbeat(lock, every_seconds=heartbeat_interval)

        running = True

        def shutdown(*_):
            nonlocal running
            running = False
            self.stdout.write(self.style.WARNING("[ENGINE] Shutdown requested."))

        previous_handlers = {
            signum: signal.signal(signum, shutdown)
            for signum in (signal.SIGINT, signal.SIGTERM)
        }

        engine = RoundEngine(interval=interval)
        started = time.time()
        try:
            ticks = engine.run_forever(
                should_continue=lambda: running,
                max_ticks=options["max_ticks"],
                on_idle=heartbeat.tick if heartbeat else None,
            )
            self.stdout.write(
                self.style.SUCCESS(
                    f"[ENGINE] Ran {ticks} rounds in {time.time() - started:.2f} seconds"
                )
            )
        except EngineLockLost:
            self.stdout.write(
                self.style.ERROR("[ENGINE] Engine lock lost. Another instance may have taken over.")
            )
        finally:
            for signum, handler in previous_handlers.items():
                signal.signal(signum, handler)
            if lock is not None:
                lock.release()
                self.stdout.write(self.style.SUCCESS("[ENGINE] Lock released. Engine stopped."))
