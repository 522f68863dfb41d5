import signal
import threading

from django.conf import settings
from django.core.management.base import BaseCommand

from clinic.cache import cache_repository, CacheService
from clinic.services import registry
from clinic.services.tasks import run_last_connected_sync


class Command(BaseCommand):
    help = "Copy buffered last-connected timestamps from the cache store onto users."

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.stop_requested = threading.Event()

    def add_arguments(self, parser):
        parser.add_argument(
            '--interval', type=int, default=None,
            help="Seconds between runs; 0 runs once (default: LAST_CONNECTED_SYNC_INTERVAL).",
        )

    def handle(self, *args, **options):
        interval = options['interval']
        if interval is None:
            interval = settings.LAST_CONNECTED_SYNC_INTERVAL

        previous_handler = None
        # signal handlers can only be installed from the main thread
        if interval > 0 and threading.current_thread() is threading.main_thread():
            previous_handler = signal.signal(signal.SIGTERM, self._request_stop)
        try:
            self._loop(interval)
        finally:
            if previous_handler is not None:
                signal.signal(signal.SIGTERM, previous_handler)
        self.stdout.write(self.style.SUCCESS("last connected sync stopped"))

    def _loop(self, interval):
        with cache_repository() as repository:
            cache = CacheService(repository)
            users = registry.user_repository()
            while True:
                result = run_last_connected_sync(cache, users)
                self.stdout.write(f"last connected sync: {result}")
                if interval <= 0:
                    break
                try:
                    if self.stop_requested.wait(interval):
                        break
                except KeyboardInterrupt:
                    break

    def _request_stop(self, signum, frame):
        self.stop_requested.set()
