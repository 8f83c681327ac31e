import time
import threading
import logging

logger = logging.getLogger(__name__)


class RateLimiter:
    """Simple rate limiter to keep model calls under a per-minute quota"""
    def __init__(self, rate_limit_per_minute: float):
        self.interval = 60 / rate_limit_per_minute if rate_limit_per_minute > 0 else 0
        self.last_request_time = 0.0
        self.lock = threading.Lock()

    def wait_if_needed(self):
        """Wait if we need to throttle requests"""
        with self.lock:
            current_time = time.monotonic()
            time_since_last = current_time - self.last_request_time

            if self.last_request_time and time_since_last < self.interval:
                sleep_time = self.interval - time_since_last
                logger.debug(f"Rate limiting: sleeping for {sleep_time:.2f} seconds")
                time.sleep(sleep_time)

            self.last_request_time = time.monotonic()
