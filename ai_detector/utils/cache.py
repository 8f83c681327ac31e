import time
import threading
import logging
from typing import Callable, Dict, Optional

from ..models import AnalysisResult

logger = logging.getLogger(__name__)

MAX_CACHE_SIZE = 5


class CacheEntry:
    __slots__ = ("timestamp", "result")

    def __init__(self, timestamp: float, result: AnalysisResult):
        self.timestamp = timestamp
        self.result = result


class ResultCache:
    """Small LRU cache of analysis results keyed by image URL"""
    def __init__(self, max_size: int = MAX_CACHE_SIZE, clock: Callable[[], float] = time.monotonic):
        self.cache: Dict[str, CacheEntry] = {}
        self.max_size = max_size
        self.clock = clock
        self.lock = threading.Lock()

    def __len__(self) -> int:
        with self.lock:
            return len(self.cache)

    def __contains__(self, url: str) -> bool:
        with self.lock:
            return url in self.cache

    def get(self, url: str) -> Optional[AnalysisResult]:
        """Get cached result if available, marking it as recently used"""
        with self.lock:
            entry = self.cache.get(url)
            if entry is None:
                return None
            entry.timestamp = self.clock()
            # Move to the end so equal timestamps still break by recency
            self.cache[url] = self.cache.pop(url)
            return entry.result

    def put(self, url: str, result: AnalysisResult):
        """Store result in cache, evicting the least recently used entry when full"""
        with self.lock:
            if url not in self.cache and len(self.cache) >= self.max_size:
                # min() keeps the first of equal timestamps, i.e. the least recently touched
                oldest_key = min(self.cache, key=lambda key: self.cache[key].timestamp)
                del self.cache[oldest_key]
                logger.debug(f"Evicted {oldest_key} from result cache")

            self.cache.pop(url, None)
            self.cache[url] = CacheEntry(self.clock(), result)

    def timestamp(self, url: str) -> Optional[float]:
        """Last access time of an entry, if present"""
        with self.lock:
            entry = self.cache.get(url)
            return entry.timestamp if entry else None
