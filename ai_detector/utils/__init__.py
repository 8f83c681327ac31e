from .cache import ResultCache, MAX_CACHE_SIZE
from .rate_limiter import RateLimiter

__all__ = ['ResultCache', 'MAX_CACHE_SIZE', 'RateLimiter']
