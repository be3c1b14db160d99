from .rate_limiter import RateLimiter, RateLimitEntry

__all__ = ["RateLimiter", "RateLimitEntry"]
