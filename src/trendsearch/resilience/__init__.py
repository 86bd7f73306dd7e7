from .rate_limiter import RateLimiter, RateLimitPolicy
from .retry import RetryDecision, RetryPolicy, compute_delay, run_with_retry


__all__ = [
    "RateLimiter",
    "RateLimitPolicy",
    "RetryDecision",
    "RetryPolicy",
    "compute_delay",
    "run_with_retry",
]
