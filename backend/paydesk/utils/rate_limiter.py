"""
Simple Memory-based Rate Limiter.
Windows are tracked per caller principal (falling back to client IP).
In production, use Redis or a dedicated middleware like slowapi.
"""
import threading
import time
from fastapi import Request
from typing import Dict, Tuple

from paydesk.errors import RateLimitError

# In-memory storage: {key: (window_start, count)}
_rate_limit_store: Dict[str, Tuple[float, int]] = {}
_store_lock = threading.Lock()


def reset_rate_limits():
    """Forget every tracked window."""
    with _store_lock:
        _rate_limit_store.clear()


def rate_limit(requests: int, window: int, scope: str = "default"):
    """
    Dependency for rate limiting.
    Example: Depends(rate_limit(requests=5, window=60, scope="checkout"))
    """
    def limiter(request: Request):
        caller = request.headers.get("x-principal") or (
            request.client.host if request.client else "unknown"
        )
        key = f"{scope}:{caller}"
        now = time.time()

        with _store_lock:
            entry = _rate_limit_store.get(key)

            # New caller or expired window
            if entry is None or now - entry[0] > window:
                _rate_limit_store[key] = (now, 1)
                return True

            last_ts, count = entry
            if count >= requests:
                retry_in = int(window - (now - last_ts))
                raise RateLimitError(f"Rate limit exceeded. Try again in {retry_in} seconds.")

            _rate_limit_store[key] = (last_ts, count + 1)
        return True

    return limiter
