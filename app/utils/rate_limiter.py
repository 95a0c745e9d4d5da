"""
Per-client request throttling for the API
"""
import time
from collections import defaultdict
from fastapi import Request, HTTPException
from typing import Dict, List, Tuple
from uuid import UUID
import logging

from app.config import settings

logger = logging.getLogger(__name__)

MINUTE = 60
HOUR = 3600


class RateLimiter:
    """
    In-memory sliding-window limiter with a minute and an hour budget

    Callers carrying a well-formed X-User-Id share one budget per user;
    everyone else is throttled by source address.
    """

    def __init__(self, requests_per_minute: int = 60, requests_per_hour: int = 1000):
        self.limits: List[Tuple[int, int]] = [
            (MINUTE, requests_per_minute),
            (HOUR, requests_per_hour),
        ]
        # {client_key: [request timestamps]}
        self.requests: Dict[str, List[float]] = defaultdict(list)

    @property
    def requests_per_minute(self) -> int:
        return self.limits[0][1]

    @property
    def requests_per_hour(self) -> int:
        return self.limits[1][1]

    def client_key(self, request: Request) -> str:
        """Budget key: validated user id, else client address"""
        header = request.headers.get("X-User-Id", "")
        try:
            return f"user:{UUID(header.strip())}"
        except ValueError:
            pass

        return f"ip:{request.client.host if request.client else 'unknown'}"

    def _prune(self, key: str, now: float) -> List[float]:
        cutoff = now - HOUR
        recent = [ts for ts in self.requests.get(key, []) if ts > cutoff]
        if recent:
            self.requests[key] = recent
        else:
            self.requests.pop(key, None)
        return recent

    def reset(self) -> None:
        """Forget all tracked requests"""
        self.requests.clear()

    async def check_rate_limit(self, request: Request) -> None:
        """
        Record the request against its client's budget

        Raises:
            HTTPException: 429 when the minute or hour budget is spent
        """
        key = self.client_key(request)
        now = time.time()
        recent = self._prune(key, now)

        for window, limit in self.limits:
            used = sum(1 for ts in recent if ts > now - window)
            if used >= limit:
                unit = "minute" if window == MINUTE else "hour"
                logger.warning(f"Rate limit exceeded ({unit}): {key}")
                raise HTTPException(
                    status_code=429,
                    detail={
                        "error": "rate_limit_exceeded",
                        "message": f"Too many requests. Limit: {limit} requests per {unit}",
                        "retry_after": window
                    }
                )

        self.requests[key].append(now)
        logger.debug(f"Rate limit check passed: {key} ({len(recent) + 1} in the last hour)")


# Global instance
rate_limiter = RateLimiter(
    requests_per_minute=settings.RATE_LIMIT_PER_MINUTE,
    requests_per_hour=settings.RATE_LIMIT_PER_HOUR
)
