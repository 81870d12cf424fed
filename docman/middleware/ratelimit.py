import time
import asyncio
import logging
from collections import deque
from typing import Callable, Iterable
from fastapi import Request
from fastapi.responses import JSONResponse
from docman.auth.deps import get_token
from docman.errors import InvalidToken
from docman.utils.security import decode_token

logger = logging.getLogger(__name__)

class RateLimitMiddleware:
    def __init__(
        self,
        app,
        *,
        window_seconds: int,
        max_calls: int,
        key_func: Callable[[Request], str],
        include_path_prefixes: Iterable[str] = ("/login",),
        methods: Iterable[str] = ("POST",),
        clock: Callable[[], float] = time.time,
    ):
        self.app = app
        self.window = window_seconds
        self.max_calls = max_calls
        self.key_func = key_func
        self.include_paths = tuple(include_path_prefixes)
        self.methods = {m.upper() for m in methods}
        self.clock = clock

        self._buckets: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()
        self._last_sweep = 0.0

    def _should_guard(self, method: str, path: str) -> bool:
        return method in self.methods and any(path.startswith(p) for p in self.include_paths)

    def _drop_idle(self, cutoff: float) -> None:
        idle = [key for key, q in self._buckets.items() if not q or q[-1] < cutoff]
        for key in idle:
            del self._buckets[key]

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            return await self.app(scope, receive, send)

        path = scope.get("path", "")
        if not self._should_guard(scope.get("method", "GET"), path):
            return await self.app(scope, receive, send)

        request = Request(scope, receive=receive)
        key = self.key_func(request)

        now = self.clock()
        cutoff = now - self.window
        async with self._lock:
            # sweep idle keys at most once per window
            if now - self._last_sweep >= self.window:
                self._drop_idle(cutoff)
                self._last_sweep = now

            q = self._buckets.get(key)
            if q is None:
                q = deque()
                self._buckets[key] = q

            while q and q[0] < cutoff:
                q.popleft()

            if len(q) >= self.max_calls:
                retry_after = max(1, int(q[0] + self.window - now))
                logger.warning("rate limit hit for %s on %s", key, path)
                resp = JSONResponse(
                    status_code=429,
                    content={
                        "message": "Too many requests. Try again later.",
                        "windowSeconds": self.window,
                        "maxCalls": self.max_calls,
                        "tryAgainIn": retry_after,
                    },
                )
                resp.headers["Retry-After"] = str(retry_after)
                return await resp(scope, receive, send)

            q.append(now)

        return await self.app(scope, receive, send)


def token_or_ip_key(req: Request) -> str:
    ip = req.client.host if req.client else "unknown"

    token = get_token(req)
    if token:
        try:
            return f"user:{decode_token(token).user_id}"
        except InvalidToken:
            pass

    return f"ip:{ip}"
