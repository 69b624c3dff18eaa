"""
Base payment client: runs blocking provider SDK calls off the event loop and
logs each call.

Concrete providers subclass and translate SDK errors into the payment
exceptions. Calls are never retried here; a refund must not be sent twice.
"""
from __future__ import annotations

import asyncio
import time
from typing import Any, Callable, TypeVar

from core.logging_config import get_logger


logger = get_logger(__name__)

R = TypeVar("R")


class BasePaymentClient:
    provider: str = "base"

    async def _call(self, operation: str, func: Callable[..., R], *args: Any, **kwargs: Any) -> R:
        started = time.perf_counter()
        try:
            return await asyncio.to_thread(func, *args, **kwargs)
        finally:
            self._log(
                "payment_provider_call",
                operation=operation,
                duration_ms=round((time.perf_counter() - started) * 1000, 2),
            )

    def _log(self, event: str, **kwargs: Any) -> None:
        logger.info(event, provider=self.provider, **kwargs)
