"""Bounded retry for commands that race on the same aggregate.

Cart mutations read the cart, rebuild its lines and totals, and persist the
result with the aggregate's version. When two requests for the same shopper
interleave, the slower one fails with ``ExpectedVersionError`` and is simply
processed again against the fresh cart. The backoff is awaited so request
handlers keep the event loop free while they wait.
"""

import asyncio

import structlog
from protean.exceptions import ExpectedVersionError
from protean.utils.globals import current_domain

from checkout.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)

DEFAULT_ATTEMPTS = 3
DEFAULT_BACKOFF_SECONDS = 0.05


async def process_with_retry(command, attempts: int = DEFAULT_ATTEMPTS, backoff: float = DEFAULT_BACKOFF_SECONDS):
    """Process ``command`` in-process, retrying transient store failures.

    Returns whatever the command handler returns. Raises ``StoreUnavailable``
    once ``attempts`` have been used up.
    """
    last_error: Exception | None = None
    for attempt in range(1, attempts + 1):
        try:
            return current_domain.process(command, asynchronous=False)
        except (ExpectedVersionError, StoreUnavailable) as exc:
            last_error = exc
            logger.warning(
                "Transient failure processing command",
                command=type(command).__name__,
                attempt=attempt,
                max_attempts=attempts,
                error=str(exc),
            )
            if attempt < attempts:
                await asyncio.sleep(backoff * attempt)

    raise StoreUnavailable(
        f"{type(command).__name__} could not be applied after {attempts} attempts: {last_error}"
    ) from last_error
