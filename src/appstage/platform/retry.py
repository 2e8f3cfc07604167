"""Where: src/appstage/platform/retry.py
What: Attempt an operation a bounded number of times with exponential backoff.
Why: Directory deletion can fail transiently while the OS releases file locks.
"""

from __future__ import annotations

import time
from collections.abc import Callable

from appstage.config.settings import CLEANUP_RETRY_ATTEMPTS, CLEANUP_RETRY_DELAY_SECONDS
from appstage.platform.logging import logger

_BACKOFF_FACTOR: float = 2.0
_MAX_DELAY_SECONDS: float = 2.0


def retry_operation(
    operation: Callable[[], object],
    *,
    on_failure: Callable[[Exception], None] | None = None,
    attempts: int = CLEANUP_RETRY_ATTEMPTS,
    delay_seconds: float = CLEANUP_RETRY_DELAY_SECONDS,
    description: str = "operation",
    sleep: Callable[[float], None] = time.sleep,
) -> bool:
    """Run ``operation`` until it succeeds or ``attempts`` are exhausted.

    The final failure is logged and swallowed.

    Args:
        operation: Zero-argument callable to attempt.
        on_failure: Called with each exception raised by ``operation``.
        attempts: Maximum number of calls, at least one.
        delay_seconds: Wait before the second attempt; doubles afterwards.
        description: Label used in log messages.
        sleep: Delay function, replaceable in tests.

    Returns:
        bool: ``True`` when an attempt succeeded, ``False`` otherwise.
    """
    if attempts < 1:
        raise ValueError(f"attempts must be at least 1, got {attempts}")

    for attempt in range(1, attempts + 1):
        try:
            _ = operation()
            return True
        except Exception as exc:
            if on_failure is not None:
                on_failure(exc)
            if attempt == attempts:
                logger.warning(
                    "Giving up on %s after %d attempt(s): %s", description, attempts, exc
                )
                return False
            delay = min(_MAX_DELAY_SECONDS, delay_seconds * _BACKOFF_FACTOR ** (attempt - 1))
            logger.debug(
                "%s failed (attempt %d/%d): %s. Retrying in %.2fs.",
                description,
                attempt,
                attempts,
                exc,
                delay,
            )
            sleep(delay)

    return False


__all__ = ["retry_operation"]
