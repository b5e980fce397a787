"""
Retry utilities for upstream calls.

Provides exponential backoff with jitter and a decorator that honours the
``retryable`` flag of assistant errors and the ``retry_after`` hint of rate
limit errors.
"""

import functools
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, TypeVar

from crm_assistant.exceptions import AssistantError, UpstreamRateLimitError
from crm_assistant.logging import get_logger

logger = get_logger("retry")

T = TypeVar("T")


@dataclass
class RetryConfig:
    """Configuration for retry behavior."""
    max_attempts: int = 3
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    jitter: bool = True


def calculate_delay(attempt: int, config: RetryConfig) -> float:
    """
    Calculate delay with exponential backoff.

    Args:
        attempt: Current attempt number (0-indexed)
        config: Retry configuration

    Returns:
        Delay in seconds
    """
    delay = config.base_delay * (config.exponential_base ** attempt)
    delay = min(delay, config.max_delay)

    if config.jitter:
        # ±25%
        jitter_factor = 0.75 + random.random() * 0.5
        delay *= jitter_factor

    return delay


def retry_sync(
    max_attempts: int = 3,
    base_delay: float = 1.0,
    retryable_exceptions: tuple = (Exception,),
    jitter: bool = True,
):
    """
    Decorator for synchronous retry with exponential backoff.

    Args:
        max_attempts: Maximum number of attempts
        base_delay: Initial delay between retries
        retryable_exceptions: Tuple of exception types to retry
        jitter: Randomise delays by ±25%
    """
    config = RetryConfig(max_attempts=max_attempts, base_delay=base_delay, jitter=jitter)

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            last_exception = None

            for attempt in range(config.max_attempts):
                try:
                    return func(*args, **kwargs)
                except retryable_exceptions as e:
                    last_exception = e

                    if isinstance(e, AssistantError) and not e.retryable:
                        raise

                    if attempt < config.max_attempts - 1:
                        if isinstance(e, UpstreamRateLimitError):
                            delay = min(e.retry_after, config.max_delay)
                        else:
                            delay = calculate_delay(attempt, config)
                        logger.warn(
                            f"Retry attempt {attempt + 1}/{config.max_attempts}",
                            error=str(e),
                            delay=f"{delay:.1f}s"
                        )
                        time.sleep(delay)

            raise last_exception
        return wrapper
    return decorator
