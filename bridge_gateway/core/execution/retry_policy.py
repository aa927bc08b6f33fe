"""Retry policy for the Bridge gateway.

Computes jittered backoff delays and classifies failures as retryable or terminal.
"""

import math
import random
from typing import Callable, Optional

from bridge_gateway.core.retry_config import ErrorCategory, RetryConfig

JITTER_RATIO = 0.25


class RetryPolicy:
    """Backoff and retryability decisions for upstream calls.

    Stateless apart from its configuration and random source, so one instance
    can be shared by every concurrent dispatch.
    """

    def __init__(self, config: Optional[RetryConfig] = None, random_fn: Callable[[], float] = random.random):
        """Initialize the policy.

        Args:
            config: RetryConfig with delays and retryable sets (defaults apply if None)
            random_fn: Source of uniform floats in [0, 1), injectable for tests
        """
        self.config = config or RetryConfig()
        self._random = random_fn

    def base_delay(self, attempt_index: int) -> int:
        """Exponential delay before jitter: base * 2^attempt_index, capped at max_delay."""
        if attempt_index < 0:
            raise ValueError(f"attempt_index must be >= 0, got {attempt_index}")
        # Cap the exponent so huge indexes never build giant integers
        exponent = min(attempt_index, 63)
        return min(self.config.base_delay_ms * (2 ** exponent), self.config.max_delay_ms)

    def calculate_delay(self, attempt_index: int) -> int:
        """Calculate backoff delay in milliseconds for a retry.

        Uses exponential backoff capped at max_delay_ms, perturbed by a uniform
        jitter of +/-25% so concurrent callers do not retry in lockstep.

        Args:
            attempt_index: Zero-based index of the retry (0 = first retry)

        Returns:
            Delay in whole milliseconds
        """
        delay = self.base_delay(attempt_index)
        jitter = delay * JITTER_RATIO * (2 * self._random() - 1)
        return max(0, math.floor(delay + jitter))

    def is_retryable(self, error: Optional[BaseException] = None, status_code: Optional[int] = None) -> bool:
        """Check whether a transport error or response status is transient.

        Args:
            error: Exception raised by the transport (None when a response arrived)
            status_code: HTTP status of a received response (None on transport error)

        Returns:
            True if the failure should be retried
        """
        if error is not None:
            text = error_text(error)
            return any(signature in text for signature in self.config.retryable_error_signatures)

        if status_code is not None:
            return status_code in self.config.retryable_status_codes

        return False

    def categorize(self, error: Optional[BaseException] = None, status_code: Optional[int] = None) -> ErrorCategory:
        if self.is_retryable(error=error, status_code=status_code):
            return ErrorCategory.TRANSIENT
        return ErrorCategory.PERMANENT


def error_text(error: BaseException) -> str:
    """Render an exception as "<TypeName>: <message>" for signature matching."""
    return f"{type(error).__name__}: {error}"
