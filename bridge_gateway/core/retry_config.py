"""Retry configuration for the Bridge gateway.

Immutable configuration for upstream retry behavior.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet

DEFAULT_RETRYABLE_STATUS_CODES: FrozenSet[int] = frozenset({500, 502, 503, 504})

# Node-style error codes kept for parity with upstream error strings, followed by
# the httpx exception names and OS messages that mean the same thing in Python.
DEFAULT_RETRYABLE_ERROR_SIGNATURES: FrozenSet[str] = frozenset(
    {
        "ECONNRESET",
        "ETIMEDOUT",
        "ENOTFOUND",
        "FETCH_ERROR",
        "ConnectError",
        "ConnectTimeout",
        "ReadTimeout",
        "WriteTimeout",
        "PoolTimeout",
        "ReadError",
        "RemoteProtocolError",
        "Connection reset",
        "timed out",
        "Name or service not known",
        "Temporary failure in name resolution",
    }
)


class ErrorCategory(str, Enum):
    """Error categories for classification and retry decisions.

    - TRANSIENT: Temporary errors (network faults, 5xx in the retryable set)
    - PERMANENT: Everything else (4xx, other 5xx, malformed requests)
    """

    TRANSIENT = "transient"
    PERMANENT = "permanent"


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior.

    Delays are in milliseconds. An attempt index of 0 waits base_delay_ms,
    doubling per attempt up to max_delay_ms before jitter is applied.
    """

    max_retries: int = 3
    base_delay_ms: int = 100
    max_delay_ms: int = 2000
    retryable_status_codes: FrozenSet[int] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_STATUS_CODES
    )
    retryable_error_signatures: FrozenSet[str] = field(
        default_factory=lambda: DEFAULT_RETRYABLE_ERROR_SIGNATURES
    )

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.base_delay_ms < 0:
            raise ValueError(f"base_delay_ms must be >= 0, got {self.base_delay_ms}")
        if self.max_delay_ms < self.base_delay_ms:
            raise ValueError(
                f"max_delay_ms ({self.max_delay_ms}) must be >= base_delay_ms ({self.base_delay_ms})"
            )
        # Accept any iterable from callers but store frozensets
        object.__setattr__(self, "retryable_status_codes", frozenset(self.retryable_status_codes))
        object.__setattr__(
            self, "retryable_error_signatures", frozenset(self.retryable_error_signatures)
        )
