"""Request dispatcher for the Bridge gateway.

Performs outbound calls to the Bridge API with idempotency keys and
retry-with-backoff on transient failures.
"""

import asyncio
import json
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from bridge_gateway.core.execution.retry_policy import RetryPolicy, error_text
from bridge_gateway.core.logging import logger

SUPPORTED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
MUTATING_METHODS = frozenset({"POST", "PUT", "PATCH"})


class DispatchState(str, Enum):
    """Lifecycle of one logical dispatch."""

    INIT = "init"
    ATTEMPTING = "attempting"
    RETRY_WAIT = "retry_wait"
    SUCCESS = "success"
    EXHAUSTED_WITH_RESPONSE = "exhausted_with_response"
    EXHAUSTED_WITH_ERROR = "exhausted_with_error"


@dataclass(frozen=True)
class DispatchRequest:
    """One logical outbound call, possibly sent several times."""

    method: str
    path: str
    body: Any = None
    idempotency_key: Optional[str] = None

    def __post_init__(self):
        method = (self.method or "").upper()
        if method not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported method: {self.method}")
        if not self.path or not self.path.startswith("/"):
            raise ValueError(f"Path must be upstream-relative and start with '/': {self.path!r}")
        object.__setattr__(self, "method", method)

    @property
    def is_mutating(self) -> bool:
        return self.method in MUTATING_METHODS


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of a dispatch that received a response."""

    status: int
    data: Any
    attempts: int = 1

    @property
    def ok(self) -> bool:
        return 200 <= self.status <= 299

    def to_envelope(self) -> Dict[str, Any]:
        """Gateway response body: success/data on 2xx, success/error otherwise."""
        if self.ok:
            return {"success": True, "data": self.data}
        return {"success": False, "error": self.data}


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def parse_body(text: str) -> Any:
    """Parse a response body as JSON, wrapping non-JSON text as {"raw": text}.

    NaN and Infinity are not JSON and fall back to the raw wrapper.
    """
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return {"raw": text}


class BridgeDispatcher:
    """Sends requests to the Bridge API and retries transient failures.

    Holds no per-call state: every dispatch owns its idempotency key, attempt
    counter and last outcome, so one instance serves concurrent requests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        api_key: Optional[str],
        base_url: str,
        policy: Optional[RetryPolicy] = None,
        deadline_seconds: Optional[float] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
        clock: Callable[[], float] = time.monotonic,
    ):
        """Initialize dispatcher.

        Args:
            client: Shared httpx.AsyncClient (owns connection pool and per-attempt timeout)
            api_key: Bridge API key sent as Api-Key header
            base_url: Bridge API base URL, e.g. https://api.bridge.xyz/v0
            policy: RetryPolicy for backoff and classification
            deadline_seconds: Optional total budget; retries that would overrun it are skipped
            sleep: Awaitable sleep in seconds (injectable for tests)
            clock: Monotonic clock in seconds (injectable for tests)
        """
        self.client = client
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.policy = policy or RetryPolicy()
        self.deadline_seconds = deadline_seconds
        self._sleep = sleep
        self._clock = clock

    async def dispatch(
        self,
        method: str,
        path: str,
        body: Any = None,
        idempotency_key: Optional[str] = None,
    ) -> DispatchResult:
        """Dispatch a request to the Bridge API.

        Args:
            method: GET, POST, PUT, PATCH or DELETE
            path: Upstream-relative path, may include a query string
            body: JSON body (sent for POST/PUT/PATCH only)
            idempotency_key: Caller-supplied key; generated when omitted

        Returns:
            DispatchResult for any received response, including 4xx/5xx

        Raises:
            ValueError: If method or path is invalid
            Exception: The transport error, when it is not retryable or
                retries are exhausted without any response
        """
        request = DispatchRequest(
            method=method,
            path=path,
            body=body,
            idempotency_key=idempotency_key or str(uuid.uuid4()),
        )
        return await self.send(request)

    def build_headers(self, request: DispatchRequest) -> Dict[str, str]:
        headers = {
            "Api-Key": self.api_key or "",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        # Same key on every attempt so Bridge deduplicates retried writes
        if request.is_mutating and request.idempotency_key:
            headers["Idempotency-Key"] = request.idempotency_key
        return headers

    async def send(self, request: DispatchRequest) -> DispatchResult:
        """Run the attempt loop for an already-built request."""
        url = f"{self.base_url}{request.path}"
        headers = self.build_headers(request)
        payload = request.body if request.is_mutating else None
        max_retries = self.policy.config.max_retries
        started = self._clock()

        last_result: Optional[DispatchResult] = None
        last_error: Optional[BaseException] = None

        for attempt in range(max_retries + 1):
            if attempt > 0:
                delay_ms = self.policy.calculate_delay(attempt - 1)

                if self._would_overrun(started, delay_ms):
                    logger.warning(
                        "bridge_deadline_exceeded",
                        url=url,
                        attempts=attempt,
                        delay_ms=delay_ms,
                        deadline_seconds=self.deadline_seconds,
                    )
                    break

                logger.info(
                    "bridge_request_retrying",
                    attempt=attempt,
                    max_retries=max_retries,
                    delay_ms=delay_ms,
                    url=url,
                )
                await self._sleep(delay_ms / 1000)

            logger.debug(
                "bridge_request",
                method=request.method,
                url=url,
                has_body=payload is not None,
                attempt=attempt + 1,
            )

            try:
                response = await self.client.request(
                    request.method,
                    url,
                    headers=headers,
                    content=json.dumps(payload) if payload is not None else None,
                )
            except Exception as e:
                last_error = e
                last_result = None

                if self.policy.is_retryable(error=e) and attempt < max_retries:
                    logger.warning(
                        "bridge_retryable_network_error",
                        error=error_text(e),
                        category=self.policy.categorize(error=e).value,
                        attempt=attempt + 1,
                        url=url,
                    )
                    continue

                logger.error(
                    "bridge_request_failed",
                    url=url,
                    error=error_text(e),
                    category=self.policy.categorize(error=e).value,
                    attempts=attempt + 1,
                    state=DispatchState.EXHAUSTED_WITH_ERROR.value,
                )
                raise

            result = DispatchResult(
                status=response.status_code,
                data=parse_body(response.text),
                attempts=attempt + 1,
            )

            if self.policy.is_retryable(status_code=result.status) and attempt < max_retries:
                logger.warning(
                    "bridge_retryable_status",
                    status=result.status,
                    category=self.policy.categorize(status_code=result.status).value,
                    attempt=attempt + 1,
                    url=url,
                )
                last_result = result
                last_error = None
                continue

            logger.debug(
                "bridge_response",
                status=result.status,
                url=url,
                attempts=result.attempts,
                state=(
                    DispatchState.EXHAUSTED_WITH_RESPONSE.value
                    if self.policy.is_retryable(status_code=result.status)
                    else DispatchState.SUCCESS.value
                ),
            )
            return result

        # Only reached when the deadline cut the retry loop short
        if last_result is not None:
            logger.error(
                "bridge_request_exhausted",
                url=url,
                status=last_result.status,
                attempts=last_result.attempts,
                state=DispatchState.EXHAUSTED_WITH_RESPONSE.value,
            )
            return last_result

        logger.error(
            "bridge_request_exhausted",
            url=url,
            error=error_text(last_error) if last_error else None,
            state=DispatchState.EXHAUSTED_WITH_ERROR.value,
        )
        if last_error is not None:
            raise last_error
        raise RuntimeError("Bridge API request failed after retries")

    def _would_overrun(self, started: float, delay_ms: int) -> bool:
        if self.deadline_seconds is None:
            return False
        return (self._clock() - started) + delay_ms / 1000 > self.deadline_seconds
