"""Shared fixtures for Bridge gateway tests."""

from typing import Any, Callable, Dict, List, Tuple

import httpx
import pytest

from bridge_gateway.core.execution import BridgeDispatcher, RetryPolicy
from bridge_gateway.core.retry_config import RetryConfig

BASE_URL = "https://bridge.test/v0"


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self):
        self.calls: List[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


class LogRecorder:
    """Stand-in for the structlog logger that keeps (level, event, fields) tuples."""

    def __init__(self):
        self.records: List[Tuple[str, str, Dict[str, Any]]] = []

    def _record(self, level: str):
        def log(event: str, **fields):
            self.records.append((level, event, fields))

        return log

    def __getattr__(self, level: str):
        if level in ("debug", "info", "warning", "error"):
            return self._record(level)
        raise AttributeError(level)

    def events(self, name: str) -> List[Dict[str, Any]]:
        return [fields for _, event, fields in self.records if event == name]


class TransportScript:
    """MockTransport handler replaying a list of responses/exceptions in order.

    The last entry repeats once the script runs out. Every request is kept in
    `requests` for header assertions.
    """

    def __init__(self, *steps):
        self.steps = list(steps)
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        step = self.steps[min(len(self.requests) - 1, len(self.steps) - 1)]
        if callable(step):
            step = step(request)
        if isinstance(step, Exception):
            raise step
        return step


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_dispatcher(sleep_recorder) -> Callable[..., BridgeDispatcher]:
    """Build a dispatcher around a TransportScript with recorded sleeps."""

    def factory(script: TransportScript, max_retries: int = 3, **kwargs) -> BridgeDispatcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(script))
        policy = RetryPolicy(RetryConfig(max_retries=max_retries), random_fn=lambda: 0.5)
        return BridgeDispatcher(
            client=client,
            api_key="test-bridge-key",
            base_url=BASE_URL,
            policy=policy,
            sleep=sleep_recorder,
            **kwargs,
        )

    return factory
