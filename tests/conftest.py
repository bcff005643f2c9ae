import json
from collections.abc import Callable

import httpx
import pytest

from adyenkit.core.config import Config

TEST_API_KEY = "AQEyhmfxK4_test_api_key_1234567890"
TEST_HMAC_KEY = "44782DEF547AAA06C910C43932B1EB0C71FC68D9D0C057550C48EC2ACF6BA056"


class SleepRecorder:
    """Stand-in for asyncio.sleep that records requested delays without waiting."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it served."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def recording_handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(recording_handler)

    @property
    def last_json(self) -> dict:
        return json.loads(self.requests[-1].content)


def json_response(status: int, body: object) -> httpx.Response:
    return httpx.Response(status, json=body)


def sequence_handler(*responses: httpx.Response | Exception) -> Callable[[httpx.Request], httpx.Response]:
    """Serve the given responses in order; the last one repeats."""
    queue = list(responses)

    def handler(request: httpx.Request) -> httpx.Response:
        item = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(item, Exception):
            raise item
        return item

    return handler


@pytest.fixture
def config() -> Config:
    """API-key config against the test environment."""
    return Config.builder().api_key(TEST_API_KEY).build()


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture(autouse=True)
def clear_adyen_env(monkeypatch):
    """Keep host ADYEN_* variables out of every test."""
    for name in (
        "ADYEN_API_KEY",
        "ADYEN_USERNAME",
        "ADYEN_PASSWORD",
        "ADYEN_ENVIRONMENT",
        "ADYEN_LIVE_URL_PREFIX",
        "ADYEN_MAX_RETRIES",
        "ADYEN_BASE_BACKOFF",
        "ADYEN_REQUEST_TIMEOUT",
        "ADYEN_HMAC_KEY",
        "ADYEN_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
