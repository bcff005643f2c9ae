"""Unit tests for the bounded retry loop."""

import asyncio

import pytest

from adyenkit.core.exceptions import (
    ApiError,
    NetworkError,
    SerializationError,
    ValidationError,
)
from adyenkit.resilience.retry import RetryPolicy, execute_with_retry, is_transient_error


class TestTransientClassification:
    """Which errors are retried."""

    @pytest.mark.parametrize(
        "error,expected",
        [
            (NetworkError("reset"), True),
            (ApiError("boom", status=500), True),
            (ApiError("unavailable", status=503), True),
            (ApiError("bad request", status=400), False),
            (ApiError("unauthorized", status=401), False),
            (ApiError("unprocessable", status=422), False),
            (SerializationError("garbled"), False),
            (ValidationError("missing"), False),
            (ValueError("not ours"), False),
        ],
    )
    def test_is_transient_error(self, error, expected) -> None:
        assert is_transient_error(error) is expected


class TestRetryPolicy:
    """Tests for RetryPolicy arithmetic."""

    def test_defaults(self) -> None:
        policy = RetryPolicy()

        assert policy.max_retries == 2
        assert policy.max_attempts == 3

    def test_delay_doubles(self) -> None:
        policy = RetryPolicy(max_retries=3, base_backoff=0.1)

        assert [policy.delay_for(n) for n in (1, 2, 3)] == pytest.approx([0.1, 0.2, 0.4])


class TestExecuteWithRetry:
    """Tests for execute_with_retry."""

    @pytest.mark.asyncio
    async def test_success_first_try(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> str:
            calls.append(attempt)
            return "ok"

        result = await execute_with_retry(op, RetryPolicy(), sleep=sleep_recorder)

        assert result == "ok"
        assert calls == [1]
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_transient_then_success(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> str:
            calls.append(attempt)
            if attempt < 3:
                raise NetworkError("connection reset")
            return "ok"

        result = await execute_with_retry(op, RetryPolicy(max_retries=2), sleep=sleep_recorder)

        assert result == "ok"
        assert calls == [1, 2, 3]

    @pytest.mark.asyncio
    async def test_exhaustion_makes_n_plus_one_attempts(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> None:
            calls.append(attempt)
            raise ApiError("unavailable", status=503)

        with pytest.raises(ApiError) as exc_info:
            await execute_with_retry(
                op, RetryPolicy(max_retries=3, base_backoff=0.1), sleep=sleep_recorder
            )

        assert len(calls) == 4
        assert exc_info.value.attempts == 4
        assert sleep_recorder.delays == pytest.approx([0.1, 0.2, 0.4])

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> None:
            calls.append(attempt)
            raise ApiError("invalid", status=422, error_code="101")

        with pytest.raises(ApiError) as exc_info:
            await execute_with_retry(op, RetryPolicy(max_retries=5), sleep=sleep_recorder)

        assert calls == [1]
        assert exc_info.value.attempts == 1
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_zero_retries(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> None:
            calls.append(attempt)
            raise NetworkError("down")

        with pytest.raises(NetworkError) as exc_info:
            await execute_with_retry(op, RetryPolicy(max_retries=0), sleep=sleep_recorder)

        assert calls == [1]
        assert exc_info.value.attempts == 1

    @pytest.mark.asyncio
    async def test_cancellation_is_not_retried(self, sleep_recorder) -> None:
        calls: list[int] = []

        async def op(attempt: int) -> None:
            calls.append(attempt)
            raise asyncio.CancelledError()

        with pytest.raises(asyncio.CancelledError):
            await execute_with_retry(op, RetryPolicy(max_retries=3), sleep=sleep_recorder)

        assert calls == [1]
        assert sleep_recorder.delays == []

    @pytest.mark.asyncio
    async def test_retry_is_logged(self, sleep_recorder, caplog) -> None:
        async def op(attempt: int) -> str:
            if attempt == 1:
                raise NetworkError("connection reset")
            return "ok"

        with caplog.at_level("WARNING", logger="adyenkit.retry"):
            await execute_with_retry(op, RetryPolicy(), sleep=sleep_recorder)

        assert any("Retrying in 0.100s" in r.getMessage() for r in caplog.records)
