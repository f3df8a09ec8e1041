import asyncio

import pytest

from sfpulse.errors import UpstreamError, ValidationFailedError
from sfpulse.utils.retry import retry_async


@pytest.fixture
def sleeps(monkeypatch):
    recorded = []

    async def fake_sleep(seconds):
        recorded.append(seconds)

    monkeypatch.setattr(asyncio, "sleep", fake_sleep)
    return recorded


async def test_always_failing_call_sleeps_twice_and_reraises_last_error(sleeps):
    calls = []

    async def failing():
        calls.append(1)
        raise UpstreamError(f"failure {len(calls)}")

    with pytest.raises(UpstreamError, match="failure 3"):
        await retry_async(failing, max_attempts=3, delay=2.0)

    assert len(calls) == 3
    assert sleeps == [2.0, 4.0]


async def test_success_after_one_failure(sleeps):
    attempts = []

    async def flaky():
        attempts.append(1)
        if len(attempts) == 1:
            raise UpstreamError("temporary")
        return "ok"

    assert await retry_async(flaky) == "ok"
    assert sleeps == [2.0]


async def test_success_on_third_attempt_waits_two_then_four_seconds(sleeps):
    attempts = []

    async def flaky():
        attempts.append(1)
        if len(attempts) < 3:
            raise UpstreamError(f"failure {len(attempts)}")
        return "ok"

    assert await retry_async(flaky, exceptions=(UpstreamError,)) == "ok"
    assert len(attempts) == 3
    assert sleeps == [2.0, 4.0]


async def test_unlisted_exceptions_are_not_retried(sleeps):
    async def invalid():
        raise ValidationFailedError("bad input")

    with pytest.raises(ValidationFailedError):
        await retry_async(invalid, exceptions=(UpstreamError,))

    assert sleeps == []


async def test_on_retry_callback_receives_attempt_numbers(sleeps):
    seen = []

    async def on_retry(attempt, error):
        seen.append((attempt, str(error)))

    async def failing():
        raise UpstreamError("down")

    with pytest.raises(UpstreamError):
        await retry_async(failing, max_attempts=3, on_retry=on_retry)

    assert seen == [(1, "down"), (2, "down")]
