import asyncio

import pytest

from wallet_debugger.core.outcome import Outcome, OutcomeKind, attempt, capture, from_value


@pytest.mark.asyncio
async def test_capture_success():
    async def call():
        return ["0xABC"]

    outcome = await capture(call)

    assert outcome.ok
    assert outcome.value == ["0xABC"]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [None, [], ""])
async def test_capture_empty_result_is_soft_failure(value):
    async def call():
        return value

    outcome = await capture(call)

    assert outcome.kind is OutcomeKind.SOFT_FAILURE
    assert outcome.error is None


@pytest.mark.asyncio
async def test_capture_exception_is_hard_failure():
    error = RuntimeError("user rejected")

    async def call():
        raise error

    outcome = await capture(call)

    assert outcome.is_hard_failure
    assert outcome.error is error
    assert outcome.detail is error


@pytest.mark.asyncio
async def test_capture_without_value_requirement():
    async def call():
        return None

    outcome = await capture(call, require_value=False)

    assert outcome.ok


@pytest.mark.asyncio
async def test_capture_timeout_is_hard_failure():
    async def call():
        await asyncio.sleep(5)

    outcome = await capture(call, timeout=0.01)

    assert outcome.is_hard_failure
    assert isinstance(outcome.error, asyncio.TimeoutError)


def test_attempt_wraps_sync_calls():
    assert attempt(lambda: 42) == Outcome.success(42)

    failed = attempt(lambda: [][0])
    assert failed.is_hard_failure
    assert isinstance(failed.error, IndexError)


def test_from_value_keeps_falsy_non_sequence_values():
    assert from_value(0).ok
    assert not from_value(()).ok
