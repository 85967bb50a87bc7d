"""Tests for the traced decorator (no tracer provider configured)"""

import pytest

from guardpost.shared.telemetry.tracing import traced


@traced("test.operation", attributes={"component": "tests"})
async def operation(value: int, *, password: str = "", fail: bool = False) -> int:
    if fail:
        raise RuntimeError("boom")
    return value * 2


@pytest.mark.asyncio
async def test_traced_returns_result():
    assert await operation(21, password="hidden") == 42


@pytest.mark.asyncio
async def test_traced_reraises():
    with pytest.raises(RuntimeError, match="boom"):
        await operation(1, fail=True)


def test_traced_keeps_function_name():
    assert operation.__name__ == "operation"
