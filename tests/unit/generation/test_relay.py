# tests/unit/generation/test_relay.py — v1
"""Tests for generation/relay.py: ordering, error marker, cancellation."""

from __future__ import annotations

import asyncio

import pytest

from toolcompare.generation.relay import format_error_marker, relay_stream


async def _chunks(*items: str, fail: Exception | None = None):
    for item in items:
        yield item
    if fail is not None:
        raise fail


async def _collect(stream) -> list[str]:
    return [chunk async for chunk in stream]


class TestRelayStream:
    @pytest.mark.asyncio
    async def test_preserves_order(self):
        assert await _collect(relay_stream(_chunks("a", "b", "c"))) == ["a", "b", "c"]

    @pytest.mark.asyncio
    async def test_order_preserved_with_tiny_queue(self):
        items = [str(i) for i in range(50)]
        assert await _collect(relay_stream(_chunks(*items), maxsize=1)) == items

    @pytest.mark.asyncio
    async def test_empty_chunks_skipped(self):
        assert await _collect(relay_stream(_chunks("a", "", "b"))) == ["a", "b"]

    @pytest.mark.asyncio
    async def test_empty_upstream(self):
        assert await _collect(relay_stream(_chunks())) == []

    @pytest.mark.asyncio
    async def test_upstream_error_yields_single_marker(self):
        out = await _collect(relay_stream(_chunks("a", "b", fail=RuntimeError("quota exceeded"))))
        assert out == ["a", "b", format_error_marker("quota exceeded")]

    @pytest.mark.asyncio
    async def test_error_without_message_uses_type_name(self):
        out = await _collect(relay_stream(_chunks(fail=ConnectionError())))
        assert out == [format_error_marker("ConnectionError")]

    @pytest.mark.asyncio
    async def test_idle_timeout_ends_stream(self):
        async def stalled():
            yield "first"
            await asyncio.sleep(10)
            yield "never"

        out = await _collect(relay_stream(stalled(), idle_timeout=0.05))
        assert out == ["first", format_error_marker("upstream timed out")]

    @pytest.mark.asyncio
    async def test_caller_close_cancels_upstream(self):
        closed = asyncio.Event()

        async def endless():
            try:
                i = 0
                while True:
                    yield f"chunk-{i}"
                    i += 1
                    await asyncio.sleep(0)
            finally:
                closed.set()

        relay = relay_stream(endless(), maxsize=2)
        assert await relay.__anext__() == "chunk-0"
        assert await relay.__anext__() == "chunk-1"
        await relay.aclose()
        assert closed.is_set()

    @pytest.mark.asyncio
    async def test_consumer_task_cancellation_cancels_upstream(self):
        closed = asyncio.Event()
        started = asyncio.Event()

        async def slow():
            try:
                yield "x"
                started.set()
                await asyncio.sleep(10)
                yield "y"
            finally:
                closed.set()

        async def consume():
            async for _ in relay_stream(slow()):
                pass

        task = asyncio.create_task(consume())
        await asyncio.wait_for(started.wait(), timeout=1)
        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task
        assert closed.is_set()


class TestFormatErrorMarker:
    def test_format(self):
        assert format_error_marker("boom") == "\n\n**[Error streaming: boom]**"
