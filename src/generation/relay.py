# src/generation/relay.py — v1
"""Streaming relay: upstream chunk iterator -> bounded queue -> caller.

A producer task drains the upstream iterator into a bounded asyncio.Queue;
the relay iterator reads from the queue and yields chunks in arrival order.
Closing either end stops the other:

* upstream finishes -> a sentinel closes the relay iterator;
* upstream fails -> one inline error marker is yielded, then the iterator
  closes normally;
* the caller stops iterating (disconnect, ``aclose()``, cancellation) ->
  the producer task is cancelled and the upstream iterator is closed.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from collections.abc import AsyncIterator
from dataclasses import dataclass

logger = logging.getLogger(__name__)

DEFAULT_QUEUE_SIZE = 64


def format_error_marker(message: str) -> str:
    return f"\n\n**[Error streaming: {message}]**"


@dataclass(frozen=True)
class _Failed:
    error: BaseException


_DONE = object()


async def _close_iterator(source: AsyncIterator[str]) -> None:
    aclose = getattr(source, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception as e:
        logger.debug("Upstream iterator close failed: %s", e)


async def relay_stream(
    source: AsyncIterator[str],
    maxsize: int = DEFAULT_QUEUE_SIZE,
    idle_timeout: float | None = None,
) -> AsyncIterator[str]:
    """Forward chunks from ``source`` through a bounded channel.

    Args:
        source: Upstream chunk iterator (e.g. ``BaseLLMClient.stream()``).
        maxsize: Queue bound; the producer waits when the caller lags.
        idle_timeout: Max seconds to wait for the next chunk. On expiry the
            stream ends with an error marker. None waits forever.
    """
    queue: asyncio.Queue[object] = asyncio.Queue(maxsize=maxsize)

    async def produce() -> None:
        try:
            async for chunk in source:
                if chunk:
                    await queue.put(chunk)
            await queue.put(_DONE)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            logger.error("Upstream stream failed: %s", e)
            await queue.put(_Failed(e))
        finally:
            await _close_iterator(source)

    producer = asyncio.create_task(produce())
    forwarded = 0
    try:
        while True:
            try:
                item = await asyncio.wait_for(queue.get(), timeout=idle_timeout)
            except asyncio.TimeoutError:
                logger.error("Upstream stream idle for %.1fs, closing", idle_timeout)
                yield format_error_marker("upstream timed out")
                break
            if item is _DONE:
                break
            if isinstance(item, _Failed):
                yield format_error_marker(str(item.error) or type(item.error).__name__)
                break
            forwarded += 1
            yield item  # type: ignore[misc]
    finally:
        if not producer.done():
            logger.info("Stream closed by caller after %d chunks; cancelling upstream", forwarded)
            producer.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await producer
        logger.debug("Relay finished (%d chunks forwarded)", forwarded)
