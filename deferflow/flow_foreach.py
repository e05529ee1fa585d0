"""
Ordered iteration: `ForEach(items).do(body)`.
"""
import collections.abc
import inspect
from typing import Any, Callable

from deferflow.flow_config import _dbg
from deferflow.flow_resolve import Deferred, settle


class ForEach:
    """
    Run `body(item)` for each item, one at a time, in iteration order.

    Each item is awaited first if it is awaitable. The next call starts only
    after the previous body (and anything it returned that is awaitable) has
    settled; the first failure stops the iteration and propagates. Resolves
    to the last body's result, or None for an empty collection.

    Both ordinary and asynchronous iterables are accepted. Either is consumed
    once, when the result is first awaited.
    """

    def __init__(self, items: Any):
        if not isinstance(items, (collections.abc.Iterable, collections.abc.AsyncIterable)):
            raise TypeError(f"foreach requires an iterable, got {type(items).__name__}")
        self.items = items

    def do(self, body: Callable) -> Deferred:
        if not callable(body):
            raise TypeError(f"foreach requires a callable body, got {type(body).__name__}")
        items = self.items

        async def _step(item):
            value = await settle(item)
            out = body(value)
            if inspect.isawaitable(out):
                out = await out
            return out

        async def _run():
            last = None
            count = 0
            if isinstance(items, collections.abc.AsyncIterable):
                async for item in items:
                    last = await _step(item)
                    count += 1
            else:
                for item in items:
                    last = await _step(item)
                    count += 1
            _dbg("foreach", "visited", count, "items")
            return last

        return Deferred(_run, label="foreach")
