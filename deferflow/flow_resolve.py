"""
Resolution of operands into concrete values.

Every combinator routes its conditions, subjects, candidates and bodies
through `resolve`, so a caller may pass a plain value, an awaitable, or a
zero-argument callable wherever a value is expected.
"""
import asyncio
import inspect
import numbers
from typing import Any, Awaitable, Callable, Optional

from deferflow.flow_datatypes import BRANCH_TAKEN, Literal, Pending, Producer, Operand


def classify(x: Any) -> Operand:
    if isinstance(x, (Literal, Pending, Producer)):
        return x
    if inspect.isawaitable(x):
        return Pending(x)
    if callable(x):
        return Producer(x)
    return Literal(x)


async def resolve(x: Any) -> Any:
    """
    Resolve an operand to its value.

    - Literal: returned unchanged.
    - Pending: awaited.
    - Producer: called once; an awaitable result is awaited, anything else
      (including another callable) is the value.

    Failures raised by the producer or the awaitable propagate unchanged.
    """
    match classify(x):
        case Literal(value=value):
            return value
        case Pending(awaitable=awaitable):
            return await awaitable
        case Producer(fn=fn):
            out = fn()
            if inspect.isawaitable(out):
                return await out
            return out


async def settle(x: Any) -> Any:
    """Await `x` if it is awaitable; never call it."""
    if inspect.isawaitable(x):
        return await x
    return x


async def resolve_all(*xs: Any) -> list:
    """Resolve several operands concurrently, preserving order."""
    if not xs:
        return []
    return list(await asyncio.gather(*(resolve(x) for x in xs)))


def truthy(v: Any) -> bool:
    """
    Truthiness used by every condition test.

    False, zero, NaN, the empty string and None are falsy; everything else,
    empty containers included, is true-like.
    """
    if v is None or v is False:
        return False
    if isinstance(v, (str, bytes)):
        return len(v) > 0
    if isinstance(v, numbers.Number):
        # NaN is the only value not equal to itself
        return not (v == 0 or v != v)
    return v is not BRANCH_TAKEN


class Deferred:
    """
    Awaitable handle on a computation that runs at most once.

    The coroutine produced by `factory` is scheduled as a task on the first
    await; every later await, from any number of awaiters, observes the same
    value or re-raises the same exception.
    """

    __slots__ = ("_factory", "_task", "label")

    def __init__(self, factory: Callable[[], Awaitable], label: Optional[str] = None):
        self._factory = factory
        self._task: Optional[asyncio.Future] = None
        self.label = label

    @property
    def started(self) -> bool:
        return self._task is not None

    def done(self) -> bool:
        return self._task is not None and self._task.done()

    def _ensure(self) -> asyncio.Future:
        if self._task is None:
            self._task = asyncio.ensure_future(self._factory())
        return self._task

    def __await__(self):
        return self._ensure().__await__()

    def __repr__(self):
        if self._task is None:
            status = "pending"
        elif not self._task.done():
            status = "running"
        elif self._task.cancelled():
            status = "cancelled"
        elif self._task.exception() is not None:
            status = f"failed: {self._task.exception()!r}"
        else:
            status = f"settled: {self._task.result()!r}"
        name = f" {self.label}" if self.label else ""
        return f"<Deferred{name} {status}>"


def defer(x: Any, label: Optional[str] = None) -> Deferred:
    """Wrap an operand in a Deferred that resolves it once."""
    if isinstance(x, Deferred):
        return x
    return Deferred(lambda: resolve(x), label=label)


def share(x: Any, label: Optional[str] = None) -> Any:
    """
    Make an operand safe to resolve repeatedly.

    Awaitables are wrapped in a Deferred so a coroutine is awaited only once;
    producers and literals are returned as-is, so producers are still called
    on every resolution.
    """
    if inspect.isawaitable(x) and not isinstance(x, Deferred):
        return defer(x, label=label)
    return x
