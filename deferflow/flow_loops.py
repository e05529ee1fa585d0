"""
Pre-test and post-test loops whose conditions and bodies may be deferred.

Both loops run as one coroutine with a plain `while True`, so iteration count
never grows the stack. They yield to the event loop every few iterations so a
loop over synchronous callables cannot starve other tasks.
"""
import asyncio
from typing import Any, Callable

from deferflow.flow_config import _dbg, max_loop_iterations, yield_every
from deferflow.flow_datatypes import LoopLimitExceeded
from deferflow.flow_resolve import Deferred, resolve, share, truthy


def _require_body(construct: str, body) -> None:
    if not callable(body):
        raise TypeError(f"{construct} requires a callable body, got {type(body).__name__}")


class _LoopGuard:
    """Counts iterations, yields cooperatively and enforces the configured cap."""

    def __init__(self, construct: str):
        self.construct = construct
        self.count = 0
        self.every = yield_every()
        self.limit = max_loop_iterations()

    async def tick(self):
        self.count += 1
        if (self.count % self.every) == 0:
            await asyncio.sleep(0)
        if self.limit is not None and self.count > self.limit:
            raise LoopLimitExceeded(self.construct, self.limit)


class While:
    """
    Pre-test loop: `While(condition).do(body)`.

    The condition is resolved before every iteration, calling it again if it
    is a callable. The loop resolves to False once the condition is falsy.
    """

    def __init__(self, condition: Any):
        self.condition = share(condition, label="while")

    def do(self, body: Callable) -> Deferred:
        _require_body("while", body)
        condition = self.condition

        async def _loop():
            guard = _LoopGuard("while")
            while True:
                if not truthy(await resolve(condition)):
                    break
                await resolve(body)
                await guard.tick()
            _dbg("while", "done after", guard.count, "iterations")
            return False

        return Deferred(_loop, label="while")


class Repeat:
    """
    Post-test loop: `Repeat(body).until(condition)`.

    The body runs at least once; the loop stops as soon as the condition,
    resolved after each run of the body, is true-like. Resolves to False.
    """

    def __init__(self, body: Callable):
        _require_body("repeat", body)
        self.body = body

    def until(self, condition: Any) -> Deferred:
        body = self.body
        condition = share(condition, label="until")

        async def _loop():
            guard = _LoopGuard("repeat")
            while True:
                await resolve(body)
                if truthy(await resolve(condition)):
                    break
                await guard.tick()
            _dbg("repeat", "done after", guard.count + 1, "iterations")
            return False

        return Deferred(_loop, label="repeat")
