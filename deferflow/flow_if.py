"""
Conditional chains: If(test).then(...).else_if(...).then(...).else_(...)

Each link owns one deferred carrier, the value later links test. Links are
never mutated; every method returns a new `If`.
"""
from typing import Any

from deferflow.flow_config import _dbg
from deferflow.flow_datatypes import BRANCH_TAKEN
from deferflow.flow_resolve import Deferred, defer, resolve, truthy


class If:
    """
    Branch on a value that may not be available yet.

    `then` runs its body when the carrier is true-like and `else_` when it is
    falsy; both forward the tested value, not the body's result, so
    `If(x).then(a).else_(b)` tests `x` twice and runs exactly one body.
    Bodies must be callables. Anything else is ignored and the same chain is
    returned, so a mistyped body fails silently.

    Chains are lazy: nothing is tested or run until the chain is awaited. A
    statement like `If(ready).then(log)` that is never awaited does nothing,
    and Python gives no "never awaited" warning for it.
    """

    def __init__(self, test: Any):
        self.carrier: Deferred = defer(test, label="if")

    @classmethod
    def _link(cls, carrier: Deferred) -> "If":
        link = cls.__new__(cls)
        link.carrier = carrier
        return link

    def then(self, body) -> "If":
        if not callable(body):
            _dbg("if.then", "ignoring non-callable body", type(body).__name__)
            return self
        prev = self.carrier

        async def _then():
            x = await prev
            if x is not BRANCH_TAKEN and truthy(x):
                await resolve(body)
            return x
        return If._link(Deferred(_then, label="then"))

    def else_(self, body) -> "If":
        if not callable(body):
            _dbg("if.else", "ignoring non-callable body", type(body).__name__)
            return self
        prev = self.carrier

        async def _else():
            x = await prev
            if x is not BRANCH_TAKEN and not truthy(x):
                await resolve(body)
            return x
        return If._link(Deferred(_else, label="else"))

    def else_if(self, test: Any) -> "If":
        prev = self.carrier

        async def _else_if():
            x = await prev
            if x is BRANCH_TAKEN or truthy(x):
                return BRANCH_TAKEN
            return await resolve(test)
        return If._link(Deferred(_else_if, label="else_if"))

    async def _result(self):
        x = await self.carrier
        return False if x is BRANCH_TAKEN else x

    def __await__(self):
        return self._result().__await__()
