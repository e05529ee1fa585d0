"""
Logical and comparison operators over deferred operands.

Each operator resolves all of its operands concurrently and then applies a
plain function to the values. Ordering operators resolve to False for
operands Python cannot order. Both operands of `and_`/`or_` are always
resolved; only the boolean result follows the usual truth tables.
"""
import operator
from typing import Any, Callable

from deferflow.flow_config import _dbg
from deferflow.flow_resolve import Deferred, resolve, resolve_all, truthy


def _binary(name: str, fn: Callable[[Any, Any], Any], a, b, ordering: bool = False) -> Deferred:
    async def _apply():
        left, right = await resolve_all(a, b)
        try:
            res = fn(left, right)
        except TypeError:
            if not ordering:
                raise
            # unordered pair
            res = False
        _dbg(name, type(left).__name__, type(right).__name__, "->", res)
        return res
    return Deferred(_apply, label=name)


def not_(a) -> Deferred:
    async def _apply():
        return not truthy(await resolve(a))
    return Deferred(_apply, label="not")


def and_(a, b) -> Deferred:
    return _binary("and", lambda x, y: truthy(x) and truthy(y), a, b)


def or_(a, b) -> Deferred:
    return _binary("or", lambda x, y: truthy(x) or truthy(y), a, b)


def eq(a, b) -> Deferred:
    return _binary("eq", operator.eq, a, b)


def ne(a, b) -> Deferred:
    return _binary("ne", operator.ne, a, b)


def gt(a, b) -> Deferred:
    return _binary("gt", operator.gt, a, b, ordering=True)


def ge(a, b) -> Deferred:
    return _binary("ge", operator.ge, a, b, ordering=True)


def le(a, b) -> Deferred:
    return _binary("le", operator.le, a, b, ordering=True)


def lt(a, b) -> Deferred:
    return _binary("lt", operator.lt, a, b, ordering=True)
