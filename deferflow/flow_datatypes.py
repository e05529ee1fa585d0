"""
Defines the core data types shared by the deferflow combinators.

Operands reaching any combinator are classified into one of three tagged
variants (Literal, Pending, Producer) before being resolved.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Union


class FlowError(Exception):
    """Base class for errors raised by deferflow itself."""
    pass


class LoopLimitExceeded(FlowError, RuntimeError):
    def __init__(self, construct: str, limit: int):
        super().__init__(f"{construct}: iteration limit exceeded ({limit})")
        self.construct = construct
        self.limit = limit


# =================================================================
# Operand variants
# =================================================================

@dataclass(frozen=True)
class Literal:
    """A plain value, used as-is."""
    value: Any


@dataclass(frozen=True)
class Pending:
    """An awaitable whose outcome is not known yet."""
    awaitable: Awaitable


@dataclass(frozen=True)
class Producer:
    """A zero-argument callable returning a value or an awaitable."""
    fn: Callable[[], Any]


Operand = Union[Literal, Pending, Producer]


# =================================================================
# Selection contexts
# =================================================================

class ClauseState(Enum):
    PENDING = "pending"
    RESOLVING = "resolving"
    RESOLVED = "resolved"


class _BranchTaken:
    """Carrier placed on a conditional chain once one of its branches has run."""
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self):
        return False

    def __repr__(self):
        return "BRANCH_TAKEN"


BRANCH_TAKEN = _BranchTaken()
