"""
deferflow: control flow whose conditions and bodies may be deferred.

Conditions, subjects, candidates and bodies accept a plain value, an
awaitable, or a zero-argument callable returning either.
"""
from deferflow.flow_datatypes import (
    BRANCH_TAKEN, ClauseState, FlowError, Literal, LoopLimitExceeded, Pending, Producer,
)
from deferflow.flow_resolve import Deferred, classify, defer, resolve, settle, share, truthy
from deferflow.flow_operators import and_, eq, ge, gt, le, lt, ne, not_, or_
from deferflow.flow_if import If
from deferflow.flow_switch import Switch
from deferflow.flow_loops import Repeat, While
from deferflow.flow_foreach import ForEach

__all__ = [
    "If", "Switch", "While", "Repeat", "ForEach",
    "not_", "and_", "or_", "eq", "ne", "gt", "ge", "le", "lt",
    "Deferred", "defer", "share", "resolve", "settle", "classify", "truthy",
    "Literal", "Pending", "Producer", "ClauseState", "BRANCH_TAKEN",
    "FlowError", "LoopLimitExceeded",
]
