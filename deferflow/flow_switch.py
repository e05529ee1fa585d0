"""
Multi-way selection over deferred subjects.

    Switch(subject).case(1, 2).do(a).break_().case(3).do(b).default(c)

Every `do` declares a clause and returns a new context whose subject is that
clause's deferred result, so clauses resolve strictly in declaration order.
Contexts are handles onto plain records held in a per-switch arena; records
point at their parent by index.

Break semantics: `break_()` marks the *parent* record (the one whose clause
just matched) as broken. When that clause is evaluated and matches, it runs
its action and arms `break_success`; from then on any clause or `default`
downstream of it sees an armed ancestor and is suppressed.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional

from deferflow.flow_config import _dbg
from deferflow.flow_datatypes import ClauseState
from deferflow.flow_resolve import Deferred, resolve, resolve_all, share


@dataclass
class _ClauseRecord:
    subject: Any
    parent: Optional[int] = None
    cases: List[Any] = field(default_factory=list)
    broken: bool = False
    break_success: bool = False
    state: ClauseState = ClauseState.PENDING


class _ClauseArena:
    """Owns every record of one selection chain."""

    def __init__(self):
        self.records: List[_ClauseRecord] = []

    def add(self, subject: Any, parent: Optional[int] = None) -> int:
        self.records.append(_ClauseRecord(subject=subject, parent=parent))
        return len(self.records) - 1

    def ancestors(self, index: int):
        parent = self.records[index].parent
        while parent is not None:
            yield parent
            parent = self.records[parent].parent

    def ancestor_armed(self, index: int) -> bool:
        return any(self.records[i].break_success for i in self.ancestors(index))

    def armed(self, index: int) -> bool:
        """True when this record or any ancestor has a break in effect."""
        return self.records[index].break_success or self.ancestor_armed(index)

    def claim(self, index: int) -> bool:
        """
        Decide whether a matching clause of `index` may run its action.

        Returns False when a break upstream (or on this record) is already in
        effect. Otherwise the clause runs; if a child called `break_()` on
        this record, the break is armed here for every later clause.
        """
        record = self.records[index]
        if self.armed(index):
            return False
        if record.broken:
            record.break_success = True
        return True


class Switch:
    """
    A selection context.

    `Switch(subject)` creates the root context. The subject may be a value,
    an awaitable or a zero-argument callable; a callable subject is called
    again by every clause declared directly on the root, while an awaitable
    subject is awaited once and its value reused.

    Candidates match with Python equality, so `Switch(True).case(1)` and
    `Switch(0).case(False)` both match.

    Nothing runs until a context or a `default` result is awaited; a chain
    that is built and dropped never runs its actions, and no warning is given.
    """

    def __init__(self, subject: Any):
        self._arena = _ClauseArena()
        self._index = self._arena.add(share(subject, label="subject"))

    @classmethod
    def _at(cls, arena: _ClauseArena, index: int) -> "Switch":
        ctx = cls.__new__(cls)
        ctx._arena = arena
        ctx._index = index
        return ctx

    @property
    def _record(self) -> _ClauseRecord:
        return self._arena.records[self._index]

    @property
    def state(self) -> ClauseState:
        return self._record.state

    @property
    def parent(self) -> Optional["Switch"]:
        parent = self._record.parent
        return None if parent is None else Switch._at(self._arena, parent)

    @property
    def broken(self) -> bool:
        return self._record.broken

    @property
    def break_success(self) -> bool:
        return self._record.break_success

    def case(self, *values) -> "Switch":
        """Add candidate values for the next `do`. Values are resolved lazily."""
        self._record.cases.extend(share(v, label="case") for v in values)
        return self

    def do(self, action) -> "Switch":
        if not callable(action):
            _dbg("switch.do", "ignoring non-callable action", type(action).__name__)
            return self
        arena, index = self._arena, self._index

        async def _clause():
            record = arena.records[index]
            record.state = ClauseState.RESOLVING
            try:
                candidates = await resolve_all(*record.cases)
                value = await resolve(record.subject)
                if value not in candidates:
                    _dbg("switch.do", "clause", index, "no match for", repr(value))
                    return value
                if arena.claim(index):
                    _dbg("switch.do", "clause", index, "matched", repr(value),
                         "break armed" if record.break_success else "")
                    await resolve(action)
                else:
                    _dbg("switch.do", "clause", index, "matched", repr(value), "suppressed")
                return value
            finally:
                record.state = ClauseState.RESOLVED

        child = arena.add(Deferred(_clause, label=f"clause {index}"), parent=index)
        return Switch._at(arena, child)

    def break_(self) -> "Switch":
        parent = self._record.parent
        if parent is not None:
            self._arena.records[parent].broken = True
        return self

    def default(self, action) -> Deferred:
        """
        Run `action` unless a break is in effect on this context or upstream.

        Resolves to the action's result, or False when suppressed. A
        non-callable action is returned as the value.
        """
        arena, index = self._arena, self._index

        async def _default():
            record = arena.records[index]
            record.state = ClauseState.RESOLVING
            try:
                await resolve(record.subject)
                if arena.armed(index):
                    _dbg("switch.default", "suppressed at", index)
                    return False
                return await resolve(action)
            finally:
                record.state = ClauseState.RESOLVED

        return Deferred(_default, label="default")

    def __await__(self):
        return resolve(self._record.subject).__await__()

    def __repr__(self):
        record = self._record
        return (f"<Switch #{self._index} parent={record.parent} cases={len(record.cases)} "
                f"broken={record.broken} break_success={record.break_success} {record.state.value}>")
