import asyncio

import pytest

from deferflow import If


def recorder():
    calls = []

    def make(name):
        def _f():
            calls.append(name)
            return name
        return _f
    return calls, make


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [True, 1, "yes", [0], {"a": 1}])
async def test_then_runs_once_for_true_like_and_skips_other_branches(value):
    calls, make = recorder()
    await If(value).then(make("then")).else_if(make("elif-test")).then(make("elif")).else_(make("else"))
    assert calls == ["then"]


@pytest.mark.asyncio
@pytest.mark.parametrize("value", [False, 0, "", None, float("nan")])
async def test_then_never_runs_for_falsy(value):
    calls, make = recorder()
    await If(value).then(make("then"))
    assert calls == []


@pytest.mark.asyncio
async def test_else_runs_for_falsy_and_forwards_tested_value():
    calls, make = recorder()
    res = await If(0).then(make("then")).else_(make("else"))
    assert calls == ["else"]
    assert res == 0


@pytest.mark.asyncio
async def test_then_forwards_tested_value_not_body_result():
    assert await If("subject").then(lambda: "body") == "subject"


@pytest.mark.asyncio
async def test_else_if_chain_selects_first_true_branch():
    calls, make = recorder()
    x = 7
    await (
        If(lambda: x < 5).then(make("small"))
        .else_if(lambda: x < 10).then(make("medium"))
        .else_if(lambda: x < 100).then(make("large"))
        .else_(make("huge"))
    )
    assert calls == ["medium"]


@pytest.mark.asyncio
async def test_else_if_tests_are_not_resolved_after_a_branch_ran():
    calls, make = recorder()
    res = await If(True).then(make("first")).else_if(make("second-test"))
    assert calls == ["first"]
    assert res is False


@pytest.mark.asyncio
async def test_final_else_runs_when_no_test_matches():
    calls, make = recorder()
    await If(False).then(make("a")).else_if(None).then(make("b")).else_(make("c"))
    assert calls == ["c"]


@pytest.mark.asyncio
async def test_tests_and_bodies_may_be_deferred():
    events = []

    async def slow_true():
        await asyncio.sleep(0.01)
        return True

    async def body():
        await asyncio.sleep(0)
        events.append("body")

    await If(slow_true()).then(body)
    assert events == ["body"]


@pytest.mark.asyncio
async def test_body_completes_before_next_link():
    events = []

    async def body():
        await asyncio.sleep(0.01)
        events.append("then")

    await If(True).then(body).then(lambda: events.append("again"))
    assert events == ["then", "again"]


@pytest.mark.asyncio
async def test_non_callable_body_is_ignored():
    chain = If(True)
    assert chain.then("not callable") is chain
    assert chain.else_(None) is chain


@pytest.mark.asyncio
async def test_chain_is_lazy_until_awaited():
    calls, make = recorder()
    chain = If(True).then(make("then"))
    await asyncio.sleep(0)
    assert calls == []
    await chain
    await chain
    assert calls == ["then"]


@pytest.mark.asyncio
async def test_failure_in_test_propagates_through_chain():
    def fail():
        raise LookupError("bad test")

    with pytest.raises(LookupError):
        await If(fail).then(lambda: None).else_(lambda: None)
