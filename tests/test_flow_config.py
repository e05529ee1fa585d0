import pytest

from deferflow import If, Switch
from deferflow.flow_config import DEFAULT_YIELD_EVERY, _dbg, max_loop_iterations, yield_every


def test_loop_settings_defaults(monkeypatch):
    monkeypatch.delenv("DEFERFLOW_MAX_LOOP_ITERS", raising=False)
    monkeypatch.delenv("DEFERFLOW_YIELD_EVERY", raising=False)
    assert max_loop_iterations() is None
    assert yield_every() == DEFAULT_YIELD_EVERY


def test_loop_settings_from_environment(monkeypatch):
    monkeypatch.setenv("DEFERFLOW_MAX_LOOP_ITERS", "250")
    monkeypatch.setenv("DEFERFLOW_YIELD_EVERY", "7")
    assert max_loop_iterations() == 250
    assert yield_every() == 7


@pytest.mark.parametrize("raw", ["", "abc", "0", "-3"])
def test_invalid_iteration_cap_means_unbounded(monkeypatch, raw):
    monkeypatch.setenv("DEFERFLOW_MAX_LOOP_ITERS", raw)
    assert max_loop_iterations() is None


@pytest.mark.parametrize("raw", ["x", "0"])
def test_invalid_yield_interval_falls_back(monkeypatch, raw):
    monkeypatch.setenv("DEFERFLOW_YIELD_EVERY", raw)
    assert yield_every() == DEFAULT_YIELD_EVERY


def test_dbg_is_silent_without_flag(monkeypatch, capsys):
    monkeypatch.delenv("DEFERFLOW_DEBUG", raising=False)
    _dbg("hidden")
    assert capsys.readouterr().err == ""


def test_dbg_writes_to_stderr_with_flag(monkeypatch, capsys):
    monkeypatch.setenv("DEFERFLOW_DEBUG", "1")
    _dbg("switch", "clause", 0)
    assert capsys.readouterr().err == "[DBG] switch clause 0\n"


def test_ignored_actions_are_traced(monkeypatch, capsys):
    monkeypatch.setenv("DEFERFLOW_DEBUG", "1")
    If(True).then(3)
    Switch(1).case(1).do("x")
    err = capsys.readouterr().err
    assert "if.then ignoring non-callable body int" in err
    assert "switch.do ignoring non-callable action str" in err


@pytest.mark.asyncio
async def test_suppressed_clause_is_traced(monkeypatch, capsys):
    monkeypatch.setenv("DEFERFLOW_DEBUG", "1")
    await Switch(1).case(1).do(lambda: None).break_().case(1).do(lambda: None).default(lambda: None)
    err = capsys.readouterr().err
    assert "suppressed" in err
    assert "break armed" in err
