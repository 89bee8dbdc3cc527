import asyncio
import io

import pytest

from src.cli.process import ProcessController, describe_error
from src.cli.state import RunEvent, RunState, RunStateMachine
from src.domain.models import AppConfig
from src.trader.quantum_trader import QuantumTrader


def test_run_starts_in_running():
    m = RunStateMachine()
    assert m.state is RunState.RUNNING
    assert not m.finished


def test_run_succeeds():
    m = RunStateMachine()
    assert m.transition(RunEvent.SUCCEED) is RunState.SUCCEEDED
    assert m.finished


def test_run_fails():
    m = RunStateMachine()
    assert m.transition(RunEvent.FAIL) is RunState.FAILED


def test_terminal_states_do_not_restart(caplog):
    m = RunStateMachine()
    m.transition(RunEvent.FAIL)
    assert m.transition(RunEvent.SUCCEED) is RunState.FAILED
    assert any("Invalid run state transition" in r.getMessage() for r in caplog.records)


def test_process_controller_fail_exits_one():
    stream = io.StringIO()
    with pytest.raises(SystemExit) as exc:
        ProcessController(stream).fail(RuntimeError("boom"))
    assert exc.value.code == 1
    assert stream.getvalue() == "RuntimeError: boom\n"


def test_describe_error_falls_back_to_class_name():
    assert describe_error(TimeoutError()) == "TimeoutError"
    assert describe_error(ValueError("x")) == "ValueError: x"


def test_quantum_trader_executes_with_config():
    app = QuantumTrader(AppConfig(verbose=True))
    assert app.verbose is True
    assert asyncio.run(app.execute()) is None


def test_quantum_trader_defaults_to_quiet():
    assert QuantumTrader().verbose is False
