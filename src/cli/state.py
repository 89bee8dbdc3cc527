"""Lifecycle of a single application run."""

from __future__ import annotations

import logging
from enum import Enum, auto

logger = logging.getLogger(__name__)


class RunState(Enum):
    RUNNING = auto()
    SUCCEEDED = auto()
    FAILED = auto()


class RunEvent(Enum):
    SUCCEED = auto()
    FAIL = auto()


_TRANSITIONS = {
    RunState.RUNNING: {
        RunEvent.SUCCEED: RunState.SUCCEEDED,
        RunEvent.FAIL: RunState.FAILED,
    },
    # Terminal: a run is never restarted or retried.
    RunState.SUCCEEDED: {},
    RunState.FAILED: {},
}


class RunStateMachine:
    def __init__(self):
        self.state = RunState.RUNNING

    @property
    def finished(self) -> bool:
        return self.state is not RunState.RUNNING

    def transition(self, event: RunEvent) -> RunState:
        next_state = _TRANSITIONS[self.state].get(event)
        if next_state is None:
            logger.warning("Invalid run state transition: %s --%s--> (ignored)", self.state.name, event.name)
            return self.state
        self.state = next_state
        return self.state
