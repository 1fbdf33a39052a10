from __future__ import annotations

from enum import Enum


class RunState(str, Enum):
    INIT = "init"
    VERIFYING = "verifying_environment"
    AUTHENTICATING = "authenticating"
    DEPLOYING = "deploying"
    REPORTING_SUCCESS = "reporting_success"
    REPORTING_FAILURE = "reporting_failure"
    DONE = "done"

    @property
    def is_terminal(self) -> bool:
        return self is RunState.DONE


DEFAULT_STATE_SEQUENCE: tuple[RunState, ...] = (
    RunState.INIT,
    RunState.VERIFYING,
    RunState.AUTHENTICATING,
    RunState.DEPLOYING,
    RunState.REPORTING_SUCCESS,
    RunState.DONE,
)


def is_valid_transition(current: RunState, new: RunState) -> bool:
    if current.is_terminal:
        return False
    if new == RunState.REPORTING_FAILURE:
        return current != RunState.REPORTING_FAILURE
    if current == RunState.REPORTING_FAILURE:
        return new == RunState.DONE
    sequence = list(DEFAULT_STATE_SEQUENCE)
    try:
        new_index = sequence.index(new)
    except ValueError:
        return False
    return new_index == sequence.index(current) + 1
