from __future__ import annotations

from dataclasses import dataclass, replace

from autorelease.core.result import Err, Ok, Result
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.fsm import FINISH, StepOutcome, advance, run_state_machine


@dataclass(frozen=True, slots=True)
class _State:
    step: str
    counter: int


def test_run_state_machine_advances_and_reports_steps() -> None:
    seen: list[_State] = []

    def step_a(s: _State) -> Result[StepOutcome[_State], ReleaseError]:
        return Ok(advance(replace(s, step="b", counter=s.counter + 1)))

    def step_b(s: _State) -> Result[StepOutcome[_State], ReleaseError]:
        return Ok(FINISH)

    result = run_state_machine(
        initial_state=_State(step="a", counter=0),
        get_step=lambda s: s.step,
        handlers={"a": step_a, "b": step_b},
        on_step=seen.append,
    )

    assert isinstance(result, Ok)
    assert result.value == _State(step="b", counter=1)
    assert seen == [_State(step="b", counter=1)]


def test_run_state_machine_unknown_step_fails() -> None:
    result = run_state_machine(
        initial_state=_State(step="missing", counter=0),
        get_step=lambda s: s.step,
        handlers={},
    )

    assert isinstance(result, Err)
    assert result.error.kind == "promotion_failed"


def test_run_state_machine_stops_on_handler_error() -> None:
    calls: list[str] = []

    def bad_step(s: _State) -> Result[StepOutcome[_State], ReleaseError]:
        calls.append(s.step)
        return Err(ReleaseError(kind="gh_failed", message="boom"))

    def never(s: _State) -> Result[StepOutcome[_State], ReleaseError]:
        calls.append(s.step)
        return Ok(FINISH)

    result = run_state_machine(
        initial_state=_State(step="a", counter=0),
        get_step=lambda s: s.step,
        handlers={"a": bad_step, "b": never},
    )

    assert isinstance(result, Err)
    assert result.error.message == "boom"
    assert calls == ["a"]
