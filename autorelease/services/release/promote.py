"""Turn a draft release into a published release under the same tag.

gh cannot clear the draft flag of an existing release
(https://github.com/cli/cli/issues/1997), so promotion goes through a copy:

    create_temp      draft <tag>-temp with the same body and target
    delete_original  delete draft <tag>
    recreate         create <tag> again, not a draft
    delete_temp      wait for the store to settle, delete <tag>-temp

The original draft is never deleted before the temp copy exists. A failed
step stops the sequence; nothing is rolled back and the error hint says
which releases are left for manual cleanup.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from time import sleep as _sleep
from typing import Literal

from autorelease.core.result import Err, Ok, Result
from autorelease.output.console import ConsoleProtocol, Style
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.fsm import FINISH, StepOutcome, advance, run_state_machine
from autorelease.services.release.model import ReleaseDetail, temp_tag_for
from autorelease.services.release.store import ReleaseStore

PromotionStep = Literal["create_temp", "delete_original", "recreate", "delete_temp", "done"]


@dataclass(frozen=True, slots=True)
class PromotionState:
    step: PromotionStep
    tag: str
    temp_tag: str
    body: str
    target: str


def _echo(console: ConsoleProtocol, output: str) -> None:
    for line in output.splitlines():
        console.print(line, Style.DIM)


def _step_failed(
    error: ReleaseError,
    *,
    step: PromotionStep,
    recovery: str,
) -> Err[ReleaseError]:
    return Err(
        ReleaseError(
            kind="promotion_failed",
            message=f"promotion step {step} failed: {error.message}",
            hint=recovery,
            output=error.output,
        )
    )


def promote_draft(
    *,
    store: ReleaseStore,
    tag: str,
    detail: ReleaseDetail,
    console: ConsoleProtocol,
    settle_delay_seconds: float,
    sleep: Callable[[float], None] = _sleep,
) -> Result[PromotionState, ReleaseError]:
    """Publish draft `tag` with the body and target of `detail`.

    Returns the final state (step "done") when all four steps succeeded.
    """

    def create_temp(s: PromotionState) -> Result[StepOutcome[PromotionState], ReleaseError]:
        console.print(f"Creating temporary draft release {s.temp_tag}")
        r = store.create_release(s.temp_tag, body=s.body, target=s.target, draft=True)
        if isinstance(r, Err):
            return _step_failed(
                r.error,
                step=s.step,
                recovery=f"draft {s.tag} is untouched",
            )
        _echo(console, r.value)
        return Ok(advance(replace(s, step="delete_original")))

    def delete_original(s: PromotionState) -> Result[StepOutcome[PromotionState], ReleaseError]:
        console.print(f"Deleting original draft release {s.tag}")
        r = store.delete_release(s.tag)
        if isinstance(r, Err):
            return _step_failed(
                r.error,
                step=s.step,
                recovery=f"drafts {s.tag} and {s.temp_tag} both exist; delete {s.temp_tag} by hand",
            )
        _echo(console, r.value)
        return Ok(advance(replace(s, step="recreate")))

    def recreate(s: PromotionState) -> Result[StepOutcome[PromotionState], ReleaseError]:
        console.print(f"Recreating release {s.tag} without draft status")
        r = store.create_release(s.tag, body=s.body, target=s.target, draft=False)
        if isinstance(r, Err):
            return _step_failed(
                r.error,
                step=s.step,
                recovery=(
                    f"no release exists at {s.tag}; draft {s.temp_tag} holds the content, "
                    f"publish it as {s.tag} by hand"
                ),
            )
        _echo(console, r.value)
        return Ok(advance(replace(s, step="delete_temp")))

    def delete_temp(s: PromotionState) -> Result[StepOutcome[PromotionState], ReleaseError]:
        if settle_delay_seconds > 0:
            console.print(f"Waiting {settle_delay_seconds:g} seconds", Style.DIM)
            sleep(settle_delay_seconds)
        console.print(f"Deleting temporary draft release {s.temp_tag}")
        r = store.delete_release(s.temp_tag)
        if isinstance(r, Err):
            return _step_failed(
                r.error,
                step=s.step,
                recovery=f"{s.tag} is published; delete stray draft {s.temp_tag} by hand",
            )
        _echo(console, r.value)
        return Ok(advance(replace(s, step="done")))

    def done(s: PromotionState) -> Result[StepOutcome[PromotionState], ReleaseError]:
        return Ok(FINISH)

    def report(s: PromotionState) -> None:
        if s.step != "done":
            console.print(f"next step: {s.step}", Style.DIM)

    initial = PromotionState(
        step="create_temp",
        tag=tag,
        temp_tag=temp_tag_for(tag),
        body=detail.body,
        target=detail.target_commitish,
    )
    return run_state_machine(
        initial_state=initial,
        get_step=lambda s: s.step,
        handlers={
            "create_temp": create_temp,
            "delete_original": delete_original,
            "recreate": recreate,
            "delete_temp": delete_temp,
            "done": done,
        },
        on_step=report,
    )
