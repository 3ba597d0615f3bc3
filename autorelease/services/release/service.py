from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from time import sleep as _sleep
from typing import Literal

from autorelease.core.config import Config
from autorelease.core.result import Err, Ok, Result
from autorelease.output.console import ConsoleProtocol
from autorelease.services.release.eligibility import (
    Eligible,
    ExcludedLabels,
    NoReleases,
    NotDraft,
    NoUpgradeMarker,
    TooYoung,
    evaluate,
)
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.promote import promote_draft
from autorelease.services.release.store import ReleaseStore

RunAction = Literal["skipped", "dry_run", "notify", "promoted"]


@dataclass(frozen=True, slots=True)
class RunOutcome:
    """What a successful run did. Every action exits with status 0."""

    action: RunAction
    reason: str
    tag: str | None = None


def print_config(*, config: Config, console: ConsoleProtocol) -> None:
    console.header("Configuration")
    console.print(f"Repository: {config.repo}")
    console.print(f"Minimum draft age to auto-release: {config.min_age_days}")
    if config.all_labels:
        console.print("Auto-releasing with all release categories")
    else:
        console.print(f"Auto-release blocking categories: {', '.join(config.exclude_labels)}")
    if config.dry_run:
        console.print("Dry run: no release will be modified")


def run_auto_release(
    *,
    config: Config,
    store: ReleaseStore,
    console: ConsoleProtocol,
    now: datetime,
    sleep: Callable[[float], None] = _sleep,
) -> Result[RunOutcome, ReleaseError]:
    """Evaluate the latest draft and promote it when it qualifies.

    Dry run wins over the label check, matching the order in which the
    decisions are reported.
    """
    print_config(config=config, console=console)

    evaluated = evaluate(store=store, config=config, console=console, now=now)
    if isinstance(evaluated, Err):
        return evaluated

    outcome = evaluated.value
    match outcome:
        case NoReleases():
            return Ok(RunOutcome(action="skipped", reason="no releases"))
        case NotDraft(summary=summary):
            return Ok(RunOutcome(action="skipped", reason="not a draft", tag=summary.tag))
        case TooYoung(summary=summary):
            return Ok(RunOutcome(action="skipped", reason="too young", tag=summary.tag))
        case NoUpgradeMarker(summary=summary):
            return Ok(
                RunOutcome(action="skipped", reason="no dependency upgrades", tag=summary.tag)
            )
        case ExcludedLabels() | Eligible():
            pass

    tag = outcome.summary.tag
    console.newline()

    if config.dry_run:
        console.info(f"Dry run set, not releasing {tag}")
        return Ok(RunOutcome(action="dry_run", reason="dry run", tag=tag))

    if isinstance(outcome, ExcludedLabels):
        console.warning(
            f"Draft release {tag} is not only dependency changes, notifications being sent instead"
        )
        return Ok(
            RunOutcome(
                action="notify",
                reason="excluded labels: " + ", ".join(outcome.labels),
                tag=tag,
            )
        )

    console.info(f"Draft release {tag} valid for auto-releasing. Releasing...")
    promoted = promote_draft(
        store=store,
        tag=tag,
        detail=outcome.detail,
        console=console,
        settle_delay_seconds=config.settle_delay_seconds,
        sleep=sleep,
    )
    if isinstance(promoted, Err):
        return promoted

    console.success(f"Released {tag}")
    return Ok(RunOutcome(action="promoted", reason="eligible", tag=tag))
