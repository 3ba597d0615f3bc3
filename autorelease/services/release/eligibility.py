"""Decide whether the latest draft release may be promoted automatically.

Checks run in order and stop at the first one that fails:

1. at least one release exists
2. the latest release is a draft
3. the draft is at least `min_age_days` old
4. the fetched release is still a draft (fatal if not)
5. the body carries the " Dependency Upgrades" section marker
6. the body mentions none of the blocking labels

Steps 1-3 and 5 end the run normally. Step 6 also ends it without promoting,
but routes to the notification path instead. Label matching is a plain
case-sensitive substring search over the whole body: a label that shows up
anywhere (even mid-word) blocks the release.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from autorelease.core.config import Config
from autorelease.core.result import Err, Ok, Result
from autorelease.output.console import ConsoleProtocol, Style
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.model import ReleaseDetail, ReleaseSummary
from autorelease.services.release.store import ReleaseStore

UPGRADE_MARKER = " Dependency Upgrades"
RELEASE_DATE_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

_RELEASE_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$")


@dataclass(frozen=True, slots=True)
class NoReleases:
    pass


@dataclass(frozen=True, slots=True)
class NotDraft:
    summary: ReleaseSummary


@dataclass(frozen=True, slots=True)
class TooYoung:
    summary: ReleaseSummary
    released_at: datetime
    cutoff: datetime


@dataclass(frozen=True, slots=True)
class NoUpgradeMarker:
    summary: ReleaseSummary
    detail: ReleaseDetail


@dataclass(frozen=True, slots=True)
class ExcludedLabels:
    summary: ReleaseSummary
    detail: ReleaseDetail
    labels: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class Eligible:
    summary: ReleaseSummary
    detail: ReleaseDetail


@dataclass(frozen=True, slots=True)
class OldEnough:
    """Steps 1-3 passed; the detail still has to be fetched."""

    summary: ReleaseSummary


SummaryCheck = NoReleases | NotDraft | TooYoung | OldEnough
Eligibility = NoReleases | NotDraft | TooYoung | NoUpgradeMarker | ExcludedLabels | Eligible


def parse_release_date(raw: str) -> Result[datetime, ReleaseError]:
    """Parse a release date like 2006-01-02T15:04:05Z (UTC, literal Z)."""
    if _RELEASE_DATE_RE.match(raw) is None:
        return Err(
            ReleaseError(
                kind="invalid_date",
                message=f"invalid release date: {raw!r}",
                hint="expected YYYY-MM-DDTHH:MM:SSZ",
            )
        )
    try:
        parsed = datetime.strptime(raw, RELEASE_DATE_FORMAT)
    except ValueError as e:
        return Err(ReleaseError(kind="invalid_date", message=f"invalid release date: {raw!r} ({e})"))
    return Ok(parsed.replace(tzinfo=UTC))


def check_summary(
    summary: ReleaseSummary | None,
    *,
    min_age_days: int,
    now: datetime,
) -> Result[SummaryCheck, ReleaseError]:
    """Steps 1-3. A draft dated exactly `now - min_age_days` is old enough."""
    if summary is None:
        return Ok(NoReleases())

    if not summary.is_draft:
        return Ok(NotDraft(summary=summary))

    parsed = parse_release_date(summary.date_raw)
    if isinstance(parsed, Err):
        return parsed

    cutoff = now - timedelta(days=min_age_days)
    if parsed.value > cutoff:
        return Ok(TooYoung(summary=summary, released_at=parsed.value, cutoff=cutoff))

    return Ok(OldEnough(summary=summary))


def find_blocking_labels(body: str, labels: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(label for label in labels if label in body)


def check_detail(
    summary: ReleaseSummary,
    detail: ReleaseDetail,
    *,
    blocking_labels: tuple[str, ...],
) -> Result[NoUpgradeMarker | ExcludedLabels | Eligible, ReleaseError]:
    """Steps 4-7, on the release fetched by tag."""
    if not detail.is_draft:
        # Listed as a draft a moment ago: someone else is editing this release.
        return Err(
            ReleaseError(
                kind="not_draft",
                message=f"release {summary.tag} is no longer a draft",
                hint="the release changed while it was being evaluated",
            )
        )

    if UPGRADE_MARKER not in detail.body:
        return Ok(NoUpgradeMarker(summary=summary, detail=detail))

    found = find_blocking_labels(detail.body, blocking_labels)
    if found:
        return Ok(ExcludedLabels(summary=summary, detail=detail, labels=found))

    return Ok(Eligible(summary=summary, detail=detail))


def _print_detail(console: ConsoleProtocol, detail: ReleaseDetail) -> None:
    console.print(f"Release target: {detail.target_commitish}")
    console.print("Release body: |")
    for line in detail.body.split("\n"):
        console.print(f"\t{line}", Style.DIM)


def evaluate(
    *,
    store: ReleaseStore,
    config: Config,
    console: ConsoleProtocol,
    now: datetime,
) -> Result[Eligibility, ReleaseError]:
    console.header(f"Getting releases for {config.repo}")
    listed = store.list_releases()
    if isinstance(listed, Err):
        return listed

    releases = listed.value
    latest = releases[0] if releases else None
    if latest is not None:
        console.print("Most recent release:")
        console.print(f"- version: {latest.tag}")
        console.print(f"- date: {latest.date_raw}")

    checked = check_summary(latest, min_age_days=config.min_age_days, now=now)
    if isinstance(checked, Err):
        return checked

    match checked.value:
        case NoReleases() as outcome:
            console.info("No releases detected, exiting")
            return Ok(outcome)
        case NotDraft(summary=summary) as outcome:
            console.info(f"Latest release ({summary.tag}) is not a pending draft, exiting")
            return Ok(outcome)
        case TooYoung(summary=summary) as outcome:
            console.info(
                f"Release not {config.min_age_days} days old yet: {summary.date_raw}. Exiting"
            )
            return Ok(outcome)
        case OldEnough(summary=summary):
            pass

    console.header(f"Pulling data from draft release {summary.tag}")
    viewed = store.view_release(summary.tag)
    if isinstance(viewed, Err):
        return viewed

    detail = viewed.value
    if detail.is_draft:
        _print_detail(console, detail)

    result = check_detail(summary, detail, blocking_labels=config.blocking_labels)
    if isinstance(result, Err):
        return result

    match result.value:
        case NoUpgradeMarker():
            console.info('Draft release does not contain formatted "Dependency Upgrades", exiting')
        case ExcludedLabels(labels=labels):
            console.success("Dependency upgrades found")
            for label in labels:
                console.warning(f"Found label: {label}, disabling auto-release")
        case Eligible():
            console.success("Dependency upgrades found")
            console.success("No other types of release found")

    return result
