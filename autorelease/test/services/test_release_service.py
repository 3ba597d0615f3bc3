from __future__ import annotations

from datetime import UTC, datetime

from autorelease.core.config import Config
from autorelease.core.result import Err, Ok
from autorelease.output.console import MockConsole
from autorelease.services.release.model import ReleaseDetail, ReleaseSummary
from autorelease.services.release.service import run_auto_release

from .fakes import FakeReleaseStore, gh_error

NOW = datetime(2024, 1, 10, tzinfo=UTC)
DRAFT = ReleaseSummary(
    tag="v1.4.0", status="Draft", title="v1.4.0", date_raw="2024-01-01T00:00:00Z"
)
UPGRADES = ReleaseDetail(
    body="### Dependency Upgrades\n- bump lib X", target_commitish="main", is_draft=True
)
WITH_FEATURES = ReleaseDetail(
    body="### Features\n- new\n### Dependency Upgrades\n- bump lib X",
    target_commitish="main",
    is_draft=True,
)


def _config(**kwargs: object) -> Config:
    return Config(repo="org/repo", **kwargs)  # type: ignore[arg-type]


def _no_sleep(seconds: float) -> None:
    del seconds


def test_example_scenario_promotes_with_temp_tag() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=UPGRADES)
    console = MockConsole()

    result = run_auto_release(
        config=_config(), store=store, console=console, now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.action == "promoted"
    assert result.value.tag == "v1.4.0"
    assert store.mutating_calls == [
        ("create", "v1.4.0-temp", "draft"),
        ("delete", "v1.4.0"),
        ("create", "v1.4.0", "published"),
        ("delete", "v1.4.0-temp"),
    ]
    assert console.has_success()


def test_no_releases_is_skipped_without_mutation() -> None:
    store = FakeReleaseStore()

    result = run_auto_release(
        config=_config(), store=store, console=MockConsole(), now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.action == "skipped"
    assert result.value.tag is None
    assert store.mutating_calls == []


def test_published_latest_is_skipped() -> None:
    latest = ReleaseSummary(
        tag="v1.3.0", status="Latest", title="v1.3.0", date_raw="2023-12-01T00:00:00Z"
    )
    store = FakeReleaseStore(releases=[latest])

    result = run_auto_release(
        config=_config(), store=store, console=MockConsole(), now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.reason == "not a draft"
    assert store.calls == [("list",)]


def test_young_draft_is_skipped() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=UPGRADES)

    result = run_auto_release(
        config=_config(min_age_days=30), store=store, console=MockConsole(), now=NOW
    )

    assert isinstance(result, Ok)
    assert result.value.reason == "too young"
    assert store.calls == [("list",)]


def test_missing_marker_is_skipped() -> None:
    detail = ReleaseDetail(body="### Features\n- new", target_commitish="main", is_draft=True)
    store = FakeReleaseStore(releases=[DRAFT], detail=detail)

    result = run_auto_release(
        config=_config(), store=store, console=MockConsole(), now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.action == "skipped"
    assert result.value.reason == "no dependency upgrades"
    assert store.mutating_calls == []


def test_dry_run_never_mutates() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=UPGRADES)
    console = MockConsole()

    result = run_auto_release(
        config=_config(dry_run=True), store=store, console=console, now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.action == "dry_run"
    assert store.mutating_calls == []
    assert console.find("Dry run set")


def test_excluded_label_takes_notification_path() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=WITH_FEATURES)
    console = MockConsole()

    result = run_auto_release(
        config=_config(), store=store, console=console, now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Ok)
    assert result.value.action == "notify"
    assert result.value.reason == "excluded labels: Features"
    assert store.mutating_calls == []
    assert console.find("notifications being sent instead")


def test_dry_run_wins_over_excluded_labels() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=WITH_FEATURES)

    result = run_auto_release(
        config=_config(dry_run=True), store=store, console=MockConsole(), now=NOW
    )

    assert isinstance(result, Ok)
    assert result.value.action == "dry_run"


def test_all_labels_promotes_despite_labels() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=WITH_FEATURES)

    result = run_auto_release(
        config=_config(all_labels=True),
        store=store,
        console=MockConsole(),
        now=NOW,
        sleep=_no_sleep,
    )

    assert isinstance(result, Ok)
    assert result.value.action == "promoted"


def test_promotion_failure_is_returned() -> None:
    store = FakeReleaseStore(
        releases=[DRAFT],
        detail=UPGRADES,
        failures={("create", "v1.4.0-temp", "draft"): gh_error()},
    )

    result = run_auto_release(
        config=_config(), store=store, console=MockConsole(), now=NOW, sleep=_no_sleep
    )

    assert isinstance(result, Err)
    assert result.error.kind == "promotion_failed"
    assert store.mutating_calls == [("create", "v1.4.0-temp", "draft")]


def test_settle_delay_comes_from_config() -> None:
    store = FakeReleaseStore(releases=[DRAFT], detail=UPGRADES)
    slept: list[float] = []

    run_auto_release(
        config=_config(settle_delay_seconds=1.5),
        store=store,
        console=MockConsole(),
        now=NOW,
        sleep=slept.append,
    )

    assert slept == [1.5]


def test_configuration_is_printed() -> None:
    console = MockConsole()

    run_auto_release(
        config=_config(),
        store=FakeReleaseStore(),
        console=console,
        now=NOW,
        sleep=_no_sleep,
    )

    assert "Repository: org/repo" in console.messages
    assert "Minimum draft age to auto-release: 7" in console.messages
    assert (
        "Auto-release blocking categories: Documentation, Features, Bug Fixes"
        in console.messages
    )
