from __future__ import annotations

import os
from datetime import UTC, datetime
from time import sleep
from typing import NoReturn

import typer

from autorelease import __version__
from autorelease.core.config import load_config
from autorelease.core.errors import ErrorCode
from autorelease.core.result import Err
from autorelease.output.console import ConsoleProtocol, RichConsole
from autorelease.output.errors import print_release_error, release_error_exit_code
from autorelease.services.release.errors import ReleaseError
from autorelease.services.release.gh import GhReleaseStore, ensure_gh_available
from autorelease.services.release.service import run_auto_release


app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    rich_markup_mode="rich",
)


def _now() -> datetime:
    return datetime.now(UTC)


def _console() -> ConsoleProtocol:
    return RichConsole()


def _fail(error: ReleaseError, *, console: ConsoleProtocol) -> NoReturn:
    print_release_error(error, console)
    raise typer.Exit(code=release_error_exit_code(error))


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit(code=0)


@app.callback()
def _main(  # pyright: ignore[reportUnusedFunction]
    version: bool = typer.Option(
        False,
        "--version",
        help="Show version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    del version


@app.command()
def run(
    repo: str | None = typer.Option(
        None, "--repo", help="Repository owner/name (default: $GITHUB_REPOSITORY)."
    ),
    days: int | None = typer.Option(
        None, "--days", help="Minimum draft age in days (default: $RELEASE_DAYS or 7)."
    ),
    exclude_labels: str | None = typer.Option(
        None,
        "--exclude-labels",
        help="Comma-separated labels that block auto-release (default: $EXCLUDE_LABELS).",
    ),
    all_labels: bool = typer.Option(
        False, "--all-labels", help="Allow every release category ($ALL_LABELS)."
    ),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Evaluate only, never modify releases ($DRY_RUN)."
    ),
    settle_delay: float | None = typer.Option(
        None,
        "--settle-delay",
        help="Seconds to wait before deleting the temp draft (default: 5).",
    ),
) -> None:
    """Promote the latest draft release if it only holds dependency upgrades."""
    console = _console()

    config_r = load_config(
        os.environ,
        repo=repo,
        days=days,
        exclude_labels=exclude_labels,
        all_labels=all_labels,
        dry_run=dry_run,
        settle_delay=settle_delay,
    )
    if isinstance(config_r, Err):
        e = config_r.error
        _fail(
            ReleaseError(kind="invalid_config", message=e.message, hint=e.key),
            console=console,
        )
    config = config_r.value

    gh = ensure_gh_available()
    if isinstance(gh, Err):
        _fail(gh.error, console=console)

    result = run_auto_release(
        config=config,
        store=GhReleaseStore(repo_url=config.repo_url),
        console=console,
        now=_now(),
        sleep=sleep,
    )
    if isinstance(result, Err):
        _fail(result.error, console=console)

    raise typer.Exit(code=int(ErrorCode.OK))


def main() -> None:
    app()
