"""Run configuration resolved from the environment.

The configuration is read once at startup and passed explicitly to the
evaluator, the promotion sequencer and the service. CLI options, when given,
take precedence over environment variables. Blank environment values count
as absent.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass

from .result import Err, Ok, Result

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "DEFAULT_MIN_AGE_DAYS",
    "DEFAULT_EXCLUDE_LABELS",
    "DEFAULT_SETTLE_DELAY_SECONDS",
    "MAX_MIN_AGE_DAYS",
    "MAX_SETTLE_DELAY_SECONDS",
    "ENV_REPO",
    "ENV_DAYS",
    "ENV_EXCLUDE_LABELS",
    "ENV_ALL_LABELS",
    "ENV_DRY_RUN",
    "ENV_SETTLE_DELAY",
]

# -----------------------------------------------------------------------------
# Environment keys
# -----------------------------------------------------------------------------

ENV_REPO = "GITHUB_REPOSITORY"
ENV_DAYS = "RELEASE_DAYS"
ENV_EXCLUDE_LABELS = "EXCLUDE_LABELS"
ENV_ALL_LABELS = "ALL_LABELS"
ENV_DRY_RUN = "DRY_RUN"
ENV_SETTLE_DELAY = "SETTLE_DELAY_SECONDS"

# -----------------------------------------------------------------------------
# Defaults
# -----------------------------------------------------------------------------

DEFAULT_MIN_AGE_DAYS = 7
DEFAULT_EXCLUDE_LABELS = "Documentation,Features,Bug Fixes"
# Wait before deleting the temp draft, gives the release store time to settle.
DEFAULT_SETTLE_DELAY_SECONDS = 5.0

# Keeps `now - days` inside the datetime range.
MAX_MIN_AGE_DAYS = 36500
MAX_SETTLE_DELAY_SECONDS = 3600.0

_DIGITS_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when the configuration is missing or malformed."""

    message: str
    key: str | None = None


@dataclass(frozen=True, slots=True)
class Config:
    """Immutable configuration for one run."""

    repo: str  # owner/name
    min_age_days: int = DEFAULT_MIN_AGE_DAYS
    exclude_labels: tuple[str, ...] = tuple(DEFAULT_EXCLUDE_LABELS.split(","))
    all_labels: bool = False
    dry_run: bool = False
    settle_delay_seconds: float = DEFAULT_SETTLE_DELAY_SECONDS

    @property
    def repo_url(self) -> str:
        """Clone URL handed to `gh -R`."""
        return f"https://github.com/{self.repo}.git"

    @property
    def blocking_labels(self) -> tuple[str, ...]:
        """Labels that block auto-release; empty when all labels are allowed."""
        if self.all_labels:
            return ()
        return self.exclude_labels


def _env(environ: Mapping[str, str], key: str) -> str | None:
    value = environ.get(key)
    if value is None or len(value) == 0:
        return None
    return value


def _check_days(days: int) -> Result[int, ConfigError]:
    if days < 0:
        return Err(ConfigError(f"minimum draft age must not be negative: {days}", key=ENV_DAYS))
    if days > MAX_MIN_AGE_DAYS:
        return Err(
            ConfigError(
                f"minimum draft age must be at most {MAX_MIN_AGE_DAYS} days: {days}", key=ENV_DAYS
            )
        )
    return Ok(days)


def _parse_days(raw: str) -> Result[int, ConfigError]:
    # Plain ASCII digits only: no sign, underscores or other numerals.
    text = raw.strip()
    if _DIGITS_RE.fullmatch(text) is None:
        return Err(ConfigError(f"invalid minimum draft age: {raw!r}", key=ENV_DAYS))
    return _check_days(int(text))


def _check_delay(delay: float) -> Result[float, ConfigError]:
    # Also rejects nan.
    if not 0 <= delay <= MAX_SETTLE_DELAY_SECONDS:
        return Err(
            ConfigError(
                f"settle delay must be between 0 and {MAX_SETTLE_DELAY_SECONDS:g} seconds: {delay}",
                key=ENV_SETTLE_DELAY,
            )
        )
    return Ok(delay)


def _parse_delay(raw: str) -> Result[float, ConfigError]:
    try:
        delay = float(raw.strip())
    except ValueError:
        return Err(ConfigError(f"invalid settle delay: {raw!r}", key=ENV_SETTLE_DELAY))
    return _check_delay(delay)


def load_config(
    environ: Mapping[str, str],
    *,
    repo: str | None = None,
    days: int | None = None,
    exclude_labels: str | None = None,
    all_labels: bool = False,
    dry_run: bool = False,
    settle_delay: float | None = None,
) -> Result[Config, ConfigError]:
    """Resolve the run configuration.

    Args:
        environ: Environment mapping (usually os.environ).
        repo: Repository override (owner/name).
        days: Minimum draft age override.
        exclude_labels: Comma-separated exclusion labels override.
        all_labels: Force label checking off.
        dry_run: Force dry run.
        settle_delay: Settle delay override, in seconds.

    Returns:
        Ok(Config) on success, Err(ConfigError) on failure
    """
    repo_value = repo if repo is not None else _env(environ, ENV_REPO)
    if repo_value is None or not repo_value.strip():
        return Err(ConfigError("blank repository provided", key=ENV_REPO))

    if days is None:
        raw_days = _env(environ, ENV_DAYS)
        if raw_days is None:
            days = DEFAULT_MIN_AGE_DAYS
        else:
            parsed_days = _parse_days(raw_days)
            if isinstance(parsed_days, Err):
                return parsed_days
            days = parsed_days.value
    else:
        checked_days = _check_days(days)
        if isinstance(checked_days, Err):
            return checked_days

    labels_raw = exclude_labels or _env(environ, ENV_EXCLUDE_LABELS) or DEFAULT_EXCLUDE_LABELS

    if settle_delay is None:
        raw_delay = _env(environ, ENV_SETTLE_DELAY)
        if raw_delay is None:
            settle_delay = DEFAULT_SETTLE_DELAY_SECONDS
        else:
            parsed_delay = _parse_delay(raw_delay)
            if isinstance(parsed_delay, Err):
                return parsed_delay
            settle_delay = parsed_delay.value
    else:
        checked_delay = _check_delay(settle_delay)
        if isinstance(checked_delay, Err):
            return checked_delay

    return Ok(
        Config(
            repo=repo_value.strip(),
            min_age_days=days,
            exclude_labels=tuple(labels_raw.split(",")),
            all_labels=all_labels or _env(environ, ENV_ALL_LABELS) is not None,
            dry_run=dry_run or _env(environ, ENV_DRY_RUN) is not None,
            settle_delay_seconds=settle_delay,
        )
    )
