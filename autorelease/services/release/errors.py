from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ReleaseErrorKind = Literal[
    "gh_missing",
    "invalid_config",
    "gh_failed",
    "invalid_output",
    "invalid_date",
    "not_draft",
    "promotion_failed",
]


@dataclass(frozen=True, slots=True)
class ReleaseError:
    """Canonical error payload for the release workflow.

    `output` holds whatever the failing external command printed so the CLI
    can echo it verbatim before exiting.
    """

    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    output: str = ""
