from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


ReleaseStatus = Literal["Draft", "Latest", "Pre-release", "Published"]


def parse_status(raw: str) -> ReleaseStatus:
    """Map the status column of `gh release list` to a ReleaseStatus.

    gh leaves the column empty for ordinary published releases.
    """
    s = raw.strip()
    if s == "Draft":
        return "Draft"
    if s == "Latest":
        return "Latest"
    if s == "Pre-release":
        return "Pre-release"
    return "Published"


@dataclass(frozen=True, slots=True)
class ReleaseSummary:
    """One row of the release listing."""

    tag: str
    status: ReleaseStatus
    title: str
    date_raw: str  # 2006-01-02T15:04:05Z

    @property
    def is_draft(self) -> bool:
        return self.status == "Draft"


@dataclass(frozen=True, slots=True)
class ReleaseDetail:
    body: str
    target_commitish: str
    is_draft: bool


def temp_tag_for(tag: str) -> str:
    """Tag of the short-lived draft copy used while promoting `tag`."""
    return f"{tag}-temp"
