"""Error presentation utilities.

Centralized error formatting and exit code mapping for consistent UX.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from autorelease.core.errors import ErrorCode
from autorelease.output.console import Style
from autorelease.services.release.errors import ReleaseError

if TYPE_CHECKING:
    from autorelease.output.console import ConsoleProtocol

__all__ = ["print_release_error", "release_error_exit_code"]


def print_release_error(error: ReleaseError, console: ConsoleProtocol) -> None:
    """Print the error, the external command output verbatim, then the hint."""
    for line in error.output.splitlines():
        console.print(line, Style.DIM)
    console.error(error.message)
    if error.hint:
        console.print(f"hint: {error.hint}", Style.DIM)


def release_error_exit_code(error: ReleaseError) -> int:
    match error.kind:
        case "invalid_config":
            return int(ErrorCode.USER_ERROR)
        case "gh_missing":
            return int(ErrorCode.ENV_ERROR)
        case "promotion_failed":
            return int(ErrorCode.PROMOTION_ERROR)
        case "gh_failed" | "invalid_output" | "invalid_date" | "not_draft":
            return int(ErrorCode.RELEASE_ERROR)
    return int(ErrorCode.RELEASE_ERROR)
