from __future__ import annotations

import pytest

from autorelease.core.errors import ErrorCode
from autorelease.output.console import MockConsole, Style
from autorelease.output.errors import print_release_error, release_error_exit_code
from autorelease.services.release.errors import ReleaseError, ReleaseErrorKind


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        ("invalid_config", ErrorCode.USER_ERROR),
        ("gh_missing", ErrorCode.ENV_ERROR),
        ("gh_failed", ErrorCode.RELEASE_ERROR),
        ("invalid_output", ErrorCode.RELEASE_ERROR),
        ("invalid_date", ErrorCode.RELEASE_ERROR),
        ("not_draft", ErrorCode.RELEASE_ERROR),
        ("promotion_failed", ErrorCode.PROMOTION_ERROR),
    ],
)
def test_exit_codes(kind: ReleaseErrorKind, code: ErrorCode) -> None:
    assert release_error_exit_code(ReleaseError(kind=kind, message="x")) == int(code)


def test_output_is_echoed_before_the_error() -> None:
    console = MockConsole()
    error = ReleaseError(
        kind="gh_failed",
        message="failed to delete release: v1.4.0",
        hint="HTTP 404",
        output="line one\nline two",
    )

    print_release_error(error, console)

    assert console.messages == [
        "line one",
        "line two",
        "error: failed to delete release: v1.4.0",
        "hint: HTTP 404",
    ]
    assert console.outputs[0].style == Style.DIM
