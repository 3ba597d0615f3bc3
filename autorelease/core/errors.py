"""Exit codes for the autorelease CLI.

Every "not eligible" outcome is a normal run and exits with OK. Non-zero
codes are reserved for failures that need an operator to look at the log.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Process exit codes.

    These values are used by CI jobs and should remain stable:
    - 0: Success (promoted, skipped, dry run or notification path)
    - 1: User error (missing or invalid configuration)
    - 2: Environment error (gh CLI not installed)
    - 3: Release error (gh failure, malformed output, draft flag mismatch)
    - 4: Promotion error (a step of the promotion sequence failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    RELEASE_ERROR = 3
    PROMOTION_ERROR = 4
