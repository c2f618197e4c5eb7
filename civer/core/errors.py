"""Process exit codes.

Every failure path of the CLI ends in exactly one of these codes, so CI
logs can distinguish bad input from a broken environment or a bug.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the ``civer`` CLI.

    These values are used as process exit codes and should remain stable:
    - 0: Success
    - 1: User error (invalid version, inconsistent release metadata)
    - 2: Environment error (missing CI variables, bad payload or config)
    - 4: Network error (latest release lookup failed)
    - 5: I/O error (outputs could not be written)
    - 70: Internal error (a resolution invariant was broken)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
    INTERNAL_ERROR = 70

