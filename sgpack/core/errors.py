"""Process exit codes.

The packager reports a single failure code: whichever step fails, the run
exits with FAILED. The enum keeps the values in one place so the CLI and
tests agree on them.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for the sgpack command."""

    OK = 0
    FAILED = 1

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_success(self) -> bool:
        return self == ErrorCode.OK
