"""Process exit codes of the ``ghrel`` CLI.

Scripts in CI branch on these, so the numbers must not change. 3 is unused
and stays reserved.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    OK = 0  # includes "nothing to release"
    USER_ERROR = 1
    ENV_ERROR = 2  # token or config problem
    NETWORK_ERROR = 4  # GitHub API failure, partial publish included
    IO_ERROR = 5  # local file could not be read

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")
