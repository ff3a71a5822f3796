"""Process exit codes.

Every fatal bootstrap failure maps to one of these values so wrapper
scripts can tell a network outage from a refused elevation prompt.
"""

from enum import IntEnum

__all__ = ["ErrorCode"]


class ErrorCode(IntEnum):
    """Exit codes for `wsb` commands.

    Values are part of the CLI contract and must stay stable:
    - 0: Success
    - 1: User error (bad config file, invalid option)
    - 2: Environment error (git missing and could not be installed)
    - 4: Network error (payload download failed)
    - 5: I/O error (wallpaper folder or clone failed)
    - 6: Elevation error (elevated relaunch refused or failed to start)
    - 7: Payload error (the downloaded script itself failed)
    """

    OK = 0
    USER_ERROR = 1
    ENV_ERROR = 2
    NETWORK_ERROR = 4
    IO_ERROR = 5
    ELEVATION_ERROR = 6
    PAYLOAD_ERROR = 7

    def __str__(self) -> str:
        return self.name.lower().replace("_", " ")

