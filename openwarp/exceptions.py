"""OpenWarp exception definitions.

Custom exception hierarchy for command dispatch, warp targets and
persistence.
"""


class OpenWarpError(Exception):
    """Base exception for OpenWarp operations."""

    pass


# =============================================================================
# Command errors (recovered at the dispatch boundary)
# =============================================================================


class CommandError(OpenWarpError):
    """A command could not run; the message is shown to the sender."""

    pass


class UnsupportedCommandError(CommandError):
    """No registered key path matched the input."""

    def __init__(self, message: str = "Command not supported") -> None:
        super().__init__(message)


class SenderRejectedError(CommandError):
    """The sender cannot run this command (e.g. console on a player-only command)."""

    def __init__(self, message: str = "This command can only be used by players") -> None:
        super().__init__(message)


class UsageError(CommandError):
    """Wrong argument count or malformed arguments.

    Attributes:
        usage: The command's usage text.
        min_args: Minimum accepted argument count.
        max_args: Maximum accepted argument count, None if unbounded.
    """

    def __init__(
        self,
        message: str,
        usage: str = "",
        min_args: int = 0,
        max_args: int | None = None,
    ) -> None:
        super().__init__(message)
        self.usage = usage
        self.min_args = min_args
        self.max_args = max_args


class ForbiddenError(CommandError):
    """The permission check failed.

    Attributes:
        permission: The permission node that was denied.
    """

    def __init__(self, message: str, permission: str = "") -> None:
        super().__init__(message)
        self.permission = permission


class CommandFailedError(CommandError):
    """The command was authorized but could not complete."""

    pass


# =============================================================================
# Warp target errors
# =============================================================================


class UnresolvedTargetError(OpenWarpError):
    """A warp's world cannot be found.

    Attributes:
        warp_name: Name of the affected warp.
        world_name: World name from the record, None if it had none.
    """

    def __init__(self, warp_name: str, world_name: str | None = None) -> None:
        if world_name is None:
            message = f"Warp '{warp_name}' has no target world"
        else:
            message = f"Warp '{warp_name}' targets unknown world '{world_name}'"
        super().__init__(message)
        self.warp_name = warp_name
        self.world_name = world_name


class MissingTargetWorldError(OpenWarpError):
    """A warp cannot be persisted because its world cannot be named.

    Attributes:
        warp_name: Name of the affected warp.
        partial: The record without the world key; owner and coordinates kept.
    """

    def __init__(self, warp_name: str, partial: dict) -> None:
        super().__init__(f"Target world is missing for warp '{warp_name}'")
        self.warp_name = warp_name
        self.partial = partial


# =============================================================================
# Persistence errors
# =============================================================================


class WarpLoadError(OpenWarpError):
    """Error reading a warp or player file."""

    pass


class PersistenceError(OpenWarpError):
    """Error writing a warp or player file."""

    pass
