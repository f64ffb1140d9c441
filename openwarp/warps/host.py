"""Host platform protocols.

OpenWarp never talks to a game server directly. The host supplies worlds,
senders and a permission check through these protocols; anything with the
right attributes satisfies them.
"""

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from openwarp.warps.types import Target


@runtime_checkable
class World(Protocol):
    """A world handle as resolved by the host."""

    @property
    def name(self) -> str:
        """Unique world name."""
        ...


@runtime_checkable
class WorldResolver(Protocol):
    """Resolves world names to world handles."""

    def get_world(self, name: str) -> World | None:
        """Return the world with this name, or None if it does not exist."""
        ...


@runtime_checkable
class ActorSender(Protocol):
    """Anything that can issue commands and receive messages."""

    @property
    def name(self) -> str:
        """Sender name; players are identified by it."""
        ...

    @property
    def is_player(self) -> bool:
        """Whether this sender is an addressable in-world actor."""
        ...

    def send_message(self, text: str) -> None:
        """Deliver a line of text to the sender."""
        ...


@runtime_checkable
class Player(ActorSender, Protocol):
    """An in-world actor that has a location and can be moved."""

    @property
    def location(self) -> "Target":
        """Current position."""
        ...

    def teleport(self, target: "Target") -> bool:
        """Move to a target. Returns False if the host refused the move."""
        ...


@runtime_checkable
class PermissionChecker(Protocol):
    """Boolean permission capability supplied by the host."""

    def has_permission(self, sender: ActorSender, permission: str, default: bool) -> bool:
        """Check a permission node.

        Args:
            sender: Who is asking.
            permission: Dotted permission node.
            default: Result to use when the node is not set for the sender.
        """
        ...
