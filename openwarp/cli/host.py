"""Console host: worlds, senders and permissions for the terminal shell.

These are the smallest host implementations that satisfy the protocols in
``openwarp.warps.host``. Worlds are plain names from settings, players live
only for the session, and permissions come from ``permissions.yml``.
"""

from dataclasses import dataclass
from typing import Callable, Iterable

from openwarp.schemas.warp_file import PermissionGrants
from openwarp.warps.host import ActorSender
from openwarp.warps.types import Target, WarpTarget

# Grant that matches every node
WILDCARD = "*"
DENY_PREFIX = "-"

CONSOLE_NAME = "CONSOLE"


@dataclass(frozen=True)
class ConsoleWorld:
    """A world known by name only."""

    name: str


class WorldRegistry:
    """World lookup over a fixed list of world names."""

    def __init__(self, names: Iterable[str]) -> None:
        self._worlds = {name: ConsoleWorld(name) for name in names}

    def get_world(self, name: str) -> ConsoleWorld | None:
        return self._worlds.get(name)

    @property
    def names(self) -> list[str]:
        return list(self._worlds)

    def spawn_location(self) -> Target | None:
        """Default location in the first world, None if there are no worlds."""
        if not self._worlds:
            return None
        first = next(iter(self._worlds.values()))
        return Target(world=first, x=0.0, y=64.0, z=0.0)


class ConsoleSender:
    """Non-player sender (the server console)."""

    is_player = False

    def __init__(self, name: str = CONSOLE_NAME, output: Callable[[str], None] | None = None) -> None:
        self.name = name
        self.messages: list[str] = []
        self._output = output

    def send_message(self, text: str) -> None:
        self.messages.append(text)
        if self._output is not None:
            self._output(text)


class ConsolePlayer(ConsoleSender):
    """Player driven from the terminal."""

    is_player = True

    def __init__(
        self,
        name: str,
        location: WarpTarget,
        output: Callable[[str], None] | None = None,
    ) -> None:
        super().__init__(name, output)
        self.location = location

    def teleport(self, target: WarpTarget) -> bool:
        """Move to a resolved target; refuse unresolved ones."""
        if not target.is_resolved:
            return False
        self.location = target
        return True


def node_matches(pattern: str, node: str) -> bool:
    """Check a granted pattern against a node.

    ``*`` matches everything and ``a.b.*`` matches ``a.b`` and anything under it.
    """
    if pattern == WILDCARD or pattern == node:
        return True
    if pattern.endswith(".*"):
        prefix = pattern[:-2]
        return node == prefix or node.startswith(prefix + ".")
    return False


class GrantPermissionChecker:
    """Permission check over explicit grants.

    Grants for the actor and for ``*`` (everyone) are both consulted. A
    matching ``-node`` denial wins over any grant; with no match the caller's
    default applies.
    """

    def __init__(self, grants: PermissionGrants | None = None) -> None:
        self.grants = grants or PermissionGrants()

    def _patterns(self, sender: ActorSender) -> list[str]:
        return self.grants.for_actor(sender.name) + self.grants.for_actor(WILDCARD)

    def has_permission(self, sender: ActorSender, permission: str, default: bool) -> bool:
        patterns = self._patterns(sender)
        denials = [p[len(DENY_PREFIX):] for p in patterns if p.startswith(DENY_PREFIX)]
        if any(node_matches(p, permission) for p in denials):
            return False
        grants = [p for p in patterns if not p.startswith(DENY_PREFIX)]
        if any(node_matches(p, permission) for p in grants):
            return True
        return default
