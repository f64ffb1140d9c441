"""Warp Commands

Commands for using, listing, creating and deleting warps.
"""

import logging
from typing import Sequence

from openwarp.commands.base import Command, CommandContext, Permission
from openwarp.commands.registry import CommandRegistry
from openwarp.exceptions import (
    CommandFailedError,
    SenderRejectedError,
    UnresolvedTargetError,
    UsageError,
)
from openwarp.warps.host import ActorSender
from openwarp.warps.store import OWNER_SEPARATOR, WarpStore
from openwarp.warps.warp import Warp

logger = logging.getLogger(__name__)

PUBLIC = "public"
PRIVATE = "private"


def find_warp(store: WarpStore, sender: ActorSender, name: str) -> Warp:
    """Find the warp a sender means, or fail with a readable message."""
    warp = store.find(sender.name, name)
    if warp is None:
        raise CommandFailedError(f"No warp found matching name: {name}")
    return warp


# =============================================================================
# warp NAME
# =============================================================================


class WarpCommand(Command):
    """Teleport the sender to a warp."""

    def __init__(self, context: CommandContext) -> None:
        super().__init__(
            context,
            name="Warp",
            min_args=1,
            max_args=1,
            usage="/warp {NAME}",
            permission=Permission("openwarp.warp.use", "Teleport to a warp", default=True),
            player_only=True,
        )
        self.add_example("/warp public")
        self.add_example("/warp alice:home")

    def access_permission(self, sender: ActorSender, warp: Warp) -> tuple[str, bool]:
        """Permission node and default for using a specific warp."""
        if self.store.is_public(warp):
            return (
                f"openwarp.warp.access.public.{warp.name}",
                self.context.public_access_default,
            )
        return (
            f"openwarp.warp.access.private.{warp.owner}.{warp.name}",
            warp.owner == sender.name,
        )

    def resource_permissions(
        self, sender: ActorSender, arguments: Sequence[str]
    ) -> list[tuple[str, bool, str]]:
        warp_name = arguments[0]
        warp = find_warp(self.store, sender, warp_name)
        node, default = self.access_permission(sender, warp)
        return [(node, default, f"You don't have permission to move to warp: {warp_name}")]

    def run(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        warp_name = arguments[0]
        warp = find_warp(self.store, sender, warp_name)

        if not warp.is_resolved:
            raise UnresolvedTargetError(warp.name, warp.world_name)

        if not sender.teleport(warp.target):
            raise CommandFailedError(f"Error teleporting to warp: {warp_name}")

        logger.info(f"{sender.name} warped to {warp.name}")
        sender.send_message(f"Warped to {warp.name}")


# =============================================================================
# warp list [public|private]
# =============================================================================


class WarpListCommand(Command):
    """List the warps visible to the sender."""

    def __init__(self, context: CommandContext) -> None:
        super().__init__(
            context,
            name="Warp list",
            min_args=0,
            max_args=1,
            usage="/warp list [public|private]",
            permission=Permission("openwarp.warp.list", "List available warps", default=True),
        )
        self.add_example("/warp list")
        self.add_example("/warp list private")

    def check_arguments(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        scope = arguments[0].lower() if arguments else None
        if scope not in (None, PUBLIC, PRIVATE):
            raise UsageError(f"Unknown warp list filter: {arguments[0]}", usage=self.usage)
        if scope == PRIVATE and not sender.is_player:
            raise SenderRejectedError("Only players have private warps")

    def run(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        scope = arguments[0].lower() if arguments else None

        if scope in (None, PUBLIC):
            names = sorted(self.store.public_warps())
            sender.send_message(f"Public warps: {', '.join(names) if names else '(none)'}")

        if scope in (None, PRIVATE) and sender.is_player:
            names = sorted(self.store.private_warps(sender.name))
            sender.send_message(f"Private warps: {', '.join(names) if names else '(none)'}")


# =============================================================================
# warp set NAME [public|private]
# =============================================================================


class WarpSetCommand(Command):
    """Create or move a warp at the sender's location."""

    def __init__(self, context: CommandContext) -> None:
        super().__init__(
            context,
            name="Warp set",
            min_args=1,
            max_args=2,
            usage="/warp set {NAME} [public|private]",
            permission=Permission("openwarp.warp.set", "Create warps", default=True),
            player_only=True,
        )
        self.add_example("/warp set home")
        self.add_example("/warp set market public")

    @staticmethod
    def scope_of(arguments: Sequence[str]) -> str:
        """Requested visibility; private unless given."""
        if len(arguments) < 2:
            return PRIVATE
        return arguments[1].lower()

    def resource_permissions(
        self, sender: ActorSender, arguments: Sequence[str]
    ) -> list[tuple[str, bool, str]]:
        scope = self.scope_of(arguments)
        if scope == PUBLIC:
            return [("openwarp.warp.set.public", False, "You don't have permission to create public warps")]
        return [("openwarp.warp.set.private", True, "You don't have permission to create private warps")]

    def check_arguments(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        warp_name = arguments[0]
        if self.scope_of(arguments) not in (PUBLIC, PRIVATE):
            raise UsageError(f"Unknown warp type: {arguments[1]}", usage=self.usage)
        if OWNER_SEPARATOR in warp_name:
            raise UsageError(
                f"Warp names cannot contain '{OWNER_SEPARATOR}': {warp_name}", usage=self.usage
            )

    def run(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        warp_name = arguments[0]
        scope = self.scope_of(arguments)

        location = sender.location
        if not location.is_resolved:
            raise CommandFailedError("Your current world cannot be resolved; warp not set")

        warp = Warp(name=warp_name, target=location, owner=sender.name)
        if scope == PUBLIC:
            previous = self.store.add_public(warp)
        else:
            previous = self.store.add_private(warp)
            self.store.register_player(sender.name)

        verb = "Moved" if previous is not None else "Created"
        logger.info(f"{sender.name} set {scope} warp {warp_name}")
        sender.send_message(f"{verb} {scope} warp '{warp_name}' at {warp.detail_string()}")


# =============================================================================
# warp delete NAME
# =============================================================================


class WarpDeleteCommand(Command):
    """Delete a warp."""

    def __init__(self, context: CommandContext) -> None:
        super().__init__(
            context,
            name="Warp delete",
            min_args=1,
            max_args=1,
            usage="/warp delete {NAME}",
            permission=Permission("openwarp.warp.delete", "Delete warps", default=True),
        )
        self.add_example("/warp delete home")

    def resource_permissions(
        self, sender: ActorSender, arguments: Sequence[str]
    ) -> list[tuple[str, bool, str]]:
        warp_name = arguments[0]
        warp = find_warp(self.store, sender, warp_name)
        message = f"You don't have permission to delete warp: {warp_name}"
        if self.store.is_public(warp):
            return [(f"openwarp.warp.delete.public.{warp.name}", False, message)]
        return [
            (
                f"openwarp.warp.delete.private.{warp.owner}.{warp.name}",
                warp.owner == sender.name,
                message,
            )
        ]

    def run(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        warp_name = arguments[0]
        warp = find_warp(self.store, sender, warp_name)

        if self.store.is_public(warp):
            self.store.remove_public(warp.name)
            scope = PUBLIC
        else:
            self.store.remove_private(warp.owner, warp.name)
            scope = PRIVATE

        logger.info(f"{sender.name} deleted {scope} warp {warp.name}")
        sender.send_message(f"Deleted {scope} warp '{warp.name}'")


def register_warp_commands(registry: CommandRegistry, context: CommandContext) -> None:
    """Register every warp command at its key path."""
    registry.register(WarpCommand(context), "warp")
    registry.register(WarpListCommand(context), "warp", "list")
    registry.register(WarpSetCommand(context), "warp", "set")
    registry.register(WarpDeleteCommand(context), "warp", "delete")
