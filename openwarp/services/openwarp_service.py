"""OpenWarp service: owns settings, the warp store and the command registry.

The host builds one service, calls ``enable()`` once at startup, forwards
command lines to ``on_command``/``handle_line`` and calls ``disable()`` on
shutdown to save everything.
"""

import logging
from typing import Callable, Sequence

from openwarp.commands.base import CommandContext, CommandResult
from openwarp.commands.registry import CommandRegistry
from openwarp.commands.warp_commands import register_warp_commands
from openwarp.config import Settings
from openwarp.exceptions import PersistenceError
from openwarp.services.warp_loader import (
    load_master_config,
    load_warps,
    save_master_config,
    save_warps,
)
from openwarp.warps.host import ActorSender, PermissionChecker, WorldResolver
from openwarp.warps.store import WarpStore
from openwarp.warps.warp import Warp

logger = logging.getLogger(__name__)


class OpenWarpService:
    """Top-level OpenWarp service.

    Handles:
    - Loading and saving the data directory
    - Player registration
    - Command registration and dispatch
    """

    def __init__(
        self,
        settings: Settings,
        worlds: WorldResolver,
        permissions: PermissionChecker,
    ) -> None:
        """Initialize the service with its host collaborators.

        Args:
            settings: Storage layout and defaults.
            worlds: Host world lookup.
            permissions: Host permission check.
        """
        self.settings = settings
        self.worlds = worlds
        self.permissions = permissions
        self.store = WarpStore()
        self.registry = CommandRegistry()
        self._loaded_players: set[str] = set()
        self.enabled = False

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def enable(self) -> None:
        """Load the data directory and register commands.

        Raises:
            WarpLoadError: If a data file is malformed.
        """
        self.settings.data_dir.mkdir(parents=True, exist_ok=True)

        master = load_master_config(self.settings.master_config_path)
        for player_name in master.players:
            self.register_player(player_name)

        for warp in load_warps(self.settings.global_warps_path, self.worlds).values():
            self.store.add_public(warp)

        self.load_commands()

        unresolved = self.store.unresolved()
        if unresolved:
            logger.error(
                f"{len(unresolved)} warp(s) have unresolved worlds: "
                f"{', '.join(sorted(w.name for w in unresolved))}"
            )

        self.enabled = True
        logger.info("Enabled!")

    def disable(self) -> None:
        """Save the player list, public warps and every player's warps.

        Each failed save is logged and the remaining saves still run.
        """
        if self.enabled:
            self.save()
            self.enabled = False

        logger.info("Disabled!")

    def save(self) -> bool:
        """Save everything, continuing past failures.

        Returns:
            True if every save succeeded.
        """
        results = [
            self._save_step(
                "player list",
                lambda: save_master_config(self.settings.master_config_path, self.known_players()),
            ),
            self._save_step(
                "global warp list",
                lambda: save_warps(self.settings.global_warps_path, self.store.public_warps()),
            ),
        ]
        for player_name in self.known_players():
            results.append(
                self._save_step(
                    f"configuration for player {player_name}",
                    lambda name=player_name: self.save_player(name),
                )
            )
        return all(results)

    def _save_step(self, what: str, save: Callable[[], None]) -> bool:
        try:
            save()
        except PersistenceError as e:
            logger.warning(f"Couldn't save {what}; continuing... ({e})")
            return False
        return True

    def load_commands(self) -> None:
        """Build the registry with every supported command."""
        self.registry = CommandRegistry()
        context = CommandContext(
            store=self.store,
            permissions=self.permissions,
            public_access_default=self.settings.public_access_default,
        )
        register_warp_commands(self.registry, context)

    # =========================================================================
    # Players
    # =========================================================================

    def register_player(self, player_name: str) -> None:
        """Register a player and load their private warps once.

        Raises:
            WarpLoadError: If the player's file is malformed.
        """
        self.store.register_player(player_name)
        if player_name in self._loaded_players:
            return

        path = self.settings.player_config_path(player_name)
        for warp in load_warps(path, self.worlds).values():
            if warp.owner and warp.owner != player_name:
                logger.warning(
                    f"Warp {warp.name} in {path} is owned by {warp.owner}; filing it under {player_name}"
                )
            warp.owner = player_name
            self.store.add_private(warp)
        self._loaded_players.add(player_name)

    def on_player_join(self, sender: ActorSender) -> None:
        """Host hook for a player joining."""
        self.register_player(sender.name)

    def known_players(self) -> list[str]:
        """Registered players plus anyone owning private warps."""
        return sorted(set(self.store.players) | set(self.store.owners()))

    def save_player(self, player_name: str) -> None:
        """Write one player's private warps.

        Raises:
            PersistenceError: If the file cannot be written.
        """
        save_warps(
            self.settings.player_config_path(player_name),
            self.store.private_warps(player_name),
        )

    # =========================================================================
    # Commands
    # =========================================================================

    def on_command(self, sender: ActorSender, label: str, args: Sequence[str]) -> CommandResult:
        """Dispatch a command already split into label and arguments."""
        return self.registry.dispatch(sender, label, args)

    def handle_line(self, sender: ActorSender, line: str) -> CommandResult | None:
        """Dispatch a raw command line.

        A leading slash is ignored. Blank lines return None.
        """
        tokens = line.strip().lstrip("/").split()
        if not tokens:
            return None
        return self.on_command(sender, tokens[0], tokens[1:])

    def get_warp(self, sender: ActorSender, name: str) -> Warp | None:
        """Find the warp a sender means by a name."""
        return self.store.find(sender.name, name)
