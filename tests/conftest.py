"""Core test fixtures for OpenWarp tests."""

import pytest

from openwarp.cli.host import (
    ConsolePlayer,
    ConsoleSender,
    GrantPermissionChecker,
    WorldRegistry,
)
from openwarp.commands import CommandContext, CommandRegistry, register_warp_commands
from openwarp.config import Settings
from openwarp.schemas import PermissionGrants
from openwarp.warps import Target, WarpStore


@pytest.fixture
def worlds() -> WorldRegistry:
    """Host worlds known to every test."""
    return WorldRegistry(["world", "world_nether"])


@pytest.fixture
def grants() -> PermissionGrants:
    """Empty grants; tests add nodes through ``grants.root``."""
    return PermissionGrants({})


@pytest.fixture
def permissions(grants: PermissionGrants) -> GrantPermissionChecker:
    return GrantPermissionChecker(grants)


@pytest.fixture
def store() -> WarpStore:
    return WarpStore()


@pytest.fixture
def context(store: WarpStore, permissions: GrantPermissionChecker) -> CommandContext:
    return CommandContext(store=store, permissions=permissions)


@pytest.fixture
def registry(context: CommandContext) -> CommandRegistry:
    """Registry with every warp command registered."""
    registry = CommandRegistry()
    register_warp_commands(registry, context)
    return registry


@pytest.fixture
def alice(worlds: WorldRegistry) -> ConsolePlayer:
    """Player standing in the overworld."""
    return ConsolePlayer("alice", Target(world=worlds.get_world("world"), x=10.0, y=64.0, z=-5.0))


@pytest.fixture
def bob(worlds: WorldRegistry) -> ConsolePlayer:
    """Second player, standing in the nether."""
    return ConsolePlayer("bob", Target(world=worlds.get_world("world_nether"), x=1.0, y=70.0, z=1.0))


@pytest.fixture
def console_sender() -> ConsoleSender:
    """The non-player console."""
    return ConsoleSender()


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a temporary data directory."""
    return Settings(_env_file=None, data_dir=tmp_path / "data", worlds=["world", "world_nether"])
