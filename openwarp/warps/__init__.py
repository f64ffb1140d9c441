"""Warp entities, targets and the warp store.

Usage:
    >>> from openwarp.warps import Warp, WarpStore
    >>> store = WarpStore()
    >>> store.add_public(Warp.from_record("spawn", record, worlds))
"""

# Host protocols
from openwarp.warps.host import (
    ActorSender,
    PermissionChecker,
    Player,
    World,
    WorldResolver,
)

# Types
from openwarp.warps.types import (
    COORDINATE_KEYS,
    OWNER_KEY,
    PITCH_KEY,
    WORLD_KEY,
    X_KEY,
    YAW_KEY,
    Y_KEY,
    Z_KEY,
    Target,
    UnresolvedTarget,
    WarpTarget,
)

# Entity and store
from openwarp.warps.warp import Warp, resolve_target
from openwarp.warps.store import OWNER_SEPARATOR, WarpStore

__all__ = [
    # Host protocols
    "ActorSender",
    "PermissionChecker",
    "Player",
    "World",
    "WorldResolver",
    # Types
    "COORDINATE_KEYS",
    "OWNER_KEY",
    "PITCH_KEY",
    "WORLD_KEY",
    "X_KEY",
    "YAW_KEY",
    "Y_KEY",
    "Z_KEY",
    "Target",
    "UnresolvedTarget",
    "WarpTarget",
    # Entity and store
    "Warp",
    "resolve_target",
    "OWNER_SEPARATOR",
    "WarpStore",
]
