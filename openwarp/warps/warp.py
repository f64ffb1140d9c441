"""Warp entity: a named destination with an owner.

A warp does not know whether it is public or private. Visibility comes from
which index of a WarpStore holds it; ask the store.
"""

import logging
from typing import Any, Mapping

from openwarp.exceptions import MissingTargetWorldError, WarpLoadError
from openwarp.warps.host import World, WorldResolver
from openwarp.warps.types import (
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

logger = logging.getLogger(__name__)


def _coordinate(record: Mapping[str, Any], key: str, warp_name: str) -> float:
    value = record.get(key)
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        raise WarpLoadError(f"Warp '{warp_name}' has a non-numeric {key}: {value!r}")


def resolve_target(
    record: Mapping[str, Any],
    worlds: WorldResolver,
    warp_name: str = "",
) -> WarpTarget:
    """Build a warp target from a persisted record.

    A record without a world, or naming a world the host does not know,
    yields an UnresolvedTarget and an error log. No world is ever guessed.

    Args:
        record: Mapping with world, x, y, z, pitch and yaw keys.
        worlds: Host world lookup.
        warp_name: Used in diagnostics only.

    Returns:
        A resolved Target or an UnresolvedTarget marker.

    Raises:
        WarpLoadError: If a coordinate is not numeric.
    """
    x = _coordinate(record, X_KEY, warp_name)
    y = _coordinate(record, Y_KEY, warp_name)
    z = _coordinate(record, Z_KEY, warp_name)
    pitch = _coordinate(record, PITCH_KEY, warp_name)
    yaw = _coordinate(record, YAW_KEY, warp_name)

    world_name = record.get(WORLD_KEY)
    if not world_name:
        logger.error(f"Malformed warp in configuration: no world for warp {warp_name}")
        return UnresolvedTarget(
            world_name=None, x=x, y=y, z=z, pitch=pitch, yaw=yaw, reason="no world in record"
        )

    world_name = str(world_name)
    world = worlds.get_world(world_name)
    if world is None:
        logger.error(f"Couldn't locate world named '{world_name}' for warp {warp_name}")
        return UnresolvedTarget(
            world_name=world_name, x=x, y=y, z=z, pitch=pitch, yaw=yaw, reason="unknown world"
        )

    return Target(world=world, x=x, y=y, z=z, pitch=pitch, yaw=yaw)


class Warp:
    """A single warp, public or private by index membership.

    Attributes:
        name: Warp name, unique within the index holding it.
        target: Resolved target or unresolved marker.
        owner: Owner's player name; empty for unowned warps.
    """

    def __init__(self, name: str, target: WarpTarget, owner: str = "") -> None:
        self.name = name
        self.target = target
        self.owner = owner

    @classmethod
    def from_record(
        cls,
        name: str,
        record: Mapping[str, Any],
        worlds: WorldResolver,
    ) -> "Warp":
        """Create a warp from a persisted record.

        Args:
            name: Warp name (the record's key in its file).
            record: Mapping with world, coordinate and owner keys.
            worlds: Host world lookup.

        Returns:
            The warp, possibly with an unresolved target.
        """
        target = resolve_target(record, worlds, warp_name=name)
        owner = record.get(OWNER_KEY) or ""
        return cls(name=name, target=target, owner=str(owner))

    @property
    def is_resolved(self) -> bool:
        """Whether the target world is known to the host."""
        return self.target.is_resolved

    @property
    def world(self) -> World | None:
        """Target world handle, None if unresolved."""
        if isinstance(self.target, Target):
            return self.target.world
        return None

    @property
    def world_name(self) -> str | None:
        """Target world name if one can be named."""
        return self.target.world_name

    def to_record(self) -> dict[str, Any]:
        """Get a mapping suitable for writing to a warp file.

        Returns:
            Record with world, x, y, z, pitch, yaw and owner keys.

        Raises:
            MissingTargetWorldError: If no world can be named. The error's
                ``partial`` attribute holds the record without the world key.
        """
        record: dict[str, Any] = {
            X_KEY: self.target.x,
            Y_KEY: self.target.y,
            Z_KEY: self.target.z,
            PITCH_KEY: self.target.pitch,
            YAW_KEY: self.target.yaw,
            OWNER_KEY: self.owner,
        }

        world_name = self.world_name
        if not world_name:
            logger.error(f"Target world is missing for warp {self.name}")
            raise MissingTargetWorldError(self.name, partial=record)

        record[WORLD_KEY] = world_name
        return record

    def detail_string(self) -> str:
        """Readable summary of the target."""
        world_name = self.world_name or "<missing>"
        detail = f"({self.target.x}, {self.target.y}, {self.target.z}) in world {world_name}"
        if not self.is_resolved:
            detail += " [unresolved]"
        return detail

    def __repr__(self) -> str:
        return f"Warp(name={self.name!r}, owner={self.owner!r}, target={self.target!r})"
