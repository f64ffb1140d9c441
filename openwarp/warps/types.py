"""Warp target type definitions.

Immutable dataclasses for resolved and unresolved warp targets, plus the
record keys used when a warp is written to or read from a file.
"""

from dataclasses import dataclass

from openwarp.warps.host import World

# Record keys (wire contract, order irrelevant)
WORLD_KEY = "world"
X_KEY = "x"
Y_KEY = "y"
Z_KEY = "z"
PITCH_KEY = "pitch"
YAW_KEY = "yaw"
OWNER_KEY = "owner"

COORDINATE_KEYS = (X_KEY, Y_KEY, Z_KEY, PITCH_KEY, YAW_KEY)


@dataclass(frozen=True)
class Target:
    """A destination in a world that the host resolved.

    Attributes:
        world: World handle.
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
        pitch: Vertical view angle.
        yaw: Horizontal view angle.
    """

    world: World
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0

    @property
    def world_name(self) -> str:
        """Name of the target world."""
        return self.world.name

    @property
    def is_resolved(self) -> bool:
        return True


@dataclass(frozen=True)
class UnresolvedTarget:
    """Marker for a target whose world could not be resolved.

    Coordinates are kept so the warp can still be written back unchanged.

    Attributes:
        world_name: World name from the record, None if the record had none.
        x: X coordinate.
        y: Y coordinate.
        z: Z coordinate.
        pitch: Vertical view angle.
        yaw: Horizontal view angle.
        reason: Why resolution failed.
    """

    world_name: str | None
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    pitch: float = 0.0
    yaw: float = 0.0
    reason: str = ""

    @property
    def is_resolved(self) -> bool:
        return False


WarpTarget = Target | UnresolvedTarget
