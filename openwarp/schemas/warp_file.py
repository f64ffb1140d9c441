"""Warp file schemas for YAML import and export.

This module defines Pydantic models for the files kept in the data
directory. Use with the warp_loader service.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class WarpRecord(BaseModel):
    """One persisted warp.

    Coordinates and owner have defaults; a missing world is kept as None so
    the loader can report it instead of guessing one.
    """

    model_config = ConfigDict(extra="ignore")

    world: str | None = Field(default=None, description="Name of the target world")
    x: float = Field(default=0.0, description="X coordinate")
    y: float = Field(default=0.0, description="Y coordinate")
    z: float = Field(default=0.0, description="Z coordinate")
    pitch: float = Field(default=0.0, description="Vertical view angle")
    yaw: float = Field(default=0.0, description="Horizontal view angle")
    owner: str = Field(default="", description="Owner's player name, empty if none")

    @field_validator("world", mode="before")
    @classmethod
    def _world_scalar_is_name(cls, value: Any) -> Any:
        # YAML reads world names like 2 or yes as int/bool
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value

    @field_validator("owner", mode="before")
    @classmethod
    def _owner_none_is_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    def to_record(self) -> dict[str, Any]:
        """Plain mapping; the world key is left out when unknown."""
        return self.model_dump(exclude_none=True)


class WarpFile(BaseModel):
    """Contents of ``warps.yml`` or ``players/<name>.yml``."""

    warps: dict[str, WarpRecord] = Field(
        default_factory=dict,
        description="Warps keyed by name",
    )

    @field_validator("warps", mode="before")
    @classmethod
    def _empty_section(cls, value: Any) -> Any:
        if value is None:
            return {}
        # YAML reads names like 1 or yes as int/bool keys
        if isinstance(value, dict):
            return {str(name): record for name, record in value.items()}
        return value


class MasterConfig(BaseModel):
    """Contents of ``config.yml``."""

    players: list[str] = Field(
        default_factory=list,
        description="Names of registered players",
    )

    @field_validator("players", mode="before")
    @classmethod
    def _empty_section(cls, value: Any) -> Any:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(name) for name in value]
        return value


class PermissionGrants(RootModel[dict[str, list[str]]]):
    """Contents of ``permissions.yml``: permission nodes per actor name."""

    root: dict[str, list[str]] = Field(default_factory=dict)

    def for_actor(self, name: str) -> list[str]:
        """Nodes granted to an actor; ``-node`` entries are denials."""
        return list(self.root.get(name) or [])
