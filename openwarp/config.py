"""Application configuration using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field can be overridden with an ``OPENWARP_`` prefixed variable,
    e.g. ``OPENWARP_DATA_DIR=/srv/warps``.
    """

    model_config = SettingsConfigDict(
        env_prefix="OPENWARP_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ==========================================================================
    # Storage layout
    # ==========================================================================
    data_dir: Path = Path("data")
    master_config_filename: str = "config.yml"  # players: [...]
    global_warps_filename: str = "warps.yml"  # public warps
    players_dirname: str = "players"  # one <player>.yml per owner
    permissions_filename: str = "permissions.yml"  # console host grants

    # ==========================================================================
    # Console host
    # ==========================================================================
    worlds: list[str] = Field(default_factory=lambda: ["world", "world_nether", "world_the_end"])

    # Default granted for public warp access nodes when the permission is unset
    public_access_default: bool = False

    # Debug
    debug: bool = False
    log_level: LogLevel = "INFO"

    @property
    def master_config_path(self) -> Path:
        """Path of the file holding the registered player list."""
        return self.data_dir / self.master_config_filename

    @property
    def global_warps_path(self) -> Path:
        """Path of the file holding public warps."""
        return self.data_dir / self.global_warps_filename

    @property
    def players_dir(self) -> Path:
        """Directory holding one private warp file per player."""
        return self.data_dir / self.players_dirname

    @property
    def permissions_path(self) -> Path:
        """Path of the console host's permission grants."""
        return self.data_dir / self.permissions_filename

    def player_config_path(self, player_name: str) -> Path:
        """Path of the private warp file for a player."""
        return self.players_dir / f"{player_name}.yml"

    @property
    def effective_log_level(self) -> str:
        """Log level after applying the debug switch."""
        return "DEBUG" if self.debug else self.log_level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
