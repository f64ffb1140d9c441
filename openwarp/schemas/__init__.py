"""Pydantic schemas for OpenWarp data files."""

from openwarp.schemas.warp_file import (
    MasterConfig,
    PermissionGrants,
    WarpFile,
    WarpRecord,
)

__all__ = [
    "MasterConfig",
    "PermissionGrants",
    "WarpFile",
    "WarpRecord",
]
