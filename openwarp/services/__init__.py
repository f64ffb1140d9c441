"""Services for persistence and the top-level OpenWarp lifecycle."""

from openwarp.services.openwarp_service import OpenWarpService
from openwarp.services.warp_loader import (
    load_master_config,
    load_permissions,
    load_warps,
    read_yaml,
    save_master_config,
    save_warps,
    warp_records,
    write_yaml,
)

__all__ = [
    "OpenWarpService",
    "load_master_config",
    "load_permissions",
    "load_warps",
    "read_yaml",
    "save_master_config",
    "save_warps",
    "warp_records",
    "write_yaml",
]
