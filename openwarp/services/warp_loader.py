"""Warp loader service for reading and writing YAML data files.

This service handles the data directory layout: ``config.yml`` with the
player list, ``warps.yml`` with public warps and ``players/<name>.yml`` with
each player's private warps. A file that does not exist reads as empty.
"""

import logging
from pathlib import Path
from typing import Any, Mapping

import yaml
from pydantic import ValidationError

from openwarp.exceptions import MissingTargetWorldError, PersistenceError, WarpLoadError
from openwarp.schemas.warp_file import MasterConfig, PermissionGrants, WarpFile
from openwarp.warps.host import WorldResolver
from openwarp.warps.warp import Warp

logger = logging.getLogger(__name__)


def read_yaml(file_path: Path) -> Any:
    """Read a YAML file.

    Args:
        file_path: File to read.

    Returns:
        Parsed data; an empty dict if the file is missing or empty.

    Raises:
        WarpLoadError: If the file cannot be read or parsed.
    """
    if not file_path.exists():
        return {}

    try:
        with open(file_path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        raise WarpLoadError(f"Failed to parse {file_path}: {e}")

    return {} if data is None else data


def write_yaml(file_path: Path, data: Any) -> None:
    """Write data to a YAML file, creating parent directories.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    try:
        file_path.parent.mkdir(parents=True, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=True)
    except (OSError, yaml.YAMLError) as e:
        raise PersistenceError(f"Couldn't write {file_path}: {e}")


def _validate(model: type, data: Any, file_path: Path) -> Any:
    try:
        return model.model_validate(data)
    except ValidationError as e:
        raise WarpLoadError(f"Invalid data in {file_path}: {e}")


# =============================================================================
# Player list
# =============================================================================


def load_master_config(file_path: Path) -> MasterConfig:
    """Load the registered player list from ``config.yml``."""
    return _validate(MasterConfig, read_yaml(file_path), file_path)


def save_master_config(file_path: Path, players: list[str]) -> None:
    """Write the registered player list to ``config.yml``."""
    config = MasterConfig(players=sorted(players))
    write_yaml(file_path, config.model_dump())


# =============================================================================
# Warp files
# =============================================================================


def load_warps(file_path: Path, worlds: WorldResolver) -> dict[str, Warp]:
    """Load warps from a warp file.

    Records with a missing or unknown world load as warps with an unresolved
    target; they are kept, never dropped.

    Args:
        file_path: ``warps.yml`` or a player file.
        worlds: Host world lookup.

    Returns:
        Warps keyed by name.

    Raises:
        WarpLoadError: If the file cannot be parsed or a record is invalid.
    """
    warp_file = _validate(WarpFile, read_yaml(file_path), file_path)

    warps = {
        name: Warp.from_record(name, record.to_record(), worlds)
        for name, record in warp_file.warps.items()
    }
    logger.debug(f"Loaded {len(warps)} warps from {file_path}")
    return warps


def warp_records(warps: Mapping[str, Warp]) -> dict[str, dict[str, Any]]:
    """Build file records for warps.

    A warp whose world cannot be named is written as a partial record so its
    owner and coordinates survive.
    """
    records: dict[str, dict[str, Any]] = {}
    for name, warp in warps.items():
        try:
            records[name] = warp.to_record()
        except MissingTargetWorldError as e:
            logger.warning(f"Saving warp {name} without a world; continuing...")
            records[name] = e.partial
    return records


def save_warps(file_path: Path, warps: Mapping[str, Warp]) -> None:
    """Write warps to a warp file.

    Raises:
        PersistenceError: If the file cannot be written.
    """
    write_yaml(file_path, {"warps": warp_records(warps)})
    logger.debug(f"Saved {len(warps)} warps to {file_path}")


# =============================================================================
# Permission grants (console host)
# =============================================================================


def load_permissions(file_path: Path) -> PermissionGrants:
    """Load permission grants from ``permissions.yml``."""
    return _validate(PermissionGrants, read_yaml(file_path), file_path)
