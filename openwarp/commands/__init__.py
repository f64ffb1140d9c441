"""Command dispatch for OpenWarp.

Provides the token trie, the command contract, the registry and the warp
commands.

Usage:
    >>> from openwarp.commands import CommandRegistry, register_warp_commands
    >>> registry = CommandRegistry()
    >>> register_warp_commands(registry, context)
    >>> result = registry.dispatch(sender, "warp", ["list"])
"""

# Trie
from openwarp.commands.trie import Trie, TrieMatch, TrieNode

# Contract
from openwarp.commands.base import (
    Command,
    CommandContext,
    CommandOutcome,
    CommandResult,
    Permission,
    outcome_for,
)

# Registry
from openwarp.commands.registry import CommandRegistry

# Warp commands
from openwarp.commands.warp_commands import (
    WarpCommand,
    WarpDeleteCommand,
    WarpListCommand,
    WarpSetCommand,
    find_warp,
    register_warp_commands,
)

__all__ = [
    # Trie
    "Trie",
    "TrieMatch",
    "TrieNode",
    # Contract
    "Command",
    "CommandContext",
    "CommandOutcome",
    "CommandResult",
    "Permission",
    "outcome_for",
    # Registry
    "CommandRegistry",
    # Warp commands
    "WarpCommand",
    "WarpDeleteCommand",
    "WarpListCommand",
    "WarpSetCommand",
    "find_warp",
    "register_warp_commands",
]
