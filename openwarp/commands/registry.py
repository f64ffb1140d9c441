"""Command Registry

Maps multi-token key paths to commands using a token trie. A line is
dispatched to the command at the deepest registered path matching its
tokens; the tokens past that path are the command's arguments.
"""

import logging
import threading
from typing import Sequence

from openwarp.commands.base import Command, CommandOutcome, CommandResult
from openwarp.commands.trie import Trie
from openwarp.exceptions import UnsupportedCommandError
from openwarp.warps.host import ActorSender

logger = logging.getLogger(__name__)


class CommandRegistry:
    """
    Central registry for commands.

    Commands are looked up by the longest registered prefix of the
    lower-cased input tokens.
    """

    def __init__(self) -> None:
        self._trie: Trie[Command] = Trie()
        self._lock = threading.Lock()

    def register(self, command: Command, *path: str) -> None:
        """Register a command at a key path.

        An empty path is ignored. A later registration at the same path
        replaces the earlier one.

        Args:
            command: Command to store.
            *path: Key path tokens, e.g. ``"warp", "list"``.
        """
        if not path:
            return

        keys = [token.lower() for token in path]
        with self._lock:
            previous = self._trie.get(keys)
            self._trie.insert(keys, command)

        if previous is not None:
            logger.debug(f"Replaced command at '{' '.join(keys)}': {previous!r} -> {command!r}")
        else:
            logger.debug(f"Registered command at '{' '.join(keys)}': {command!r}")

    def resolve(self, label: str, args: Sequence[str]) -> tuple[Command, int] | None:
        """Find the command for a line without running it.

        Returns:
            ``(command, consumed)`` or None when nothing matches.
        """
        key_path = [label.lower()] + [arg.lower() for arg in args]
        with self._lock:
            match = self._trie.deepest_match(key_path)
        if match is None:
            return None
        return match.value, match.consumed

    def dispatch(self, sender: ActorSender, label: str, args: Sequence[str]) -> CommandResult:
        """Run the best matching command for a line.

        Args:
            sender: Who issued the line.
            label: First token of the line, original case.
            args: Remaining tokens, original case.

        Returns:
            The command's result, or an UNSUPPORTED result when no key path
            matched.
        """
        resolved = self.resolve(label, args)
        if resolved is None:
            error = UnsupportedCommandError()
            logger.debug(f"Unsupported command from {sender.name}: {label} {' '.join(args)}")
            sender.send_message(str(error))
            return CommandResult(outcome=CommandOutcome.UNSUPPORTED, message=str(error))

        command, consumed = resolved
        logger.debug(f"{sender.name} -> {command!r} (consumed {consumed})")
        return command.execute(sender, label, args, consumed)

    def commands(self) -> list[tuple[tuple[str, ...], Command]]:
        """All registered ``(path, command)`` pairs, ordered by path."""
        with self._lock:
            items = list(self._trie.items())
        return sorted(items, key=lambda item: item[0])

    def __len__(self) -> int:
        with self._lock:
            return len(self._trie)
