"""Command contract and dispatch result types.

Every concrete command declares a static descriptor (name, argument range,
permission, usage) and implements ``run``. ``execute`` drives the fixed
sequence: sender check, argument count, permission, then ``run``. Errors raised
along the way become a CommandResult and a message to the sender; they never
reach the host.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from openwarp.exceptions import (
    CommandError,
    CommandFailedError,
    ForbiddenError,
    SenderRejectedError,
    UnresolvedTargetError,
    UnsupportedCommandError,
    UsageError,
)
from openwarp.warps.host import ActorSender, PermissionChecker
from openwarp.warps.store import WarpStore

logger = logging.getLogger(__name__)


class CommandOutcome(str, Enum):
    """Terminal state of a single dispatch."""

    UNSUPPORTED = "unsupported"  # no key path matched
    REJECTED_SENDER = "rejected_sender"  # e.g. console on a player-only command
    USAGE_ERROR = "usage_error"  # wrong argument count
    FORBIDDEN = "forbidden"  # permission check failed
    SUCCESS = "success"
    FAILURE = "failure"  # authorized but could not complete


_ERROR_OUTCOMES: tuple[tuple[type[CommandError], CommandOutcome], ...] = (
    (UnsupportedCommandError, CommandOutcome.UNSUPPORTED),
    (SenderRejectedError, CommandOutcome.REJECTED_SENDER),
    (UsageError, CommandOutcome.USAGE_ERROR),
    (ForbiddenError, CommandOutcome.FORBIDDEN),
    (CommandFailedError, CommandOutcome.FAILURE),
)


def outcome_for(error: CommandError) -> CommandOutcome:
    """Map a command error to its dispatch outcome."""
    for error_type, outcome in _ERROR_OUTCOMES:
        if isinstance(error, error_type):
            return outcome
    return CommandOutcome.FAILURE


@dataclass(frozen=True)
class CommandResult:
    """Result of dispatching one command line.

    Attributes:
        outcome: Terminal state reached.
        command: The command that handled the line, None if unsupported.
        consumed: Tokens (label included) consumed by key path matching.
        arguments: Trailing tokens passed to the command as arguments.
        message: Error text for failed outcomes, empty on success.
    """

    outcome: CommandOutcome
    command: "Command | None" = None
    consumed: int = 0
    arguments: tuple[str, ...] = ()
    message: str = ""

    @property
    def succeeded(self) -> bool:
        """Whether the command ran to completion."""
        return self.outcome == CommandOutcome.SUCCESS


@dataclass(frozen=True)
class Permission:
    """Permission node a command requires before it runs.

    Attributes:
        node: Dotted permission node.
        description: What the node grants.
        default: Result when the node is unset for the sender.
    """

    node: str
    description: str = ""
    default: bool = True


@dataclass
class CommandContext:
    """Collaborators injected into every command.

    Attributes:
        store: Warp indexes.
        permissions: Host permission check.
        public_access_default: Default for public warp access nodes.
    """

    store: WarpStore
    permissions: PermissionChecker
    public_access_default: bool = False


class Command(ABC):
    """Base class for all commands.

    Subclasses set the descriptor attributes in ``__init__`` and implement
    ``run``. Override ``resource_permissions`` to require extra nodes that
    depend on the arguments (e.g. the warp being used).
    """

    def __init__(
        self,
        context: CommandContext,
        name: str,
        min_args: int = 0,
        max_args: int | None = None,
        usage: str = "",
        permission: Permission | None = None,
        player_only: bool = False,
    ) -> None:
        self.context = context
        self.name = name
        self.min_args = min_args
        self.max_args = max_args
        self.usage = usage
        self.permission = permission
        self.player_only = player_only
        self.examples: list[str] = []

    @property
    def store(self) -> WarpStore:
        return self.context.store

    def add_example(self, example: str) -> None:
        """Add an example invocation for help output."""
        self.examples.append(example)

    # =========================================================================
    # Checks
    # =========================================================================

    def accepts(self, argument_count: int) -> bool:
        """Whether an argument count is within the declared range."""
        if argument_count < self.min_args:
            return False
        return self.max_args is None or argument_count <= self.max_args

    def expected_range(self) -> str:
        """Human-readable argument range, e.g. "1", "1-2" or "at least 1"."""
        if self.max_args is None:
            return f"at least {self.min_args}"
        if self.min_args == self.max_args:
            return str(self.min_args)
        return f"{self.min_args}-{self.max_args}"

    def validate(self, argument_count: int) -> None:
        """Check the argument count.

        Raises:
            UsageError: If the count is outside [min_args, max_args].
        """
        if not self.accepts(argument_count):
            raise UsageError(
                f"Wrong number of arguments (expected {self.expected_range()}, got {argument_count})",
                usage=self.usage,
                min_args=self.min_args,
                max_args=self.max_args,
            )

    def check_arguments(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        """Reject malformed arguments before authorization.

        Raises:
            UsageError: If an argument is malformed.
            SenderRejectedError: If the arguments ask for something the
                sender cannot have.
        """
        pass

    def require(self, sender: ActorSender, node: str, default: bool, message: str) -> None:
        """Check one permission node.

        Raises:
            ForbiddenError: If the host denies the node.
        """
        if not self.context.permissions.has_permission(sender, node, default):
            logger.debug(f"{sender.name} denied {node}")
            raise ForbiddenError(message, permission=node)

    def resource_permissions(
        self, sender: ActorSender, arguments: Sequence[str]
    ) -> list[tuple[str, bool, str]]:
        """Extra ``(node, default, message)`` checks for the given arguments."""
        return []

    def authorize(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        """Check the command's own node, then any resource nodes.

        Raises:
            ForbiddenError: On the first denied node.
        """
        if self.permission is not None:
            self.require(
                sender,
                self.permission.node,
                self.permission.default,
                "You don't have permission to use this command",
            )
        for node, default, message in self.resource_permissions(sender, arguments):
            self.require(sender, node, default, message)

    # =========================================================================
    # Execution
    # =========================================================================

    def execute(
        self,
        sender: ActorSender,
        label: str,
        args: Sequence[str],
        consumed: int,
    ) -> CommandResult:
        """Run the command for a dispatched line.

        Args:
            sender: Who issued the line.
            label: Command label in its original case.
            args: Every token after the label, original case.
            consumed: Tokens consumed by key path matching, label included.

        Returns:
            The dispatch result.
        """
        arguments = tuple(args[max(consumed - 1, 0):])

        try:
            if self.player_only and not sender.is_player:
                raise SenderRejectedError()
            self.validate(len(arguments))
            self.check_arguments(sender, arguments)
            self.authorize(sender, arguments)
            self.run(sender, arguments)
        except UsageError as e:
            sender.send_message(str(e))
            if e.usage:
                sender.send_message(f"Usage: {e.usage}")
            return self._result(CommandOutcome.USAGE_ERROR, consumed, arguments, str(e))
        except CommandError as e:
            sender.send_message(str(e))
            return self._result(outcome_for(e), consumed, arguments, str(e))
        except UnresolvedTargetError as e:
            logger.error(f"{label} by {sender.name} failed: {e}")
            message = f"The target location's world is missing for warp: {e.warp_name}"
            sender.send_message(message)
            return self._result(CommandOutcome.FAILURE, consumed, arguments, message)

        return self._result(CommandOutcome.SUCCESS, consumed, arguments)

    def _result(
        self,
        outcome: CommandOutcome,
        consumed: int,
        arguments: tuple[str, ...],
        message: str = "",
    ) -> CommandResult:
        return CommandResult(
            outcome=outcome,
            command=self,
            consumed=consumed,
            arguments=arguments,
            message=message,
        )

    @abstractmethod
    def run(self, sender: ActorSender, arguments: Sequence[str]) -> None:
        """Perform the command. Raise a CommandError to report failure."""
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
