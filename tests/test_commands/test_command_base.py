"""Tests for the command contract."""

from typing import Sequence

import pytest

from openwarp.commands import Command, CommandOutcome, Permission, outcome_for
from openwarp.exceptions import (
    CommandFailedError,
    ForbiddenError,
    SenderRejectedError,
    UnsupportedCommandError,
    UsageError,
)


class EchoCommand(Command):
    """Player-only command taking one or two arguments."""

    def __init__(self, context, player_only=True, fail=False):
        super().__init__(
            context,
            name="Echo",
            min_args=1,
            max_args=2,
            usage="/echo {TEXT} [TEXT]",
            permission=Permission("test.echo", "Echo text", default=True),
            player_only=player_only,
        )
        self.fail = fail
        self.ran = False

    def run(self, sender, arguments: Sequence[str]) -> None:
        self.ran = True
        if self.fail:
            raise CommandFailedError("Echo failed")
        sender.send_message(" ".join(arguments))


class TestArgumentRange:
    """Tests for argument count checks."""

    def test_expected_range_span(self, context):
        """A min-max range reads as 'min-max'."""
        assert EchoCommand(context).expected_range() == "1-2"

    def test_expected_range_exact(self, context):
        """Equal bounds read as a single number."""
        command = EchoCommand(context)
        command.max_args = 1
        assert command.expected_range() == "1"

    def test_expected_range_unbounded(self, context):
        """No maximum reads as 'at least'."""
        command = EchoCommand(context)
        command.max_args = None
        assert command.expected_range() == "at least 1"
        assert command.accepts(50)

    def test_validate_rejects_out_of_range(self, context):
        """Counts outside the range raise UsageError with the usage text."""
        with pytest.raises(UsageError) as exc_info:
            EchoCommand(context).validate(3)
        assert exc_info.value.usage == "/echo {TEXT} [TEXT]"
        assert exc_info.value.min_args == 1
        assert exc_info.value.max_args == 2


class TestExecute:
    """Tests for the execute state machine."""

    def test_success(self, context, alice):
        """A valid, permitted call runs and succeeds."""
        command = EchoCommand(context)
        result = command.execute(alice, "echo", ["hello", "there"], consumed=1)
        assert result.succeeded
        assert result.arguments == ("hello", "there")
        assert alice.messages == ["hello there"]

    def test_non_player_rejected_before_validation(self, context, console_sender):
        """The sender check runs before the argument count check."""
        command = EchoCommand(context)
        result = command.execute(console_sender, "echo", [], consumed=1)
        assert result.outcome == CommandOutcome.REJECTED_SENDER
        assert console_sender.messages == ["This command can only be used by players"]
        assert command.ran is False

    def test_console_allowed_when_not_player_only(self, context, console_sender):
        """Commands not marked player-only accept the console."""
        command = EchoCommand(context, player_only=False)
        assert command.execute(console_sender, "echo", ["hi"], consumed=1).succeeded

    def test_usage_error_reports_usage(self, context, alice):
        """A wrong count sends the error and the usage line."""
        command = EchoCommand(context)
        result = command.execute(alice, "echo", [], consumed=1)
        assert result.outcome == CommandOutcome.USAGE_ERROR
        assert alice.messages == [
            "Wrong number of arguments (expected 1-2, got 0)",
            "Usage: /echo {TEXT} [TEXT]",
        ]
        assert command.ran is False

    def test_forbidden_does_not_run(self, context, grants, alice):
        """A denied base node stops the command before it runs."""
        grants.root["alice"] = ["-test.echo"]
        command = EchoCommand(context)
        result = command.execute(alice, "echo", ["hi"], consumed=1)
        assert result.outcome == CommandOutcome.FORBIDDEN
        assert alice.messages == ["You don't have permission to use this command"]
        assert command.ran is False

    def test_failure_from_run(self, context, alice):
        """A CommandFailedError from run becomes a FAILURE result."""
        result = EchoCommand(context, fail=True).execute(alice, "echo", ["hi"], consumed=1)
        assert result.outcome == CommandOutcome.FAILURE
        assert result.message == "Echo failed"

    def test_arguments_skip_consumed_tokens(self, context, alice):
        """Tokens consumed by the key path are not arguments."""
        result = EchoCommand(context).execute(alice, "echo", ["loud", "hi"], consumed=2)
        assert result.arguments == ("hi",)


class TestOutcomeFor:
    """Tests for error to outcome mapping."""

    @pytest.mark.parametrize(
        "error,outcome",
        [
            (UnsupportedCommandError(), CommandOutcome.UNSUPPORTED),
            (SenderRejectedError(), CommandOutcome.REJECTED_SENDER),
            (UsageError("bad"), CommandOutcome.USAGE_ERROR),
            (ForbiddenError("no"), CommandOutcome.FORBIDDEN),
            (CommandFailedError("oops"), CommandOutcome.FAILURE),
        ],
    )
    def test_mapping(self, error, outcome):
        """Each command error maps to its outcome."""
        assert outcome_for(error) == outcome
