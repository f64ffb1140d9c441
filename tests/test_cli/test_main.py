"""Tests for the OpenWarp CLI."""

import pytest
import yaml
from typer.testing import CliRunner

from openwarp.cli.main import app


runner = CliRunner()


@pytest.fixture
def data_dir(tmp_path):
    """Data directory with a public spawn warp."""
    path = tmp_path / "data"
    path.mkdir()
    (path / "warps.yml").write_text(
        yaml.safe_dump({"warps": {"spawn": {"world": "world", "x": 0, "y": 64, "z": 0}}})
    )
    return path


def invoke(data_dir, *args, input=None):
    command, rest = args[0], list(args[1:])
    return runner.invoke(app, [command, "--data-dir", str(data_dir), *rest], input=input)


class TestRun:
    """Tests for 'openwarp run'."""

    def test_warp_list(self, data_dir):
        """Listing warps prints the public warps."""
        result = invoke(data_dir, "run", "-p", "alice", "warp", "list")
        assert result.exit_code == 0
        assert "Public warps: spawn" in result.output

    def test_set_saves_player_file(self, data_dir):
        """A warp set through run is saved on exit."""
        result = invoke(data_dir, "run", "-p", "alice", "warp", "set", "home")

        assert result.exit_code == 0
        assert "Created private warp 'home'" in result.output
        saved = yaml.safe_load((data_dir / "players" / "alice.yml").read_text())
        assert saved["warps"]["home"]["owner"] == "alice"
        players = yaml.safe_load((data_dir / "config.yml").read_text())
        assert players == {"players": ["alice"]}

    def test_failed_command_exit_code(self, data_dir):
        """A command that does not succeed exits with 1."""
        result = invoke(data_dir, "run", "-p", "alice", "warp", "nowhere")
        assert result.exit_code == 1
        assert "No warp found matching name: nowhere" in result.output

    def test_public_warp_needs_grant(self, data_dir):
        """Without a grant a public warp is refused."""
        result = invoke(data_dir, "run", "-p", "alice", "warp", "spawn")
        assert result.exit_code == 1
        assert "permission to move to warp: spawn" in result.output

    def test_console_sender(self, data_dir):
        """The console is rejected by player-only commands."""
        result = invoke(data_dir, "run", "--console", "warp", "spawn")
        assert result.exit_code == 1
        assert "only be used by players" in result.output

    def test_malformed_data(self, data_dir):
        """A malformed data file is reported and exits with 1."""
        (data_dir / "warps.yml").write_text("warps: [spawn]\n")
        result = invoke(data_dir, "run", "warp", "list")
        assert result.exit_code == 1
        assert "Error" in result.output


class TestList:
    """Tests for 'openwarp list'."""

    def test_shows_public_warps(self, data_dir):
        """Public warps are shown in a table."""
        result = invoke(data_dir, "list")
        assert result.exit_code == 0
        assert "Public Warps" in result.output
        assert "spawn" in result.output

    def test_owner_filter(self, data_dir):
        """--owner shows only that owner's private warps."""
        players = data_dir / "players"
        players.mkdir()
        (players / "alice.yml").write_text(yaml.safe_dump({"warps": {"home": {"world": "world"}}}))

        result = invoke(data_dir, "list", "--owner", "alice")

        assert result.exit_code == 0
        assert "home" in result.output
        assert "Public Warps" not in result.output

    def test_empty(self, tmp_path):
        """An empty data directory has no warps."""
        result = invoke(tmp_path / "empty", "list")
        assert result.exit_code == 0
        assert "No warps found" in result.output


class TestCheck:
    """Tests for 'openwarp check'."""

    def test_all_resolved(self, data_dir):
        """Exit 0 when every warp resolves."""
        result = invoke(data_dir, "check")
        assert result.exit_code == 0
        assert "All warps resolve" in result.output

    def test_unresolved(self, data_dir):
        """Exit 1 and name the warp when a world is unknown."""
        (data_dir / "warps.yml").write_text(
            yaml.safe_dump({"warps": {"island": {"world": "skylands"}}})
        )
        result = invoke(data_dir, "check")
        assert result.exit_code == 1
        assert "island" in result.output


class TestConsole:
    """Tests for 'openwarp console'."""

    def test_session(self, data_dir):
        """Lines are dispatched until /quit."""
        result = invoke(data_dir, "console", "-p", "alice", input="warp list\n/quit\n")
        assert result.exit_code == 0
        assert "Public warps: spawn" in result.output
        assert "Saving and exiting" in result.output

    def test_end_of_input(self, data_dir):
        """End of input ends the session."""
        result = invoke(data_dir, "console", "-p", "alice", input="")
        assert result.exit_code == 0

    def test_warp_and_where(self, data_dir):
        """A warp moves the player, and /where shows it."""
        (data_dir / "permissions.yml").write_text(
            yaml.safe_dump({"alice": ["openwarp.warp.access.public.*"]})
        )
        result = invoke(data_dir, "console", "-p", "alice", input="/tp world 5 70 5\nwarp spawn\n/where\n")
        assert result.exit_code == 0
        assert "Warped to spawn" in result.output
        assert "alice is at (0, 64, 0)" in result.output

    def test_help(self, data_dir):
        """/help lists registered commands."""
        result = invoke(data_dir, "console", input="/help\n/quit\n")
        assert result.exit_code == 0
        assert "Commands" in result.output
