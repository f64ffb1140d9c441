"""Tests for warp entities and target resolution."""

import logging

import pytest

from openwarp.exceptions import MissingTargetWorldError, WarpLoadError
from openwarp.warps import Target, UnresolvedTarget, Warp, resolve_target
from tests.factories import create_record, create_warp


class TestResolveTarget:
    """Tests for building targets from records."""

    def test_known_world(self, worlds):
        """A known world gives a resolved target."""
        target = resolve_target(create_record(x=1.5, y=70.0, z=-3.0, yaw=90.0), worlds, "spawn")
        assert isinstance(target, Target)
        assert target.world_name == "world"
        assert (target.x, target.y, target.z, target.yaw) == (1.5, 70.0, -3.0, 90.0)

    def test_absent_world_is_unresolved(self, worlds, caplog):
        """A record with no world is never given a guessed world."""
        with caplog.at_level(logging.ERROR):
            target = resolve_target(create_record(world=None, x=4.0), worlds, "lost")

        assert isinstance(target, UnresolvedTarget)
        assert target.world_name is None
        assert target.x == 4.0
        assert target.is_resolved is False
        assert "no world for warp lost" in caplog.text

    def test_unknown_world_keeps_name(self, worlds, caplog):
        """An unknown world stays named on the marker."""
        with caplog.at_level(logging.ERROR):
            target = resolve_target(create_record(world="skylands"), worlds, "island")

        assert target == UnresolvedTarget(world_name="skylands", y=64.0, reason="unknown world")
        assert "skylands" in caplog.text

    def test_missing_coordinates_default_to_zero(self, worlds):
        """Absent numeric fields read as 0.0."""
        target = resolve_target({"world": "world"}, worlds)
        assert (target.x, target.y, target.z, target.pitch, target.yaw) == (0.0,) * 5

    def test_non_numeric_coordinate(self, worlds):
        """A non-numeric coordinate is a load error."""
        with pytest.raises(WarpLoadError, match="non-numeric x"):
            resolve_target(create_record(x="far"), worlds, "bad")


class TestWarpRecords:
    """Tests for converting warps to and from records."""

    def test_round_trip(self, worlds):
        """A record read and written back is unchanged."""
        record = create_record(owner="alice", x=1.0, y=2.0, z=3.0, pitch=4.0, yaw=5.0)
        warp = Warp.from_record("home", record, worlds)
        assert warp.owner == "alice"
        assert warp.to_record() == record

    def test_owner_defaults_to_empty(self, worlds):
        """A record without an owner gives an unowned warp."""
        warp = Warp.from_record("spawn", {"world": "world"}, worlds)
        assert warp.owner == ""

    def test_missing_world_partial_record(self):
        """A warp with no world name raises with a partial record."""
        warp = create_warp("lost", world=None, owner="bob", x=7.0)

        with pytest.raises(MissingTargetWorldError) as exc_info:
            warp.to_record()

        partial = exc_info.value.partial
        assert "world" not in partial
        assert partial["owner"] == "bob"
        assert partial["x"] == 7.0

    def test_unresolved_world_name_persists(self):
        """An unknown world name is still written."""
        warp = create_warp("island", world="skylands", resolved=False)
        assert warp.to_record()["world"] == "skylands"


class TestWarpProperties:
    """Tests for warp accessors."""

    def test_world_of_resolved_warp(self):
        """Resolved warps expose their world handle."""
        warp = create_warp()
        assert warp.is_resolved
        assert warp.world.name == "world"

    def test_world_of_unresolved_warp(self):
        """Unresolved warps have no world handle."""
        warp = create_warp(world="skylands", resolved=False)
        assert warp.world is None
        assert warp.world_name == "skylands"

    def test_detail_string(self):
        """The detail string shows coordinates and world."""
        warp = create_warp(x=1.0, y=2.0, z=3.0)
        assert warp.detail_string() == "(1.0, 2.0, 3.0) in world world"

    def test_detail_string_unresolved(self):
        """Unresolved warps are flagged in their detail string."""
        warp = create_warp(world=None)
        assert warp.detail_string().endswith("in world <missing> [unresolved]")
