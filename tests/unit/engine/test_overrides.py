"""
Unit tests for the OverrideService set/reset lifecycle against SQLite.
"""

import math

import pytest
from unittest.mock import MagicMock, patch
from prometheus_client import REGISTRY
from sqlalchemy.exc import OperationalError

from workloadhub.engine.errors import NotFoundError, SourceUnavailable, ValidationError
from workloadhub.engine.models import GroupId, MemberId
from workloadhub.engine.overrides import OverrideService, validate_capacity
from workloadhub.storage.repositories.member_repository import MemberRepository
from workloadhub.storage.repositories.override_repository import OverrideRepository

SPRINT = GroupId("sprint_12")
NEXT_SPRINT = GroupId("sprint_13")


@pytest.fixture
def members(roster_service):
    alice = roster_service.upsert_member("Alice", capacity=40)
    bob = roster_service.upsert_member("Bob", capacity=32)
    return alice, bob


class TestValidateCapacity:

    def test_accepts_positive_numbers(self):
        assert validate_capacity(20) == 20.0
        assert validate_capacity(0.5) == 0.5

    def test_rejects_zero_and_negative(self):
        for value in (0, -1, -0.5):
            with pytest.raises(ValidationError):
                validate_capacity(value)

    def test_rejects_non_numbers(self):
        for value in ("20", None, True, math.nan, math.inf):
            with pytest.raises(ValidationError):
                validate_capacity(value)


class TestSetOverride:

    def test_set_then_read(self, override_service, members):
        alice, _ = members
        result = override_service.set_override(SPRINT, alice.id, 20)
        assert result == {alice.id: 20}
        assert override_service.get_overrides(SPRINT) == {alice.id: 20}

    def test_set_replaces_value(self, override_service, members):
        alice, _ = members
        override_service.set_override(SPRINT, alice.id, 20)
        assert override_service.set_override(SPRINT, alice.id, 16) == {alice.id: 16}

    def test_overrides_are_scoped_to_group(self, override_service, members):
        alice, bob = members
        override_service.set_override(SPRINT, alice.id, 20)
        override_service.set_override(NEXT_SPRINT, bob.id, 10)

        assert override_service.get_overrides(SPRINT) == {alice.id: 20}
        assert override_service.get_overrides(NEXT_SPRINT) == {bob.id: 10}
        assert override_service.get_overrides(GroupId("sprint_99")) == {}

    def test_roster_default_is_untouched(self, override_service, roster_service, members):
        alice, _ = members
        override_service.set_override(SPRINT, alice.id, 8)
        assert roster_service.load_roster().get(alice.id).capacity == 40

    def test_invalid_capacity_leaves_mapping_unchanged(self, override_service, members):
        alice, _ = members
        override_service.set_override(SPRINT, alice.id, 20)
        for value in (0, -5, True):
            with pytest.raises(ValidationError):
                override_service.set_override(SPRINT, alice.id, value)
        assert override_service.get_overrides(SPRINT) == {alice.id: 20}

    def test_unknown_member(self, override_service, members):
        with pytest.raises(NotFoundError) as exc:
            override_service.set_override(SPRINT, MemberId("m_ghost"), 20)
        assert exc.value.kind == "Member"
        assert override_service.get_overrides(SPRINT) == {}

    def test_unknown_group(self, override_service, members):
        alice, _ = members
        with pytest.raises(NotFoundError) as exc:
            override_service.set_override(GroupId("sprint_99"), alice.id, 20, known_groups={SPRINT})
        assert exc.value.kind == "Group"

    def test_known_group_accepted(self, override_service, members):
        alice, _ = members
        result = override_service.set_override(SPRINT, alice.id, 20, known_groups={SPRINT, NEXT_SPRINT})
        assert result == {alice.id: 20}

    def test_store_failure_is_source_unavailable(self, members):
        db = MagicMock()
        db.get_session.side_effect = OperationalError("UPDATE", {}, Exception("db down"))
        service = OverrideService(db=db, override_repo=OverrideRepository(), member_repo=MemberRepository())

        alice, _ = members
        with pytest.raises(SourceUnavailable) as exc:
            service.set_override(SPRINT, alice.id, 20)
        assert exc.value.source == "override store"


class TestResetOverride:

    def test_reset_returns_to_default(self, override_service, members):
        alice, bob = members
        override_service.set_override(SPRINT, alice.id, 20)
        override_service.set_override(SPRINT, bob.id, 10)

        assert override_service.reset_override(SPRINT, alice.id) == {bob.id: 10}

    def test_reset_without_override_is_noop(self, override_service, members):
        alice, _ = members
        assert override_service.reset_override(SPRINT, alice.id) == {}
        assert override_service.reset_override(SPRINT, MemberId("m_ghost")) == {}

    def test_reset_only_touches_one_group(self, override_service, members):
        alice, _ = members
        override_service.set_override(SPRINT, alice.id, 20)
        override_service.set_override(NEXT_SPRINT, alice.id, 30)

        override_service.reset_override(SPRINT, alice.id)

        assert override_service.get_overrides(NEXT_SPRINT) == {alice.id: 30}


def rejected_count(operation):
    return REGISTRY.get_sample_value(
        "workloadhub_override_mutations_total", {"operation": operation, "outcome": "rejected"}
    ) or 0.0


class TestMutationAtomicity:

    def test_failed_read_back_rolls_back_set(self, override_service, members):
        alice, _ = members
        failure = OperationalError("SELECT", {}, Exception("connection reset"))

        with patch.object(override_service.override_repo, "for_group", side_effect=failure):
            with pytest.raises(SourceUnavailable):
                override_service.set_override(SPRINT, alice.id, 20)

        assert override_service.get_overrides(SPRINT) == {}

    def test_failed_read_back_rolls_back_reset(self, override_service, members):
        alice, _ = members
        override_service.set_override(SPRINT, alice.id, 20)
        failure = OperationalError("SELECT", {}, Exception("connection reset"))

        with patch.object(override_service.override_repo, "for_group", side_effect=failure):
            with pytest.raises(SourceUnavailable):
                override_service.reset_override(SPRINT, alice.id)

        assert override_service.get_overrides(SPRINT) == {alice.id: 20}

    def test_rejections_are_counted(self, override_service, members):
        before = rejected_count("set")
        with pytest.raises(ValidationError):
            override_service.set_override(SPRINT, members[0].id, 0)
        assert rejected_count("set") == before + 1

    def test_programming_errors_are_not_counted_as_rejections(self, override_service, members):
        alice, _ = members
        before = rejected_count("set")

        with patch.object(override_service.override_repo, "upsert", side_effect=RuntimeError("bug")):
            with pytest.raises(RuntimeError):
                override_service.set_override(SPRINT, alice.id, 20)

        assert rejected_count("set") == before
        assert override_service.get_overrides(SPRINT) == {}
