"""
Unit tests for API Routers using mocked dependencies.
"""

import pytest
from unittest.mock import MagicMock, AsyncMock
from fastapi.testclient import TestClient
from workloadhub.api.main import app
from workloadhub.api.dependencies import (
    get_board_client,
    get_override_service,
    get_roster_service,
    get_view_service,
)
from workloadhub.board.client import MondayBoardClient
from workloadhub.engine.dashboard import WorkloadRow, WorkloadView
from workloadhub.engine.errors import NotFoundError, SourceTimeout, SourceUnavailable, ValidationError
from workloadhub.engine.models import Group, GroupId, Member, MemberId, MemberRole, Task, TaskId
from workloadhub.engine.overrides import OverrideService
from workloadhub.engine.roster import RosterService
from workloadhub.engine.triage import TriageReport
from workloadhub.engine.view_service import WorkloadViewService

# Mock Dependencies
mock_roster = MagicMock(spec=RosterService)
mock_overrides = MagicMock(spec=OverrideService)
mock_board = AsyncMock(spec=MondayBoardClient)
mock_view = AsyncMock(spec=WorkloadViewService)

app.dependency_overrides[get_roster_service] = lambda: mock_roster
app.dependency_overrides[get_override_service] = lambda: mock_overrides
app.dependency_overrides[get_board_client] = lambda: mock_board
app.dependency_overrides[get_view_service] = lambda: mock_view

client = TestClient(app)

ALICE = Member(id=MemberId("m_alice"), name="Alice", capacity=40, role=MemberRole.ADMIN)
SPRINT = GroupId("sprint_12")


@pytest.fixture(autouse=True)
def reset_mocks():
    for mock in (mock_roster, mock_overrides, mock_board, mock_view):
        mock.reset_mock(return_value=True, side_effect=True)


class TestTeamRouter:
    """Tests for /api/v1/team"""

    def test_list_team(self):
        mock_roster.list_members.return_value = [ALICE]

        response = client.get("/api/v1/team/")

        assert response.status_code == 200
        assert response.json() == [
            {"id": "m_alice", "name": "Alice", "email": None, "capacity": 40.0, "role": "admin"}
        ]

    def test_upsert_member(self):
        mock_roster.list_members.return_value = [ALICE]

        response = client.post("/api/v1/team/", json={"name": "Alice", "capacity": 40})

        assert response.status_code == 200
        mock_roster.upsert_member.assert_called_once_with(
            name="Alice", email=None, capacity=40.0, role=None
        )

    def test_upsert_invalid_member(self):
        mock_roster.upsert_member.side_effect = ValidationError("Validation failed: Name is required")

        response = client.post("/api/v1/team/", json={"name": ""})

        assert response.status_code == 400
        assert "Name is required" in response.json()["detail"]

    def test_delete_unknown_member(self):
        mock_roster.delete_member.side_effect = NotFoundError("Member", "m_ghost")

        response = client.delete("/api/v1/team/m_ghost")

        assert response.status_code == 404

    def test_roster_store_down(self):
        mock_roster.list_members.side_effect = SourceUnavailable("roster store", "db down")

        assert client.get("/api/v1/team/").status_code == 503


class TestOverridesRouter:
    """Tests for /api/v1/overrides"""

    def test_get_overrides(self):
        mock_overrides.get_overrides.return_value = {"m_alice": 20.0}

        response = client.get("/api/v1/overrides/sprint_12")

        assert response.status_code == 200
        assert response.json() == {"group_id": "sprint_12", "overrides": {"m_alice": 20.0}}

    def test_set_override(self):
        mock_board.list_groups.return_value = [Group(id=SPRINT, title="Sprint 12")]
        mock_overrides.set_override.return_value = {"m_alice": 20.0}

        response = client.post("/api/v1/overrides/sprint_12", json={"member_id": "m_alice", "capacity": 20})

        assert response.status_code == 200
        assert response.json()["overrides"] == {"m_alice": 20.0}
        args, kwargs = mock_overrides.set_override.call_args
        assert args == ("sprint_12", "m_alice", 20.0)
        assert kwargs["known_groups"] == {"sprint_12"}

    def test_set_invalid_capacity(self):
        mock_board.list_groups.return_value = [Group(id=SPRINT, title="Sprint 12")]
        mock_overrides.set_override.side_effect = ValidationError("Capacity must be a positive number")

        response = client.post("/api/v1/overrides/sprint_12", json={"member_id": "m_alice", "capacity": 0})

        assert response.status_code == 400

    def test_set_non_numeric_capacity(self):
        response = client.post("/api/v1/overrides/sprint_12", json={"member_id": "m_alice", "capacity": "lots"})

        assert response.status_code == 422
        mock_overrides.set_override.assert_not_called()

    def test_set_unknown_group(self):
        mock_board.list_groups.return_value = []
        mock_overrides.set_override.side_effect = NotFoundError("Group", "sprint_99")

        response = client.post("/api/v1/overrides/sprint_99", json={"member_id": "m_alice", "capacity": 10})

        assert response.status_code == 404

    def test_set_when_board_down(self):
        mock_board.list_groups.side_effect = SourceUnavailable("monday.com", "HTTP 502")

        response = client.post("/api/v1/overrides/sprint_12", json={"member_id": "m_alice", "capacity": 10})

        assert response.status_code == 503
        mock_overrides.set_override.assert_not_called()

    def test_reset_override(self):
        mock_overrides.reset_override.return_value = {}

        response = client.delete("/api/v1/overrides/sprint_12/m_alice")

        assert response.status_code == 200
        assert response.json() == {"group_id": "sprint_12", "overrides": {}}
        mock_overrides.reset_override.assert_called_once_with("sprint_12", "m_alice")


class TestWorkloadRouter:
    """Tests for /api/v1/workload and /api/v1/board/groups"""

    def test_list_groups(self):
        mock_view.list_groups.return_value = [Group(id=SPRINT, title="Sprint 12")]

        response = client.get("/api/v1/board/groups")

        assert response.status_code == 200
        assert response.json() == [{"id": "sprint_12", "title": "Sprint 12"}]

    def test_get_workload(self):
        mock_view.get_view.return_value = WorkloadView(
            group_id=SPRINT,
            rows=[WorkloadRow(
                member_id=ALICE.id, name="Alice", capacity=20, default_capacity=40,
                workload=30, overridden=True,
            )],
        )

        response = client.get("/api/v1/workload", params={"group_id": "sprint_12"})

        assert response.status_code == 200
        data = response.json()
        assert data["group_id"] == "sprint_12"
        assert data["stale"] is False
        row = data["rows"][0]
        assert row["overloaded"] is True
        assert row["utilization"] == 150.0
        assert row["overridden"] is True
        mock_view.get_view.assert_called_once_with("sprint_12")

    def test_get_workload_whole_board(self):
        mock_view.get_view.return_value = WorkloadView(group_id=None, rows=[])

        response = client.get("/api/v1/workload")

        assert response.status_code == 200
        mock_view.get_view.assert_called_once_with(None)

    def test_workload_board_timeout(self):
        mock_view.get_view.side_effect = SourceTimeout("monday.com", "list_items timed out")

        response = client.get("/api/v1/workload", params={"group_id": "sprint_12"})

        assert response.status_code == 504

    def test_tasks_needing_attention(self):
        task = Task(
            id=TaskId("7"), name="Write docs", assignee="", effort=0.0, status="",
            group_id=SPRINT, effort_provided=False,
        )
        mock_view.get_triage.return_value = TriageReport(both=[task])

        response = client.get("/api/v1/workload/attention", params={"group_id": "sprint_12"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["both"][0]["id"] == "7"
        assert data["unassigned"] == []
