import httpx
import logging
from typing import Any, Dict, List, Optional

from workloadhub.engine.errors import SourceTimeout, SourceUnavailable
from workloadhub.engine.models import Group, GroupId, Task
from workloadhub.platform.config import Settings, settings
from workloadhub.platform.metrics import BOARD_FETCH_FAILURES
from .parser import BoardColumns, parse_board_items

logger = logging.getLogger(__name__)

SOURCE_NAME = "monday.com"

ITEM_FIELDS = """
    id
    name
    group { id }
    column_values { id text value type }
    subitems {
        id
        name
        group { id }
        column_values { id text value type }
    }
"""

GROUPS_QUERY = """
query ($boardId: [ID!]) {
    boards(ids: $boardId) {
        groups { id title }
    }
}
"""

ITEMS_QUERY = """
query ($boardId: [ID!], $limit: Int!) {
    boards(ids: $boardId) {
        items_page(limit: $limit) {
            cursor
            items { %s }
        }
    }
}
""" % ITEM_FIELDS

NEXT_ITEMS_QUERY = """
query ($cursor: String!, $limit: Int!) {
    next_items_page(cursor: $cursor, limit: $limit) {
        cursor
        items { %s }
    }
}
""" % ITEM_FIELDS


class MondayBoardClient:
    """
    Client for the monday.com GraphQL API using httpx.

    Serves as the Task Source and Group Source of the workload engine.
    Every failure (transport, HTTP status, GraphQL error) is raised as
    SourceUnavailable; timeouts as SourceTimeout.
    """

    PAGE_SIZE = 500

    def __init__(self, config: Settings = settings, columns: Optional[BoardColumns] = None):
        self.api_url = config.MONDAY_API_URL
        self.board_id = config.MONDAY_BOARD_ID
        self.timeout = config.MONDAY_TIMEOUT_SECONDS
        self.columns = columns or BoardColumns.from_settings(config)
        self.headers = {
            "Authorization": config.MONDAY_API_TOKEN,
            "Content-Type": "application/json",
            "API-Version": config.MONDAY_API_VERSION,
        }
        self._token = config.MONDAY_API_TOKEN

    @property
    def is_configured(self) -> bool:
        return bool(self._token)

    async def _query(self, operation: str, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """POST a GraphQL query and return its ``data`` member."""
        if not self.is_configured:
            BOARD_FETCH_FAILURES.labels(operation=operation).inc()
            raise SourceUnavailable(SOURCE_NAME, "MONDAY_API_TOKEN is not configured")

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.api_url,
                    json={"query": query, "variables": variables},
                    headers=self.headers,
                )
                response.raise_for_status()
                payload = response.json()
            except httpx.TimeoutException as e:
                BOARD_FETCH_FAILURES.labels(operation=operation).inc()
                logger.error(f"monday.com {operation} timed out after {self.timeout}s")
                raise SourceTimeout(SOURCE_NAME, f"{operation} timed out") from e
            except (httpx.HTTPError, ValueError) as e:
                BOARD_FETCH_FAILURES.labels(operation=operation).inc()
                logger.error(f"monday.com {operation} failed: {e}")
                raise SourceUnavailable(SOURCE_NAME, str(e)) from e

        if payload.get("errors"):
            BOARD_FETCH_FAILURES.labels(operation=operation).inc()
            messages = "; ".join(err.get("message", "unknown error") for err in payload["errors"])
            logger.error(f"monday.com {operation} returned errors: {messages}")
            raise SourceUnavailable(SOURCE_NAME, messages)

        return payload.get("data") or {}

    def _board(self, data: Dict[str, Any]) -> Dict[str, Any]:
        boards = data.get("boards") or []
        if not boards:
            raise SourceUnavailable(SOURCE_NAME, f"board {self.board_id} not found")
        return boards[0]

    async def list_groups(self) -> List[Group]:
        data = await self._query("list_groups", GROUPS_QUERY, {"boardId": [self.board_id]})
        return [
            Group(id=GroupId(g["id"]), title=g.get("title") or "")
            for g in self._board(data).get("groups") or []
        ]

    async def _fetch_items(self) -> List[Dict[str, Any]]:
        data = await self._query(
            "list_items", ITEMS_QUERY, {"boardId": [self.board_id], "limit": self.PAGE_SIZE}
        )
        page = self._board(data).get("items_page") or {}
        items = list(page.get("items") or [])
        cursor = page.get("cursor")

        while cursor:
            data = await self._query(
                "list_items", NEXT_ITEMS_QUERY, {"cursor": cursor, "limit": self.PAGE_SIZE}
            )
            page = data.get("next_items_page") or {}
            items.extend(page.get("items") or [])
            cursor = page.get("cursor")

        return items

    async def list_tasks(self, chargeable_only: bool = True) -> List[Task]:
        """
        Full task snapshot of the board.

        With ``chargeable_only`` False, records without an assignee or effort
        are kept as well (used for triage).
        """
        groups = await self.list_groups()
        items = await self._fetch_items()
        tasks = parse_board_items(
            items,
            valid_group_ids={g.id for g in groups},
            columns=self.columns,
            chargeable_only=chargeable_only,
        )
        logger.info(f"Fetched {len(tasks)} tasks from {len(items)} board items")
        return tasks
