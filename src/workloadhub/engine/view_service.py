"""
Workload View Service

Fetches a fresh snapshot (board tasks, roster, group overrides) for each
evaluation and builds the dashboard view.

When the board or a store is unavailable the last good view of that group is
returned flagged ``stale`` instead of a partial or zeroed one. Without a
previous view the SourceUnavailable error propagates. At most ``cache_size``
views are kept; the least recently used group is evicted first.
"""

import dataclasses
import logging
from collections import OrderedDict
from typing import List, Optional

from workloadhub.board.client import MondayBoardClient
from workloadhub.platform.config import settings

from .dashboard import WorkloadView, build_workload_view
from .errors import SourceUnavailable
from .models import Group, GroupId
from .overrides import OverrideService
from .roster import RosterService
from .triage import TriageReport, triage_tasks

logger = logging.getLogger(__name__)


class WorkloadViewService:
    """Builds per-group workload views and keeps the last good one of each group."""

    def __init__(
        self,
        board: MondayBoardClient,
        roster_service: RosterService,
        override_service: OverrideService,
        fallback_capacity: float = settings.DEFAULT_MEMBER_CAPACITY,
        cache_size: int = settings.VIEW_CACHE_SIZE,
    ):
        self.board = board
        self.roster_service = roster_service
        self.override_service = override_service
        self.fallback_capacity = fallback_capacity
        self.cache_size = cache_size
        self._last_good: "OrderedDict[Optional[GroupId], WorkloadView]" = OrderedDict()

    async def list_groups(self) -> List[Group]:
        return await self.board.list_groups()

    async def get_view(self, group_id: Optional[GroupId] = None) -> WorkloadView:
        """
        Workload view for ``group_id``; no group means the whole board
        without any overrides in scope.
        """
        try:
            tasks = await self.board.list_tasks()
            roster = self.roster_service.load_roster()
            overrides = self.override_service.get_overrides(group_id) if group_id else {}
        except SourceUnavailable as e:
            cached = self._last_good.get(group_id)
            if cached is None:
                raise
            self._last_good.move_to_end(group_id)
            logger.warning(f"Serving stale workload view for group {group_id}: {e}")
            return dataclasses.replace(cached, stale=True)

        view = build_workload_view(tasks, group_id, roster, overrides, self.fallback_capacity)
        self._remember(group_id, view)
        return view

    async def get_triage(self, group_id: Optional[GroupId] = None) -> TriageReport:
        tasks = await self.board.list_tasks(chargeable_only=False)
        return triage_tasks(tasks, group_id)

    def _remember(self, group_id: Optional[GroupId], view: WorkloadView) -> None:
        self._last_good[group_id] = view
        self._last_good.move_to_end(group_id)
        while len(self._last_good) > self.cache_size:
            self._last_good.popitem(last=False)
