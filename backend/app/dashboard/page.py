"""
Dashboard page: aggregate counts and shortcuts
"""
import asyncio
from typing import Dict

import structlog

from app.dashboard.schemas import DashboardView, QuickAction, StatCard
from app.pages.controller import PageController

logger = structlog.get_logger()

COUNTED_TABLES = ("jobs", "candidates", "applications")

# Static until outcomes are tracked per application
SUCCESS_RATE = "85%"

QUICK_ACTIONS = (
    QuickAction(title="Create New Job", description="Post a new job opening", route="/jobs"),
    QuickAction(title="Add Candidate", description="Import or add new candidates", route="/candidates"),
)

RECENT_ACTIVITY_PLACEHOLDER = "Your recruitment activities will appear here."


class DashboardPage(PageController):
    name = "dashboard"

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.counts: Dict[str, int] = {table: 0 for table in COUNTED_TABLES}

    async def load(self):
        """Count the three tables concurrently; a failed count reads as zero"""
        lifetime = self.lifetime
        results = await asyncio.gather(
            *(self.store.table(table).count() for table in COUNTED_TABLES),
            return_exceptions=True,
        )
        if self.is_stale(lifetime):
            return
        counts = {}
        for table, result in zip(COUNTED_TABLES, results):
            if isinstance(result, Exception):
                logger.warning("dashboard_count_failed", table=table, error=str(result))
                result = 0
            counts[table] = result
        self.counts = counts

    def view(self) -> DashboardView:
        return DashboardView(
            stats=[
                StatCard(title="Open Jobs", value=self.counts["jobs"]),
                StatCard(title="Total Candidates", value=self.counts["candidates"]),
                StatCard(title="Applications", value=self.counts["applications"]),
                StatCard(title="Success Rate", value=SUCCESS_RATE),
            ],
            quick_actions=list(QUICK_ACTIONS),
            recent_activity=RECENT_ACTIVITY_PLACEHOLDER,
            notifications=self.notifier.as_list(),
        )
