"""Data Access Object for splashes (individual swim results)."""

from supabase import Client

from swimsectors.dao.base import BaseDAO
from swimsectors.logging import get_logger
from swimsectors.models.event import POOL_COURSES
from swimsectors.models.splash import SwimResult

logger = get_logger(__name__)


class SplashDAO(BaseDAO[SwimResult]):
    """DAO for a season's splashes."""

    table_name = "splashes"
    model_class = SwimResult

    def __init__(self, client: Client | None = None, org: str = "PAC"):
        super().__init__(client)
        self.org = org

    def find_pool_results(self, swimmer_id: int) -> list[SwimResult]:
        """A swimmer's pool swims for the configured organization, in splash order.

        Open water splashes are excluded, so an empty list means the swimmer
        only swam open water (or nothing at all). Splashes without a positive
        duration are logged and skipped.
        """
        result = (
            self.table.select("id, course, duration, event_id, age_group")
            .eq("swimmer_id", swimmer_id)
            .in_("course", [c.value for c in POOL_COURSES])
            .eq("org", self.org)
            .order("id")
            .execute()
        )

        results = []
        for row in result.data:
            if not row.get("duration") or row["duration"] <= 0:
                logger.warning(
                    "splash_duration_invalid",
                    splash_id=row.get("id"),
                    swimmer_id=swimmer_id,
                    duration=row.get("duration"),
                )
                continue
            results.append(self._to_model(row))
        return results

    def _to_model(self, row: dict) -> SwimResult:
        return SwimResult(
            splash_id=row.get("id"),
            course=row["course"],
            event_id=row["event_id"],
            age_group=row["age_group"],
            duration=row["duration"],
        )
