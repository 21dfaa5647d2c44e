"""Data Access Object for per-season sector records."""

from supabase import Client

from swimsectors.dao.base import BaseDAO
from swimsectors.models.sector import SectorDecision


class SectorDAO(BaseDAO[SectorDecision]):
    """One row per swimmer per season: the sector and its deciding swim."""

    table_name = "sectors"
    model_class = SectorDecision

    def __init__(self, client: Client | None = None):
        super().__init__(client)

    def clear_year(self, year: int) -> int:
        """Delete a season's records before it is ranked again.

        Returns:
            Number of rows deleted
        """
        result = self.table.delete().eq("year", str(year)).execute()
        return len(result.data)

    def record(self, year: int, decision: SectorDecision) -> None:
        """Store a swimmer's decision for ``year``."""
        self.table.insert(self._to_row(year, decision)).execute()

    def find_by_year(self, year: int) -> list[SectorDecision]:
        result = self.table.select("*").eq("year", str(year)).order("swimmer_id").execute()
        return [self._to_model(row) for row in result.data]

    def _to_row(self, year: int, decision: SectorDecision) -> dict:
        return {
            "year": str(year),
            "swimmer_id": decision.swimmer_id,
            "sector": decision.sector.value,
            "course": decision.course.value if decision.course else None,
            "event_id": decision.event_id,
            "age_group": decision.age_group,
            "duration": decision.duration or 0,
        }

    def _to_model(self, row: dict) -> SectorDecision:
        return SectorDecision(
            swimmer_id=row["swimmer_id"],
            sector=row["sector"],
            course=row.get("course"),
            event_id=row.get("event_id"),
            age_group=row.get("age_group"),
            duration=row.get("duration") or None,
        )
