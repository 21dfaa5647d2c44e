"""Sector decision models."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from swimsectors.models.event import Course


class Sector(StrEnum):
    """Performance sectors.

    A: achieved at least one National Qualifying Time
    B: within the alternative (e.g. 120%) NQT but never under the NQT
    C: pool swimmer who never reached the alternative NQT
    D: no pool swims this season (open water only)
    """

    A = "A"
    B = "B"
    C = "C"
    D = "D"


class SectorDecision(BaseModel):
    """The sector assigned to one swimmer and the swim that justifies it.

    For A, ``diff`` is nqt - duration (0 when no NQT exists). For B it is
    additional_duration - duration. For C it is duration - additional_duration,
    the smallest such gap over all of the swimmer's swims. Sector D carries no
    evidence.
    """

    model_config = ConfigDict(frozen=True)

    swimmer_id: int | None = None
    sector: Sector
    course: Course | None = None
    event_id: int | None = None
    age_group: str | None = None
    duration: int | None = None
    nqt_duration: int | None = None  # None: no NQT for this event/age group/gender
    additional_duration: int | None = None  # alternative NQT, B and C only
    diff: int = 0

    @property
    def has_evidence(self) -> bool:
        return self.sector != Sector.D


class RankingSummary(BaseModel):
    """Totals for one ranking run."""

    year: int
    total: int = 0
    by_sector: dict[Sector, int] = Field(default_factory=lambda: {s: 0 for s in Sector})
    missed_updates: int = 0

    def record(self, decision: SectorDecision) -> None:
        self.total += 1
        self.by_sector[decision.sector] += 1
