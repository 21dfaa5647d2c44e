"""Pydantic models for masters sector ranking."""

from swimsectors.models.event import (
    POOL_COURSES,
    Course,
    Event,
    Stroke,
    Units,
    default_event_name,
)
from swimsectors.models.qualifying_time import (
    QualifyingTimeKey,
    QualifyingTimes,
    QualifyingTimeTable,
)
from swimsectors.models.sector import RankingSummary, Sector, SectorDecision
from swimsectors.models.splash import SwimResult
from swimsectors.models.swimmer import (
    MASTERS_AGE_GROUPS,
    Gender,
    NqtGender,
    Swimmer,
    age_groups_close,
    canonical_gender,
)

__all__ = [
    # Event
    "Course",
    "Event",
    "POOL_COURSES",
    "Stroke",
    "Units",
    "default_event_name",
    # Qualifying times
    "QualifyingTimeKey",
    "QualifyingTimeTable",
    "QualifyingTimes",
    # Sector
    "RankingSummary",
    "Sector",
    "SectorDecision",
    # Splash
    "SwimResult",
    # Swimmer
    "Gender",
    "MASTERS_AGE_GROUPS",
    "NqtGender",
    "Swimmer",
    "age_groups_close",
    "canonical_gender",
]
