"""Swim result ("splash") model."""

from pydantic import BaseModel, ConfigDict, field_validator

from swimsectors.models.event import Course


class SwimResult(BaseModel):
    """One pool swim by one swimmer in the season being ranked.

    The age group is the one the swimmer competed in for this swim, which can
    differ from their roster age group if they aged up mid-season.
    """

    model_config = ConfigDict(frozen=True)

    splash_id: int | None = None
    course: Course
    event_id: int
    age_group: str
    duration: int  # hundredths of a second

    @field_validator("duration")
    @classmethod
    def validate_duration(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Duration must be positive")
        return v
