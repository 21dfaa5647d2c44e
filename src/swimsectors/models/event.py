"""Event models and enums for masters pool events."""

from enum import StrEnum

from pydantic import BaseModel


class Stroke(StrEnum):
    """Swimming strokes."""

    FREESTYLE = "freestyle"
    BACKSTROKE = "backstroke"
    BREASTSTROKE = "breaststroke"
    BUTTERFLY = "butterfly"
    IM = "im"  # Individual Medley


class Course(StrEnum):
    """Pool course types."""

    SCY = "SCY"  # Short Course Yards (25 yards)
    SCM = "SCM"  # Short Course Meters (25 meters)
    LCM = "LCM"  # Long Course Meters (50 meters)

    @property
    def units(self) -> "Units":
        """Measurement unit used for distances in this course."""
        return Units.YARD if self == Course.SCY else Units.METER


class Units(StrEnum):
    """Distance units of an event."""

    YARD = "Yard"
    METER = "Meter"


POOL_COURSES: tuple[Course, ...] = (Course.SCY, Course.SCM, Course.LCM)

STROKE_SHORT_NAMES: dict[Stroke, str] = {
    Stroke.FREESTYLE: "Free",
    Stroke.BACKSTROKE: "Back",
    Stroke.BREASTSTROKE: "Breast",
    Stroke.BUTTERFLY: "Fly",
    Stroke.IM: "IM",
}


class Event(BaseModel):
    """A pool event, e.g. 100 Yard Free.

    Events are identified by (distance, units, stroke); the same swim in yards
    and in meters are different events.
    """

    id: int | None = None
    distance: int
    units: Units
    stroke: Stroke
    event_name: str | None = None

    @property
    def short_name(self) -> str:
        """Short name for display (e.g., '100 Free')."""
        return f"{self.distance} {STROKE_SHORT_NAMES[self.stroke]}"

    @property
    def display_name(self) -> str:
        return self.event_name or default_event_name(self.distance, self.units, self.stroke)

    def __str__(self) -> str:
        return self.display_name


def default_event_name(distance: int, units: Units, stroke: Stroke) -> str:
    """Name stored for an event when none is supplied (e.g. '100 Yard Free')."""
    return f"{distance} {units.value} {STROKE_SHORT_NAMES[stroke]}"
