"""Data Access Object for Events."""

from supabase import Client

from swimsectors.dao.base import BaseDAO
from swimsectors.models.event import Event, Stroke, Units, default_event_name

UNKNOWN_EVENT_NAME = "?"


class EventDAO(BaseDAO[Event]):
    """DAO for Event entities."""

    table_name = "events"
    model_class = Event

    def __init__(self, client: Client | None = None):
        super().__init__(client)

    def find_by_distance_units_stroke(
        self, distance: int, units: Units, stroke: Stroke
    ) -> Event | None:
        """Find an event by its unique combination of distance, units, and stroke."""
        result = (
            self.table.select("*")
            .eq("distance", distance)
            .eq("units", units.value)
            .eq("stroke", stroke.value)
            .execute()
        )

        if not result.data:
            return None

        return self._to_model(result.data[0])

    def get_event_id(self, distance: int, units: Units, stroke: Stroke) -> int | None:
        """Look up an event's ID without creating it.

        Returns:
            The event's ID or None if the event is unknown
        """
        result = (
            self.table.select("id")
            .eq("distance", distance)
            .eq("units", units.value)
            .eq("stroke", stroke.value)
            .execute()
        )

        if not result.data:
            return None

        return result.data[0]["id"]

    def add_event_if_necessary(
        self,
        distance: int,
        units: Units,
        stroke: Stroke,
        event_name: str | None = None,
    ) -> int:
        """Find an event or create it if it doesn't exist.

        Args:
            distance: Distance in ``units``
            units: Yard or Meter
            stroke: The swimming stroke
            event_name: Stored name; defaults to e.g. "100 Yard Free"

        Returns:
            The existing or newly created event's ID

        Raises:
            IdentityResolutionError: If the inserted event has no ID
        """
        existing = self.get_event_id(distance, units, stroke)
        if existing:
            return existing

        event = Event(
            distance=distance,
            units=units,
            stroke=stroke,
            event_name=event_name or default_event_name(distance, units, stroke),
        )
        return self.create(event).id

    def get_event_name(self, event_id: int) -> str:
        """Display name of an event, or "?" if the event is unknown."""
        event = self.get_by_id(event_id)
        if event is None:
            return UNKNOWN_EVENT_NAME
        return event.display_name
