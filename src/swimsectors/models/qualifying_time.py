"""National Qualifying Time (NQT) tables for one season."""

from collections.abc import Iterator, Mapping
from types import MappingProxyType

from swimsectors.models.event import Course
from swimsectors.models.swimmer import NqtGender

QualifyingTimeKey = tuple[int, str, NqtGender]  # (event_id, age_group, gender)


class QualifyingTimeTable(Mapping[QualifyingTimeKey, int]):
    """Read-only mapping (event_id, age_group, gender) -> NQT in hundredths.

    A missing key means no qualifying time is published for that combination,
    so every swim qualifies.
    """

    __slots__ = ("course", "_times")

    def __init__(self, course: Course, times: Mapping[QualifyingTimeKey, int] | None = None):
        self.course = course
        self._times = MappingProxyType(dict(times or {}))

    def __getitem__(self, key: QualifyingTimeKey) -> int:
        return self._times[key]

    def __iter__(self) -> Iterator[QualifyingTimeKey]:
        return iter(self._times)

    def __len__(self) -> int:
        return len(self._times)

    def lookup(self, event_id: int, age_group: str, gender: NqtGender) -> int | None:
        """Get the NQT for an event/age group/gender, or None if there is none."""
        return self._times.get((event_id, age_group, gender))

    def __repr__(self) -> str:
        return f"QualifyingTimeTable(course={self.course.value}, entries={len(self)})"


class QualifyingTimes:
    """The season's NQT tables, one per course.

    Short course meters uses the long course meters table: ``scm`` is the very
    same instance as ``lcm``.
    """

    __slots__ = ("year", "scy", "lcm")

    def __init__(self, year: int, scy: QualifyingTimeTable, lcm: QualifyingTimeTable):
        if scy.course != Course.SCY or lcm.course != Course.LCM:
            raise ValueError("QualifyingTimes needs an SCY table and an LCM table")
        self.year = year
        self.scy = scy
        self.lcm = lcm

    @property
    def scm(self) -> QualifyingTimeTable:
        return self.lcm

    def for_course(self, course: Course) -> QualifyingTimeTable:
        """Select the table that applies to swims in ``course``."""
        if course == Course.SCY:
            return self.scy
        return self.lcm

    def __repr__(self) -> str:
        return f"QualifyingTimes(year={self.year}, scy={len(self.scy)}, lcm={len(self.lcm)})"
