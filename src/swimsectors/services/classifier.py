"""Assign one swimmer to exactly one performance sector.

Rules, applied to the swimmer's pool swims in the order given:

- A: any swim at or under its NQT, or a swim with no NQT defined. The first
  such swim is reported and the scan stops.
- B: a swim over the NQT but at or under the alternative NQT
  (NQT x B-sector percentage). The most recent B swim is reported.
- C: every swim is over the alternative NQT. The swim closest to its
  alternative NQT is reported. Once a B swim is seen, later C swims are
  ignored.
- D: no pool swims at all.
"""

from collections.abc import Iterable

from swimsectors.models.qualifying_time import QualifyingTimes
from swimsectors.models.sector import Sector, SectorDecision
from swimsectors.models.splash import SwimResult
from swimsectors.models.swimmer import NqtGender


def alternative_nqt(nqt: int, b_sector_percentage: int) -> int:
    """The B-sector threshold for an NQT, in whole hundredths.

    Swim durations are whole hundredths, so ``duration <= nqt * pct / 100``
    holds exactly when ``duration <= floor(nqt * pct / 100)``.
    """
    return nqt * b_sector_percentage // 100


def classify(
    swimmer_id: int | None,
    gender: NqtGender,
    results: Iterable[SwimResult],
    qualifying_times: QualifyingTimes,
    b_sector_percentage: int,
) -> SectorDecision:
    """Classify one swimmer from their season's pool swims.

    Args:
        swimmer_id: Swimmer being classified (carried into the decision)
        gender: NQT gender section for the swimmer
        results: The swimmer's pool swims, in scan order
        qualifying_times: The season's NQT tables
        b_sector_percentage: Alternative NQT as a percentage (e.g. 120)

    Returns:
        The swimmer's sector and the swim that justifies it
    """
    if b_sector_percentage <= 0:
        raise ValueError("b_sector_percentage must be positive")

    best: SectorDecision | None = None
    saw_b = False

    for result in results:
        table = qualifying_times.for_course(result.course)
        nqt = table.lookup(result.event_id, result.age_group, gender)

        if not nqt or result.duration <= nqt:
            return SectorDecision(
                swimmer_id=swimmer_id,
                sector=Sector.A,
                course=result.course,
                event_id=result.event_id,
                age_group=result.age_group,
                duration=result.duration,
                nqt_duration=nqt or None,
                diff=nqt - result.duration if nqt else 0,
            )

        additional = alternative_nqt(nqt, b_sector_percentage)
        if result.duration <= additional:
            saw_b = True
            best = SectorDecision(
                swimmer_id=swimmer_id,
                sector=Sector.B,
                course=result.course,
                event_id=result.event_id,
                age_group=result.age_group,
                duration=result.duration,
                nqt_duration=nqt,
                additional_duration=additional,
                diff=additional - result.duration,
            )
        elif not saw_b:
            diff = result.duration - additional
            if best is None or diff < best.diff:
                best = SectorDecision(
                    swimmer_id=swimmer_id,
                    sector=Sector.C,
                    course=result.course,
                    event_id=result.event_id,
                    age_group=result.age_group,
                    duration=result.duration,
                    nqt_duration=nqt,
                    additional_duration=additional,
                    diff=diff,
                )

    if best is None:
        return SectorDecision(swimmer_id=swimmer_id, sector=Sector.D)
    return best
