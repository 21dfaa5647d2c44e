"""Render the human-readable justification for a sector decision."""

from swimsectors.models.sector import Sector, SectorDecision
from swimsectors.services.event_parser import format_duration


def describe_duration(hundredths: int) -> str:
    """Clock time followed by the raw hundredths, e.g. '1:05.79 (6579)'."""
    return f"{format_duration(hundredths)} ({hundredths})"


def format_sector_reason(
    decision: SectorDecision,
    event_name: str,
    b_sector_percentage: int,
) -> str | None:
    """Explain why a swimmer landed in their sector.

    Args:
        decision: A finalized decision
        event_name: Display name of the decision's event
        b_sector_percentage: Percentage used for the alternative NQT

    Returns:
        One sentence for sectors A-C, None for sector D
    """
    if decision.sector == Sector.D:
        return None

    opening = (
        f"For example, this swimmer swam the {decision.age_group} {decision.course} "
        f"{event_name} in {describe_duration(decision.duration)}"
    )
    diff = describe_duration(decision.diff)

    if decision.sector == Sector.A:
        if decision.nqt_duration is None:
            return f"{opening}, and there is no NQT for this event, so every time qualifies."
        return f"{opening}, beating the NQT of {describe_duration(decision.nqt_duration)} by {diff}."

    nqt = describe_duration(decision.nqt_duration)
    alternative = (
        f"{describe_duration(decision.additional_duration)} "
        f"({b_sector_percentage}% of the NQT)"
    )
    if decision.sector == Sector.B:
        return (
            f"{opening}, slower than the NQT of {nqt} "
            f"but faster than the alternative {alternative} by {diff}."
        )
    return (
        f"{opening}, slower than the NQT of {nqt} "
        f"and also slower than the alternative {alternative} by {diff}. "
        "This is the closest they got to the alternative NQT."
    )
