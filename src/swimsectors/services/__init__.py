"""Service layer for swimsectors: NQT tables, classification, and ranking runs."""

from swimsectors.services.classifier import alternative_nqt, classify
from swimsectors.services.event_parser import (
    duration_from_cell,
    format_duration,
    parse_distance_and_stroke,
    parse_duration,
)
from swimsectors.services.nqt_loader import (
    QualifyingTimeSheetError,
    build_qualifying_table,
    initialize_all_qualifying_times,
    load_qualifying_time_sheet,
)
from swimsectors.services.ranking_service import SectorRankingService
from swimsectors.services.reason import describe_duration, format_sector_reason

__all__ = [
    "QualifyingTimeSheetError",
    "SectorRankingService",
    "alternative_nqt",
    "build_qualifying_table",
    "classify",
    "describe_duration",
    "duration_from_cell",
    "format_duration",
    "format_sector_reason",
    "initialize_all_qualifying_times",
    "load_qualifying_time_sheet",
    "parse_distance_and_stroke",
    "parse_duration",
]
