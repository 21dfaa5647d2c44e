"""Build National Qualifying Time tables from the published NQT sheets.

Each sheet lists one course. Column A holds either a gender heading ("WOMEN",
"MEN") or an event name ("200 FREE"); an event row carries one qualifying time
per masters age group in columns B through N. A cell reading "NO TIME" means
no qualifying time exists for that age group.
"""

import csv
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path
from zipfile import BadZipFile

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from swimsectors.logging import get_logger
from swimsectors.models.event import Course, Stroke, Units
from swimsectors.models.qualifying_time import (
    QualifyingTimeKey,
    QualifyingTimes,
    QualifyingTimeTable,
)
from swimsectors.models.swimmer import MASTERS_AGE_GROUPS, NqtGender
from swimsectors.services.event_parser import duration_from_cell, parse_distance_and_stroke

logger = get_logger(__name__)

NO_TIME = "NO TIME"
SUPPORTED_SUFFIXES = {".xlsx", ".xlsm", ".csv"}

# (distance, units, stroke) -> event id, or None when the event is unknown
EventResolver = Callable[[int, Units, Stroke], int | None]


class QualifyingTimeSheetError(ValueError):
    """Raised when an NQT sheet cannot be read."""


def load_qualifying_time_sheet(path: Path) -> list[list[object]]:
    """Read the first sheet of an NQT workbook (or a CSV export) as rows of cells.

    Raises:
        QualifyingTimeSheetError: If the file is missing, empty, or unreadable
    """
    if not path.exists():
        raise QualifyingTimeSheetError(f"NQT file not found: {path}")
    if path.stat().st_size == 0:
        raise QualifyingTimeSheetError(f"NQT file is empty: {path}")
    suffix = path.suffix.lower()
    if suffix not in SUPPORTED_SUFFIXES:
        raise QualifyingTimeSheetError(
            f"Unsupported NQT file type '{suffix}'. Supported: {sorted(SUPPORTED_SUFFIXES)}"
        )

    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            return [list(row) for row in csv.reader(f)]

    try:
        wb = load_workbook(path, read_only=True, data_only=True)
    except (BadZipFile, InvalidFileException) as exc:
        raise QualifyingTimeSheetError(f"Not a readable workbook: {path}") from exc

    try:
        ws = wb.worksheets[0]
        return [list(row) for row in ws.iter_rows(values_only=True)]
    finally:
        wb.close()


def _first_cell(row: Sequence[object]) -> str:
    if not row or row[0] is None:
        return ""
    return str(row[0]).strip().upper()


def build_qualifying_table(
    course: Course,
    rows: Iterable[Sequence[object]],
    resolve_event_id: EventResolver,
) -> QualifyingTimeTable:
    """Build the NQT table for one course from sheet rows.

    Rows before the first gender heading are ignored. Event rows that cannot
    be parsed or resolved to an event id are logged and skipped, which leaves
    their keys absent (every time qualifies).

    Args:
        course: Course the sheet covers (SCY or LCM)
        rows: Sheet rows, top to bottom
        resolve_event_id: Looks up the id of (distance, units, stroke)

    Returns:
        The populated, read-only table
    """
    units = course.units
    times: dict[QualifyingTimeKey, int] = {}
    gender: NqtGender | None = None

    for row_num, row in enumerate(rows, start=1):
        first = _first_cell(row)

        if first in (NqtGender.WOMEN.value, NqtGender.MEN.value):
            gender = NqtGender(first)
            continue
        if gender is None or not first[:1].isdigit():
            continue

        try:
            distance, stroke = parse_distance_and_stroke(first)
        except ValueError as e:
            logger.warning(
                "nqt_event_unparseable", course=course.value, row=row_num, event_name=first, error=str(e)
            )
            continue

        event_id = resolve_event_id(distance, units, stroke)
        if not event_id:
            logger.warning(
                "nqt_event_unrecognized",
                course=course.value,
                row=row_num,
                distance=distance,
                stroke=stroke.value,
                units=units.value,
            )
            continue

        _read_event_row(course, row, row_num, event_id, gender, times)

    table = QualifyingTimeTable(course, times)
    logger.info("nqt_table_built", course=course.value, entries=len(table))
    return table


def _read_event_row(
    course: Course,
    row: Sequence[object],
    row_num: int,
    event_id: int,
    gender: NqtGender,
    times: dict[QualifyingTimeKey, int],
) -> None:
    """Collect one qualifying time per age group column (B..N) of an event row."""
    for offset, age_group in enumerate(MASTERS_AGE_GROUPS, start=1):
        cell = row[offset] if offset < len(row) else None
        if isinstance(cell, str):
            cell = cell.strip()
            if cell.upper() == NO_TIME:
                continue
        if cell is None or cell == "":
            logger.warning(
                "nqt_cell_empty", course=course.value, row=row_num, age_group=age_group
            )
            continue
        try:
            duration = duration_from_cell(cell)
        except ValueError as e:
            logger.warning(
                "nqt_cell_unparseable",
                course=course.value,
                row=row_num,
                age_group=age_group,
                value=str(cell),
                error=str(e),
            )
            continue
        times[(event_id, age_group, gender)] = duration


def find_sheet(season_dir: Path, course: Course) -> Path:
    """Locate a season's sheet for ``course``, preferring .xlsx over .xlsm/.csv."""
    for suffix in (".xlsx", ".xlsm", ".csv"):
        candidate = season_dir / f"{course.value}_NQTs{suffix}"
        if candidate.exists():
            return candidate
    return season_dir / f"{course.value}_NQTs.xlsx"


def initialize_all_qualifying_times(
    year: int,
    nqt_dir: Path,
    resolve_event_id: EventResolver,
) -> QualifyingTimes:
    """Build the season's SCY and LCM tables; SCM shares the LCM table.

    Args:
        year: Season being processed
        nqt_dir: Directory holding NationalQualifyingTimes-<year>/
        resolve_event_id: Looks up the id of (distance, units, stroke)

    Raises:
        QualifyingTimeSheetError: If either sheet cannot be read
    """
    season_dir = nqt_dir / f"NationalQualifyingTimes-{year}"
    logger.info("nqt_initialize_begin", year=year, source=str(season_dir))

    scy = build_qualifying_table(
        Course.SCY,
        load_qualifying_time_sheet(find_sheet(season_dir, Course.SCY)),
        resolve_event_id,
    )
    lcm = build_qualifying_table(
        Course.LCM,
        load_qualifying_time_sheet(find_sheet(season_dir, Course.LCM)),
        resolve_event_id,
    )

    qualifying_times = QualifyingTimes(year=year, scy=scy, lcm=lcm)
    logger.info("nqt_initialize_end", year=year, scy=len(scy), lcm=len(lcm))
    return qualifying_times
