"""Shared fixtures: an in-memory Supabase client and NQT sheet builders."""

import re
from collections import defaultdict
from pathlib import Path

import pytest
from openpyxl import Workbook

from swimsectors.config import get_settings
from swimsectors.dao import SupabaseClient
from swimsectors.models import MASTERS_AGE_GROUPS


class FakeResponse:
    def __init__(self, data: list[dict]):
        self.data = data


class FakeQuery:
    """Chainable query over a FakeTable, mirroring the postgrest builder."""

    def __init__(self, table: "FakeTable", op: str, payload=None, columns: str = "*"):
        self._table = table
        self._op = op
        self._payload = payload
        self._columns = columns
        self._filters = []
        self._order: tuple[str, bool] | None = None
        self._range: tuple[int, int] | None = None

    def eq(self, column, value):
        self._filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column, values):
        values = list(values)
        self._filters.append(lambda row: row.get(column) in values)
        return self

    def like(self, column, pattern):
        regex = re.compile("^" + ".*".join(re.escape(p) for p in pattern.split("%")) + "$")
        self._filters.append(lambda row: regex.match(str(row.get(column) or "")) is not None)
        return self

    def order(self, column, desc=False):
        self._order = (column, desc)
        return self

    def range(self, start, end):
        self._range = (start, end)
        return self

    def execute(self) -> FakeResponse:
        if self._op == "insert":
            return FakeResponse(self._table.insert_rows(self._payload))

        matched = [row for row in self._table.rows if all(f(row) for f in self._filters)]

        if self._op == "update":
            for row in matched:
                row.update(self._payload)
            return FakeResponse([dict(row) for row in matched])

        if self._op == "delete":
            self._table.rows = [row for row in self._table.rows if row not in matched]
            return FakeResponse([dict(row) for row in matched])

        if self._order:
            column, desc = self._order
            matched = sorted(matched, key=lambda row: row.get(column), reverse=desc)
        if self._range:
            start, end = self._range
            matched = matched[start : end + 1]
        return FakeResponse([self._project(row) for row in matched])

    def _project(self, row: dict) -> dict:
        if self._columns.strip() == "*":
            return dict(row)
        columns = [c.strip() for c in self._columns.split(",")]
        return {c: row.get(c) for c in columns}


class FakeTable:
    def __init__(self):
        self.rows: list[dict] = []
        self._next_id = 1

    def select(self, columns: str = "*"):
        return FakeQuery(self, "select", columns=columns)

    def insert(self, payload):
        return FakeQuery(self, "insert", payload=payload)

    def update(self, payload):
        return FakeQuery(self, "update", payload=payload)

    def delete(self):
        return FakeQuery(self, "delete")

    def insert_rows(self, payload) -> list[dict]:
        inserted = []
        for row in payload if isinstance(payload, list) else [payload]:
            row = dict(row)
            if row.get("id") is None:
                row["id"] = self._next_id
            self._next_id = max(self._next_id, row["id"]) + 1
            self.rows.append(row)
            inserted.append(dict(row))
        return inserted


class FakeSupabase:
    """Just enough of supabase.Client for the DAOs."""

    def __init__(self):
        self.tables: dict[str, FakeTable] = defaultdict(FakeTable)

    def table(self, name: str) -> FakeTable:
        return self.tables[name]

    def seed(self, name: str, rows: list[dict]) -> None:
        self.tables[name].insert_rows(rows)

    def rows(self, name: str) -> list[dict]:
        return self.tables[name].rows


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    """Keep each test independent of the developer's environment."""
    for var in (
        "YEAR_BEING_PROCESSED",
        "B_SECTOR_PERCENTAGE",
        "NQT_DIR",
        "RESULTS_ORG",
        "PROGRESS_INTERVAL",
        "LOG_FORMAT",
    ):
        monkeypatch.delenv(var, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def supabase() -> FakeSupabase:
    """Install an in-memory client as the Supabase singleton."""
    fake = FakeSupabase()
    SupabaseClient.set_client(fake)
    yield fake
    SupabaseClient.reset()


@pytest.fixture
def events(supabase) -> dict[str, int]:
    """Seed the events table and return name -> id."""
    supabase.seed(
        "events",
        [
            {"id": 1, "distance": 50, "units": "Yard", "stroke": "freestyle", "event_name": "50 Yard Free"},
            {"id": 2, "distance": 100, "units": "Yard", "stroke": "freestyle", "event_name": "100 Yard Free"},
            {"id": 3, "distance": 50, "units": "Meter", "stroke": "freestyle", "event_name": "50 Meter Free"},
            {"id": 4, "distance": 100, "units": "Meter", "stroke": "butterfly", "event_name": "100 Meter Fly"},
        ],
    )
    return {"50 Yard Free": 1, "100 Yard Free": 2, "50 Meter Free": 3, "100 Meter Fly": 4}


def age_group_times(start: float, step: float = 1.0) -> list[str]:
    """One time per masters age group, getting slower with age."""
    return [f"{start + i * step:.2f}" for i in range(len(MASTERS_AGE_GROUPS))]


@pytest.fixture
def write_nqt_workbook():
    """Write rows to the first sheet of a new .xlsx file."""

    def _write(path: Path, rows: list[list[object]]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        wb = Workbook()
        ws = wb.active
        for row in rows:
            ws.append(row)
        wb.save(path)
        return path

    return _write


@pytest.fixture
def nqt_dir(tmp_path, write_nqt_workbook) -> Path:
    """A 2024 season folder with SCY and LCM sheets.

    SCY: 50 Free (women 18-24 = 25.00, men 18-24 = 22.00), 100 Free NO TIME for 80-84.
    LCM: 50 Free (women 18-24 = 30.00), 100 Fly (men 18-24 = 60.00).
    """
    season = tmp_path / "NationalQualifyingTimes-2024"
    header = ["", *MASTERS_AGE_GROUPS]
    write_nqt_workbook(
        season / "SCY_NQTs.xlsx",
        [
            ["2024 USMS National Qualifying Times - Short Course Yards"],
            ["WOMEN", *MASTERS_AGE_GROUPS],
            ["50 FREE", *age_group_times(25.0)],
            ["100 FREE", *age_group_times(55.0)[:-1], "NO TIME"],
            header,
            ["MEN", *MASTERS_AGE_GROUPS],
            ["50 FREE", *age_group_times(22.0)],
            ["100 FREE", *age_group_times(49.0)],
        ],
    )
    write_nqt_workbook(
        season / "LCM_NQTs.xlsx",
        [
            ["WOMEN", *MASTERS_AGE_GROUPS],
            ["50 FREE", *age_group_times(30.0)],
            ["MEN", *MASTERS_AGE_GROUPS],
            ["50 FREE", *age_group_times(27.0)],
            ["100 FLY", *age_group_times(60.0, step=2.0)],
        ],
    )
    return tmp_path
