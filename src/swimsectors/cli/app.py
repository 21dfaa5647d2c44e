"""Masters sector ranking CLI.

Usage:
    swimsectors rank --year 2024 --percent 120
    swimsectors rank --dry-run
    swimsectors explain 1234
    swimsectors nqt NationalQualifyingTimes-2024/SCY_NQTs.xlsx --course scy --offline
    swimsectors nqt NationalQualifyingTimes-2024/LCM_NQTs.xlsx --course lcm --event "100 FLY"
"""

from pathlib import Path

import typer
from dotenv import load_dotenv

# Load .env file for Supabase credentials, etc.
load_dotenv()
from rich.console import Console  # noqa: E402
from rich.table import Table  # noqa: E402

from swimsectors.config import Settings, get_settings  # noqa: E402
from swimsectors.dao import EventDAO, SplashDAO, SwimmerDAO  # noqa: E402
from swimsectors.logging import bind_context, clear_context, configure_logging  # noqa: E402
from swimsectors.models import (  # noqa: E402
    MASTERS_AGE_GROUPS,
    Course,
    NqtGender,
    QualifyingTimes,
    QualifyingTimeTable,
    Sector,
    Stroke,
    Units,
    default_event_name,
)
from swimsectors.services import (  # noqa: E402
    QualifyingTimeSheetError,
    SectorRankingService,
    build_qualifying_table,
    describe_duration,
    format_duration,
    initialize_all_qualifying_times,
    load_qualifying_time_sheet,
    parse_distance_and_stroke,
)

console = Console()
app = typer.Typer(
    name="swimsectors",
    help="Rank masters swimmers into sectors A-D against National Qualifying Times",
    no_args_is_help=True,
)

SECTOR_STYLES = {Sector.A: "green", Sector.B: "cyan", Sector.C: "yellow", Sector.D: "dim"}


def _settings(
    year: int | None = None,
    percent: int | None = None,
    nqt_dir: Path | None = None,
) -> Settings:
    """Settings with command line overrides applied."""
    settings = get_settings()
    overrides = {
        "year_being_processed": year,
        "b_sector_percentage": percent,
        "nqt_dir": nqt_dir,
    }
    settings = settings.model_copy(update={k: v for k, v in overrides.items() if v is not None})
    configure_logging(settings.log_level, settings.log_format.value)
    return settings


def _load_qualifying_times(settings: Settings, event_dao: EventDAO) -> QualifyingTimes:
    with console.status(f"Loading {settings.year_being_processed} qualifying times..."):
        return initialize_all_qualifying_times(
            settings.year_being_processed, settings.nqt_dir, event_dao.get_event_id
        )


def _build_service(settings: Settings, dry_run: bool = False) -> SectorRankingService:
    event_dao = EventDAO()
    qualifying_times = _load_qualifying_times(settings, event_dao)
    return SectorRankingService(
        qualifying_times,
        settings.b_sector_percentage,
        event_dao=event_dao,
        splash_dao=SplashDAO(org=settings.results_org),
        progress_interval=settings.progress_interval,
        dry_run=dry_run,
    )


# Shared options
YearOption = typer.Option(None, "--year", "-y", help="Season to rank (default: current year)")
PercentOption = typer.Option(
    None, "--percent", "-p", min=101, help="Alternative NQT as a percent of the NQT (e.g. 120)"
)
NqtDirOption = typer.Option(
    None, "--nqt-dir", help="Directory holding NationalQualifyingTimes-<year>/"
)


# =============================================================================
# RANKING COMMANDS
# =============================================================================


@app.command("rank")
def rank(
    year: int | None = YearOption,
    percent: int | None = PercentOption,
    nqt_dir: Path | None = NqtDirOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Classify without storing sectors"),
):
    """Rank every swimmer on the roster into exactly one sector."""
    settings = _settings(year, percent, nqt_dir)
    bind_context(year=settings.year_being_processed, b_sector_percentage=settings.b_sector_percentage)

    try:
        service = _build_service(settings, dry_run=dry_run)
        with console.status("Ranking swimmers..."):
            summary = service.rank_all()
    except (QualifyingTimeSheetError, RuntimeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None
    finally:
        clear_context()

    table = Table(title=f"Sectors for {summary.year}")
    table.add_column("Sector", style="bold")
    table.add_column("Swimmers", justify="right")
    for sector, count in summary.by_sector.items():
        table.add_row(f"[{SECTOR_STYLES[sector]}]{sector.value}[/]", str(count))
    table.add_row("Total", str(summary.total))
    console.print(table)

    if dry_run:
        console.print("[yellow]Dry run: no sectors were stored[/yellow]")
    if summary.missed_updates:
        console.print(
            f"[yellow]{summary.missed_updates} swimmer(s) could not be updated[/yellow]"
        )


@app.command("explain")
def explain(
    swimmer_id: int = typer.Argument(..., help="Swimmer ID"),
    year: int | None = YearOption,
    percent: int | None = PercentOption,
    nqt_dir: Path | None = NqtDirOption,
):
    """Show which sector a swimmer falls into and why, without storing it."""
    settings = _settings(year, percent, nqt_dir)

    try:
        swimmer = SwimmerDAO().get_by_id(swimmer_id)
    except RuntimeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    if swimmer is None:
        console.print(f"[red]Swimmer {swimmer_id} not found[/red]")
        raise typer.Exit(1)

    try:
        service = _build_service(settings, dry_run=True)
        decision, reason = service.evaluate(swimmer)
    except (QualifyingTimeSheetError, RuntimeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    style = SECTOR_STYLES[decision.sector]
    console.print(f"{swimmer} ({swimmer.nqt_gender.value}): [{style}]sector {decision.sector.value}[/]")

    if not decision.has_evidence:
        console.print("[dim]No pool swims this season.[/dim]")
        return

    table = Table(show_header=False)
    table.add_column("Field", style="cyan")
    table.add_column("Value")
    table.add_row("Event", f"{decision.age_group} {decision.course} {service.event_name(decision.event_id)}")
    table.add_row("Time", describe_duration(decision.duration))
    table.add_row(
        "NQT",
        describe_duration(decision.nqt_duration) if decision.nqt_duration else "(NO TIME)",
    )
    if decision.additional_duration is not None:
        table.add_row(
            f"Alternative ({settings.b_sector_percentage}%)",
            describe_duration(decision.additional_duration),
        )
    table.add_row("Diff", describe_duration(decision.diff))
    console.print(table)
    console.print(reason)


# =============================================================================
# NQT COMMANDS
# =============================================================================


class _LocalEventIds:
    """Numbers events as they are first seen, for inspecting a sheet offline."""

    def __init__(self):
        self.ids: dict[tuple[int, Units, Stroke], int] = {}
        self.names: dict[int, str] = {}

    def __call__(self, distance: int, units: Units, stroke: Stroke) -> int:
        key = (distance, units, stroke)
        if key not in self.ids:
            self.ids[key] = len(self.ids) + 1
            self.names[self.ids[key]] = default_event_name(distance, units, stroke)
        return self.ids[key]


def course_callback(value: str) -> Course:
    """Convert course string to enum."""
    try:
        course = Course(value.upper())
    except ValueError:
        raise typer.BadParameter("Invalid course. Valid: scy, lcm") from None
    if course == Course.SCM:
        raise typer.BadParameter("SCM uses the LCM sheet. Valid: scy, lcm")
    return course


def gender_callback(value: str | None) -> NqtGender | None:
    """Convert gender string to enum."""
    if value is None:
        return None
    try:
        return NqtGender(value.upper())
    except ValueError:
        raise typer.BadParameter("Invalid gender. Valid: women, men") from None


def _group_by_event(table: QualifyingTimeTable) -> dict[tuple[int, NqtGender], dict[str, int]]:
    """Group entries by event and gender for side-by-side age group display."""
    grouped: dict[tuple[int, NqtGender], dict[str, int]] = {}
    for (event_id, age_group, gender), duration in table.items():
        grouped.setdefault((event_id, gender), {})[age_group] = duration
    return grouped


@app.command("nqt")
def nqt(
    sheet: Path = typer.Argument(..., help="NQT sheet (.xlsx, .xlsm or .csv)"),
    course: str = typer.Option(..., "--course", "-c", callback=course_callback, help="scy or lcm"),
    gender: str | None = typer.Option(
        None, "--gender", "-g", callback=gender_callback, help="women or men"
    ),
    event: str | None = typer.Option(None, "--event", "-e", help="Only this event (e.g. '50 FREE')"),
    offline: bool = typer.Option(
        False, "--offline", help="Number events locally instead of looking them up"
    ),
):
    """Build and display the qualifying time table from one NQT sheet."""
    _settings()

    wanted = None
    if event is not None:
        try:
            wanted = parse_distance_and_stroke(event)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--event") from None

    try:
        rows = load_qualifying_time_sheet(sheet)
        if offline:
            resolver = _LocalEventIds()
            table = build_qualifying_table(course, rows, resolver)
            event_names = resolver.names
        else:
            event_dao = EventDAO()
            resolver = event_dao.get_event_id
            table = build_qualifying_table(course, rows, resolver)
            event_names = {
                event_id: event_dao.get_event_name(event_id) for event_id, _, _ in table
            }
    except (QualifyingTimeSheetError, RuntimeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None

    grouped = _group_by_event(table)
    if gender is not None:
        grouped = {k: v for k, v in grouped.items() if k[1] == gender}
    if wanted is not None:
        distance, stroke = wanted
        event_id = resolver(distance, course.units, stroke)
        grouped = {k: v for k, v in grouped.items() if k[0] == event_id}

    if not grouped:
        console.print("[yellow]No qualifying times found[/yellow]")
        return

    output = Table(title=f"{course.value} National Qualifying Times ({len(table)} entries)")
    output.add_column("Event", style="cyan")
    output.add_column("Gender")
    for age_group in MASTERS_AGE_GROUPS:
        output.add_column(age_group, justify="right")

    for (event_id, event_gender), times in grouped.items():
        output.add_row(
            event_names.get(event_id, str(event_id)),
            event_gender.value,
            *(
                format_duration(times[ag]) if ag in times else "[dim]-[/dim]"
                for ag in MASTERS_AGE_GROUPS
            ),
        )

    console.print(output)
    console.print("[dim]'-' means no qualifying time: every swim qualifies.[/dim]")


if __name__ == "__main__":
    app()
