"""Rank every swimmer on the roster into exactly one sector."""

from swimsectors.dao.event_dao import EventDAO
from swimsectors.dao.sector_dao import SectorDAO
from swimsectors.dao.splash_dao import SplashDAO
from swimsectors.dao.swimmer_dao import SwimmerDAO
from swimsectors.logging import get_logger
from swimsectors.models.qualifying_time import QualifyingTimes
from swimsectors.models.sector import RankingSummary, SectorDecision
from swimsectors.models.swimmer import Swimmer
from swimsectors.services.classifier import classify
from swimsectors.services.reason import format_sector_reason

logger = get_logger(__name__)


class SectorRankingService:
    """Classify swimmers against the season's NQTs and store the outcome.

    Swimmers are processed one at a time: all of a swimmer's pool swims are
    scanned, the decision and its reason are stored, then the next swimmer
    starts. The NQT tables are only read.
    """

    def __init__(
        self,
        qualifying_times: QualifyingTimes,
        b_sector_percentage: int,
        swimmer_dao: SwimmerDAO | None = None,
        splash_dao: SplashDAO | None = None,
        event_dao: EventDAO | None = None,
        sector_dao: SectorDAO | None = None,
        progress_interval: int = 500,
        dry_run: bool = False,
    ):
        self.qualifying_times = qualifying_times
        self.b_sector_percentage = b_sector_percentage
        self.swimmer_dao = swimmer_dao or SwimmerDAO()
        self.splash_dao = splash_dao or SplashDAO()
        self.event_dao = event_dao or EventDAO()
        self.sector_dao = sector_dao or SectorDAO()
        self.progress_interval = progress_interval
        self.dry_run = dry_run
        self._event_names: dict[int, str] = {}

    @property
    def year(self) -> int:
        return self.qualifying_times.year

    def event_name(self, event_id: int) -> str:
        """Display name of an event, cached for the run."""
        if event_id not in self._event_names:
            self._event_names[event_id] = self.event_dao.get_event_name(event_id)
        return self._event_names[event_id]

    def evaluate(self, swimmer: Swimmer) -> tuple[SectorDecision, str | None]:
        """Classify one swimmer and explain the decision, without storing it."""
        results = self.splash_dao.find_pool_results(swimmer.id)
        decision = classify(
            swimmer.id,
            swimmer.nqt_gender,
            results,
            self.qualifying_times,
            self.b_sector_percentage,
        )
        reason = None
        if decision.has_evidence:
            reason = format_sector_reason(
                decision, self.event_name(decision.event_id), self.b_sector_percentage
            )
        return decision, reason

    def rank_swimmer(self, swimmer: Swimmer) -> tuple[SectorDecision, bool]:
        """Classify one swimmer and store their sector and reason.

        Returns:
            The decision, and False if the swimmer's row was not updated
        """
        decision, reason = self.evaluate(swimmer)
        logger.debug(
            "swimmer_ranked",
            swimmer_id=swimmer.id,
            sector=decision.sector.value,
            diff=decision.diff,
        )
        if self.dry_run:
            return decision, True

        updated = self.swimmer_dao.update_sector(swimmer.id, decision.sector, reason)
        if updated == 0:
            logger.warning(
                "sector_update_missed", swimmer_id=swimmer.id, sector=decision.sector.value
            )
            return decision, False

        self.sector_dao.record(self.year, decision)
        return decision, True

    def rank_all(self) -> RankingSummary:
        """Rank every swimmer on the roster.

        Returns:
            Per-sector totals and the number of missed updates
        """
        logger.info(
            "ranking_begin",
            year=self.year,
            b_sector_percentage=self.b_sector_percentage,
            dry_run=self.dry_run,
        )
        summary = RankingSummary(year=self.year)

        if not self.dry_run:
            cleared = self.sector_dao.clear_year(self.year)
            logger.info("sector_records_cleared", year=self.year, rows=cleared)

        for swimmer in self.swimmer_dao.iter_roster():
            decision, updated = self.rank_swimmer(swimmer)
            summary.record(decision)
            if not updated:
                summary.missed_updates += 1
            if summary.total % self.progress_interval == 0:
                logger.info("ranking_progress", processed=summary.total)

        logger.info(
            "ranking_end",
            year=self.year,
            total=summary.total,
            missed_updates=summary.missed_updates,
            **{f"sector_{s.value}": n for s, n in summary.by_sector.items()},
        )
        return summary
