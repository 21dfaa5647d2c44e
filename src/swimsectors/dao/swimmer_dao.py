"""Data Access Object for Swimmers."""

from collections.abc import Iterator

from supabase import Client

from swimsectors.dao.base import BaseDAO
from swimsectors.logging import get_logger
from swimsectors.models.sector import Sector
from swimsectors.models.swimmer import Swimmer, age_groups_close, canonical_gender

logger = get_logger(__name__)


def usms_swimmer_id(reg_num: str) -> str:
    """The permanent part of a USMS registration number ('384x-abcde' -> 'abcde')."""
    return reg_num.strip().rsplit("-", 1)[-1]


class SwimmerDAO(BaseDAO[Swimmer]):
    """DAO for Swimmer entities."""

    table_name = "swimmers"
    model_class = Swimmer

    def __init__(self, client: Client | None = None):
        super().__init__(client)

    def iter_roster(self, page_size: int = 1000) -> Iterator[Swimmer]:
        """Yield every swimmer on the roster, in ID order.

        Args:
            page_size: Rows fetched per request
        """
        offset = 0
        while True:
            result = (
                self.table.select("*")
                .order("id")
                .range(offset, offset + page_size - 1)
                .execute()
            )
            for row in result.data:
                yield self._to_model(row)
            if len(result.data) < page_size:
                return
            offset += page_size

    def find_by_usms_id(self, reg_num: str) -> Swimmer | None:
        """Find a swimmer by the USMS id embedded in their registration number."""
        result = (
            self.table.select("*")
            .like("reg_num", f"38%-{usms_swimmer_id(reg_num)}")
            .execute()
        )

        if not result.data:
            return None

        return self._to_model(result.data[0])

    def update_sector(self, swimmer_id: int, sector: Sector, reason: str | None) -> int:
        """Store a swimmer's sector and the reason for it.

        Returns:
            Number of rows updated (0 if the swimmer no longer exists)
        """
        result = (
            self.table.update({"sector": sector.value, "sector_reason": reason})
            .eq("id", swimmer_id)
            .execute()
        )
        return len(result.data)

    def set_age_group2(self, swimmer_id: int, age_group: str) -> int:
        result = self.table.update({"age_group2": age_group}).eq("id", swimmer_id).execute()
        return len(result.data)

    def add_swimmer_if_necessary(
        self,
        first_name: str,
        middle_initial: str,
        last_name: str,
        gender: str,
        reg_num: str,
        age: int,
        age_group: str,
        team: str = "",
        source: str = "",
    ) -> int:
        """Look up a swimmer by registration number, adding them if not found.

        When the swimmer exists, the supplied details are compared with the
        roster and any mismatch is logged as a warning. A second, adjacent
        age group is recorded the first time one is seen.

        Args:
            source: Where the details came from (file and line), for warnings

        Returns:
            The swimmer's ID

        Raises:
            ValueError: If the gender is not recognized
            IdentityResolutionError: If a newly inserted swimmer has no ID
        """
        canonical = canonical_gender(gender)
        existing = self.find_by_usms_id(reg_num)

        if existing is None:
            swimmer = Swimmer(
                first_name=first_name,
                middle_initial=middle_initial,
                last_name=last_name,
                gender=canonical,
                reg_num=reg_num,
                age1=age,
                age2=age,
                age_group1=age_group,
                registered_team_initials=team,
            )
            created = self.create(swimmer)
            logger.debug("swimmer_added", swimmer_id=created.id, reg_num=reg_num)
            return created.id

        self._reconcile_age_group(existing, age_group, reg_num, source)

        mismatches = {
            "first_name": (first_name, existing.first_name),
            "last_name": (last_name, existing.last_name),
            "gender": (canonical.value, existing.gender.value),
        }
        if middle_initial:
            mismatches["middle_initial"] = (middle_initial, existing.middle_initial)
        if team:
            mismatches["team"] = (team, existing.registered_team_initials)

        for field, (given, stored) in mismatches.items():
            if given.lower() != (stored or "").lower():
                logger.warning(
                    "swimmer_field_mismatch",
                    field=field,
                    given=given,
                    stored=stored,
                    reg_num=reg_num,
                    source=source,
                )

        return existing.id

    def _reconcile_age_group(
        self, existing: Swimmer, age_group: str, reg_num: str, source: str
    ) -> None:
        if age_group == existing.age_group1:
            return

        if existing.age_group2:
            if age_group != existing.age_group2:
                logger.warning(
                    "swimmer_age_group_mismatch",
                    given=age_group,
                    age_group1=existing.age_group1,
                    age_group2=existing.age_group2,
                    reg_num=reg_num,
                    source=source,
                )
            return

        if existing.age_group1 and age_groups_close(age_group, existing.age_group1):
            self.set_age_group2(existing.id, age_group)
        else:
            logger.warning(
                "swimmer_age_group_not_adjacent",
                given=age_group,
                age_group1=existing.age_group1,
                reg_num=reg_num,
                source=source,
            )
