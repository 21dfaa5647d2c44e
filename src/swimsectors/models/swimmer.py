"""Swimmer roster model and masters age groups."""

from enum import StrEnum

from pydantic import BaseModel, field_validator


class Gender(StrEnum):
    """Swimmer gender as recorded on the roster."""

    MALE = "M"
    FEMALE = "F"


class NqtGender(StrEnum):
    """Gender section headings used by the National Qualifying Time sheets."""

    WOMEN = "WOMEN"
    MEN = "MEN"


# Column order of the published NQT sheets
MASTERS_AGE_GROUPS: tuple[str, ...] = (
    "18-24",
    "25-29",
    "30-34",
    "35-39",
    "40-44",
    "45-49",
    "50-54",
    "55-59",
    "60-64",
    "65-69",
    "70-74",
    "75-79",
    "80-84",
)

_GENDER_ALIASES: dict[str, Gender] = {
    "m": Gender.MALE,
    "male": Gender.MALE,
    "men": Gender.MALE,
    "man": Gender.MALE,
    "f": Gender.FEMALE,
    "female": Gender.FEMALE,
    "w": Gender.FEMALE,
    "women": Gender.FEMALE,
    "woman": Gender.FEMALE,
}


def canonical_gender(value: str) -> Gender:
    """Map a free-form gender value (M, Male, W, Women, ...) to a Gender.

    Raises:
        ValueError: If the value is not a recognized gender
    """
    key = value.strip().lower()
    if key not in _GENDER_ALIASES:
        raise ValueError(f"Invalid gender: '{value}'. Expected M or F")
    return _GENDER_ALIASES[key]


def age_groups_close(age_group_a: str, age_group_b: str) -> bool:
    """True if two age groups are the same or neighbours ("55-59" and "60-64").

    A swimmer can age up once during a season, so their results may span two
    adjacent age groups.
    """
    try:
        low_a = int(age_group_a.split("-")[0])
        low_b = int(age_group_b.split("-")[0])
    except ValueError:
        return False
    if low_a == low_b:
        return True
    # 18-24 is the only group wider than five years
    low, high = sorted((low_a, low_b))
    if low == 18:
        return high == 25
    return high - low == 5


class Swimmer(BaseModel):
    """A masters swimmer as stored in the season roster."""

    id: int | None = None
    first_name: str
    middle_initial: str | None = ""
    last_name: str
    gender: Gender
    reg_num: str | None = None
    age1: int | None = None
    age2: int | None = None
    age_group1: str | None = None
    age_group2: str | None = None
    registered_team_initials: str | None = ""
    sector: str | None = None
    sector_reason: str | None = None

    @field_validator("gender", mode="before")
    @classmethod
    def coerce_roster_gender(cls, v: object) -> Gender:
        """Recognized spellings of F/M are kept; anything else is ranked as MEN."""
        if isinstance(v, Gender):
            return v
        if isinstance(v, str) and v.strip().lower() in _GENDER_ALIASES:
            return _GENDER_ALIASES[v.strip().lower()]
        return Gender.MALE

    @property
    def nqt_gender(self) -> NqtGender:
        """Gender section used to look up this swimmer's NQTs."""
        return NqtGender.WOMEN if self.gender == Gender.FEMALE else NqtGender.MEN

    def __str__(self) -> str:
        return f"{self.first_name} {self.last_name}"
