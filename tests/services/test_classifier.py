"""Tests for sector classification."""

import pytest

from swimsectors.models import (
    Course,
    NqtGender,
    QualifyingTimes,
    QualifyingTimeTable,
    Sector,
    SwimResult,
)
from swimsectors.services.classifier import alternative_nqt, classify

FREE_50 = 1
FREE_100 = 2
FLY_100 = 4


@pytest.fixture
def qualifying_times() -> QualifyingTimes:
    scy = QualifyingTimeTable(
        Course.SCY,
        {
            (FREE_50, "40-44", NqtGender.MEN): 3000,
            (FREE_100, "40-44", NqtGender.MEN): 6000,
            (FREE_50, "40-44", NqtGender.WOMEN): 3300,
        },
    )
    lcm = QualifyingTimeTable(
        Course.LCM,
        {
            (FLY_100, "40-44", NqtGender.MEN): 7000,
        },
    )
    return QualifyingTimes(2024, scy=scy, lcm=lcm)


def swim(duration: int, event_id: int = FREE_50, course: Course = Course.SCY, age_group: str = "40-44"):
    return SwimResult(course=course, event_id=event_id, age_group=age_group, duration=duration)


def men(results, qualifying_times, pct=120):
    return classify(7, NqtGender.MEN, results, qualifying_times, pct)


class TestAlternativeNqt:
    """Tests for the B-sector threshold."""

    def test_exact_percentage(self):
        """120% of 30.00 is 36.00."""
        assert alternative_nqt(3000, 120) == 3600

    def test_rounds_down_to_whole_hundredths(self):
        """Thresholds are floored so comparisons stay exact."""
        assert alternative_nqt(3333, 120) == 3999


class TestClassify:
    """Tests for the A/B/C/D rules."""

    def test_no_results_is_d(self, qualifying_times):
        """A swimmer with no pool swims is D with no evidence."""
        decision = men([], qualifying_times)

        assert decision.sector == Sector.D
        assert decision.swimmer_id == 7
        assert decision.duration is None
        assert decision.diff == 0

    def test_under_nqt_is_a(self, qualifying_times):
        """A swim under the NQT is A with diff = nqt - duration."""
        decision = men([swim(2950)], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.nqt_duration == 3000
        assert decision.diff == 50
        assert decision.additional_duration is None

    def test_equal_to_nqt_is_a(self, qualifying_times):
        """Matching the NQT exactly qualifies."""
        decision = men([swim(3000)], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.diff == 0

    def test_no_nqt_is_a(self, qualifying_times):
        """A swim in an event with no NQT qualifies."""
        decision = men([swim(99999, event_id=FREE_50, age_group="80-84")], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.nqt_duration is None
        assert decision.diff == 0

    def test_a_stops_at_first_qualifying_swim(self, qualifying_times):
        """The first qualifying swim is reported, later ones are ignored."""
        decision = men([swim(3500), swim(2990), swim(2800)], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.duration == 2990
        assert decision.diff == 10

    def test_b_and_c_scenario(self, qualifying_times):
        """NQT 30.00 at 120%: 35.00 is B by 1.00, 37.00 alone is C by 1.00."""
        b = men([swim(3500)], qualifying_times)
        assert b.sector == Sector.B
        assert b.additional_duration == 3600
        assert b.diff == 100

        c = men([swim(3700)], qualifying_times)
        assert c.sector == Sector.C
        assert c.additional_duration == 3600
        assert c.diff == 100

    def test_equal_to_alternative_is_b(self, qualifying_times):
        """Matching the alternative NQT exactly is B with diff 0."""
        decision = men([swim(3600)], qualifying_times)

        assert decision.sector == Sector.B
        assert decision.diff == 0

    def test_last_b_wins(self, qualifying_times):
        """Among several B swims the last one is reported."""
        decision = men([swim(3100), swim(6500, event_id=FREE_100), swim(3550)], qualifying_times)

        assert decision.sector == Sector.B
        assert decision.duration == 3550
        assert decision.diff == 50

    def test_b_beats_c_in_any_order(self, qualifying_times):
        """One B swim outranks any number of C swims, before or after it."""
        before = men([swim(3601), swim(3500)], qualifying_times)
        after = men([swim(3500), swim(3601)], qualifying_times)

        assert before.sector == Sector.B
        assert after.sector == Sector.B
        assert after.duration == 3500

    def test_c_keeps_closest_swim(self, qualifying_times):
        """The C swim nearest its alternative NQT is reported."""
        decision = men(
            [swim(4000), swim(7300, event_id=FREE_100), swim(3650), swim(3800)],
            qualifying_times,
        )

        assert decision.sector == Sector.C
        assert decision.duration == 3650
        assert decision.diff == 50

    def test_c_tie_keeps_first(self, qualifying_times):
        """On equal gaps the earlier C swim stays."""
        decision = men([swim(3700), swim(7300, event_id=FREE_100)], qualifying_times)

        assert decision.event_id == FREE_50
        assert decision.diff == 100

    def test_a_after_b_still_a(self, qualifying_times):
        """A qualifying swim later in the season overrides B."""
        decision = men([swim(3500), swim(2999)], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.duration == 2999

    def test_scm_uses_lcm_table(self, qualifying_times):
        """Short course meter swims are judged against the LCM table."""
        decision = men([swim(6900, event_id=FLY_100, course=Course.SCM)], qualifying_times)

        assert decision.sector == Sector.A
        assert decision.course == Course.SCM
        assert decision.nqt_duration == 7000

    def test_gender_selects_section(self, qualifying_times):
        """Women are judged against the WOMEN section."""
        decision = classify(8, NqtGender.WOMEN, [swim(3200)], qualifying_times, 120)

        assert decision.sector == Sector.A
        assert decision.nqt_duration == 3300

    def test_percentage_changes_outcome(self, qualifying_times):
        """A wider alternative turns C into B."""
        assert men([swim(3700)], qualifying_times, pct=120).sector == Sector.C
        assert men([swim(3700)], qualifying_times, pct=125).sector == Sector.B

    def test_invalid_percentage(self, qualifying_times):
        """A non-positive percentage is rejected."""
        with pytest.raises(ValueError, match="positive"):
            men([swim(3000)], qualifying_times, pct=0)

    def test_idempotent(self, qualifying_times):
        """Classifying the same swims twice gives the same decision."""
        results = [swim(4000), swim(3500), swim(3800)]

        assert men(results, qualifying_times) == men(results, qualifying_times)
