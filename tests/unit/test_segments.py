"""Unit tests for candidate segment search."""

from __future__ import annotations

from transcriptmcp.lexical.segments import CandidateSegmentFinder
from transcriptmcp.lexical.segments import normalize_meridiem


class TestNormalizeMeridiem:
    def test_dotted_forms_collapse(self):
        assert normalize_meridiem("at 3 p.m.") == "at 3 pm"
        assert normalize_meridiem("at 8 A.M.") == "at 8 am"

    def test_plain_forms_untouched(self):
        assert normalize_meridiem("at 3 pm") == "at 3 pm"


class TestCandidateSegmentFinder:
    def test_overlapping_candidates_longest_first(self):
        finder = CandidateSegmentFinder()
        text = "judge may smith at address involving march and 23rd st on May 10th 2018 at 3 p.m."
        candidates = finder.find(text)
        assert candidates == [
            "may smith at address involving march and 23rd st on may 10th 2018 at 3 pm",
            "march and 23rd st on may 10th 2018 at 3 pm",
            "may 10th 2018 at 3 pm",
        ]

    def test_candidate_ends_at_first_meridiem(self):
        finder = CandidateSegmentFinder()
        candidates = finder.find("january 19th 2018 at 3 pm or 4 pm")
        assert candidates == ["january 19th 2018 at 3 pm"]

    def test_month_followed_by_comma(self):
        finder = CandidateSegmentFinder()
        candidates = finder.find("hearing is December, 13th 2021.At one PM before")
        assert candidates == ["december, 13th 2021.at one pm"]

    def test_no_month_means_no_candidates(self):
        finder = CandidateSegmentFinder()
        assert finder.find("next tuesday at 3 pm") == []

    def test_no_meridiem_means_no_candidates(self):
        finder = CandidateSegmentFinder()
        assert finder.find("january 19th 2018 at 15:00") == []

    def test_month_must_start_a_word(self):
        finder = CandidateSegmentFinder()
        assert finder.find("dismay at 3 pm") == []

    def test_meridiem_must_end_a_word(self):
        finder = CandidateSegmentFinder()
        assert finder.find("june 3rd at the amphitheater") == []

    def test_custom_month_names(self):
        finder = CandidateSegmentFinder(
            (
                "Enero",
                "Febrero",
                "Marzo",
                "Abril",
                "Mayo",
                "Junio",
                "Julio",
                "Agosto",
                "Septiembre",
                "Octubre",
                "Noviembre",
                "Diciembre",
            )
        )
        assert finder.month_names[0] == "enero"
        assert finder.find("el enero 5th at 3 pm") == ["enero 5th at 3 pm"]
