"""Tests for fuzzy name matching."""

from dartql.fuzzy import find_closest, find_closest_matches, levenshtein_distance
from dartql.query.lexer import VALID_FIELDS


class TestLevenshteinDistance:
    """Test edit distance."""

    def test_known_distances(self):
        assert levenshtein_distance("kitten", "sitting") == 3
        assert levenshtein_distance("priorty", "priority") == 1
        assert levenshtein_distance("statsu", "status") == 2

    def test_identical(self):
        assert levenshtein_distance("status", "status") == 0

    def test_empty_strings(self):
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3
        assert levenshtein_distance("", "") == 0

    def test_symmetric(self):
        assert levenshtein_distance("dartboard", "dashboard") == levenshtein_distance(
            "dashboard", "dartboard"
        )

    def test_case_sensitive(self):
        assert levenshtein_distance("Status", "status") == 1


class TestFindClosest:
    """Test find_closest."""

    def test_typo(self):
        assert find_closest("priorty", VALID_FIELDS) == "priority"

    def test_nothing_close(self):
        assert find_closest("zzzzz", VALID_FIELDS) is None

    def test_threshold(self):
        assert find_closest("prio", ["priority"]) is None
        assert find_closest("prio", ["priority"], threshold=4) == "priority"

    def test_tie_keeps_first_candidate(self):
        assert find_closest("ab", ["ac", "ad"]) == "ac"

    def test_closer_candidate_wins(self):
        assert find_closest("tag", ["title", "tags"]) == "tags"

    def test_no_candidates(self):
        assert find_closest("status", []) is None


class TestFindClosestMatches:
    """Test find_closest_matches."""

    def test_case_insensitive(self):
        assert find_closest_matches("TODO", ["Todo", "Done"]) == ["Todo"]

    def test_sorted_by_distance(self):
        assert find_closest_matches("Engineerin", ["Eng", "Engineers", "Engineering"]) == [
            "Engineering",
            "Engineers",
        ]

    def test_limit(self):
        assert find_closest_matches("a", ["b", "c", "d", "e"], limit=3) == ["b", "c", "d"]

    def test_no_matches(self):
        assert find_closest_matches("Marketing", ["Engineering"]) == []
