import pytest

from receipt_categorizer.core.similarity import distance, similarity


class TestDistance:
    """Tests for edit distance."""

    def test_classic_example(self):
        """kitten -> sitting takes two substitutions and one insertion."""
        assert distance("kitten", "sitting") == 3

    @pytest.mark.parametrize("s", ["", "a", "walmart", "trader joe's"])
    def test_identical_strings(self, s):
        """A string is zero edits from itself."""
        assert distance(s, s) == 0

    @pytest.mark.parametrize("a,b", [("walmart", "wal-mart"), ("shell", "chevron"), ("", "abc")])
    def test_symmetric(self, a, b):
        """Distance does not depend on argument order."""
        assert distance(a, b) == distance(b, a)

    def test_empty_to_string(self):
        """From the empty string every character is an insertion."""
        assert distance("", "costco") == 6
        assert distance("costco", "") == 6

    def test_single_substitution(self):
        """One differing character costs one edit."""
        assert distance("kroger", "krogar") == 1


class TestSimilarity:
    """Tests for the similarity ratio."""

    def test_identical_is_one(self):
        """Identical strings are fully similar."""
        assert similarity("starbucks", "starbucks") == 1

    def test_both_empty_is_one(self):
        """Two empty strings need no edits."""
        assert similarity("", "") == 1

    def test_one_empty_is_zero(self):
        """Against the empty string nothing is shared."""
        assert similarity("", "shell") == 0

    def test_ocr_hyphen(self):
        """An inserted hyphen costs one edit over the longer length."""
        assert similarity("wal-mart", "walmart") == pytest.approx(1 - 1 / 8)

    def test_range(self):
        """Completely different strings land at zero, never below."""
        assert similarity("abc", "xyz") == 0

    def test_normalized_by_longest(self):
        """The ratio divides the edit distance by the longer length."""
        assert similarity("kitten", "sitting") == pytest.approx(1 - 3 / 7)
        assert similarity("starbux", "starbucks") == pytest.approx(1 - 3 / 9)
