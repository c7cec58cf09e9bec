import pytest

from receipt_categorizer.core.categorization import Categorizer
from receipt_categorizer.core.evaluation import calculate_accuracy, evaluate_samples
from receipt_categorizer.core.models import LabeledSample


class TestCalculateAccuracy:
    """Tests for calculate_accuracy."""

    def test_identical(self, categories):
        """Identical predictions score 100."""
        assert calculate_accuracy(list(categories), list(categories)) == 100

    def test_disjoint(self, categories):
        """Predictions that never agree score 0."""
        predictions = [categories[0], categories[1]]
        actual = [categories[2], categories[3]]

        assert calculate_accuracy(predictions, actual) == 0

    def test_partial(self, categories):
        """Half right is 50."""
        predictions = [categories[0], categories[1]]
        actual = [categories[0], categories[2]]

        assert calculate_accuracy(predictions, actual) == pytest.approx(50)

    def test_mismatched_lengths(self, categories):
        """Sequences of different length score 0."""
        assert calculate_accuracy(list(categories), list(categories[:2])) == 0

    def test_empty(self):
        """Nothing to compare scores 0."""
        assert calculate_accuracy([], []) == 0

    def test_none_never_counts(self, categories):
        """A missing prediction is never correct."""
        assert calculate_accuracy([None], [None]) == 0


class TestEvaluateSamples:
    """Tests for evaluate_samples."""

    def test_report(self, categories):
        """Labels resolve by name or id; wrong predictions are listed."""
        samples = [
            LabeledSample(merchant="WALMART", description="", label="Groceries"),
            LabeledSample(merchant="Starbucks", description="", label="dining"),
            LabeledSample(merchant="Shell", description="", label="Groceries"),
            LabeledSample(merchant="", description="", label="Discretionary"),
        ]

        report = evaluate_samples(Categorizer(categories), samples)

        assert report.total == 4
        assert report.correct == 3
        assert report.accuracy == pytest.approx(75)
        assert len(report.mismatches) == 1
        sample, predicted = report.mismatches[0]
        assert sample.merchant == "Shell"
        assert predicted.name == "Transportation"

    def test_unknown_label_is_a_miss(self, categories):
        """A label naming no category counts against accuracy."""
        samples = [LabeledSample(merchant="WALMART", description="", label="Pets")]

        report = evaluate_samples(Categorizer(categories), samples)

        assert report.correct == 0
        assert report.accuracy == 0
