"""
Offline accuracy checks for tuning category keyword lists.
"""

from typing import Iterable, Optional, Sequence

from .categorization import Categorizer
from .models import Category, EvaluationReport, LabeledSample


def calculate_accuracy(predictions: Sequence[Optional[Category]],
                       actual: Sequence[Optional[Category]]) -> float:
    """
    Percentage (0-100) of positions where the predicted category id equals the
    actual one. Sequences of different length, or empty ones, score 0.
    """
    if len(predictions) != len(actual) or not predictions:
        return 0.0
    correct = sum(
        1 for pred, act in zip(predictions, actual)
        if pred is not None and act is not None and pred.id == act.id
    )
    return correct / len(predictions) * 100


def _resolve_label(label: str, categories: Sequence[Category]) -> Optional[Category]:
    """Find a category by id, then by case-insensitive name."""
    for c in categories:
        if c.id == label:
            return c
    label_lower = label.lower()
    for c in categories:
        if c.name.lower() == label_lower:
            return c
    return None


def evaluate_samples(categorizer: Categorizer, samples: Iterable[LabeledSample]) -> EvaluationReport:
    """Run the categorizer over labeled samples and collect the misses."""
    samples = list(samples)
    predictions = categorizer.categorize_batch(
        {"description": s.description, "merchant": s.merchant} for s in samples
    )
    actual = [_resolve_label(s.label, categorizer.categories) for s in samples]

    mismatches = [
        (sample, pred)
        for sample, pred, act in zip(samples, predictions, actual)
        if act is None or pred is None or pred.id != act.id
    ]
    return EvaluationReport(
        total=len(samples),
        correct=len(samples) - len(mismatches),
        accuracy=calculate_accuracy(predictions, actual),
        mismatches=mismatches,
    )
