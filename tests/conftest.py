"""Shared pytest fixtures for all tests."""

import pytest

from receipt_categorizer.core.models import Category


@pytest.fixture
def categories():
    """A small ordered category set ending with the Discretionary fallback."""
    return (
        Category(id="groceries", name="Groceries", keywords=("walmart", "whole foods", "grocery")),
        Category(id="dining", name="Dining", keywords=("starbucks", "coffee", "restaurant")),
        Category(id="transport", name="Transportation", keywords=("shell", "gas station")),
        Category(id="discretionary", name="Discretionary", keywords=()),
    )


@pytest.fixture
def walmart_receipt():
    """OCR text of a grocery receipt with a cashback line larger than the total."""
    return (
        "WALMART SUPERCENTER\n"
        "Milk $3.99\n"
        "Bread $2.50\n"
        "Cashback $20.00\n"
        "TOTAL $6.49\n"
        "01/15/2024\n"
    )
