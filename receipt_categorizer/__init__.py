"""
Receipt Categorizer

Turns OCR'd receipt text into merchant, total and date, and suggests a
spending category by keyword scoring.
"""

__version__ = "1.0.0"
__author__ = "Receipt Categorizer Contributors"

from receipt_categorizer.core.models import Category, ParsedReceipt, DraftTransaction
from receipt_categorizer.core.parsers import parse_receipt_text
from receipt_categorizer.core.categorization import categorize_transaction, categorize_batch

__all__ = [
    "Category",
    "ParsedReceipt",
    "DraftTransaction",
    "parse_receipt_text",
    "categorize_transaction",
    "categorize_batch",
]
