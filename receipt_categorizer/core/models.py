"""
Data models for receipt parsing and categorization.
"""

import datetime as dt
from dataclasses import dataclass, asdict, field
from typing import Optional, Tuple, List


@dataclass(frozen=True)
class Category:
    """A spending category with the keywords used to recognize it."""
    id: str
    name: str
    keywords: Tuple[str, ...] = ()
    icon: Optional[str] = None
    color: Optional[str] = None


@dataclass(frozen=True)
class ParsedReceipt:
    """
    Best-effort structured view of a receipt's OCR text.

    Every field except raw_text may be None (or empty for items) when the
    corresponding heuristic found nothing.
    """
    raw_text: str
    merchant: Optional[str] = None
    total: Optional[float] = None
    date: Optional[dt.date] = None
    items: Tuple[str, ...] = ()


@dataclass
class ScoredCategory:
    """A category together with the points it accumulated for one transaction."""
    category: Category
    score: float = 0


@dataclass(frozen=True)
class OCRResult:
    """Recognized text plus the engine's mean confidence (0-100)."""
    text: str
    confidence: float


@dataclass
class DraftTransaction:
    """Pre-filled transaction produced from a receipt, ready for review."""
    date: Optional[str]
    merchant: Optional[str]
    amount: Optional[float]
    description: str
    category_id: Optional[str]
    category: Optional[str]
    confidence: float
    raw_text: str
    source_file: str = ""
    sha1: str = ""

    @property
    def note(self) -> str:
        return f"Extracted with {round(self.confidence)}% confidence"

    def to_dict(self):
        """Convert to dictionary."""
        return asdict(self)


@dataclass(frozen=True)
class LabeledSample:
    """A transaction with its known-correct category label."""
    merchant: str
    description: str
    label: str


@dataclass
class EvaluationReport:
    """Outcome of running the categorizer over labeled samples."""
    total: int
    correct: int
    accuracy: float
    mismatches: List[Tuple[LabeledSample, Optional[Category]]] = field(default_factory=list)
