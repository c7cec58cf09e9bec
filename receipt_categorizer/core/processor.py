"""
Main receipt processing orchestration: OCR, parse, categorize.
"""

from pathlib import Path
from typing import Iterable, List, Optional

from .categorization import Categorizer
from .models import Category, DraftTransaction, ParsedReceipt
from .ocr import ExtractionError, extract_text
from .parsers import ReceiptParser
from .reference import DEFAULT_CATEGORIES, DEFAULT_KNOWN_MERCHANTS
from .utils import IMAGE_EXTS, PDF_EXTS, money_fmt, sha1_file

# Number of item lines folded into the draft description
DESCRIPTION_ITEMS = 2


class ReceiptProcessor:
    """Turns receipt files into categorized draft transactions."""

    def __init__(self, categories: Iterable[Category] = DEFAULT_CATEGORIES,
                 known_merchants: Iterable[str] = DEFAULT_KNOWN_MERCHANTS,
                 lang: str = "eng",
                 verbose: bool = False):
        """
        Initialize receipt processor.

        Args:
            categories: Ordered categories to score against (should include "Discretionary")
            known_merchants: Brand names recognized in receipt headers
            lang: Tesseract language code
            verbose: Whether to show verbose debugging output
        """
        self.parser = ReceiptParser(known_merchants)
        self.categorizer = Categorizer(categories)
        self.lang = lang
        self.verbose = verbose

        if self.categorizer.fallback is None:
            print(f"[WARN] No '{self.categorizer.fallback_name}' category defined; "
                  f"low-scoring receipts will stay uncategorized")

    @staticmethod
    def discover_files(directory: Path) -> List[Path]:
        """List supported receipt files in a directory, sorted by name."""
        if not directory.is_dir():
            return []
        return sorted(
            (p for p in directory.iterdir() if p.suffix.lower() in IMAGE_EXTS.union(PDF_EXTS)),
            key=lambda p: p.name,
        )

    def process_text(self, text: str, confidence: float,
                     source_file: str = "", sha1: str = "") -> DraftTransaction:
        """Parse and categorize already-recognized receipt text."""
        parsed = self.parser.parse(text)
        category = self.categorizer.categorize(parsed.raw_text, parsed.merchant or "")
        draft = DraftTransaction(
            date=parsed.date.isoformat() if parsed.date else None,
            merchant=parsed.merchant,
            amount=parsed.total,
            description=", ".join(parsed.items[:DESCRIPTION_ITEMS]),
            category_id=category.id if category else None,
            category=category.name if category else None,
            confidence=confidence,
            raw_text=parsed.raw_text,
            source_file=source_file,
            sha1=sha1,
        )
        if self.verbose:
            self._print_debug(parsed, draft)
        return draft

    def process_file(self, path: Path) -> DraftTransaction:
        """
        Process a single receipt file.

        Raises:
            ExtractionError: if the file cannot be OCR'd
        """
        print(f"[INFO] Processing {path.name}")
        result = extract_text(path, self.lang)
        return self.process_text(result.text, result.confidence,
                                 source_file=path.name, sha1=sha1_file(path))

    def process_all(self, files: Iterable[Path]) -> List[DraftTransaction]:
        """Process receipt files, skipping (and reporting) the ones OCR fails on."""
        drafts = []
        for file_path in files:
            try:
                drafts.append(self.process_file(file_path))
            except ExtractionError as e:
                print(f"[ERROR] Failed {file_path.name}: {e}")
        return drafts

    def rank_categories(self, draft: DraftTransaction, limit: Optional[int] = None):
        """Scores behind a draft's category choice, best first."""
        ranked = self.categorizer.rank(draft.raw_text, draft.merchant or "")
        return ranked[:limit] if limit else ranked

    def _print_debug(self, parsed: ParsedReceipt, draft: DraftTransaction):
        print(f"  [DEBUG] Merchant: '{parsed.merchant or '(none)'}'")
        print(f"  [DEBUG] Category: {draft.category or '(none)'}")
        print(f"  [DEBUG] Date: {draft.date or '(none)'}")
        print(f"  [DEBUG] Amount: {money_fmt(parsed.total) or '(none)'}")
        print(f"  [DEBUG] {draft.note}")
        if parsed.total is None:
            print(f"  [WARN] Could not extract amount. Check OCR quality.")
        if not parsed.merchant:
            print(f"  [DEBUG] First 5 lines of OCR text:")
            for i, line in enumerate(parsed.raw_text.splitlines()[:5], 1):
                print(f"    {i}: {line[:80]}")
