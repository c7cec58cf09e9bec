"""
Utility functions and constants for receipt processing.
"""

import hashlib
import re
from pathlib import Path
from typing import Optional

# File type constants
IMAGE_EXTS = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp"}
PDF_EXTS = {".pdf"}

# A currency amount with exactly two decimals, optionally prefixed with $.
# A minus sign counts only when attached to the number and not part of a dash run.
AMOUNT_PATTERN = (
    r"(?<![\d\-])(?<!\d\.)"
    r"(?:-(?=\$?\d))?\$?[^\S\n]?(?:\d{1,3}(?:,\d{3})+|\d+)\.\d{2}(?![\d])"
)

# Labeled total: the label and the amount must sit on the same line,
# optionally separated by a dash or dot leader ("TOTAL ---- 6.49")
TOTAL_LABEL_PATTERN = (
    r"\b(?:total|amount[^\S\n]+due|balance[^\S\n]+due)\b"
    r"[^\S\n]*[:#=]?[^\S\n]*(?:[-.]+[^\S\n]*)?(?:usd[^\S\n]*)?"
    r"(" + AMOUNT_PATTERN + r")"
)

# Pattern constants for parsing, tried together so the leftmost date wins
DATE_PATTERNS = [
    r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b",            # YYYY-MM-DD or YYYY/MM/DD
    r"\b(\d{1,2})[-/](\d{1,2})[-/](\d{2,4})\b",          # MM/DD/YYYY or DD/MM/YYYY (heuristic later)
]


def slugify(s: str) -> str:
    """Convert string to filesystem-safe slug."""
    return re.sub(r"[^a-z0-9]+", "-", s.lower()).strip("-")


def normalize_amount(s: str) -> Optional[float]:
    """Normalize amount string to float."""
    if not s:
        return None
    s = s.replace(",", "").replace("$", "").replace(" ", "")
    try:
        return float(s)
    except ValueError:
        return None


def title_words(s: str) -> str:
    """Capitalize the first letter of each space-separated word."""
    return " ".join(w[:1].upper() + w[1:] for w in s.split())


def sha1_file(path: Path) -> str:
    """Calculate SHA1 hash of file."""
    h = hashlib.sha1()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(65536), b""):
            h.update(chunk)
    return h.hexdigest()


def money_fmt(v: Optional[float]) -> str:
    """Format amount as currency."""
    return f"${v:,.2f}" if v is not None else ""
