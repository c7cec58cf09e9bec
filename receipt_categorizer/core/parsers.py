"""
Parsers for extracting information from receipt text.

Every parser is best-effort: when a heuristic finds nothing the field is left
as None instead of raising.
"""

import re
import datetime as dt
from enum import Enum
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from .logger import get_logger
from .models import ParsedReceipt
from .reference import DEFAULT_KNOWN_MERCHANTS
from .utils import AMOUNT_PATTERN, DATE_PATTERNS, TOTAL_LABEL_PATTERN, normalize_amount, title_words

logger = get_logger(__name__)

MIN_MERCHANT_LEN = 3
MAX_MERCHANT_LEN = 50
MAX_ITEMS = 9

_TOTAL_LABEL_RE = re.compile(TOTAL_LABEL_PATTERN, re.IGNORECASE)
_AMOUNT_RE = re.compile(AMOUNT_PATTERN)
_DATE_RE = re.compile("|".join(DATE_PATTERNS))
_NAME_LINE_RE = re.compile(r"[A-Za-z\s&'-]+")


class SkipReason(str, Enum):
    """Why a line was rejected as a merchant candidate."""
    TOO_SHORT = "too-short"
    TOO_LONG = "too-long"
    FEEDBACK = "feedback"
    URL = "url"
    DIGITS_ONLY = "digits-only"
    RECEIPT_LABEL = "receipt-label"
    STORE_NUMBER = "store-number"
    SEPARATOR = "separator"


# Evaluated in order; the first rule that matches names the skip reason
SKIP_RULES: Tuple[Tuple[SkipReason, Callable[[str], object]], ...] = (
    (SkipReason.TOO_SHORT, lambda ln: len(ln) < MIN_MERCHANT_LEN),
    (SkipReason.TOO_LONG, lambda ln: len(ln) > MAX_MERCHANT_LEN),
    (SkipReason.FEEDBACK, re.compile(r"\bgive\b.*\bfeedback\b|\bsurvey\b", re.IGNORECASE).search),
    (SkipReason.URL, re.compile(r"www\.|http", re.IGNORECASE).search),
    (SkipReason.DIGITS_ONLY, re.compile(r"[\d\s]+").fullmatch),
    (SkipReason.RECEIPT_LABEL, re.compile(r"\breceipt\b|\bthank\s*you\b", re.IGNORECASE).search),
    (SkipReason.STORE_NUMBER, re.compile(r"\bstore\s*#", re.IGNORECASE).search),
    (SkipReason.SEPARATOR, re.compile(r"\*+|-+|=+").fullmatch),
)


def skip_reason(line: str) -> Optional[SkipReason]:
    """Return the first skip rule a (trimmed) line trips, or None if it is a candidate."""
    for reason, matches in SKIP_RULES:
        if matches(line):
            return reason
    return None


def split_lines(text: str) -> List[str]:
    """Trimmed, non-blank lines of the text in original order."""
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def _positive_amount(s: str) -> Optional[float]:
    val = normalize_amount(s)
    if val is not None and val > 0:
        return val
    return None


def parse_total(text: str) -> Optional[float]:
    """
    Extract the transaction total from receipt text.

    Tries, in order:
      1. an amount right after a "total", "amount due" or "balance due" label
      2. the first amount on any line mentioning "total"
      3. the largest amount anywhere in the text
    Zero and negative amounts are never accepted.
    """
    for m in _TOTAL_LABEL_RE.finditer(text):
        val = _positive_amount(m.group(1))
        if val is not None:
            logger.debug("total %.2f from labeled line", val)
            return val

    for line in text.splitlines():
        if "total" not in line.lower():
            continue
        for m in _AMOUNT_RE.finditer(line):
            val = _positive_amount(m.group(0))
            if val is not None:
                logger.debug("total %.2f from line mentioning total", val)
                return val

    candidates = [v for v in (_positive_amount(m.group(0)) for m in _AMOUNT_RE.finditer(text))
                  if v is not None]
    if candidates:
        logger.debug("total %.2f as largest of %d amounts", max(candidates), len(candidates))
        return max(candidates)
    return None


def parse_date(text: str) -> Optional[dt.date]:
    """Extract the first date-looking token; None if absent or not a real calendar date."""
    m = _DATE_RE.search(text)
    if not m:
        return None
    g = m.groups()
    try:
        if g[0] is not None:
            y, mo, d = int(g[0]), int(g[1]), int(g[2])
        else:
            mo, d, y = int(g[3]), int(g[4]), int(g[5])
            if y < 100:  # YY -> 20YY
                y += 2000
            # If looks like DD/MM, swap if mo > 12
            if mo > 12 and d <= 12:
                mo, d = d, mo
        return dt.date(y, mo, d)
    except ValueError:
        logger.debug("discarding invalid date %r", m.group(0))
        return None


def parse_merchant(lines: Sequence[str],
                   known_merchants: Iterable[str] = DEFAULT_KNOWN_MERCHANTS) -> Optional[str]:
    """
    Pick the merchant name from trimmed, non-blank receipt lines.

    Lines are examined top to bottom. The first line that survives the skip
    rules wins, either as a known brand (title-cased) or verbatim when it is
    made only of letters, spaces, &, apostrophes and hyphens. Falls back to
    the first line.
    """
    if not lines:
        return None
    known = [name.lower() for name in known_merchants]

    for ln in lines:
        reason = skip_reason(ln)
        if reason is not None:
            logger.debug("skip %r (%s)", ln, reason.value)
            continue

        lower = ln.lower()
        for name in known:
            if name in lower:
                return title_words(name)

        if len(ln) > 3 and _NAME_LINE_RE.fullmatch(ln):
            return ln

    return lines[0]


class ReceiptParser:
    """Turns raw OCR text into a ParsedReceipt using a fixed merchant reference list."""

    def __init__(self, known_merchants: Iterable[str] = DEFAULT_KNOWN_MERCHANTS,
                 max_items: int = MAX_ITEMS):
        self.known_merchants = tuple(m.strip().lower() for m in known_merchants if m.strip())
        self.max_items = max_items

    def parse(self, text: str) -> ParsedReceipt:
        text = text or ""
        lines = split_lines(text)
        return ParsedReceipt(
            raw_text=text,
            merchant=parse_merchant(lines, self.known_merchants),
            total=parse_total(text),
            date=parse_date(text),
            items=tuple(lines[1:1 + self.max_items]),
        )


_default_parser = ReceiptParser()


def parse_receipt_text(text: str, parser: Optional[ReceiptParser] = None) -> ParsedReceipt:
    """Parse receipt text with the given parser, or one using the built-in merchant list."""
    return (parser or _default_parser).parse(text)
