"""
Keyword-scoring categorization of transactions, plus loading category rules.
"""

import json
import re
from pathlib import Path
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from .logger import get_logger
from .models import Category, ScoredCategory
from .reference import DEFAULT_CATEGORIES, DEFAULT_KNOWN_MERCHANTS, FALLBACK_CATEGORY_NAME
from .similarity import similarity
from .utils import slugify

logger = get_logger(__name__)

# Scores below this fall through to the fallback category
MIN_SCORE = 10

EXACT_MERCHANT_POINTS = 100
PREFIX_MERCHANT_POINTS = 80
WORD_MERCHANT_POINTS = 50
SUBSTRING_MERCHANT_POINTS = 30
ALL_WORDS_MERCHANT_POINTS = 40
WORD_DESCRIPTION_POINTS = 15
SUBSTRING_DESCRIPTION_POINTS = 8

# (minimum similarity, points), checked from the top; thresholds are exclusive
FUZZY_TIERS = ((0.8, 60), (0.7, 40), (0.6, 20))


def load_rules(path: Path) -> Dict:
    """Load categorization rules from JSON file."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        rules = json.load(f)
    if not isinstance(rules, dict):
        raise ValueError(f"{path.name} must contain a JSON object")
    return rules


def categories_from_rules(rules: Dict) -> Tuple[Category, ...]:
    """
    Build Category records from a rules dict.

    Args:
        rules: Rules dictionary with format:
            {
              "categories": [
                {"id": "groceries", "name": "Groceries", "keywords": ["walmart", "kroger"]},
                {"name": "Discretionary"}
              ]
            }
            `id` defaults to the slug of `name`.

    Returns:
        Categories in file order, or the built-in defaults when the key is absent.
    """
    raw = rules.get("categories")
    if raw is None:
        return DEFAULT_CATEGORIES
    if not isinstance(raw, list):
        raise ValueError("rules 'categories' must be a list")

    categories = []
    for entry in raw:
        if not isinstance(entry, dict) or not entry.get("name"):
            raise ValueError(f"invalid category entry (needs a name): {entry!r}")
        keywords = entry.get("keywords") or []
        if not isinstance(keywords, list):
            raise ValueError(f"keywords for {entry['name']!r} must be a list")
        categories.append(Category(
            id=str(entry.get("id") or slugify(entry["name"])),
            name=entry["name"],
            keywords=tuple(str(k) for k in keywords),
            icon=entry.get("icon"),
            color=entry.get("color"),
        ))
    return tuple(categories)


def known_merchants_from_rules(rules: Dict) -> Tuple[str, ...]:
    """Known merchant names from a rules dict, or the built-in list when absent."""
    raw = rules.get("known_merchants")
    if raw is None:
        return DEFAULT_KNOWN_MERCHANTS
    if not isinstance(raw, list):
        raise ValueError("rules 'known_merchants' must be a list")
    return tuple(str(m).lower() for m in raw if str(m).strip())


def score_keyword(keyword: str, merchant: str, description: str) -> int:
    """
    Points one keyword earns against normalized (lowercased, trimmed) merchant
    and description text. Rules accumulate; only exact and prefix merchant
    matches short-circuit the rest.
    """
    kw = keyword.lower().strip()
    if not kw:
        return 0

    if merchant == kw:
        return EXACT_MERCHANT_POINTS
    if merchant.startswith(kw):
        return PREFIX_MERCHANT_POINTS

    points = 0
    word_re = re.compile(r"\b" + re.escape(kw) + r"\b", re.IGNORECASE)

    if word_re.search(merchant):
        points += WORD_MERCHANT_POINTS
    elif kw in merchant:
        points += SUBSTRING_MERCHANT_POINTS

    words = kw.split()
    if len(words) > 1 and all(w in merchant for w in words):
        points += ALL_WORDS_MERCHANT_POINTS

    if word_re.search(description):
        points += WORD_DESCRIPTION_POINTS
    elif kw in description:
        points += SUBSTRING_DESCRIPTION_POINTS

    ratio = similarity(merchant, kw)
    for floor, tier_points in FUZZY_TIERS:
        if ratio > floor:
            points += tier_points
            break

    return points


class Categorizer:
    """
    Scores transactions against a fixed, ordered set of categories.

    Holds no state beyond the categories it was built with, so one instance
    can be shared freely.
    """

    def __init__(self, categories: Iterable[Category],
                 fallback_name: str = FALLBACK_CATEGORY_NAME,
                 min_score: int = MIN_SCORE):
        self.categories = tuple(categories)
        self.fallback_name = fallback_name
        self.min_score = min_score

    @property
    def fallback(self) -> Optional[Category]:
        """The category used when nothing scores high enough, if the set has one."""
        for c in self.categories:
            if c.name == self.fallback_name:
                return c
        return None

    def rank(self, description: Optional[str], merchant: Optional[str]) -> List[ScoredCategory]:
        """All categories with their scores, best first; ties keep input order."""
        merchant_norm = (merchant or "").lower().strip()
        desc_norm = (description or "").lower().strip()

        scored = [
            ScoredCategory(
                category=c,
                score=sum(score_keyword(kw, merchant_norm, desc_norm) for kw in c.keywords),
            )
            for c in self.categories
        ]
        # sorted() is stable, also with reverse=True
        return sorted(scored, key=lambda s: s.score, reverse=True)

    def categorize(self, description: Optional[str], merchant: Optional[str]) -> Optional[Category]:
        """Best-scoring category, the fallback below MIN_SCORE, or None without any input text."""
        if not description and not merchant:
            return None
        if not self.categories:
            return None

        ranked = self.rank(description, merchant)
        top = ranked[0]
        logger.debug("merchant %r: top %s=%s", merchant, top.category.name, top.score)
        if top.score >= self.min_score:
            return top.category
        return self.fallback

    def categorize_batch(self, transactions: Iterable[Mapping[str, Optional[str]]]) -> List[Optional[Category]]:
        """
        Categorize each {"description", "merchant"} mapping in order.

        Transactions without any text get the fallback category; the result is
        None only for those when the set has no fallback.
        """
        results = []
        for tx in transactions:
            category = self.categorize(tx.get("description"), tx.get("merchant"))
            results.append(category if category is not None else self.fallback)
        return results


def categorize_transaction(description: Optional[str], merchant: Optional[str],
                           categories: Sequence[Category]) -> Optional[Category]:
    """Categorize one transaction against the given categories."""
    return Categorizer(categories).categorize(description, merchant)


def categorize_batch(transactions: Iterable[Mapping[str, Optional[str]]],
                     categories: Sequence[Category]) -> List[Optional[Category]]:
    """Categorize many transactions, substituting the fallback for empty ones."""
    return Categorizer(categories).categorize_batch(transactions)
