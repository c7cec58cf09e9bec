"""
CSV reporting for draft transactions and labeled evaluation data.
"""

import csv
from pathlib import Path
from typing import List

from .models import DraftTransaction, LabeledSample

CSV_FIELDS = ["date", "merchant", "amount", "category", "category_id",
              "description", "confidence", "source_file", "sha1"]


def write_csv(drafts: List[DraftTransaction], out_csv: Path):
    """Write draft transactions to CSV file."""
    out_csv.parent.mkdir(parents=True, exist_ok=True)
    with out_csv.open("w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=CSV_FIELDS)
        w.writeheader()
        for d in drafts:
            row = d.to_dict()
            row["amount"] = f"{d.amount:.2f}" if d.amount is not None else ""
            row["confidence"] = f"{d.confidence:.1f}"
            w.writerow({k: row.get(k) for k in CSV_FIELDS})


def read_labeled_csv(path: Path) -> List[LabeledSample]:
    """
    Read labeled transactions for evaluation.

    Expects a header with `merchant`, `description` and `category` columns;
    `category` may hold a category id or name.
    """
    with path.open("r", newline="", encoding="utf-8") as f:
        reader = csv.DictReader(f)
        missing = {"merchant", "category"} - set(reader.fieldnames or [])
        if missing:
            raise ValueError(f"{path.name} is missing column(s): {', '.join(sorted(missing))}")
        return [
            LabeledSample(
                merchant=(row.get("merchant") or "").strip(),
                description=(row.get("description") or "").strip(),
                label=(row.get("category") or "").strip(),
            )
            for row in reader
        ]
