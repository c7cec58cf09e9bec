import csv

import pytest

from receipt_categorizer.core.models import DraftTransaction
from receipt_categorizer.core.reporting import CSV_FIELDS, read_labeled_csv, write_csv


def make_draft(**overrides):
    fields = dict(
        date="2024-01-15", merchant="Walmart", amount=6.49, description="Milk $3.99",
        category_id="groceries", category="Groceries", confidence=87.64,
        raw_text="WALMART\nTOTAL $6.49", source_file="r.png", sha1="abc",
    )
    fields.update(overrides)
    return DraftTransaction(**fields)


class TestWriteCsv:
    """Tests for the CSV report."""

    def test_rows(self, tmp_path):
        """One formatted row per draft, raw text left out."""
        out = tmp_path / "out" / "receipts.csv"

        write_csv([make_draft(), make_draft(amount=None, merchant=None, date=None)], out)

        with out.open(newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))
        assert list(rows[0].keys()) == CSV_FIELDS
        assert rows[0]["amount"] == "6.49"
        assert rows[0]["confidence"] == "87.6"
        assert rows[1]["amount"] == ""
        assert rows[1]["merchant"] == ""


class TestReadLabeledCsv:
    """Tests for reading labeled samples."""

    def test_read(self, tmp_path):
        """Rows become trimmed LabeledSamples; description is optional."""
        path = tmp_path / "labels.csv"
        path.write_text("merchant,category\n WALMART ,Groceries\nShell,transport\n", encoding="utf-8")

        samples = read_labeled_csv(path)

        assert [(s.merchant, s.description, s.label) for s in samples] == [
            ("WALMART", "", "Groceries"),
            ("Shell", "", "transport"),
        ]

    def test_missing_columns(self, tmp_path):
        """A file without the needed columns is rejected."""
        path = tmp_path / "labels.csv"
        path.write_text("vendor,label\nx,y\n", encoding="utf-8")

        with pytest.raises(ValueError):
            read_labeled_csv(path)
