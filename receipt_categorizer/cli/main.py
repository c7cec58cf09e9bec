#!/usr/bin/env python3
"""
Main CLI entrypoint for receipt categorizer.
"""

import argparse
import os
import sys
from pathlib import Path

from receipt_categorizer.core.categorization import (Categorizer, categories_from_rules,
                                                     known_merchants_from_rules, load_rules)
from receipt_categorizer.core.evaluation import evaluate_samples
from receipt_categorizer.core.logger import setup_logging
from receipt_categorizer.core.ocr import configure_tesseract
from receipt_categorizer.core.processor import ReceiptProcessor
from receipt_categorizer.core.reporting import read_labeled_csv, write_csv
from receipt_categorizer.core.utils import money_fmt


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="OCR receipts, extract merchant/total/date and suggest a spending category",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scan every receipt in ./incoming and write ./output/receipts.csv
  receipt-categorizer scan

  # Check which category a merchant lands in, with the scores behind it
  receipt-categorizer categorize --merchant "WALMART SUPERCENTER" --explain

  # Measure keyword accuracy against hand-labeled transactions
  receipt-categorizer evaluate labeled.csv
        """
    )
    parser.add_argument("--rules",
                        help="rules.json with categories and known merchants "
                             "(default: ./rules.json, or RECEIPT_RULES env var)")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show detailed parsing and scoring information for debugging")

    sub = parser.add_subparsers(dest="command", required=True)

    scan = sub.add_parser("scan", help="Process a folder of receipt images/PDFs")
    scan.add_argument("--incoming", default="./incoming",
                      help="Folder with receipts (default: ./incoming)")
    scan.add_argument("--output", default="./output/receipts.csv",
                      help="CSV report path (default: ./output/receipts.csv)")
    scan.add_argument("--lang",
                      help="Tesseract language (default: eng, or OCR_LANG env var)")
    scan.add_argument("--tesseract-cmd",
                      help="Path to the tesseract binary (or TESSERACT_CMD env var)")

    cat = sub.add_parser("categorize", help="Categorize a single merchant/description")
    cat.add_argument("--merchant", default="", help="Merchant name")
    cat.add_argument("--description", default="", help="Free-text description")
    cat.add_argument("--explain", action="store_true", help="Show the top category scores")

    ev = sub.add_parser("evaluate", help="Report accuracy against a labeled CSV")
    ev.add_argument("labels", help="CSV with merchant, description and category columns")

    return parser


def cmd_scan(args, categories, known_merchants) -> int:
    lang = args.lang or os.getenv("OCR_LANG", "eng")
    configure_tesseract(args.tesseract_cmd or os.getenv("TESSERACT_CMD"))

    processor = ReceiptProcessor(categories, known_merchants, lang=lang, verbose=args.verbose)
    incoming = Path(args.incoming)
    files = processor.discover_files(incoming)
    print(f"[INFO] Found {len(files)} file(s) in {incoming}")
    if not files:
        print("No receipt files found.")
        return 0

    drafts = processor.process_all(files)
    for d in drafts:
        print(f"  {d.source_file}: {d.date or '(no date)'} | {d.merchant or '(no merchant)'} | "
              f"{money_fmt(d.amount) or '(no amount)'} | {d.category or '(uncategorized)'} "
              f"({d.note})")

    out_csv = Path(args.output)
    write_csv(drafts, out_csv)
    print(f"[OK] Wrote {out_csv} ({len(drafts)}/{len(files)} receipt(s))")
    return 0


def cmd_categorize(args, categories) -> int:
    categorizer = Categorizer(categories)
    category = categorizer.categorize(args.description, args.merchant)
    print(category.name if category else "(none)")
    if args.explain:
        for scored in categorizer.rank(args.description, args.merchant)[:5]:
            print(f"  {scored.score:>5}  {scored.category.name}")
    return 0


def cmd_evaluate(args, categories) -> int:
    samples = read_labeled_csv(Path(args.labels))
    report = evaluate_samples(Categorizer(categories), samples)
    print(f"[INFO] Accuracy: {report.accuracy:.1f}% ({report.correct}/{report.total})")
    for sample, predicted in report.mismatches:
        print(f"  {sample.merchant or sample.description!r}: expected {sample.label}, "
              f"got {predicted.name if predicted else '(none)'}")
    return 0


def main(argv=None):
    """Main CLI entrypoint."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    rules_path = Path(args.rules or os.getenv("RECEIPT_RULES", "./rules.json"))
    try:
        rules = load_rules(rules_path)
        categories = categories_from_rules(rules)
        known_merchants = known_merchants_from_rules(rules)
    except (ValueError, OSError) as e:
        # json.JSONDecodeError is a ValueError
        print(f"[ERROR] Invalid rules file {rules_path}: {e}")
        return 1

    if not rules:
        print(f"[INFO] No rules at {rules_path}; using built-in categories")
    else:
        print(f"[INFO] Loaded {len(categories)} categories from {rules_path}")

    try:
        if args.command == "scan":
            return cmd_scan(args, categories, known_merchants)
        if args.command == "categorize":
            return cmd_categorize(args, categories)
        return cmd_evaluate(args, categories)
    except (ValueError, OSError) as e:
        print(f"[ERROR] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
