"""
Script to initialize and populate the TariffSmart reference tables.

This script:
1. Creates all tables in the database
2. Loads countries with their April 9, 2025 tariff rates
3. Loads product categories, sample products and feature flags
4. Loads starter learning content (module, quiz, dictionary, agreements)

Usage:
    python scripts/seed_reference_data.py

To reset reference tables (delete reference rows and reload):
    python scripts/seed_reference_data.py --reset

To seed only if empty (preserves runtime data, e.g. toggled feature flags):
    python scripts/seed_reference_data.py --seed-if-empty
"""

import os
import sys
import argparse

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from dotenv import load_dotenv
load_dotenv()

from tariffsmart.web import create_app
from tariffsmart.web.db import db
from tariffsmart.web.db.models import (
    Country,
    DictionaryTerm,
    FeatureFlag,
    LearningModule,
    Product,
    ProductCategory,
    Quiz,
    TradeAgreement,
)
from tariffsmart.web.db.seed import reset_reference_data, seed_reference_data


def verify_data(app):
    """Print row counts for the reference tables."""
    with app.app_context():
        print("\n=== Data Verification ===")
        for Model in (Country, ProductCategory, Product, FeatureFlag,
                      LearningModule, Quiz, DictionaryTerm, TradeAgreement):
            print(f"{Model.__name__}: {Model.query.count()} rows")

        china = Country.get_by_name("China")
        if china:
            print(f"\nChina: {china.base_tariff}% base + {china.reciprocal_tariff}% reciprocal "
                  f"= {china.total_tariff}% ({china.impact_level})")


def main():
    parser = argparse.ArgumentParser(description="Populate TariffSmart reference tables")
    parser.add_argument("--reset", action="store_true", help="Delete reference rows before loading")
    parser.add_argument("--seed-if-empty", action="store_true",
                        help="Only seed if the database has no reference data")
    args = parser.parse_args()

    if args.reset and args.seed_if_empty:
        print("ERROR: Cannot use --reset and --seed-if-empty together")
        return

    print("=== TariffSmart Reference Data ===\n")

    app = create_app()

    with app.app_context():
        db.create_all()
        if args.reset:
            print("Deleting reference data...")
            reset_reference_data()

        counts = seed_reference_data(if_empty=args.seed_if_empty)
        if counts:
            for group, created in counts.items():
                print(f"  {group}: {created} created")
        else:
            print("  Database already seeded, nothing to do")

    verify_data(app)

    print("\n=== Done! ===")


if __name__ == "__main__":
    main()
