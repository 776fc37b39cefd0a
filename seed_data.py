"""
Seed script - populates the family database with a sample family.

This script:
1. Removes the existing family database
2. Creates a three-generation family with spouse, parent, child and
   sibling relationships

Run this script to start with a clean slate:
    python seed_data.py
"""

from pathlib import Path

from family_kinship.cli import seed_sample_family
from family_kinship.config import settings
from family_kinship.graph.family_store import FamilyStore


def clear_database():
    """Remove the family database file to start fresh."""
    db = Path(settings.database.family_db_path)
    if db.exists():
        db.unlink()
        print(f"✅ Deleted: {db}")
    else:
        print(f"⚠️  Not found: {db}")


def main():
    print("=" * 80)
    print("SEEDING SAMPLE FAMILY DATA")
    print("=" * 80)

    clear_database()
    store = FamilyStore()
    ids = seed_sample_family(store)

    for name, person_id in ids.items():
        print(f"  👤 {person_id:>3}  {name}")

    result = store.find_kinship(ids["Wang Xiaoming"], ids["Wang Wei"], "en")
    print(f"\nWang Wei is Wang Xiaoming's {result.term}")
    print(f"\n✅ Seeded {len(ids)} persons into {store.db_path}")


if __name__ == "__main__":
    main()
