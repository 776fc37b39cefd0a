"""Command-line access to the family store and kinship engine.

Usage:
    python -m family_kinship.cli seed
    python -m family_kinship.cli persons
    python -m family_kinship.cli find 3 1 --lang both
"""

import argparse
import logging
import sys
from typing import Optional

from family_kinship.config import setup_logging
from family_kinship.errors import FamilyKinshipError
from family_kinship.graph.family_store import FamilyStore
from family_kinship.kinship.resolver import KinshipTermResolver
from family_kinship.models import Person

logger = logging.getLogger(__name__)


def seed_sample_family(store: FamilyStore) -> dict[str, int]:
    """Create a small three-generation family and return name -> id."""
    people = [
        Person(name="Wang Wei", chinese_name="王伟", gender="male"),
        Person(name="Li Na", chinese_name="李娜", gender="female"),
        Person(name="Wang Fang", chinese_name="王芳", gender="female"),
        Person(name="Wang Jun", chinese_name="王军", gender="male"),
        Person(name="Zhang Min", chinese_name="张敏", gender="female"),
        Person(name="Wang Xiaoming", chinese_name="王小明", gender="male"),
    ]
    ids = {p.name: store.add_person(p) for p in people}

    store.add_relationship(ids["Wang Wei"], ids["Li Na"], "spouse")
    for parent in ("Wang Wei", "Li Na"):
        store.add_relationship(ids[parent], ids["Wang Fang"], "parent")
        store.add_relationship(ids[parent], ids["Wang Jun"], "parent")
    store.add_relationship(ids["Wang Fang"], ids["Wang Jun"], "sibling")
    store.add_relationship(ids["Wang Jun"], ids["Zhang Min"], "spouse")
    store.add_relationship(ids["Wang Jun"], ids["Wang Xiaoming"], "parent")
    store.add_relationship(ids["Wang Xiaoming"], ids["Zhang Min"], "child")
    return ids


def _cmd_seed(store: FamilyStore, args) -> int:
    ids = seed_sample_family(store)
    print(f"Seeded {len(ids)} persons into {store.db_path}")
    for name, person_id in ids.items():
        print(f"  {person_id:>4}  {name}")
    return 0


def _cmd_persons(store: FamilyStore, args) -> int:
    for person in store.get_all():
        label = f"{person.name} ({person.chinese_name})" if person.chinese_name else person.name
        print(f"{person.id:>4}  {label}")
    return 0


def _cmd_find(store: FamilyStore, args) -> int:
    resolver = KinshipTermResolver(extended=args.extended)
    try:
        result = store.find_kinship(args.from_id, args.to_id, "en", resolver=resolver)
    except FamilyKinshipError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    names = {p.id: p.name for p in store.get_all()}
    print(f"Status: {result.status.value}")
    for step in result.path:
        print(f"  {names.get(step.source)} -> {names.get(step.target)}  "
              f"[{step.type.value}, {step.direction.value}]")

    languages = ("en", "zh") if args.lang == "both" else (args.lang,)
    for lang in languages:
        kinship = resolver.resolve(result.path, lang)
        print(f"{lang}: {kinship.term} - {kinship.description}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="family-kinship", description="Family tree kinship lookups")
    parser.add_argument("--db", help="SQLite database path (default from settings)")
    parser.add_argument("--log-level", default=None)
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("seed", help="Insert a sample family")
    sub.add_parser("persons", help="List persons")

    find = sub.add_parser("find", help="Name the relationship between two persons")
    find.add_argument("from_id", type=int)
    find.add_argument("to_id", type=int)
    find.add_argument("--lang", choices=["en", "zh", "both"], default="en")
    find.add_argument("--extended", action="store_true", help="Use the extended term table")
    return parser


COMMANDS = {"seed": _cmd_seed, "persons": _cmd_persons, "find": _cmd_find}


def main(argv: Optional[list[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    store = FamilyStore(args.db)
    return COMMANDS[args.command](store, args)


if __name__ == "__main__":
    sys.exit(main())
