"""SQLite store for persons and their relationships.

This is a DATA LAYER component: it persists records and hands snapshots to
the kinship engine. Only the single stored fact is written for each
relationship; the reverse direction is derived by RelationshipGraphIndex.

Tables:
- persons: person attributes
- relationships: directed, typed edges between persons
"""

import logging
import sqlite3
from datetime import date, datetime
from pathlib import Path
from typing import Optional

from family_kinship.config import settings
from family_kinship.errors import (
    PersonNotFoundError,
    RelationshipNotFoundError,
)
from family_kinship.graph.models import KinshipResult, RelationshipEdge
from family_kinship.graph.validation import coerce_relation_type, validate_relationship
from family_kinship.kinship.resolver import KinshipTermResolver, resolve_kinship
from family_kinship.models import Person, Relationship

logger = logging.getLogger(__name__)


class FamilyStore:
    """Store persons and relationships in SQLite."""

    PERSON_FIELDS = {"name", "chinese_name", "gender", "birth_date", "notes"}

    def __init__(self, db_path: Optional[str] = None):
        self.db_path = db_path or settings.database.family_db_path
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
        return conn

    def _init_db(self):
        """Initialize database schema."""
        with self._connect() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS persons (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    name TEXT NOT NULL,
                    chinese_name TEXT,
                    gender TEXT,
                    birth_date TEXT,
                    notes TEXT,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS relationships (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    from_id INTEGER NOT NULL,
                    to_id INTEGER NOT NULL,
                    type TEXT NOT NULL,
                    created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                    FOREIGN KEY (from_id) REFERENCES persons(id) ON DELETE CASCADE,
                    FOREIGN KEY (to_id) REFERENCES persons(id) ON DELETE CASCADE
                )
            """)
            conn.execute("CREATE INDEX IF NOT EXISTS idx_person_name ON persons(name)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_rel_from ON relationships(from_id)")
            conn.execute("CREATE INDEX IF NOT EXISTS idx_rel_to ON relationships(to_id)")

    # ─────────────────────────────────────────
    # Persons
    # ─────────────────────────────────────────

    def add_person(self, person: Person) -> int:
        """Add a person and return their ID."""
        with self._connect() as conn:
            cursor = conn.execute("""
                INSERT INTO persons (name, chinese_name, gender, birth_date, notes)
                VALUES (?, ?, ?, ?, ?)
            """, (
                person.name,
                person.chinese_name,
                person.gender,
                person.birth_date.isoformat() if person.birth_date else None,
                person.notes,
            ))
            logger.info("Added person %s (id=%s)", person.name, cursor.lastrowid)
            return cursor.lastrowid

    def get_person(self, person_id: int) -> Optional[Person]:
        """Get person by ID."""
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM persons WHERE id = ?", (person_id,)
            ).fetchone()
            return self._row_to_person(row) if row else None

    def require_person(self, person_id: int) -> Person:
        person = self.get_person(person_id)
        if person is None:
            raise PersonNotFoundError(person_id)
        return person

    def find_by_name(self, name: str) -> list[Person]:
        """Find persons by name or Chinese name (partial match)."""
        pattern = f"%{name.strip()}%"
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM persons WHERE name LIKE ? OR chinese_name LIKE ? ORDER BY id",
                (pattern, pattern),
            ).fetchall()
            return [self._row_to_person(row) for row in rows]

    def get_all(self) -> list[Person]:
        """Get all persons."""
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM persons ORDER BY id").fetchall()
            return [self._row_to_person(row) for row in rows]

    def update_person(self, person_id: int, **kwargs) -> Person:
        """Update person attributes and return the updated record."""
        current = self.require_person(person_id)
        updates = {k: v for k, v in kwargs.items() if k in self.PERSON_FIELDS}
        if not updates:
            return current

        # Re-validate through the model so updates obey the same field rules
        merged = Person(**{**current.model_dump(), **updates})
        values = {k: getattr(merged, k) for k in updates}
        if isinstance(values.get("birth_date"), date):
            values["birth_date"] = values["birth_date"].isoformat()

        set_clause = ", ".join(f"{k} = ?" for k in values)
        with self._connect() as conn:
            conn.execute(
                f"UPDATE persons SET {set_clause} WHERE id = ?",
                list(values.values()) + [person_id],
            )
        return self.require_person(person_id)

    def delete_person(self, person_id: int) -> bool:
        """Delete a person and every relationship that touches them."""
        with self._connect() as conn:
            conn.execute(
                "DELETE FROM relationships WHERE from_id = ? OR to_id = ?",
                (person_id, person_id),
            )
            cursor = conn.execute("DELETE FROM persons WHERE id = ?", (person_id,))
            return cursor.rowcount > 0

    def _row_to_person(self, row: sqlite3.Row) -> Person:
        """Convert database row to Person model."""
        return Person(
            id=row["id"],
            name=row["name"],
            chinese_name=row["chinese_name"],
            gender=row["gender"],
            birth_date=date.fromisoformat(row["birth_date"]) if row["birth_date"] else None,
            notes=row["notes"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )

    # ─────────────────────────────────────────
    # Relationships
    # ─────────────────────────────────────────

    def add_relationship(self, from_id: int, to_id: int, rel_type) -> Relationship:
        """Validate and store a relationship."""
        rel_type = coerce_relation_type(rel_type)
        self.require_person(from_id)
        self.require_person(to_id)

        edge = RelationshipEdge(from_id, to_id, rel_type)
        validate_relationship(edge, self._edges())

        with self._connect() as conn:
            cursor = conn.execute(
                "INSERT INTO relationships (from_id, to_id, type) VALUES (?, ?, ?)",
                (from_id, to_id, rel_type.value),
            )
            rel_id = cursor.lastrowid
        logger.info("Added relationship %s %s -> %s (id=%s)", rel_type.value, from_id, to_id, rel_id)
        return Relationship(id=rel_id, from_id=from_id, to_id=to_id, type=rel_type)

    def get_relationship(self, relationship_id: int) -> Optional[Relationship]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT * FROM relationships WHERE id = ?", (relationship_id,)
            ).fetchone()
            return self._row_to_relationship(row) if row else None

    def get_all_relationships(self) -> list[Relationship]:
        with self._connect() as conn:
            rows = conn.execute("SELECT * FROM relationships ORDER BY id").fetchall()
            return [self._row_to_relationship(row) for row in rows]

    def relationships_of(self, person_id: int) -> list[Relationship]:
        """All relationships where the person is either endpoint."""
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT * FROM relationships WHERE from_id = ? OR to_id = ? ORDER BY id",
                (person_id, person_id),
            ).fetchall()
            return [self._row_to_relationship(row) for row in rows]

    def update_relationship(self, relationship_id: int, rel_type) -> Relationship:
        """Change the type of an existing relationship."""
        current = self.get_relationship(relationship_id)
        if current is None:
            raise RelationshipNotFoundError(relationship_id)
        rel_type = coerce_relation_type(rel_type)

        edge = RelationshipEdge(current.from_id, current.to_id, rel_type, id=relationship_id)
        validate_relationship(edge, self._edges(), exclude_id=relationship_id)

        with self._connect() as conn:
            conn.execute(
                "UPDATE relationships SET type = ? WHERE id = ?",
                (rel_type.value, relationship_id),
            )
        return Relationship(id=relationship_id, from_id=current.from_id, to_id=current.to_id, type=rel_type)

    def delete_relationship(self, relationship_id: int) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM relationships WHERE id = ?", (relationship_id,))
            return cursor.rowcount > 0

    def _row_to_relationship(self, row: sqlite3.Row) -> Relationship:
        return Relationship(
            id=row["id"],
            from_id=row["from_id"],
            to_id=row["to_id"],
            type=row["type"],
        )

    def _edges(self) -> list[RelationshipEdge]:
        return [RelationshipEdge.from_record(r) for r in self.get_all_relationships()]

    # ─────────────────────────────────────────
    # Kinship
    # ─────────────────────────────────────────

    def snapshot(self) -> tuple[list[Person], list[Relationship]]:
        """Consistent copy of all persons and relationships."""
        return self.get_all(), self.get_all_relationships()

    def find_kinship(
        self,
        from_id: int,
        to_id: int,
        language: Optional[str] = None,
        resolver: Optional[KinshipTermResolver] = None,
    ) -> KinshipResult:
        """Resolve the kinship term between two stored persons."""
        self.require_person(from_id)
        self.require_person(to_id)
        persons, relationships = self.snapshot()
        resolver = resolver or KinshipTermResolver(extended=settings.kinship.extended_terms)
        return resolve_kinship(
            persons,
            relationships,
            from_id,
            to_id,
            language or settings.kinship.default_language,
            resolver=resolver,
        )
