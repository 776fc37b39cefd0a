"""Pytest fixtures for kinship tests."""

import pytest

from family_kinship.graph.family_store import FamilyStore


@pytest.fixture
def store(tmp_path):
    """FamilyStore backed by a temporary SQLite file."""
    return FamilyStore(db_path=str(tmp_path / "family.db"))


@pytest.fixture
def three_generations():
    """Alice(1) parent-of Bob(2), Bob parent-of Carol(3)."""
    persons = [{"id": 1, "name": "Alice"}, {"id": 2, "name": "Bob"}, {"id": 3, "name": "Carol"}]
    relationships = [
        {"from_id": 1, "to_id": 2, "type": "parent"},
        {"from_id": 2, "to_id": 3, "type": "parent"},
    ]
    return persons, relationships
