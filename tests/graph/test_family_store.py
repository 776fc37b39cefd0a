"""Test SQLite family store."""

from datetime import date

import pytest
from pydantic import ValidationError

from family_kinship.errors import (
    DuplicateRelationshipError,
    PersonNotFoundError,
    RelationshipNotFoundError,
    RelationshipValidationError,
)
from family_kinship.graph.models import PathStatus, RelationType
from family_kinship.kinship.resolver import KinshipTermResolver
from family_kinship.models import Person


@pytest.fixture
def family(store):
    """Grandpa -> Dad -> Kid, Dad married to Mom."""
    ids = {
        name: store.add_person(Person(name=name))
        for name in ("Grandpa", "Dad", "Mom", "Kid")
    }
    store.add_relationship(ids["Grandpa"], ids["Dad"], "parent")
    store.add_relationship(ids["Dad"], ids["Kid"], "parent")
    store.add_relationship(ids["Dad"], ids["Mom"], "spouse")
    return ids


class TestPersons:
    """Tests for person CRUD."""

    def test_add_and_get(self, store):
        pid = store.add_person(Person(
            name="  Wang Wei ", chinese_name="王伟", gender="M", birth_date=date(1960, 5, 1)
        ))
        person = store.get_person(pid)
        assert person.id == pid
        assert person.name == "Wang Wei"
        assert person.chinese_name == "王伟"
        assert person.gender == "male"
        assert person.birth_date == date(1960, 5, 1)

    def test_created_at_is_stored_value(self, store):
        """created_at comes from the database, not the time of the read."""
        pid = store.add_person(Person(name="Wang Wei"))
        first = store.get_person(pid).created_at
        assert store.get_person(pid).created_at == first
        assert store.update_person(pid, notes="Eldest").created_at == first

    def test_get_missing(self, store):
        assert store.get_person(999) is None
        with pytest.raises(PersonNotFoundError) as exc:
            store.require_person(999)
        assert exc.value.person_id == 999

    def test_find_by_name(self, store):
        store.add_person(Person(name="Li Na", chinese_name="李娜"))
        store.add_person(Person(name="Wang Fang"))
        assert [p.name for p in store.find_by_name("li")] == ["Li Na"]
        assert [p.name for p in store.find_by_name("李")] == ["Li Na"]
        assert len(store.find_by_name("a")) == 2

    def test_update_person(self, store):
        pid = store.add_person(Person(name="Zhang Min"))
        updated = store.update_person(pid, notes="Cousin", gender="f", ignored="x")
        assert updated.notes == "Cousin"
        assert updated.gender == "female"
        assert store.get_person(pid).notes == "Cousin"

    def test_update_person_revalidates(self, store):
        pid = store.add_person(Person(name="Zhang Min"))
        with pytest.raises(ValidationError):
            store.update_person(pid, name="")

    def test_update_missing_person(self, store):
        with pytest.raises(PersonNotFoundError):
            store.update_person(42, name="Nobody")

    def test_delete_person_removes_relationships(self, store, family):
        assert store.delete_person(family["Dad"])
        assert store.get_person(family["Dad"]) is None
        assert store.get_all_relationships() == []
        assert not store.delete_person(family["Dad"])


class TestRelationships:
    """Tests for relationship CRUD and validation."""

    def test_only_stored_fact_is_written(self, store, family):
        """One row per relationship; the reverse is never stored."""
        rels = store.get_all_relationships()
        assert len(rels) == 3
        assert rels[0].from_id == family["Grandpa"]
        assert rels[0].type is RelationType.PARENT

    def test_relationships_of(self, store, family):
        rels = store.relationships_of(family["Dad"])
        assert len(rels) == 3
        assert store.relationships_of(family["Kid"])[0].to_id == family["Kid"]

    def test_add_requires_persons(self, store):
        pid = store.add_person(Person(name="Solo"))
        with pytest.raises(PersonNotFoundError):
            store.add_relationship(pid, 999, "sibling")

    def test_add_rejects_bad_type(self, store):
        a = store.add_person(Person(name="A"))
        b = store.add_person(Person(name="B"))
        with pytest.raises(RelationshipValidationError):
            store.add_relationship(a, b, "friend")

    def test_add_rejects_duplicate(self, store, family):
        with pytest.raises(DuplicateRelationshipError):
            store.add_relationship(family["Kid"], family["Dad"], "child")

    def test_add_rejects_cycle(self, store, family):
        with pytest.raises(RelationshipValidationError):
            store.add_relationship(family["Kid"], family["Grandpa"], "parent")

    def test_update_relationship(self, store):
        a = store.add_person(Person(name="A"))
        b = store.add_person(Person(name="B"))
        rel = store.add_relationship(a, b, "spouse")
        updated = store.update_relationship(rel.id, "Sibling")
        assert updated.type is RelationType.SIBLING
        assert store.get_relationship(rel.id).type is RelationType.SIBLING

    def test_update_relationship_validates(self, store, family):
        """Dad has a parent and Mom has none, so they cannot be siblings."""
        rel = store.relationships_of(family["Mom"])[0]
        with pytest.raises(RelationshipValidationError, match="share at least one parent"):
            store.update_relationship(rel.id, "sibling")

    def test_update_missing_relationship(self, store):
        with pytest.raises(RelationshipNotFoundError):
            store.update_relationship(77, "spouse")

    def test_delete_relationship(self, store, family):
        rel = store.relationships_of(family["Mom"])[0]
        assert store.delete_relationship(rel.id)
        assert store.get_relationship(rel.id) is None
        assert not store.delete_relationship(rel.id)


class TestFindKinship:
    """Tests for kinship lookups against stored data."""

    def test_grandparent(self, store, family):
        result = store.find_kinship(family["Kid"], family["Grandpa"])
        assert result.term == "grandparent"
        assert result.status is PathStatus.RELATED
        assert len(result.path) == 2

    def test_chinese(self, store, family):
        result = store.find_kinship(family["Mom"], family["Grandpa"], language="zh")
        assert result.term == "公婆/岳父母"
        assert result.language == "zh"

    def test_self(self, store, family):
        result = store.find_kinship(family["Kid"], family["Kid"])
        assert result.term == "self"
        assert result.status is PathStatus.SELF

    def test_unconnected(self, store, family):
        loner = store.add_person(Person(name="Stranger"))
        result = store.find_kinship(family["Kid"], loner)
        assert result.term == "relative"
        assert result.status is PathStatus.UNREACHABLE

    def test_extended_resolver(self, store, family):
        result = store.find_kinship(
            family["Kid"], family["Mom"], resolver=KinshipTermResolver(extended=True)
        )
        assert result.term == "step-parent"

    def test_missing_person(self, store, family):
        with pytest.raises(PersonNotFoundError):
            store.find_kinship(family["Kid"], 999)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
