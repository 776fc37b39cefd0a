"""Exceptions raised by the family store and relationship validation."""


class FamilyKinshipError(Exception):
    """Base error for family store operations."""


class PersonNotFoundError(FamilyKinshipError):
    """A referenced person does not exist."""

    def __init__(self, person_id):
        self.person_id = person_id
        super().__init__(f"Person {person_id} not found")


class RelationshipNotFoundError(FamilyKinshipError):
    """A referenced relationship does not exist."""

    def __init__(self, relationship_id):
        self.relationship_id = relationship_id
        super().__init__(f"Relationship {relationship_id} not found")


class RelationshipValidationError(FamilyKinshipError):
    """A relationship would break family-tree consistency rules."""


class DuplicateRelationshipError(RelationshipValidationError):
    """A relationship already exists between the two persons."""
