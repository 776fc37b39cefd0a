"""Shared data models for graph operations."""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class RelationType(str, Enum):
    """Types of family relationships."""
    PARENT = "parent"
    CHILD = "child"
    SPOUSE = "spouse"
    SIBLING = "sibling"

    @property
    def inverse(self) -> "RelationType":
        """Relationship type as seen from the other endpoint."""
        return _INVERSE[self]

    @property
    def symmetric(self) -> bool:
        return self in (RelationType.SPOUSE, RelationType.SIBLING)

    @classmethod
    def coerce(cls, value) -> "RelationType":
        """Parse a type name, tolerating case and surrounding whitespace."""
        if isinstance(value, cls):
            return value
        if not isinstance(value, str):
            raise ValueError(f"Invalid relationship type: {value!r}")
        return cls(value.strip().lower())


_INVERSE = {
    RelationType.PARENT: RelationType.CHILD,
    RelationType.CHILD: RelationType.PARENT,
    RelationType.SPOUSE: RelationType.SPOUSE,
    RelationType.SIBLING: RelationType.SIBLING,
}


class Direction(str, Enum):
    """Which way an edge was walked relative to its stored orientation."""
    TO = "to"
    FROM = "from"

    @property
    def reversed(self) -> "Direction":
        return Direction.FROM if self is Direction.TO else Direction.TO


class PathStatus(str, Enum):
    """How a shortest-path search ended."""
    SELF = "self"
    RELATED = "related"
    UNREACHABLE = "unreachable"


def _field(record, *names):
    """Read the first present field from a mapping or an object."""
    for name in names:
        if isinstance(record, Mapping):
            if name in record:
                return record[name]
        elif hasattr(record, name):
            return getattr(record, name)
    return None


def person_id_of(person) -> Any:
    """Identifier of a person given as a bare id, a mapping or a model."""
    if isinstance(person, Mapping):
        return person.get("id")
    if hasattr(person, "id"):
        return person.id
    return person


@dataclass(frozen=True)
class RelationshipEdge:
    """One stored, directed relationship fact."""
    from_id: Any
    to_id: Any
    type: RelationType
    id: Optional[Any] = None

    def __post_init__(self):
        object.__setattr__(self, "type", RelationType.coerce(self.type))

    @classmethod
    def from_record(cls, record) -> Optional["RelationshipEdge"]:
        """Build an edge from a mapping or model; None if it is malformed."""
        if isinstance(record, cls):
            return record
        from_id = _field(record, "from_id", "fromId")
        to_id = _field(record, "to_id", "toId")
        if from_id is None or to_id is None:
            return None
        try:
            rel_type = RelationType.coerce(_field(record, "type", "relation_type"))
        except ValueError:
            return None
        return cls(from_id=from_id, to_id=to_id, type=rel_type, id=_field(record, "id"))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from_id": self.from_id,
            "to_id": self.to_id,
            "type": self.type.value,
        }


@dataclass(frozen=True)
class PathStep:
    """One hop of a resolved path: the stored edge plus the walk direction."""
    edge: RelationshipEdge
    direction: Direction

    @property
    def type(self) -> RelationType:
        return self.edge.type

    @property
    def source(self) -> Any:
        return self.edge.from_id if self.direction is Direction.TO else self.edge.to_id

    @property
    def target(self) -> Any:
        return self.edge.to_id if self.direction is Direction.TO else self.edge.from_id

    def canonical(self) -> tuple[RelationType, Direction]:
        """(type, direction) with child edges rewritten as parent edges.

        A child edge walked one way is the parent edge walked the other way.
        """
        if self.edge.type is RelationType.CHILD:
            return RelationType.PARENT, self.direction.reversed
        return self.edge.type, self.direction

    def to_dict(self) -> dict:
        return {**self.edge.to_dict(), "direction": self.direction.value}

    @classmethod
    def from_dict(cls, data: Mapping) -> Optional["PathStep"]:
        """Parse a serialized step; None if it is malformed."""
        edge = RelationshipEdge.from_record(data)
        try:
            direction = Direction(str(data.get("direction", "")).strip().lower())
        except ValueError:
            return None
        if edge is None:
            return None
        return cls(edge=edge, direction=direction)


class RelationshipPath(list):
    """PathSteps from a search, tagged with how the search ended.

    Behaves as a plain list of steps, so an empty path still compares equal
    to ``[]``; ``status`` tells "same person" apart from "not connected".
    """

    def __init__(self, steps=(), status: PathStatus = PathStatus.RELATED):
        super().__init__(steps)
        self.status = status

    @property
    def is_self(self) -> bool:
        return self.status is PathStatus.SELF

    @property
    def found(self) -> bool:
        return self.status is not PathStatus.UNREACHABLE

    def to_dicts(self) -> list[dict]:
        return [step.to_dict() for step in self]

    def __repr__(self) -> str:
        return f"RelationshipPath({list(self)!r}, status={self.status.value!r})"


@dataclass
class KinshipResult:
    """Resolved relationship between two persons."""
    status: PathStatus
    path: Optional[RelationshipPath] = None
    term: str = ""
    description: str = ""
    language: str = "en"

    def __post_init__(self):
        # An omitted path takes the result status
        if self.path is None:
            self.path = RelationshipPath(status=self.status)

    def to_dict(self) -> dict:
        return {
            "status": self.status.value,
            "path": self.path.to_dicts(),
            "term": self.term,
            "description": self.description,
            "language": self.language,
        }
