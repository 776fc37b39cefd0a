"""Consistency rules for new or edited relationships."""

from typing import Any, Iterable, Optional

from family_kinship.errors import DuplicateRelationshipError, RelationshipValidationError
from family_kinship.graph.models import RelationType, RelationshipEdge


def coerce_relation_type(value) -> RelationType:
    """Parse a relationship type or raise RelationshipValidationError."""
    try:
        return RelationType.coerce(value)
    except ValueError:
        allowed = ", ".join(t.value for t in RelationType)
        raise RelationshipValidationError(
            f"Invalid relationship type. Must be one of: {allowed}"
        ) from None


def parent_child_pair(edge: RelationshipEdge) -> Optional[tuple[Any, Any]]:
    """(parent, child) for parent/child edges, None otherwise."""
    if edge.type is RelationType.PARENT:
        return edge.from_id, edge.to_id
    if edge.type is RelationType.CHILD:
        return edge.to_id, edge.from_id
    return None


def parents_of(person_id, edges: Iterable[RelationshipEdge]) -> set:
    parents = set()
    for edge in edges:
        pair = parent_child_pair(edge)
        if pair and pair[1] == person_id:
            parents.add(pair[0])
    return parents


def _is_descendant(ancestor, person, edges: list[RelationshipEdge]) -> bool:
    """Whether ``person`` is reachable from ``ancestor`` via parent->child edges."""
    children: dict[Any, set] = {}
    for edge in edges:
        pair = parent_child_pair(edge)
        if pair:
            children.setdefault(pair[0], set()).add(pair[1])

    stack = [ancestor]
    seen = {ancestor}
    while stack:
        current = stack.pop()
        for child in children.get(current, ()):
            if child == person:
                return True
            if child not in seen:
                seen.add(child)
                stack.append(child)
    return False


def validate_relationship(
    edge: RelationshipEdge,
    existing: Iterable[RelationshipEdge],
    exclude_id: Optional[Any] = None,
) -> None:
    """Raise RelationshipValidationError if ``edge`` breaks family-tree rules.

    ``exclude_id`` drops the relationship being edited from the checks.
    """
    others = [e for e in existing if exclude_id is None or e.id != exclude_id]
    a, b = edge.from_id, edge.to_id

    if a == b:
        raise RelationshipValidationError("Cannot create a relationship with self")

    if any({e.from_id, e.to_id} == {a, b} for e in others):
        raise DuplicateRelationshipError("A relationship already exists between these persons")

    if edge.type is RelationType.SPOUSE:
        for e in others:
            if e.type is RelationType.SPOUSE and ({e.from_id, e.to_id} & {a, b}):
                raise RelationshipValidationError("One of the persons already has a spouse")

    elif edge.type is RelationType.SIBLING:
        parents_a, parents_b = parents_of(a, others), parents_of(b, others)
        if (parents_a or parents_b) and not (parents_a & parents_b):
            raise RelationshipValidationError("Siblings should share at least one parent")

    else:
        parent, child = parent_child_pair(edge)
        if _is_descendant(child, parent, others):
            raise RelationshipValidationError(
                "This relationship would create a circular family connection"
            )
