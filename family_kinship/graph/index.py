"""In-memory relationship graph with shortest-path search.

The index is built from a snapshot of persons and one-way relationship
records. Every stored edge is reachable from both endpoints: the forward
entry keeps the stored type, the reverse entry carries the inverse type
(parent <-> child, spouse and sibling map to themselves).

Usage:
    index = RelationshipGraphIndex(persons, relationships)
    path = index.find_path(3, 1)
    if path.status is PathStatus.UNREACHABLE:
        ...
"""

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Iterable

from family_kinship.graph.models import (
    Direction,
    PathStatus,
    PathStep,
    RelationType,
    RelationshipEdge,
    RelationshipPath,
    person_id_of,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Neighbor:
    """Adjacency entry: who is reachable and over which edge."""
    person_id: Any
    type: RelationType  # relation of person_id as seen from the owning node
    edge: RelationshipEdge
    direction: Direction


class RelationshipGraphIndex:
    """Bidirectional adjacency index over person ids."""

    def __init__(self, persons: Iterable = (), relationships: Iterable = ()):
        self._adjacency: dict[Any, list[Neighbor]] = {}
        self.skipped_edges = 0

        for person in persons or ():
            pid = person_id_of(person)
            if pid is not None:
                self._adjacency.setdefault(pid, [])

        for record in relationships or ():
            self._add_edge(record)

    def _add_edge(self, record) -> bool:
        edge = RelationshipEdge.from_record(record)
        if edge is None:
            logger.debug("Skipping malformed relationship record %r", record)
            self.skipped_edges += 1
            return False
        if edge.from_id not in self._adjacency or edge.to_id not in self._adjacency:
            logger.debug("Skipping relationship with unknown endpoint %s -> %s", edge.from_id, edge.to_id)
            self.skipped_edges += 1
            return False
        if edge.from_id == edge.to_id:
            self.skipped_edges += 1
            return False

        self._adjacency[edge.from_id].append(
            Neighbor(edge.to_id, edge.type, edge, Direction.TO)
        )
        self._adjacency[edge.to_id].append(
            Neighbor(edge.from_id, edge.type.inverse, edge, Direction.FROM)
        )
        return True

    # ─────────────────────────────────────────
    # Lookups
    # ─────────────────────────────────────────

    def __contains__(self, person_id) -> bool:
        return person_id in self._adjacency

    def __len__(self) -> int:
        return len(self._adjacency)

    def has_person(self, person_id) -> bool:
        return person_id in self._adjacency

    def neighbors(self, person_id) -> list[Neighbor]:
        """Direct neighbors in insertion order; empty for unknown ids."""
        return list(self._adjacency.get(person_id, ()))

    # ─────────────────────────────────────────
    # Search
    # ─────────────────────────────────────────

    def find_path(self, from_id, to_id) -> RelationshipPath:
        """Breadth-first shortest path from ``from_id`` to ``to_id``.

        Returns an empty path tagged SELF when both ids are equal, and an
        empty path tagged UNREACHABLE when no connection exists (including
        unknown ids). Among equally short paths the first one discovered in
        adjacency order wins.
        """
        if from_id == to_id:
            return RelationshipPath(status=PathStatus.SELF)
        if from_id not in self._adjacency or to_id not in self._adjacency:
            return RelationshipPath(status=PathStatus.UNREACHABLE)

        queue = deque([(from_id, [])])
        visited = {from_id}

        while queue:
            current, steps = queue.popleft()
            if current == to_id:
                logger.debug("Path %s -> %s found with %d steps", from_id, to_id, len(steps))
                return RelationshipPath(steps, status=PathStatus.RELATED)

            for neighbor in self._adjacency[current]:
                if neighbor.person_id in visited:
                    continue
                visited.add(neighbor.person_id)
                queue.append((
                    neighbor.person_id,
                    steps + [PathStep(neighbor.edge, neighbor.direction)],
                ))

        logger.debug("No path between %s and %s", from_id, to_id)
        return RelationshipPath(status=PathStatus.UNREACHABLE)

    def is_connected(self, from_id, to_id) -> bool:
        return self.find_path(from_id, to_id).found


def find_relationship_path(persons, relationships, from_id, to_id) -> RelationshipPath:
    """Build a throwaway index and return the shortest path between two ids."""
    return RelationshipGraphIndex(persons, relationships).find_path(from_id, to_id)
