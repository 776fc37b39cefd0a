"""Family tree kinship resolution."""

from family_kinship.graph.index import RelationshipGraphIndex, find_relationship_path
from family_kinship.graph.models import (
    Direction,
    KinshipResult,
    PathStatus,
    PathStep,
    RelationType,
    RelationshipEdge,
    RelationshipPath,
)
from family_kinship.kinship.resolver import KinshipTermResolver, resolve_kinship

__all__ = [
    "Direction",
    "KinshipResult",
    "KinshipTermResolver",
    "PathStatus",
    "PathStep",
    "RelationType",
    "RelationshipEdge",
    "RelationshipGraphIndex",
    "RelationshipPath",
    "find_relationship_path",
    "resolve_kinship",
]
