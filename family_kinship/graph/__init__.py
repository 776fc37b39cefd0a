"""Graph package - relationship index and family storage."""

from family_kinship.graph.models import RelationshipEdge, PathStep, RelationshipPath
from family_kinship.graph.index import RelationshipGraphIndex

__all__ = [
    "RelationshipEdge",
    "PathStep",
    "RelationshipPath",
    "RelationshipGraphIndex",
]
