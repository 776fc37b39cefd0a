"""Kinship MCP server - family records and kinship lookups as agent tools.

Architecture:
    Agent -> MCP Protocol -> kinship_server.py -> FamilyStore -> SQLite

Run:
    python -m family_kinship.mcp.kinship_server
"""

from typing import Optional, List, Dict

from mcp.server.fastmcp import FastMCP

from family_kinship.config import settings, setup_logging
from family_kinship.errors import FamilyKinshipError
from family_kinship.graph.family_store import FamilyStore
from family_kinship.kinship.resolver import KinshipTermResolver
from family_kinship.models import Person

mcp = FastMCP("kinship-server")

# Lazy-loaded singleton
_store: Optional[FamilyStore] = None


def get_store() -> FamilyStore:
    """Get or create FamilyStore instance."""
    global _store
    if _store is None:
        settings.database.ensure_dirs()
        _store = FamilyStore()
    return _store


@mcp.tool()
def add_person(
    name: str,
    gender: Optional[str] = None,
    chinese_name: Optional[str] = None,
    notes: Optional[str] = None,
) -> dict:
    """Add a person to the family tree and return their ID."""
    try:
        person = Person(name=name, gender=gender, chinese_name=chinese_name, notes=notes)
    except ValueError as e:
        return {"success": False, "error": str(e)}
    person_id = get_store().add_person(person)
    return {"success": True, "person_id": person_id, "name": person.name}


@mcp.tool()
def add_relationship(from_id: int, to_id: int, type: str) -> dict:
    """
    Connect two persons.

    Args:
        from_id: First person. For "parent" this is the parent, for "child" the child.
        to_id: Second person.
        type: One of parent, child, spouse, sibling.
    """
    try:
        relationship = get_store().add_relationship(from_id, to_id, type)
    except FamilyKinshipError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, "relationship": relationship.model_dump(mode="json")}


@mcp.tool()
def get_all_persons() -> dict:
    """List every person in the family tree."""
    persons = get_store().get_all()
    return {"count": len(persons), "persons": [p.model_dump(mode="json") for p in persons]}


@mcp.tool()
def get_all_relationships() -> dict:
    """List every stored relationship."""
    relationships = get_store().get_all_relationships()
    return {
        "count": len(relationships),
        "relationships": [r.model_dump(mode="json") for r in relationships],
    }


@mcp.tool()
def find_kinship(from_id: int, to_id: int, language: str = "en") -> dict:
    """
    Find what to_id is to from_id (e.g. grandparent, aunt/uncle).

    Args:
        from_id: Person asking.
        to_id: Person being described.
        language: "en" for English, "zh" for Mandarin.
    """
    try:
        result = get_store().find_kinship(from_id, to_id, language)
    except FamilyKinshipError as e:
        return {"success": False, "error": str(e)}
    return {"success": True, **result.to_dict()}


@mcp.tool()
def get_kinship_term(path: List[Dict], language: str = "en") -> dict:
    """Name a relationship path of steps with from_id, to_id, type and direction."""
    resolver = KinshipTermResolver(extended=settings.kinship.extended_terms)
    return {"success": True, **resolver.resolve(path, language).to_dict()}


if __name__ == "__main__":
    setup_logging()
    mcp.run()
