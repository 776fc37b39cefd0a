"""FastAPI backend for persons, relationships and kinship queries."""

import logging
from datetime import date
from typing import Optional

import httpx
from fastapi import Depends, FastAPI, HTTPException, Response
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field, ValidationError, field_validator

from family_kinship.config import settings
from family_kinship.errors import (
    DuplicateRelationshipError,
    PersonNotFoundError,
    RelationshipNotFoundError,
    RelationshipValidationError,
)
from family_kinship.graph.family_store import FamilyStore
from family_kinship.kinship.resolver import KinshipTermResolver
from family_kinship.models import Gender, Person, PersonFields, Relationship

logger = logging.getLogger(__name__)

app = FastAPI(title="Family Kinship API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)


class PersonUpdate(PersonFields):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    chinese_name: Optional[str] = Field(default=None, max_length=100)
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=1000)

    @field_validator("name")
    @classmethod
    def _name_required(cls, value):
        if value is None:
            raise ValueError("name cannot be null")
        return value


class RelationshipCreate(BaseModel):
    from_id: int
    to_id: int
    type: str


class RelationshipUpdate(BaseModel):
    type: str


class KinshipRequest(BaseModel):
    from_id: int
    to_id: int
    language: str = Field(default_factory=lambda: settings.kinship.default_language)


class TermRequest(BaseModel):
    path: list[dict] = Field(default_factory=list)
    language: str = "en"


class AskRequest(BaseModel):
    question: str = Field(min_length=1)


_store: Optional[FamilyStore] = None


def get_store() -> FamilyStore:
    """Get or create the FamilyStore instance."""
    global _store
    if _store is None:
        settings.database.ensure_dirs()
        _store = FamilyStore()
    return _store


def get_resolver() -> KinshipTermResolver:
    return KinshipTermResolver(extended=settings.kinship.extended_terms)


def _render_terms(resolver: KinshipTermResolver, path, language: str) -> dict:
    """Single-language term, or both languages when language == 'both'."""
    if language.strip().lower() == "both":
        return {lang: term.to_dict() for lang, term in resolver.resolve_bilingual(path).items()}
    return resolver.resolve(path, language).to_dict()


@app.get("/api/health")
async def health():
    return {"status": "ok"}


# ─────────────────────────────────────────
# Persons
# ─────────────────────────────────────────

@app.get("/api/persons")
def list_persons(q: Optional[str] = None, store: FamilyStore = Depends(get_store)):
    persons = store.find_by_name(q) if q else store.get_all()
    return {"count": len(persons), "persons": persons}


@app.post("/api/persons", status_code=201)
def create_person(person: Person, store: FamilyStore = Depends(get_store)) -> Person:
    person_id = store.add_person(person)
    return store.get_person(person_id)


@app.get("/api/persons/{person_id}")
def get_person(person_id: int, store: FamilyStore = Depends(get_store)) -> Person:
    person = store.get_person(person_id)
    if person is None:
        raise HTTPException(status_code=404, detail="Person not found")
    return person


@app.patch("/api/persons/{person_id}")
def update_person(person_id: int, req: PersonUpdate, store: FamilyStore = Depends(get_store)) -> Person:
    try:
        return store.update_person(person_id, **req.model_dump(exclude_unset=True))
    except PersonNotFoundError:
        raise HTTPException(status_code=404, detail="Person not found")
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=str(e))


@app.delete("/api/persons/{person_id}", status_code=204)
def delete_person(person_id: int, store: FamilyStore = Depends(get_store)):
    if not store.delete_person(person_id):
        raise HTTPException(status_code=404, detail="Person not found")
    return Response(status_code=204)


@app.get("/api/persons/{person_id}/relationships")
def person_relationships(person_id: int, store: FamilyStore = Depends(get_store)):
    if store.get_person(person_id) is None:
        raise HTTPException(status_code=404, detail="Person not found")
    relationships = store.relationships_of(person_id)
    return {"count": len(relationships), "relationships": relationships}


# ─────────────────────────────────────────
# Relationships
# ─────────────────────────────────────────

@app.get("/api/relationships")
def list_relationships(store: FamilyStore = Depends(get_store)):
    relationships = store.get_all_relationships()
    return {"count": len(relationships), "relationships": relationships}


@app.post("/api/relationships", status_code=201)
def create_relationship(req: RelationshipCreate, store: FamilyStore = Depends(get_store)) -> Relationship:
    try:
        return store.add_relationship(req.from_id, req.to_id, req.type)
    except PersonNotFoundError:
        raise HTTPException(status_code=404, detail="One or both persons not found")
    except DuplicateRelationshipError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RelationshipValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.get("/api/relationships/{relationship_id}")
def get_relationship(relationship_id: int, store: FamilyStore = Depends(get_store)) -> Relationship:
    relationship = store.get_relationship(relationship_id)
    if relationship is None:
        raise HTTPException(status_code=404, detail="Relationship not found")
    return relationship


@app.patch("/api/relationships/{relationship_id}")
def update_relationship(
    relationship_id: int, req: RelationshipUpdate, store: FamilyStore = Depends(get_store)
) -> Relationship:
    try:
        return store.update_relationship(relationship_id, req.type)
    except RelationshipNotFoundError:
        raise HTTPException(status_code=404, detail="Relationship not found")
    except DuplicateRelationshipError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RelationshipValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))


@app.delete("/api/relationships/{relationship_id}", status_code=204)
def delete_relationship(relationship_id: int, store: FamilyStore = Depends(get_store)):
    if not store.delete_relationship(relationship_id):
        raise HTTPException(status_code=404, detail="Relationship not found")
    return Response(status_code=204)


# ─────────────────────────────────────────
# Kinship
# ─────────────────────────────────────────

@app.post("/api/kinship/find")
def find_kinship(req: KinshipRequest, store: FamilyStore = Depends(get_store)):
    """Find the relationship path and kinship term between two persons."""
    from_person = store.get_person(req.from_id)
    to_person = store.get_person(req.to_id)
    if from_person is None or to_person is None:
        raise HTTPException(status_code=404, detail="One or both persons not found")

    resolver = get_resolver()
    result = store.find_kinship(req.from_id, req.to_id, req.language, resolver=resolver)
    return {
        "status": result.status.value,
        "path": result.path.to_dicts(),
        "kinship": _render_terms(resolver, result.path, req.language),
        "from_person": from_person,
        "to_person": to_person,
    }


@app.post("/api/kinship/term")
def kinship_term(req: TermRequest):
    """Name a path computed elsewhere, e.g. by a client-side preview."""
    return _render_terms(get_resolver(), req.path, req.language)


def placeholder_answer(question: str) -> str:
    return (
        f'This is a placeholder response for: "{question}". '
        "Set LLM_ENABLED=true in .env to enable AI responses."
    )


def build_family_context(persons: list[Person], relationships: list[Relationship]) -> str:
    """Describe the family in plain sentences for an LLM prompt."""
    names = {p.id: p.name for p in persons}
    lines = [f"{p.name} (ID: {p.id}, Gender: {p.gender or 'unknown'})" for p in persons]
    lines.append("")
    for r in relationships:
        lines.append(
            f"{names.get(r.from_id, r.from_id)} is {r.type.value} of {names.get(r.to_id, r.to_id)}"
        )
    return "\n".join(lines)


async def ask_llm(question: str, context: str) -> Optional[str]:
    """Ask the configured Ollama-compatible model; None on any failure."""
    prompt = f"""I have a family tree with the following people and relationships:

{context}

Based on this information, answer the following question:
{question}"""

    try:
        async with httpx.AsyncClient(timeout=settings.llm.timeout) as client:
            response = await client.post(
                f"{settings.llm.base_url.rstrip('/')}/api/generate",
                json={"model": settings.llm.model, "prompt": prompt, "stream": False},
            )
            response.raise_for_status()
            answer = response.json().get("response", "").strip()
            return answer or None
    except (httpx.HTTPError, ValueError) as e:
        logger.warning("LLM request failed: %s", e)
        return None


@app.post("/api/kinship/ask")
async def ask_kinship_question(req: AskRequest, store: FamilyStore = Depends(get_store)):
    """Answer a free-form kinship question about the stored family."""
    if not settings.llm.enabled:
        return {"answer": placeholder_answer(req.question), "source": "placeholder"}

    persons, relationships = store.snapshot()
    answer = await ask_llm(req.question, build_family_context(persons, relationships))
    if answer is None:
        return {"answer": placeholder_answer(req.question), "source": "placeholder"}
    return {"answer": answer, "source": "llm"}
