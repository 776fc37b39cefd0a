"""Data models for family records."""

from datetime import date, datetime
from typing import Literal, Optional
from pydantic import BaseModel, Field, field_validator

from family_kinship.graph.models import RelationType


Gender = Literal["male", "female", "other"]


class PersonFields(BaseModel):
    """Field normalization shared by person records and partial updates."""

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("chinese_name", "notes", mode="before", check_fields=False)
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str):
            return value.strip() or None
        return value

    @field_validator("gender", mode="before", check_fields=False)
    @classmethod
    def _normalize_gender(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            return {"m": "male", "f": "female"}.get(value, value) or None
        return value


class Person(PersonFields):
    """Person record with attributes."""

    id: Optional[int] = None
    name: str = Field(min_length=1, max_length=100)
    chinese_name: Optional[str] = Field(default=None, max_length=100)
    gender: Optional[Gender] = None
    birth_date: Optional[date] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    created_at: datetime = Field(default_factory=datetime.now)


class Relationship(BaseModel):
    """Directed relationship between two persons.

    parent: from_id is the parent of to_id; child: from_id is the child of
    to_id; spouse and sibling are symmetric.
    """

    id: Optional[int] = None
    from_id: int
    to_id: int
    type: RelationType

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, value):
        return value.strip().lower() if isinstance(value, str) else value
