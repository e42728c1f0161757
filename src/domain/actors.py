from __future__ import annotations

from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from .base_types import ActorId, OrgId, Role


class Actor(BaseModel):
    id: ActorId = ActorId(Field(default_factory=uuid4))
    email: str
    name: str
    org_id: OrgId
    role: Role

    @field_validator("email")
    @classmethod
    def _normalize_email(cls, value: str) -> str:
        normalized = value.strip().lower()
        if not normalized:
            raise ValueError("Actor.email must be non-empty")
        return normalized
