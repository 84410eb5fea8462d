"""Employee reference types.

Identity and compensation records live outside worktrack; these are the
minimal values the domain needs to attribute work and manage membership.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class Employee(BaseModel):
    """An employee, identified by ``id``."""

    model_config = ConfigDict(frozen=True)

    id: str
    first_name: str
    last_name: str
    email: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_response(self) -> dict:
        return {"id": self.id, "name": self.full_name}


class Manager(Employee):
    """An employee who may lead projects."""
