"""
Domain models for binrecord.

`Record` is the in-memory value the codec persists. It carries no identity
of its own beyond its field values; the encoded byte stream is its only
persisted form.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class Record(BaseModel):
    """
    A student record: integer id, free-form name and a grade point average.

    Values are not range-checked here. Negative ids, NaN or infinite grades
    and empty names are all valid records.
    """

    id: int = Field(..., description="Record identifier (signed integer).")
    name: str = Field("", description="Display name; may contain any characters, including NUL.")
    gpa: float = Field(0.0, description="Grade point average (IEEE-754 double).")

    model_config = {
        "frozen": True,
        "populate_by_name": True,
        "arbitrary_types_allowed": False,
    }

    def summary(self) -> str:
        return f"ID: {self.id}, Name: {self.name}, GPA: {self.gpa}"


__all__ = ["Record"]
