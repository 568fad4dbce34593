"""Pydantic schemas for import endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class ImportResult(BaseModel):
    """Outcome of a bulk import."""

    model_config = ConfigDict(extra="ignore")

    imported: int = 0
    skipped: int = 0
    errors: list[str] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)
