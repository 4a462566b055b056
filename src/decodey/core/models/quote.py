from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Quote(BaseModel):
    model_config = ConfigDict(extra="forbid")

    id: str
    text: str
    author: str = "Unknown"

    @field_validator("text")
    @classmethod
    def _require_letters(cls, value: str) -> str:
        if not any("A" <= char <= "Z" for char in value.upper()):
            raise ValueError("Quote text must contain at least one letter A-Z")
        return value


class QuoteCollection(BaseModel):
    model_config = ConfigDict(extra="forbid")

    quotes: list[Quote] = Field(default_factory=list)

    @classmethod
    def from_raw(cls, raw: dict[str, Any]) -> "QuoteCollection":
        return cls.model_validate(raw)
