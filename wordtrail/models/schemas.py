from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic.alias_generators import to_camel


# ─── Shared ──────────────────────────────────────────────────────────────────

class CamelModel(BaseModel):
    """Python attributes in snake_case, JSON in camelCase."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DiffChange(BaseModel):
    type: Literal["added", "removed", "unchanged"]
    content: str


# ─── Version ─────────────────────────────────────────────────────────────────

class Version(CamelModel):
    """One immutable snapshot plus its word diff against the previous one."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="ignore",
    )

    id: str
    timestamp: datetime
    previous_text: str = ""
    new_text: str
    added_words: tuple[str, ...] = ()
    removed_words: tuple[str, ...] = ()
    old_length: int = Field(0, ge=0)
    new_length: int = Field(0, ge=0)

    @field_validator("timestamp")
    @classmethod
    def _as_utc(cls, value: datetime) -> datetime:
        # pymongo hands back naive datetimes that are already UTC
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @computed_field(alias="displayTimestamp")
    @property
    def display_timestamp(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d %H:%M")

    def to_document(self) -> dict:
        """Field layout of the stored record (no computed fields)."""
        return {
            "id": self.id,
            "timestamp": self.timestamp.replace(tzinfo=None),
            "previousText": self.previous_text,
            "newText": self.new_text,
            "addedWords": list(self.added_words),
            "removedWords": list(self.removed_words),
            "oldLength": self.old_length,
            "newLength": self.new_length,
        }

    @classmethod
    def from_document(cls, doc: dict) -> "Version":
        return cls.model_validate({k: v for k, v in doc.items() if k != "_id"})


class VersionSummary(Version):
    """Version as shown in the history list."""

    excerpt: str = ""

    @computed_field(alias="addedCount")
    @property
    def added_count(self) -> int:
        return len(self.added_words)

    @computed_field(alias="removedCount")
    @property
    def removed_count(self) -> int:
        return len(self.removed_words)


# ─── Requests ────────────────────────────────────────────────────────────────

class SaveVersionRequest(CamelModel):
    new_text: Optional[str] = None


# ─── Responses ───────────────────────────────────────────────────────────────

class SaveVersionResponse(BaseModel):
    message: str
    data: Version


class VersionListResponse(BaseModel):
    success: bool = True
    count: int
    data: list[VersionSummary]


class VersionDetailResponse(BaseModel):
    success: bool = True
    data: Version
    highlight: list[DiffChange]


class DeleteVersionResponse(BaseModel):
    message: str
    data: Version


class ErrorResponse(BaseModel):
    message: str
