"""Typed models for the mailbox HTTP API."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Entry(BaseModel):
    """One contact form submission (a table row).

    `from` is a Python keyword, so the field is `sender` with a wire alias.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str
    sender: str = Field(alias="from")
    subject: str
    message: str


class EntriesPage(BaseModel):
    """Body of `GET /entries/?page=N`."""

    page: int
    page_count: int
    entry_count: int
    entries: list[Entry] = Field(default_factory=list)

    @field_validator("entries", mode="before")
    @classmethod
    def null_entries_as_empty(cls, v: object) -> object:
        return [] if v is None else v

    @property
    def next_page(self) -> int | None:
        """Index of the following page, or None when this is the last one."""
        if self.page < self.page_count - 1:
            return self.page + 1
        return None


class ErrorResponse(BaseModel):
    """Error body shared by every endpoint."""

    error: str = ""


class NewEntry(BaseModel):
    """Body of `POST /submit`."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    sender: str = Field(alias="from")
    subject: str
    message: str

    def to_payload(self) -> dict[str, str]:
        return self.model_dump(by_alias=True)
