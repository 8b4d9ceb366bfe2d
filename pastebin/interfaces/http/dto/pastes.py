from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from pastebin.domain.pastes.entities import Paste


class CreatePasteRequestDTO(BaseModel):
    title: str | None = Field(None, max_length=256)
    # blank body or syntax is rejected by PasteService.create
    body: str = ""
    syntax: str = Field("", max_length=64)
    password: str | None = Field(None, max_length=128)
    delete_after_read: bool = False
    # omitted: server default applies
    ttl_seconds: int | None = Field(None, ge=0)


class PasteDTO(BaseModel):
    short_id: str
    title: str | None
    body: str
    syntax: str
    protected: bool
    delete_after_read: bool
    created_at: datetime
    expires_at: datetime | None

    @classmethod
    def from_entity(cls, paste: Paste) -> PasteDTO:
        return cls(
            short_id=paste.short_id,
            title=paste.title,
            body=paste.body,
            syntax=paste.syntax,
            protected=paste.is_protected,
            delete_after_read=paste.delete_after_read,
            created_at=paste.created_at,
            expires_at=paste.expires_at,
        )
