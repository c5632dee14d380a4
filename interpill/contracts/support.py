"""Support form contracts: the inbound message and the outbound email payload."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class SupportMessage(BaseModel):
    """Body of ``POST /support/send``. Blankness is checked by the service."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(alias="from")
    message: str


class EmailPayload(BaseModel):
    """Request body for the email provider (Resend ``POST /emails``)."""

    model_config = ConfigDict(populate_by_name=True)

    sender: str = Field(alias="from")
    to: list[str]
    subject: str
    text: str
    reply_to: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class SupportAccepted(BaseModel):
    """Successful outcome of a support send (real or mock)."""

    status: str
    note: str | None = None
    id: str | None = None

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)
