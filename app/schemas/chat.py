from datetime import datetime

from pydantic import BaseModel


class SendMessageRequest(BaseModel):
    content: str | None = None


class MessageResponse(BaseModel):
    id: str
    sender_id: str
    content: str
    timestamp: datetime | None = None
    is_read: bool

    class Config:
        from_attributes = True


class LastMessage(BaseModel):
    content: str
    timestamp: datetime | None = None
    is_from_company: bool


class ChatParty(BaseModel):
    """Display data for the other side of a conversation."""

    id: str
    name: str
    logo: str | None = None


class ChatSummary(BaseModel):
    id: str
    application_id: str
    user_id: str
    company_id: str
    job_id: str
    job_title: str | None = None
    counterpart: ChatParty | None = None
    unread_count: int
    last_message: LastMessage | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class ChatDetail(BaseModel):
    id: str
    application_id: str
    user_id: str
    company_id: str
    job_id: str
    messages: list[MessageResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None

    class Config:
        from_attributes = True


class MarkReadResult(BaseModel):
    message: str
    updated: int
