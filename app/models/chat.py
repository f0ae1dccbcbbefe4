from sqlalchemy import Column, String, Text, DateTime, Boolean, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.database import Base, utcnow


class Chat(Base):
    """Conversation between an applicant and a company, one per application."""

    __tablename__ = "chats"

    id = Column(String, primary_key=True, index=True)
    application_id = Column(String, unique=True, nullable=False, index=True)
    user_id = Column(String, nullable=False, index=True)
    company_id = Column(String, nullable=False, index=True)
    job_id = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    messages = relationship(
        "ChatMessage",
        back_populates="chat",
        order_by="ChatMessage.sequence",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def other_party(self, participant_id: str) -> str:
        return self.company_id if participant_id == self.user_id else self.user_id


class ChatMessage(Base):
    """Append-only message; sequence orders messages within a chat."""

    __tablename__ = "chat_messages"
    __table_args__ = (
        UniqueConstraint("chat_id", "sequence", name="uq_chat_messages_chat_sequence"),
    )

    id = Column(String, primary_key=True, index=True)
    chat_id = Column(String, ForeignKey("chats.id", ondelete="CASCADE"), nullable=False, index=True)
    sequence = Column(Integer, nullable=False)
    sender_id = Column(String, nullable=False)
    content = Column(Text, nullable=False)
    timestamp = Column(DateTime(timezone=True), default=utcnow)
    is_read = Column(Boolean, nullable=False, default=False)

    chat = relationship("Chat", back_populates="messages")
