import logging

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.security import generate_id
from app.database import utcnow
from app.models.chat import Chat, ChatMessage
from app.models.company import Company
from app.models.job import Job
from app.models.user import User

logger = logging.getLogger(__name__)

APPEND_ATTEMPTS = 3


def get_by_id(db: Session, chat_id: str) -> Chat | None:
    return (
        db.query(Chat)
        .options(selectinload(Chat.messages))
        .filter(Chat.id == chat_id)
        .first()
    )


def get_by_application(db: Session, application_id: str) -> Chat | None:
    return db.query(Chat).filter(Chat.application_id == application_id).first()


def create(
    db: Session,
    *,
    application_id: str,
    user_id: str,
    company_id: str,
    job_id: str,
    first_sender_id: str,
    first_message: str,
    commit: bool = True,
) -> Chat:
    """Create a chat seeded with one message. With commit=False the caller owns the transaction."""
    now = utcnow()
    chat = Chat(
        id=generate_id(),
        application_id=application_id,
        user_id=user_id,
        company_id=company_id,
        job_id=job_id,
        created_at=now,
        updated_at=now,
    )
    chat.messages.append(
        ChatMessage(
            id=generate_id(),
            sequence=0,
            sender_id=first_sender_id,
            content=first_message,
            timestamp=now,
            is_read=False,
        )
    )
    db.add(chat)
    if commit:
        db.commit()
        db.refresh(chat)
    else:
        db.flush()
    return chat


def list_for_participant(
    db: Session,
    *,
    user_id: str | None = None,
    company_id: str | None = None,
) -> list[tuple[Chat, Job | None, Company | None, User | None]]:
    """Chats for one participant, most recently active first, with job/company/user joined."""
    q = (
        db.query(Chat, Job, Company, User)
        .options(selectinload(Chat.messages))
        .outerjoin(Job, Job.id == Chat.job_id)
        .outerjoin(Company, Company.id == Chat.company_id)
        .outerjoin(User, User.id == Chat.user_id)
    )
    if user_id is not None:
        q = q.filter(Chat.user_id == user_id)
    if company_id is not None:
        q = q.filter(Chat.company_id == company_id)
    return [tuple(r) for r in q.order_by(Chat.updated_at.desc()).all()]


def next_sequence(db: Session, chat_id: str) -> int:
    current = db.query(func.max(ChatMessage.sequence)).filter(ChatMessage.chat_id == chat_id).scalar()
    return 0 if current is None else current + 1


def append_message(db: Session, chat: Chat, sender_id: str, content: str) -> ChatMessage:
    """Append a message, retrying when a concurrent send took the same sequence number."""
    chat_id = chat.id
    for attempt in range(1, APPEND_ATTEMPTS + 1):
        now = utcnow()
        message = ChatMessage(
            id=generate_id(),
            chat_id=chat_id,
            sequence=next_sequence(db, chat_id),
            sender_id=sender_id,
            content=content,
            timestamp=now,
            is_read=False,
        )
        db.add(message)
        chat.updated_at = now
        try:
            db.commit()
        except IntegrityError:
            db.rollback()
            if attempt == APPEND_ATTEMPTS:
                raise
            logger.warning("Sequence clash on chat=%s, retrying (attempt %d)", chat_id, attempt)
            continue
        db.refresh(chat)
        return message


def mark_read_from(db: Session, chat: Chat, sender_id: str) -> int:
    """Mark unread messages sent by ``sender_id`` as read. Returns how many changed."""
    updated = 0
    for message in chat.messages:
        if message.sender_id == sender_id and not message.is_read:
            message.is_read = True
            updated += 1
    if updated:
        db.commit()
    return updated
