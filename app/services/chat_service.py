import logging

from sqlalchemy.orm import Session

from app.core.errors import Forbidden, InvalidState, NotFound, ValidationError
from app.core.identity import Identity
from app.models.chat import Chat
from app.repos import application_repo, chat_repo, job_repo

logger = logging.getLogger(__name__)

WELCOME_MESSAGE = (
    "Thank you for applying for the position of {job_title}. "
    "Our team will be in touch and you will be notified via this chat."
)


def _is_participant(chat: Chat, actor: Identity) -> bool:
    if actor.is_user:
        return chat.user_id == actor.id
    return chat.company_id == actor.id


def _participant_chat(db: Session, actor: Identity, chat_id: str, message: str) -> Chat:
    chat = chat_repo.get_by_id(db, chat_id)
    if not chat:
        raise NotFound("Chat not found")
    if not _is_participant(chat, actor):
        raise Forbidden(message)
    return chat


def create_for_application(
    db: Session,
    *,
    application_id: str,
    user_id: str,
    company_id: str,
    job_id: str,
    job_title: str,
    commit: bool = True,
) -> Chat:
    """Open the chat for an application, seeded with a welcome from the company. No-op if one exists."""
    existing = chat_repo.get_by_application(db, application_id)
    if existing:
        return existing
    chat = chat_repo.create(
        db,
        application_id=application_id,
        user_id=user_id,
        company_id=company_id,
        job_id=job_id,
        first_sender_id=company_id,
        first_message=WELCOME_MESSAGE.format(job_title=job_title),
        commit=commit,
    )
    logger.info("Chat opened: id=%s application=%s", chat.id, application_id)
    return chat


def ensure_chat_for_application(db: Session, actor: Identity, application_id: str) -> Chat:
    """Return the application's chat, creating it first if it is missing."""
    application = application_repo.get_by_id(db, application_id)
    if not application:
        raise NotFound("Application not found")
    job = job_repo.get_by_id(db, application.job_id)
    if not job:
        raise NotFound("Associated job not found")
    owner_id = application.user_id if actor.is_user else job.company_id
    if owner_id != actor.id:
        raise Forbidden("You do not have permission to access this application")
    chat = create_for_application(
        db,
        application_id=application.id,
        user_id=application.user_id,
        company_id=job.company_id,
        job_id=job.id,
        job_title=job.title,
    )
    return chat_repo.get_by_id(db, chat.id)


def list_chats(db: Session, actor: Identity) -> list[dict]:
    if actor.is_user:
        rows = chat_repo.list_for_participant(db, user_id=actor.id)
    else:
        rows = chat_repo.list_for_participant(db, company_id=actor.id)

    summaries = []
    for chat, job, company, user in rows:
        other = chat.other_party(actor.id)
        unread = sum(1 for m in chat.messages if m.sender_id == other and not m.is_read)
        last = chat.messages[-1] if chat.messages else None
        if actor.is_user:
            counterpart = {"id": chat.company_id, "name": company.company_name, "logo": company.logo} if company else None
        else:
            counterpart = {"id": chat.user_id, "name": f"{user.first_name} {user.last_name}", "logo": user.profile_image} if user else None
        summaries.append({
            "id": chat.id,
            "application_id": chat.application_id,
            "user_id": chat.user_id,
            "company_id": chat.company_id,
            "job_id": chat.job_id,
            "job_title": job.title if job else None,
            "counterpart": counterpart,
            "unread_count": unread,
            "last_message": {
                "content": last.content,
                "timestamp": last.timestamp,
                "is_from_company": last.sender_id == chat.company_id,
            } if last else None,
            "created_at": chat.created_at,
            "updated_at": chat.updated_at,
        })
    return summaries


def get_chat(db: Session, actor: Identity, chat_id: str) -> Chat:
    return _participant_chat(db, actor, chat_id, "You do not have permission to access this chat")


def send_message(db: Session, actor: Identity, chat_id: str, content: str | None) -> Chat:
    content = (content or "").strip()
    if not content:
        raise ValidationError("Message content is required")
    chat = _participant_chat(db, actor, chat_id, "You do not have permission to send messages in this chat")
    # Withdrawn applications leave their chat readable but closed.
    if not application_repo.get_by_id(db, chat.application_id):
        raise InvalidState("This conversation is closed")
    message = chat_repo.append_message(db, chat, actor.id, content)
    logger.info("Message sent: chat=%s sender=%s message=%s", chat.id, actor.id, message.id)
    return chat


def mark_read(db: Session, actor: Identity, chat_id: str) -> int:
    chat = _participant_chat(db, actor, chat_id, "You do not have permission to access this chat")
    updated = chat_repo.mark_read_from(db, chat, chat.other_party(actor.id))
    logger.debug("Marked %d messages read: chat=%s reader=%s", updated, chat.id, actor.id)
    return updated
