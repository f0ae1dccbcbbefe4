import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.errors import AppError, InternalError
from app.core.identity import Identity
from app.database import get_db
from app.dependencies import get_current_identity
from app.schemas.chat import ChatDetail, ChatSummary, MarkReadResult, SendMessageRequest
from app.services import chat_service

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/chats", tags=["chats"])


@router.get("", response_model=list[ChatSummary])
def list_chats(db: Session = Depends(get_db), actor: Identity = Depends(get_current_identity)):
    return chat_service.list_chats(db, actor)


@router.get("/{chat_id}", response_model=ChatDetail)
def get_chat(chat_id: str, db: Session = Depends(get_db), actor: Identity = Depends(get_current_identity)):
    return chat_service.get_chat(db, actor, chat_id)


@router.post("/application/{application_id}", response_model=ChatDetail)
def ensure_chat(
    application_id: str,
    db: Session = Depends(get_db),
    actor: Identity = Depends(get_current_identity),
):
    try:
        return chat_service.ensure_chat_for_application(db, actor, application_id)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Ensure chat failed for application=%s: %s", application_id, e)
        raise InternalError("Failed to open chat", error=str(e)) from e


@router.post("/{chat_id}/messages", response_model=ChatDetail, status_code=status.HTTP_201_CREATED)
def send_message(
    chat_id: str,
    data: SendMessageRequest,
    db: Session = Depends(get_db),
    actor: Identity = Depends(get_current_identity),
):
    try:
        return chat_service.send_message(db, actor, chat_id, data.content)
    except AppError:
        raise
    except Exception as e:
        logger.exception("Send message failed for chat=%s sender=%s: %s", chat_id, actor.id, e)
        raise InternalError("Failed to send message", error=str(e)) from e


@router.put("/{chat_id}/read", response_model=MarkReadResult)
def mark_read(chat_id: str, db: Session = Depends(get_db), actor: Identity = Depends(get_current_identity)):
    updated = chat_service.mark_read(db, actor, chat_id)
    return MarkReadResult(message="Messages marked as read", updated=updated)
