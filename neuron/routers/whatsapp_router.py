"""WhatsApp API: channel status and read-only conversation history."""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.constants.whatsapp import ConversationStatus
from neuron.core.app_state import AppState, get_runtime
from neuron.db import get_db
from neuron.schemas.pagination import SortParams, sort_params
from neuron.schemas.whatsapp import (
    WhatsappConversationDetail,
    WhatsappConversationRead,
    WhatsappStatusRead,
)
from neuron.services.whatsapp_conversation_service import WhatsappConversationService

router = APIRouter(
    prefix="/whatsapp",
    tags=["whatsapp"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.WHATSAPP_CONVERSATIONS)


@router.get("/status", response_model=WhatsappStatusRead)
def get_status(
    _claims=Depends(rbac["read"]),
    runtime: AppState = Depends(get_runtime),
) -> WhatsappStatusRead:
    state = runtime.channel_state
    return WhatsappStatusRead(
        connected=state.ready,
        since=state.since,
        last_disconnect_reason=state.last_disconnect_reason,
    )


@router.get("/conversations", response_model=Page[WhatsappConversationRead])
def list_conversations(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    status: Optional[ConversationStatus] = Query(None),
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> Page[WhatsappConversationRead]:
    """List conversations, optionally filtered by status."""
    service = WhatsappConversationService(db)
    query = service.conversations_query(status=status, sort=sort)
    return paginate(query, params=params)


@router.get(
    "/conversations/{conversation_id}", response_model=WhatsappConversationDetail
)
def get_conversation(
    conversation_id: UUID,
    _claims=Depends(rbac["read"]),
    db: Session = Depends(get_db),
) -> WhatsappConversationDetail:
    """Conversation with its contact and messages in creation order."""
    return WhatsappConversationService(db).get_with_messages(conversation_id)
