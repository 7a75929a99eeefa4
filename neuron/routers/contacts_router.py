"""Contacts API. Create, list and read are public (site contact form)."""

from uuid import UUID

from fastapi import APIRouter, Depends
from fastapi_pagination import Page, Params
from fastapi_pagination.ext.sqlalchemy import paginate
from sqlalchemy.orm import Session

from neuron.auth.rbac import PUBLIC, build_rbac_dependencies
from neuron.constants.permissions import Resource
from neuron.constants.whatsapp import CONTACT_CREATED_EVENT
from neuron.core.app_state import AppState, get_runtime
from neuron.db import get_db
from neuron.schemas.contact import ContactCreate, ContactRead, ContactUpdate
from neuron.schemas.messaging import ContactCreatedEvent
from neuron.schemas.pagination import SortParams, sort_params
from neuron.services.contact_service import ContactService

router = APIRouter(
    prefix="/contacts",
    tags=["contacts"],
    responses={404: {"description": "Not found"}},
)

rbac = build_rbac_dependencies(Resource.CONTACTS)


@router.post("", response_model=ContactRead, status_code=201)
def create_contact(
    data: ContactCreate,
    _access=Depends(PUBLIC),
    db: Session = Depends(get_db),
    runtime: AppState = Depends(get_runtime),
) -> ContactRead:
    """Create a contact and publish contact.created (may start a conversation)."""
    contact = ContactService(db).create_contact(data)
    event = ContactCreatedEvent.model_validate(contact, from_attributes=True)
    runtime.events.publish(CONTACT_CREATED_EVENT, event)
    return contact


@router.get("", response_model=Page[ContactRead])
def list_contacts(
    params: Params = Depends(),
    sort: SortParams = Depends(sort_params),
    _access=Depends(PUBLIC),
    db: Session = Depends(get_db),
) -> Page[ContactRead]:
    """List contacts with pagination."""
    query = ContactService(db).list_query(sort=sort)
    return paginate(query, params=params)


@router.get("/{contact_id}", response_model=ContactRead)
def get_contact(
    contact_id: UUID,
    _access=Depends(PUBLIC),
    db: Session = Depends(get_db),
) -> ContactRead:
    return ContactService(db).get_or_404(contact_id)


@router.patch("/{contact_id}", response_model=ContactRead)
def update_contact(
    contact_id: UUID,
    data: ContactUpdate,
    _claims=Depends(rbac["update"]),
    db: Session = Depends(get_db),
) -> ContactRead:
    return ContactService(db).update_contact(contact_id, data)


@router.delete("/{contact_id}", status_code=204)
def delete_contact(
    contact_id: UUID,
    _claims=Depends(rbac["delete"]),
    db: Session = Depends(get_db),
) -> None:
    ContactService(db).delete_contact(contact_id)
