"""
nomadlife.api.routes.events — Discord scheduled events
========================================================
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException

from nomadlife.api.deps import get_auth_gate, get_document_store
from nomadlife.api.responses import cached_list, ok
from nomadlife.services import events_service
from nomadlife.services.auth import AuthGate
from nomadlife.services.document_store import DocumentStore

router = APIRouter(tags=["events"])


@router.get("/events")
def list_events(store: DocumentStore = Depends(get_document_store)):
    """Upcoming and running events for the website."""
    events = events_service.load_events(store)
    shown = events_service.visible_events(events)
    return cached_list(
        events=shown,
        totalEvents=len(events),
        upcomingEvents=len(shown),
    )


@router.post("/events")
def replace_events(
    payload: Any = Body(None),
    authorization: Annotated[str | None, Header()] = None,
    store: DocumentStore = Depends(get_document_store),
    gate: AuthGate = Depends(get_auth_gate),
):
    """Bot pushes the full event list."""
    gate.require_bot(authorization)
    try:
        events_service.replace_events(store, payload)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return ok(message="Events updated successfully")
