"""
nomadlife.api.routes.stats — Player statistics
================================================
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException

from nomadlife.api.deps import get_auth_gate, get_document_store
from nomadlife.api.responses import cached_list, ok
from nomadlife.services import stats_service
from nomadlife.services.auth import AuthGate
from nomadlife.services.document_store import DocumentStore

router = APIRouter(tags=["stats"])


@router.get("/stats")
def list_stats(store: DocumentStore = Depends(get_document_store)):
    players = stats_service.list_stats(store)
    return cached_list(players=players, totalPlayers=len(players))


@router.post("/stats")
def upsert_stats(
    payload: Any = Body(None),
    authorization: Annotated[str | None, Header()] = None,
    store: DocumentStore = Depends(get_document_store),
    gate: AuthGate = Depends(get_auth_gate),
):
    """Minecraft mod upserts a batch of player records by uuid."""
    gate.require_bot(authorization)
    try:
        count = stats_service.upsert_stats(store, payload)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return ok(message="Stats updated successfully", updated=count)
