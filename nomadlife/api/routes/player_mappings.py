"""
nomadlife.api.routes.player_mappings — Discord ↔ Minecraft accounts
=====================================================================

Read by the website and by the Minecraft server mod.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException

from nomadlife.api.deps import get_auth_gate, get_document_store
from nomadlife.api.responses import cached_list, ok
from nomadlife.services import mappings_service
from nomadlife.services.auth import AuthGate
from nomadlife.services.document_store import DocumentStore

router = APIRouter(tags=["player-mappings"])


@router.get("/player-mappings")
def list_mappings(store: DocumentStore = Depends(get_document_store)):
    mappings = mappings_service.mapping_views(mappings_service.load_mappings(store))
    return cached_list(mappings=mappings, totalPlayers=len(mappings))


@router.post("/player-mappings")
def replace_mappings(
    payload: Any = Body(None),
    authorization: Annotated[str | None, Header()] = None,
    store: DocumentStore = Depends(get_document_store),
    gate: AuthGate = Depends(get_auth_gate),
):
    gate.require_bot(authorization)
    try:
        mappings_service.replace_mappings(store, payload)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return ok(message="Player mappings updated successfully")
