"""
nomadlife.api.routes.teams — Team rosters
===========================================
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Header, HTTPException

from nomadlife.api.deps import get_auth_gate, get_document_store
from nomadlife.api.responses import cached_list, ok
from nomadlife.services import teams_service
from nomadlife.services.auth import AuthGate
from nomadlife.services.document_store import DocumentStore

router = APIRouter(tags=["teams"])


@router.get("/teams")
def list_teams(store: DocumentStore = Depends(get_document_store)):
    teams = teams_service.team_views(teams_service.load_teams(store))
    return cached_list(
        teams=teams,
        totalTeams=len(teams),
        totalMembers=sum(t["memberCount"] for t in teams),
    )


@router.post("/teams")
def replace_teams(
    payload: Any = Body(None),
    authorization: Annotated[str | None, Header()] = None,
    store: DocumentStore = Depends(get_document_store),
    gate: AuthGate = Depends(get_auth_gate),
):
    """Bot pushes every team, keyed by role id."""
    gate.require_bot(authorization)
    try:
        teams_service.replace_teams(store, payload)
    except ValueError as exc:
        raise HTTPException(400, str(exc)) from exc
    return ok(message="Teams updated successfully")
