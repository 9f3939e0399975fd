"""
nomadlife.services.teams_service — Team rosters
=================================================

The bot pushes every team as one object keyed by Discord role id::

    {"<roleId>": {"name": ..., "leader_id": ..., "leader_name": ...,
                  "members": [<id>, ...],
                  "member_details": [{"id": ..., "username": ...}],
                  "created_at": ...}}

Every Discord id is normalised to a string before it is stored, and
again when it is read back, so large snowflakes never pass through a
float.
"""

from __future__ import annotations

import logging

from nomadlife.constants import TEAMS_DOCUMENT, placeholder_username
from nomadlife.services.document_store import DocumentStore
from nomadlife.services.identifiers import as_id

logger = logging.getLogger(__name__)


def _normalise_team(team: dict) -> dict:
    team = dict(team)
    for field in ("leader_id", "leader"):
        if field in team and team[field] is not None:
            team[field] = as_id(team[field])
    if isinstance(team.get("members"), list):
        team["members"] = [as_id(m) for m in team["members"]]
    if isinstance(team.get("member_details"), list):
        team["member_details"] = [
            {**m, "id": as_id(m.get("id"))} if isinstance(m, dict) else m
            for m in team["member_details"]
        ]
    return team


def replace_teams(store: DocumentStore, teams) -> int:
    """Overwrite the stored teams.  Returns the team count."""
    if not isinstance(teams, dict):
        raise ValueError("No teams data provided")
    normalised = {
        str(role_id): _normalise_team(team) if isinstance(team, dict) else team
        for role_id, team in teams.items()
    }
    store.replace_document(TEAMS_DOCUMENT, normalised)
    logger.info("Teams data updated by bot - %d teams", len(normalised))
    return len(normalised)


def load_teams(store: DocumentStore) -> dict:
    teams = store.load_document(TEAMS_DOCUMENT, default={})
    if not isinstance(teams, dict):
        logger.warning("Stored teams document is not an object; ignoring it")
        return {}
    return teams


def team_view(role_id: str, team: dict) -> dict:
    """Website-facing shape of one team."""
    leader_id = as_id(team.get("leader_id") or team.get("leader"))
    leader_name = team.get("leader_name") or placeholder_username(leader_id)

    members: list[dict] = []
    if isinstance(team.get("member_details"), list):
        members = [
            {"id": as_id(m.get("id")), "username": m.get("username")}
            for m in team["member_details"]
            if isinstance(m, dict)
        ]
    elif isinstance(team.get("members"), list):
        members = [
            {"id": as_id(m), "username": placeholder_username(as_id(m))}
            for m in team["members"]
        ]

    return {
        "roleId": str(role_id),
        "name": team.get("name") or "undefined",
        "leader": leader_id,
        "leaderName": leader_name,
        "members": members,
        "createdAt": team.get("created_at"),
        "memberCount": len(members),
    }


def team_views(teams: dict) -> list[dict]:
    return [
        team_view(role_id, team)
        for role_id, team in teams.items()
        if isinstance(team, dict)
    ]
