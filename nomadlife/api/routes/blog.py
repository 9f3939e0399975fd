"""
nomadlife.api.routes.blog — Blog posts & admin password
=========================================================

One endpoint, dispatched on ``?action=``:

* ``get_blogs``        — public list, newest first
* ``login``            — check the admin panel password
* ``create_blog``      — admin token required
* ``delete_blog``      — admin token required
* ``change_password``  — admin token + current password required
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel

from nomadlife.api.deps import get_auth_gate, get_config_store, get_document_store
from nomadlife.api.responses import ok
from nomadlife.services import blog_service
from nomadlife.services.auth import AuthGate
from nomadlife.services.config_store import ConfigStore
from nomadlife.services.document_store import DocumentStore

router = APIRouter(tags=["blog"])
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Pydantic schemas
# ---------------------------------------------------------------------------
class BlogAction(BaseModel):
    """Union of the fields every action may send; each action reads its own.

    Post fields stay loose; ``blog_service.create_post`` coerces them.
    """
    authToken: str | None = None
    password: str | None = None
    oldPassword: str | None = None
    newPassword: str | None = None
    title: Any = None
    content: Any = None
    excerpt: Any = None
    files: Any = None
    blogId: str | int | None = None


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------
@router.api_route("/blog", methods=["GET", "POST"])
def blog_action(
    action: str | None = Query(None),
    body: BlogAction | None = None,
    store: DocumentStore = Depends(get_document_store),
    config_store: ConfigStore = Depends(get_config_store),
    gate: AuthGate = Depends(get_auth_gate),
):
    body = body or BlogAction()
    logger.info("Blog action: %s", action)

    if action == "get_blogs":
        return ok(blogs=blog_service.list_posts(store))

    if action == "login":
        password = body.password
        if not password:
            raise HTTPException(400, "Password is required")
        if not config_store.verify_password(password):
            raise HTTPException(401, "Invalid password")
        return ok()

    if action == "create_blog":
        gate.require_admin(body.authToken)
        try:
            post = blog_service.create_post(
                store,
                title=body.title,
                content=body.content,
                excerpt=body.excerpt,
                files=body.files,
            )
        except ValueError as exc:
            raise HTTPException(400, str(exc)) from exc
        return ok(blog=post)

    if action == "delete_blog":
        gate.require_admin(body.authToken)
        blog_id = body.blogId
        if not blog_id:
            raise HTTPException(400, "Blog ID is required")
        if not blog_service.delete_post(store, str(blog_id)):
            raise HTTPException(404, "Blog not found")
        return ok()

    if action == "change_password":
        gate.require_admin(body.authToken)
        old_password = body.oldPassword
        new_password = body.newPassword
        if not old_password or not new_password:
            raise HTTPException(400, "Old and new passwords are required")
        if not config_store.change_password(old_password, new_password):
            raise HTTPException(401, "Current password is incorrect")
        return ok(message="Password updated successfully")

    raise HTTPException(400, f"Invalid action: {action}")
