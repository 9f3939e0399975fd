"""
nomadlife.api.routes.token — Admin token hand-out
===================================================

The admin panel trades the admin password for ``ADMIN_TOKEN``, which it
then sends as ``authToken`` on every write.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel

from nomadlife.api.deps import get_config, get_config_store
from nomadlife.api.responses import ok
from nomadlife.config import ConfigurationError, NomadConfig
from nomadlife.services.config_store import ConfigStore

router = APIRouter(tags=["auth"])
logger = logging.getLogger(__name__)


class TokenRequest(BaseModel):
    password: str | None = None


@router.post("/get-token")
def get_token(
    body: TokenRequest | None = None,
    cfg: NomadConfig = Depends(get_config),
    config_store: ConfigStore = Depends(get_config_store),
):
    if not cfg.admin_token:
        logger.error("ADMIN_TOKEN environment variable is not set!")
        raise ConfigurationError(
            "Token not configured. Please set ADMIN_TOKEN in the environment."
        )

    password = body.password if body else None
    if not password:
        raise HTTPException(400, "Password is required")
    if not config_store.verify_password(password):
        logger.info("Token request with wrong password")
        raise HTTPException(403, "Forbidden")

    return ok(token=cfg.admin_token)
