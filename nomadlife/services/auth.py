"""
nomadlife.services.auth — Static secret checks
================================================

Two kinds of writers exist:

* the admin panel, which sends ``authToken`` in the JSON body and must
  match ``ADMIN_TOKEN``;
* the Discord bot / Minecraft mod, which sends
  ``Authorization: Bearer <BOT_SECRET>``.

Comparison is plain string equality.  A missing server-side secret is a
deployment problem and raises :class:`ConfigurationError`; a wrong or
missing client value raises :class:`Unauthorized`.
"""

from __future__ import annotations

import logging

from nomadlife.config import ConfigurationError, NomadConfig

logger = logging.getLogger(__name__)


class Unauthorized(Exception):
    """The caller's token or secret did not match."""


class AuthGate:
    def __init__(self, cfg: NomadConfig) -> None:
        self.admin_token = cfg.admin_token
        self.bot_secret = cfg.bot_secret

    # ------------------------------------------------------------------
    # Boolean checks
    # ------------------------------------------------------------------
    def authorize_admin(self, supplied: str | None) -> bool:
        return bool(self.admin_token) and supplied == self.admin_token

    def authorize_bot(self, supplied_header: str | None) -> bool:
        return bool(self.bot_secret) and supplied_header == f"Bearer {self.bot_secret}"

    # ------------------------------------------------------------------
    # Raising variants used by the routes
    # ------------------------------------------------------------------
    def require_admin(self, supplied: str | None) -> None:
        if not self.admin_token:
            logger.error("ADMIN_TOKEN is not set!")
            raise ConfigurationError("Admin token not configured.")
        if not self.authorize_admin(supplied):
            logger.info("Admin auth failed")
            raise Unauthorized("Unauthorized")

    def require_bot(self, supplied_header: str | None) -> None:
        if not self.bot_secret:
            logger.error("BOT_SECRET is not set!")
            raise ConfigurationError("Bot secret not configured.")
        if not self.authorize_bot(supplied_header):
            logger.info("Bot auth failed")
            raise Unauthorized("Unauthorized")
