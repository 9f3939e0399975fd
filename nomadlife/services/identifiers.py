"""Discord snowflakes and other 64-bit ids, kept as decimal strings."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def as_id(value) -> str | None:
    """Return *value* as an id string, or ``None`` for a missing id.

    Integers convert exactly.  A float means precision was already lost
    upstream; it is converted without an exponent and logged.
    """
    if value is None or value == "":
        return None
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            logger.warning("Identifier %r arrived as a float; precision may be lost", value)
            return str(int(value))
        return repr(value)
    return str(value)
