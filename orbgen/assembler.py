"""Combine the finalized actions and forwarding into the payload string."""

from __future__ import annotations

import logging
from typing import Sequence

from .errors import AssemblyError
from .schema import Action, Forwarding, Payload, SchemaError, encode_payload

logger = logging.getLogger(__name__)


def assemble(actions: Sequence[Action], forwarding: Forwarding | None) -> str:
    """Encode ``actions`` (in order) followed by ``forwarding``.

    Any schema rejection is raised as :class:`~orbgen.errors.AssemblyError`.
    """

    payload = Payload(pre_actions=tuple(actions), forwarding=forwarding)
    try:
        encoded = encode_payload(payload)
    except SchemaError as exc:
        logger.error("Payload assembly failed: %s", exc)
        raise AssemblyError(f"failed to build final payload: {exc}") from exc
    logger.info(
        "Assembled payload",
        extra={"action_count": len(payload.pre_actions), "payload_length": len(encoded)},
    )
    return encoded
