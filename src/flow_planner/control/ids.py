# src/flow_planner/control/ids.py

from __future__ import annotations

import logging
import uuid

from ..core.errors import IdGenerationError

logger = logging.getLogger(__name__)


def new_id() -> str:
    """
    Random v4 UUID in canonical text form.

    uuid4() draws from os.urandom(); if the OS randomness source fails the
    error is surfaced as IdGenerationError and never retried.
    """
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as e:
        logger.error("UUID generation failed: %s", e)
        raise IdGenerationError(f"cannot generate id: {e}") from e
