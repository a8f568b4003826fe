"""Dashboard layout persistence.

Layouts are opaque JSON stored per (user, screen size). Saving
overwrites; loading degrades unparseable rows to an empty list.
"""

from __future__ import annotations

import json
import logging
import uuid
from typing import Any

from finfly.db import repo
from finfly.db.repo import DbSession
from finfly.models.domain import LayoutEntity

logger = logging.getLogger(__name__)

MAX_SCREEN_SIZE_LENGTH = 32


class LayoutError(ValueError):
    """Raised when a layout payload cannot be stored."""


def save_layouts(session: DbSession, user_id: str, layouts: Any) -> list[str]:
    """Upsert every screen-size layout in the mapping.

    Args:
        session: Database session.
        user_id: Owner of the layouts.
        layouts: Mapping of screen size to JSON-serializable layout.

    Returns:
        Screen sizes that were written.

    Raises:
        LayoutError: If layouts is not a mapping or a key is unusable.
    """
    if not isinstance(layouts, dict):
        raise LayoutError("Layouts are required")

    saved = []
    for screen_size, layout in layouts.items():
        if not screen_size or len(screen_size) > MAX_SCREEN_SIZE_LENGTH:
            raise LayoutError(f"Invalid screen size: {screen_size!r}")
        entity = LayoutEntity(
            user_id=user_id,
            screen_size=screen_size,
            layout_json=json.dumps(layout),
        )
        repo.upsert_layout(session, entity, layout_id=str(uuid.uuid4()))
        saved.append(screen_size)

    repo.commit(session)
    logger.info("layouts_saved user_id=%s screen_sizes=%s", user_id, ",".join(saved))
    return saved


def load_layouts(session: DbSession, user_id: str) -> dict[str, Any]:
    """Return stored layouts keyed by screen size; {} if none saved."""
    result: dict[str, Any] = {}
    for entity in repo.get_layouts_for_user(session, user_id):
        result[entity.screen_size] = parse_layout(entity)
    return result


def parse_layout(entity: LayoutEntity) -> Any:
    try:
        return json.loads(entity.layout_json)
    except (json.JSONDecodeError, TypeError):
        logger.warning(
            "layout_parse_failed user_id=%s screen_size=%s",
            entity.user_id,
            entity.screen_size,
        )
        return []
