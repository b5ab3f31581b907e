from __future__ import annotations

import logging
from typing import Protocol
from urllib.parse import quote

from evalsys.core.constants import CATEGORY_ENTITY_PREFIX
from evalsys.core.errors import InvalidCategoryError

logger = logging.getLogger(__name__)

# delimiters of the entity reference scheme: /prefix/id[.ext][?query][#fragment]
RESERVED_ID_CHARS = set('/\\?#&=%:')


class EntityUrlBuilder(Protocol):
    def entity_url(self, prefix: str, entity_id: str) -> str: ...


class DirectEntityUrlBuilder:
    """Builds `<base_url>/<prefix>/<id>` references; raises ValueError for unusable ids."""

    def __init__(self, base_url: str = ""):
        self.base_url = base_url.rstrip("/")

    def entity_url(self, prefix: str, entity_id: str) -> str:
        if not entity_id or entity_id.strip() == "":
            raise ValueError("entity id must not be blank")
        if entity_id in (".", ".."):
            raise ValueError(f"entity id cannot be a dot segment: {entity_id!r}")
        bad = sorted({c for c in entity_id if c in RESERVED_ID_CHARS or ord(c) < 32 or ord(c) == 127})
        if bad:
            raise ValueError(f"entity id contains illegal characters: {''.join(bad)!r}")
        return f"{self.base_url}/{prefix}/{quote(entity_id, safe='')}"


def validate_eval_category(category: str | None, *, entity_urls: EntityUrlBuilder) -> None:
    """
    Check that a free-text category can be embedded in an entity reference.
    Empty and missing categories are always valid.
    """
    if not category:
        return
    try:
        entity_urls.entity_url(CATEGORY_ENTITY_PREFIX, category)
    except ValueError as e:
        logger.debug("Rejected evaluation category %r: %s", category, e)
        raise InvalidCategoryError(f"Invalid evaluation category: {e}", category) from e
