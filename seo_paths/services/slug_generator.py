"""URL slug generation with deterministic collision suffixes."""

import logging
import re
import unicodedata
from typing import Dict, Optional, Set

from sqlalchemy.orm import Session

from seo_paths.config import settings
from seo_paths.crud import crud_content, crud_forum_reply, crud_forum_thread
from seo_paths.crud.base import CRUDBase
from seo_paths.schemas.slug import EntityClass

logger = logging.getLogger(__name__)

_DISALLOWED_CHARS = re.compile(r"[^a-z0-9\s-]")
_SEPARATOR_RUNS = re.compile(r"[\s-]+")


def slugify(title: str, max_length: int = 60) -> str:
    """
    Normalize a title into a lowercase, punctuation-free slug.

    Example: "XAUUSD M5 Scalping Strategy!" -> "xauusd-m5-scalping-strategy"
    May return an empty string for titles without any letters or digits.
    """
    text = unicodedata.normalize("NFKD", title.lower())
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    text = _DISALLOWED_CHARS.sub("", text)
    text = _SEPARATOR_RUNS.sub("-", text).strip("-")
    return text[:max_length].rstrip("-")


def unique_slug(base_slug: str, existing: Set[str]) -> str:
    """Return `base_slug`, else the first free `base_slug-1`, `base_slug-2`, ..."""
    if base_slug not in existing:
        return base_slug

    counter = 1
    while f"{base_slug}-{counter}" in existing:
        counter += 1
    return f"{base_slug}-{counter}"


class SlugGenerator:
    """
    Produces slugs unique within an entity class.

    Suffixes are sequential, never random, so the result is reproducible for a
    given set of existing slugs. The table's unique constraint still guards
    against two concurrent callers picking the same free slug.
    """

    def __init__(self, max_length: Optional[int] = None):
        self.max_length = max_length or settings.SLUG_MAX_LENGTH
        self._stores: Dict[EntityClass, CRUDBase] = {
            EntityClass.CONTENT: crud_content,
            EntityClass.THREAD: crud_forum_thread,
            EntityClass.REPLY: crud_forum_reply,
        }

    def base_slug(self, title: str, entity_class: EntityClass) -> str:
        """Slug before uniqueness suffixing; falls back to the entity class name."""
        base = slugify(title, self.max_length)
        if not base:
            logger.info(
                f"[SLUG] Title {title!r} has no slug characters, using '{entity_class.value}' as base"
            )
            base = entity_class.value
        return base

    def generate_slug(self, db: Session, title: str, entity_class: EntityClass) -> str:
        """Return a slug not yet used by any entity of `entity_class`."""
        entity_class = EntityClass(entity_class)
        base = self.base_slug(title, entity_class)
        taken = self._stores[entity_class].get_slugs_like(db, base)
        slug = unique_slug(base, taken)
        if slug != base:
            logger.debug(f"[SLUG] {entity_class.value} slug {base!r} taken, using {slug!r}")
        return slug


# Singleton instance
slug_generator = SlugGenerator()
