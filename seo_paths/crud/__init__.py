"""CRUD operations package - exports singleton instances for all models."""

from .base import CRUDBase
from .category import crud_category
from .redirect import crud_redirect
from .content import crud_content
from .forum import crud_forum_thread, crud_forum_reply
from .profiles import crud_user, crud_broker
from .sitemap_log import crud_sitemap_log


__all__ = [
    # Base
    "CRUDBase",
    # CRUD instances
    "crud_category",
    "crud_redirect",
    "crud_content",
    "crud_forum_thread",
    "crud_forum_reply",
    "crud_user",
    "crud_broker",
    "crud_sitemap_log",
]
