"""
SQLAlchemy Models for SEO Paths
"""

from ..database import Base
from .category import Category, CategoryType
from .redirect import CategoryRedirect
from .content import Content
from .forum import ForumThread, ForumReply
from .user import User
from .broker import Broker
from .sitemap_log import SitemapLog

# Export all models
__all__ = [
    "Base",
    "Category",
    "CategoryType",
    "CategoryRedirect",
    "Content",
    "ForumThread",
    "ForumReply",
    "User",
    "Broker",
    "SitemapLog",
]
