"""Services package for SEO Paths."""

from .path_resolver import path_resolver, CategoryPathResolver
from .slug_generator import slug_generator, SlugGenerator
from .redirect_registry import redirect_registry, RedirectRegistry
from .migration_engine import migration_engine, MigrationEngine
from .sitemap_assembler import sitemap_assembler, SitemapAssembler
from .indexer_notifier import indexer_notifier, IndexerNotifier

__all__ = [
    "path_resolver",
    "CategoryPathResolver",
    "slug_generator",
    "SlugGenerator",
    "redirect_registry",
    "RedirectRegistry",
    "migration_engine",
    "MigrationEngine",
    "sitemap_assembler",
    "SitemapAssembler",
    "indexer_notifier",
    "IndexerNotifier",
]
