"""Site URL inventory and sitemap XML serialization."""

import logging
from datetime import date, datetime
from typing import Callable, List, Optional, Sequence
from xml.sax.saxutils import escape

from sqlalchemy.orm import Session

from seo_paths.config import settings
from seo_paths.crud import (
    crud_broker,
    crud_category,
    crud_content,
    crud_forum_thread,
    crud_user,
)
from seo_paths.schemas.sitemap import SitemapBuild, SitemapEntry
from seo_paths.services.path_resolver import CategoryPathResolver, path_resolver

logger = logging.getLogger(__name__)

SITEMAP_NAMESPACE = "http://www.sitemaps.org/schemas/sitemap/0.9"
_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _lastmod(updated_at: Optional[datetime], created_at: Optional[datetime], today: date) -> date:
    stamp = updated_at or created_at
    return stamp.date() if stamp else today


class SitemapAssembler:
    """
    Builds the full list of public URLs.

    Entities whose category cannot be resolved, or whose parent chain hits a
    cycle or a dangling parent, are kept in the build, flagged `resolved=False`,
    and left out of the XML.
    """

    def __init__(
        self,
        resolver: Optional[CategoryPathResolver] = None,
        base_url: Optional[str] = None,
        static_pages: Optional[Sequence[str]] = None,
        max_urls: Optional[int] = None,
        today: Optional[Callable[[], date]] = None,
    ):
        self.resolver = resolver or path_resolver
        self.base_url = (base_url or settings.SITE_BASE_URL).rstrip("/")
        self.static_pages = list(settings.SITEMAP_STATIC_PAGES if static_pages is None else static_pages)
        self.max_urls = max_urls or settings.SITEMAP_MAX_URLS
        self._today = today or date.today

    # ----- Inventory -----
    def build_sitemap(self, db: Session) -> SitemapBuild:
        """Collect one entry per publishable entity, homepage first."""
        today = self._today()
        entries: List[SitemapEntry] = [
            SitemapEntry(loc=self.base_url, lastmod=today, entity_type="home"),
        ]

        for page in self.static_pages:
            entries.append(
                SitemapEntry(loc=f"{self.base_url}/{page.lstrip('/')}", lastmod=today, entity_type="static")
            )

        for category in crud_category.get_all_active(db):
            entries.append(
                self._entry(
                    url=self.resolver.category_url(db, category.id, canonical_only=True),
                    fallback_url=self.resolver.path_url(category.slug),
                    lastmod=_lastmod(category.updated_at, category.created_at, today),
                    entity_type="category",
                    entity_id=category.id,
                )
            )

        for thread in crud_forum_thread.get_live(db):
            entries.append(
                self._entry(
                    url=self.resolver.thread_url(db, thread, canonical_only=True),
                    fallback_url=self.resolver.path_url(thread.category_id, thread.slug),
                    lastmod=_lastmod(thread.updated_at, thread.created_at, today),
                    entity_type="thread",
                    entity_id=thread.id,
                )
            )

        for item in crud_content.get_live(db):
            entries.append(
                self._entry(
                    url=self.resolver.content_url(db, item, canonical_only=True),
                    fallback_url=self.resolver.path_url(item.category, item.slug),
                    lastmod=_lastmod(item.updated_at, item.created_at, today),
                    entity_type="content",
                    entity_id=item.id,
                )
            )

        for user in crud_user.get_all_active(db):
            entries.append(
                SitemapEntry(
                    loc=f"{self.base_url}{self.resolver.user_url(user.username)}",
                    lastmod=_lastmod(user.updated_at, None, today),
                    entity_type="user",
                )
            )

        for broker in crud_broker.get_all(db):
            entries.append(
                SitemapEntry(
                    loc=f"{self.base_url}{self.resolver.broker_url(broker.slug)}",
                    lastmod=_lastmod(broker.updated_at, broker.created_at, today),
                    entity_type="broker",
                )
            )

        unresolved = sum(1 for entry in entries if not entry.resolved)
        if unresolved:
            logger.warning(f"[SITEMAP] {unresolved} entries have no canonical category path and are left out of the XML")
        logger.info(f"[SITEMAP] Built inventory with {len(entries)} entries")
        return SitemapBuild(entries=entries, unresolved_count=unresolved)

    def _entry(
        self,
        *,
        url: Optional[str],
        fallback_url: str,
        lastmod: date,
        entity_type: str,
        entity_id: str,
    ) -> SitemapEntry:
        resolved = url is not None
        if not resolved:
            logger.warning(f"[SITEMAP] No canonical category path for {entity_type} {entity_id}, using {fallback_url}")
            url = fallback_url
        return SitemapEntry(loc=f"{self.base_url}{url}", lastmod=lastmod, entity_type=entity_type, resolved=resolved)

    # ----- Serialization -----
    def render_urlset(self, entries: Sequence[SitemapEntry]) -> str:
        """
        Serialize resolved entries into one `<urlset>` document.

        Raises:
            ValueError: more resolved entries than one sitemap file may hold
        """
        resolved = [entry for entry in entries if entry.resolved]
        if len(resolved) > self.max_urls:
            raise ValueError(
                f"{len(resolved)} URLs exceed the {self.max_urls} per-file limit; use render_sitemaps()"
            )

        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<urlset xmlns="{SITEMAP_NAMESPACE}">',
        ]
        for entry in resolved:
            lines.append("  <url>")
            lines.append(f"    <loc>{escape(entry.loc, _XML_ENTITIES)}</loc>")
            lines.append(f"    <lastmod>{entry.lastmod.isoformat()}</lastmod>")
            lines.append("  </url>")
        lines.append("</urlset>")
        return "\n".join(lines)

    def render_sitemaps(self, build: SitemapBuild) -> List[str]:
        """Split the resolved entries into `<urlset>` documents of at most `max_urls` URLs."""
        resolved = [entry for entry in build.entries if entry.resolved]
        if not resolved:
            return [self.render_urlset([])]
        return [
            self.render_urlset(resolved[start:start + self.max_urls])
            for start in range(0, len(resolved), self.max_urls)
        ]

    def render_sitemap_index(self, sitemap_count: int, lastmod: Optional[date] = None) -> str:
        """`<sitemapindex>` pointing at `/sitemap-1.xml` ... `/sitemap-N.xml`."""
        lastmod = lastmod or self._today()
        lines = [
            '<?xml version="1.0" encoding="UTF-8"?>',
            f'<sitemapindex xmlns="{SITEMAP_NAMESPACE}">',
        ]
        for number in range(1, sitemap_count + 1):
            lines.append("  <sitemap>")
            lines.append(f"    <loc>{escape(self.sitemap_url(number), _XML_ENTITIES)}</loc>")
            lines.append(f"    <lastmod>{lastmod.isoformat()}</lastmod>")
            lines.append("  </sitemap>")
        lines.append("</sitemapindex>")
        return "\n".join(lines)

    def sitemap_url(self, number: Optional[int] = None) -> str:
        """Public URL of the sitemap (or of one numbered chunk)."""
        if number is None:
            return f"{self.base_url}/sitemap.xml"
        return f"{self.base_url}/sitemap-{number}.xml"


# Singleton instance
sitemap_assembler = SitemapAssembler()
