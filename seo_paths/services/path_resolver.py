"""Category path resolution: parent pointers -> hierarchical URL paths."""

import logging
from typing import List, NamedTuple, Optional, Tuple

from sqlalchemy.orm import Session

from seo_paths.config import settings
from seo_paths.core.path_cache import PathCache
from seo_paths.crud import crud_category
from seo_paths.models.category import Category
from seo_paths.models.content import Content
from seo_paths.models.forum import ForumThread
from seo_paths.schemas.category import Breadcrumb

logger = logging.getLogger(__name__)

PATH_SEPARATOR = "/"


class ResolvedPath(NamedTuple):
    """Result of walking a category's parent chain."""
    segments: List[str]
    cycle_detected: bool = False
    dangling_parent: bool = False
    from_cache: bool = False

    @property
    def anomaly(self) -> bool:
        """The walk was cut short by corrupt parent data."""
        return self.cycle_detected or self.dangling_parent

    @property
    def found(self) -> bool:
        return bool(self.segments)

    @property
    def path(self) -> str:
        return PATH_SEPARATOR.join(self.segments)


class ParsedCategoryUrl(NamedTuple):
    """A `/category/...` URL split into category path and trailing slug."""
    category_path: str
    content_slug: Optional[str]
    is_category: bool


def split_path(path: str) -> List[str]:
    """Split a hierarchical path into non-empty segments, dropping the URL prefix."""
    cleaned = path.strip().lstrip("/")
    # "/category/a/b" and "category/a/b" both address "a/b"
    prefix = settings.CATEGORY_URL_PREFIX.strip("/") + "/"
    if cleaned.startswith(prefix):
        cleaned = cleaned[len(prefix):]
    return [segment for segment in cleaned.split(PATH_SEPARATOR) if segment]


def parse_hierarchical_url(url_path: str) -> ParsedCategoryUrl:
    """
    Parse a hierarchical URL into category path and trailing slug.

    A single segment is a root category. With more segments the last one may be
    a content/thread slug or a subcategory; the caller has to check which.

    Example:
        "/category/trading-strategies/scalping-m1-m15/my-thread" ->
        ("trading-strategies/scalping-m1-m15", "my-thread", False)
    """
    segments = split_path(url_path)
    if len(segments) <= 1:
        return ParsedCategoryUrl(
            category_path=segments[0] if segments else "",
            content_slug=None,
            is_category=True,
        )
    return ParsedCategoryUrl(
        category_path=PATH_SEPARATOR.join(segments[:-1]),
        content_slug=segments[-1],
        is_category=False,
    )


class CategoryPathResolver:
    """
    Resolve leaf categories to root-first slug paths.

    The category tree is never materialized: categories stay in the flat store
    keyed by id and the tree is just this walk over `parent_id`. Every walk
    carries a visited set, so corrupt data with cycles terminates.
    """

    def __init__(self, cache: Optional[PathCache] = None, url_prefix: Optional[str] = None):
        self.cache = cache if cache is not None else PathCache(settings.PATH_CACHE_TTL_SECONDS)
        self.url_prefix = (url_prefix or settings.CATEGORY_URL_PREFIX).rstrip("/")

    # ----- Walk -----
    def _walk(self, db: Session, leaf_id: str) -> Tuple[List[Category], bool, bool]:
        """Return the chain root-first, whether a cycle cut it short and whether a parent was missing."""
        chain: List[Category] = []
        visited: set[str] = set()
        current_id: Optional[str] = leaf_id

        while current_id:
            if current_id in visited:
                logger.warning(
                    f"[PATH] Cycle detected in category parents: leaf={leaf_id}, "
                    f"repeated={current_id}, partial path={PATH_SEPARATOR.join(c.slug for c in chain)}"
                )
                return chain, True, False
            visited.add(current_id)

            category = crud_category.get(db, current_id)
            if category is None:
                if not chain:
                    break
                logger.warning(
                    f"[PATH] Dangling parent reference {current_id} while resolving {leaf_id}"
                )
                return chain, False, True

            chain.insert(0, category)
            current_id = category.parent_id

        return chain, False, False

    def resolve(self, db: Session, leaf_id: str) -> ResolvedPath:
        """
        Resolve a leaf category id.

        Cache hits do not touch the store. Only clean walks are cached, so a
        cycle or a dangling parent keeps being reported until the data is fixed.
        """
        cached = self.cache.get(leaf_id)
        if cached is not None:
            return ResolvedPath(segments=cached.split(PATH_SEPARATOR), from_cache=True)

        chain, cycle_detected, dangling_parent = self._walk(db, leaf_id)
        resolved = ResolvedPath(
            segments=[category.slug for category in chain],
            cycle_detected=cycle_detected,
            dangling_parent=dangling_parent,
        )
        if resolved.found and not resolved.anomaly:
            self.cache.set(leaf_id, resolved.path)
        return resolved

    def resolve_path_segments(self, db: Session, leaf_id: str) -> List[str]:
        """Root-first slugs; empty list means the category does not exist."""
        return self.resolve(db, leaf_id).segments

    def resolve_path(self, db: Session, leaf_id: str) -> str:
        """Slugs joined with '/'; empty string means the category does not exist."""
        return self.resolve(db, leaf_id).path

    def resolve_path_by_slug(self, db: Session, slug: str) -> str:
        """Resolve a category addressed by its own slug."""
        category = crud_category.get_by_slug(db, slug)
        if category is None:
            return ""
        return self.resolve_path(db, category.id)

    def breadcrumbs(self, db: Session, leaf_id: str) -> List[Breadcrumb]:
        """Breadcrumbs from root to leaf, each with its category URL."""
        chain, _, _ = self._walk(db, leaf_id)
        crumbs: List[Breadcrumb] = []
        slugs: List[str] = []
        for category in chain:
            slugs.append(category.slug)
            crumbs.append(
                Breadcrumb(
                    name=category.name,
                    slug=category.slug,
                    url=self.path_url(PATH_SEPARATOR.join(slugs)),
                )
            )
        return crumbs

    def clear_cache(self) -> int:
        """Invalidate every cached path (call after restructuring categories)."""
        return self.cache.clear()

    # ----- Reverse lookup -----
    def locate_by_path(self, db: Session, path: str, *, strict: bool = False) -> Optional[Category]:
        """
        Find the category a hierarchical path addresses.

        Only the final segment is authoritative: intermediate segments are not
        checked against the parent chain unless `strict` is set, so
        "wrong-parent/real-leaf" still resolves to "real-leaf".
        """
        segments = split_path(path)
        if not segments:
            return None

        category = crud_category.get_by_slug(db, segments[-1])
        if category is None or not strict:
            return category

        actual = self.resolve_path_segments(db, category.id)
        if actual != segments:
            logger.info(
                f"[PATH] Strict lookup rejected {path!r}: canonical path is {PATH_SEPARATOR.join(actual)!r}"
            )
            return None
        return category

    def locate_by_url(self, db: Session, url_path: str) -> Optional[Tuple[Category, Optional[str]]]:
        """
        Find what a `/category/...` URL points at.

        Returns `(category, None)` for a category page and `(category, slug)` for a
        thread or content page under it. The last segment is tried as a category
        slug first, as subcategory pages and entity pages share the URL shape.
        """
        parsed = parse_hierarchical_url(url_path)
        if parsed.is_category:
            category = self.locate_by_path(db, parsed.category_path)
            return (category, None) if category is not None else None

        subcategory = crud_category.get_by_slug(db, parsed.content_slug)
        if subcategory is not None:
            return subcategory, None

        parent = self.locate_by_path(db, parsed.category_path)
        if parent is None:
            return None
        return parent, parsed.content_slug

    # ----- URL builders -----
    def path_url(self, path: str, slug: Optional[str] = None) -> str:
        """`/category/<path>`, with `/<slug>` appended when given."""
        url = f"{self.url_prefix}/{path}"
        return f"{url}/{slug}" if slug else url

    def entity_url(
        self,
        db: Session,
        category_id: str,
        slug: Optional[str] = None,
        *,
        canonical_only: bool = False
    ) -> Optional[str]:
        """
        URL of a category, or of an entity slug under it.

        None when the category does not exist. With `canonical_only`, also None
        when the walk was cut short by a cycle or a dangling parent.
        """
        resolved = self.resolve(db, category_id)
        if not resolved.found or (canonical_only and resolved.anomaly):
            return None
        return self.path_url(resolved.path, slug)

    def category_url(self, db: Session, category_id: str, *, canonical_only: bool = False) -> Optional[str]:
        """`/category/<path>`."""
        return self.entity_url(db, category_id, canonical_only=canonical_only)

    def thread_url(self, db: Session, thread: ForumThread, *, canonical_only: bool = False) -> Optional[str]:
        """`/category/<path>/<thread-slug>`."""
        return self.entity_url(db, thread.category_id, thread.slug, canonical_only=canonical_only)

    def content_url(self, db: Session, content: Content, *, canonical_only: bool = False) -> Optional[str]:
        """`/category/<path>/<content-slug>`."""
        return self.entity_url(db, content.category, content.slug, canonical_only=canonical_only)

    @staticmethod
    def broker_url(broker_slug: str) -> str:
        return f"/brokers/{broker_slug}"

    @staticmethod
    def user_url(username: str) -> str:
        return f"/user/{username}"


# Singleton instance
path_resolver = CategoryPathResolver()
