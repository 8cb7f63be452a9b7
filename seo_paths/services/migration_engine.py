"""Migration of content from legacy flat categories into the nested tree."""

import logging
from typing import Callable, Dict, List, Mapping, Optional, Set, Tuple

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seo_paths.config import settings
from seo_paths.core.exceptions import UnmappedLegacyCategory
from seo_paths.crud import crud_category, crud_content
from seo_paths.models.category import Category
from seo_paths.models.content import Content
from seo_paths.schemas.migration import (
    MappingTier,
    MigrationItemOutcome,
    MigrationResult,
    MigrationStatus,
)
from seo_paths.services.path_resolver import CategoryPathResolver, path_resolver
from seo_paths.services.redirect_registry import RedirectRegistry, redirect_registry

logger = logging.getLogger(__name__)

# Known legacy slugs -> new category slugs, for values with no structural link left.
# Extend this when a migration run reports unmapped values.
LEGACY_CATEGORY_FALLBACKS: Dict[str, str] = {
    "scalping-eas": "expert-advisors",
    "grid-trading-eas": "expert-advisors",
    "trend-following-eas": "expert-advisors",
    "news-trading-eas": "expert-advisors",
    "breakout-eas": "expert-advisors",
    "mt4-eas": "expert-advisors",
    "mt5-eas": "expert-advisors",
    "ctrader-robots": "expert-advisors",
    "oscillators-momentum": "indicators",
    "volume-indicators": "indicators",
    "sr-tools": "indicators",
    "template-packs": "indicators",
    "source-code": "source-code",
    "trading-strategies": "strategies",
    "ea-library": "expert-advisors",
    "ea": "expert-advisors",
    "indicator": "indicators",
}

MappingStrategy = Callable[[str], Optional[str]]


class CategorySnapshot:
    """Category id lookups taken once at the start of a run."""

    def __init__(self, categories: List[Category]):
        self.ids: Set[str] = {c.id for c in categories}
        self.id_by_slug: Dict[str, str] = {c.slug: c.id for c in categories}
        self.id_by_old_slug: Dict[str, str] = {}
        for category in categories:
            if category.old_slug and category.old_slug not in self.id_by_old_slug:
                self.id_by_old_slug[category.old_slug] = category.id


def direct_id_match(snapshot: CategorySnapshot) -> MappingStrategy:
    """Tier 1: the value already is a new category id (makes reruns no-ops)."""
    def match(legacy_value: str) -> Optional[str]:
        return legacy_value if legacy_value in snapshot.ids else None
    return match


def old_slug_match(snapshot: CategorySnapshot) -> MappingStrategy:
    """Tier 2: the value equals a new category's recorded old slug."""
    def match(legacy_value: str) -> Optional[str]:
        return snapshot.id_by_old_slug.get(legacy_value)
    return match


def fallback_table_match(snapshot: CategorySnapshot, table: Mapping[str, str]) -> MappingStrategy:
    """Tier 3: hand-maintained legacy slug -> new slug table (case-insensitive)."""
    def match(legacy_value: str) -> Optional[str]:
        new_slug = table.get(legacy_value.lower())
        if not new_slug:
            return None
        return snapshot.id_by_slug.get(new_slug)
    return match


def build_strategies(
    snapshot: CategorySnapshot,
    fallbacks: Mapping[str, str],
) -> List[Tuple[MappingTier, MappingStrategy]]:
    """Mapping strategies in the order they are tried."""
    return [
        (MappingTier.DIRECT_ID, direct_id_match(snapshot)),
        (MappingTier.OLD_SLUG, old_slug_match(snapshot)),
        (MappingTier.FALLBACK_TABLE, fallback_table_match(snapshot, fallbacks)),
    ]


def map_legacy_category(
    legacy_value: str,
    strategies: List[Tuple[MappingTier, MappingStrategy]],
) -> Tuple[Optional[str], Optional[MappingTier]]:
    """First strategy that produces a category id wins."""
    for tier, strategy in strategies:
        category_id = strategy(legacy_value)
        if category_id:
            return category_id, tier
    return None, None


class MigrationEngine:
    """
    Reassigns content from legacy category values to new category ids.

    Each item is independent: a failure is counted and the run continues, and
    an interrupted run can simply be started again. Legacy URLs are redirected
    before an item is reassigned, so an item is never migrated without its
    redirects. Content counts are recomputed once every item is done.
    """

    def __init__(
        self,
        resolver: Optional[CategoryPathResolver] = None,
        registry: Optional[RedirectRegistry] = None,
        fallbacks: Optional[Mapping[str, str]] = None,
    ):
        self.resolver = resolver or path_resolver
        self.registry = registry or redirect_registry
        self.fallbacks = LEGACY_CATEGORY_FALLBACKS if fallbacks is None else fallbacks
        self.legacy_prefix = settings.LEGACY_MARKETPLACE_PREFIX.rstrip("/")

    def run_migration(self, db: Session, *, dry_run: bool = False) -> MigrationResult:
        """
        Migrate every content item carrying a legacy category value.

        Store errors while loading categories or content propagate; errors
        writing a single item are counted as failures.
        """
        logger.info(f"[MIGRATION] Starting content category migration (dry_run={dry_run})")

        snapshot = CategorySnapshot(crud_category.get_all(db))
        strategies = build_strategies(snapshot, self.fallbacks)
        items = crud_content.get_all(db)

        result = MigrationResult(dry_run=dry_run)
        for item in items:
            outcome = self._migrate_item(db, item, strategies, result, dry_run=dry_run)
            result.outcomes.append(outcome)
            if outcome.status == MigrationStatus.MIGRATED:
                result.migrated += 1
            elif outcome.status == MigrationStatus.FAILED:
                result.failed += 1
            else:
                result.skipped += 1

        if not dry_run:
            self.recompute_content_counts(db)

        logger.info(
            f"[MIGRATION] Finished: migrated={result.migrated}, failed={result.failed}, "
            f"skipped={result.skipped}, redirects_created={result.redirects_created}"
        )
        if result.failed:
            logger.warning(
                f"[MIGRATION] {result.failed} item(s) could not be migrated; "
                f"extend LEGACY_CATEGORY_FALLBACKS for unmapped values"
            )
        return result

    def _migrate_item(
        self,
        db: Session,
        item: Content,
        strategies: List[Tuple[MappingTier, MappingStrategy]],
        result: MigrationResult,
        *,
        dry_run: bool
    ) -> MigrationItemOutcome:
        # Attributes are read up front: a rollback expires the instance.
        content_id = item.id
        legacy_value = item.category
        new_category_id, tier = map_legacy_category(legacy_value, strategies)

        if new_category_id is None:
            error = UnmappedLegacyCategory(legacy_value, content_id)
            logger.warning(f"[MIGRATION] {error}")
            return MigrationItemOutcome(
                content_id=content_id,
                legacy_value=legacy_value,
                status=MigrationStatus.FAILED,
                error=str(error),
            )

        outcome = MigrationItemOutcome(
            content_id=content_id,
            legacy_value=legacy_value,
            new_category_id=new_category_id,
            tier=tier,
            status=MigrationStatus.MIGRATED,
        )
        if new_category_id == legacy_value:
            outcome.status = MigrationStatus.SKIPPED
            return outcome
        if dry_run:
            return outcome

        try:
            result.redirects_created += self._register_redirects(db, item, legacy_value, new_category_id)
            crud_content.reassign_category(db, content=item, category_id=new_category_id)
        except SQLAlchemyError as e:
            logger.error(f"[MIGRATION] Failed to migrate content {content_id}: {type(e).__name__}: {e}")
            outcome.status = MigrationStatus.FAILED
            outcome.error = str(e)
            return outcome

        logger.debug(f"[MIGRATION] {content_id}: {legacy_value} -> {new_category_id} ({tier.value})")
        return outcome

    def _register_redirects(
        self,
        db: Session,
        item: Content,
        legacy_value: str,
        new_category_id: str,
    ) -> int:
        """Redirect the legacy category page and the item's legacy URL. Returns rows created."""
        new_category_url = self.resolver.category_url(db, new_category_id)
        if new_category_url is None:
            return 0

        created = 0
        if self.registry.register_redirect(db, f"{self.legacy_prefix}/{legacy_value}", new_category_url):
            created += 1
        if not item.is_deleted and self.registry.register_redirect(
            db,
            f"{self.legacy_prefix}/{legacy_value}/{item.slug}",
            self.resolver.entity_url(db, new_category_id, item.slug),
        ):
            created += 1
        return created

    def recompute_content_counts(self, db: Session) -> Dict[str, int]:
        """Recount live content for every category and write the counters back."""
        category_ids = [category.id for category in crud_category.get_all(db)]
        counts: Dict[str, int] = {}
        for category_id in category_ids:
            counts[category_id] = crud_category.update_content_count(db, category_id=category_id)
        logger.info(f"[MIGRATION] Recomputed content counts for {len(counts)} categories")
        return counts


# Singleton instance
migration_engine = MigrationEngine()
