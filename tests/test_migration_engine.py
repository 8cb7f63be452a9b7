import logging

import pytest
from sqlalchemy.exc import OperationalError

from seo_paths.crud import crud_category, crud_content, crud_redirect
from seo_paths.schemas.migration import MappingTier, MigrationStatus
from seo_paths.services.migration_engine import (
    CategorySnapshot,
    MigrationEngine,
    build_strategies,
    map_legacy_category,
)
from seo_paths.services.path_resolver import CategoryPathResolver
from tests.conftest import make_category, make_content


@pytest.fixture
def engine_under_test():
    return MigrationEngine(resolver=CategoryPathResolver())


def _outcome(result, content_id):
    return next(o for o in result.outcomes if o.content_id == content_id)


class TestMapping:
    def test_tiers_are_tried_in_order(self, category_tree):
        snapshot = CategorySnapshot(crud_category.get_all(category_tree))
        strategies = build_strategies(snapshot, {"ea-library": "expert-advisors", "indicator-tools": "strategies"})

        assert map_legacy_category("cat-ea", strategies) == ("cat-ea", MappingTier.DIRECT_ID)
        # old slug beats the fallback table entry for the same value
        assert map_legacy_category("indicator-tools", strategies) == ("cat-ind", MappingTier.OLD_SLUG)
        assert map_legacy_category("EA-Library", strategies) == ("cat-ea", MappingTier.FALLBACK_TABLE)
        assert map_legacy_category("unknown", strategies) == (None, None)

    def test_fallback_to_missing_category_is_unmapped(self, db):
        make_category(db, "only", "only-category")
        snapshot = CategorySnapshot(crud_category.get_all(db))
        strategies = build_strategies(snapshot, {"ea": "expert-advisors"})

        assert map_legacy_category("ea", strategies) == (None, None)


class TestRunMigration:
    def test_fallback_table_scenario(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        before = crud_category.get(db, "cat-ea").content_count

        result = engine_under_test.run_migration(db)

        assert result.migrated == 1
        assert result.failed == 0
        assert crud_content.get(db, "c1").category == "cat-ea"
        assert crud_category.get(db, "cat-ea").content_count == before + 1
        outcome = _outcome(result, "c1")
        assert outcome.tier == MappingTier.FALLBACK_TABLE
        assert outcome.status == MigrationStatus.MIGRATED

    def test_second_run_is_a_no_op(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        make_content(db, "c2", "rsi-divergence", "indicator-tools")
        make_content(db, "c3", "m1-scalping-guide", "trading-strategies")

        first = engine_under_test.run_migration(db)
        assignments = {c.id: c.category for c in crud_content.get_all(db)}
        second = engine_under_test.run_migration(db)

        assert first.migrated == 3
        assert second.migrated == 0
        assert second.skipped == 3
        assert second.redirects_created == 0
        assert {c.id: c.category for c in crud_content.get_all(db)} == assignments

    def test_unmapped_item_does_not_stop_the_batch(self, category_tree, engine_under_test, caplog):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        make_content(db, "bad", "mystery-tool", "no-such-category")
        make_content(db, "c3", "volume-profile", "volume-indicators")

        with caplog.at_level(logging.WARNING):
            result = engine_under_test.run_migration(db)

        assert result.failed == 1
        assert result.migrated == 2
        assert crud_content.get(db, "bad").category == "no-such-category"
        assert crud_content.get(db, "c3").category == "cat-ind"
        assert "No mapping found for category: no-such-category (content: bad)" in caplog.text
        assert _outcome(result, "bad").new_category_id is None

    def test_write_failure_for_one_item_is_counted(self, category_tree, engine_under_test, monkeypatch):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        make_content(db, "c2", "grid-master", "grid-trading-eas")

        original = crud_content.reassign_category

        def flaky_reassign(session, *, content, category_id):
            if content.id == "c1":
                raise OperationalError("UPDATE content", {}, Exception("database is locked"))
            return original(session, content=content, category_id=category_id)

        monkeypatch.setattr(crud_content, "reassign_category", flaky_reassign)
        result = engine_under_test.run_migration(db)

        assert result.failed == 1
        assert result.migrated == 1
        assert crud_content.get(db, "c1").category == "ea-library"
        assert crud_content.get(db, "c2").category == "cat-ea"

        # Resuming after the failure picks up only the remaining item.
        monkeypatch.setattr(crud_content, "reassign_category", original)
        resumed = engine_under_test.run_migration(db)
        assert resumed.migrated == 1
        assert resumed.skipped == 1

    def test_redirects_for_legacy_urls(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        make_content(db, "c2", "night-scalper", "ea-library")

        result = engine_under_test.run_migration(db)

        assert result.redirects_created == 3
        category_redirect = crud_redirect.get_by_old_url(db, "/marketplace/ea-library")
        assert category_redirect.new_url == "/category/forex-trading/expert-advisors"
        item_redirect = crud_redirect.get_by_old_url(db, "/marketplace/ea-library/gold-scalper-pro")
        assert item_redirect.new_url == "/category/forex-trading/expert-advisors/gold-scalper-pro"
        assert item_redirect.redirect_type == 301

    def test_content_counts_ignore_deleted_items(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")
        make_content(db, "c2", "old-grid", "grid-trading-eas", is_deleted=True)

        result = engine_under_test.run_migration(db)

        assert result.migrated == 2
        assert crud_content.get(db, "c2").category == "cat-ea"
        assert crud_category.get(db, "cat-ea").content_count == 1
        assert crud_redirect.get_by_old_url(db, "/marketplace/grid-trading-eas/old-grid") is None

    def test_dry_run_writes_nothing(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "gold-scalper-pro", "ea-library")

        result = engine_under_test.run_migration(db, dry_run=True)

        assert result.dry_run
        assert result.migrated == 1
        assert crud_content.get(db, "c1").category == "ea-library"
        assert crud_redirect.get_by_old_url(db, "/marketplace/ea-library") is None
        assert crud_category.get(db, "cat-ea").content_count == 0

    def test_custom_fallback_table(self, category_tree):
        db = category_tree
        make_content(db, "c1", "custom", "robots")
        engine = MigrationEngine(resolver=CategoryPathResolver(), fallbacks={"robots": "expert-advisors"})

        assert engine.run_migration(db).migrated == 1

    def test_recompute_content_counts(self, category_tree, engine_under_test):
        db = category_tree
        make_content(db, "c1", "a", "cat-xau")
        make_content(db, "c2", "b", "cat-xau")
        make_content(db, "c3", "c", "cat-xau", is_deleted=True)

        counts = engine_under_test.recompute_content_counts(db)

        assert counts["cat-xau"] == 2
        assert counts["cat-ea"] == 0
        assert crud_category.get(db, "cat-xau").content_count == 2
