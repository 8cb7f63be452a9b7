"""
Script to migrate content from legacy flat categories into the category tree.
Run: python scripts/migrate_content_categories.py [--dry-run]
"""

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables before settings are read
load_dotenv()

# Add parent directory to path to import seo_paths modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from seo_paths.config import settings
from seo_paths.database import SessionLocal
from seo_paths.schemas.migration import MigrationStatus
from seo_paths.services.migration_engine import migration_engine

logger = logging.getLogger(__name__)


def run_migration(dry_run: bool = False) -> bool:
    """Run the content category migration and print a summary."""
    print("Starting content category migration...")
    print(f"Database URL: {settings.DATABASE_URL.split('@')[1] if '@' in settings.DATABASE_URL else 'hidden'}")

    db = SessionLocal()
    try:
        result = migration_engine.run_migration(db, dry_run=dry_run)
    except Exception as e:
        logger.exception("Migration failed")
        print(f"❌ Migration failed: {e}")
        return False
    finally:
        db.close()

    print("Migration completed:" if not dry_run else "Dry run completed:")
    print(f"- Successfully migrated: {result.migrated} content items")
    print(f"- Already migrated (skipped): {result.skipped} content items")
    print(f"- Failed to migrate: {result.failed} content items")
    print(f"- Redirects created: {result.redirects_created}")

    if result.failed > 0:
        print("\nSome items failed to migrate:")
        for outcome in result.outcomes:
            if outcome.status == MigrationStatus.FAILED:
                print(f"  {outcome.content_id}: {outcome.error}")
    return True


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Migrate content to the hierarchical category tree")
    parser.add_argument("--dry-run", action="store_true", help="Compute outcomes without writing")
    args = parser.parse_args()

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    success = run_migration(dry_run=args.dry_run)
    sys.exit(0 if success else 1)
