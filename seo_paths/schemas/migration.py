"""Pydantic schemas for the legacy category migration."""

from enum import Enum
from typing import List, Optional
from pydantic import BaseModel, Field


class MappingTier(str, Enum):
    """Which mapping strategy matched a legacy value."""
    DIRECT_ID = "direct_id"
    OLD_SLUG = "old_slug"
    FALLBACK_TABLE = "fallback_table"


class MigrationStatus(str, Enum):
    MIGRATED = "migrated"
    SKIPPED = "skipped"  # already in the new scheme
    FAILED = "failed"


class MigrationItemOutcome(BaseModel):
    """Outcome for one content item."""
    content_id: str
    legacy_value: str
    new_category_id: Optional[str] = Field(None, description="None means unmapped")
    tier: Optional[MappingTier] = None
    status: MigrationStatus
    error: Optional[str] = None


class MigrationResult(BaseModel):
    """Aggregate result of one migration run."""
    migrated: int = 0
    failed: int = 0
    skipped: int = 0
    redirects_created: int = 0
    dry_run: bool = False
    outcomes: List[MigrationItemOutcome] = []
