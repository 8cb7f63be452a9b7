"""CRUD operations for Category (the category store)."""

from typing import List, Optional
from sqlalchemy import select, update, func, desc
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.category import Category
from seo_paths.models.content import Content
from seo_paths.schemas.category import CategoryCreate, CategoryUpdate


class CRUDCategory(CRUDBase[Category, CategoryCreate, CategoryUpdate]):
    """CRUD operations for Category."""
    
    def get_by_slug(self, db: Session, slug: str) -> Optional[Category]:
        """Get category by slug."""
        stmt = select(Category).where(Category.slug == slug).limit(1)
        return db.scalars(stmt).first()
    
    def get_all(self, db: Session) -> List[Category]:
        """Get every category, active or not."""
        stmt = select(Category).order_by(Category.sort_order, Category.slug)
        return list(db.scalars(stmt).all())
    
    def get_all_active(self, db: Session) -> List[Category]:
        """Get all active categories ordered by sort order."""
        stmt = (
            select(Category)
            .where(Category.is_active == True)
            .order_by(Category.sort_order, Category.slug)
        )
        return list(db.scalars(stmt).all())
    
    def get_children(
        self,
        db: Session,
        *,
        parent_id: str,
        active_only: bool = True
    ) -> List[Category]:
        """Get direct children of a category."""
        stmt = select(Category).where(Category.parent_id == parent_id)
        if active_only:
            stmt = stmt.where(Category.is_active == True)
        stmt = stmt.order_by(Category.sort_order, Category.slug)
        return list(db.scalars(stmt).all())
    
    def get_popular(self, db: Session, *, limit: int = 10) -> List[Category]:
        """Get active categories with the most views."""
        stmt = (
            select(Category)
            .where(Category.is_active == True)
            .order_by(desc(Category.view_count), Category.slug)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())
    
    def increment_view_count(self, db: Session, *, category_id: str) -> bool:
        """Atomically add one view. Returns False if the category does not exist."""
        stmt = (
            update(Category)
            .where(Category.id == category_id)
            .values(view_count=Category.view_count + 1)
        )
        try:
            result = db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return result.rowcount > 0
    
    def count_live_content(self, db: Session, *, category_id: str) -> int:
        """Count non-deleted content referencing the category."""
        stmt = select(func.count(Content.id)).where(
            Content.category == category_id,
            Content.is_deleted == False,
        )
        return db.scalar(stmt) or 0
    
    def update_content_count(self, db: Session, *, category_id: str) -> int:
        """Recount live content for a category and write it back."""
        count = self.count_live_content(db, category_id=category_id)
        stmt = (
            update(Category)
            .where(Category.id == category_id)
            .values(content_count=count, updated_at=func.now())
        )
        try:
            db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
        return count


# Singleton instance
crud_category = CRUDCategory(Category)
