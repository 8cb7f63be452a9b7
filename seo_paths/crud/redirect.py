"""CRUD operations for CategoryRedirect."""

from datetime import datetime
from typing import List, Optional
from sqlalchemy import select, update, desc
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.redirect import CategoryRedirect, PERMANENT_REDIRECT
from seo_paths.schemas.redirect import RedirectCreate, RedirectUpdate


_DIALECT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class CRUDRedirect(CRUDBase[CategoryRedirect, RedirectCreate, RedirectUpdate]):
    """CRUD operations for CategoryRedirect."""
    
    def get_by_old_url(self, db: Session, old_url: str) -> Optional[CategoryRedirect]:
        """Get redirect by old URL, active or not."""
        stmt = select(CategoryRedirect).where(CategoryRedirect.old_url == old_url).limit(1)
        return db.scalars(stmt).first()
    
    def get_active_by_old_url(self, db: Session, old_url: str) -> Optional[CategoryRedirect]:
        """Get active redirect by old URL."""
        stmt = select(CategoryRedirect).where(
            CategoryRedirect.old_url == old_url,
            CategoryRedirect.is_active == True,
        ).limit(1)
        return db.scalars(stmt).first()
    
    def insert_if_absent(
        self,
        db: Session,
        *,
        old_url: str,
        new_url: str,
        redirect_type: int = PERMANENT_REDIRECT
    ) -> bool:
        """Insert a redirect unless one exists for `old_url`.

        Relies on the unique constraint on ``old_url`` (insert, ignore conflict).
        Returns True when a row was inserted.
        """
        values = {
            "old_url": old_url,
            "new_url": new_url,
            "redirect_type": redirect_type,
            "hit_count": 0,
            "is_active": True,
        }
        dialect_insert = _DIALECT_INSERTS.get(db.get_bind().dialect.name)
        try:
            if dialect_insert is not None:
                stmt = dialect_insert(CategoryRedirect).values(**values).on_conflict_do_nothing(
                    index_elements=["old_url"]
                )
                result = db.execute(stmt)
                db.commit()
                return result.rowcount > 0
            
            db.add(CategoryRedirect(**values))
            db.commit()
            return True
        except IntegrityError:
            db.rollback()
            return False
        except Exception:
            db.rollback()
            raise
    
    def record_hit(self, db: Session, *, redirect_id: int) -> None:
        """Atomically bump hit count and last-used timestamp."""
        stmt = (
            update(CategoryRedirect)
            .where(CategoryRedirect.id == redirect_id)
            .values(
                hit_count=CategoryRedirect.hit_count + 1,
                last_used=datetime.utcnow(),
            )
        )
        try:
            db.execute(stmt)
            db.commit()
        except Exception:
            db.rollback()
            raise
    
    def get_top(self, db: Session, *, limit: int = 20) -> List[CategoryRedirect]:
        """Get redirects ordered by hit count."""
        stmt = (
            select(CategoryRedirect)
            .order_by(desc(CategoryRedirect.hit_count), CategoryRedirect.id)
            .limit(limit)
        )
        return list(db.scalars(stmt).all())
    
    def count_for_old_url(self, db: Session, old_url: str) -> int:
        """Number of rows for an old URL (0 or 1 while the unique constraint holds)."""
        stmt = select(CategoryRedirect.id).where(CategoryRedirect.old_url == old_url)
        return len(db.scalars(stmt).all())


# Singleton instance
crud_redirect = CRUDRedirect(CategoryRedirect)
