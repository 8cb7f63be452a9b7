"""CRUD operations for forum threads and replies."""

from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.forum import ForumThread, ForumReply
from seo_paths.schemas.entities import (
    ForumThreadCreate,
    ForumThreadUpdate,
    ForumReplyCreate,
    ForumReplyUpdate,
)


class CRUDForumThread(CRUDBase[ForumThread, ForumThreadCreate, ForumThreadUpdate]):
    """CRUD operations for ForumThread."""
    
    def get_live(self, db: Session) -> List[ForumThread]:
        """Get non-deleted threads."""
        stmt = (
            select(ForumThread)
            .where(ForumThread.is_deleted == False)
            .order_by(ForumThread.created_at, ForumThread.id)
        )
        return list(db.scalars(stmt).all())


class CRUDForumReply(CRUDBase[ForumReply, ForumReplyCreate, ForumReplyUpdate]):
    """CRUD operations for ForumReply."""


# Singleton instances
crud_forum_thread = CRUDForumThread(ForumThread)
crud_forum_reply = CRUDForumReply(ForumReply)
