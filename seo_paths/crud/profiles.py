"""CRUD operations for user and broker profiles."""

from typing import List
from sqlalchemy import select
from sqlalchemy.orm import Session

from seo_paths.crud.base import CRUDBase
from seo_paths.models.broker import Broker
from seo_paths.models.user import User
from seo_paths.schemas.entities import BrokerCreate, BrokerUpdate, UserCreate, UserUpdate


class CRUDUser(CRUDBase[User, UserCreate, UserUpdate]):
    """CRUD operations for User."""
    
    def get_all_active(self, db: Session) -> List[User]:
        """Get all active users."""
        stmt = select(User).where(User.is_active == True).order_by(User.username)
        return list(db.scalars(stmt).all())


class CRUDBroker(CRUDBase[Broker, BrokerCreate, BrokerUpdate]):
    """CRUD operations for Broker."""
    
    def get_all(self, db: Session) -> List[Broker]:
        """Get all brokers."""
        stmt = select(Broker).order_by(Broker.slug)
        return list(db.scalars(stmt).all())


# Singleton instances
crud_user = CRUDUser(User)
crud_broker = CRUDBroker(Broker)
