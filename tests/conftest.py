"""Shared fixtures: in-memory database, sample category tree, API client."""

from typing import Optional

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import seo_paths.models  # noqa: F401  (registers every table on Base.metadata)
from seo_paths.api.deps import get_db
from seo_paths.crud import crud_category, crud_content, crud_forum_thread
from seo_paths.database import Base
from seo_paths.main import app
from seo_paths.models.category import Category, CategoryType
from seo_paths.models.content import Content
from seo_paths.models.forum import ForumThread
from seo_paths.services.path_resolver import path_resolver


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(autouse=True)
def clear_shared_path_cache():
    path_resolver.clear_cache()
    yield
    path_resolver.clear_cache()


@pytest.fixture
def client(db):
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    try:
        with TestClient(app) as test_client:
            yield test_client
    finally:
        app.dependency_overrides.clear()


def make_category(
    db: Session,
    category_id: str,
    slug: str,
    *,
    parent_id: Optional[str] = None,
    category_type: CategoryType = CategoryType.LEAF,
    old_slug: Optional[str] = None,
    is_active: bool = True,
    sort_order: int = 0,
    name: Optional[str] = None,
) -> Category:
    return crud_category.create(
        db,
        obj_in={
            "id": category_id,
            "slug": slug,
            "name": name or slug.replace("-", " ").title(),
            "parent_id": parent_id,
            "category_type": category_type,
            "old_slug": old_slug,
            "is_active": is_active,
            "sort_order": sort_order,
        },
    )


def make_content(db: Session, content_id: str, slug: str, category: str, **extra) -> Content:
    data = {"id": content_id, "title": slug.replace("-", " "), "slug": slug, "category": category}
    data.update(extra)
    return crud_content.create(db, obj_in=data)


def make_thread(db: Session, thread_id: str, slug: str, category_id: str, **extra) -> ForumThread:
    data = {"id": thread_id, "title": slug.replace("-", " "), "slug": slug, "category_id": category_id}
    data.update(extra)
    return crud_forum_thread.create(db, obj_in=data)


@pytest.fixture
def category_tree(db):
    """
    forex-trading
        expert-advisors
        indicators          (old slug: indicator-tools)
        strategies
    trading-strategies
        scalping-m1-m15
            xauusd-scalping
    """
    make_category(db, "cat-forex", "forex-trading", category_type=CategoryType.MAIN, sort_order=1)
    make_category(db, "cat-ea", "expert-advisors", parent_id="cat-forex", category_type=CategoryType.SUB, sort_order=1)
    make_category(db, "cat-ind", "indicators", parent_id="cat-forex", category_type=CategoryType.SUB,
                  old_slug="indicator-tools", sort_order=2)
    make_category(db, "cat-strat", "strategies", parent_id="cat-forex", category_type=CategoryType.SUB, sort_order=3)
    make_category(db, "cat-ts", "trading-strategies", category_type=CategoryType.MAIN, sort_order=2)
    make_category(db, "cat-scalp", "scalping-m1-m15", parent_id="cat-ts", category_type=CategoryType.SUB)
    make_category(db, "cat-xau", "xauusd-scalping", parent_id="cat-scalp")
    return db
