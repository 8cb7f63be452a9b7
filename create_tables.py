from seo_paths.database import Base, engine
from seo_paths.models import (
    category,
    redirect,
    content,
    forum,
    user,
    broker,
    sitemap_log,
)

print("Creating database tables...")
Base.metadata.create_all(bind=engine)
print("✅ All tables created successfully!")
