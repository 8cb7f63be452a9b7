import logging

from fastapi import FastAPI, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session

from .config import settings
from .api.deps import get_db
from .api.v1.api import api_router
from .api.v1.endpoints.sitemap import public_router as sitemap_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

# Create FastAPI app
app = FastAPI(
    title=settings.API_TITLE,
    version=settings.API_VERSION,
    debug=settings.DEBUG
)

app.include_router(api_router)
app.include_router(sitemap_router)

# Root endpoint
@app.get("/")
def read_root():
    """Service info endpoint"""
    return {
        "message": "Welcome to SEO Paths API",
        "version": settings.API_VERSION,
        "status": "running"
    }

# Health check endpoint
@app.get("/health")
def health_check():
    """API health check"""
    return {"status": "healthy"}

# Database test endpoint
@app.get("/db-test")
def test_database(db: Session = Depends(get_db)):
    """Test database connection"""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "success",
            "message": "Database connection successful",
        }
    except Exception as e:
        return {
            "status": "error",
            "message": str(e)
        }
