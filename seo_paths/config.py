from typing import List, Optional

from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    """Application settings"""
    
    # Database
    DATABASE_URL: str = "sqlite:///./seo_paths.db"
    
    # API
    API_TITLE: str = "SEO Paths API"
    API_VERSION: str = "1.0.0"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    
    # Site / URLs
    SITE_BASE_URL: str = "http://localhost:3000"
    CATEGORY_URL_PREFIX: str = "/category"
    LEGACY_MARKETPLACE_PREFIX: str = "/marketplace"
    
    # Path resolver
    PATH_CACHE_TTL_SECONDS: int = 300
    
    # Slugs
    SLUG_MAX_LENGTH: int = 60
    
    # Sitemap
    SITEMAP_MAX_URLS: int = 50000
    SITEMAP_STATIC_PAGES: List[str] = ["/discussions", "/marketplace", "/brokers", "/members"]
    
    # Search engine notification
    INDEXNOW_API_KEY: Optional[str] = None
    INDEXNOW_ENDPOINT: str = "https://api.indexnow.org/indexnow"
    INDEXNOW_MAX_URLS: int = 10000
    GOOGLE_PING_ENDPOINT: str = "https://www.google.com/ping"
    INDEXER_TIMEOUT_SECONDS: float = 10.0
    
    class Config:
        env_file = ".env"
        case_sensitive = True

# Create settings instance
settings = Settings()
