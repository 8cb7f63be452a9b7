"""Search engine notification (IndexNow, Google sitemap ping)."""

import logging
from typing import List, Optional, Sequence
from urllib.parse import urlsplit

import httpx
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from seo_paths.config import settings
from seo_paths.core.exceptions import IndexerNotifyFailure
from seo_paths.crud import crud_sitemap_log
from seo_paths.schemas.sitemap import IndexerNotifyResult

logger = logging.getLogger(__name__)

INDEXNOW_TARGET = "bing,yandex"
GOOGLE_TARGET = "google"


class IndexerNotifier:
    """
    Tells search engines that the sitemap changed.

    Fire-and-forget: every failure is logged and recorded in `sitemap_logs`,
    nothing is retried and nothing is raised to the caller.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        indexnow_key: Optional[str] = None,
        indexnow_endpoint: Optional[str] = None,
        google_endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        max_urls: Optional[int] = None,
        transport: Optional[httpx.BaseTransport] = None,
    ):
        self.base_url = (base_url or settings.SITE_BASE_URL).rstrip("/")
        self.indexnow_key = indexnow_key if indexnow_key is not None else settings.INDEXNOW_API_KEY
        self.indexnow_endpoint = indexnow_endpoint or settings.INDEXNOW_ENDPOINT
        self.google_endpoint = google_endpoint or settings.GOOGLE_PING_ENDPOINT
        self.timeout = timeout or settings.INDEXER_TIMEOUT_SECONDS
        self.max_urls = max_urls or settings.INDEXNOW_MAX_URLS
        self._transport = transport

    def _client(self) -> httpx.Client:
        return httpx.Client(timeout=self.timeout, transport=self._transport)

    def _send(self, target: str, request: httpx.Request) -> httpx.Response:
        """Send one request; raise IndexerNotifyFailure on transport errors or non-2xx."""
        try:
            with self._client() as client:
                response = client.send(request)
        except httpx.HTTPError as e:
            raise IndexerNotifyFailure(target, f"{type(e).__name__}: {e}") from e

        if not response.is_success:
            raise IndexerNotifyFailure(target, f"HTTP {response.status_code} - {response.text[:500]}")
        return response

    def notify_indexers(
        self,
        db: Session,
        urls: Sequence[str],
        *,
        sitemap_url: Optional[str] = None
    ) -> List[IndexerNotifyResult]:
        """Submit URLs to IndexNow and ping Google with the sitemap location."""
        return [
            self.submit_to_indexnow(db, urls),
            self.ping_google(db, sitemap_url or f"{self.base_url}/sitemap.xml"),
        ]

    def submit_to_indexnow(self, db: Session, urls: Sequence[str]) -> IndexerNotifyResult:
        """POST up to `max_urls` URLs to IndexNow."""
        if not self.indexnow_key:
            message = "IndexNow API key not configured (set INDEXNOW_API_KEY)"
            logger.warning(f"[INDEXER] {message}")
            self._record(db, "submit_indexnow", "error", INDEXNOW_TARGET, error_message=message)
            return IndexerNotifyResult(target=INDEXNOW_TARGET, success=False, error=message)

        batch = list(urls[: self.max_urls])
        if len(urls) > self.max_urls:
            logger.info(f"[INDEXER] IndexNow accepts {self.max_urls} URLs per request, {len(urls) - self.max_urls} dropped")

        request = httpx.Request(
            "POST",
            self.indexnow_endpoint,
            json={
                "host": urlsplit(self.base_url).hostname,
                "key": self.indexnow_key,
                "keyLocation": f"{self.base_url}/{self.indexnow_key}.txt",
                "urlList": batch,
            },
        )
        try:
            self._send(INDEXNOW_TARGET, request)
        except IndexerNotifyFailure as e:
            logger.warning(f"[INDEXER] IndexNow submission failed: {e.message}")
            self._record(db, "submit_indexnow", "error", INDEXNOW_TARGET, error_message=e.message)
            return IndexerNotifyResult(target=INDEXNOW_TARGET, success=False, error=e.message)

        logger.info(f"[INDEXER] Submitted {len(batch)} URLs to IndexNow")
        self._record(db, "submit_indexnow", "success", INDEXNOW_TARGET, url_count=len(batch))
        return IndexerNotifyResult(target=INDEXNOW_TARGET, success=True, url_count=len(batch))

    def ping_google(self, db: Session, sitemap_url: str) -> IndexerNotifyResult:
        """GET the Google sitemap ping endpoint."""
        request = httpx.Request("GET", self.google_endpoint, params={"sitemap": sitemap_url})
        try:
            self._send(GOOGLE_TARGET, request)
        except IndexerNotifyFailure as e:
            logger.warning(f"[INDEXER] Google ping failed: {e.message}")
            self._record(db, "submit_google", "error", GOOGLE_TARGET, error_message=e.message)
            return IndexerNotifyResult(target=GOOGLE_TARGET, success=False, error=e.message)

        logger.info(f"[INDEXER] Pinged Google with {sitemap_url}")
        self._record(db, "submit_google", "success", GOOGLE_TARGET)
        return IndexerNotifyResult(target=GOOGLE_TARGET, success=True)

    def _record(
        self,
        db: Session,
        action: str,
        status: str,
        submitted_to: str,
        *,
        url_count: Optional[int] = None,
        error_message: Optional[str] = None
    ) -> None:
        try:
            crud_sitemap_log.log(
                db,
                action=action,
                status=status,
                submitted_to=submitted_to,
                url_count=url_count,
                error_message=error_message,
            )
        except SQLAlchemyError as e:
            logger.error(f"[INDEXER] Failed to log submission: {e}")


# Singleton instance
indexer_notifier = IndexerNotifier()
