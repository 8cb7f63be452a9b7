"""Old -> new URL redirect bookkeeping."""

import logging
from typing import List, NamedTuple, Optional
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

from sqlalchemy.orm import Session

from seo_paths.crud import crud_redirect
from seo_paths.models.redirect import (
    CategoryRedirect,
    PERMANENT_REDIRECT,
    TEMPORARY_REDIRECT,
)

logger = logging.getLogger(__name__)

VALID_REDIRECT_TYPES = (PERMANENT_REDIRECT, TEMPORARY_REDIRECT)


class ResolvedRedirect(NamedTuple):
    location: str
    status_code: int


def normalize_url_path(url: str) -> str:
    """Reduce a URL to the path used as redirect key: no query, no trailing slash."""
    path = urlsplit(url.strip()).path or "/"
    if not path.startswith("/"):
        path = "/" + path
    if len(path) > 1:
        path = path.rstrip("/") or "/"
    return path


def merge_query(target: str, incoming_url: str) -> str:
    """Carry the incoming query string over to the target; incoming keys win."""
    incoming_query = urlsplit(incoming_url).query
    if not incoming_query:
        return target

    parts = urlsplit(target)
    params = dict(parse_qsl(parts.query, keep_blank_values=True))
    params.update(parse_qsl(incoming_query, keep_blank_values=True))
    return urlunsplit((parts.scheme, parts.netloc, parts.path, urlencode(params), parts.fragment))


class RedirectRegistry:
    """
    Records and serves redirects.

    Registration is insert-if-absent on the old URL, so repeated migrations never
    duplicate or overwrite a mapping and its hit history. Changing a target is an
    explicit update. Rows are deactivated, never deleted.
    """

    def register_redirect(
        self,
        db: Session,
        old_url: str,
        new_url: str,
        *,
        redirect_type: int = PERMANENT_REDIRECT
    ) -> bool:
        """
        Register `old_url -> new_url` unless `old_url` already has a mapping.

        Returns:
            bool: True if a new row was created, False if one already existed.

        Raises:
            ValueError: invalid redirect type or a redirect to itself
        """
        if redirect_type not in VALID_REDIRECT_TYPES:
            raise ValueError(f"Invalid redirect_type {redirect_type}. Must be one of: {VALID_REDIRECT_TYPES}")

        old_path = normalize_url_path(old_url)
        new_url = new_url.strip()
        if not new_url:
            raise ValueError("new_url must not be empty")
        if normalize_url_path(new_url) == old_path and not urlsplit(new_url).netloc:
            raise ValueError(f"Redirect from {old_path} to itself")

        created = crud_redirect.insert_if_absent(
            db, old_url=old_path, new_url=new_url, redirect_type=redirect_type
        )
        if created:
            logger.info(f"[REDIRECT] Registered {redirect_type} {old_path} -> {new_url}")
        else:
            logger.debug(f"[REDIRECT] {old_path} already registered, keeping existing mapping")
        return created

    def resolve_redirect(self, db: Session, old_url: str) -> Optional[ResolvedRedirect]:
        """
        Look up the active redirect for a URL and count the hit.

        Returns None when there is no active mapping or its target is empty;
        there is no fallback location.
        """
        redirect = crud_redirect.get_active_by_old_url(db, normalize_url_path(old_url))
        if redirect is None:
            return None

        if not (redirect.new_url or "").strip():
            logger.warning(f"[REDIRECT] Redirect {redirect.id} for {redirect.old_url} has an empty target")
            return None

        crud_redirect.record_hit(db, redirect_id=redirect.id)
        return ResolvedRedirect(
            location=merge_query(redirect.new_url, old_url),
            status_code=redirect.redirect_type,
        )

    def update_target(
        self,
        db: Session,
        redirect_id: int,
        new_url: str,
        *,
        redirect_type: Optional[int] = None
    ) -> Optional[CategoryRedirect]:
        """Explicitly change where an existing redirect points. Hit history is kept."""
        redirect = crud_redirect.get(db, redirect_id)
        if redirect is None:
            return None

        update_data = {"new_url": new_url.strip()}
        if redirect_type is not None:
            if redirect_type not in VALID_REDIRECT_TYPES:
                raise ValueError(f"Invalid redirect_type {redirect_type}. Must be one of: {VALID_REDIRECT_TYPES}")
            update_data["redirect_type"] = redirect_type

        previous = redirect.new_url
        redirect = crud_redirect.update(db, db_obj=redirect, obj_in=update_data)
        logger.info(f"[REDIRECT] Retargeted {redirect.old_url}: {previous} -> {redirect.new_url}")
        return redirect

    def deactivate(self, db: Session, redirect_id: int) -> Optional[CategoryRedirect]:
        """Stop serving a redirect without deleting it."""
        redirect = crud_redirect.get(db, redirect_id)
        if redirect is None:
            return None
        redirect = crud_redirect.update(db, db_obj=redirect, obj_in={"is_active": False})
        logger.info(f"[REDIRECT] Deactivated {redirect.old_url}")
        return redirect

    def top_redirects(self, db: Session, *, limit: int = 20) -> List[CategoryRedirect]:
        """Most used redirects first."""
        return crud_redirect.get_top(db, limit=limit)


# Singleton instance
redirect_registry = RedirectRegistry()
