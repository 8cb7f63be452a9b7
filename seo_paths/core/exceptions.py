"""Custom exceptions untuk SEO Paths."""

from fastapi import HTTPException, status


class CategoryNotFoundException(HTTPException):
    """Exception ketika kategori tidak ditemukan.

    Raised when a path resolution or lookup target does not exist. An empty
    resolved path always maps to this exception at the HTTP boundary, so callers
    can tell "not found" apart from a valid single-segment root path.
    """

    def __init__(self, detail: str = "Category not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class RedirectNotFoundException(HTTPException):
    """Exception ketika tidak ada redirect aktif untuk URL lama."""

    def __init__(self, detail: str = "No active redirect for this URL"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
        )


class InvalidRedirectTypeException(HTTPException):
    """Exception ketika redirect_type bukan 301 atau 302."""

    def __init__(self, detail: str = "redirect_type must be 301 or 302"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
        )


class UnmappedLegacyCategory(Exception):
    """A legacy category value matched none of the mapping tiers."""

    def __init__(self, legacy_value: str, content_id: str):
        self.legacy_value = legacy_value
        self.content_id = content_id
        super().__init__(
            f"No mapping found for category: {legacy_value} (content: {content_id})"
        )


class IndexerNotifyFailure(Exception):
    """A search indexing endpoint was unreachable or rejected the request."""

    def __init__(self, target: str, message: str):
        self.target = target
        self.message = message
        super().__init__(f"{target}: {message}")


__all__ = [
    "CategoryNotFoundException",
    "RedirectNotFoundException",
    "InvalidRedirectTypeException",
    "UnmappedLegacyCategory",
    "IndexerNotifyFailure",
]
