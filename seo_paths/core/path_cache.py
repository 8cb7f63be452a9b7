"""In-memory TTL cache for resolved category paths."""

import logging
import threading
from datetime import datetime, timedelta
from typing import Callable, Dict, Optional, Tuple

logger = logging.getLogger(__name__)


class PathCache:
    """Thread-safe leaf id -> path map with per-entry expiry.

    Entries are advisory: losing them only costs a re-resolution.
    """
    
    def __init__(self, ttl_seconds: int = 300, clock: Optional[Callable[[], datetime]] = None):
        """
        Initialize path cache.
        
        Args:
            ttl_seconds: Lifetime of a cached path
            clock: Time source, overridable in tests
        """
        self.ttl_seconds = ttl_seconds
        self._clock = clock or datetime.utcnow
        self._entries: Dict[str, Tuple[str, datetime]] = {}  # leaf_id -> (path, expiry)
        self._lock = threading.Lock()
    
    def get(self, leaf_id: str) -> Optional[str]:
        """Return the cached path, or None if absent or expired."""
        with self._lock:
            entry = self._entries.get(leaf_id)
            if entry is None:
                return None
            
            path, expiry = entry
            if expiry <= self._clock():
                del self._entries[leaf_id]
                return None
            return path
    
    def set(self, leaf_id: str, path: str) -> None:
        """Store (or overwrite) a resolved path."""
        with self._lock:
            expiry = self._clock() + timedelta(seconds=self.ttl_seconds)
            self._entries[leaf_id] = (path, expiry)
    
    def clear(self) -> int:
        """Drop every entry, e.g. after bulk category edits. Returns entries removed."""
        with self._lock:
            removed = len(self._entries)
            self._entries.clear()
        logger.info(f"[PATH] Path cache cleared ({removed} entries)")
        return removed
    
    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
