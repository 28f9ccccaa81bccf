"""Response cache operations for aicommitmessage.

Backend responses are stored one file per request under the commit-cache
directory, addressed by compute_request_hash(). An entry is discarded when it
is older than max_age_days or its checksum no longer matches its content.

Contains:
- CachedResponse: Result of ResponseCache.get_or_generate()
- ResponseCache: Load, save and invalidate cache entries
"""

import os
import tempfile
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable, Optional

from pydantic import ValidationError

from aicommitmessage.cache.models import CacheEntry
from aicommitmessage.cache.paths import get_cache_dir, get_entry_file
from aicommitmessage.cache.utils import compute_checksum, compute_request_hash

DEFAULT_MAX_AGE_DAYS = 30


@dataclass
class CachedResponse:
    """A response served by ResponseCache.get_or_generate()."""

    response: str
    from_cache: bool
    request_hash: str
    warnings: list[str] = field(default_factory=list)


class ResponseCache:
    """File-backed cache of backend responses."""

    def __init__(self, cache_dir: Path, max_age_days: int = DEFAULT_MAX_AGE_DAYS):
        self.cache_dir = cache_dir
        self.max_age_days = max_age_days

    @classmethod
    def from_path(
        cls,
        cache_path: Optional[str] = None,
        max_age_days: int = DEFAULT_MAX_AGE_DAYS,
    ) -> "ResponseCache":
        """Create a cache rooted at COMMIT_CACHE_PATH or the platform default.

        Args:
            cache_path: Value of COMMIT_CACHE_PATH, if configured.
            max_age_days: Entries older than this are discarded on load.
        """
        return cls(get_cache_dir(cache_path), max_age_days)

    def key(self, model: str, branch: str, message: str, diff: str) -> str:
        """Return the request hash addressing a cache slot."""
        return compute_request_hash(model, branch, message, diff)

    def _is_expired(self, entry: CacheEntry) -> bool:
        timestamp = entry.timestamp
        if timestamp.tzinfo is None:
            timestamp = timestamp.replace(tzinfo=timezone.utc)
        age = datetime.now(timezone.utc) - timestamp
        return age > timedelta(days=self.max_age_days)

    def load(self, model: str, request_hash: str) -> Optional[CacheEntry]:
        """Load a valid entry for a request.

        Expired, tampered and unreadable entries are deleted. An entry
        written for a different model is ignored but kept.

        Args:
            model: The model id the caller expects.
            request_hash: Hash from key().

        Returns:
            The cache entry, or None on a miss.
        """
        entry_file = get_entry_file(self.cache_dir, request_hash)
        if not entry_file.exists():
            return None

        try:
            entry = CacheEntry.model_validate_json(entry_file.read_text(encoding="utf-8"))
        except (OSError, ValueError, ValidationError):
            self.invalidate(request_hash)
            return None

        if entry.model != model:
            return None

        if self._is_expired(entry) or entry.checksum != compute_checksum(model, entry.response):
            self.invalidate(request_hash)
            return None

        return entry

    def save(self, model: str, request_hash: str, response: str) -> CacheEntry:
        """Store a response.

        The entry is written to a temporary file in the cache directory and
        moved into place, so a reader never sees a partial file.

        Args:
            model: The model id that produced the response.
            request_hash: Hash from key().
            response: The backend response text.

        Returns:
            The stored entry.
        """
        entry = CacheEntry(
            model=model,
            response=response,
            checksum=compute_checksum(model, response),
            timestamp=datetime.now(timezone.utc),
        )
        entry_file = get_entry_file(self.cache_dir, request_hash)
        self.cache_dir.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(dir=self.cache_dir, prefix=".entry-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(entry.model_dump_json())
            os.replace(tmp_name, entry_file)
        except BaseException:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise

        return entry

    def invalidate(self, request_hash: str) -> None:
        """Remove the entry for a request, if any."""
        entry_file = get_entry_file(self.cache_dir, request_hash)
        try:
            entry_file.unlink()
        except FileNotFoundError:
            pass

    def get_or_generate(
        self,
        model: str,
        branch: str,
        message: str,
        diff: str,
        generate: Callable[[], str],
    ) -> CachedResponse:
        """Return the cached response for a request, generating it on a miss.

        A failure to write the new entry does not fail the request; it is
        reported in CachedResponse.warnings.

        Args:
            model: The model id.
            branch: The branch name.
            message: The author's draft message.
            diff: The filtered staged diff.
            generate: Called once on a miss to produce the response.

        Returns:
            CachedResponse with the response and whether it came from disk.
        """
        request_hash = self.key(model, branch, message, diff)
        entry = self.load(model, request_hash)
        if entry is not None:
            return CachedResponse(entry.response, True, request_hash)

        response = generate()
        result = CachedResponse(response, False, request_hash)
        try:
            self.save(model, request_hash, response)
        except OSError as e:
            result.warnings.append(f"Failed to write cache entry: {e}")
        return result
