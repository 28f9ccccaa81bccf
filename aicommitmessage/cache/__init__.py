"""Cache module for aicommitmessage.

This package keeps backend responses on disk so identical requests do not
call the backend twice:
- models: CacheEntry data model
- paths: Functions for getting cache file paths
- utils: Hash and checksum computation
- store: ResponseCache operations
"""

# Models
from aicommitmessage.cache.models import CacheEntry

# Path utilities
from aicommitmessage.cache.paths import (
    get_cache_dir,
    get_cache_root,
    get_entry_file,
)

# General utilities
from aicommitmessage.cache.utils import (
    compute_checksum,
    compute_request_hash,
)

# Cache operations
from aicommitmessage.cache.store import (
    DEFAULT_MAX_AGE_DAYS,
    CachedResponse,
    ResponseCache,
)


__all__ = [
    # Models
    "CacheEntry",
    # Path utilities
    "get_cache_dir",
    "get_cache_root",
    "get_entry_file",
    # General utilities
    "compute_checksum",
    "compute_request_hash",
    # Cache operations
    "DEFAULT_MAX_AGE_DAYS",
    "CachedResponse",
    "ResponseCache",
]
