"""Data models for the commit message pipeline.

Contains:
- GenerationRequest: The caller's inputs, never mutated
- MessageSource: Which pipeline stage produced the message
- PipelineResult: The final message and what happened on the way
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class GenerationRequest:
    """Inputs for one commit message generation.

    A branch or diff of None (or "") is resolved through git.
    """

    message: str
    branch: Optional[str] = None
    diff: Optional[str] = None
    debug: bool = False


class MessageSource(Enum):
    """Pipeline stage that produced the message."""

    MERGE = "merge"  # merge subject returned verbatim
    SKIP = "skip"  # draft ended with the skip directive
    DISABLED = "disabled"  # backend disabled by configuration
    CACHE = "cache"  # backend response served from the cache
    BACKEND = "backend"  # fresh backend response
    FALLBACK = "fallback"  # backend failed and errors are ignored


@dataclass
class PipelineResult:
    """Result of CommitMessagePipeline.generate()."""

    message: str
    source: MessageSource
    warnings: list[str] = field(default_factory=list)
    raw_response: Optional[dict[str, Any]] = None
