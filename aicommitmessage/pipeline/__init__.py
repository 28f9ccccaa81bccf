"""Commit message pipeline for aicommitmessage.

This package provides:
- models: GenerationRequest, MessageSource, PipelineResult
- exceptions: PipelineError, DiffTooLargeError, InsufficientInputError
- core: CommitMessagePipeline and generate_commit_message
"""

from aicommitmessage.pipeline.exceptions import (
    DiffTooLargeError,
    InsufficientInputError,
    PipelineError,
)

from aicommitmessage.pipeline.models import (
    GenerationRequest,
    MessageSource,
    PipelineResult,
)

from aicommitmessage.pipeline.core import (
    CommitMessagePipeline,
    generate_commit_message,
)


__all__ = [
    # Exceptions
    "DiffTooLargeError",
    "InsufficientInputError",
    "PipelineError",
    # Models
    "GenerationRequest",
    "MessageSource",
    "PipelineResult",
    # Pipeline
    "CommitMessagePipeline",
    "generate_commit_message",
]
