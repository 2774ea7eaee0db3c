"""LLM-based tag generation."""

from .reply_parser import MAX_TAG_LENGTH, parse_model_reply
from .providers import (
    BACKENDS,
    GenerationRequest,
    GenerationResult,
    Provider,
    ProviderBackend,
    ProviderClient,
    ProviderConfig,
    build_request,
    get_backend,
)
from .orchestrator import (
    BatchResult,
    TaggingOrchestrator,
    TaggingOutcome,
    TaggingState,
)

__all__ = [
    "MAX_TAG_LENGTH",
    "parse_model_reply",
    "BACKENDS",
    "GenerationRequest",
    "GenerationResult",
    "Provider",
    "ProviderBackend",
    "ProviderClient",
    "ProviderConfig",
    "build_request",
    "get_backend",
    "BatchResult",
    "TaggingOrchestrator",
    "TaggingOutcome",
    "TaggingState",
]
