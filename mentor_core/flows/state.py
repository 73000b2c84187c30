"""State definition for the generation pipeline."""

from __future__ import annotations

from typing import Dict, List, Optional, TypedDict

from mentor_core.domain.models import ChatMessage, GenerationRequest, GenerationResult, ModeProfile


class PipelineState(TypedDict, total=False):
    """State shared across pipeline nodes for one request."""

    request: GenerationRequest
    profile: Optional[ModeProfile]
    outbound: List[ChatMessage]
    result: Optional[GenerationResult]
    response: Optional[Dict[str, object]]
