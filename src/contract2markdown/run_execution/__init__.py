"""Run execution domain exports."""

from .generation_run_use_case import GenerationRunError, execute_markdown_generation_run
from .run_contracts import GenerationOutcome, GenerationProgress, GenerationRequest

__all__ = [
    "GenerationRequest",
    "GenerationOutcome",
    "GenerationProgress",
    "GenerationRunError",
    "execute_markdown_generation_run",
]
