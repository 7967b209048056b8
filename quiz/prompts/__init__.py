"""Quiz Prompts - templates de geração."""

from .templates import (
    MAX_EXCLUDED_IN_PROMPT,
    QUIZ_GENERATION_PROMPT,
    QUIZ_SYSTEM_PROMPT,
    build_generation_prompt,
)

__all__ = [
    "QUIZ_SYSTEM_PROMPT",
    "QUIZ_GENERATION_PROMPT",
    "MAX_EXCLUDED_IN_PROMPT",
    "build_generation_prompt",
]
