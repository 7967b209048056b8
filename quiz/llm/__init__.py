"""Quiz LLM - geração de perguntas com o Claude Agent SDK."""

from .factory import LLMClientFactory
from .parser import ParsedOk, ParseFailed, ParseResult, parse_question_payload
from .question_source import ClaudeQuestionSource, QuestionSource

__all__ = [
    "LLMClientFactory",
    "QuestionSource",
    "ClaudeQuestionSource",
    "ParsedOk",
    "ParseFailed",
    "ParseResult",
    "parse_question_payload",
]
