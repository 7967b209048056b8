"""Quiz Module - Sessões de quiz bíblico.

Arquitetura:
- models/: Schemas Pydantic, estado QuizSession
- engine/: QuizEngine, QuizHistoryAggregator, reparo e deduplicação de perguntas
- llm/: QuestionSource, fonte baseada no Claude, LLMClientFactory
- storage/: QuizStore (integração com AgentFS)
- prompts/: Templates de prompts
- router.py: Endpoints FastAPI
"""

from .engine import QuestionDeduplicationEngine, QuizEngine, QuizHistoryAggregator
from .llm import ClaudeQuestionSource, LLMClientFactory, QuestionSource
from .models import Question, QuizSession
from .storage import QuizStore

__all__ = [
    # Models
    "Question",
    "QuizSession",
    # Engines
    "QuizEngine",
    "QuizHistoryAggregator",
    "QuestionDeduplicationEngine",
    # LLM
    "QuestionSource",
    "ClaudeQuestionSource",
    "LLMClientFactory",
    # Storage
    "QuizStore",
]
