"""Question sources - de onde vêm as perguntas do quiz."""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Protocol

from claude_agent_sdk import query

from core.exceptions import GenerationFailureError

from ..engine.dedup_engine import QuestionDeduplicationEngine
from ..models.schemas import QUESTIONS_PER_QUIZ
from ..prompts import build_generation_prompt
from .factory import LLMClientFactory
from .parser import ParseFailed, parse_question_payload

logger = logging.getLogger(__name__)


class QuestionSource(Protocol):
    """Fornece candidatas a pergunta para um quiz novo."""

    async def generate(
        self, exclude_texts: Sequence[str], count: int = QUESTIONS_PER_QUIZ
    ) -> list[Mapping[str, Any]]:
        """Retorna ao menos `count` candidatas evitando `exclude_texts`.

        Candidatas extras são permitidas; a engine fica com as primeiras `count`
        utilizáveis. Candidatas são mappings no formato `{"question", "options",
        "correctAnswer", "explanation"}`; a validação e o reparo ficam com
        a engine.
        """
        ...


class ClaudeQuestionSource:
    """Gera perguntas bíblicas com o Claude Agent SDK.

    Pede algumas perguntas extras para que, descartadas as repetições do
    histórico do usuário, ainda sobrem `count` candidatas.

    Example:
        >>> source = ClaudeQuestionSource(LLMClientFactory("haiku"))
        >>> candidates = await source.generate(["Fill in the blank: ..."])
    """

    EXTRA_QUESTIONS = 3

    def __init__(
        self,
        llm_factory: LLMClientFactory | None = None,
        dedup: QuestionDeduplicationEngine | None = None,
    ):
        self.llm_factory = llm_factory or LLMClientFactory()
        self.dedup = dedup or QuestionDeduplicationEngine()

    async def _ask(self, prompt: str) -> str:
        """Envia o prompt e junta os blocos de texto da resposta."""
        options = self.llm_factory.create_generation_options()
        text = ""

        async for message in query(prompt=prompt, options=options):
            if hasattr(message, "content") and isinstance(message.content, list):
                for block in message.content:
                    if hasattr(block, "text"):
                        text += block.text

        return text

    async def generate(
        self, exclude_texts: Sequence[str], count: int = QUESTIONS_PER_QUIZ
    ) -> list[Mapping[str, Any]]:
        """Gera candidatas para `count` perguntas, pulando as já feitas.

        Toda candidata única é retornada, extras incluídas, para que rejeitadas
        no reparo possam ser substituídas.

        Raises:
            GenerationFailureError: Se a chamada ao modelo falhar ou a resposta não for legível
        """
        prompt = build_generation_prompt(count + self.EXTRA_QUESTIONS, list(exclude_texts))

        try:
            raw_text = await self._ask(prompt)
        except Exception as e:
            logger.error(f"Chamada de geração de perguntas falhou: {e}")
            raise GenerationFailureError(details={"reason": str(e)}) from e

        result = parse_question_payload(raw_text)
        if isinstance(result, ParseFailed):
            logger.error(f"Resposta de geração ilegível ({result.reason}): {result.raw_text[:200]}")
            raise GenerationFailureError(details={"reason": result.reason})

        unique = self.dedup.filter_unique(result.questions, exclude_texts)
        logger.info(
            f"Geradas {len(result.questions)} candidatas, {len(unique)} após deduplicação"
        )
        return list(unique)
