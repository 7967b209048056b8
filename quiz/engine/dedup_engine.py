"""Question Deduplication Engine - suprime perguntas já feitas."""

import logging
import re
from collections.abc import Iterable, Mapping
from typing import Any

logger = logging.getLogger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")
_SPACES = re.compile(r"\s+")


class QuestionDeduplicationEngine:
    """Detecta perguntas repetidas no histórico de quizzes do usuário.

    Duas perguntas são consideradas iguais quando o texto coincide após
    normalização (caixa, pontuação, marcadores de lacuna e espaços são
    ignorados), então "Fill in the blank: 'Jesus ___.'" e
    "fill in the blank jesus" colidem.

    Example:
        >>> engine = QuestionDeduplicationEngine()
        >>> engine.is_duplicate("In the beginning God created the ___.", ["in the beginning god created the"])
        True
    """

    def normalize(self, text: str) -> str:
        """Forma canônica do texto da pergunta usada nas comparações."""
        lowered = text.lower().replace("_", " ")
        lowered = _NON_WORD.sub(" ", lowered)
        return _SPACES.sub(" ", lowered).strip()

    def is_duplicate(self, question_text: str, seen_texts: Iterable[str]) -> bool:
        """Verifica se `question_text` repete algum de `seen_texts`."""
        key = self.normalize(question_text)
        return any(key == self.normalize(seen) for seen in seen_texts)

    def filter_unique(
        self, candidates: Iterable[Mapping[str, Any]], exclude_texts: Iterable[str]
    ) -> list[Mapping[str, Any]]:
        """Descarta candidatas que repetem a lista de exclusão ou umas às outras.

        Candidatas sem texto são mantidas; repará-las ou rejeitá-las fica
        a cargo da ingestão.

        Args:
            candidates: Payloads brutos de perguntas (chave `question` ou `text`)
            exclude_texts: Textos de perguntas já feitas

        Returns:
            Candidatas na ordem original, sem duplicadas
        """
        seen = {self.normalize(text) for text in exclude_texts if text}
        unique: list[Mapping[str, Any]] = []
        dropped = 0

        for candidate in candidates:
            text = None
            if isinstance(candidate, Mapping):
                text = candidate.get("question") or candidate.get("text")
            if not isinstance(text, str) or not text.strip():
                unique.append(candidate)
                continue

            key = self.normalize(text)
            if key in seen:
                dropped += 1
                continue
            seen.add(key)
            unique.append(candidate)

        if dropped:
            logger.debug(f"Descartadas {dropped} pergunta(s) duplicada(s)")

        return unique
