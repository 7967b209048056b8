"""Question repair - converte payloads de perguntas geradas em Questions válidas."""

import logging
from collections.abc import Mapping
from typing import Any, Optional

from ..models.schemas import OPTIONS_PER_QUESTION, Question

logger = logging.getLogger(__name__)


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def repair_question(candidate: Any) -> Optional[Question]:
    """Monta uma Question válida a partir de um payload de formato solto.

    Repara em vez de rejeitar sempre que possível:
        - opções vazias e duplicadas são descartadas
        - menos de 4 opções são completadas com placeholders "Option N"
        - mais de 4 opções são truncadas
        - resposta correta ausente das opções substitui a primeira posição

    Aceita as chaves `question`/`text` e `correctAnswer`/`correct_answer`.

    Args:
        candidate: Instância de Question ou mapping vindo da fonte de perguntas

    Returns:
        Question válida, ou None quando o payload não tem conserto
        (sem texto, resposta correta, explicação ou lista de opções)
    """
    if isinstance(candidate, Question):
        return candidate
    if not isinstance(candidate, Mapping):
        return None

    text = _clean(candidate.get("question") or candidate.get("text"))
    correct_answer = _clean(candidate.get("correctAnswer") or candidate.get("correct_answer"))
    explanation = _clean(candidate.get("explanation"))
    raw_options = candidate.get("options")

    if not text or not correct_answer or not explanation or not isinstance(raw_options, list):
        return None

    options: list[str] = []
    for option in raw_options:
        cleaned = _clean(option) if isinstance(option, str) else _clean(str(option))
        if cleaned and cleaned not in options:
            options.append(cleaned)

    placeholder = 1
    while len(options) < OPTIONS_PER_QUESTION:
        filler = f"Option {len(options) + placeholder}"
        if filler in options or filler == correct_answer:
            placeholder += 1
            continue
        options.append(filler)

    options = options[:OPTIONS_PER_QUESTION]

    if correct_answer not in options:
        logger.debug(f"Resposta correta ausente das opções, substituindo posição 0: {text[:60]}")
        options[0] = correct_answer

    return Question(
        text=text,
        options=options,
        correct_answer=correct_answer,
        explanation=explanation,
    )
