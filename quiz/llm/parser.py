"""Parsing tolerante dos payloads de perguntas retornados pelo modelo."""

import json
import re
from dataclasses import dataclass, field
from typing import Any, Union

_FENCED_JSON = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)


@dataclass
class ParsedOk:
    """Payload decodificado em uma lista de candidatas a pergunta."""

    questions: list[dict[str, Any]]
    raw_text: str = ""


@dataclass
class ParseFailed:
    """Payload não pôde ser decodificado; o texto bruto é mantido para fallback."""

    raw_text: str
    reason: str = field(default="")


ParseResult = Union[ParsedOk, ParseFailed]


def _json_candidates(text: str) -> list[str]:
    """Trechos JSON plausíveis, do mais específico ao mais genérico."""
    candidates = [match.strip() for match in _FENCED_JSON.findall(text)]
    candidates.append(text.strip())

    for opener, closer in (("{", "}"), ("[", "]")):
        start = text.find(opener)
        end = text.rfind(closer)
        if start != -1 and end > start:
            candidates.append(text[start : end + 1])

    return candidates


def _extract_questions(data: Any) -> Union[list[Any], None]:
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in ("questions", "Questions", "quiz", "items"):
            value = data.get(key)
            if isinstance(value, list):
                return value
    return None


def parse_question_payload(raw_text: str) -> ParseResult:
    """Decodifica a resposta do modelo em candidatas sem lançar exceção.

    Aceita JSON puro, JSON dentro de bloco markdown ou JSON cercado de
    texto; o topo pode ser `{"questions": [...]}` ou uma lista simples.
    Itens que não são objetos são descartados.

    Args:
        raw_text: Texto retornado pelo modelo

    Returns:
        ParsedOk com as candidatas, ou ParseFailed com o texto bruto
    """
    if not raw_text or not raw_text.strip():
        return ParseFailed(raw_text=raw_text or "", reason="empty response")

    for snippet in _json_candidates(raw_text):
        try:
            data = json.loads(snippet)
        except json.JSONDecodeError:
            continue

        questions = _extract_questions(data)
        if questions is None:
            return ParseFailed(raw_text=raw_text, reason="no question list in payload")

        return ParsedOk(
            questions=[q for q in questions if isinstance(q, dict)],
            raw_text=raw_text,
        )

    return ParseFailed(raw_text=raw_text, reason="no valid JSON found")
