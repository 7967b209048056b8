# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza mocks, dados de exemplo e configurações comuns
# =============================================================================

import copy
import os
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment():
    """Configura ambiente de testes globalmente."""
    env_vars = {
        "JWT_SECRET": "test-jwt-secret",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",
        "AGENTFS_ID": "bible-quiz-test",
        "QUIZ_MODEL": "haiku",
    }
    with patch.dict(os.environ, env_vars):
        from config import get_settings

        get_settings.cache_clear()
        yield
        get_settings.cache_clear()


@pytest.fixture
def clean_env():
    """Limpa variáveis de ambiente para testes isolados."""
    with patch.dict(os.environ, {}, clear=True):
        yield


# =============================================================================
# FIXTURES DE AGENTFS
# =============================================================================


@pytest.fixture
def mock_agentfs():
    """Mock do AgentFS com KV store vazio."""
    mock = MagicMock()

    mock.kv = AsyncMock()
    mock.kv.get = AsyncMock(return_value=None)
    mock.kv.set = AsyncMock()
    mock.kv.delete = AsyncMock()
    mock.kv.list = AsyncMock(return_value=[])

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def mock_agentfs_with_data():
    """Mock do AgentFS sobre um dict em memória (valores copiados na leitura/escrita)."""
    mock = MagicMock()
    _storage: dict[str, Any] = {}

    async def mock_get(key):
        return copy.deepcopy(_storage.get(key))

    async def mock_set(key, value):
        _storage[key] = copy.deepcopy(value)

    async def mock_delete(key):
        _storage.pop(key, None)

    async def mock_list(prefix=""):
        return [{"key": k} for k in _storage if k.startswith(prefix)]

    mock.kv = AsyncMock()
    mock.kv.get = mock_get
    mock.kv.set = mock_set
    mock.kv.delete = mock_delete
    mock.kv.list = mock_list
    mock._storage = _storage

    mock.close = AsyncMock()

    return mock


@pytest.fixture
def quiz_store(mock_agentfs_with_data):
    """QuizStore sobre o mock em memória do AgentFS."""
    from quiz.storage.quiz_store import QuizStore

    return QuizStore(mock_agentfs_with_data)


# =============================================================================
# FIXTURES DE DADOS DO QUIZ
# =============================================================================

VERSES = [
    ("For God so loved the world, that he gave his only begotten ___.", "Son", "John 3:16"),
    ("In the beginning God created the heaven and the ___.", "earth", "Genesis 1:1"),
    ("The LORD is my shepherd; I shall not ___.", "want", "Psalm 23:1"),
    ("Jesus ___.", "wept", "John 11:35"),
    ("I can do all things through Christ which ___ me.", "strengtheneth", "Philippians 4:13"),
    ("Thy word is a lamp unto my feet, and a ___ unto my path.", "light", "Psalm 119:105"),
    ("Be still, and know that I am ___.", "God", "Psalm 46:10"),
    ("Love is ___, love is kind.", "patient", "1 Corinthians 13:4"),
    ("Trust in the LORD with all thine ___.", "heart", "Proverbs 3:5"),
    ("Rejoice in the Lord ___.", "alway", "Philippians 4:4"),
    ("Pray without ___.", "ceasing", "1 Thessalonians 5:17"),
    ("The truth shall make you ___.", "free", "John 8:32"),
]


def make_question_data(index: int, suffix: str = "") -> dict:
    """Payload de pergunta bem formado, como retornado pela fonte de perguntas."""
    text, answer, reference = VERSES[index % len(VERSES)]
    return {
        "question": f"Fill in the blank: '{text}'{suffix}",
        "options": [answer, "stone", "river", "crown"],
        "correctAnswer": answer,
        "explanation": f"The correct answer is '{answer}'. See {reference}.",
    }


@pytest.fixture
def make_question():
    """Factory de payloads de pergunta (o índice escolhe o versículo)."""
    return make_question_data


@pytest.fixture
def question_data():
    """Um payload de pergunta válido."""
    return make_question_data(0)


@pytest.fixture
def question_batch():
    """Dez payloads de pergunta válidos."""
    return [make_question_data(i) for i in range(10)]


@pytest.fixture
def sample_questions(question_batch):
    """Dez objetos Question validados."""
    from quiz.models.schemas import Question

    return [Question.model_validate(q) for q in question_batch]


@pytest.fixture
def sample_session(sample_questions):
    """QuizSession nova para user-1."""
    from quiz.models.state import QuizSession

    return QuizSession.new("user-1", sample_questions)


class FakeQuestionSource:
    """Fonte de perguntas que retorna lotes prontos e registra as chamadas."""

    def __init__(self, batches=None, error: Exception | None = None):
        self.batches = list(batches or [])
        self.error = error
        self.calls: list[dict] = []

    async def generate(self, exclude_texts, count=10):
        self.calls.append({"exclude_texts": list(exclude_texts), "count": count})
        if self.error is not None:
            raise self.error
        if len(self.batches) > 1:
            return self.batches.pop(0)
        return self.batches[0] if self.batches else []


@pytest.fixture
def fake_source_factory():
    """Factory de FakeQuestionSource."""
    return FakeQuestionSource


@pytest.fixture
def fake_source(question_batch):
    """Fonte que sempre retorna as mesmas dez perguntas válidas."""
    return FakeQuestionSource([question_batch])


@pytest.fixture
def quiz_engine(quiz_store, fake_source):
    """QuizEngine sobre o store em memória e a fonte fake."""
    from quiz.engine.quiz_engine import QuizEngine

    return QuizEngine(store=quiz_store, source=fake_source)


# =============================================================================
# FIXTURES DE AUTENTICAÇÃO
# =============================================================================


@pytest.fixture
def make_token():
    """Factory de bearer tokens assinados."""
    from core.auth import create_token

    def _make(user_id: str = "user-1", **claims) -> str:
        return create_token(user_id, **claims)

    return _make


@pytest.fixture
def auth_headers(make_token):
    """Header Authorization para user-1."""
    return {"Authorization": f"Bearer {make_token('user-1')}"}


# =============================================================================
# FIXTURES DO CLAUDE
# =============================================================================


@pytest.fixture
def make_claude_messages():
    """Factory de streams de mensagens no formato do Claude Agent SDK."""
    from dataclasses import dataclass, field

    @dataclass
    class MockTextBlock:
        text: str

    @dataclass
    class MockAssistantMessage:
        content: list = field(default_factory=list)

    def _make(*texts: str):
        async def _stream(*args, **kwargs):
            for text in texts:
                yield MockAssistantMessage(content=[MockTextBlock(text=text)])

        return _stream

    return _make


# =============================================================================
# FIXTURES DE LOGGING
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs para asserções."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
