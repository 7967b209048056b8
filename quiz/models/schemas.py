"""Quiz Schemas - Modelos Pydantic para perguntas e corpos de request/response."""

from datetime import datetime
from typing import Generic, Literal, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

OPTIONS_PER_QUESTION = 4
QUESTIONS_PER_QUIZ = 10

DataT = TypeVar("DataT")


class CamelModel(BaseModel):
    """Modelo base serializado com chaves camelCase (formato do cliente mobile)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# PERGUNTAS
# =============================================================================


class Question(CamelModel):
    """Pergunta de múltipla escolha no formato completar lacuna."""

    text: str = Field(..., alias="question", min_length=1, description="Enunciado da pergunta")
    options: list[str] = Field(..., description="Exatamente 4 opções distintas")
    correct_answer: str = Field(..., description="Opção correta (pertence a options)")
    explanation: str = Field(..., description="Versículo completo e referência, exibidos após responder")

    @model_validator(mode="after")
    def _check_options(self) -> "Question":
        if len(self.options) != OPTIONS_PER_QUESTION:
            raise ValueError(f"Deve ter exatamente {OPTIONS_PER_QUESTION} opções")
        if len(set(self.options)) != OPTIONS_PER_QUESTION:
            raise ValueError("As opções devem ser distintas")
        if self.correct_answer not in self.options:
            raise ValueError("A resposta correta deve ser uma das opções")
        return self


class PublicQuestion(CamelModel):
    """Pergunta como exibida antes da resposta (sem resposta correta nem explicação)."""

    text: str = Field(..., alias="question")
    options: list[str]

    @classmethod
    def from_question(cls, question: Question) -> "PublicQuestion":
        return cls(text=question.text, options=list(question.options))


# =============================================================================
# REQUESTS
# =============================================================================


class QuizAnswerRequest(CamelModel):
    """Envio de resposta para a pergunta atual de um quiz."""

    quiz_id: str = Field(..., min_length=1, description="ID do quiz")
    answer: str = Field(..., min_length=1, description="Texto da opção escolhida")


# =============================================================================
# RESPONSES
# =============================================================================


class ApiResponse(BaseModel, Generic[DataT]):
    """Envelope de sucesso `{"status": "success", "data": ...}`."""

    status: Literal["success"] = "success"
    data: DataT


class StartQuizResponse(CamelModel):
    quiz_id: str
    current_question: PublicQuestion
    total_questions: int = QUESTIONS_PER_QUIZ


class QuestionView(CamelModel):
    """Pergunta atual de um quiz em andamento."""

    quiz_id: str
    completed: Literal[False] = False
    current_question: PublicQuestion
    question_number: int = Field(..., description="Número da pergunta atual (começando em 1)")
    total_questions: int
    score: int = Field(..., description="Acertos até agora")


class CompletedView(CamelModel):
    """Estado final de um quiz com todas as perguntas respondidas."""

    quiz_id: str
    completed: Literal[True] = True
    score: int
    total_questions: int


class AnswerResult(CamelModel):
    """Resultado de um envio de resposta."""

    is_correct: bool
    correct_answer: str
    explanation: str
    score: int = Field(..., description="Acertos incluindo esta resposta")
    completed: bool
    total_questions: int
    next_question_number: Optional[int] = Field(
        ..., description="Número da próxima pergunta (começando em 1), null quando concluído"
    )


class QuizHistoryEntry(CamelModel):
    id: str
    score: int
    total_questions: int
    created_at: datetime


class QuizHistoryStats(CamelModel):
    total_score: int = 0
    total_quizzes: int = 0
    average_score: float = 0


class QuizHistoryResponse(CamelModel):
    """Quizzes concluídos (mais recentes primeiro) e estatísticas agregadas."""

    quizzes: list[QuizHistoryEntry] = Field(default_factory=list)
    stats: QuizHistoryStats = Field(default_factory=QuizHistoryStats)
