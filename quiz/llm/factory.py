"""LLM Client Factory - opções do Claude Agent SDK para geração de quizzes."""

from claude_agent_sdk import ClaudeAgentOptions

from ..prompts import QUIZ_SYSTEM_PROMPT


class LLMClientFactory:
    """Factory de ClaudeAgentOptions usadas na geração de perguntas.

    Centraliza a configuração do agente do quiz:
    - System prompt consistente (respostas só em JSON)
    - Seleção de modelo via QUIZ_MODEL (haiku para velocidade, opus para qualidade)
    - Turno único, sem ferramentas

    Example:
        >>> factory = LLMClientFactory(model="sonnet")
        >>> options = factory.create_generation_options()
    """

    DEFAULT_MODEL = "haiku"  # Rápido e barato
    SUPPORTED_MODELS = ("haiku", "sonnet", "opus")

    def __init__(self, model: str | None = None):
        """Inicializa factory.

        Args:
            model: Alias do modelo (haiku, sonnet, opus). Valores desconhecidos caem em haiku.
        """
        normalized = (model or self.DEFAULT_MODEL).lower()
        self.model = normalized if normalized in self.SUPPORTED_MODELS else self.DEFAULT_MODEL

    @staticmethod
    def create_options(model: str, system_prompt: str | None = None) -> ClaudeAgentOptions:
        """Opções genéricas de agente: turno único, sem ferramentas.

        Args:
            model: Alias do modelo Claude
            system_prompt: System prompt customizado (padrão: prompt do quiz)
        """
        return ClaudeAgentOptions(
            model=model,
            system_prompt=system_prompt or QUIZ_SYSTEM_PROMPT,
            max_turns=1,
            allowed_tools=[],
        )

    def create_generation_options(self) -> ClaudeAgentOptions:
        """Opções para gerar um lote completo de perguntas com o modelo configurado."""
        return self.create_options(self.model)
