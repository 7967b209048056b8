"""Quiz Templates - prompts para geração de perguntas bíblicas."""

# =============================================================================
# SYSTEM PROMPT
# =============================================================================

QUIZ_SYSTEM_PROMPT = """You are a Bible quiz question generator. Respond ONLY with valid JSON, no additional text."""

# =============================================================================
# PROMPT TEMPLATES
# =============================================================================

QUIZ_GENERATION_PROMPT = """Generate {num_questions} Bible quiz questions. Each question should be a fill-in-the-blank format from Bible verses.
For each question, provide 4 possible answers (one correct and three incorrect), and an explanation of why the correct answer is right.

Make sure the questions cover different parts of the Bible (Old and New Testament).
Ensure the options are plausible but only one is correct.
The explanation should provide the full verse and reference.
{exclusions}
Return the response in this exact JSON format:
{{
  "questions": [
    {{
      "question": "Fill in the blank: 'For God so loved the world, that he gave his only begotten Son, that whosoever believeth in him should not ___.'",
      "options": ["perish", "die", "suffer", "fall"],
      "correctAnswer": "perish",
      "explanation": "The correct answer is 'perish'. The full verse is John 3:16: 'For God so loved the world, that he gave his only begotten Son, that whosoever believeth in him should not perish, but have everlasting life.'"
    }}
  ]
}}"""

EXCLUSIONS_BLOCK = """
Do NOT repeat any of these previously asked questions:
{questions}
"""

# Limite de perguntas anteriores citadas no prompt
MAX_EXCLUDED_IN_PROMPT = 100


def build_generation_prompt(num_questions: int, exclude_texts: list[str]) -> str:
    """Renderiza o prompt de geração, citando as perguntas excluídas mais recentes."""
    exclusions = ""
    if exclude_texts:
        quoted = "\n".join(f"- {text}" for text in exclude_texts[:MAX_EXCLUDED_IN_PROMPT])
        exclusions = EXCLUSIONS_BLOCK.format(questions=quoted)

    return QUIZ_GENERATION_PROMPT.format(num_questions=num_questions, exclusions=exclusions)
