"""System prompts for chat replies and document translation."""

DEFAULT_LANGUAGE = "Chinese"

LANGUAGE_PROMPTS: dict[str, str] = {
    "Chinese": "用中文回答，保持专业且自然的语气",
    "English": "Respond in English, maintaining a professional and natural tone",
    "Spanish": "Responde en español, manteniendo un tono profesional y natural",
    "French": "Répondez en français, en maintenant un ton professionnel et naturel",
    "German": (
        "Antworten Sie auf Deutsch und behalten Sie einen professionellen "
        "und natürlichen Ton bei"
    ),
    "Japanese": "日本語で回答し、専門的で自然な口調を保つ",
    "Korean": "한국어로 답변하고 전문적이고 자연스러운 어조를 유지하세요",
    "Russian": "Отвечайте на русском языке, сохраняя профессиональный и естественный тон",
}

SUPPORTED_LANGUAGES: tuple[str, ...] = tuple(LANGUAGE_PROMPTS)


def chat_system_prompt(language: str | None) -> str:
    """Return the reply prompt for a language, falling back to Chinese."""
    if language is None:
        return LANGUAGE_PROMPTS[DEFAULT_LANGUAGE]
    return LANGUAGE_PROMPTS.get(language, LANGUAGE_PROMPTS[DEFAULT_LANGUAGE])


def translation_system_prompt(target_language: str) -> str:
    """Return the instruction that asks for a translation into `target_language`.

    The language name is inserted as given, so any language the model
    understands can be requested, not only the supported chat languages.
    """
    return (
        f"Translate the following text to {target_language} "
        "while maintaining the original meaning and tone:"
    )
