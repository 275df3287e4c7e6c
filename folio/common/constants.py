"""Constants for languages, localized banner copy and listing defaults."""

# Site languages (ISO 639-1)
SUPPORTED_LANGUAGES = ["en", "zh"]

# Post source file extensions, in lookup priority order
POST_EXTENSIONS = [".mdx", ".md"]

DEFAULT_POSTS_PER_PAGE = 10

CACHE_BACKENDS = ["file", "database", "memory"]

# Language display names, keyed by language then by the reader's language
LANGUAGE_NAMES: dict[str, dict[str, str]] = {
    "en": {"en": "English", "zh": "英文"},
    "zh": {"en": "Chinese", "zh": "中文"},
}

# Names used when instructing the translation model
TRANSLATION_TARGETS: dict[str, str] = {
    "en": "English",
    "zh": "Simplified Chinese (zh-CN)",
}

BANNER_TEXT: dict[str, dict[str, str]] = {
    "translated": {
        "en": "This article has been automatically translated by AI. Please report any errors.",
        "zh": "此文章已由 AI 自动翻译。如发现错误，欢迎指正。",
    },
    "available": {
        "en": "This article was originally written in {language}. An AI translation is available.",
        "zh": "本文原文为{language}，可查看 AI 翻译版本。",
    },
}

TOGGLE_LABELS: dict[str, dict[str, str]] = {
    "original": {"en": "View original", "zh": "查看原文"},
    "translated": {"en": "View translation", "zh": "查看翻译"},
}

BACK_TO_HOME: dict[str, str] = {"en": "Back to Home", "zh": "返回首页"}
