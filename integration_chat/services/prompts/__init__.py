from .chat_prompts import (
    DEFAULT_SYSTEM_PROMPT,
    HEALTH_CHECK_PROMPT,
)

__all__ = [
    "DEFAULT_SYSTEM_PROMPT",
    "HEALTH_CHECK_PROMPT",
]
