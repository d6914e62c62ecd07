"""Integration Chat API: HTTP gateway to OpenAI and GitHub Models chat completions."""

__version__ = "1.0.0"
