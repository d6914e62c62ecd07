"""
Chat prompts for LLM interactions.
"""

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant."

# Fixed greeting sent by provider health checks
HEALTH_CHECK_PROMPT = "Hello"
