"""multi-ai-chat: ask several AI providers the same question at once."""

__version__ = "0.1.0"
