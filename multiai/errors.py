"""Exceptions raised by multi-ai-chat outside of a provider's unit of work."""


class MultiAIError(RuntimeError):
    pass


class ConfigError(MultiAIError):
    """Raised when configuration values cannot be turned into Settings."""


class PreconditionError(MultiAIError):
    """Raised when the runtime cannot support a run at all (exit code 2)."""
