class ModelError(Exception):
    """Base exception for remote model failures."""


class ModelThrottledError(ModelError):
    """Raised when the provider rejects a call due to rate limits or unavailability."""


class ModelInvocationError(ModelError):
    """Raised when a model call fails terminally."""


class ResponseParseError(ModelError):
    """Raised when a model response cannot be parsed into the expected structure."""


class PromptLoadError(ModelError):
    """Raised when a prompt template cannot be read."""
