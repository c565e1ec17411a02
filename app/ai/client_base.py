from abc import ABC, abstractmethod


class BaseModelClient(ABC):
    """Contract for provider-specific text-generation clients."""

    @abstractmethod
    def invoke(self, *, model_id: str, prompt: str) -> str:
        """Send one prompt and return the generated text.

        Raises:
            ModelThrottledError: on rate limiting or temporary unavailability.
            ModelInvocationError: on any other provider failure.
        """
