import time
from collections.abc import Callable

from tenacity import (
    RetryError,
    Retrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from app.ai.client_base import BaseModelClient
from app.ai.exceptions import ModelInvocationError, ModelThrottledError
from app.config.settings import Settings
from app.logging.logger import Log


class ModelInvoker:
    """Calls the model client, backing off exponentially while throttled.

    Only ModelThrottledError is retried. The delay starts at retry_delay_ms and
    doubles after every throttled attempt; after max_retries attempts the call
    fails with ModelInvocationError. Any other error propagates on the first
    attempt.
    """

    def __init__(
        self,
        client: BaseModelClient,
        *,
        max_retries: int = 3,
        retry_delay_ms: int = 1000,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_retries < 1:
            raise ValueError("max_retries must be at least 1")
        self._client = client
        self._max_retries = max_retries
        self._retry_delay_ms = retry_delay_ms
        self._sleep = sleep

    @classmethod
    def from_settings(cls, client: BaseModelClient, settings: Settings) -> "ModelInvoker":
        return cls(
            client,
            max_retries=settings.model_max_retries,
            retry_delay_ms=settings.model_retry_delay_ms,
        )

    def invoke(self, model_id: str, prompt: str) -> str:
        retrying = Retrying(
            stop=stop_after_attempt(self._max_retries),
            wait=wait_exponential(multiplier=self._retry_delay_ms / 1000),
            retry=retry_if_exception_type(ModelThrottledError),
            sleep=self._sleep,
            before_sleep=lambda state: Log.warning(
                f"Model {model_id} throttled, retrying in "
                f"{state.next_action.sleep:.1f}s"
            ),
        )
        try:
            return retrying(self._client.invoke, model_id=model_id, prompt=prompt)
        except RetryError as exc:
            cause = exc.last_attempt.exception()
            raise ModelInvocationError(
                f"Model {model_id} still throttled after "
                f"{exc.last_attempt.attempt_number} attempts: {cause}"
            ) from cause
