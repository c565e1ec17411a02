import httpx
import openai

from app.ai.client_base import BaseModelClient
from app.ai.exceptions import ModelInvocationError, ModelThrottledError

THROTTLE_STATUS_CODES = frozenset({429, 503})


class OpenAIClientAdapter(BaseModelClient):
    """Model client built on the OpenAI-compatible chat completions API."""

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int,
        base_url: str | None = None,
        max_tokens: int = 2000,
        temperature: float = 0.3,
        top_p: float = 0.9,
    ) -> None:
        # Retries are owned by ModelInvoker.
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url,
            max_retries=0,
        )
        self._max_tokens = max_tokens
        self._temperature = temperature
        self._top_p = top_p

    def invoke(self, *, model_id: str, prompt: str) -> str:
        try:
            response = self._client.chat.completions.create(
                model=model_id,
                max_tokens=self._max_tokens,
                temperature=self._temperature,
                top_p=self._top_p,
                messages=[{"role": "user", "content": prompt}],
            )
        except openai.APIStatusError as exc:
            if exc.status_code in THROTTLE_STATUS_CODES:
                raise ModelThrottledError(
                    f"AI provider throttled ({exc.status_code}): {exc}"
                ) from exc
            raise ModelInvocationError(f"AI provider API error: {exc}") from exc
        except (openai.APIConnectionError, httpx.ConnectError, httpx.TimeoutException) as exc:
            raise ModelInvocationError(f"AI provider network error: {exc}") from exc
        except openai.APIError as exc:
            raise ModelInvocationError(f"AI provider API error: {exc}") from exc

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""
