"""Tests for ModelClientFactory."""

import json
from unittest.mock import patch

import pytest

from app.ai.example_client_adapter import ExampleClientAdapter
from app.ai.factory import ModelClientFactory
from app.config.settings import Settings


class TestModelClientFactory:
    def test_creates_example_adapter(self) -> None:
        client = ModelClientFactory.create(Settings(model_provider="example"))
        assert isinstance(client, ExampleClientAdapter)

    def test_example_adapter_answers_classification(self) -> None:
        client = ModelClientFactory.create(Settings(model_provider="example"))
        answer = json.loads(client.invoke(model_id="x", prompt=ExampleClientAdapter.CLASSIFICATION_MARKER))
        assert answer["category"] == "Report"

    def test_example_adapter_answers_summary(self) -> None:
        client = ModelClientFactory.create(Settings(model_provider="example"))
        assert "example model client" in client.invoke(model_id="x", prompt="Summarize")

    def test_uses_openai_settings(self) -> None:
        settings = Settings(
            model_provider="openai",
            model_api_key="openai-key",
            model_timeout_seconds=42,
        )
        with patch("app.ai.factory.OpenAIClientAdapter") as mock_adapter:
            ModelClientFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="openai-key",
            timeout_seconds=42,
            base_url=None,
            max_tokens=2000,
            temperature=0.3,
            top_p=0.9,
        )

    def test_uses_provider_default_base_url(self) -> None:
        settings = Settings(model_provider="openrouter", model_api_key="k")
        with patch("app.ai.factory.OpenAIClientAdapter") as mock_adapter:
            ModelClientFactory.create(settings)
        assert mock_adapter.call_args.kwargs["base_url"] == "https://openrouter.ai/api/v1"

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(model_provider="openai_compatible", model_base_url="")
        with pytest.raises(ValueError, match="model_base_url is required"):
            ModelClientFactory.create(settings)

    def test_unknown_provider_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown model provider"):
            ModelClientFactory.create(Settings(model_provider="nope"))
