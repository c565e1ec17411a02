"""Example model client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseModelClient and register the provider in ModelClientFactory.
"""

import json
from typing import ClassVar

from app.ai.client_base import BaseModelClient


class ExampleClientAdapter(BaseModelClient):
    """Returns canned responses without any network calls.

    Prompts opening with the classification template's first line get a fixed
    JSON verdict; everything else gets a short fixed summary.
    """

    CLASSIFICATION_RESPONSE: ClassVar[dict[str, object]] = {
        "category": "Report",
        "confidence": 0.5,
        "tags": ["example"],
    }
    SUMMARY_RESPONSE: ClassVar[str] = (
        "This document was summarized by the example model client. "
        "No remote model was contacted while producing this text."
    )

    CLASSIFICATION_MARKER: ClassVar[str] = "Analyze the following document and classify it."

    def invoke(self, *, model_id: str, prompt: str) -> str:
        _ = model_id
        if prompt.startswith(self.CLASSIFICATION_MARKER):
            return json.dumps(self.CLASSIFICATION_RESPONSE)
        return self.SUMMARY_RESPONSE
