"""Classification and summarization of extracted document content."""

import time
from pathlib import Path

from app.ai.invoker import ModelInvoker
from app.ai.models import FAILED_CATEGORY, ClassificationResult, SummaryResult
from app.ai.parsing import parse_classification, parse_summary
from app.ai.prompt_loader import CLASSIFICATION_PROMPT, SUMMARY_PROMPT, load_prompt_template
from app.config.settings import Settings
from app.database.models import Document
from app.extraction.models import ExtractedContent
from app.logging.logger import Log


def format_content(content: ExtractedContent) -> str:
    """Render extracted content as the prompt's document body."""
    formatted = f"[Document Type: {content.content_type.value}]\n\n[Content]\n{content.text}\n"
    if content.is_truncated:
        formatted += "\n[Note: Content was truncated due to length limits]\n"
    return formatted


class AIOrchestrator:
    """Builds prompts, calls the model and parses its answers.

    classify() and summarize() absorb every failure into a degraded result
    carrying an error; they are safe to run concurrently from worker threads.
    """

    def __init__(
        self,
        invoker: ModelInvoker,
        *,
        classification_model_id: str,
        summarization_model_id: str,
        prompt_dir: Path | None = None,
    ) -> None:
        self._invoker = invoker
        self._classification_model_id = classification_model_id
        self._summarization_model_id = summarization_model_id
        self._classification_template = load_prompt_template(CLASSIFICATION_PROMPT, prompt_dir)
        self._summary_template = load_prompt_template(SUMMARY_PROMPT, prompt_dir)

    @classmethod
    def from_settings(cls, invoker: ModelInvoker, settings: Settings) -> "AIOrchestrator":
        return cls(
            invoker,
            classification_model_id=settings.classification_model_id,
            summarization_model_id=settings.summarization_model_id,
        )

    def classify(self, document: Document, content: ExtractedContent) -> ClassificationResult:
        started = time.monotonic()
        try:
            Log.info(
                f"Classifying document {document.id} with model "
                f"{self._classification_model_id}"
            )
            raw = self._invoker.invoke(
                self._classification_model_id,
                self._build_prompt(self._classification_template, document, content),
            )
            result = parse_classification(raw)
        except Exception as exc:
            Log.error(f"Error classifying document {document.id}: {exc}")
            result = ClassificationResult(
                primary_category=FAILED_CATEGORY,
                processing_notes=f"Error: {exc}",
                error=str(exc),
            )
        result.processing_seconds = time.monotonic() - started
        return result

    def summarize(self, document: Document, content: ExtractedContent) -> SummaryResult:
        started = time.monotonic()
        try:
            Log.info(
                f"Summarizing document {document.id} with model "
                f"{self._summarization_model_id}"
            )
            raw = self._invoker.invoke(
                self._summarization_model_id,
                self._build_prompt(self._summary_template, document, content),
            )
            result = parse_summary(raw)
        except Exception as exc:
            Log.error(f"Error summarizing document {document.id}: {exc}")
            result = SummaryResult(
                summary=f"Error generating summary: {exc}",
                error=str(exc),
            )
        result.processing_seconds = time.monotonic() - started
        return result

    @staticmethod
    def _build_prompt(template: str, document: Document, content: ExtractedContent) -> str:
        return template.format(
            file_name=document.file_name,
            document_id=document.id,
            content=format_content(content),
        )
